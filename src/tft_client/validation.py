"""
Input Validation and Sanitization

Validates and sanitizes user inputs before API calls.
"""

from urllib.parse import quote
from typing import Any, Optional

from .api.routing import REGION_PLATFORMS
from .exceptions import (
    InvalidPlatformError,
    InvalidRoutingDomainError,
    InvalidSummonerNameError,
    InvalidMatchCountError,
    InvalidSetNumberError,
)


VALID_PLATFORMS = sorted(p for platforms in REGION_PLATFORMS.values() for p in platforms)
VALID_REGIONS = sorted(REGION_PLATFORMS)

# Summoner names: 3-16 characters
MIN_SUMMONER_NAME_LENGTH = 3
MAX_SUMMONER_NAME_LENGTH = 16


def validate_platform(platform: str) -> str:
    """
    Validate a platform identifier.

    Returns:
        Normalized platform string (lowercase)

    Raises:
        InvalidPlatformError: If platform is not valid
    """
    if not platform or not isinstance(platform, str):
        raise InvalidPlatformError("", VALID_PLATFORMS)

    platform = platform.lower().strip()

    if platform not in VALID_PLATFORMS:
        raise InvalidPlatformError(platform, VALID_PLATFORMS)

    return platform


def validate_region(region: str) -> str:
    """Normalized region (americas, asia, europe); raises InvalidRoutingDomainError"""
    if not region or not isinstance(region, str):
        raise InvalidRoutingDomainError(str(region), expected="region")

    region = region.lower().strip()

    if region not in VALID_REGIONS:
        raise InvalidRoutingDomainError(region, expected="region")

    return region


def validate_summoner_name(name: str) -> str:
    """
    Validate a summoner name.

    Returns:
        The name with surrounding whitespace removed

    Raises:
        InvalidSummonerNameError: If the name can not exist
    """
    if not name or not isinstance(name, str):
        raise InvalidSummonerNameError(str(name), "Empty or invalid input")

    name = name.strip()

    if len(name) < MIN_SUMMONER_NAME_LENGTH:
        raise InvalidSummonerNameError(
            name, f"too short (min {MIN_SUMMONER_NAME_LENGTH} characters)"
        )

    if len(name) > MAX_SUMMONER_NAME_LENGTH:
        raise InvalidSummonerNameError(
            name, f"too long (max {MAX_SUMMONER_NAME_LENGTH} characters)"
        )

    return name


def _as_int(value: Any) -> Optional[int]:
    """int value of an int, an integral float or a numeric string; None otherwise"""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def validate_match_count(count: Any) -> int:
    """
    Number of match ids to request; 0 is allowed (nothing to fetch).

    Raises:
        InvalidMatchCountError: If count is not a non-negative integer
    """
    value = _as_int(count)
    if value is None or value < 0:
        raise InvalidMatchCountError(count)
    return value


def validate_set_number(set_number: Any) -> int:
    """Positive game-set number; raises InvalidSetNumberError"""
    value = _as_int(set_number)
    if value is None or value < 1:
        raise InvalidSetNumberError(set_number)
    return value


def sanitize_for_url(value: str) -> str:
    """URL-encode a single path segment"""
    return quote(value, safe="")


def mask_name(name: str) -> str:
    """
    Partially mask a player name for logging.

    Shows the first and last two characters of longer names.
    """
    if not name:
        return "<empty>"

    if len(name) <= 4:
        return name[0] + "*" * (len(name) - 1)

    return name[:2] + "*" * (len(name) - 4) + name[-2:]
