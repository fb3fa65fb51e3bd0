"""
Centralized Configuration Management

Everything is read from environment variables (a local .env file is loaded
by the CLI first). The Riot API key comes from RIOT_API_KEY, or failing that
from the file named by RIOT_API_KEY_FILE (default ./apikey).

    APP_ENV                  development | staging | production
    DEBUG                    true/false
    RIOT_API_KEY             RGAPI-...
    RIOT_API_KEY_FILE        file holding the key
    RIOT_TIMEOUT             HTTP timeout in seconds
    RIOT_RATE_PER_SECOND     first quota window (1 second)
    RIOT_RATE_PER_2MIN       second quota window (2 minutes)
    RIOT_RATE_LIMIT_TIMEOUT  max seconds to wait for a rate limit permit
    LOG_LEVEL, LOG_FILE
"""

import os
from enum import Enum
from pathlib import Path
from dataclasses import dataclass
from functools import lru_cache
from typing import Callable, Optional, TypeVar

from .exceptions import ConfigurationError, MissingConfigError
from .logging_config import CONSOLE_FORMAT

N = TypeVar("N", int, float)

DEFAULT_API_KEY_FILE = "apikey"
API_KEY_PREFIX = "RGAPI-"

# Development key quotas
DEV_KEY_PER_SECOND = 20
DEV_KEY_PER_TWO_MINUTES = 100


class Environment(Enum):
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"

    @classmethod
    def from_name(cls, name: Optional[str]) -> "Environment":
        """Unknown or missing names mean development"""
        try:
            return cls((name or "").strip().lower())
        except ValueError:
            return cls.DEVELOPMENT


def _env_flag(key: str, default: bool) -> bool:
    value = os.getenv(key, "").strip().lower()
    if value in ("true", "1", "yes"):
        return True
    if value in ("false", "0", "no"):
        return False
    return default


def _env_number(key: str, cast: Callable[[str], N], default: Optional[N]) -> Optional[N]:
    value = os.getenv(key)
    if value is None or not value.strip():
        return default
    try:
        return cast(value)
    except ValueError:
        raise ConfigurationError(
            f"{key} must be a {cast.__name__}, got {value!r}",
            {"key": key, "value": value},
        )


def read_api_key_file(path: str) -> Optional[str]:
    """Contents of a key file with surrounding whitespace removed, None if absent"""
    key_path = Path(path)
    if not key_path.is_file():
        return None
    try:
        return key_path.read_text(encoding="utf-8").strip() or None
    except OSError as e:
        raise ConfigurationError(f"Could not read API key file {path}: {e}", {"path": path})


def _load_api_key() -> str:
    key = os.getenv("RIOT_API_KEY", "").strip()
    if key:
        return key

    key_file = os.getenv("RIOT_API_KEY_FILE", DEFAULT_API_KEY_FILE)
    key = read_api_key_file(key_file)
    if key:
        return key

    raise MissingConfigError(
        "RIOT_API_KEY",
        f"Set it or put the key in {key_file}. Get one at https://developer.riotgames.com"
    )


@dataclass(frozen=True)
class RiotAPIConfig:
    """Credentials, HTTP timeout and the two quota windows of the key"""
    api_key: str
    timeout_seconds: float = 30.0
    requests_per_second: int = DEV_KEY_PER_SECOND
    requests_per_two_minutes: int = DEV_KEY_PER_TWO_MINUTES
    # None: wait for a permit as long as it takes
    rate_limit_timeout: Optional[float] = None

    @classmethod
    def from_env(cls) -> "RiotAPIConfig":
        return cls(
            api_key=_load_api_key(),
            timeout_seconds=_env_number("RIOT_TIMEOUT", float, 30.0),
            requests_per_second=_env_number("RIOT_RATE_PER_SECOND", int, DEV_KEY_PER_SECOND),
            requests_per_two_minutes=_env_number("RIOT_RATE_PER_2MIN", int, DEV_KEY_PER_TWO_MINUTES),
            rate_limit_timeout=_env_number("RIOT_RATE_LIMIT_TIMEOUT", float, None),
        )

    def check(self) -> None:
        """Raise ConfigurationError for values the client can not work with"""
        if not self.api_key.startswith(API_KEY_PREFIX):
            raise ConfigurationError(
                f"RIOT_API_KEY should start with '{API_KEY_PREFIX}'. "
                "Get a valid key at https://developer.riotgames.com"
            )

        if self.requests_per_second < 1 or self.requests_per_two_minutes < 1:
            raise ConfigurationError(
                "Rate limits must be positive "
                f"(got {self.requests_per_second}/s, {self.requests_per_two_minutes}/2min)"
            )

        if self.timeout_seconds <= 0:
            raise ConfigurationError(f"RIOT_TIMEOUT must be positive, got {self.timeout_seconds}")

        if self.rate_limit_timeout is not None and self.rate_limit_timeout < 0:
            raise ConfigurationError(
                f"RIOT_RATE_LIMIT_TIMEOUT can not be negative, got {self.rate_limit_timeout}"
            )


@dataclass(frozen=True)
class LoggingConfig:
    level: str = "INFO"
    format: str = CONSOLE_FORMAT
    json_format: bool = False
    log_file: Optional[str] = None

    @classmethod
    def from_env(cls, env: Environment) -> "LoggingConfig":
        # production logs are machine-read
        is_prod = env == Environment.PRODUCTION
        return cls(
            level=os.getenv("LOG_LEVEL", "INFO" if is_prod else "DEBUG"),
            json_format=is_prod,
            log_file=os.getenv("LOG_FILE"),
        )


@dataclass(frozen=True)
class AppConfig:
    env: Environment
    riot: RiotAPIConfig
    logging: LoggingConfig
    debug: bool = False


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """
    Load and cache application configuration.

    Call get_config.cache_clear() after changing the environment.

    Raises:
        MissingConfigError: No API key in the environment or the key file
        ConfigurationError: A numeric setting is not a number
    """
    env = Environment.from_name(os.getenv("APP_ENV"))
    return AppConfig(
        env=env,
        riot=RiotAPIConfig.from_env(),
        logging=LoggingConfig.from_env(env),
        debug=_env_flag("DEBUG", default=env != Environment.PRODUCTION),
    )


def validate_config() -> bool:
    """Check the loaded configuration; True if usable, ConfigurationError if not"""
    get_config().riot.check()
    return True
