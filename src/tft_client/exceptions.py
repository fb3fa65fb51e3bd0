"""
Client Exception Hierarchy

Provides structured exceptions for:
- Configuration errors
- Input validation errors
- Per-request API failures (transport, status, decoding, cancellation)
- Match history aggregation failures
"""

from typing import Optional, Any


class TFTClientError(Exception):
    """Base exception for all TFT client errors"""

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict:
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "details": self.details
        }

    def __str__(self) -> str:
        return self.message


# ==================== Configuration Errors ====================

class ConfigurationError(TFTClientError):
    """Configuration is invalid or missing"""
    pass


class MissingConfigError(ConfigurationError):
    """Required configuration missing"""

    def __init__(self, key: str, hint: Optional[str] = None):
        msg = f"Required configuration missing: {key}"
        if hint:
            msg += f". {hint}"
        super().__init__(msg, {"key": key})
        self.key = key


# ==================== Validation Errors ====================

class ValidationError(TFTClientError):
    """Input validation error"""

    def __init__(self, field: str, message: str, value: Any = None):
        self.field = field
        self.value = value
        details = {"field": field}
        if value is not None:
            details["value"] = str(value)[:100]
        super().__init__(message, details)


class InvalidPlatformError(ValidationError):
    """Unknown platform routing value"""

    def __init__(self, platform: str, valid_platforms: list[str]):
        msg = f"Invalid platform: '{platform}'. Valid platforms: {', '.join(valid_platforms)}"
        super().__init__(field="platform", message=msg, value=platform)
        self.valid_platforms = valid_platforms


class InvalidRoutingDomainError(ValidationError):
    """Routing value that is neither a known platform nor a known region"""

    def __init__(self, routing: str, expected: str = "platform or region"):
        msg = f"Invalid routing domain: '{routing}' (expected a known {expected})"
        super().__init__(field="routing", message=msg, value=routing)
        self.routing = routing


class InvalidSummonerNameError(ValidationError):
    """Summoner name that can not exist"""

    def __init__(self, name: str, reason: Optional[str] = None):
        msg = f"Invalid summoner name: '{name}'"
        if reason:
            msg += f" ({reason})"
        super().__init__(field="summoner_name", message=msg, value=name)


class InvalidMatchCountError(ValidationError):
    """Invalid match count"""

    def __init__(self, count: Any):
        msg = f"Match count must be a non-negative integer, got {count!r}"
        super().__init__(field="match_count", message=msg, value=count)


class InvalidSetNumberError(ValidationError):
    """Invalid game-set number"""

    def __init__(self, set_number: Any):
        msg = f"Set number must be a positive integer, got {set_number!r}"
        super().__init__(field="set_number", message=msg, value=set_number)


# ==================== API Errors ====================

class RiotAPIError(TFTClientError):
    """
    Base class for a single failed Riot API call.

    Carries the operation name and the target URL so the failing call can be
    identified from the message alone.
    """

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        operation: Optional[str] = None,
        status_code: Optional[int] = None,
        **kwargs: Any
    ):
        self.url = url
        self.operation = operation
        self.status_code = status_code
        details = {"url": url, "operation": operation, "status_code": status_code, **kwargs}
        if operation and url:
            message = f"{operation}({url!r}): {message}"
        super().__init__(message, details)


class TransportError(RiotAPIError):
    """The request could not be completed (DNS, connection, timeout)"""

    def __init__(self, url: str, reason: str, operation: Optional[str] = None):
        super().__init__(f"failed on request: {reason}", url=url, operation=operation)
        self.reason = reason


class RequestCancelled(RiotAPIError):
    """The caller cancelled while the request was in flight"""

    def __init__(self, url: str, operation: Optional[str] = None, reason: str = "cancelled while waiting for response"):
        super().__init__(reason, url=url, operation=operation)


class RateLimitCancelled(RequestCancelled):
    """The caller cancelled (or timed out) while waiting for a rate limit permit; nothing was sent"""

    def __init__(self, url: Optional[str] = None, operation: Optional[str] = None):
        super().__init__(url, operation=operation, reason="failed on waiting for rate limit: cancelled")


class HTTPStatusError(RiotAPIError):
    """The API answered with anything other than 200 OK"""

    HINTS = {
        401: "Invalid or missing Riot API key",
        403: (
            "API key expired or forbidden. Development keys expire every 24 hours. "
            "Get a new one at https://developer.riotgames.com"
        ),
        404: "Resource not found",
        429: "Rate limited by Riot API",
    }

    def __init__(self, url: str, status_code: int, reason: str, operation: Optional[str] = None):
        super().__init__(
            f'request failed with status "{status_code} {reason}"',
            url=url,
            operation=operation,
            status_code=status_code,
            reason=reason,
        )
        self.reason = reason

    @property
    def hint(self) -> Optional[str]:
        if self.status_code is not None and self.status_code >= 500:
            return f"Riot API server error (HTTP {self.status_code})"
        return self.HINTS.get(self.status_code)


class DecodeError(RiotAPIError):
    """A 200 response whose body does not have the expected shape"""

    def __init__(self, url: str, reason: str, operation: Optional[str] = None):
        super().__init__(f"failed on json parse of request body: {reason}", url=url, operation=operation)
        self.reason = reason


class EmptyListError(RiotAPIError):
    """An endpoint returned an empty list where one entry was expected"""

    def __init__(self, url: str, operation: Optional[str] = None):
        super().__init__("expected at least one entry, got an empty list", url=url, operation=operation)


# ==================== Aggregation Errors ====================

class MatchHistoryError(TFTClientError):
    """A mandatory step of a match history scan failed; no partial result exists"""

    def __init__(self, stage: str, summoner_name: str, cause: Exception):
        super().__init__(
            f"failed to get {stage} info of {summoner_name}: {cause}",
            {"stage": stage, "summoner": summoner_name}
        )
        self.stage = stage
        self.cause = cause


class AggregateError(TFTClientError):
    """One or more matches of a scan failed; the partial result is kept alongside"""

    def __init__(self, failures: dict[str, Exception], cancelled: bool = False):
        self.failures = dict(failures)
        self.cancelled = cancelled
        listing = "; ".join(f"{match_id}: {err}" for match_id, err in self.failures.items())
        msg = f"errors on fetching {len(self.failures)} match(es): {listing}"
        if cancelled:
            msg += " (scan cancelled)"
        super().__init__(msg, {"failed_ids": list(self.failures), "cancelled": cancelled})
