"""
Request dispatcher: the only code that talks to the Riot API over the network.

Every call is rate limited, authenticated with the X-Riot-Token header,
accepted only on 200 OK and decoded into a typed record. Nothing is retried
or cached here.
"""

import asyncio
from typing import Any, Callable, Optional, TypeVar

import httpx

from ..exceptions import (
    DecodeError,
    HTTPStatusError,
    InvalidRoutingDomainError,
    RateLimitCancelled,
    RequestCancelled,
    TransportError,
)
from ..logging_config import get_logger
from .rate_limiter import RateLimiter, wait_or_cancel
from .routing import RegionRouter

logger = get_logger(__name__)

T = TypeVar("T")

API_HOST = "api.riotgames.com"
AUTH_HEADER = "X-Riot-Token"


def build_url(routing: str, path: str) -> str:
    """https://{routing}.api.riotgames.com/{path}"""
    return f"https://{routing}.{API_HOST}/{path.lstrip('/')}"


class RequestDispatcher:
    """
    Rate-limited, authenticated GET + decode.

    Usage:
        dispatcher = RequestDispatcher(api_key, RateLimiter.for_dev_key())
        ids = await dispatcher.fetch("americas", path, decode_id_list, operation="Matches")
    """

    def __init__(
        self,
        api_key: str,
        limiter: RateLimiter,
        router: Optional[RegionRouter] = None,
        timeout_seconds: float = 30.0,
        rate_limit_timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if not api_key:
            raise ValueError("api_key is required")

        self.api_key = api_key
        self.limiter = limiter
        self.router = router or RegionRouter()
        self.timeout_seconds = timeout_seconds
        self.rate_limit_timeout = rate_limit_timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                headers={AUTH_HEADER: self.api_key},
                timeout=self.timeout_seconds,
                follow_redirects=False,
                transport=self._transport,
            )
        return self._client

    async def close(self):
        if self._client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "RequestDispatcher":
        return self

    async def __aexit__(self, *_) -> None:
        await self.close()

    async def fetch(
        self,
        routing: str,
        path: str,
        decode: Callable[[Any], T],
        operation: str = "fetch",
        cancel: Optional[asyncio.Event] = None,
    ) -> T:
        """
        Fetch `path` under `routing` and decode the JSON body with `decode`.

        Args:
            routing: Platform or region routing value
            path: Endpoint path, optionally with a query string
            decode: Maps the parsed JSON body to the caller's record type;
                KeyError/TypeError/ValueError mean the body has the wrong shape
            operation: Name used in error messages and logs
            cancel: Event that abandons the call once set

        Raises:
            InvalidRoutingDomainError: Unknown routing value; nothing was sent
            RateLimitCancelled: Cancelled while waiting for a permit; nothing was sent
            RequestCancelled: Cancelled while waiting for the response
            TransportError: The request could not be completed
            HTTPStatusError: Any status other than 200
            DecodeError: The body is not JSON or not of the expected shape
        """
        if not routing or not self.router.is_routing_domain(routing):
            raise InvalidRoutingDomainError(routing)

        url = build_url(routing, path)

        try:
            await self.limiter.acquire(cancel=cancel, timeout=self.rate_limit_timeout)
        except RateLimitCancelled as e:
            raise RateLimitCancelled(url, operation=operation) from e

        logger.debug(f"GET {url}", extra={"operation": operation, "routing": routing})

        try:
            sent = await wait_or_cancel(self._get_client().get(url), cancel)
            if sent is None:
                raise RequestCancelled(url, operation=operation)
            response = sent.result()
        except httpx.HTTPError as e:
            raise TransportError(url, f"{type(e).__name__}: {e}", operation=operation) from e

        if response.status_code != httpx.codes.OK:
            logger.warning(
                f"{operation} got HTTP {response.status_code}",
                extra={"url": url, "status_code": response.status_code},
            )
            raise HTTPStatusError(url, response.status_code, response.reason_phrase, operation=operation)

        try:
            return decode(response.json())
        except (KeyError, TypeError, ValueError) as e:
            raise DecodeError(url, f"{type(e).__name__}: {e}", operation=operation) from e
