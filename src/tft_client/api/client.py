"""
TFT API client

The four read operations the match history tools are built on:
- Summoner lookup by name (platform routed)
- Ranked league entry (platform routed)
- Match id history (region routed)
- Match details (region routed)
"""

import asyncio
from typing import Optional

from ..config import RiotAPIConfig
from ..exceptions import EmptyListError
from ..logging_config import get_logger
from ..models import LeagueEntry, Match, Summoner, league_entries_from_list, match_ids_from_list
from ..validation import (
    mask_name,
    sanitize_for_url,
    validate_match_count,
    validate_platform,
    validate_region,
    validate_summoner_name,
)
from .dispatcher import RequestDispatcher, build_url
from .rate_limiter import RateLimiter
from .routing import RegionRouter

logger = get_logger(__name__)

SUMMONER_API_PREFIX = "/tft/summoner/v1/summoners"
LEAGUE_API_PREFIX = "/tft/league/v1"
MATCH_API_PREFIX = "/tft/match/v1/matches"


class TFTClient:
    """
    TFT API client

    Usage:
        async with TFTClient.from_config(get_config().riot) as client:
            summoner = await client.summoner_by_name("na1", "tnekk")
            ids = await client.matches(summoner, 20)
            match = await client.match(summoner.region, ids[0])
    """

    def __init__(self, dispatcher: RequestDispatcher, router: Optional[RegionRouter] = None):
        self.dispatcher = dispatcher
        self.router = router or dispatcher.router

    @classmethod
    def from_config(cls, config: RiotAPIConfig, transport=None) -> "TFTClient":
        router = RegionRouter()
        dispatcher = RequestDispatcher(
            api_key=config.api_key,
            limiter=RateLimiter.from_config(config),
            router=router,
            timeout_seconds=config.timeout_seconds,
            rate_limit_timeout=config.rate_limit_timeout,
            transport=transport,
        )
        return cls(dispatcher, router)

    async def close(self):
        await self.dispatcher.close()

    async def __aenter__(self) -> "TFTClient":
        return self

    async def __aexit__(self, *_) -> None:
        await self.close()

    # ==================== Summoner ====================

    async def summoner_by_name(
        self, platform: str, name: str, cancel: Optional[asyncio.Event] = None
    ) -> Summoner:
        """
        Look up a summoner by name on a platform.

        The returned record is stamped with the platform and the region that
        encloses it, which the league and match calls route by.
        """
        platform = validate_platform(platform)
        name = validate_summoner_name(name)

        path = f"{SUMMONER_API_PREFIX}/by-name/{sanitize_for_url(name)}"
        summoner = await self.dispatcher.fetch(
            platform, path, Summoner.from_dict, operation="SummonerByName", cancel=cancel
        )
        logger.debug(f"Found summoner {mask_name(name)}", extra={"platform": platform})
        return summoner.with_routing(platform, self.router.region_of(platform))

    # ==================== League ====================

    async def league(self, summoner: Summoner, cancel: Optional[asyncio.Event] = None) -> LeagueEntry:
        """
        Ranked standing of a summoner.

        The TFT league endpoint answers with a list even though it only ever
        holds the one TFT queue entry; the first entry is returned.

        Raises:
            EmptyListError: The summoner has no ranked entry
        """
        path = f"{LEAGUE_API_PREFIX}/entries/by-summoner/{sanitize_for_url(summoner.id)}"
        entries = await self.dispatcher.fetch(
            summoner.platform, path, league_entries_from_list, operation="League", cancel=cancel
        )
        if not entries:
            raise EmptyListError(build_url(summoner.platform, path), operation="League")
        return entries[0]

    # ==================== Match ====================

    async def matches(
        self, summoner: Summoner, count: int, cancel: Optional[asyncio.Event] = None
    ) -> list[str]:
        """Ids of the summoner's last `count` matches, newest first"""
        count = validate_match_count(count)
        if count == 0:
            return []

        path = f"{MATCH_API_PREFIX}/by-puuid/{sanitize_for_url(summoner.puuid)}/ids?count={count}"
        return await self.dispatcher.fetch(
            summoner.region, path, match_ids_from_list, operation="Matches", cancel=cancel
        )

    async def match(self, region: str, match_id: str, cancel: Optional[asyncio.Event] = None) -> Match:
        """Full record of one match; `region` is matched case-insensitively"""
        region = validate_region(region)

        path = f"{MATCH_API_PREFIX}/{sanitize_for_url(match_id)}"
        return await self.dispatcher.fetch(region, path, Match.from_dict, operation="Match", cancel=cancel)
