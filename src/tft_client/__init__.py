"""
TFT Riot API client.

Rate-limited access to the TFT summoner, league and match endpoints, and
match history aggregation by game-set.
"""

from .aggregation import MatchSetResult, matches_in_set
from .api.client import TFTClient
from .api.dispatcher import RequestDispatcher
from .api.rate_limiter import RateLimiter, TokenBucket
from .api.routing import REGION_PLATFORMS, RegionRouter
from .models import Info, LeagueEntry, Match, Metadata, Participant, Summoner, Trait, Unit

__version__ = "0.1.0"

__all__ = [
    "Info",
    "LeagueEntry",
    "Match",
    "MatchSetResult",
    "Metadata",
    "Participant",
    "RateLimiter",
    "REGION_PLATFORMS",
    "RegionRouter",
    "RequestDispatcher",
    "Summoner",
    "TFTClient",
    "TokenBucket",
    "Trait",
    "Unit",
    "matches_in_set",
]
