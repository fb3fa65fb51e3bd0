"""
Match history aggregation.

`matches_in_set` collects every match a summoner played in one game-set:
league entry -> total games -> that many match ids -> one match at a time,
newest first, until the first match of an older set.
"""

import asyncio
from dataclasses import dataclass, field
from typing import Optional

from .api.client import TFTClient
from .exceptions import AggregateError, MatchHistoryError, RequestCancelled, TFTClientError
from .logging_config import get_logger
from .models import Match, Summoner
from .validation import mask_name

logger = get_logger(__name__)


@dataclass
class MatchSetResult:
    """Matches of one set, newest first, plus the failures met on the way"""
    matches: list[Match] = field(default_factory=list)
    error: Optional[AggregateError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def failed_ids(self) -> list[str]:
        return list(self.error.failures) if self.error else []

    def raise_for_failures(self) -> list[Match]:
        if self.error is not None:
            raise self.error
        return self.matches


async def matches_in_set(
    client: TFTClient,
    summoner: Summoner,
    target_set: int,
    cancel: Optional[asyncio.Event] = None,
) -> MatchSetResult:
    """
    All of a summoner's ranked matches played in `target_set`.

    Match ids come back newest first and a player only moves to a new set
    when it is released, so the scan stops at the first match of another set.
    A match that fails to load is recorded and skipped.

    Args:
        client: API client
        summoner: Summoner from `client.summoner_by_name`
        target_set: Game-set number to collect
        cancel: Event that stops the scan once set

    Returns:
        MatchSetResult with the collected matches and, if any match failed,
        an AggregateError mapping each failed match id to its error

    Raises:
        MatchHistoryError: The league entry or the match id list could not be fetched
    """
    name = mask_name(summoner.name)
    logger.info(f"Collecting set {target_set} matches of {name}")

    try:
        league = await client.league(summoner, cancel=cancel)
    except TFTClientError as e:
        raise MatchHistoryError("league", summoner.name, e) from e

    total_games = league.total_games
    try:
        ids = await client.matches(summoner, total_games, cancel=cancel)
    except TFTClientError as e:
        raise MatchHistoryError("matches", summoner.name, e) from e

    matches: list[Match] = []
    failures: dict[str, Exception] = {}
    cancelled = False

    for match_id in ids:
        try:
            match = await client.match(summoner.region, match_id, cancel=cancel)
        except TFTClientError as e:
            logger.warning(f"Failed to fetch match {match_id}: {e}", extra={"match_id": match_id})
            failures[match_id] = e
            if isinstance(e, RequestCancelled) and cancel is not None and cancel.is_set():
                cancelled = True
                break
            continue

        if match.info.tft_set_number != target_set:
            logger.debug(
                f"Match {match_id} is from set {match.info.tft_set_number}, stopping",
                extra={"match_id": match_id},
            )
            break

        matches.append(match)

    logger.info(
        f"Collected {len(matches)} set {target_set} matches of {name}",
        extra={"scanned_ids": len(ids), "failed": len(failures), "cancelled": cancelled},
    )

    if failures:
        return MatchSetResult(matches, AggregateError(failures, cancelled=cancelled))
    return MatchSetResult(matches)
