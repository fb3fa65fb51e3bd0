#!/usr/bin/env python3
"""
TFT lookup CLI

Usage:
    tft-lookup "SummonerName" --platform na1
    tft-lookup "SummonerName" --platform euw1 --set 9
"""

import sys
import asyncio
import argparse
from datetime import datetime, timezone
from typing import Optional

from dotenv import load_dotenv
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .aggregation import MatchSetResult, matches_in_set
from .api.client import TFTClient
from .config import get_config, validate_config
from .exceptions import EmptyListError, HTTPStatusError, MatchHistoryError, TFTClientError, ValidationError
from .logging_config import setup_logging, get_logger, generate_correlation_id
from .models import LeagueEntry, Summoner
from .validation import VALID_PLATFORMS, validate_set_number

console = Console()
logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tft-lookup",
        description="Look up a TFT player's ranked record and match history",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    tft-lookup tnekk --platform na1
    tft-lookup tnekk --platform na1 --set 9

Platforms:
    americas  br1, la1, la2, na1
    asia      jp1, kr, oc1
    europe    eun1, euw1, tr1, ru
        """
    )

    parser.add_argument("name", help="Summoner name")
    parser.add_argument(
        "--platform", "-p",
        default="na1",
        choices=VALID_PLATFORMS,
        type=str.lower,
        help="Server platform (default: na1)"
    )
    parser.add_argument(
        "--set", "-s",
        dest="set_number",
        type=validate_set_number_arg,
        help="Collect every ranked match of this game-set"
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser


def validate_set_number_arg(value: str) -> int:
    try:
        return validate_set_number(value)
    except ValidationError as e:
        raise argparse.ArgumentTypeError(e.message)


def render_summoner(summoner: Summoner, league: Optional[LeagueEntry]) -> Panel:
    lines = [
        f"[bold cyan]{summoner.name}[/bold cyan]",
        f"Platform: {summoner.platform} ({summoner.region})",
        f"Level: {summoner.summoner_level}",
    ]
    if league is None:
        lines.append("Rank: Unranked")
    else:
        lines.append(f"Rank: {league.tier} {league.rank} ({league.league_points} LP)")
        lines.append(f"Top 1 / other: {league.wins}/{league.losses} ({league.total_games} games)")
    return Panel.fit("\n".join(lines), border_style="cyan")


def render_matches(result: MatchSetResult, puuid: str, set_number: int) -> Table:
    table = Table(title=f"Set {set_number} matches")
    table.add_column("Match", style="cyan")
    table.add_column("Played")
    table.add_column("Placement", style="bold")
    table.add_column("Level")
    table.add_column("Duration")

    for match in result.matches:
        me = match.participant(puuid)
        played = datetime.fromtimestamp(match.info.game_datetime / 1000, tz=timezone.utc)
        length = int(match.info.game_length)
        table.add_row(
            match.match_id,
            played.strftime("%Y-%m-%d %H:%M"),
            str(me.placement) if me else "-",
            str(me.level) if me else "-",
            f"{length // 60}:{length % 60:02d}",
        )
    return table


async def lookup(name: str, platform: str, set_number: Optional[int] = None, client: Optional[TFTClient] = None) -> int:
    """Run one lookup and print the outcome; returns the process exit code"""
    generate_correlation_id()

    try:
        if client is None:
            client = TFTClient.from_config(get_config().riot)

        async with client:
            summoner = await client.summoner_by_name(platform, name)
            try:
                league = await client.league(summoner)
            except EmptyListError:
                league = None
            except HTTPStatusError as e:
                if e.status_code != 404:
                    raise
                league = None

            console.print(render_summoner(summoner, league))

            if set_number is None:
                return 0

            result = await matches_in_set(client, summoner, set_number)
            console.print(render_matches(result, summoner.puuid, set_number))

            if not result.ok:
                console.print(f"[yellow]{len(result.failed_ids)} match(es) could not be fetched:[/yellow]")
                for match_id, err in result.error.failures.items():
                    console.print(f"  [dim]{match_id}: {err}[/dim]")
            return 0

    except HTTPStatusError as e:
        logger.error(f"Riot API error: {e.message}")
        console.print(f"\n[red]{e.hint or e.message}[/red]")
        return 1
    except MatchHistoryError as e:
        logger.error(e.message)
        console.print(f"\n[red]Could not read match history: {e.cause}[/red]")
        return 1
    except TFTClientError as e:
        logger.error(f"Error: {e.message}")
        console.print(f"\n[red]Error: {e.message}[/red]")
        return 1


def main(argv: Optional[list[str]] = None) -> int:
    load_dotenv()

    args = build_parser().parse_args(argv)

    try:
        config = get_config()
        validate_config()
    except TFTClientError as e:
        console.print(f"[red]{e.message}[/red]")
        console.print("[dim]Copy .env.example to .env and add your API key[/dim]")
        return 1

    setup_logging(
        level="DEBUG" if args.debug else config.logging.level,
        json_format=config.logging.json_format,
        log_file=config.logging.log_file,
        fmt=config.logging.format,
    )

    return asyncio.run(lookup(args.name, args.platform, args.set_number))


if __name__ == "__main__":
    sys.exit(main())
