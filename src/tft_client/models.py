"""
TFT API records.

Field names follow Python conventions; `from_dict` maps the JSON keys of the
Riot API payloads. Identity fields are required, descriptive fields fall
back to empty defaults. A payload of the wrong shape raises KeyError,
TypeError or ValueError.
"""

from dataclasses import dataclass, replace
from typing import Any, Optional


def _expect(value: Any, kind: type, what: str) -> Any:
    # bool is an int subclass; a flag is never a count
    if not isinstance(value, kind) or (kind in (int, float) and isinstance(value, bool)):
        raise TypeError(f"{what}: expected {kind.__name__}, got {type(value).__name__}")
    return value


def _number(value: Any, what: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"{what}: expected number, got {type(value).__name__}")
    return float(value)


def _str_list(value: Any, what: str) -> tuple[str, ...]:
    return tuple(_expect(item, str, what) for item in _expect(value, list, what))


@dataclass(frozen=True)
class Summoner:
    """A TFT account, as looked up on one platform"""
    id: str
    account_id: str
    puuid: str
    name: str = ""
    profile_icon_id: int = 0
    # Epoch milliseconds of the last name, level or icon change
    revision_date: int = 0
    summoner_level: int = 0

    # Routing values the account was looked up under
    platform: Optional[str] = None
    region: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "Summoner":
        _expect(data, dict, "summoner")
        return cls(
            id=_expect(data["id"], str, "id"),
            account_id=_expect(data["accountId"], str, "accountId"),
            puuid=_expect(data["puuid"], str, "puuid"),
            name=_expect(data.get("name", ""), str, "name"),
            profile_icon_id=_expect(data.get("profileIconId", 0), int, "profileIconId"),
            revision_date=_expect(data.get("revisionDate", 0), int, "revisionDate"),
            summoner_level=_expect(data.get("summonerLevel", 0), int, "summonerLevel"),
        )

    def with_routing(self, platform: str, region: Optional[str]) -> "Summoner":
        return replace(self, platform=platform, region=region)


@dataclass(frozen=True)
class LeagueEntry:
    """Ranked standing of a summoner in one queue"""
    wins: int
    losses: int
    league_id: str = ""
    summoner_id: str = ""
    summoner_name: str = ""
    queue_type: str = ""
    tier: str = ""
    rank: str = ""
    league_points: int = 0
    hot_streak: bool = False
    veteran: bool = False
    fresh_blood: bool = False
    inactive: bool = False

    @property
    def total_games(self) -> int:
        # wins are first places, losses second through eighth
        return self.wins + self.losses

    @classmethod
    def from_dict(cls, data: dict) -> "LeagueEntry":
        _expect(data, dict, "league entry")
        return cls(
            wins=_expect(data["wins"], int, "wins"),
            losses=_expect(data["losses"], int, "losses"),
            league_id=_expect(data.get("leagueId", ""), str, "leagueId"),
            summoner_id=_expect(data.get("summonerId", ""), str, "summonerId"),
            summoner_name=_expect(data.get("summonerName", ""), str, "summonerName"),
            queue_type=_expect(data.get("queueType", ""), str, "queueType"),
            tier=_expect(data.get("tier", ""), str, "tier"),
            rank=_expect(data.get("rank", ""), str, "rank"),
            league_points=_expect(data.get("leaguePoints", 0), int, "leaguePoints"),
            hot_streak=_expect(data.get("hotStreak", False), bool, "hotStreak"),
            veteran=_expect(data.get("veteran", False), bool, "veteran"),
            fresh_blood=_expect(data.get("freshBlood", False), bool, "freshBlood"),
            inactive=_expect(data.get("inactive", False), bool, "inactive"),
        )


def league_entries_from_list(data: list) -> list[LeagueEntry]:
    return [LeagueEntry.from_dict(entry) for entry in _expect(data, list, "league entries")]


def match_ids_from_list(data: list) -> list[str]:
    return list(_str_list(data, "match ids"))


@dataclass(frozen=True)
class Trait:
    name: str
    num_units: int = 0
    tier_current: int = 0

    @classmethod
    def from_dict(cls, data: dict) -> "Trait":
        _expect(data, dict, "trait")
        return cls(
            name=_expect(data["name"], str, "trait.name"),
            num_units=_expect(data.get("num_units", 0), int, "num_units"),
            tier_current=_expect(data.get("tier_current", 0), int, "tier_current"),
        )


@dataclass(frozen=True)
class Unit:
    # Introduced in patch 9.22 with data_version 2
    character_id: str
    name: str = ""
    # Item IDs, see https://developer.riotgames.com/docs/lol#data-dragon_items
    items: tuple[int, ...] = ()
    rarity: int = 0
    tier: int = 0

    @classmethod
    def from_dict(cls, data: dict) -> "Unit":
        _expect(data, dict, "unit")
        return cls(
            character_id=_expect(data.get("character_id", ""), str, "character_id"),
            name=_expect(data.get("name", ""), str, "unit.name"),
            items=tuple(_expect(i, int, "items") for i in _expect(data.get("items", []), list, "items")),
            rarity=_expect(data.get("rarity", 0), int, "rarity"),
            tier=_expect(data.get("tier", 0), int, "tier"),
        )


@dataclass(frozen=True)
class Participant:
    """One player's game in a match"""
    puuid: str
    placement: int
    level: int = 0
    last_round: int = 0
    players_eliminated: int = 0
    time_eliminated: float = 0.0
    total_damage_to_players: int = 0
    gold_left: int = 0
    traits: tuple[Trait, ...] = ()
    units: tuple[Unit, ...] = ()

    @classmethod
    def from_dict(cls, data: dict) -> "Participant":
        _expect(data, dict, "participant")
        return cls(
            puuid=_expect(data["puuid"], str, "participant.puuid"),
            placement=_expect(data["placement"], int, "placement"),
            level=_expect(data.get("level", 0), int, "level"),
            last_round=_expect(data.get("last_round", 0), int, "last_round"),
            players_eliminated=_expect(data.get("players_eliminated", 0), int, "players_eliminated"),
            time_eliminated=_number(data.get("time_eliminated", 0.0), "time_eliminated"),
            total_damage_to_players=_expect(data.get("total_damage_to_players", 0), int, "total_damage_to_players"),
            gold_left=_expect(data.get("gold_left", 0), int, "gold_left"),
            traits=tuple(Trait.from_dict(t) for t in _expect(data.get("traits", []), list, "traits")),
            units=tuple(Unit.from_dict(u) for u in _expect(data.get("units", []), list, "units")),
        )


@dataclass(frozen=True)
class Metadata:
    data_version: str
    match_id: str
    # Encrypted PUUIDs
    participants: tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: dict) -> "Metadata":
        _expect(data, dict, "metadata")
        return cls(
            data_version=_expect(data.get("data_version", ""), str, "data_version"),
            match_id=_expect(data["match_id"], str, "match_id"),
            participants=_str_list(data.get("participants", []), "metadata.participants"),
        )


@dataclass(frozen=True)
class Info:
    tft_set_number: int
    # Unix timestamp in milliseconds
    game_datetime: int = 0
    # Seconds
    game_length: float = 0.0
    # As of set 3 these are Galaxy names
    game_variation: str = ""
    # Patch the game was played on
    game_version: str = ""
    # Per-player game data (the metadata participants are just PUUIDs)
    participants: tuple[Participant, ...] = ()
    # Normal, ranked, ... see https://developer.riotgames.com/docs/lol#general_game-constants
    queue_id: int = 0

    @classmethod
    def from_dict(cls, data: dict) -> "Info":
        _expect(data, dict, "info")
        return cls(
            tft_set_number=_expect(data["tft_set_number"], int, "tft_set_number"),
            game_datetime=_expect(data.get("game_datetime", 0), int, "game_datetime"),
            game_length=_number(data.get("game_length", 0.0), "game_length"),
            game_variation=_expect(data.get("game_variation", ""), str, "game_variation"),
            game_version=_expect(data.get("game_version", ""), str, "game_version"),
            participants=tuple(
                Participant.from_dict(p) for p in _expect(data.get("participants", []), list, "info.participants")
            ),
            queue_id=_expect(data.get("queue_id", 0), int, "queue_id"),
        )


@dataclass(frozen=True)
class Match:
    """A completed match; never changes once played"""
    metadata: Metadata
    info: Info

    @property
    def match_id(self) -> str:
        return self.metadata.match_id

    @property
    def set_number(self) -> int:
        return self.info.tft_set_number

    def participant(self, puuid: str) -> Optional[Participant]:
        for p in self.info.participants:
            if p.puuid == puuid:
                return p
        return None

    @classmethod
    def from_dict(cls, data: dict) -> "Match":
        _expect(data, dict, "match")
        return cls(
            metadata=Metadata.from_dict(data["metadata"]),
            info=Info.from_dict(data["info"]),
        )
