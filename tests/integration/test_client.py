"""
Integration tests for the TFT client endpoints.
"""

import httpx
import pytest

from tft_client.api.client import TFTClient
from tft_client.config import RiotAPIConfig
from tft_client.exceptions import (
    EmptyListError,
    HTTPStatusError,
    InvalidMatchCountError,
    InvalidPlatformError,
    InvalidRoutingDomainError,
    InvalidSummonerNameError,
)
from tests.conftest import TEST_API_KEY
from tests.fixtures.sample_matches import SAMPLE_MATCH_RESPONSE, TEST_PUUID

NA1 = "https://na1.api.riotgames.com"
AMERICAS = "https://americas.api.riotgames.com"
LEAGUE_URL = f"{NA1}/tft/league/v1/entries/by-summoner/summoner-id-123"
MATCH_URL = f"{AMERICAS}/tft/match/v1/matches/NA1_123456789"


class TestFromConfig:
    """Tests for building a client from configuration"""

    def test_wires_limits_and_timeouts(self):
        config = RiotAPIConfig(
            api_key=TEST_API_KEY,
            timeout_seconds=5.0,
            requests_per_second=7,
            requests_per_two_minutes=70,
            rate_limit_timeout=12.0,
        )
        client = TFTClient.from_config(config)

        assert client.dispatcher.api_key == TEST_API_KEY
        assert client.dispatcher.timeout_seconds == 5.0
        assert client.dispatcher.rate_limit_timeout == 12.0
        assert [b.capacity for b in client.dispatcher.limiter.buckets] == [7, 70]
        assert client.router is client.dispatcher.router


class TestSummonerByName:
    """Tests for summoner lookup"""

    @pytest.mark.asyncio
    async def test_stamps_platform_and_region(self, client, fake_api, sample_summoner_data):
        fake_api.add(f"{NA1}/tft/summoner/v1/summoners/by-name/TestPlayer", json=sample_summoner_data)

        summoner = await client.summoner_by_name("NA1", "TestPlayer")

        assert summoner.platform == "na1"
        assert summoner.region == "americas"
        assert summoner.puuid == TEST_PUUID

    @pytest.mark.asyncio
    async def test_name_is_escaped(self, client, fake_api, sample_summoner_data):
        fake_api.add(f"{NA1}/tft/summoner/v1/summoners/by-name/Cool%20Player", json=sample_summoner_data)

        await client.summoner_by_name("na1", "Cool Player")

        assert fake_api.requests[0].url.raw_path == b"/tft/summoner/v1/summoners/by-name/Cool%20Player"

    @pytest.mark.asyncio
    async def test_europe_platform(self, client, fake_api, sample_summoner_data):
        fake_api.add(
            "https://euw1.api.riotgames.com/tft/summoner/v1/summoners/by-name/TestPlayer",
            json=sample_summoner_data,
        )

        summoner = await client.summoner_by_name("euw1", "TestPlayer")

        assert summoner.region == "europe"

    @pytest.mark.asyncio
    async def test_invalid_platform_sends_nothing(self, client, fake_api):
        with pytest.raises(InvalidPlatformError):
            await client.summoner_by_name("americas", "TestPlayer")
        assert fake_api.requests == []

    @pytest.mark.asyncio
    async def test_invalid_name_sends_nothing(self, client, fake_api):
        with pytest.raises(InvalidSummonerNameError):
            await client.summoner_by_name("na1", "x")
        assert fake_api.requests == []

    @pytest.mark.asyncio
    async def test_not_found(self, client, fake_api):
        with pytest.raises(HTTPStatusError) as exc_info:
            await client.summoner_by_name("na1", "Nobody")
        assert exc_info.value.status_code == 404


class TestLeague:
    """Tests for the ranked entry"""

    @pytest.mark.asyncio
    async def test_returns_first_entry(self, client, fake_api, summoner, sample_league_data):
        second = dict(sample_league_data[0], queueType="RANKED_TFT_TURBO", wins=99)
        fake_api.add(LEAGUE_URL, json=sample_league_data + [second])

        entry = await client.league(summoner)

        assert entry.queue_type == "RANKED_TFT"
        assert entry.total_games == 4
        assert fake_api.urls() == [LEAGUE_URL]

    @pytest.mark.asyncio
    async def test_empty_list_is_an_error(self, client, fake_api, summoner):
        fake_api.add(LEAGUE_URL, json=[])

        with pytest.raises(EmptyListError) as exc_info:
            await client.league(summoner)

        assert exc_info.value.url == LEAGUE_URL
        assert exc_info.value.operation == "League"

    @pytest.mark.asyncio
    async def test_summoner_without_platform(self, client, fake_api, sample_summoner_data):
        from tft_client.models import Summoner

        with pytest.raises(InvalidRoutingDomainError):
            await client.league(Summoner.from_dict(sample_summoner_data))
        assert fake_api.requests == []


class TestMatches:
    """Tests for the match id history"""

    @pytest.mark.asyncio
    async def test_region_routed_and_order_kept(self, client, fake_api, summoner):
        url = f"{AMERICAS}/tft/match/v1/matches/by-puuid/{TEST_PUUID}/ids?count=3"
        fake_api.add(url, json=["NA1_9", "NA1_4", "NA1_7"])

        ids = await client.matches(summoner, 3)

        assert ids == ["NA1_9", "NA1_4", "NA1_7"]
        assert fake_api.urls() == [url]

    @pytest.mark.asyncio
    async def test_zero_count_sends_nothing(self, client, fake_api, summoner):
        assert await client.matches(summoner, 0) == []
        assert fake_api.requests == []

    @pytest.mark.asyncio
    async def test_negative_count(self, client, summoner):
        with pytest.raises(InvalidMatchCountError):
            await client.matches(summoner, -1)


class TestMatch:
    """Tests for match details"""

    @pytest.mark.asyncio
    async def test_fetches_match(self, client, fake_api):
        fake_api.add(MATCH_URL, json=SAMPLE_MATCH_RESPONSE)

        match = await client.match("americas", "NA1_123456789")

        assert match.match_id == "NA1_123456789"
        assert match.set_number == 3

    @pytest.mark.asyncio
    async def test_repeated_fetch_is_equal(self, client, fake_api):
        """Test matches are immutable records: fetching twice gives equal values"""
        fake_api.add(MATCH_URL, json=SAMPLE_MATCH_RESPONSE)

        first = await client.match("americas", "NA1_123456789")
        second = await client.match("americas", "NA1_123456789")

        assert first == second
        assert len(fake_api.requests) == 2

    @pytest.mark.asyncio
    async def test_platform_is_not_a_region(self, client, fake_api):
        with pytest.raises(InvalidRoutingDomainError):
            await client.match("na1", "NA1_123456789")
        assert fake_api.requests == []

    @pytest.mark.asyncio
    async def test_region_is_normalised(self, client, fake_api):
        fake_api.add(MATCH_URL, json=SAMPLE_MATCH_RESPONSE)

        match = await client.match(" Americas ", "NA1_123456789")

        assert match.match_id == "NA1_123456789"
        assert fake_api.urls() == [MATCH_URL]

    @pytest.mark.asyncio
    async def test_missing_region(self, client, fake_api):
        with pytest.raises(InvalidRoutingDomainError):
            await client.match(None, "NA1_123456789")
        assert fake_api.requests == []

    @pytest.mark.asyncio
    async def test_server_error(self, client, fake_api):
        fake_api.add_handler(MATCH_URL, lambda request: httpx.Response(500))

        with pytest.raises(HTTPStatusError) as exc_info:
            await client.match("americas", "NA1_123456789")

        assert exc_info.value.status_code == 500

    @pytest.mark.asyncio
    async def test_context_manager_closes(self, client, fake_api):
        fake_api.add(MATCH_URL, json=SAMPLE_MATCH_RESPONSE)

        async with client:
            await client.match("americas", "NA1_123456789")
            assert client.dispatcher._client is not None

        assert client.dispatcher._client is None
