import httpx
import pytest

from football_guesser.badges.resolver import pick_team
from football_guesser.badges.retry import RetryPolicy
from football_guesser.models.enums import League
from football_guesser.models.lookup import TeamRecord

from conftest import SportsDbStub, make_sportsdb_client, soccer_team

BADGE = "https://x/badge.png"


@pytest.mark.asyncio
async def test_alias_hit_stops_after_first_term(make_resolver):
    stub = SportsDbStub({"Tottenham": [{"teams": [soccer_team("Tottenham", BADGE)]}]})
    resolver = make_resolver(stub, alias_table={"Tottenham Hotspur": "Tottenham"})

    assert await resolver.resolve_badge("Tottenham Hotspur") == BADGE
    assert stub.searched == ["Tottenham"]
    assert resolver.cached_badge("Tottenham Hotspur") == BADGE


@pytest.mark.asyncio
async def test_second_call_is_served_from_cache(make_resolver):
    stub = SportsDbStub({"Hellas": [{"teams": [soccer_team("Hellas Verona", BADGE)]}]})
    resolver = make_resolver(stub)

    first = await resolver.resolve_badge("Hellas Verona")
    searched = list(stub.searched)
    second = await resolver.resolve_badge("Hellas Verona")

    assert first == second == BADGE
    assert searched == ["Hellas Verona", "Hellas"]
    assert stub.searched == searched


@pytest.mark.asyncio
async def test_exhaustion_caches_none_and_records_once(make_resolver):
    stub = SportsDbStub()
    resolver = make_resolver(stub)

    assert await resolver.resolve_badge("Obscure FC Town") is None
    assert stub.searched == ["Obscure FC Town", "Obscure", "Town"]
    assert resolver.is_cached("Obscure FC Town")

    assert await resolver.resolve_badge("Obscure FC Town") is None
    assert len(stub.searched) == 3
    assert resolver.ledger.list() == ["Obscure FC Town"]


@pytest.mark.asyncio
async def test_prefers_soccer_team(make_resolver):
    payload = {
        "teams": [
            soccer_team("Arsenal", "https://x/basketball.png", sport="Basketball"),
            soccer_team("Arsenal", BADGE, sport="Soccer"),
        ]
    }
    resolver = make_resolver(SportsDbStub({"Arsenal": [payload]}))

    assert await resolver.resolve_badge("Arsenal") == BADGE


@pytest.mark.asyncio
async def test_falls_back_to_first_team_without_soccer(make_resolver):
    payload = {
        "teams": [
            soccer_team("Arsenal", "https://x/first.png", sport="Basketball"),
            soccer_team("Arsenal", "https://x/second.png", sport="Rugby"),
        ]
    }
    resolver = make_resolver(SportsDbStub({"Arsenal": [payload]}))

    assert await resolver.resolve_badge("Arsenal") == "https://x/first.png"


@pytest.mark.asyncio
async def test_rate_limit_retries_same_term_once(make_resolver, sleep_recorder):
    stub = SportsDbStub({"Lazio": [429, {"teams": [soccer_team("Lazio", BADGE)]}]})
    resolver = make_resolver(stub)

    assert await resolver.resolve_badge("Lazio") == BADGE
    assert stub.searched == ["Lazio", "Lazio"]
    assert sleep_recorder.calls == [1.0]


@pytest.mark.asyncio
async def test_persistent_rate_limit_moves_on_after_one_retry(make_resolver, sleep_recorder):
    stub = SportsDbStub(
        {
            "Hellas Verona": [429],
            "Hellas": [{"teams": [soccer_team("Hellas Verona", BADGE)]}],
        }
    )
    resolver = make_resolver(stub)

    assert await resolver.resolve_badge("Hellas Verona") == BADGE
    assert stub.searched == ["Hellas Verona", "Hellas Verona", "Hellas"]
    assert sleep_recorder.calls == [1.0]


@pytest.mark.asyncio
async def test_backoff_budget_caps_waits_for_whole_resolution(make_resolver, sleep_recorder):
    stub = SportsDbStub({term: [429] for term in ("Obscure FC Town", "Obscure", "Town")})
    resolver = make_resolver(
        stub,
        retry_policy=RetryPolicy(
            max_attempts_per_term=2, backoff_seconds=0.5, max_backoffs_per_resolution=1
        ),
    )

    assert await resolver.resolve_badge("Obscure FC Town") is None
    assert stub.searched == ["Obscure FC Town", "Obscure FC Town", "Obscure", "Town"]
    assert sleep_recorder.calls == [0.5]
    assert "Obscure FC Town" in resolver.ledger


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "failure",
    [
        500,
        404,
        httpx.Response(200, text="<html>maintenance</html>"),
        {"teams": "not-a-list"},
        {"unexpected": []},
        httpx.ConnectError("connection refused"),
        httpx.InvalidURL("invalid host"),
        httpx.StreamConsumed(),
    ],
)
async def test_failed_term_falls_through_to_next(make_resolver, sleep_recorder, failure):
    stub = SportsDbStub(
        {
            "Hellas Verona": [failure],
            "Hellas": [{"teams": [soccer_team("Hellas Verona", BADGE)]}],
        }
    )
    resolver = make_resolver(stub)

    assert await resolver.resolve_badge("Hellas Verona") == BADGE
    assert stub.searched == ["Hellas Verona", "Hellas"]
    assert sleep_recorder.calls == []


@pytest.mark.asyncio
async def test_team_without_badge_counts_as_miss(make_resolver):
    stub = SportsDbStub(
        {
            "Hellas Verona": [{"teams": [soccer_team("Hellas Verona", "")]}],
            "Hellas": [{"teams": [soccer_team("Hellas Verona", BADGE)]}],
        }
    )
    resolver = make_resolver(stub)

    assert await resolver.resolve_badge("Hellas Verona") == BADGE


@pytest.mark.asyncio
async def test_resolve_team_normalizes_raw_name(make_resolver):
    stub = SportsDbStub({"Arsenal": [{"teams": [soccer_team("Arsenal", BADGE)]}]})
    resolver = make_resolver(stub)

    identity = await resolver.resolve_team("Arsenal FC")

    assert identity.canonical_name == "Arsenal"
    assert identity.badge_url == BADGE
    assert resolver.is_cached("Arsenal")


@pytest.mark.asyncio
async def test_badge_or_placeholder_for_unknown_team(make_resolver):
    resolver = make_resolver(SportsDbStub())

    image = await resolver.badge_or_placeholder("Paris Saint-Germain")

    assert image.startswith("data:image/svg+xml;base64,")
    assert resolver.ledger.list() == ["Paris Saint-Germain"]


@pytest.mark.asyncio
async def test_league_badge_is_cached(make_resolver):
    stub = SportsDbStub(leagues={"4328": {"leagues": [{"idLeague": "4328", "strBadge": BADGE}]}})
    resolver = make_resolver(stub)

    assert await resolver.resolve_league_badge(League.PREMIER_LEAGUE) == BADGE
    assert await resolver.resolve_league_badge(League.PREMIER_LEAGUE) == BADGE
    assert stub.league_lookups == ["4328"]
    assert stub.searched == []


@pytest.mark.asyncio
async def test_league_failure_is_cached_as_none(make_resolver):
    stub = SportsDbStub(leagues={"4335": 503})
    resolver = make_resolver(stub)

    assert await resolver.resolve_league_badge(League.LA_LIGA) is None
    assert await resolver.resolve_league_badge(League.LA_LIGA) is None
    assert stub.league_lookups == ["4335"]
    # Leagues never end up in the team ledger
    assert len(resolver.ledger) == 0


@pytest.mark.asyncio
async def test_relay_passes_endpoint_as_parameter():
    stub = SportsDbStub({"Lazio": [{"teams": [soccer_team("Lazio", BADGE)]}]})
    client = make_sportsdb_client(stub, relay_url="https://game.test/api/sportsdb")

    response = await client.search_teams("Lazio")
    await client.close()

    request = stub.requests[0]
    assert request.url.path == "/api/sportsdb"
    assert request.url.params["endpoint"] == "searchteams.php"
    assert request.url.params["t"] == "Lazio"
    assert response.teams[0].badge_url == BADGE


def test_pick_team_on_empty_results():
    assert pick_team([]) is None
    assert pick_team([TeamRecord(strTeam="A", strSport="Soccer", strBadge=BADGE)]).name == "A"
