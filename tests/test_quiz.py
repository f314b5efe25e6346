import random
from datetime import date

import pytest

from football_guesser.game.quiz import NoPlayableMatchError, QuizSession, QuizStateError
from football_guesser.models.enums import ALL_LEAGUES, League, QuizState
from football_guesser.models.match import Match
from football_guesser.models.team import TeamRef


def make_match(league, home, away, home_score=1, away_score=0):
    return Match(
        league=league,
        home_team=TeamRef(name=home, team_id=home.lower()),
        away_team=TeamRef(name=away, team_id=away.lower()),
        home_score=home_score,
        away_score=away_score,
        match_date=date(2025, 1, 5),
    )


@pytest.fixture
def matches():
    return [
        make_match(League.PREMIER_LEAGUE, "Arsenal", "Chelsea", 2, 1),
        make_match(League.PREMIER_LEAGUE, "Chelsea", "Everton", 0, 0),
        make_match(League.PREMIER_LEAGUE, "Everton", "Arsenal", 1, 3),
        make_match(League.SERIE_A, "Lazio", "Roma", 1, 1),
    ]


def test_league_counts(matches):
    counts = QuizSession(matches).league_counts()

    assert counts[League.PREMIER_LEAGUE.value] == 3
    assert counts[League.SERIE_A.value] == 1
    assert counts[League.LIGUE_1.value] == 0
    assert counts[ALL_LEAGUES] == 4


def test_all_leagues_starts_game_immediately(matches):
    session = QuizSession(matches, total_rounds=3, rng=random.Random(7))

    state = session.select_league(ALL_LEAGUES)

    assert state == QuizState.GUESSING
    assert session.current().number == 1
    assert session.available_matches == matches


def test_full_game_flow(matches):
    session = QuizSession(matches, total_rounds=3, rng=random.Random(1))
    session.select_league(ALL_LEAGUES)

    seen = []
    round_ = session.current()
    while round_ is not None:
        seen.append(round_.match)
        match = round_.match
        result = session.submit_guess(match.home_score, match.away_score)
        assert result.points == 10
        round_ = session.next_round()

    assert session.state == QuizState.GAME_OVER
    assert len(set(m.description for m in seen)) == 3
    summary = session.final_summary()
    assert summary.score == 30
    assert summary.max_score == 30
    assert summary.message == "Outstanding! You're a football expert!"


def test_team_selection_filters_matches(matches):
    session = QuizSession(matches, total_rounds=2, rng=random.Random(3))

    assert session.select_league(League.PREMIER_LEAGUE.value) == QuizState.TEAM_SELECTION
    teams = session.teams_for_league(League.PREMIER_LEAGUE)
    assert [team.name for team in teams] == ["Arsenal", "Chelsea", "Everton"]

    session.select_team("Everton")
    assert all(m.involves("Everton") for m in session.available_matches)
    assert len(session.available_matches) == 2
    assert session.state == QuizState.GUESSING


def test_rounds_beyond_available_matches_reuse_them(matches):
    session = QuizSession(matches, total_rounds=5, rng=random.Random(5))
    session.select_league(League.SERIE_A.value)
    session.select_team(None)

    for _ in range(5):
        assert session.current().match.home == "Lazio"
        session.submit_guess(0, 0)
        session.next_round()

    assert session.state == QuizState.GAME_OVER


def test_guess_result_reveals_actual_score(matches):
    session = QuizSession(matches[:1], total_rounds=1)
    session.select_league(ALL_LEAGUES)

    result = session.submit_guess(1, 0)

    assert (result.actual_home, result.actual_away) == (2, 1)
    assert result.points == 7
    assert result.total_score == 7


def test_invalid_transitions(matches):
    session = QuizSession(matches, total_rounds=2)

    with pytest.raises(QuizStateError):
        session.submit_guess(1, 0)
    with pytest.raises(QuizStateError):
        session.select_team("Arsenal")

    session.select_league(ALL_LEAGUES)
    session.submit_guess(1, 0)
    with pytest.raises(QuizStateError):
        session.submit_guess(1, 0)
    with pytest.raises(QuizStateError):
        session.final_summary()


def test_negative_goals_rejected(matches):
    session = QuizSession(matches, total_rounds=1)
    session.select_league(ALL_LEAGUES)

    with pytest.raises(ValueError):
        session.submit_guess(-1, 0)


def test_empty_selection_has_no_playable_match(matches):
    session = QuizSession(matches, total_rounds=1)
    session.select_league(League.BUNDESLIGA.value)

    with pytest.raises(NoPlayableMatchError):
        session.select_team(None)


def test_unplayable_matches_give_up_after_bounded_attempts():
    broken = [make_match(League.LIGUE_1, "Lyon", "Lyon")]
    session = QuizSession(broken, total_rounds=1, max_match_attempts=3)

    with pytest.raises(NoPlayableMatchError):
        session.select_league(ALL_LEAGUES)


def test_play_again_after_game_over(matches):
    session = QuizSession(matches, total_rounds=1)
    session.select_league(ALL_LEAGUES)
    session.submit_guess(9, 9)
    session.next_round()

    round_ = session.start_new_game()

    assert round_.number == 1
    assert session.score == 0


def test_back_to_league_selection(matches):
    session = QuizSession(matches, total_rounds=1)
    session.select_league(League.PREMIER_LEAGUE.value)

    session.show_league_selection()

    assert session.state == QuizState.LEAGUE_SELECTION
    assert session.selected_league is None


@pytest.mark.parametrize("total_rounds", [0, -2])
def test_rounds_must_be_positive(matches, total_rounds):
    with pytest.raises(ValueError):
        QuizSession(matches, total_rounds=total_rounds)


def test_single_round_game_ends_after_one_guess(matches):
    session = QuizSession(matches, total_rounds=1, rng=random.Random(3))

    first = session.select_league(ALL_LEAGUES)
    session.submit_guess(0, 0)

    assert first == QuizState.GUESSING
    assert session.next_round() is None
    assert session.state == QuizState.GAME_OVER
