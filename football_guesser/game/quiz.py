import random
from typing import Dict, List, Optional, Sequence

from loguru import logger
from pydantic import BaseModel

from football_guesser.config.settings import settings
from football_guesser.models.enums import ALL_LEAGUES, League, QuizState
from football_guesser.models.match import Match
from football_guesser.models.team import TeamRef
from .scoring import (
    MAX_POINTS_PER_ROUND,
    calculate_points,
    performance_message,
    result_message,
)


class QuizError(Exception):
    """Base exception for quiz flow errors."""

    pass


class QuizStateError(QuizError):
    """Raised when an operation is not allowed in the current state."""

    pass


class NoPlayableMatchError(QuizError):
    """Raised when no playable match can be drawn for the current selection."""

    pass


class Round(BaseModel):
    number: int
    total_rounds: int
    match: Match


class GuessResult(BaseModel):
    guessed_home: int
    guessed_away: int
    actual_home: int
    actual_away: int
    points: int
    message: str
    rating: str
    total_score: int


class GameSummary(BaseModel):
    score: int
    max_score: int
    message: str


def is_playable(match: Match) -> bool:
    return bool(match.home and match.away) and match.home != match.away


class QuizSession:
    """Round-based guessing game over a fixed list of finished matches.

    States: LEAGUE_SELECTION -> TEAM_SELECTION -> GUESSING <-> REVEALED -> GAME_OVER.
    Picking "All Leagues" skips team selection.
    """

    def __init__(
        self,
        matches: Sequence[Match],
        total_rounds: Optional[int] = None,
        max_match_attempts: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ):
        self.matches: List[Match] = list(matches)
        self.total_rounds = settings.total_rounds if total_rounds is None else total_rounds
        self.max_match_attempts = (
            settings.max_match_attempts if max_match_attempts is None else max_match_attempts
        )
        if self.total_rounds < 1:
            raise ValueError(f"total_rounds must be at least 1, got {self.total_rounds}")
        if self.max_match_attempts < 1:
            raise ValueError(f"max_match_attempts must be at least 1, got {self.max_match_attempts}")
        self.rng = rng or random.Random()

        self.state = QuizState.LEAGUE_SELECTION
        self.selected_league: Optional[League] = None
        self.selected_team: Optional[str] = None
        self.available_matches: List[Match] = []
        self.current_round = 0
        self.score = 0
        self.current_match: Optional[Match] = None
        self._used: List[int] = []  # indices into available_matches

    def _require(self, *states: QuizState) -> None:
        if self.state not in states:
            allowed = ", ".join(state.value for state in states)
            raise QuizStateError(f"Not allowed in state {self.state.value} (expected {allowed})")

    def league_counts(self) -> Dict[str, int]:
        counts: Dict[str, int] = {league.value: 0 for league in League}
        for match in self.matches:
            counts[match.league.value] += 1
        counts[ALL_LEAGUES] = len(self.matches)
        return counts

    def show_league_selection(self) -> None:
        """Returns to league selection from any state, clearing selections."""
        self.state = QuizState.LEAGUE_SELECTION
        self.selected_league = None
        self.selected_team = None

    def select_league(self, league_name: str) -> QuizState:
        """Selects a league, or "All Leagues" which starts the game right away."""
        self._require(QuizState.LEAGUE_SELECTION)
        if league_name == ALL_LEAGUES:
            self.selected_league = None
            self.selected_team = None
            self.available_matches = list(self.matches)
            logger.debug(f"All leagues selected: {len(self.available_matches)} matches")
            self.start_new_game()
            return self.state

        self.selected_league = League(league_name)
        self.state = QuizState.TEAM_SELECTION
        return self.state

    def teams_for_league(self, league: League) -> List[TeamRef]:
        """Distinct teams of a league sorted by name."""
        teams: Dict[str, TeamRef] = {}
        for match in self.matches:
            if match.league != league:
                continue
            for team in (match.home_team, match.away_team):
                teams.setdefault(team.team_id or team.name, team)
        return sorted(teams.values(), key=lambda team: team.name.lower())

    def select_team(self, team_name: Optional[str]) -> QuizState:
        """Restricts the game to one team of the selected league; None plays them all."""
        self._require(QuizState.TEAM_SELECTION)
        self.selected_team = team_name
        league_matches = [m for m in self.matches if m.league == self.selected_league]
        if team_name is None:
            self.available_matches = league_matches
        else:
            self.available_matches = [m for m in league_matches if m.involves(team_name)]
        logger.debug(
            f"Selected {team_name or 'all teams'} in {self.selected_league.value}: "
            f"{len(self.available_matches)} matches"
        )
        self.start_new_game()
        return self.state

    def start_new_game(self) -> Round:
        """Resets score and rounds and plays the first round."""
        self._require(
            QuizState.LEAGUE_SELECTION, QuizState.TEAM_SELECTION, QuizState.GAME_OVER
        )
        if not self.available_matches:
            raise NoPlayableMatchError("No matches available for the current selection.")
        self.score = 0
        self._used = []
        self.current_match = self._draw_match()
        self.current_round = 1
        self.state = QuizState.GUESSING
        return self.current()

    def _draw_match(self) -> Match:
        for _ in range(self.max_match_attempts):
            unused = [i for i in range(len(self.available_matches)) if i not in self._used]
            if not unused:
                # Every match was played once: start over
                self._used = []
                index = self.rng.randrange(len(self.available_matches))
            else:
                index = self.rng.choice(unused)
                self._used.append(index)
            match = self.available_matches[index]
            if is_playable(match):
                return match
            logger.debug(f"Skipping unplayable match {match.description}")
        raise NoPlayableMatchError(
            f"No playable match found after {self.max_match_attempts} attempts."
        )

    def next_round(self) -> Optional[Round]:
        """Draws the next match; returns None and ends the game after the last round."""
        self._require(QuizState.REVEALED)
        if self.current_round >= self.total_rounds:
            self.state = QuizState.GAME_OVER
            logger.info(f"Game over with {self.score} points")
            return None

        self.current_match = self._draw_match()
        self.current_round += 1
        self.state = QuizState.GUESSING
        return self.current()

    def current(self) -> Optional[Round]:
        """The round waiting for a guess, if any."""
        if self.state != QuizState.GUESSING:
            return None
        return Round(
            number=self.current_round,
            total_rounds=self.total_rounds,
            match=self.current_match,
        )

    def submit_guess(self, home_goals: int, away_goals: int) -> GuessResult:
        self._require(QuizState.GUESSING)
        if home_goals < 0 or away_goals < 0:
            raise ValueError("Goals cannot be negative.")
        match = self.current_match
        points = calculate_points(home_goals, away_goals, match.home_score, match.away_score)
        self.score += points
        self.state = QuizState.REVEALED
        message, rating = result_message(points)
        return GuessResult(
            guessed_home=home_goals,
            guessed_away=away_goals,
            actual_home=match.home_score,
            actual_away=match.away_score,
            points=points,
            message=message,
            rating=rating,
            total_score=self.score,
        )

    def final_summary(self) -> GameSummary:
        self._require(QuizState.GAME_OVER)
        return GameSummary(
            score=self.score,
            max_score=self.total_rounds * MAX_POINTS_PER_ROUND,
            message=performance_message(self.score, self.total_rounds),
        )
