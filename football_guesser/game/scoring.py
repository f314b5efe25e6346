from football_guesser.models.enums import MatchOutcome

EXACT_SCORE_POINTS = 10
GOAL_DIFFERENCE_POINTS = 7
OUTCOME_POINTS = 5
ONE_SCORE_POINTS = 3
MAX_POINTS_PER_ROUND = EXACT_SCORE_POINTS


def outcome_of(home_goals: int, away_goals: int) -> MatchOutcome:
    if home_goals > away_goals:
        return MatchOutcome.HOME
    if home_goals < away_goals:
        return MatchOutcome.AWAY
    return MatchOutcome.DRAW


def calculate_points(
    guessed_home: int, guessed_away: int, actual_home: int, actual_away: int
) -> int:
    """Points for a guess, best matching tier only.

    10 exact score, 7 correct goal difference (and therefore outcome),
    5 correct outcome, 3 one side's goals right, 0 otherwise.
    """
    if guessed_home == actual_home and guessed_away == actual_away:
        return EXACT_SCORE_POINTS

    guessed_outcome = outcome_of(guessed_home, guessed_away)
    actual_outcome = outcome_of(actual_home, actual_away)

    if (
        guessed_home - guessed_away == actual_home - actual_away
        and guessed_outcome == actual_outcome
    ):
        return GOAL_DIFFERENCE_POINTS
    if guessed_outcome == actual_outcome:
        return OUTCOME_POINTS
    if guessed_home == actual_home or guessed_away == actual_away:
        return ONE_SCORE_POINTS
    return 0


RESULT_MESSAGES = {
    EXACT_SCORE_POINTS: ("Perfect! Exact score!", "excellent"),
    GOAL_DIFFERENCE_POINTS: ("Great! Correct goal difference!", "excellent"),
    OUTCOME_POINTS: ("Good! Correct result!", "good"),
    ONE_SCORE_POINTS: ("Not bad! One score correct!", "okay"),
}


def result_message(points: int) -> tuple[str, str]:
    """Feedback line and its rating class for the points of one round."""
    text, rating = RESULT_MESSAGES.get(points, ("Wrong guess!", "poor"))
    return f"{text} +{points} points", rating


def performance_message(score: int, total_rounds: int) -> str:
    max_score = total_rounds * MAX_POINTS_PER_ROUND
    percentage = (score / max_score) * 100 if max_score else 0
    if percentage >= 80:
        return "Outstanding! You're a football expert!"
    if percentage >= 60:
        return "Great job! You know your football!"
    if percentage >= 40:
        return "Good effort! Keep practicing!"
    return "Room for improvement! Try again!"
