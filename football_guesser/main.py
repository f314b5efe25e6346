import sys
import argparse
import asyncio
from pathlib import Path
from typing import List, Optional, Sequence

# --- Settings/Logging ---
from football_guesser.logging.setup import setup_logging
from football_guesser.config.settings import settings

setup_logging()

from loguru import logger

from football_guesser.badges.placeholder import synthesize_placeholder
from football_guesser.badges.resolver import BadgeResolver
from football_guesser.clients.base_client import ApiClientError
from football_guesser.clients.football_data_client import FootballDataClient
from football_guesser.clients.sportsdb_client import SportsDbClient
from football_guesser.game.art import MatchArt, TeamArt, fetch_match_art, format_match_date
from football_guesser.game.quiz import QuizError, QuizSession, Round
from football_guesser.loaders.match_loader import MatchLoader
from football_guesser.models.enums import ALL_LEAGUES, DataSource, League, QuizState
from football_guesser.models.match import Match

from rich import print
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm, IntPrompt, Prompt
from rich.table import Table

console = Console()


def build_sportsdb_client() -> SportsDbClient:
    relay_url = (
        settings.sportsdb_relay_url
        if settings.data_source == DataSource.SPORTSDB_PROXY
        else None
    )
    return SportsDbClient(relay_url=relay_url)


def write_missing_report(resolver: BadgeResolver, path: Path) -> None:
    if len(resolver.ledger) == 0:
        logger.info("Every team had a badge, no missing-team report written.")
        return
    resolver.ledger.write(path)
    print(f"[yellow]{len(resolver.ledger)} team(s) without a badge, report written to {path}[/yellow]")


def _art_line(art: TeamArt) -> str:
    if art.is_placeholder:
        return f"[bold]{art.name}[/bold]  [dim](placeholder {art.initials})[/dim]"
    return f"[bold]{art.name}[/bold]  [dim]{art.image}[/dim]"


def render_round(round_: Round, art: MatchArt, score: int) -> Panel:
    match = round_.match
    lines = [
        f"{match.flag} {match.league.value}"
        + (f"  [dim]{art.league_badge}[/dim]" if art.league_badge else ""),
        format_match_date(match.match_date),
        "",
        f"Home: {_art_line(art.home)}",
        f"Away: {_art_line(art.away)}",
    ]
    return Panel(
        "\n".join(lines),
        title=f"Round {round_.number}/{round_.total_rounds}",
        subtitle=f"Score: {score}",
    )


def choose_selection(session: QuizSession) -> None:
    counts = session.league_counts()
    table = Table(title="Leagues")
    table.add_column("League")
    table.add_column("Matches", justify="right")
    for name, count in counts.items():
        table.add_row(name, str(count))
    console.print(table)

    choices = [name for name, count in counts.items() if count]
    league_name = Prompt.ask("Pick a league", choices=choices, default=ALL_LEAGUES)
    session.select_league(league_name)
    if session.state != QuizState.TEAM_SELECTION:
        return

    teams = session.teams_for_league(session.selected_league)
    print(", ".join(team.name for team in teams))
    team_names = [team.name for team in teams]
    team_name = Prompt.ask("Pick a team", choices=["all", *team_names], default="all")
    session.select_team(None if team_name == "all" else team_name)


async def play_rounds(session: QuizSession, resolver: BadgeResolver, first: Round) -> None:
    round_: Optional[Round] = first
    while round_ is not None:
        art = await fetch_match_art(resolver, round_.match)
        console.print(render_round(round_, art, session.score))
        home_goals = IntPrompt.ask(f"{round_.match.home} goals", default=0)
        away_goals = IntPrompt.ask(f"{round_.match.away} goals", default=0)
        result = session.submit_guess(max(home_goals, 0), max(away_goals, 0))
        style = {"excellent": "green", "good": "cyan", "okay": "yellow"}.get(result.rating, "red")
        print(
            f"Actual result: [bold]{result.actual_home} - {result.actual_away}[/bold]  "
            f"[{style}]{result.message}[/{style}]"
        )
        round_ = session.next_round()

    summary = session.final_summary()
    console.print(
        Panel(
            f"Final score: [bold]{summary.score}[/bold] / {summary.max_score}\n{summary.message}",
            title="Game over",
        )
    )


async def load_matches(sportsdb: SportsDbClient, leagues: Optional[Sequence[League]]) -> List[Match]:
    if settings.data_source == DataSource.FOOTBALL_DATA:
        async with FootballDataClient() as football_data:
            loader = MatchLoader(settings.data_source, settings.season, football_data=football_data)
            return await loader.load(leagues)
    loader = MatchLoader(settings.data_source, settings.season, sportsdb=sportsdb)
    return await loader.load(leagues)


async def run_game(rounds: Optional[int], report: Path) -> int:
    """Loads the season and runs interactive games until the player stops."""
    async with build_sportsdb_client() as sportsdb:
        resolver = BadgeResolver(sportsdb)
        matches = await load_matches(sportsdb, None)
        if not matches:
            logger.error("No finished matches could be loaded. Exiting.")
            return 1
        logger.success(f"Loaded {len(matches)} finished matches.")

        session = QuizSession(matches, total_rounds=rounds)
        try:
            while True:
                session.show_league_selection()
                choose_selection(session)
                await play_rounds(session, resolver, session.current())
                if not Confirm.ask("Play again?", default=True):
                    break
        finally:
            write_missing_report(resolver, report)
    return 0


async def run_resolve(names: Sequence[str], report: Optional[Path]) -> int:
    """Resolves team badges for the given raw names and prints them."""
    table = Table(title="Team badges")
    table.add_column("Input")
    table.add_column("Canonical name")
    table.add_column("Badge")
    async with build_sportsdb_client() as sportsdb:
        resolver = BadgeResolver(sportsdb)
        for index, name in enumerate(names):
            if index:
                await asyncio.sleep(settings.badge_fetch_delay)
            identity = await resolver.resolve_team(name)
            badge = identity.badge_url or (
                f"placeholder {synthesize_placeholder(identity.canonical_name).initials}"
            )
            table.add_row(name, identity.canonical_name, badge)
        console.print(table)
        if report:
            write_missing_report(resolver, report)
    return 0


async def run_leagues() -> int:
    table = Table(title="League badges")
    table.add_column("League")
    table.add_column("Badge")
    async with build_sportsdb_client() as sportsdb:
        resolver = BadgeResolver(sportsdb)
        for league in League:
            badge = await resolver.resolve_league_badge(league)
            table.add_row(f"{league.flag} {league.value}", badge or "-")
    console.print(table)
    return 0


def positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="football-guesser", description="Guess the score of real football matches."
    )
    subparsers = parser.add_subparsers(dest="command")

    play = subparsers.add_parser("play", help="Play the guessing game (default).")
    play.add_argument("--rounds", type=positive_int, default=None, help="Rounds per game.")
    play.add_argument(
        "--report",
        type=Path,
        default=settings.missing_teams_report,
        help="Where to write the missing-team report.",
    )

    resolve = subparsers.add_parser("resolve", help="Resolve team badges by name.")
    resolve.add_argument("names", nargs="+", help="Team names as found in match data.")
    resolve.add_argument("--report", type=Path, default=None, help="Write the missing-team report here.")

    subparsers.add_parser("leagues", help="Show the league badges.")
    return parser


async def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for the application."""
    args = build_parser().parse_args(argv)
    command = args.command or "play"
    logger.debug(f"Running '{command}' with data source {settings.data_source.value}")

    try:
        if command == "resolve":
            return await run_resolve(args.names, args.report)
        if command == "leagues":
            return await run_leagues()
        rounds = getattr(args, "rounds", None)
        report = getattr(args, "report", settings.missing_teams_report)
        return await run_game(rounds, report)
    except QuizError as e:
        print(Panel(f"[red]{e}[/red]", title="Cannot continue"))
        return 1
    except ApiClientError as e:
        logger.error(f"Upstream API error: {e}")
        return 1


def run() -> None:
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        logger.info("Execution interrupted by user (KeyboardInterrupt).")
        sys.exit(0)
    except Exception as e:
        logger.exception(f"Unhandled exception in main execution: {e}")
        sys.exit(1)


if __name__ == "__main__":
    run()
