from pathlib import Path

import pytest

from football_guesser.main import build_parser


def test_resolve_command_arguments():
    args = build_parser().parse_args(["resolve", "Arsenal FC", "Hellas Verona", "--report", "out.txt"])

    assert args.command == "resolve"
    assert args.names == ["Arsenal FC", "Hellas Verona"]
    assert args.report == Path("out.txt")


def test_play_is_the_default_command():
    args = build_parser().parse_args([])
    assert args.command is None

    args = build_parser().parse_args(["play", "--rounds", "5"])
    assert args.rounds == 5


@pytest.mark.parametrize("rounds", ["0", "-2", "three"])
def test_rounds_must_be_a_positive_integer(rounds):
    with pytest.raises(SystemExit):
        build_parser().parse_args(["play", "--rounds", rounds])
