"""
Habitica Party Damage Calculator - Console App
==============================================
Reads a party file, then prints the best buff plan for the whole party and
the best damage each member could deal on their own with full team buffs.

Usage:
    habitica-calculator [PARTY_CSV] [--verbose | --quiet] [--no-color]

Without PARTY_CSV, every .csv file in the repository is offered. Without
--verbose/--quiet, asks whether to print detailed output.
"""
import argparse
import logging
import sys
from typing import Callable, List, Optional, Sequence, TextIO

from .buff_optimizer import calculate_max_party_damage, calculate_max_single_damage
from .core import Player
from .exceptions import CalculatorError
from .job_classes import ANSI_GRAY, ANSI_RED, ANSI_RESET, ANSI_WHITE, get_ansi_color
from .party_io import find_party_files, find_repo_root, read_party, select_party_file

InputFn = Callable[[str], str]


class ConsoleWriter:
    """Prints messages in a color, or plain when color is disabled."""

    def __init__(self, stream: Optional[TextIO] = None, use_color: bool = True):
        self.stream = stream if stream is not None else sys.stdout
        self.use_color = use_color

    def write(self, message: str, color: str = "") -> None:
        if self.use_color and color:
            print(f"{color}{message}{ANSI_RESET}", file=self.stream)
        else:
            print(message, file=self.stream)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="habitica-calculator",
        description="Find the buffs that maximize a Habitica party's daily boss damage")
    parser.add_argument("party_file", nargs="?", help="Party CSV (default: search the repository)")
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", dest="verbose", action="store_true", default=None,
                           help="Print detailed player and damage information")
    verbosity.add_argument("-q", "--quiet", dest="verbose", action="store_false",
                           help="Only print the results")
    parser.add_argument("--no-color", dest="color", action="store_false", help="Disable colored output")
    parser.add_argument("--skip-invalid", action="store_true",
                        help="Skip invalid players instead of stopping")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser


def choose_party_file(console: ConsoleWriter, ask: InputFn) -> str:
    """Find candidate party files and let the user pick one if there are several."""
    candidates = find_party_files(find_repo_root())

    choice = None
    if len(candidates) > 1:
        console.write("Found the following potential party files:")
        for path in candidates:
            console.write(str(path))
        choice = ask("Please enter the desired input file, or just press enter to use the first option...\n")

    selected = select_party_file(candidates, choice)
    console.write(f"Using party file {selected}.\n")
    return str(selected)


def ask_verbose(ask: InputFn) -> bool:
    return ask("Do you want verbose output? [Y/n]: ").strip().lower() == "y"


def report(party: Sequence[Player], console: ConsoleWriter, verbose: bool = False) -> None:
    """Print member details (verbose), the party optimum, then each member's own optimum."""
    if verbose:
        for player in party:
            console.write(player.verbose_report(), get_ansi_color(player))

    if party:
        optimum = calculate_max_party_damage(party)
        console.write(optimum.summary(), ANSI_WHITE)
        if verbose:
            console.write(optimum.explain(), ANSI_GRAY)

    for player in party:
        single = calculate_max_single_damage(player, party)
        console.write(single.summary(), get_ansi_color(player))
        if verbose:
            console.write(single.explain(), ANSI_GRAY)
            console.write(single.attack.breakdown(), ANSI_GRAY)


def main(argv: Optional[List[str]] = None, ask: InputFn = input,
         stream: Optional[TextIO] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format="%(levelname)s %(name)s: %(message)s")
    console = ConsoleWriter(stream, use_color=args.color)

    try:
        party_file = args.party_file or choose_party_file(console, ask)
        party = read_party(party_file, skip_invalid=args.skip_invalid)
    except CalculatorError as e:
        console.write(e.message, ANSI_RED)
        return 1
    except OSError as e:
        console.write(f"Could not read party file: {e}", ANSI_RED)
        return 1

    verbose = args.verbose if args.verbose is not None else ask_verbose(ask)
    try:
        report(party, console, verbose)
    except CalculatorError as e:
        console.write(e.message, ANSI_RED)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
