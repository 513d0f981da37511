"""Command-line entry point for the crossword grid generator."""

from __future__ import annotations

import sys
import time

from .mtrand import MersenneTwister
from .solver import CELLS_MAX, ChoicesRound, Generator, GridSettings, Heuristic, Option
from .trie import DictionaryError, load_dictionary


def _expected_parameters() -> str:
    lines = [
        "Parameters expected on the standard input:",
        "- Number of rows (> 0)",
        f"- Number of columns (>= Number of rows, Number of cells <= {CELLS_MAX})",
        "- Minimum number of black squares (>= 0)",
        "- Maximum number of black squares (>= Minimum number of black squares, <= Number of cells)",
        f"- Heuristic ({Heuristic.WEIGHT.value}: weight, "
        f"{Heuristic.WEIGHTED_SHUFFLE.value}: weighted shuffle, "
        f"{Heuristic.SHUFFLE.value}: shuffle, > {Heuristic.SHUFFLE.value}: none)",
        "- Options (= sum of the below flags)",
        f"\t- Symmetric black squares (0: disabled, {Option.SYM_BLACKS.value}: enabled)",
        f"\t- Connected white squares (0: disabled, {Option.CONNECTED_WHITES.value}: enabled)",
        f"\t- Linear black squares (0: disabled, {Option.LINEAR_BLACKS.value}: enabled)",
        f"\t- Iterative choices (0: disabled, {Option.ITERATIVE_CHOICES.value}: enabled)",
        "- [ RNG seed ]",
    ]
    return "\n".join(lines) + "\n"


def usage_text(program: str) -> str:
    """Return the usage line followed by the expected parameters."""
    return f"Usage: {program} <dictionary>\n" + _expected_parameters()


def parse_settings(text: str) -> GridSettings:
    """Parse and validate grid settings read from whitespace-separated text."""
    tokens = text.split()
    try:
        values = [int(token) for token in tokens[:6]]
    except ValueError as exc:
        raise ValueError("Invalid grid settings") from exc
    if len(values) != 6:
        raise ValueError("Invalid grid settings")
    rows, cols, blacks_min, blacks_max, heuristic, options = values
    if heuristic < 0:
        heuristic &= 0xFFFFFFFF
    seed = None
    if len(tokens) > 6:
        try:
            seed = int(tokens[6])
        except ValueError:
            seed = None
    settings = GridSettings(rows, cols, blacks_min, blacks_max, heuristic, options, seed)
    settings.validate()
    return settings


def main(argv: list[str] | None = None) -> int:
    """Generate grids for settings read from standard input."""
    if argv is None:
        argv = sys.argv[1:]
    if len(argv) != 1:
        sys.stderr.write(usage_text("crossgrid"))
        return 1
    try:
        settings = parse_settings(sys.stdin.read())
    except ValueError:
        sys.stderr.write("Invalid grid settings\n" + _expected_parameters())
        return 1
    try:
        trie = load_dictionary(argv[0], settings.rows, settings.cols, settings.blacks_max)
    except DictionaryError as exc:
        sys.stderr.write(f"{exc}\n")
        return 1
    seed = settings.seed if settings.seed is not None else int(time.time())
    generator = Generator(settings, trie, MersenneTwister(seed))
    needed = settings.rows * settings.cols * 4 + 1000
    if sys.getrecursionlimit() < needed:
        sys.setrecursionlimit(needed)
    for event in generator.run():
        if isinstance(event, ChoicesRound):
            print(f"CHOICES {event.choices_max}", flush=True)
        else:
            print(event.render(), flush=True)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())