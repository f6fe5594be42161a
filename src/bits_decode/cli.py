"""BITS Decode - Transmission runner."""
from __future__ import annotations

import json
from pathlib import Path

import click

from bits_core.errors import BitsError
from bits_core.protocol import DEFAULT_INPUT_PATH, DEFAULT_MAX_DEPTH

from .analysis import evaluate, sum_versions
from .parser import decode

CANONICAL_JSON_KW = {"sort_keys": True, "separators": (",", ":"), "ensure_ascii": False}

input_argument = click.argument(
    "input_path",
    metavar="INPUT",
    required=False,
    default=DEFAULT_INPUT_PATH,
    type=click.Path(dir_okay=False, path_type=Path),
)
max_depth_option = click.option(
    "--max-depth",
    type=click.IntRange(min=1),
    default=DEFAULT_MAX_DEPTH,
    show_default=True,
    help="Maximum operator nesting accepted",
)


def _run(input_path: Path, max_depth: int, tally) -> None:
    try:
        text = input_path.read_text(encoding="utf-8")
        click.echo(tally(decode(text, max_depth)))
    except (OSError, UnicodeDecodeError, BitsError) as e:
        # Fail closed, with a single-line reason.
        click.echo(f"FATAL: {e}", err=True)
        raise SystemExit(1)


@click.group()
def main():
    """Decode BITS transmissions."""


@main.command("part1")
@input_argument
@max_depth_option
def part1_cmd(input_path: Path, max_depth: int):
    """Print the sum of all packet versions."""
    _run(input_path, max_depth, sum_versions)


@main.command("part2")
@input_argument
@max_depth_option
def part2_cmd(input_path: Path, max_depth: int):
    """Print the value of the transmission."""
    _run(input_path, max_depth, evaluate)


@main.command("dump")
@input_argument
@max_depth_option
def dump_cmd(input_path: Path, max_depth: int):
    """Print the decoded packet tree as JSON."""
    _run(input_path, max_depth, lambda p: json.dumps(p.to_dict(), **CANONICAL_JSON_KW))


if __name__ == "__main__":
    main()
