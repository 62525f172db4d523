"""Strip surrounding whitespace from each selection."""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from kaksel.host.source import SelectionSource


@dataclass(slots=True)
class Options:
    left: bool = False
    right: bool = False
    no_preserve_newline: bool = False


def configure_parser(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-l", "--left", action="store_true", help="Trim the left only"
    )
    parser.add_argument(
        "-r", "--right", action="store_true", help="Trim the right only"
    )
    parser.add_argument(
        "-n",
        "--no-preserve-newline",
        action="store_true",
        help="Also drop the trailing newline",
    )


def trim_one(content: str, options: Options) -> str:
    if options.left == options.right:
        trimmed = content.strip()
    elif options.left:
        trimmed = content.lstrip()
    else:
        trimmed = content.rstrip()

    if not options.no_preserve_newline and content.endswith("\n"):
        if not trimmed.endswith("\n"):
            trimmed += "\n"
    return trimmed


def trim_contents(contents: Sequence[str], options: Options) -> Tuple[List[str], int]:
    """Trimmed contents and how many of them changed."""

    trimmed = [trim_one(content, options) for content in contents]
    changed = sum(1 for old, new in zip(contents, trimmed) if old != new)
    return trimmed, changed


def trim(source: SelectionSource, options: Options) -> str:
    contents = source.get_selections()
    trimmed, changed = trim_contents(contents, options)
    source.set_selections(trimmed)
    return f"Trimmed {len(contents)} selections ({changed} changed)"


__all__ = ["Options", "configure_parser", "trim_one", "trim_contents", "trim"]
