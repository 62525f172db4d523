"""Pad selections to a common width."""

from __future__ import annotations

import argparse
import re
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from kaksel.host.source import SelectionSource
from kaksel.selection.errors import UsageError

from .base import require_any

_NEWLINE_RUNS = re.compile(r"\A(\n*)(.*?)(\n*)\Z", re.DOTALL)


def split_newlines(text: str) -> Tuple[str, str, str]:
    """Split into leading newlines, body, and trailing newlines."""

    match = _NEWLINE_RUNS.match(text)
    assert match is not None
    return match.group(1), match.group(2), match.group(3)


@dataclass(slots=True)
class Options:
    fill: str = "0"
    right: bool = False


def configure_parser(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "fill", nargs="?", default="0", help="Pad with this character (default 0)"
    )
    parser.add_argument(
        "-r", "--right", action="store_true", help="Pad on the right instead"
    )


def pad_contents(contents: Sequence[str], options: Options) -> Tuple[List[str], int]:
    """Padded contents and how many of them were padded."""

    if len(options.fill) != 1:
        raise UsageError(f"Fill must be a single character, got '{options.fill}'")
    require_any(contents)

    parts = [split_newlines(content) for content in contents]
    width = max(len(body) for _, body, _ in parts)

    padded: List[str] = []
    count = 0
    for content, (leading, body, trailing) in zip(contents, parts):
        missing = width - len(body)
        if missing <= 0:
            padded.append(content)
            continue
        count += 1
        fill = options.fill * missing
        body = body + fill if options.right else fill + body
        padded.append(f"{leading}{body}{trailing}")
    return padded, count


def pad(source: SelectionSource, options: Options) -> str:
    contents = source.get_selections()
    padded, count = pad_contents(contents, options)
    source.set_selections(padded)
    return f"Padded {count} selections ({len(contents)} total)"


__all__ = ["Options", "configure_parser", "split_newlines", "pad_contents", "pad"]
