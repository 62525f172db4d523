"""Keep the first selection out of every ``N``."""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from typing import List, Sequence, TypeVar

from kaksel.host.source import SelectionSource
from kaksel.selection.errors import UsageError

T = TypeVar("T")


@dataclass(slots=True)
class Options:
    n: int = 2


def configure_parser(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("n", type=int, metavar="N", help="Chunk size (at least 2)")


def keep_every_nth(items: Sequence[T], n: int) -> List[T]:
    if n < 2:
        raise UsageError(f"N must be at least 2, got {n}")
    return list(items[::n])


def keep_every(source: SelectionSource, options: Options) -> str:
    descs = source.get_selection_descs()
    kept = keep_every_nth(descs, options.n)
    source.set_selection_descs(kept)
    return f"{len(kept)} kept from {len(descs)}"


__all__ = ["Options", "configure_parser", "keep_every_nth", "keep_every"]
