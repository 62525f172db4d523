"""Merge every selection into one spanning all of them."""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from functools import reduce
from typing import Sequence

from kaksel.host.source import SelectionSource
from kaksel.selection.position import SelectionDesc

from .base import require_any


@dataclass(slots=True)
class Options:
    pass


def configure_parser(parser: argparse.ArgumentParser) -> None:
    del parser


def join_descs(descs: Sequence[SelectionDesc]) -> SelectionDesc:
    require_any(descs, "No selections to join")
    return reduce(lambda acc, desc: acc.bounding_selection(desc), descs)


def join(source: SelectionSource, options: Options) -> str:
    del options
    descs = source.get_selection_descs()
    source.set_selection_descs([join_descs(descs)])
    return f"Joined {len(descs)} selections"


__all__ = ["Options", "configure_parser", "join_descs", "join"]
