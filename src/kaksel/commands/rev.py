"""Reverse the order of selection contents."""

from __future__ import annotations

import argparse
from dataclasses import dataclass

from kaksel.host.source import SelectionSource


@dataclass(slots=True)
class Options:
    pass


def configure_parser(parser: argparse.ArgumentParser) -> None:
    del parser


def rev(source: SelectionSource, options: Options) -> str:
    del options
    contents = source.get_selections()
    source.set_selections(contents[::-1])
    return f"Reversed {len(contents)} selections"


__all__ = ["Options", "configure_parser", "rev"]
