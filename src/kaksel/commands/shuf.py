"""Shuffle selection contents."""

from __future__ import annotations

import argparse
import random
from dataclasses import dataclass
from typing import Optional

from kaksel.host.source import SelectionSource


@dataclass(slots=True)
class Options:
    seed: Optional[int] = None


def configure_parser(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--seed", type=int, help="Seed the shuffle for a repeatable order"
    )


def shuf(source: SelectionSource, options: Options) -> str:
    contents = source.get_selections()
    random.Random(options.seed).shuffle(contents)
    source.set_selections(contents)
    return f"Shuf {len(contents)} selections"


__all__ = ["Options", "configure_parser", "shuf"]
