"""Select everything in the document that is not currently selected."""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from itertools import groupby
from typing import Dict, List, Sequence

from kaksel.host.source import Scope, SelectionSource
from kaksel.runtime import telemetry
from kaksel.selection.position import SelectionDesc

from .box import line_scope

logger = telemetry.get_logger("kaksel.commands.invert")


@dataclass(slots=True)
class Options:
    no_newline: bool = False


def configure_parser(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-n",
        "--no-newline",
        action="store_true",
        help="Exclude trailing newlines from the inverted rows",
    )


def subtract_all(
    row: SelectionDesc, cuts: Sequence[SelectionDesc]
) -> List[SelectionDesc]:
    """Remove every cut from a single row, left to right.

    Split products to the left of a cut are final; the remainder to the right
    is carried into the next subtraction.
    """

    pieces: List[SelectionDesc] = []
    remainder = row.sort()
    for cut in sorted(desc.sort() for desc in cuts):
        result = remainder.subtract(cut)
        if not result:
            return pieces
        if len(result) == 2:
            pieces.append(result[0])
        remainder = result[-1]
    pieces.append(remainder)
    return pieces


def invert_rows(
    rows: Sequence[SelectionDesc], selections: Sequence[SelectionDesc]
) -> List[SelectionDesc]:
    """Complement of ``selections`` (each on one row) within ``rows``."""

    ordered = sorted(desc.sort() for desc in selections)
    cuts_by_row: Dict[int, List[SelectionDesc]] = {
        row: list(group)
        for row, group in groupby(ordered, key=lambda desc: desc.left.row)
    }

    inverted: List[SelectionDesc] = []
    for row in sorted(desc.sort() for desc in rows):
        cuts = cuts_by_row.get(row.left.row)
        if cuts:
            inverted.extend(subtract_all(row, cuts))
        else:
            inverted.append(row)
    return inverted


def invert(source: SelectionSource, options: Options) -> str:
    selections = source.get_selection_descs(Scope.SPLIT_LINES)
    rows = source.get_selection_descs(line_scope(options.no_newline))

    inverted = invert_rows(rows, selections)
    logger.debug(
        f"invert: {len(selections)} row pieces over {len(rows)} rows"
        f" -> {len(inverted)}"
    )

    source.set_selection_descs(inverted)
    return f"Inverted {len(inverted)} selection(s)"


__all__ = ["Options", "configure_parser", "subtract_all", "invert_rows", "invert"]
