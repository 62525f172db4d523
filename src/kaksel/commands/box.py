"""Turn selections into row-by-row rectangles clipped to line content."""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from functools import reduce
from typing import Dict, List, Sequence

from kaksel.host.source import Scope, SelectionSource
from kaksel.runtime import telemetry
from kaksel.selection.errors import ConsistencyError
from kaksel.selection.position import SelectionDesc

from .base import require_any

logger = telemetry.get_logger("kaksel.commands.box")


@dataclass(slots=True)
class Options:
    bounding_box: bool = False
    no_newline: bool = False


def configure_parser(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-b",
        "--bounding-box",
        action="store_true",
        help="Collapse all selections into their bounding box first",
    )
    parser.add_argument(
        "-n",
        "--no-newline",
        action="store_true",
        help="Exclude trailing newlines from each row",
    )


def line_scope(no_newline: bool) -> Scope:
    return Scope.DOCUMENT_LINES_NO_NEWLINE if no_newline else Scope.DOCUMENT_LINES


def rows_by_index(descs: Sequence[SelectionDesc]) -> Dict[int, SelectionDesc]:
    """Index whole-row descriptors by the row they cover."""

    rows: Dict[int, SelectionDesc] = {}
    for desc in descs:
        ordered = desc.sort()
        if ordered.row_span() != 1:
            raise ConsistencyError(
                f"Expected a single-row selection, got {desc}",
            )
        rows[ordered.left.row] = ordered
    return rows


def box_selections(
    selections: Sequence[SelectionDesc],
    rows: Dict[int, SelectionDesc],
    *,
    skip_missing_rows: bool = False,
) -> List[SelectionDesc]:
    """Clip every selection's column range against each row it spans.

    Missing rows raise ``ConsistencyError`` unless ``skip_missing_rows`` is
    set; rows without content are absent when newlines are excluded.
    """

    boxed: List[SelectionDesc] = []
    for selection in selections:
        ordered = selection.sort()
        leftmost = min(ordered.left.col, ordered.right.col)
        rightmost = max(ordered.left.col, ordered.right.col)
        for row in range(ordered.left.row, ordered.right.row + 1):
            whole_row = rows.get(row)
            if whole_row is None:
                if skip_missing_rows:
                    continue
                raise ConsistencyError(
                    f"Row {row} not found in whole-row split",
                    detail=f"while boxing {selection}",
                )
            column_range = SelectionDesc.from_coords(row, leftmost, row, rightmost)
            hit = whole_row.intersect(column_range)
            if hit is not None:
                boxed.append(hit)
    return boxed


def box(source: SelectionSource, options: Options) -> str:
    selections = source.get_selection_descs()
    require_any(selections)

    if options.bounding_box:
        selections = [
            reduce(lambda acc, desc: acc.bounding_selection(desc), selections)
        ]

    rows = rows_by_index(source.get_selection_descs(line_scope(options.no_newline)))
    boxed = box_selections(selections, rows, skip_missing_rows=options.no_newline)
    logger.debug(f"box: {len(selections)} selections -> {len(boxed)} rows")

    source.set_selection_descs(boxed)
    return f"Boxed {len(boxed)} selection(s)"


__all__ = [
    "Options",
    "configure_parser",
    "line_scope",
    "rows_by_index",
    "box_selections",
    "box",
]
