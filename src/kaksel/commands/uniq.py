"""Deselect duplicate selections, keeping the first of each key."""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from typing import List, Optional, Sequence

from kaksel.host.source import SelectionSource
from kaksel.runtime import telemetry
from kaksel.selection.keys import (
    KeyOptions,
    compile_regex,
    selection_hash,
    selection_key,
)
from kaksel.selection.reconcile import (
    SelectionWithDesc,
    get_selections_with_desc_ordered,
)

logger = telemetry.get_logger("kaksel.commands.uniq")


@dataclass(slots=True)
class Options:
    regex: Optional[str] = None
    ignore_case: bool = False
    no_skip_whitespace: bool = False

    def key_options(self) -> KeyOptions:
        return KeyOptions(
            trim_whitespace=not self.no_skip_whitespace,
            regex=compile_regex(self.regex),
            ignore_case=self.ignore_case,
        )


def configure_parser(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "regex", nargs="?", help="Optional regex to compare unique elements"
    )
    parser.add_argument(
        "-i", "--ignore-case", action="store_true", help="Ignore case when comparing"
    )
    parser.add_argument(
        "-S",
        "--no-skip-whitespace",
        action="store_true",
        help="Do not skip whitespace when comparing",
    )


def first_occurrences(
    selections: Sequence[SelectionWithDesc], options: KeyOptions
) -> List[Optional[SelectionWithDesc]]:
    """Keep the first selection of every key; later duplicates become ``None``.

    Selections whose key is empty never count as duplicates.
    """

    seen = set()
    kept: List[Optional[SelectionWithDesc]] = []
    for selection in selections:
        if not selection_key(selection.content, options):
            kept.append(selection)
            continue
        digest = selection_hash(selection.content, options)
        if digest in seen:
            kept.append(None)
        else:
            seen.add(digest)
            kept.append(selection)
    return kept


def uniq(source: SelectionSource, options: Options) -> str:
    selections = get_selections_with_desc_ordered(source)
    kept = first_occurrences(selections, options.key_options())

    source.set_selections(["" if item is None else item.content for item in kept])

    # emptying duplicates moves everything after them
    descs = sorted(desc.sort() for desc in source.get_selection_descs())
    source.set_selection_descs(
        [desc for desc, item in zip(descs, kept) if item is not None]
    )

    kept_count = sum(1 for item in kept if item is not None)
    logger.debug(f"uniq: kept {kept_count} of {len(kept)}")
    return f"{kept_count} unique selections out of {len(kept)}"


__all__ = ["Options", "configure_parser", "first_occurrences", "uniq"]
