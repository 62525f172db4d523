"""Sort selection contents by key, keeping selection positions."""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from natsort import natsort_keygen

from kaksel.host.source import SelectionSource
from kaksel.selection.keys import KeyOptions, compile_regex, selection_key

# digit runs compare by value, so ``a2`` sorts before ``a10``
natural_key = natsort_keygen()


@dataclass(slots=True)
class Options:
    regex: Optional[str] = None
    no_skip_whitespace: bool = False
    no_lexicographic_sort: bool = False
    reverse: bool = False
    ignore_case: bool = False

    def key_options(self) -> KeyOptions:
        return KeyOptions(
            trim_whitespace=not self.no_skip_whitespace,
            regex=compile_regex(self.regex),
            ignore_case=self.ignore_case,
        )


def configure_parser(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("regex", nargs="?", help="Optional regex comparison key")
    parser.add_argument(
        "-S",
        "--no-skip-whitespace",
        action="store_true",
        help="Compare untrimmed selections",
    )
    parser.add_argument(
        "-L",
        "--no-lexicographic-sort",
        action="store_true",
        help="Compare numbers as plain text",
    )
    parser.add_argument("-r", "--reverse", action="store_true", help="Reverse order")
    parser.add_argument(
        "-i", "--ignore-case", action="store_true", help="Ignore case when sorting"
    )


def sorted_contents(contents: Sequence[str], options: Options) -> List[str]:
    key_options = options.key_options()
    order: Callable[[str], object] = (
        (lambda key: key) if options.no_lexicographic_sort else natural_key
    )
    return sorted(
        contents,
        key=lambda content: order(selection_key(content, key_options)),
        reverse=options.reverse,
    )


def sort(source: SelectionSource, options: Options) -> str:
    contents = sorted_contents(source.get_selections(), options)
    source.set_selections(contents)
    return f"Sorted {len(contents)} selections"


__all__ = ["Options", "configure_parser", "natural_key", "sorted_contents", "sort"]
