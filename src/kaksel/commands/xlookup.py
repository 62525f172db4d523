"""Replace each selection with its value from a key/value register."""

from __future__ import annotations

import argparse
from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Tuple

from kaksel.host.source import SelectionSource
from kaksel.runtime import telemetry
from kaksel.selection.errors import UsageError
from kaksel.selection.registers import DEFAULT_REGISTER, Register

from .base import plural

logger = telemetry.get_logger("kaksel.commands.xlookup")


@dataclass(slots=True)
class Options:
    register: Register = field(default=DEFAULT_REGISTER)


def configure_parser(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "register",
        nargs="?",
        type=Register.parse,
        default=DEFAULT_REGISTER,
        help="Register holding alternating keys and values (default '\"')",
    )


def build_lookup_table(entries: Sequence[str]) -> Dict[str, str]:
    """Pair up ``key, value, key, value, ...`` entries."""

    if len(entries) % 2:
        raise UsageError("Odd number of selections")
    table: Dict[str, str] = {}
    for key, value in zip(entries[::2], entries[1::2]):
        if key in table:
            raise UsageError(f"Duplicate key '{key}'")
        table[key] = value
    if not table:
        raise UsageError("No selections")
    return table


def lookup(contents: Sequence[str], table: Dict[str, str]) -> Tuple[List[str], int]:
    """Looked-up values and the number of misses, which become empty."""

    values: List[str] = []
    misses = 0
    for content in contents:
        value = table.get(content)
        if value is None:
            logger.warning(f"Key '{content}' not found")
            misses += 1
            value = ""
        values.append(value)
    return values, misses


def xlookup(source: SelectionSource, options: Options) -> str:
    table = build_lookup_table(source.get_register_values(options.register))
    contents = source.get_selections()
    values, misses = lookup(contents, table)
    source.set_selections(values)

    if not misses:
        return f"Xlookup {len(contents)} selections"
    return f"Xlookup {len(contents) - misses} selections ({plural(misses, 'error')})"


__all__ = ["Options", "configure_parser", "build_lookup_table", "lookup", "xlookup"]
