"""Set algebra between the current selection and registers.

Each side is reduced to an insertion-ordered frequency map of selection keys.
Intersect and subtract against the current selection shrink the selection in
place; everything else is written to a scratch buffer.
"""

from __future__ import annotations

import argparse
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from itertools import islice
from types import MappingProxyType
from typing import Iterable, List, Optional, Sequence

from kaksel.host.source import SelectionSource
from kaksel.runtime import telemetry
from kaksel.selection.errors import ParseError, UsageError
from kaksel.selection.keys import KeyOptions, compile_regex, selection_key
from kaksel.selection.reconcile import get_selections_with_desc_ordered
from kaksel.selection.registers import Register

logger = telemetry.get_logger("kaksel.commands.set")


class Operation(str, Enum):
    INTERSECT = "&"
    SUBTRACT = "-"
    UNION = "+"
    COMPARE = "?"

    @classmethod
    def parse(cls, token: str) -> "Operation":
        try:
            return _ALIASES[token.strip().lower()]
        except KeyError:
            raise ParseError(f"Set operation '{token}' could not be parsed") from None


_ALIASES = MappingProxyType(
    {
        **dict.fromkeys(("intersect", "and", "&"), Operation.INTERSECT),
        **dict.fromkeys(("subtract", "not", "minus", "-", "\\"), Operation.SUBTRACT),
        **dict.fromkeys(("union", "or", "plus", "+"), Operation.UNION),
        **dict.fromkeys(("compare", "cmp", "?", "="), Operation.COMPARE),
    }
)


@dataclass(frozen=True, slots=True)
class SetArguments:
    left: Register
    operation: Operation
    right: Register

    def __str__(self) -> str:
        return f"{self.left}{self.operation.value}{self.right}"


def _maybe_operation(token: str) -> Optional[Operation]:
    try:
        return Operation.parse(token)
    except ParseError:
        return None


def parse_arguments(args: Sequence[str]) -> SetArguments:
    """Parse ``a-b``, ``-a``, ``a -``, or ``a - b`` style arguments.

    A missing side is the current selection (register ``_``).
    """

    tokens = list(args[0].strip()) if len(args) == 1 else list(args)

    if len(tokens) == 2:
        first, second = tokens
        first_op, second_op = _maybe_operation(first), _maybe_operation(second)
        if first_op is not None and second_op is not None:
            raise UsageError(
                f"Arguments '{first}' and '{second}' cannot both be operations"
            )
        if first_op is not None:
            parsed = SetArguments(Register("_"), first_op, Register.parse(second))
        elif second_op is not None:
            parsed = SetArguments(Register.parse(first), second_op, Register("_"))
        else:
            raise UsageError("One argument must be an operation")
    elif len(tokens) == 3:
        left, middle, right = tokens
        parsed = SetArguments(
            Register.parse(left), Operation.parse(middle), Register.parse(right)
        )
    else:
        raise UsageError("Invalid arguments to set command", detail=repr(args))

    if parsed.left == parsed.right:
        raise UsageError(f"Registers passed are the same: '{parsed.left}'")
    return parsed


def ordered_counts(contents: Iterable[str], options: KeyOptions) -> Counter[str]:
    """Key frequencies in first-seen order; empty keys are skipped."""

    counts: Counter[str] = Counter()
    for content in contents:
        key = selection_key(content, options)
        if key:
            counts[key] += 1
    return counts


def key_set_operation(
    operation: Operation, left: Sequence[str], right: Sequence[str]
) -> List[str]:
    right_keys = set(right)
    if operation is Operation.INTERSECT:
        return [key for key in left if key in right_keys]
    if operation is Operation.SUBTRACT:
        return [key for key in left if key not in right_keys]
    left_keys = set(left)
    return list(left) + [key for key in right if key not in left_keys]


def relation(left_count: int, right_count: int) -> str:
    if left_count and right_count:
        return "="
    if left_count:
        return ">"
    if right_count:
        return "<"
    return "?"


def compare_table(
    arguments: SetArguments,
    keys: Sequence[str],
    left_counts: Counter[str],
    right_counts: Counter[str],
) -> str:
    lines = [f"?\t{arguments.left}\t{arguments.right}\tselection\n"]
    for key in keys:
        left_count, right_count = left_counts[key], right_counts[key]
        symbol = relation(left_count, right_count)
        lines.append(f"{symbol}\t{left_count}\t{right_count}\t{key}\n")
    return "".join(lines)


@dataclass(slots=True)
class Options:
    args: List[str] = field(default_factory=list)
    skip_whitespace: bool = False
    regex: Optional[str] = None
    ignore_case: bool = False

    def key_options(self) -> KeyOptions:
        return KeyOptions(
            trim_whitespace=self.skip_whitespace,
            regex=compile_regex(self.regex),
            ignore_case=self.ignore_case,
        )


def configure_parser(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "args",
        nargs="+",
        metavar="ARG",
        help=(
            "Register operation and operands, e.g. 'a-b', '+b' or 'a - b'; "
            "'_' is the current selection"
        ),
    )
    parser.add_argument(
        "-s",
        "--skip-whitespace",
        action="store_true",
        help="Trim each selection before comparing",
    )
    parser.add_argument("-r", "--regex", help="Compare by this regex match")
    parser.add_argument(
        "-i", "--ignore-case", action="store_true", help="Compare case-insensitively"
    )


_FLAGS = frozenset({"-s", "--skip-whitespace", "-i", "--ignore-case", "-h", "--help"})
_VALUED_FLAGS = frozenset({"-r", "--regex"})


def fence_operands(tokens: Sequence[str]) -> List[str]:
    """Move ``set`` flags first and put the operands after ``--``.

    Operands such as ``-a`` or ``-&b`` look like options to argparse. Only
    the exact flag spellings above are kept as flags; a token like ``-si`` is
    read as an operand.
    """

    if "--" in tokens:
        return list(tokens)
    flags: List[str] = []
    operands: List[str] = []
    remaining = iter(tokens)
    for token in remaining:
        if token in _FLAGS or token.startswith("--regex="):
            flags.append(token)
        elif token in _VALUED_FLAGS:
            flags.append(token)
            flags.extend(islice(remaining, 1))
        else:
            operands.append(token)
    return [*flags, "--", *operands]


def _side_contents(source: SelectionSource, register: Register) -> List[str]:
    if register.is_current_selection:
        return source.get_selections()
    return source.get_register(register)


def _reduce_selections(
    source: SelectionSource, keys: Sequence[str], options: KeyOptions
) -> None:
    wanted = set(keys)
    source.set_selection_descs(
        [
            pair.desc
            for pair in get_selections_with_desc_ordered(source)
            if selection_key(pair.content, options) in wanted
        ]
    )


def set_operation(source: SelectionSource, options: Options) -> str:
    if len(options.args) > 3:
        raise UsageError("Expected at most 3 arguments to set")
    arguments = parse_arguments(options.args)
    key_options = options.key_options()

    left_counts = ordered_counts(_side_contents(source, arguments.left), key_options)
    right_counts = ordered_counts(
        _side_contents(source, arguments.right), key_options
    )
    result = key_set_operation(
        arguments.operation, list(left_counts), list(right_counts)
    )
    logger.debug(
        f"set {arguments}: {len(left_counts)} left keys,"
        f" {len(right_counts)} right keys -> {len(result)}"
    )

    if arguments.operation is Operation.COMPARE:
        source.write_scratch(
            compare_table(arguments, result, left_counts, right_counts)
        )
        return f"Compared {len(result)} selections"

    in_place = (
        arguments.operation in (Operation.INTERSECT, Operation.SUBTRACT)
        and arguments.left.is_current_selection
    )
    if in_place:
        _reduce_selections(source, result, key_options)
    else:
        source.write_scratch("".join(f"{key}\n" for key in result))
    return f"{arguments} returned {len(result)} selections"


__all__ = [
    "Operation",
    "SetArguments",
    "Options",
    "configure_parser",
    "fence_operands",
    "parse_arguments",
    "ordered_counts",
    "key_set_operation",
    "relation",
    "compare_table",
    "set_operation",
]
