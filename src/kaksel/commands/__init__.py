"""Subcommands and the table the CLI dispatches through."""

from __future__ import annotations

from types import MappingProxyType
from typing import Dict

from . import (
    box,
    invert,
    join,
    keep_every,
    pad,
    rev,
    set_ops,
    shuf,
    sort,
    stdin,
    trim,
    uniq,
    xlookup,
)
from .base import CommandSpec, Handler, ParserHook

_COMMANDS: Dict[str, CommandSpec] = {
    spec.name: spec
    for spec in (
        CommandSpec(
            "box",
            box.box,
            box.Options,
            "Make rectangular selections from the current ones",
            box.configure_parser,
        ),
        CommandSpec(
            "invert",
            invert.invert,
            invert.Options,
            "Select everything that is not selected",
            invert.configure_parser,
        ),
        CommandSpec(
            "join",
            join.join,
            join.Options,
            "Join all selections into one",
            join.configure_parser,
        ),
        CommandSpec(
            "keep-every",
            keep_every.keep_every,
            keep_every.Options,
            "Keep every Nth selection",
            keep_every.configure_parser,
        ),
        CommandSpec(
            "set",
            set_ops.set_operation,
            set_ops.Options,
            "Set operations between the selection and registers",
            set_ops.configure_parser,
            set_ops.fence_operands,
        ),
        CommandSpec(
            "uniq",
            uniq.uniq,
            uniq.Options,
            "Deselect duplicate selections",
            uniq.configure_parser,
        ),
        CommandSpec(
            "sort",
            sort.sort,
            sort.Options,
            "Sort selection contents",
            sort.configure_parser,
        ),
        CommandSpec(
            "trim",
            trim.trim,
            trim.Options,
            "Trim whitespace around selections",
            trim.configure_parser,
        ),
        CommandSpec(
            "rev",
            rev.rev,
            rev.Options,
            "Reverse selection contents",
            rev.configure_parser,
        ),
        CommandSpec(
            "shuf",
            shuf.shuf,
            shuf.Options,
            "Shuffle selection contents",
            shuf.configure_parser,
        ),
        CommandSpec(
            "pad",
            pad.pad,
            pad.Options,
            "Pad selections to the same width",
            pad.configure_parser,
        ),
        CommandSpec(
            "xlookup",
            xlookup.xlookup,
            xlookup.Options,
            "Look selections up in a key/value register",
            xlookup.configure_parser,
        ),
        CommandSpec(
            "stdin",
            stdin.stdin,
            stdin.Options,
            "Pipe selections through a command",
            stdin.configure_parser,
        ),
    )
}

COMMANDS = MappingProxyType(_COMMANDS)


def get_command(name: str) -> CommandSpec:
    return COMMANDS[name]


__all__ = ["COMMANDS", "CommandSpec", "Handler", "ParserHook", "get_command"]
