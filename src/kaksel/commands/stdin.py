"""Pipe selections through an external command."""

from __future__ import annotations

import argparse
from dataclasses import dataclass, field
from typing import List, Optional

from kaksel.config import Settings
from kaksel.host.pipe import run_external
from kaksel.host.source import SelectionSource
from kaksel.selection.errors import ChannelError


@dataclass(slots=True)
class Options:
    command: Optional[str] = None
    args: List[str] = field(default_factory=list)


def configure_parser(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "command",
        nargs="?",
        help="Program reading null-delimited records (default: $KAKSEL_PIPE_COMMAND)",
    )
    parser.add_argument(
        "args", nargs=argparse.REMAINDER, help="Arguments passed to the command"
    )


def stdin(source: SelectionSource, options: Options) -> str:
    command = options.command or Settings.from_env().pipe_command
    contents = source.get_selections()
    outputs = run_external(command, options.args, contents)
    if not outputs:
        raise ChannelError(
            f"{command} returned no records",
            detail=f"expected {len(contents)} null-delimited records",
        )
    source.set_selections(outputs)
    return f"Piped {len(contents)} selections through {command}"


__all__ = ["Options", "configure_parser", "stdin"]
