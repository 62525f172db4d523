"""Shared plumbing for subcommands."""

from __future__ import annotations

import argparse
from dataclasses import dataclass, fields
from typing import Any, Callable, List, Optional, Sequence, Sized, Type

from kaksel.host.source import SelectionSource
from kaksel.selection.errors import EmptySelectionsError

Handler = Callable[[SelectionSource, Any], str]
ParserHook = Callable[[argparse.ArgumentParser], None]
ArgvHook = Callable[[Sequence[str]], List[str]]


@dataclass(frozen=True, slots=True)
class CommandSpec:
    """One subcommand: its handler, options type, and argparse wiring.

    ``options`` is a dataclass whose field names match the parser's ``dest``
    names, so a parsed namespace converts directly into it. ``prepare``
    rewrites the tokens after the subcommand name before argparse sees them.
    """

    name: str
    handler: Handler
    options: Type[Any]
    help: str
    configure: Optional[ParserHook] = None
    prepare: Optional[ArgvHook] = None

    def build_options(self, namespace: argparse.Namespace) -> Any:
        values = vars(namespace)
        return self.options(
            **{
                item.name: values[item.name]
                for item in fields(self.options)
                if item.name in values
            }
        )


def require_any(items: Sized, message: str = "No selections") -> None:
    if not items:
        raise EmptySelectionsError(message)


def plural(count: int, word: str) -> str:
    return f"{count} {word}" if count == 1 else f"{count} {word}s"


__all__ = [
    "ArgvHook",
    "CommandSpec",
    "Handler",
    "ParserHook",
    "require_any",
    "plural",
]
