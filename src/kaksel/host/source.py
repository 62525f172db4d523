"""Boundary types describing how subcommands talk to an editor."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Protocol, Sequence

from kaksel.selection.position import SelectionDesc
from kaksel.selection.registers import Register


class Scope(str, Enum):
    """Which selections a read refers to.

    Values are the Kakoune keys that produce the scope inside a draft
    context, so the live selection set is never disturbed by a scoped read.
    """

    CURRENT = ""
    # current selections split at line boundaries
    SPLIT_LINES = "<a-s>"
    # every line of the buffer, trailing newline included
    DOCUMENT_LINES = "%<a-s>"
    # every non-empty line of the buffer, newline excluded
    DOCUMENT_LINES_NO_NEWLINE = "%s^[^\\n]+<ret>"


@dataclass(slots=True)
class StatusMessage:
    """One-line summary echoed to the user, plus optional debug detail."""

    message: str
    detail: Optional[str] = None
    failed: bool = False


class SelectionSource(Protocol):
    """Protocol every editor host implements."""

    def get_selections(self, scope: Scope = Scope.CURRENT) -> List[str]:
        """Selection content in document order."""
        ...

    def get_selection_descs(self, scope: Scope = Scope.CURRENT) -> List[SelectionDesc]:
        """Descriptors rotated so the primary selection comes first."""
        ...

    def set_selections(self, selections: Sequence[str]) -> None:
        """Replace the content of the current selections, in document order."""
        ...

    def set_selection_descs(self, descs: Sequence[SelectionDesc]) -> None:
        """Replace the current selections; the first becomes primary."""
        ...

    def get_register(self, register: Register) -> List[str]:
        """Content of the selections marked in ``register``."""
        ...

    def get_register_values(self, register: Register) -> List[str]:
        """Raw values stored in ``register``."""
        ...

    def write_scratch(self, text: str) -> None:
        """Show ``text`` in a disposable side buffer."""
        ...

    def display_message(self, message: str, detail: Optional[str] = None) -> None:
        ...


__all__ = ["Scope", "StatusMessage", "SelectionSource"]
