"""In-process editor implementing ``SelectionSource``.

Behaves like a Kakoune buffer: every line ends with a newline, descriptors use
0-based rows and columns, the right end of a selection is inclusive, and the
newline of a line is addressable at column ``len(line)``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from kaksel.runtime import telemetry
from kaksel.selection.errors import EmptySelectionsError, UsageError
from kaksel.selection.position import AnchorPosition, SelectionDesc
from kaksel.selection.registers import Register

from .source import Scope


@dataclass(slots=True)
class MemoryDocument:
    """List-of-lines text storage; lines are kept without their newline."""

    _lines: List[str] = field(default_factory=lambda: [""])

    @classmethod
    def from_text(cls, text: str) -> "MemoryDocument":
        if text.endswith("\n"):
            text = text[:-1]
        return cls(_lines=text.split("\n"))

    @property
    def text(self) -> str:
        return "".join(f"{line}\n" for line in self._lines)

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def get_line(self, index: int) -> str:
        return self._lines[index]

    def offset_for(self, position: AnchorPosition) -> int:
        offset = 0
        for row in range(position.row):
            offset += len(self._lines[row]) + 1  # newline
        return offset + position.col

    def position_for(self, offset: int) -> AnchorPosition:
        running = 0
        for row, line in enumerate(self._lines):
            if offset <= running + len(line):
                return AnchorPosition(row, offset - running)
            running += len(line) + 1
        last = len(self._lines) - 1
        return AnchorPosition(last, len(self._lines[last]))

    def span_for(self, desc: SelectionDesc) -> Tuple[int, int]:
        """Half-open ``[start, end)`` character offsets covered by ``desc``."""

        ordered = desc.sort()
        return self.offset_for(ordered.left), self.offset_for(ordered.right) + 1

    def content(self, desc: SelectionDesc) -> str:
        start, end = self.span_for(desc)
        return self.text[start:end]


def _split_rows(document: MemoryDocument, desc: SelectionDesc) -> List[SelectionDesc]:
    ordered = desc.sort()
    if ordered.row_span() == 1:
        return [ordered]
    pieces = []
    for row in range(ordered.left.row, ordered.right.row + 1):
        start = ordered.left.col if row == ordered.left.row else 0
        end = (
            ordered.right.col
            if row == ordered.right.row
            else len(document.get_line(row))
        )
        pieces.append(SelectionDesc.from_coords(row, start, row, end))
    return pieces


class MemorySource:
    """Editor state held in memory: text, selections, primary, registers."""

    def __init__(
        self,
        text: str,
        selections: Sequence[SelectionDesc] = (),
        *,
        primary: int = 0,
        registers: Optional[Mapping[str, Sequence[str]]] = None,
    ) -> None:
        self.document = MemoryDocument.from_text(text)
        self.registers: Dict[str, List[str]] = {
            Register.parse(name).char: list(values)
            for name, values in (registers or {}).items()
        }
        self.scratch: Optional[str] = None
        self.messages: List[Tuple[str, Optional[str]]] = []
        self.logger = telemetry.get_logger("kaksel.host.memory")
        self._selections: List[SelectionDesc] = []
        self._primary = 0
        if selections:
            self._select(selections, primary=primary)
        else:
            self._selections = [SelectionDesc.from_coords(0, 0, 0, 0)]

    @property
    def text(self) -> str:
        return self.document.text

    @property
    def selections(self) -> List[SelectionDesc]:
        """Current descriptors in document order."""

        return list(self._selections)

    @property
    def primary(self) -> SelectionDesc:
        return self._selections[self._primary]

    def _select(self, descs: Sequence[SelectionDesc], *, primary: int) -> None:
        chosen = descs[primary]
        self._selections = sorted(descs, key=lambda desc: desc.sort())
        self._primary = self._selections.index(chosen)

    def _scoped(self, scope: Scope) -> List[SelectionDesc]:
        if scope is Scope.CURRENT:
            return list(self._selections)
        if scope is Scope.SPLIT_LINES:
            return [
                piece
                for desc in self._selections
                for piece in _split_rows(self.document, desc)
            ]
        lines = [
            (row, self.document.get_line(row))
            for row in range(self.document.line_count)
        ]
        if scope is Scope.DOCUMENT_LINES:
            return [
                SelectionDesc.from_coords(row, 0, row, len(line)) for row, line in lines
            ]
        return [
            SelectionDesc.from_coords(row, 0, row, len(line) - 1)
            for row, line in lines
            if line
        ]

    def get_selections(self, scope: Scope = Scope.CURRENT) -> List[str]:
        return [self.document.content(desc) for desc in self._scoped(scope)]

    def get_selection_descs(self, scope: Scope = Scope.CURRENT) -> List[SelectionDesc]:
        descs = self._scoped(scope)
        if scope is Scope.CURRENT and self._primary:
            return descs[self._primary :] + descs[: self._primary]
        return descs

    def set_selections(self, selections: Sequence[str]) -> None:
        if not selections:
            raise EmptySelectionsError()

        text = self.document.text
        pieces: List[str] = []
        spans: List[Tuple[int, int]] = []
        cursor = 0
        written = 0
        for index, desc in enumerate(self._selections):
            value = selections[index % len(selections)]
            start, end = self.document.span_for(desc)
            pieces.append(text[cursor:start])
            written += start - cursor
            pieces.append(value)
            spans.append((written, written + max(len(value), 1) - 1))
            written += len(value)
            cursor = end
        pieces.append(text[cursor:])

        self.document = MemoryDocument.from_text("".join(pieces))
        limit = max(len(self.document.text) - 1, 0)
        self._selections = [
            SelectionDesc(
                self.document.position_for(min(start, limit)),
                self.document.position_for(min(end, limit)),
            )
            for start, end in spans
        ]
        self.logger.debug(f"memory set_selections: {len(spans)} replaced")

    def set_selection_descs(self, descs: Sequence[SelectionDesc]) -> None:
        if not descs:
            raise EmptySelectionsError()
        self._select(list(descs), primary=0)

    def get_register(self, register: Register) -> List[str]:
        values = self.registers.get(register.char)
        if not values:
            raise UsageError(f"Register {register} has no content")
        return list(values)

    def get_register_values(self, register: Register) -> List[str]:
        return list(self.registers.get(register.char, []))

    def set_register(self, register: Register, values: Iterable[str]) -> None:
        self.registers[register.char] = list(values)

    def write_scratch(self, text: str) -> None:
        self.scratch = text

    def display_message(self, message: str, detail: Optional[str] = None) -> None:
        self.messages.append((message, detail))


__all__ = ["MemoryDocument", "MemorySource"]
