"""Anchor positions, selection descriptors, and their geometry.

A ``SelectionDesc`` stores the two ends of a selection exactly as the editor
reports them: the anchor may come after the cursor when the user extended the
selection backwards. Every geometric operation therefore normalizes its
operands with ``sort()`` first, and equality between descriptors is only
direction-independent after both sides have been sorted.

Columns are compared within whatever rows are given. Descriptors carry no
knowledge of line lengths, so "end of row N" and "start of row N + 1" are
never considered adjacent.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple, Union

from .errors import ParseError


@dataclass(frozen=True, slots=True, order=True)
class AnchorPosition:
    """A ``(row, col)`` grid coordinate, ordered row first."""

    row: int
    col: int

    def __post_init__(self) -> None:
        if self.row < 0 or self.col < 0:
            raise ValueError(
                f"Anchor position cannot be negative: {self.row}.{self.col}"
            )

    def shift_col(self, delta: int) -> "AnchorPosition":
        """Move along the row, saturating at column 0."""

        return AnchorPosition(self.row, max(0, self.col + delta))

    @classmethod
    def parse(cls, text: str) -> "AnchorPosition":
        row, sep, col = text.strip().partition(".")
        if not sep:
            raise ParseError(f"Could not parse as position: {text}")
        try:
            return cls(int(row), int(col))
        except ValueError as exc:
            raise ParseError(f"Could not parse as position: {text}") from exc

    def __str__(self) -> str:
        return f"{self.row}.{self.col}"


DescLike = Union["SelectionDesc", AnchorPosition]


def _as_desc(value: DescLike) -> "SelectionDesc":
    if isinstance(value, AnchorPosition):
        return SelectionDesc(value, value)
    return value


@dataclass(frozen=True, slots=True, order=True)
class SelectionDesc:
    """Pair of anchor positions; neither field is privileged as the start."""

    left: AnchorPosition
    right: AnchorPosition

    @classmethod
    def from_coords(
        cls, row_a: int, col_a: int, row_b: int, col_b: int
    ) -> "SelectionDesc":
        return cls(AnchorPosition(row_a, col_a), AnchorPosition(row_b, col_b))

    @classmethod
    def parse(cls, text: str) -> "SelectionDesc":
        """Parse the editor's ``"<row>.<col>,<row>.<col>"`` form."""

        left, sep, right = text.strip().partition(",")
        if not sep:
            raise ParseError(f"Could not parse as selection: {text}")
        return cls(AnchorPosition.parse(left), AnchorPosition.parse(right))

    def __str__(self) -> str:
        return f"{self.left},{self.right}"

    @property
    def is_sorted(self) -> bool:
        return self.left <= self.right

    def sort(self) -> "SelectionDesc":
        """Return a copy with ``left <= right``."""

        if self.is_sorted:
            return self
        return SelectionDesc(self.right, self.left)

    def reversed(self) -> "SelectionDesc":
        return SelectionDesc(self.right, self.left)

    def row_span(self) -> int:
        """Number of rows touched, inclusive of both ends."""

        sorted_self = self.sort()
        return sorted_self.right.row - sorted_self.left.row + 1

    def contains(self, other: DescLike) -> bool:
        a, b = self.sort(), _as_desc(other).sort()
        return b.left >= a.left and b.right <= a.right

    def intersect(self, other: "SelectionDesc") -> Optional["SelectionDesc"]:
        """Normalized overlap of both descriptors, or ``None``."""

        a, b = sorted((self.sort(), other.sort()))
        if b.contains(a):
            return a
        if a.contains(b):
            return b
        # a starts first, so any partial overlap ends at a.right
        if b.contains(a.right):
            return SelectionDesc(b.left, a.right)
        return None

    def partial_union(self, other: "SelectionDesc") -> Optional["SelectionDesc"]:
        """Union of two overlapping or column-adjacent descriptors.

        ``0.0,0.5`` and ``0.6,0.6`` are joined even though they do not
        overlap: splitting a multi-row selection into rows produces pieces
        like these. A piece ending on the last column of a row is not joined
        with one starting at column 0 of the next row.
        """

        a, b = sorted((self.sort(), other.sort()))
        adjacent = a.right.row == b.left.row and a.right.col + 1 == b.left.col
        if a.contains(b.left) or b.contains(a.right) or adjacent:
            return SelectionDesc(min(a.left, b.left), max(a.right, b.right))
        return None

    def subtract(self, other: "SelectionDesc") -> Tuple["SelectionDesc", ...]:
        """Remove ``other`` from this descriptor.

        Returns zero, one, or two normalized pieces; a descriptor that does
        not overlap ``other`` comes back unchanged. Full containment of both
        endpoints is checked before a strictly interior cut, and both before
        the one-sided trims.
        """

        own, cut = self.sort(), other.sort()
        left_inside = cut.contains(own.left)
        right_inside = cut.contains(own.right)

        if left_inside and right_inside:
            return ()
        if not left_inside and not right_inside:
            if own.contains(cut):
                return (
                    SelectionDesc(own.left, cut.left.shift_col(-1)),
                    SelectionDesc(cut.right.shift_col(1), own.right),
                )
            return (self,)
        if left_inside:
            return (SelectionDesc(cut.right.shift_col(1), own.right),)
        return (SelectionDesc(own.left, cut.left.shift_col(-1)),)

    def bounding_selection(self, other: "SelectionDesc") -> "SelectionDesc":
        """Smallest descriptor covering both, regardless of overlap."""

        a, b = self.sort(), other.sort()
        return SelectionDesc(min(a.left, b.left), max(a.right, b.right))


__all__ = ["AnchorPosition", "SelectionDesc"]
