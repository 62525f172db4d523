"""Pair selection content with selection descriptors.

The editor lists selection content in document order, but lists descriptors
rotated so the primary selection comes first::

    [a] [b] (c) [d]      () is the primary selection
    content:      a b c d
    descriptors:  c d a b

The smallest descriptor is always the first selection in document order, so
its index in the descriptor list is how far the content list must be rotated
to line the two up.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Sequence

from .errors import ConsistencyError
from .position import SelectionDesc

if TYPE_CHECKING:
    from kaksel.host.source import Scope, SelectionSource


@dataclass(frozen=True, slots=True)
class SelectionWithDesc:
    content: str
    desc: SelectionDesc


def pair_selections(
    contents: Sequence[str], descs: Sequence[SelectionDesc]
) -> List[SelectionWithDesc]:
    """Zip both lists in primary-anchored order."""

    if len(contents) != len(descs):
        raise ConsistencyError(
            "Selection content and descriptors do not line up",
            detail=(
                f"selections (={len(contents)}) and selections_desc "
                f"(={len(descs)}) counts differ"
            ),
        )
    if not descs:
        raise ConsistencyError("Selections are empty, which should not be possible")

    normalized = [desc.sort() for desc in descs]
    first = min(normalized)
    try:
        offset = normalized.index(first)
    except ValueError as exc:  # pragma: no cover - min() always comes from the list
        raise ConsistencyError(
            f"Primary selection {first} not found in descriptor list",
            detail=", ".join(str(desc) for desc in descs),
        ) from exc

    rotated = list(contents)
    if offset:
        rotated = rotated[-offset:] + rotated[:-offset]
    return [
        SelectionWithDesc(content=content, desc=desc)
        for content, desc in zip(rotated, descs)
    ]


def document_order(pairs: Sequence[SelectionWithDesc]) -> List[SelectionWithDesc]:
    return sorted(pairs, key=lambda pair: pair.desc.sort())


def get_selections_with_desc(
    source: "SelectionSource", scope: "Scope | None" = None
) -> List[SelectionWithDesc]:
    """Read both lists from ``source`` and pair them, primary first."""

    if scope is None:
        return pair_selections(source.get_selections(), source.get_selection_descs())
    return pair_selections(
        source.get_selections(scope), source.get_selection_descs(scope)
    )


def get_selections_with_desc_ordered(
    source: "SelectionSource", scope: "Scope | None" = None
) -> List[SelectionWithDesc]:
    return document_order(get_selections_with_desc(source, scope))


__all__ = [
    "SelectionWithDesc",
    "pair_selections",
    "document_order",
    "get_selections_with_desc",
    "get_selections_with_desc_ordered",
]
