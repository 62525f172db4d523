from __future__ import annotations

import pytest

from kaksel.host import MemorySource
from kaksel.selection import (
    ConsistencyError,
    SelectionDesc,
    document_order,
    get_selections_with_desc,
    get_selections_with_desc_ordered,
    pair_selections,
)


def desc(row_a: int, col_a: int, row_b: int, col_b: int) -> SelectionDesc:
    return SelectionDesc.from_coords(row_a, col_a, row_b, col_b)


def make_source(primary: int = 2) -> MemorySource:
    # one selection per word: a b c d
    return MemorySource(
        "a b c d\n",
        [desc(0, col, 0, col) for col in (0, 2, 4, 6)],
        primary=primary,
    )


def test_pairing_undoes_primary_rotation() -> None:
    contents = ["a", "b", "c", "d"]
    descs = [desc(0, 4, 0, 4), desc(0, 6, 0, 6), desc(0, 0, 0, 0), desc(0, 2, 0, 2)]

    pairs = pair_selections(contents, descs)

    assert [pair.content for pair in pairs] == ["c", "d", "a", "b"]
    assert [pair.desc for pair in pairs] == descs


def test_pairing_normalizes_before_finding_the_first_selection() -> None:
    descs = [desc(1, 3, 1, 0), desc(0, 5, 0, 0)]

    pairs = pair_selections(["first", "second"], descs)

    assert [pair.content for pair in pairs] == ["second", "first"]


def test_pairing_rejects_mismatched_lengths() -> None:
    with pytest.raises(ConsistencyError):
        pair_selections(["a", "b"], [desc(0, 0, 0, 0)])


def test_pairing_rejects_empty_lists() -> None:
    with pytest.raises(ConsistencyError):
        pair_selections([], [])


def test_document_order_sorts_by_normalized_descriptor() -> None:
    pairs = pair_selections(["a", "b"], [desc(0, 9, 0, 4), desc(0, 2, 0, 0)])

    assert [pair.content for pair in pairs] == ["b", "a"]
    assert [pair.content for pair in document_order(pairs)] == ["a", "b"]


def test_source_pairs_are_primary_first() -> None:
    pairs = get_selections_with_desc(make_source(primary=2))

    assert [pair.content for pair in pairs] == ["c", "d", "a", "b"]
    assert pairs[0].desc == desc(0, 4, 0, 4)


def test_source_pairs_in_document_order() -> None:
    pairs = get_selections_with_desc_ordered(make_source(primary=3))

    assert [pair.content for pair in pairs] == ["a", "b", "c", "d"]
    assert [pair.desc.left.col for pair in pairs] == [0, 2, 4, 6]
