from __future__ import annotations

import pytest

from kaksel.selection import AnchorPosition, ParseError, SelectionDesc


def desc(row_a: int, col_a: int, row_b: int, col_b: int) -> SelectionDesc:
    return SelectionDesc.from_coords(row_a, col_a, row_b, col_b)


def sample_descs() -> list[SelectionDesc]:
    return [
        desc(0, 0, 0, 0),
        desc(0, 5, 0, 1),
        desc(2, 3, 1, 7),
        desc(1, 7, 2, 3),
        desc(4, 0, 4, 9),
    ]


def test_anchor_rejects_negative_coordinates() -> None:
    with pytest.raises(ValueError):
        AnchorPosition(-1, 0)


def test_shift_col_saturates_at_zero() -> None:
    assert AnchorPosition(3, 0).shift_col(-1) == AnchorPosition(3, 0)
    assert AnchorPosition(3, 4).shift_col(-1) == AnchorPosition(3, 3)
    assert AnchorPosition(3, 4).shift_col(1) == AnchorPosition(3, 5)


def test_parse_and_render_round_trip() -> None:
    parsed = SelectionDesc.parse("12.3,4.56")

    assert parsed == desc(12, 3, 4, 56)
    assert str(parsed) == "12.3,4.56"


@pytest.mark.parametrize("text", ["1.2", "a.b,1.1", "1,2.2", ""])
def test_parse_rejects_malformed_text(text: str) -> None:
    with pytest.raises(ParseError):
        SelectionDesc.parse(text)


def test_sort_is_idempotent_and_direction_independent() -> None:
    for item in sample_descs():
        once = item.sort()
        assert once.left <= once.right
        assert once.sort() == once
        assert item.reversed().sort() == once


def test_row_span_counts_rows_inclusively() -> None:
    assert desc(3, 9, 3, 0).row_span() == 1
    assert desc(5, 0, 2, 4).row_span() == 4


def test_contains_self_and_mutual_containment_means_equal() -> None:
    for item in sample_descs():
        assert item.contains(item)
        assert item.contains(item.reversed())

    a, b = desc(0, 0, 0, 5), desc(0, 1, 0, 5)
    assert a.contains(b)
    assert not b.contains(a)
    assert a.sort().contains(a.reversed()) and a.reversed().contains(a.sort())


def test_contains_accepts_a_single_position() -> None:
    item = desc(1, 4, 0, 2)

    assert item.contains(AnchorPosition(0, 9))
    assert item.contains(AnchorPosition(1, 4))
    assert not item.contains(AnchorPosition(1, 5))


def test_intersect_with_self_is_the_sorted_self() -> None:
    for item in sample_descs():
        assert item.intersect(item) == item.sort()


def test_intersect_containment_and_partial_overlap() -> None:
    assert desc(0, 0, 0, 9).intersect(desc(0, 2, 0, 3)) == desc(0, 2, 0, 3)
    assert desc(0, 2, 0, 3).intersect(desc(0, 0, 0, 9)) == desc(0, 2, 0, 3)
    assert desc(0, 0, 0, 5).intersect(desc(0, 8, 0, 3)) == desc(0, 3, 0, 5)
    assert desc(0, 3, 0, 8).intersect(desc(0, 0, 0, 5)) == desc(0, 3, 0, 5)


def test_intersect_of_disjoint_descriptors_is_none() -> None:
    assert desc(0, 0, 0, 2).intersect(desc(0, 3, 0, 4)) is None
    assert desc(1, 0, 1, 2).intersect(desc(0, 0, 0, 9)) is None


def test_subtract_strict_interior_splits_in_two() -> None:
    assert desc(0, 0, 0, 7).subtract(desc(0, 1, 0, 6)) == (
        desc(0, 0, 0, 0),
        desc(0, 7, 0, 7),
    )


def test_subtract_full_cover_leaves_nothing() -> None:
    assert desc(0, 2, 0, 4).subtract(desc(0, 0, 0, 9)) == ()
    assert desc(0, 2, 0, 4).subtract(desc(0, 4, 0, 2)) == ()


def test_subtract_trims_one_side() -> None:
    assert desc(0, 2, 0, 8).subtract(desc(0, 0, 0, 4)) == (desc(0, 5, 0, 8),)
    assert desc(0, 0, 0, 5).subtract(desc(0, 3, 0, 9)) == (desc(0, 0, 0, 2),)


def test_subtract_without_overlap_returns_self_unchanged() -> None:
    backwards = desc(0, 9, 0, 7)

    assert backwards.subtract(desc(0, 0, 0, 2)) == (backwards,)


def test_subtract_pieces_and_cut_cover_the_whole() -> None:
    whole = desc(2, 1, 2, 12)
    for cut in (desc(2, 0, 2, 3), desc(2, 4, 2, 6), desc(2, 10, 2, 20)):
        pieces = whole.subtract(cut)
        envelope = cut.sort()
        for piece in pieces:
            envelope = envelope.bounding_selection(piece)
        assert envelope.contains(whole)


def test_partial_union_joins_overlapping_descriptors() -> None:
    assert desc(0, 0, 0, 4).partial_union(desc(0, 6, 0, 2)) == desc(0, 0, 0, 6)


def test_partial_union_joins_adjacent_columns_on_one_row() -> None:
    assert desc(0, 0, 0, 5).partial_union(desc(0, 6, 0, 6)) == desc(0, 0, 0, 6)
    assert desc(0, 6, 0, 6).partial_union(desc(0, 0, 0, 5)) == desc(0, 0, 0, 6)


def test_partial_union_leaves_gaps_apart() -> None:
    assert desc(0, 0, 0, 5).partial_union(desc(0, 7, 0, 8)) is None


def test_partial_union_never_joins_across_rows() -> None:
    # the end of row 0 and the start of row 1 touch in the buffer, but a
    # descriptor has no line lengths to prove it
    assert desc(0, 0, 0, 5).partial_union(desc(1, 0, 1, 3)) is None


def test_bounding_selection_ignores_overlap_and_direction() -> None:
    assert desc(0, 3, 0, 4).bounding_selection(desc(2, 1, 2, 0)) == desc(0, 3, 2, 1)
