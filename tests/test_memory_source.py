from __future__ import annotations

import pytest

from kaksel.host import MemoryDocument, MemorySource, Scope
from kaksel.selection import (
    EmptySelectionsError,
    Register,
    SelectionDesc,
    UsageError,
)


def desc(row_a: int, col_a: int, row_b: int, col_b: int) -> SelectionDesc:
    return SelectionDesc.from_coords(row_a, col_a, row_b, col_b)


def test_document_offsets_count_newlines() -> None:
    document = MemoryDocument.from_text("foo bar\nbaz\n")

    assert document.line_count == 2
    assert document.content(desc(0, 0, 0, 2)) == "foo"
    assert document.content(desc(1, 1, 0, 4)) == "bar\nba"
    assert document.content(desc(0, 7, 0, 7)) == "\n"


def test_document_positions_map_back_from_offsets() -> None:
    document = MemoryDocument.from_text("ab\n\ncd\n")

    assert document.position_for(0).row == 0
    assert document.position_for(3) == desc(1, 0, 1, 0).left
    assert document.position_for(5) == desc(2, 1, 2, 1).left


def test_descs_are_rotated_to_the_primary() -> None:
    selections = [desc(0, 0, 0, 0), desc(0, 2, 0, 2), desc(0, 4, 0, 4)]
    source = MemorySource("a b c\n", selections, primary=1)

    assert source.get_selections() == ["a", "b", "c"]
    assert source.get_selection_descs() == [selections[1], selections[2], selections[0]]


def test_split_lines_scope_cuts_multi_row_selections() -> None:
    source = MemorySource("abc\ndef\n", [desc(0, 1, 1, 1)])

    assert source.get_selection_descs(Scope.SPLIT_LINES) == [
        desc(0, 1, 0, 3),
        desc(1, 0, 1, 1),
    ]
    assert source.get_selections(Scope.SPLIT_LINES) == ["bc\n", "de"]


def test_document_line_scopes() -> None:
    source = MemorySource("abc\n\nde\n")

    assert source.get_selection_descs(Scope.DOCUMENT_LINES) == [
        desc(0, 0, 0, 3),
        desc(1, 0, 1, 0),
        desc(2, 0, 2, 2),
    ]
    assert source.get_selections(Scope.DOCUMENT_LINES_NO_NEWLINE) == ["abc", "de"]


def test_set_selections_replaces_content_and_moves_selections() -> None:
    source = MemorySource("foo bar\nbaz\n", [desc(0, 0, 0, 2), desc(1, 0, 1, 2)])

    source.set_selections(["x", "yy"])

    assert source.text == "x bar\nyy\n"
    assert source.selections == [desc(0, 0, 0, 0), desc(1, 0, 1, 1)]
    assert source.get_selections() == ["x", "yy"]


def test_set_selections_cycles_short_value_lists() -> None:
    source = MemorySource("a b c\n", [desc(0, col, 0, col) for col in (0, 2, 4)])

    source.set_selections(["z"])

    assert source.text == "z z z\n"


def test_empty_replacement_collapses_to_a_point() -> None:
    source = MemorySource("ab cd\n", [desc(0, 0, 0, 1), desc(0, 3, 0, 4)])

    source.set_selections(["", "cd"])

    assert source.text == " cd\n"
    assert source.selections == [desc(0, 0, 0, 0), desc(0, 1, 0, 2)]


def test_setting_empty_lists_fails() -> None:
    source = MemorySource("abc\n")

    with pytest.raises(EmptySelectionsError):
        source.set_selections([])
    with pytest.raises(EmptySelectionsError):
        source.set_selection_descs([])


def test_set_selection_descs_makes_the_first_primary() -> None:
    source = MemorySource("a b c\n")

    source.set_selection_descs([desc(0, 4, 0, 4), desc(0, 0, 0, 0)])

    assert source.selections == [desc(0, 0, 0, 0), desc(0, 4, 0, 4)]
    assert source.primary == desc(0, 4, 0, 4)


def test_registers_and_messages() -> None:
    source = MemorySource("a\n", registers={"dquote": ["x", "y"]})

    assert source.get_register(Register('"')) == ["x", "y"]
    assert source.get_register_values(Register("b")) == []
    with pytest.raises(UsageError):
        source.get_register(Register("b"))

    source.set_register(Register("b"), ["z"])
    assert source.get_register(Register("b")) == ["z"]

    source.write_scratch("table\n")
    source.display_message("done", "detail")

    assert source.scratch == "table\n"
    assert source.messages == [("done", "detail")]
