from __future__ import annotations

import pytest

from kaksel.commands import set_ops
from kaksel.commands.set_ops import Operation, parse_arguments
from kaksel.host import MemorySource
from kaksel.selection import ParseError, Register, SelectionDesc, UsageError


def desc(row_a: int, col_a: int, row_b: int, col_b: int) -> SelectionDesc:
    return SelectionDesc.from_coords(row_a, col_a, row_b, col_b)


def line_source(*lines: str, **registers: list[str]) -> MemorySource:
    """One selection per line, newline excluded."""

    text = "".join(f"{line}\n" for line in lines)
    selections = [desc(row, 0, row, len(line) - 1) for row, line in enumerate(lines)]
    return MemorySource(text, selections, registers=registers)


def run(source: MemorySource, *args: str, **options: object) -> str:
    return set_ops.set_operation(source, set_ops.Options(args=list(args), **options))


@pytest.mark.parametrize(
    ("args", "left", "operation", "right"),
    [
        (["a-b"], "a", Operation.SUBTRACT, "b"),
        (["-a"], "_", Operation.SUBTRACT, "a"),
        (["a&"], "a", Operation.INTERSECT, "_"),
        (["a", "+"], "a", Operation.UNION, "_"),
        (["a", "and", "b"], "a", Operation.INTERSECT, "b"),
        (["c?d"], "c", Operation.COMPARE, "d"),
        (["dquote", "cmp", "slash"], '"', Operation.COMPARE, "/"),
    ],
)
def test_parse_arguments_forms(
    args: list[str], left: str, operation: Operation, right: str
) -> None:
    parsed = parse_arguments(args)

    assert parsed.left == Register(left)
    assert parsed.operation is operation
    assert parsed.right == Register(right)


@pytest.mark.parametrize(
    "args", [["a-a"], ["-+"], ["ab"], ["abcd"], ["a", "b", "c", "d"]]
)
def test_parse_arguments_rejects_bad_forms(args: list[str]) -> None:
    with pytest.raises(UsageError):
        parse_arguments(args)


def test_parse_arguments_rejects_unknown_operation() -> None:
    with pytest.raises(ParseError):
        parse_arguments(["a", "xor", "b"])


def test_key_set_operations_keep_left_order() -> None:
    left, right = ["c", "a", "b"], ["b", "d", "c"]

    assert set_ops.key_set_operation(Operation.INTERSECT, left, right) == ["c", "b"]
    assert set_ops.key_set_operation(Operation.SUBTRACT, left, right) == ["a"]
    assert set_ops.key_set_operation(Operation.UNION, left, right) == [
        "c",
        "a",
        "b",
        "d",
    ]


def test_ordered_counts_skip_empty_keys() -> None:
    counts = set_ops.ordered_counts(["b", " ", "a", "b"], set_ops.KeyOptions())

    assert list(counts) == ["b", "a"]
    assert counts["b"] == 2


def test_subtract_from_current_selection_deselects_in_place() -> None:
    source = line_source("x", "y", "z", a=["y"])

    message = run(source, "_-a")

    assert message == "_-a returned 2 selections"
    assert source.get_selections() == ["x", "z"]
    assert source.selections == [desc(0, 0, 0, 0), desc(2, 0, 2, 0)]
    assert source.scratch is None


def test_intersect_from_current_selection_keeps_duplicates() -> None:
    source = line_source("x", "y", "x", "z", a=["x", "q"])

    message = run(source, "&a")

    assert message == "_&a returned 1 selections"
    assert source.get_selections() == ["x", "x"]


def test_skip_whitespace_trims_before_comparing() -> None:
    source = line_source(" y", "x", a=["y"])

    assert run(source, "-a") == "_-a returned 2 selections"
    assert run(source, "-a", skip_whitespace=True) == "_-a returned 1 selections"
    assert source.get_selections() == ["x"]


def test_union_goes_to_scratch() -> None:
    source = line_source("unused", a=["x", "y"], b=["y", "z"])

    message = run(source, "a+b")

    assert message == "a+b returned 3 selections"
    assert source.scratch == "x\ny\nz\n"
    assert source.get_selections() == ["unused"]


def test_subtract_with_current_selection_on_the_right_goes_to_scratch() -> None:
    source = line_source("y", a=["x", "y"])

    assert run(source, "a-") == "a-_ returned 1 selections"
    assert source.scratch == "x\n"


def test_compare_writes_a_table() -> None:
    source = line_source("unused", a=["x", "x", "y"], b=["y", "z"])

    message = run(source, "a", "compare", "b")

    assert message == "Compared 3 selections"
    assert source.scratch == (
        "?\ta\tb\tselection\n"
        ">\t2\t0\tx\n"
        "=\t1\t1\ty\n"
        "<\t0\t1\tz\n"
    )


def test_regex_and_ignore_case_shape_the_keys() -> None:
    source = line_source("ID-1", "id-2", "id-3", a=["id-1 extra", "x-3"])

    message = run(source, "-a", regex=r"\w+-(\d)", ignore_case=True)

    assert message == "_-a returned 1 selections"
    assert source.get_selections() == ["id-2"]


def test_empty_register_is_a_usage_error() -> None:
    source = line_source("x")

    with pytest.raises(UsageError):
        run(source, "_&b")
