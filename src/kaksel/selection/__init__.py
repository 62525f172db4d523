"""Selection descriptors, their geometry, and content keys."""

from .errors import (
    ChannelError,
    ConsistencyError,
    EmptySelectionsError,
    EnvironmentVariableError,
    KakselError,
    ParseError,
    UsageError,
)
from .keys import KeyOptions, compile_regex, selection_hash, selection_key
from .position import AnchorPosition, SelectionDesc
from .reconcile import (
    SelectionWithDesc,
    document_order,
    get_selections_with_desc,
    get_selections_with_desc_ordered,
    pair_selections,
)
from .registers import CURRENT_SELECTION, DEFAULT_REGISTER, Register

__all__ = [
    "AnchorPosition",
    "SelectionDesc",
    "SelectionWithDesc",
    "pair_selections",
    "document_order",
    "get_selections_with_desc",
    "get_selections_with_desc_ordered",
    "KeyOptions",
    "compile_regex",
    "selection_key",
    "selection_hash",
    "Register",
    "CURRENT_SELECTION",
    "DEFAULT_REGISTER",
    "KakselError",
    "UsageError",
    "ParseError",
    "EmptySelectionsError",
    "ConsistencyError",
    "ChannelError",
    "EnvironmentVariableError",
]
