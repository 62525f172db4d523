"""Editor hosts the selection algebra reads from and writes to."""

from .kakoune import KakouneSource
from .memory import MemoryDocument, MemorySource
from .pipe import run_external
from .source import Scope, SelectionSource, StatusMessage

__all__ = [
    "Scope",
    "StatusMessage",
    "SelectionSource",
    "KakouneSource",
    "MemoryDocument",
    "MemorySource",
    "run_external",
]
