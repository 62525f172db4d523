"""Comparison keys derived from selection content.

Deduplication, sorting, and the set operations all compare selections by a
key rather than by raw text: optionally trimmed, optionally reduced to a
regular-expression capture, optionally case-folded.
"""

from __future__ import annotations

import hashlib
import re
from dataclasses import dataclass
from typing import Optional, Pattern

from .errors import UsageError


@dataclass(frozen=True, slots=True)
class KeyOptions:
    trim_whitespace: bool = True
    regex: Optional[Pattern[str]] = None
    ignore_case: bool = False


def compile_regex(pattern: Optional[str]) -> Optional[Pattern[str]]:
    if pattern is None:
        return None
    try:
        return re.compile(pattern)
    except re.error as exc:
        raise UsageError(
            f"Invalid regular expression: {pattern}", detail=str(exc)
        ) from exc


def selection_key(content: str, options: KeyOptions) -> str:
    """Return the comparison key; an empty key excludes the selection."""

    key = content.strip() if options.trim_whitespace else content

    if options.regex is not None:
        match = options.regex.search(key)
        if match is None:
            return ""
        captured = match.group(1) if match.re.groups else None
        key = captured if captured is not None else match.group(0)

    # lowercase last so the regex sees the text as written
    if options.ignore_case:
        key = key.lower()
    return key


def selection_hash(content: str, options: KeyOptions) -> str:
    key = selection_key(content, options)
    return hashlib.blake2b(key.encode("utf-8"), digest_size=16).hexdigest()


__all__ = ["KeyOptions", "compile_regex", "selection_key", "selection_hash"]
