"""Shared helpers: identifiers, timestamps, text matching."""

from __future__ import annotations

import itertools
from datetime import datetime, timezone
from typing import Callable, Iterable
from uuid import uuid4

# Zero-argument callable returning a fresh opaque identifier.
IdGenerator = Callable[[], str]


def utc_now_iso() -> str:
    return datetime.now(tz=timezone.utc).isoformat()


def uuid_id_generator(prefix: str = "kg") -> IdGenerator:
    """Random identifiers, e.g. ``kg_3f2a9c...``."""

    def _next() -> str:
        return f"{prefix}_{uuid4().hex}"

    return _next


def counter_id_generator(prefix: str = "kg", start: int = 1) -> IdGenerator:
    """Monotonic identifiers (``kg_1``, ``kg_2``, ...).

    Deterministic across runs, which makes synthesized output reproducible
    in tests.
    """
    counter = itertools.count(start)

    def _next() -> str:
        return f"{prefix}_{next(counter)}"

    return _next


def contains_ci(haystack: str, needle: str) -> bool:
    """Case-insensitive substring test."""
    return needle.lower() in haystack.lower()


def matches_text(needle: str, *fields: str, tags: Iterable[str] = ()) -> bool:
    """True when *needle* occurs (case-insensitively) in any field or tag.

    An empty needle matches everything.
    """
    if not needle:
        return True
    lowered = needle.lower()
    if any(lowered in field.lower() for field in fields):
        return True
    return any(lowered in tag.lower() for tag in tags)
