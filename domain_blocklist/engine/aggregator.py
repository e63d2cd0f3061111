"""Merge per-source domains with the local override list."""

from __future__ import annotations

from itertools import chain
from typing import Iterable, Sequence


def merge(domain_sets: Iterable[Iterable[str]], local_entries: Sequence[str]) -> list[str]:
    """Return the unique union of all inputs in ordinal ascending order.

    Local entries are trusted verbatim: no case folding, no validation.
    """

    unique = set(chain.from_iterable(domain_sets))
    unique.update(local_entries)
    return sorted(unique)


__all__ = ["merge"]
