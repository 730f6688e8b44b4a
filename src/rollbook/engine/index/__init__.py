"""Interchangeable roll-number indexes."""

from __future__ import annotations

from .base import RecordIndex
from .hash_index import HashIndex
from .sorted_index import SortedIndex

INDEX_STRATEGIES: dict[str, type[RecordIndex]] = {
    HashIndex.name: HashIndex,
    SortedIndex.name: SortedIndex,
}


def build_index(strategy: str) -> RecordIndex:
    """Create an empty index for the named strategy."""
    try:
        index_cls = INDEX_STRATEGIES[strategy]
    except KeyError:
        raise ValueError(
            f"Unknown index strategy '{strategy}'. Use one of: {sorted(INDEX_STRATEGIES)}."
        ) from None
    return index_cls()


__all__ = ["INDEX_STRATEGIES", "HashIndex", "RecordIndex", "SortedIndex", "build_index"]
