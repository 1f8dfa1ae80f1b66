"""Region identifier interning: raw GEOID strings to dense integer ids."""

from typing import Dict, Iterator, List, Optional

from .constants import MAX_INTERNED_ID


class RegionIdInterner:
    """
    Maps identifier strings to dense integers and back.

    Ids start at 0 and increase in first-seen order. Interning a string
    that was already seen returns its existing id. The interner holds the
    only canonical copy of each string; one instance belongs to one run.

    Not safe for concurrent mutation. All interning happens during
    ingestion, before any parallel work starts.
    """

    def __init__(self) -> None:
        self._ids: Dict[str, int] = {}
        self._strings: List[str] = []

    def intern(self, raw: str) -> int:
        existing = self._ids.get(raw)
        if existing is not None:
            return existing

        interned = len(self._strings)
        if interned > MAX_INTERNED_ID:
            raise OverflowError("Interner exhausted the 32-bit id space")

        self._strings.append(raw)
        self._ids[raw] = interned
        return interned

    def get(self, raw: str) -> Optional[int]:
        """Look up an id without interning."""
        return self._ids.get(raw)

    def resolve(self, interned: int) -> Optional[str]:
        if interned < 0 or interned >= len(self._strings):
            return None
        return self._strings[interned]

    def strings(self) -> Iterator[str]:
        return iter(self._strings)

    def __contains__(self, raw: object) -> bool:
        return raw in self._ids

    def __len__(self) -> int:
        return len(self._strings)

    def __repr__(self) -> str:
        return f"RegionIdInterner({len(self)} ids)"
