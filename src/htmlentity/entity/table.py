"""HTML5 named character reference table.

Maps entity names to Unicode scalar values and back. The table is built once
at import time from the WHATWG named reference list that ships with Python
(``html.entities.html5``) and is never mutated afterwards.

Only names written with a terminating semicolon that stand for a single code
point are kept. The semicolon-less legacy spellings (``&amp`` and friends) and
the handful of references that expand to two code points have no place in a
one-reference-per-character codec.

When several names share a code point the canonical one is the shortest, and
among names of equal length the one with the most lowercase letters, so
``<`` is ``lt`` rather than ``LT`` and ``→`` is ``rarr`` rather than
``RightArrow``.
"""

import html.entities
import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Tuple

# Names must match the HTML5 named reference grammar
ENTITY_NAME_PATTERN = re.compile(r"[A-Za-z0-9]+")


@dataclass(frozen=True)
class EntityRecord:
    """Single entity name bound to a code point."""

    name: str
    codepoint: int

    def __post_init__(self) -> None:
        """Validate entity record."""
        if not ENTITY_NAME_PATTERN.fullmatch(self.name):
            raise ValueError(f"Invalid entity name: {self.name!r}")
        if not 0 <= self.codepoint <= 0x10FFFF:
            raise ValueError(f"Codepoint out of range: {self.codepoint:#x}")

    @property
    def reference(self) -> str:
        """Full reference text, e.g. ``&lt;``."""
        return f"&{self.name};"


def canonical_sort_key(name: str) -> Tuple[int, str]:
    """Ordering used to pick the canonical name among aliases.

    Shorter names sort first; ``swapcase`` makes lowercase letters sort
    before uppercase ones at equal length.
    """
    return len(name), name.swapcase()


class EntityTable:
    """Read-only bidirectional mapping between entity names and code points."""

    def __init__(self, records: Iterable[EntityRecord]) -> None:
        """Build lookup structures from entity records.

        Args:
            records: Entity records; names must be unique

        Raises:
            ValueError: If a name appears twice
        """
        by_name: Dict[str, int] = {}
        grouped: Dict[int, List[str]] = {}
        for record in records:
            if record.name in by_name:
                raise ValueError(f"Duplicate entity name: {record.name}")
            by_name[record.name] = record.codepoint
            grouped.setdefault(record.codepoint, []).append(record.name)

        aliases = {
            codepoint: tuple(sorted(names, key=canonical_sort_key))
            for codepoint, names in grouped.items()
        }

        self._by_name: Mapping[str, int] = MappingProxyType(by_name)
        self._aliases: Mapping[int, Tuple[str, ...]] = MappingProxyType(aliases)
        self._max_name_length = max((len(name) for name in by_name), default=0)

    @classmethod
    def from_html5(cls) -> "EntityTable":
        """Build the table from the standard library's HTML5 entity list."""
        records = []
        for key, value in html.entities.html5.items():
            if not key.endswith(";") or len(value) != 1:
                continue
            records.append(EntityRecord(name=key[:-1], codepoint=ord(value)))
        return cls(records)

    def lookup_by_name(self, name: str) -> Optional[int]:
        """Return the code point for an entity name, or None if unknown.

        Names are case sensitive and given without ``&`` and ``;``.
        """
        return self._by_name.get(name)

    def lookup_by_codepoint(self, codepoint: int) -> Optional[str]:
        """Return the canonical entity name for a code point, or None."""
        names = self._aliases.get(codepoint)
        return names[0] if names else None

    def aliases(self, codepoint: int) -> Tuple[str, ...]:
        """Return every name for a code point, canonical name first."""
        return self._aliases.get(codepoint, ())

    def records(self) -> Iterator[EntityRecord]:
        """Iterate over all records in name order."""
        for name in sorted(self._by_name):
            yield EntityRecord(name, self._by_name[name])

    @property
    def max_name_length(self) -> int:
        """Length of the longest entity name."""
        return self._max_name_length

    @property
    def codepoint_count(self) -> int:
        """Number of distinct code points that have a name."""
        return len(self._aliases)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __len__(self) -> int:
        return len(self._by_name)


# Process-wide table, shared by every encode and decode call
ENTITY_TABLE = EntityTable.from_html5()


def lookup_by_name(name: str) -> Optional[int]:
    """Look up a name in the shared entity table."""
    return ENTITY_TABLE.lookup_by_name(name)


def lookup_by_codepoint(codepoint: int) -> Optional[str]:
    """Look up the canonical name of a code point in the shared entity table."""
    return ENTITY_TABLE.lookup_by_codepoint(codepoint)
