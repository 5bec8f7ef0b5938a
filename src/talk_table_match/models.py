"""Data models for TalkTableMatch."""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional, Tuple
import math


PAIR = "pair"
TRIAD = "triad"
SOLO = "solo"
MANUAL = "manual"

SEAT_POSITIONS: Tuple[str, str, str, str] = ("top-left", "top-right", "bottom-left", "bottom-right")

_TRUE_STRINGS = {"yes", "y", "true", "1"}
_FALSE_STRINGS = {"no", "n", "false", "0"}


def parse_bool(value: object) -> Optional[bool]:
    """Parse a yes/no survey answer.

    Accepts real booleans plus ``yes``/``no``, ``y``/``n``, ``true``/``false``
    and ``1``/``0`` in any case. Anything else, including ``None`` and
    ``float('nan')`` coming from ``pandas``, returns ``None``.
    """
    if isinstance(value, bool):
        return value
    if value is None:
        return None
    if isinstance(value, float):
        if math.isnan(value):
            return None
        if value in (0.0, 1.0):
            return bool(value)
    text = str(value).strip().lower()
    if text in _TRUE_STRINGS:
        return True
    if text in _FALSE_STRINGS:
        return False
    return None


@dataclass(frozen=True)
class Respondent:
    """One participant's validated survey answers."""

    id: str
    name: str
    q1: bool
    q2: bool
    q3: bool
    q4: bool
    q5: str = ""
    q5_short: Optional[str] = None


@dataclass(frozen=True)
class Block:
    """Matched seating unit: a pair or a triad, left to right."""

    type: str
    members: Tuple[Respondent, ...]

    @property
    def ids(self) -> Tuple[str, ...]:
        return tuple(m.id for m in self.members)


@dataclass(frozen=True)
class Seat:
    """One of the four slots of a table. Empty when ``id`` is None."""

    pos: str
    id: Optional[str] = None
    name: str = ""
    summary: str = ""
    block_type: str = ""
    group_members: Tuple[Tuple[str, str], ...] = ()

    @classmethod
    def empty(cls, pos: str) -> "Seat":
        return cls(pos=pos)

    @property
    def is_empty(self) -> bool:
        return self.id is None


@dataclass(frozen=True)
class Table:
    """Four seat table, seats ordered as ``SEAT_POSITIONS``."""

    table_no: int
    seats: Tuple[Seat, ...]

    def seat_at(self, pos: str) -> Seat:
        return self.seats[SEAT_POSITIONS.index(pos)]

    @property
    def occupied(self) -> Tuple[Seat, ...]:
        return tuple(s for s in self.seats if not s.is_empty)


@dataclass(frozen=True)
class Layout:
    """Tables plus the read-only respondent id to table number index."""

    tables: Tuple[Table, ...] = ()
    id_to_table: Mapping[str, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "id_to_table", MappingProxyType(dict(self.id_to_table)))
