"""Manual seat overrides applied on top of a computed layout."""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Iterable, List, Optional

from .layout import build_index
from .models import Layout, MANUAL, SEAT_POSITIONS, Seat, Table

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SeatOverride:
    """Place an occupant at a specific table and position."""

    table_no: int
    pos: str
    id: str
    name: str
    summary: Optional[str] = None

    def __post_init__(self) -> None:
        try:
            table_no = int(self.table_no)
        except (TypeError, ValueError):
            raise ValueError(f"Invalid table number for {self.name}: {self.table_no!r}")
        object.__setattr__(self, "table_no", table_no)
        if self.table_no < 1:
            raise ValueError(f"Invalid table number for {self.name}: {self.table_no}")
        if self.pos not in SEAT_POSITIONS:
            raise ValueError(f"Unknown seat position for {self.name}: {self.pos}")


def apply_overrides(result: Layout, overrides: Iterable[SeatOverride]) -> Layout:
    """Return a new layout with each override seated, in order.

    The occupant is first removed from wherever they already sit. Missing
    tables are appended empty up to the requested table number.
    """
    tables: List[List[Seat]] = [list(t.seats) for t in result.tables]
    numbers: List[int] = [t.table_no for t in result.tables]

    for ov in overrides:
        for seats in tables:
            for idx, s in enumerate(seats):
                if s.id == ov.id:
                    seats[idx] = Seat.empty(s.pos)

        while ov.table_no not in numbers:
            numbers.append(max(numbers, default=0) + 1)
            tables.append([Seat.empty(p) for p in SEAT_POSITIONS])

        seats = tables[numbers.index(ov.table_no)]
        idx = SEAT_POSITIONS.index(ov.pos)
        if not seats[idx].is_empty:
            logger.info("Override replaces %s at table %d %s", seats[idx].name, ov.table_no, ov.pos)
        seats[idx] = Seat(
            pos=ov.pos,
            id=ov.id,
            name=ov.name,
            summary=ov.summary or "",
            block_type=MANUAL,
            group_members=((ov.id, ov.name),),
        )

    out = [Table(table_no=no, seats=tuple(seats)) for no, seats in zip(numbers, tables)]
    return replace(result, tables=tuple(out), id_to_table=build_index(out))
