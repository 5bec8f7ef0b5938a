"""Pack matched blocks into four seat tables."""
from __future__ import annotations

import logging
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from .matcher import match
from .models import Block, Layout, PAIR, Respondent, SEAT_POSITIONS, SOLO, Seat, Table, TRIAD
from .summary import DEFAULT_SUMMARY_LENGTH, truncate_summary

logger = logging.getLogger(__name__)

Summarizer = Callable[[str, int], str]

TOP_LEFT, TOP_RIGHT, BOTTOM_LEFT, BOTTOM_RIGHT = SEAT_POSITIONS


def layout(
    respondents: Sequence[Respondent],
    summarize: Summarizer = truncate_summary,
    summary_length: int = DEFAULT_SUMMARY_LENGTH,
) -> Layout:
    """Match respondents and seat the blocks at numbered tables.

    Two pairs share a table, top row then bottom row. A triad takes a table
    on its own with bottom-right left empty. A trailing pair leaves the
    bottom row empty. A lone respondent gets a solo table.
    """
    rows = list(respondents)
    blocks = match(rows)

    def seat(block_type: str, member: Respondent, group: Tuple[Respondent, ...], pos: str) -> Seat:
        summary = member.q5_short if member.q5_short else summarize(member.q5, summary_length)
        return Seat(
            pos=pos,
            id=member.id,
            name=member.name,
            summary=summary,
            block_type=block_type,
            group_members=tuple((m.id, m.name) for m in group),
        )

    def block_seats(block: Optional[Block], positions: Tuple[str, ...]) -> List[Seat]:
        out = []
        for idx, pos in enumerate(positions):
            if block is not None and idx < len(block.members):
                out.append(seat(block.type, block.members[idx], block.members, pos))
            else:
                out.append(Seat.empty(pos))
        return out

    if rows and not blocks:
        only = rows[0]
        seats = [seat(SOLO, only, (only,), TOP_LEFT)] + [Seat.empty(p) for p in SEAT_POSITIONS[1:]]
        tables = [Table(table_no=1, seats=tuple(seats))]
        return Layout(tables=tuple(tables), id_to_table=build_index(tables))

    tables: List[Table] = []
    table_no = 1
    i = 0
    while i < len(blocks):
        block = blocks[i]
        if block.type == TRIAD:
            seats = block_seats(block, (TOP_LEFT, TOP_RIGHT, BOTTOM_LEFT, BOTTOM_RIGHT))
            i += 1
        else:
            nxt = blocks[i + 1] if i + 1 < len(blocks) and blocks[i + 1].type == PAIR else None
            seats = block_seats(block, (TOP_LEFT, TOP_RIGHT)) + block_seats(nxt, (BOTTOM_LEFT, BOTTOM_RIGHT))
            i += 2 if nxt is not None else 1
        tables.append(Table(table_no=table_no, seats=tuple(seats)))
        table_no += 1

    logger.debug("Laid out %d blocks on %d tables", len(blocks), len(tables))
    return Layout(tables=tuple(tables), id_to_table=build_index(tables))


def build_index(tables: Iterable[Table]) -> Dict[str, int]:
    """Map every occupied seat's id to its table number."""
    index: Dict[str, int] = {}
    for table in tables:
        for s in table.seats:
            if not s.is_empty:
                index[s.id] = table.table_no
    return index


def find_seat(result: Layout, respondent_id: str) -> Optional[Tuple[Table, Seat]]:
    """Return the table and seat holding ``respondent_id``, or None."""
    table_no = result.id_to_table.get(str(respondent_id))
    if table_no is None:
        return None
    table = next((t for t in result.tables if t.table_no == table_no), None)
    if table is None:
        return None
    for s in table.seats:
        if s.id == str(respondent_id):
            return table, s
    return None
