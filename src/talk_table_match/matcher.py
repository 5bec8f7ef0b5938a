"""
Conversation pairing matcher.

Respondents are grouped into blocks of two (one block of three when the
count is odd) using the answers to q1 and q2:
    q3 = No:  paired with the most similar q3 = No respondent left
    others:   paired with the most different respondent left
q4 decides left and right inside a pair: talkers (No) sit left,
listeners (Yes) sit right.
"""
from __future__ import annotations

import logging
from itertools import combinations
from typing import Dict, List, Sequence, Set, Tuple

from .models import Block, PAIR, Respondent, TRIAD

logger = logging.getLogger(__name__)


# ----------------------------- scoring helpers -----------------------------
def attribute_distance(a: Respondent, b: Respondent) -> int:
    """Number of differing answers on q1 and q2 (0 to 2)."""
    return int(a.q1 != b.q1) + int(a.q2 != b.q2)


def order_left_right(pair: Sequence[Respondent]) -> List[Respondent]:
    """Put the talker (q4 False) left and the listener (q4 True) right."""
    a, b = pair
    if a.q4 and not b.q4:
        return [b, a]
    return [a, b]


def block_stats(block: Block) -> Dict[str, object]:
    """Distance and talker/listener breakdown for a block's members."""
    distances = [attribute_distance(a, b) for a, b in combinations(block.members, 2)]
    listeners = sum(1 for m in block.members if m.q4)
    return {
        "type": block.type,
        "size": len(block.members),
        "ids": list(block.ids),
        "names": [m.name for m in block.members],
        "distance": sum(distances),
        "max_distance": max(distances) if distances else 0,
        "listeners": listeners,
        "talkers": len(block.members) - listeners,
        "similarity_pass": all(m.q3 is False for m in block.members),
    }


def seat_rows(blocks: Sequence[Block]) -> List[Dict[str, object]]:
    """Flatten blocks into CSV friendly rows with a running seat index."""
    rows = []
    seat = 1
    for block in blocks:
        for m in block.members:
            rows.append({
                "seat": seat,
                "block_type": block.type,
                "id": m.id,
                "name": m.name,
                "q1": _yes_no(m.q1),
                "q2": _yes_no(m.q2),
                "q3": _yes_no(m.q3),
                "q4": _yes_no(m.q4),
                "q5": m.q5,
            })
            seat += 1
    return rows


def _yes_no(value: bool) -> str:
    return "Yes" if value else "No"


# ----------------------------- passes -----------------------------
def _similarity_pass(group_a: List[Respondent], used: Set[str]) -> List[List[Respondent]]:
    """Pair q3 = No respondents with their closest remaining match."""
    pairs: List[List[Respondent]] = []
    for i, a in enumerate(group_a):
        if a.id in used:
            continue
        best = None
        best_score = None
        for b in group_a[i + 1:]:
            if b.id in used:
                continue
            d = attribute_distance(a, b)
            if best_score is None or d < best_score:
                best_score = d
                best = b
        if best is not None:
            used.add(a.id)
            used.add(best.id)
            pairs.append(order_left_right([a, best]))
    return pairs


def _difference_pass(remaining: List[Respondent]) -> Tuple[List[List[Respondent]], List[Respondent]]:
    """Pair the first remaining respondent with the most different one, repeatedly."""
    pool = list(remaining)
    pairs: List[List[Respondent]] = []
    while len(pool) >= 2:
        a = pool.pop(0)
        best_idx = 0
        best_score = -1
        for idx, b in enumerate(pool):
            d = attribute_distance(a, b)
            if d > best_score:
                best_score = d
                best_idx = idx
        b = pool.pop(best_idx)
        pairs.append(order_left_right([a, b]))
    return pairs, pool


# ----------------------------- main match -----------------------------
def match(respondents: Sequence[Respondent]) -> List[Block]:
    """Group respondents into pair and triad blocks.

    Never raises. An empty or single respondent list yields no blocks.
    """
    rows = list(respondents)
    group_a = [r for r in rows if r.q3 is False]

    used: Set[str] = set()
    groups = _similarity_pass(group_a, used)

    remaining = [r for r in rows if r.id not in used]
    more, leftover = _difference_pass(remaining)
    groups.extend(more)

    # One respondent left over joins the first block produced
    if leftover and groups:
        groups[0].append(leftover[0])

    blocks = [Block(type=TRIAD if len(g) == 3 else PAIR, members=tuple(g)) for g in groups]
    logger.debug("Matched %d respondents into %d blocks", len(rows), len(blocks))
    return blocks
