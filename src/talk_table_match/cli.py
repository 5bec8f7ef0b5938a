"""Command line interface for TalkTableMatch."""
from __future__ import annotations

import argparse
import csv
import logging
import sys
from pathlib import Path
from typing import Sequence

from rich.logging import RichHandler

from .config import load_event_config
from .csv_loader import load_overrides, load_respondents
from .layout import find_seat, layout
from .matcher import block_stats, match, seat_rows
from .models import MANUAL
from .overrides import apply_overrides

logger = logging.getLogger(__name__)

TABLE_FIELDS = ["table_no", "pos", "id", "name", "block_type", "summary"]
SEAT_FIELDS = ["seat", "block_type", "id", "name", "q1", "q2", "q3", "q4", "q5"]


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Conversation table seating")
    parser.add_argument("--responses", required=True, help="Path to responses.csv")
    parser.add_argument("--overrides", help="Path to manual seat overrides CSV.")
    parser.add_argument("--config", type=Path, help="Path to event YAML settings.")
    parser.add_argument("--summary-length", type=int,
                        help="Maximum length of the seat summary text.")
    parser.add_argument("--my-seat", metavar="ID",
                        help="Show the seat of one respondent if results are published.")
    parser.add_argument("--out-seats", type=Path,
                        help="Write matched seat list CSV: seat,block_type,id,name,q1..q5. "
                             "Built from the matched blocks, manual seats are not included.")
    parser.add_argument("--out-tables", type=Path,
                        help="Write per seat table CSV: table_no,pos,id,name,block_type,summary.")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point used by ``python -m talk_table_match.cli``."""
    parser = build_parser()
    args = parser.parse_args(argv)
    _setup_logging(args.verbose)

    try:
        config = load_event_config(args.config)
        respondents = load_respondents(args.responses)
        overrides = load_overrides(args.overrides) if args.overrides else []
    except ValueError as e:
        logger.error("Input validation error: %s", e)
        return 2

    summary_length = args.summary_length or config.summary_length
    logger.info("Loaded %d respondents, %d overrides", len(respondents), len(overrides))

    result = layout(respondents, summary_length=summary_length)
    if overrides:
        result = apply_overrides(result, overrides)

    if args.my_seat:
        if not config.published:
            print("not published")
            return 0
        found = find_seat(result, args.my_seat)
        if found is None:
            logger.error("Seat not found: %s", args.my_seat)
            return 1
        table, seat = found
        print(f"T{table.table_no} {seat.pos}: {seat.name}")
        for s in table.seats:
            print(f"  {s.pos}: {s.name if not s.is_empty else '(empty)'}")
        return 0

    for table in result.tables:
        for s in table.seats:
            if s.is_empty:
                print(f"T{table.table_no} {s.pos}: (empty)")
            else:
                print(f"T{table.table_no} {s.pos}: {s.name} [{s.block_type}] {s.summary}")

    blocks = match(respondents)
    for stats in (block_stats(b) for b in blocks):
        print(f"[REPORT] {'|'.join(stats['names'])} type={stats['type']} "
              f"distance={stats['distance']} talkers={stats['talkers']} "
              f"listeners={stats['listeners']} similar={stats['similarity_pass']}")
    for table in result.tables:
        for s in table.occupied:
            if s.block_type == MANUAL:
                print(f"[MANUAL] T{table.table_no} {s.pos}: {s.name}")

    if args.out_seats:
        args.out_seats.parent.mkdir(parents=True, exist_ok=True)
        with args.out_seats.open("w", newline="", encoding="utf-8") as f:
            w = csv.DictWriter(f, fieldnames=SEAT_FIELDS)
            w.writeheader()
            w.writerows(seat_rows(blocks))

    if args.out_tables:
        args.out_tables.parent.mkdir(parents=True, exist_ok=True)
        with args.out_tables.open("w", newline="", encoding="utf-8") as f:
            w = csv.DictWriter(f, fieldnames=TABLE_FIELDS)
            w.writeheader()
            for table in result.tables:
                for s in table.seats:
                    w.writerow({
                        "table_no": table.table_no,
                        "pos": s.pos,
                        "id": s.id or "",
                        "name": s.name,
                        "block_type": s.block_type,
                        "summary": s.summary,
                    })
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    sys.exit(main())
