"""TalkTableMatch package."""
from .models import Block, Layout, Respondent, Seat, Table, SEAT_POSITIONS, parse_bool
from .matcher import attribute_distance, block_stats, match, order_left_right, seat_rows
from .layout import find_seat, layout
from .overrides import SeatOverride, apply_overrides
from .summary import truncate_summary
from .config import EventConfig, load_event_config
from .csv_loader import load_overrides, load_respondents

__all__ = [
    "Block",
    "Layout",
    "Respondent",
    "Seat",
    "Table",
    "SEAT_POSITIONS",
    "parse_bool",
    "attribute_distance",
    "block_stats",
    "match",
    "order_left_right",
    "seat_rows",
    "find_seat",
    "layout",
    "SeatOverride",
    "apply_overrides",
    "truncate_summary",
    "EventConfig",
    "load_event_config",
    "load_overrides",
    "load_respondents",
]
