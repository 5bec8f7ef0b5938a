import pathlib
import sys

import pytest

# Ensure src package is on path
sys.path.append(str(pathlib.Path(__file__).resolve().parents[1] / "src"))

from talk_table_match.models import Respondent, Seat, Table, SEAT_POSITIONS, parse_bool
from talk_table_match.summary import truncate_summary


@pytest.mark.parametrize("value,expected", [
    (True, True),
    (False, False),
    ("Yes", True),
    (" no ", False),
    ("Y", True),
    ("n", False),
    ("TRUE", True),
    ("false", False),
    ("1", True),
    (0, False),
    (1.0, True),
    ("maybe", None),
    ("", None),
    (None, None),
    (float("nan"), None),
])
def test_parse_bool(value, expected):
    assert parse_bool(value) is expected


def test_respondent_is_frozen():
    r = Respondent(id="1", name="Alex", q1=True, q2=False, q3=True, q4=False, q5="runs marathons")
    assert r.q5_short is None
    with pytest.raises(AttributeError):
        r.name = "Sam"


def test_table_helpers():
    seats = (Seat(pos="top-left", id="1", name="Alex"),) + tuple(Seat.empty(p) for p in SEAT_POSITIONS[1:])
    table = Table(table_no=1, seats=seats)
    assert table.seat_at("top-left").name == "Alex"
    assert table.seat_at("bottom-right").is_empty
    assert [s.id for s in table.occupied] == ["1"]


class TestTruncateSummary:
    def test_short_text_unchanged(self):
        assert truncate_summary("plays the cello", 40) == "plays the cello"

    def test_whitespace_collapsed(self):
        assert truncate_summary("  plays\n the   cello ", 40) == "plays the cello"

    def test_long_text_cut_with_ellipsis(self):
        out = truncate_summary("abcdefghijklmnopqrstuvwxyz", 10)
        assert out == "abcdefghi…"
        assert len(out) == 10

    def test_non_positive_length(self):
        assert truncate_summary("anything", 0) == ""

    def test_none(self):
        assert truncate_summary(None) == ""
