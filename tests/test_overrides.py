import pathlib
import sys

import pytest

# Ensure src package is on path
sys.path.append(str(pathlib.Path(__file__).resolve().parents[1] / "src"))

from talk_table_match.layout import layout
from talk_table_match.models import Respondent
from talk_table_match.overrides import SeatOverride, apply_overrides


def person(rid, q1, q2):
    return Respondent(id=rid, name=rid.upper(), q1=q1, q2=q2, q3=True, q4=False, q5="hello")


@pytest.fixture
def base():
    return layout([person("a", True, True), person("b", False, False)])


def test_fills_empty_seat(base):
    result = apply_overrides(base, [SeatOverride(table_no=1, pos="bottom-left", id="x", name="Xavier")])
    seat = result.tables[0].seat_at("bottom-left")
    assert seat.id == "x"
    assert seat.block_type == "manual"
    assert result.id_to_table == {"a": 1, "b": 1, "x": 1}


def test_input_layout_is_untouched(base):
    apply_overrides(base, [SeatOverride(table_no=1, pos="bottom-left", id="x", name="Xavier")])
    assert base.id_to_table == {"a": 1, "b": 1}
    assert base.tables[0].seat_at("bottom-left").is_empty


def test_missing_tables_are_created(base):
    result = apply_overrides(base, [SeatOverride(table_no=3, pos="top-right", id="x", name="Xavier", summary="new")])
    assert [t.table_no for t in result.tables] == [1, 2, 3]
    assert result.tables[1].occupied == ()
    assert result.tables[2].seat_at("top-right").summary == "new"
    assert result.id_to_table["x"] == 3


def test_moving_a_respondent_clears_old_seat(base):
    result = apply_overrides(base, [SeatOverride(table_no=2, pos="top-left", id="a", name="A")])
    assert result.tables[0].seat_at("top-left").is_empty
    assert result.id_to_table == {"a": 2, "b": 1}


def test_overwriting_an_occupied_seat_unseats_the_occupant(base):
    result = apply_overrides(base, [SeatOverride(table_no=1, pos="top-right", id="x", name="Xavier")])
    assert result.tables[0].seat_at("top-right").id == "x"
    assert "b" not in result.id_to_table


def test_overrides_apply_in_order(base):
    result = apply_overrides(base, [
        SeatOverride(table_no=1, pos="bottom-left", id="x", name="Xavier"),
        SeatOverride(table_no=1, pos="bottom-right", id="x", name="Xavier"),
    ])
    assert result.tables[0].seat_at("bottom-left").is_empty
    assert result.tables[0].seat_at("bottom-right").id == "x"


def test_override_on_empty_layout():
    result = apply_overrides(layout([]), [SeatOverride(table_no=1, pos="top-left", id="x", name="Xavier")])
    assert len(result.tables) == 1
    assert result.id_to_table == {"x": 1}


def test_text_table_number_is_normalized():
    override = SeatOverride(table_no="2", pos="top-left", id="x", name="Xavier")
    assert override.table_no == 2
    result = apply_overrides(layout([]), [SeatOverride(table_no="1", pos="top-left", id="x", name="Xavier")])
    assert [t.table_no for t in result.tables] == [1]
    assert result.id_to_table == {"x": 1}


@pytest.mark.parametrize("table_no,pos", [(0, "top-left"), (1, "middle"), ("one", "top-left"), (None, "top-left")])
def test_invalid_override(table_no, pos):
    with pytest.raises(ValueError):
        SeatOverride(table_no=table_no, pos=pos, id="x", name="Xavier")
