"""CSV loading utilities."""
from __future__ import annotations

import math
from pathlib import Path
from typing import IO, Any, List

import pandas as pd

from .models import Respondent, parse_bool
from .overrides import SeatOverride

RESPONSE_COLUMNS = ["id", "name", "q1", "q2", "q3", "q4", "q5"]
OVERRIDE_COLUMNS = ["table_no", "pos", "id", "name"]


def _read(path: Path | str | IO[Any]) -> pd.DataFrame:
    # Every cell stays text so ids like 007 and names like "NA" survive
    return pd.read_csv(path, dtype=str, keep_default_na=False, na_values=[""])


def _text(value: object) -> str:
    """Cell as stripped text. Blank cells (``NaN`` from ``pandas``) become ``""``."""
    if value is None:
        return ""
    if isinstance(value, float) and math.isnan(value):
        return ""
    return str(value).strip()


def _require_columns(df: pd.DataFrame, required: List[str], label: str) -> None:
    missing = [col for col in required if col not in df.columns]
    if missing:
        raise ValueError(f"Missing columns in {label}: {', '.join(missing)}")


def load_respondents(path: Path | str | IO[Any]) -> List[Respondent]:
    """Load attending respondents from a responses CSV.

    Rows marked ``absent`` are skipped. Validates names, yes/no answers,
    the free text answer and id uniqueness.
    """
    df = _read(path)
    _require_columns(df, RESPONSE_COLUMNS, "responses")

    respondents: List[Respondent] = []
    seen = set()
    for idx, row in df.iterrows():
        line = idx + 2  # header is line 1
        if "absent" in df.columns and parse_bool(row.get("absent")):
            continue

        rid = _text(row["id"])
        name = _text(row["name"])
        if not rid:
            raise ValueError(f"Row {line}: id is required")
        if not name:
            raise ValueError(f"Row {line}: name is required")
        if rid in seen:
            raise ValueError(f"Row {line}: duplicate id {rid}")

        answers = {}
        for key in ("q1", "q2", "q3", "q4"):
            value = parse_bool(row[key])
            if value is None:
                raise ValueError(f"Row {line}: {key} must be Yes or No, got {row[key]!r}")
            answers[key] = value

        q5 = _text(row["q5"])
        if not q5:
            raise ValueError(f"Row {line}: q5 is required")

        short = _text(row.get("q5_short", "")) or None
        respondents.append(Respondent(id=rid, name=name, q5=q5, q5_short=short, **answers))
        seen.add(rid)
    return respondents


def load_overrides(path: Path | str | IO[Any]) -> List[SeatOverride]:
    """Load manual seat overrides."""
    df = _read(path)
    _require_columns(df, OVERRIDE_COLUMNS, "overrides")

    overrides: List[SeatOverride] = []
    for idx, row in df.iterrows():
        try:
            table_no = int(row["table_no"])
        except (TypeError, ValueError):
            raise ValueError(f"Row {idx + 2}: table_no must be a number, got {row['table_no']!r}")
        overrides.append(
            SeatOverride(
                table_no=table_no,
                pos=_text(row["pos"]),
                id=_text(row["id"]),
                name=_text(row["name"]),
                summary=_text(row.get("summary", "")) or None,
            )
        )
    return overrides
