"""Streamlit UI for TalkTableMatch with CSV previews and validations."""
from __future__ import annotations

# Add src to sys.path so talk_table_match can be found
import sys
import os
import io
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "src"))

import pandas as pd
import streamlit as st
import streamlit.components.v1 as components

from talk_table_match.config import load_event_config
from talk_table_match.csv_loader import (
    OVERRIDE_COLUMNS,
    RESPONSE_COLUMNS,
    load_overrides,
    load_respondents,
)
from talk_table_match.layout import layout
from talk_table_match.matcher import block_stats, match, seat_rows
from talk_table_match.overrides import apply_overrides

# -----------------------------
# Helpers
# -----------------------------

def uploadedfile_to_df(uploaded_file) -> pd.DataFrame | None:
    """Read a Streamlit UploadedFile or file-like object into a DataFrame."""
    if uploaded_file is None:
        return None
    if hasattr(uploaded_file, "read"):
        uploaded_file.seek(0)
        return pd.read_csv(io.StringIO(uploaded_file.read().decode("utf-8")))
    return pd.read_csv(uploaded_file)

def df_to_csvio(df: pd.DataFrame) -> io.StringIO:
    """Serialize a DataFrame to a StringIO CSV buffer positioned at start."""
    buf = io.StringIO()
    df.to_csv(buf, index=False)
    buf.seek(0)
    return buf

def validate_columns(df: pd.DataFrame, required: list[str], file_label: str) -> bool:
    """Check required columns and show an error if any are missing."""
    missing = [col for col in required if col not in df.columns]
    if missing:
        st.error(f"Error in {file_label}: missing columns: {', '.join(missing)}")
        return False
    return True

def tables_to_df(result) -> pd.DataFrame:
    """One row per seat, empty seats included."""
    rows = []
    for table in result.tables:
        for s in table.seats:
            rows.append({
                "table": table.table_no,
                "pos": s.pos,
                "name": s.name if not s.is_empty else "(empty)",
                "block": s.block_type,
                "summary": s.summary,
            })
    return pd.DataFrame(rows, columns=["table", "pos", "name", "block", "summary"])

# -----------------------------
# Sidebar options
# -----------------------------

config = load_event_config(os.environ.get("TALK_TABLE_CONFIG"))

st.sidebar.header("Seating Options")
summary_length = st.sidebar.number_input(
    "Summary length",
    min_value=5,
    max_value=200,
    value=config.summary_length,
    help="Maximum number of characters shown for each answer to Q5.",
)
st.sidebar.markdown("**Questions**")
for key, text in config.questions.items():
    st.sidebar.caption(f"{key.upper()}: {text}")
st.sidebar.caption("Published" if config.published else "Not published")

# -----------------------------
# Main UI and previews
# -----------------------------

st.title("Talk Table Match")

_responses_file = st.file_uploader("Responses CSV", type="csv")
_overrides_file = st.file_uploader("Manual seats CSV (optional)", type="csv")

responses_valid = overrides_valid = True

if _responses_file is not None:
    responses_df = pd.read_csv(_responses_file)
    st.subheader("Responses preview")
    st.dataframe(responses_df, use_container_width=True)
    responses_valid = validate_columns(responses_df, RESPONSE_COLUMNS, "responses.csv")
    _responses_file.seek(0)

if _overrides_file is not None:
    overrides_df = pd.read_csv(_overrides_file)
    st.subheader("Manual seats preview")
    st.dataframe(overrides_df, use_container_width=True)
    overrides_valid = validate_columns(overrides_df, OVERRIDE_COLUMNS, "overrides.csv")
    _overrides_file.seek(0)

# -----------------------------
# Run button
# -----------------------------

run_disabled = _responses_file is None or not (responses_valid and overrides_valid)
run_clicked = st.button("Build tables", disabled=run_disabled, key="build_tables_button")

# -----------------------------
# Solve
# -----------------------------

if run_clicked and not run_disabled:
    try:
        respondents = load_respondents(df_to_csvio(uploadedfile_to_df(_responses_file)))
        overrides = []
        if _overrides_file is not None:
            overrides = load_overrides(df_to_csvio(uploadedfile_to_df(_overrides_file)))

        result = layout(respondents, summary_length=int(summary_length))
        if overrides:
            result = apply_overrides(result, overrides)

        st.subheader("Tables")
        st.dataframe(tables_to_df(result), use_container_width=True)

        blocks = match(respondents)
        st.subheader("Blocks")
        stats_df = pd.DataFrame([block_stats(b) for b in blocks])
        if not stats_df.empty:
            stats_df["names"] = stats_df["names"].apply(", ".join)
            stats_df = stats_df.drop(columns=["ids"])
        st.dataframe(stats_df, use_container_width=True)

        manual_df = tables_to_df(result)
        manual_df = manual_df[manual_df["block"] == "manual"]
        if not manual_df.empty:
            st.subheader("Manual seats")
            st.dataframe(manual_df, use_container_width=True)

        # Matched blocks only, manual seats are listed in the tables above
        csv_bytes = pd.DataFrame(seat_rows(blocks)).to_csv(index=False).encode("utf-8")
        st.download_button(
            "Download matched seats as CSV",
            csv_bytes,
            file_name="seats.csv",
        )

        st.subheader("Seating Map")
        from generate_seating_map import generate_seating_map
        html = generate_seating_map(result, respondents)
        components.html(html, height=600, scrolling=True)

    except ValueError as e:
        st.error(f"Input validation error: {e}")
        st.stop()
    except Exception as e:
        st.exception(e)
        st.stop()
