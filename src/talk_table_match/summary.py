"""Fallback summarizer for the free text answer."""
from __future__ import annotations

DEFAULT_SUMMARY_LENGTH = 40
ELLIPSIS = "…"


def truncate_summary(text: object, max_len: int = DEFAULT_SUMMARY_LENGTH) -> str:
    """Collapse whitespace and cut ``text`` to ``max_len`` characters.

    Text that is cut ends with an ellipsis which counts toward ``max_len``.
    """
    if max_len <= 0 or text is None:
        return ""
    clean = " ".join(str(text).split())
    if len(clean) <= max_len:
        return clean
    return clean[: max_len - 1].rstrip() + ELLIPSIS
