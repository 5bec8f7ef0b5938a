"""Load event settings from YAML into typed dataclasses."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional

import yaml

from .summary import DEFAULT_SUMMARY_LENGTH

logger = logging.getLogger(__name__)

QUESTION_KEYS = ("q1", "q2", "q3", "q4")


def _default_questions() -> Dict[str, str]:
    return {k: f"{k.upper()} question text" for k in QUESTION_KEYS}


@dataclass
class EventConfig:
    questions: Dict[str, str] = field(default_factory=_default_questions)
    summary_length: int = DEFAULT_SUMMARY_LENGTH
    published: bool = False


def load_event_config(path: Optional[Path | str] = None) -> EventConfig:
    """Load the event settings file.

    A missing path or file gives the defaults. Raises ValueError when the
    document is not a mapping or the summary length is not positive.
    """
    if path is None:
        return EventConfig()
    settings_path = Path(path)
    if not settings_path.exists():
        logger.info("Event config %s not found, using defaults", settings_path)
        return EventConfig()

    with settings_path.open("r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}
    if not isinstance(raw, dict):
        raise ValueError(f"Event config must be a mapping: {settings_path}")

    questions = _default_questions()
    for key, text in (raw.get("questions") or {}).items():
        if key in questions and text is not None:
            questions[key] = str(text)

    summary_length = int(raw.get("summary_length", DEFAULT_SUMMARY_LENGTH))
    if summary_length <= 0:
        raise ValueError(f"summary_length must be positive, got {summary_length}")

    return EventConfig(
        questions=questions,
        summary_length=summary_length,
        published=bool(raw.get("published", False)),
    )
