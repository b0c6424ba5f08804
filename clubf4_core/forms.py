from __future__ import annotations

import re
from datetime import date
from typing import Any, Mapping

from .errors import FormValidationError
from .models import MEMBERS, PlayerName, Round, ScoreEntry

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_score_input(raw: Any) -> int:
    if raw is None:
        return 0
    if isinstance(raw, bool):
        return 0
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float):
        return int(raw)
    m = _LEADING_INT.match(str(raw))
    if not m:
        return 0
    return int(m.group(1))


def validate_round_form(course: str, raw_scores: Mapping[PlayerName, Any]) -> tuple[str, list[ScoreEntry]]:
    scores = [ScoreEntry(player=member, score=parse_score_input(raw_scores.get(member))) for member in MEMBERS]
    course_name = (course or "").strip()
    if not course_name or any(entry.score <= 0 for entry in scores):
        raise FormValidationError()
    return course_name, scores


def form_defaults(existing: Round | None = None, today: date | None = None) -> dict[str, Any]:
    if existing is None:
        return {
            "date": today or date.today(),
            "course": "",
            "scores": {member: "" for member in MEMBERS},
        }
    scores = {member: "" for member in MEMBERS}
    for entry in existing.scores:
        scores[entry.player] = str(entry.score)
    return {"date": existing.date, "course": existing.course, "scores": scores}
