from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any, Sequence

from .errors import ImportFormatError, ImportParseError, ImportSchemaError
from .models import Round

EXPORT_PREFIX = "CLUBF4"
EXPORT_MIME = "application/json"


def export_filename(now: datetime | None = None) -> str:
    stamp = (now or datetime.now(timezone.utc)).strftime("%Y%m%d%H%M%S")
    return f"{EXPORT_PREFIX}_{stamp}.json"


def rounds_to_payload(rounds: Sequence[Round]) -> list[dict[str, Any]]:
    return [r.to_dict() for r in rounds]


def export_rounds(rounds: Sequence[Round]) -> str:
    return json.dumps(rounds_to_payload(rounds), indent=2, ensure_ascii=False)


def rounds_from_payload(payload: Any) -> list[Round]:
    if not isinstance(payload, list):
        raise ImportFormatError()
    rounds: list[Round] = []
    seen_ids: set[str] = set()
    for idx, item in enumerate(payload):
        try:
            parsed = Round.from_dict(item)
        except ValueError as exc:
            raise ImportSchemaError(idx, str(exc)) from exc
        if parsed.id in seen_ids:
            raise ImportSchemaError(idx, f"duplicate id {parsed.id!r}")
        seen_ids.add(parsed.id)
        rounds.append(parsed)
    return rounds


def parse_backup(raw: str | bytes) -> list[Round]:
    if isinstance(raw, bytes):
        try:
            raw = raw.decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise ImportParseError() from exc
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ImportParseError() from exc
    return rounds_from_payload(payload)
