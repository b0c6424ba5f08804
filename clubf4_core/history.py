from __future__ import annotations

from typing import Sequence

from .models import Round

DEFAULT_HISTORY_LIMIT = 5


def recent_history(rounds: Sequence[Round], show_all: bool = False, limit: int = DEFAULT_HISTORY_LIMIT) -> list[Round]:
    newest_first = list(reversed(rounds))
    if show_all:
        return newest_first
    return newest_first[:limit]


def can_expand_history(rounds: Sequence[Round], limit: int = DEFAULT_HISTORY_LIMIT) -> bool:
    return len(rounds) > limit
