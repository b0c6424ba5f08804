from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Iterable

import pandas as pd

from .models import PlayerName, Round


@dataclass(frozen=True)
class TrendPoint:
    date: date
    course: str
    scores: dict[PlayerName, int] = field(default_factory=dict)


def project_trend(filtered_rounds: Iterable[Round]) -> list[TrendPoint]:
    points: list[TrendPoint] = []
    for r in sorted(filtered_rounds, key=lambda item: item.date):
        scores: dict[PlayerName, int] = {}
        for entry in r.scores:
            scores[entry.player] = entry.score
        points.append(TrendPoint(date=r.date, course=r.course, scores=scores))
    return points


def trend_frame(points: Iterable[TrendPoint]) -> pd.DataFrame:
    rows: list[dict[str, object]] = []
    for idx, point in enumerate(points):
        for player, score in point.scores.items():
            rows.append(
                {
                    "point": idx,
                    "date": pd.Timestamp(point.date),
                    "label": point.date.strftime("%m/%d"),
                    "course": point.course,
                    "player": player.value,
                    "score": score,
                }
            )
    return pd.DataFrame(rows, columns=["point", "date", "label", "course", "player", "score"])
