from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date
from enum import Enum
from typing import Any, Iterable


class PlayerName(str, Enum):
    GREGORY = "GREGORY"
    BIRCHAN = "BIRCHAN"
    PETER = "PETER"
    SEVEN = "SEVEN"


MEMBERS: tuple[PlayerName, ...] = (
    PlayerName.GREGORY,
    PlayerName.BIRCHAN,
    PlayerName.PETER,
    PlayerName.SEVEN,
)

MEMBER_CODES: dict[PlayerName, str] = {
    PlayerName.GREGORY: "B59",
    PlayerName.BIRCHAN: "K341",
    PlayerName.PETER: "J71",
    PlayerName.SEVEN: "K396",
}


class RankingPeriod(str, Enum):
    ALL_TIME = "ALL_TIME"
    WEEKLY = "WEEKLY"
    MONTHLY = "MONTHLY"
    QUARTERLY = "QUARTERLY"
    SEMI_ANNUALLY = "SEMI_ANNUALLY"
    YEARLY = "YEARLY"

    @property
    def label(self) -> str:
        return PERIOD_LABELS[self]


PERIOD_LABELS: dict[RankingPeriod, str] = {
    RankingPeriod.ALL_TIME: "All Time",
    RankingPeriod.WEEKLY: "Weekly",
    RankingPeriod.MONTHLY: "Monthly",
    RankingPeriod.QUARTERLY: "Quarterly",
    RankingPeriod.SEMI_ANNUALLY: "Semi-Annually",
    RankingPeriod.YEARLY: "Yearly",
}


@dataclass(frozen=True)
class ScoreEntry:
    player: PlayerName
    score: int

    def to_dict(self) -> dict[str, Any]:
        return {"playerName": self.player.value, "score": self.score}

    @classmethod
    def from_dict(cls, raw: Any) -> "ScoreEntry":
        if not isinstance(raw, dict):
            raise ValueError("score entry must be an object")
        try:
            player = PlayerName(raw["playerName"])
        except KeyError:
            raise ValueError("score entry is missing playerName") from None
        except ValueError:
            raise ValueError(f"unknown player {raw['playerName']!r}") from None
        score = raw.get("score")
        # bool is an int subclass; reject it explicitly
        if isinstance(score, bool) or not isinstance(score, int):
            raise ValueError(f"score for {player.value} must be an integer")
        return cls(player=player, score=score)


@dataclass(frozen=True)
class Round:
    id: str
    date: date
    course: str
    scores: tuple[ScoreEntry, ...] = field(default_factory=tuple)

    def score_for(self, player: PlayerName) -> int | None:
        for entry in self.scores:
            if entry.player == player:
                return entry.score
        return None

    def with_changes(self, **changes: Any) -> "Round":
        if "scores" in changes:
            changes["scores"] = tuple(changes["scores"])
        return replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "date": self.date.isoformat(),
            "course": self.course,
            "scores": [entry.to_dict() for entry in self.scores],
        }

    @classmethod
    def from_dict(cls, raw: Any) -> "Round":
        if not isinstance(raw, dict):
            raise ValueError("round must be an object")
        missing = sorted({"id", "date", "course", "scores"} - set(raw))
        if missing:
            raise ValueError(f"missing fields {missing}")
        round_id = raw["id"]
        if not isinstance(round_id, str) or not round_id:
            raise ValueError("id must be a non-empty string")
        if not isinstance(raw["course"], str):
            raise ValueError("course must be a string")
        if not isinstance(raw["date"], str):
            raise ValueError("date must be a YYYY-MM-DD string")
        try:
            round_date = date.fromisoformat(raw["date"])
        except ValueError:
            raise ValueError(f"invalid date {raw['date']!r}") from None
        if not isinstance(raw["scores"], list):
            raise ValueError("scores must be a list")
        scores = tuple(ScoreEntry.from_dict(item) for item in raw["scores"])
        return cls(id=round_id, date=round_date, course=raw["course"], scores=scores)


@dataclass(frozen=True)
class PlayerStats:
    player: PlayerName
    average_score: float
    best_score: int
    recent_score: int
    games_played: int
    total_score: int
    rank: int = 0


def sort_rounds(rounds: Iterable[Round]) -> list[Round]:
    return sorted(rounds, key=lambda r: r.date)
