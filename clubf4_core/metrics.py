from __future__ import annotations

from typing import Iterable, Sequence

import pandas as pd

from .models import MEMBER_CODES, MEMBERS, PlayerName, PlayerStats, Round


def safe_div(numerator: float, denominator: float) -> float:
    return numerator / denominator if denominator else 0.0


def player_scores(rounds: Iterable[Round], player: PlayerName) -> list[int]:
    """Scores that count as games played: zero or missing entries are skipped."""
    scores: list[int] = []
    for r in rounds:
        score = r.score_for(player)
        if score:
            scores.append(score)
    return scores


def recent_score(all_rounds: Sequence[Round], player: PlayerName) -> int:
    newest_first = sorted(all_rounds, key=lambda r: r.date, reverse=True)
    for r in newest_first:
        score = r.score_for(player)
        if score is not None:
            return score
    return 0


def _rank_key(stats: PlayerStats) -> tuple[bool, float]:
    # Players without a game in the period sink to the bottom.
    return (stats.average_score == 0, stats.average_score)


def rank_players(stats: Iterable[PlayerStats]) -> list[PlayerStats]:
    ordered = sorted(stats, key=_rank_key)
    return [
        PlayerStats(
            player=s.player,
            average_score=s.average_score,
            best_score=s.best_score,
            recent_score=s.recent_score,
            games_played=s.games_played,
            total_score=s.total_score,
            rank=idx + 1,
        )
        for idx, s in enumerate(ordered)
    ]


def compute_player_stats(
    filtered_rounds: Sequence[Round],
    all_rounds: Sequence[Round],
    members: Sequence[PlayerName] = MEMBERS,
) -> list[PlayerStats]:
    """Leaderboard rows for ``members``, ranked by average score (lower is better).

    Average, best and total come from ``filtered_rounds``; the recent score is
    always taken from the full ``all_rounds`` history.
    """
    unranked: list[PlayerStats] = []
    for player in members:
        scores = player_scores(filtered_rounds, player)
        total = sum(scores)
        unranked.append(
            PlayerStats(
                player=player,
                average_score=safe_div(total, len(scores)),
                best_score=min(scores) if scores else 0,
                recent_score=recent_score(all_rounds, player),
                games_played=len(scores),
                total_score=total,
            )
        )
    return rank_players(unranked)


def format_score(value: float, places: int = 0) -> str:
    if value <= 0:
        return "-"
    return f"{value:.{places}f}"


def leaderboard_frame(stats: Sequence[PlayerStats]) -> pd.DataFrame:
    rows = [
        {
            "Rank": s.rank,
            "Member": s.player.value,
            "Code": MEMBER_CODES.get(s.player, ""),
            "AVG": format_score(s.average_score, 1),
            "BEST": format_score(s.best_score),
            "RECENT": format_score(s.recent_score),
            "Games": s.games_played,
            "Total": s.total_score,
        }
        for s in stats
    ]
    return pd.DataFrame(rows, columns=["Rank", "Member", "Code", "AVG", "BEST", "RECENT", "Games", "Total"])
