from __future__ import annotations

from datetime import date, datetime
from typing import Iterable

from .models import RankingPeriod, Round

WEEKLY_WINDOW_DAYS = 7


def _as_date(now: date | datetime) -> date:
    if isinstance(now, datetime):
        return now.date()
    return now


def in_period(round_date: date, period: RankingPeriod, now: date | datetime) -> bool:
    today = _as_date(now)
    if period == RankingPeriod.WEEKLY:
        # Rolling window; future rounds fall outside it.
        diff_days = (today - round_date).days
        return 0 <= diff_days <= WEEKLY_WINDOW_DAYS
    if period == RankingPeriod.MONTHLY:
        return round_date.year == today.year and round_date.month == today.month
    if period == RankingPeriod.QUARTERLY:
        return round_date.year == today.year and (round_date.month - 1) // 3 == (today.month - 1) // 3
    if period == RankingPeriod.SEMI_ANNUALLY:
        return round_date.year == today.year and (round_date.month - 1) // 6 == (today.month - 1) // 6
    if period == RankingPeriod.YEARLY:
        return round_date.year == today.year
    return True


def filter_rounds(rounds: Iterable[Round], period: RankingPeriod, now: date | datetime) -> list[Round]:
    return [r for r in rounds if in_period(r.date, period, now)]


def period_caption(period: RankingPeriod) -> str:
    if period == RankingPeriod.ALL_TIME:
        return "Performance trends for all members over all history."
    return f"Performance trends for all members for current {period.value.lower()}."
