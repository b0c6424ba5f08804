from __future__ import annotations

from clubf4_core.brand import APP_NAME, BADGE, DISCLAIMER, TAGLINE
from clubf4_core.models import PlayerName

APP_TITLE = APP_NAME
APP_SUBTITLE = TAGLINE
APP_BADGE = BADGE
APP_DISCLAIMER = DISCLAIMER

SECTION_GAP_MD = '<div style="margin-top:0.45rem;"></div>'

HELP_TEXT = {
    "leaderboard": "Average, Best, and Recent scores by member.",
    "history_short": "Showing the 5 most recent rounds.",
    "history_all": "Viewing all round history.",
    "trends_empty": "No trend data for selected period.",
    "history_empty": "No rounds recorded yet. Use Record Round to add the first one.",
    "backup": "Download every round as JSON, or restore a previous backup.",
    "restore_warning": "데이터를 복구하시겠습니까? 기존 데이터는 덮어씌워집니다.",
    "restore_done": "데이터 복구가 완료되었습니다.",
    "delete_confirm": "정말로 이 라운드 기록을 삭제하시겠습니까?",
    "seed_fallback": "No saved rounds were found, so the built-in rounds are shown.",
}

METRIC_HELP = {
    "avg": "Average score over the selected period; lower is better.",
    "best": "Lowest single-round score in the selected period.",
    "recent": "Score from the member's latest round across all history.",
}

MEMBER_COLORS = {
    PlayerName.GREGORY: "#4F46E5",
    PlayerName.BIRCHAN: "#16A34A",
    PlayerName.PETER: "#EC4899",
    PlayerName.SEVEN: "#0EA5E9",
}

RANK_ACCENTS = {1: "#D4AF37", 2: "#94A3B8", 3: "#D97706"}
