from .backup import export_filename, export_rounds, parse_backup, rounds_from_payload
from .errors import (
    ClubF4Error,
    CommentaryFetchError,
    FormValidationError,
    ImportFormatError,
    ImportParseError,
    ImportSchemaError,
    PersistenceReadError,
    RoundNotFoundError,
)
from .forms import form_defaults, parse_score_input, validate_round_form
from .history import can_expand_history, recent_history
from .metrics import compute_player_stats, leaderboard_frame, safe_div
from .models import MEMBER_CODES, MEMBERS, PlayerName, PlayerStats, RankingPeriod, Round, ScoreEntry, sort_rounds
from .periods import filter_rounds, in_period, period_caption
from .trends import TrendPoint, project_trend, trend_frame

__all__ = [
    "PlayerName",
    "MEMBERS",
    "MEMBER_CODES",
    "RankingPeriod",
    "ScoreEntry",
    "Round",
    "PlayerStats",
    "sort_rounds",
    "in_period",
    "filter_rounds",
    "period_caption",
    "safe_div",
    "compute_player_stats",
    "leaderboard_frame",
    "TrendPoint",
    "project_trend",
    "trend_frame",
    "recent_history",
    "can_expand_history",
    "parse_score_input",
    "validate_round_form",
    "form_defaults",
    "export_filename",
    "export_rounds",
    "parse_backup",
    "rounds_from_payload",
    "ClubF4Error",
    "PersistenceReadError",
    "ImportParseError",
    "ImportFormatError",
    "ImportSchemaError",
    "FormValidationError",
    "CommentaryFetchError",
    "RoundNotFoundError",
]
