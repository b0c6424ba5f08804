from __future__ import annotations

import html
import logging
import sys
from datetime import date, datetime
from pathlib import Path
from typing import Any

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import altair as alt
import pandas as pd
import streamlit as st
from streamlit.errors import StreamlitSecretNotFoundError

from clubf4_core.backup import EXPORT_MIME, export_filename, export_rounds, parse_backup
from clubf4_core.errors import FormValidationError, ImportFormatError, ImportParseError, RoundNotFoundError
from clubf4_core.forms import form_defaults, validate_round_form
from clubf4_core.history import can_expand_history, recent_history
from clubf4_core.metrics import compute_player_stats, format_score, leaderboard_frame
from clubf4_core.models import MEMBER_CODES, MEMBERS, PlayerStats, RankingPeriod, Round
from clubf4_core.periods import filter_rounds, period_caption
from clubf4_core.trends import TrendPoint, project_trend, trend_frame
from clubf4_web.commentary import LOADING_TEXT, CommentaryBoard, GeminiCommentator
from clubf4_web.config import Settings, configure_logging, load_settings
from clubf4_web.record_store import KeyValueStorage, RecordStore
from clubf4_web.seed_data import load_seed_rounds
from clubf4_web.ui_constants import (
    APP_BADGE,
    APP_DISCLAIMER,
    APP_SUBTITLE,
    APP_TITLE,
    HELP_TEXT,
    MEMBER_COLORS,
    METRIC_HELP,
    RANK_ACCENTS,
    SECTION_GAP_MD,
)
from clubf4_web.ui_styles import get_app_css

logger = logging.getLogger(__name__)

PERIOD_KEY = "leaderboard_period"
SHOW_FORM_KEY = "round_form_open"
EDITING_KEY = "round_form_editing_id"
FORM_DATE_KEY = "round_form_date"
FORM_COURSE_KEY = "round_form_course"
FORM_SCORE_PREFIX = "round_form_score_"
SHOW_ALL_HISTORY_KEY = "history_show_all"
PENDING_DELETE_KEY = "history_pending_delete"
COMMENTARY_KEY = "commentary_board"
RESTORE_CONFIRM_KEY = "restore_confirm"
UPLOADER_KEY = "restore_uploader"
UPLOADER_NONCE_KEY = "restore_uploader_nonce"
FLASH_KEY = "flash_message"


def _secret_api_key() -> str | None:
    try:
        for name in ("GEMINI_API_KEY", "API_KEY"):
            value = st.secrets.get(name)
            if value:
                return str(value)
    except StreamlitSecretNotFoundError:
        return None
    return None


@st.cache_resource(show_spinner=False)
def _get_store(data_path: str) -> RecordStore:
    store = RecordStore(KeyValueStorage(data_path), seed=load_seed_rounds())
    store.load()
    return store


def _get_commentary_board(settings: Settings) -> CommentaryBoard | None:
    if not settings.commentary_enabled:
        return None
    board = st.session_state.get(COMMENTARY_KEY)
    if board is None:
        commentator = GeminiCommentator(settings.gemini_api_key, settings.gemini_model)
        board = CommentaryBoard(commentator.summarize)
        st.session_state[COMMENTARY_KEY] = board
    return board


def _inject_styles() -> None:
    st.markdown(get_app_css(), unsafe_allow_html=True)


def _flash(message: str) -> None:
    st.session_state[FLASH_KEY] = message


def _render_flash() -> None:
    message = st.session_state.pop(FLASH_KEY, None)
    if message:
        st.success(str(message))


def _score_key(member: Any) -> str:
    return f"{FORM_SCORE_PREFIX}{member.value}"


def _load_form_state(existing: Round | None) -> None:
    defaults = form_defaults(existing, today=date.today())
    st.session_state[FORM_DATE_KEY] = defaults["date"]
    st.session_state[FORM_COURSE_KEY] = defaults["course"]
    for member in MEMBERS:
        st.session_state[_score_key(member)] = defaults["scores"][member]


def _open_add_form() -> None:
    _load_form_state(None)
    st.session_state[EDITING_KEY] = None
    st.session_state[SHOW_FORM_KEY] = True


def _open_edit_form(store: RecordStore, round_id: str) -> None:
    try:
        existing = store.get(round_id)
    except RoundNotFoundError as exc:
        st.session_state[FLASH_KEY] = exc.message
        return
    _load_form_state(existing)
    st.session_state[EDITING_KEY] = round_id
    st.session_state[SHOW_FORM_KEY] = True


def _close_form() -> None:
    st.session_state[SHOW_FORM_KEY] = False
    st.session_state[EDITING_KEY] = None


def _render_top_header() -> None:
    st.markdown(
        (
            '<div class="cf-header">'
            f'<span class="cf-badge">🏆 {APP_BADGE}</span>'
            f'<div class="cf-wordmark">{APP_TITLE}</div>'
            f'<div class="cf-tagline">{APP_SUBTITLE}</div>'
            "</div>"
        ),
        unsafe_allow_html=True,
    )
    st.button("➕ Record Round", on_click=_open_add_form, type="primary", key="open_add_form")


def _render_round_form(store: RecordStore) -> None:
    if not st.session_state.get(SHOW_FORM_KEY):
        return
    editing_id = st.session_state.get(EDITING_KEY)
    st.markdown('<div class="cf-card">', unsafe_allow_html=True)
    st.markdown(
        f'<div class="cf-card-title">{"Edit Round" if editing_id else "Record Round"}</div>',
        unsafe_allow_html=True,
    )
    with st.form("round_form", clear_on_submit=False):
        c1, c2 = st.columns([1, 2], gap="small")
        with c1:
            round_date = st.date_input("Date", key=FORM_DATE_KEY)
        with c2:
            course = st.text_input("Golf Course", key=FORM_COURSE_KEY, placeholder="Course name")
        score_cols = st.columns(len(MEMBERS), gap="small")
        for col, member in zip(score_cols, MEMBERS):
            col.text_input(member.value, key=_score_key(member), placeholder="Score")
        s1, s2 = st.columns(2, gap="small")
        submitted = s1.form_submit_button("Save Round", use_container_width=True)
        cancelled = s2.form_submit_button("Cancel", use_container_width=True)

    st.markdown("</div>", unsafe_allow_html=True)
    if cancelled:
        _close_form()
        st.rerun()
    if not submitted:
        return

    raw_scores = {member: st.session_state.get(_score_key(member), "") for member in MEMBERS}
    try:
        course_name, scores = validate_round_form(course, raw_scores)
    except FormValidationError as exc:
        st.error(exc.message)
        return

    try:
        if editing_id:
            store.update(editing_id, round_date=round_date, course=course_name, scores=scores)
            _flash("Round updated.")
        else:
            store.add(round_date, course_name, scores)
            _flash("Round recorded.")
    except RoundNotFoundError as exc:
        st.error(exc.message)
        return
    _close_form()
    st.rerun()


def _render_ranking_card(stats: PlayerStats) -> None:
    accent = RANK_ACCENTS.get(stats.rank, "#CBD5E1")
    color = MEMBER_COLORS.get(stats.player, "#94A3B8")
    st.markdown(
        (
            f'<div class="cf-rank-row" style="border-color:{accent};">'
            f'<div class="cf-rank-badge" style="background:{accent};">{stats.rank}</div>'
            f'<div class="cf-member">{stats.player.value}'
            f'<span class="cf-member-code" style="color:{color};">{MEMBER_CODES[stats.player]}</span></div>'
            f'<div class="cf-stat" title="{METRIC_HELP["avg"]}"><div class="cf-stat-value">'
            f'{format_score(stats.average_score, 1)}</div><div class="cf-stat-label">AVG</div></div>'
            f'<div class="cf-stat" title="{METRIC_HELP["best"]}"><div class="cf-stat-value">'
            f'{format_score(stats.best_score)}</div><div class="cf-stat-label">BEST</div></div>'
            f'<div class="cf-stat" title="{METRIC_HELP["recent"]}"><div class="cf-stat-value">'
            f'{format_score(stats.recent_score)}</div><div class="cf-stat-label">RECENT</div></div>'
            "</div>"
        ),
        unsafe_allow_html=True,
    )


def _render_leaderboard(stats: list[PlayerStats]) -> None:
    head, select = st.columns([3, 1], gap="small")
    with head:
        st.subheader("📊 LEADERBOARD")
        st.caption(HELP_TEXT["leaderboard"])
    with select:
        st.selectbox(
            "Period",
            options=list(RankingPeriod),
            format_func=lambda p: p.label,
            key=PERIOD_KEY,
            label_visibility="collapsed",
        )
    for row in stats:
        _render_ranking_card(row)
    with st.expander("Table view"):
        st.dataframe(leaderboard_frame(stats), use_container_width=True, hide_index=True)


def _render_round_card(store: RecordStore, r: Round) -> None:
    st.markdown(f"**{r.course}**  \n📅 {r.date.isoformat()}")
    st.markdown("  \n".join(f"{entry.player.value}: **{entry.score}** pts" for entry in r.scores))
    b1, b2 = st.columns(2, gap="small")
    b1.button("✏️ Edit", key=f"edit_{r.id}", on_click=_open_edit_form, args=(store, r.id), use_container_width=True)
    if b2.button("🗑️ Delete", key=f"delete_{r.id}", use_container_width=True):
        st.session_state[PENDING_DELETE_KEY] = r.id
        st.rerun()

    if st.session_state.get(PENDING_DELETE_KEY) == r.id:
        st.warning(HELP_TEXT["delete_confirm"])
        c1, c2 = st.columns(2, gap="small")
        if c1.button("Delete", key=f"confirm_delete_{r.id}", type="primary", use_container_width=True):
            st.session_state[PENDING_DELETE_KEY] = None
            try:
                store.remove(r.id)
            except RoundNotFoundError as exc:
                st.error(exc.message)
                return
            _flash("Round deleted.")
            st.rerun()
        if c2.button("Keep", key=f"cancel_delete_{r.id}", use_container_width=True):
            st.session_state[PENDING_DELETE_KEY] = None
            st.rerun()


def _render_history(store: RecordStore) -> None:
    rounds = store.rounds
    show_all = bool(st.session_state.get(SHOW_ALL_HISTORY_KEY, False))
    head, toggle = st.columns([3, 1], gap="small")
    with head:
        st.subheader("🕘 RECENT ROUNDS")
        st.caption(HELP_TEXT["history_all"] if show_all else HELP_TEXT["history_short"])
    if can_expand_history(rounds):
        with toggle:
            label = "Collapse ▲" if show_all else "View All History ▼"
            if st.button(label, key="toggle_history", use_container_width=True):
                st.session_state[SHOW_ALL_HISTORY_KEY] = not show_all
                st.rerun()

    shown = recent_history(rounds, show_all=show_all)
    if not shown:
        st.info(HELP_TEXT["history_empty"])
        return
    cols = st.columns(3, gap="medium")
    for idx, r in enumerate(shown):
        with cols[idx % 3]:
            with st.container(border=True):
                _render_round_card(store, r)


def _build_trend_chart(frame: pd.DataFrame) -> alt.Chart:
    members = [m.value for m in MEMBERS]
    return (
        alt.Chart(frame)
        .mark_line(point=True, strokeWidth=3)
        .encode(
            x=alt.X("date:T", title=None, axis=alt.Axis(format="%m/%d")),
            y=alt.Y("score:Q", title="Score", scale=alt.Scale(reverse=True, zero=False)),
            color=alt.Color(
                "player:N",
                title="Member",
                scale=alt.Scale(domain=members, range=[MEMBER_COLORS[m] for m in MEMBERS]),
            ),
            tooltip=[
                alt.Tooltip("date:T", format="%Y-%m-%d"),
                alt.Tooltip("course:N"),
                alt.Tooltip("player:N"),
                alt.Tooltip("score:Q"),
            ],
        )
        .properties(height=320)
    )


def _render_trends(points: list[TrendPoint], period: RankingPeriod) -> None:
    st.subheader("📈 SCORE TRENDS")
    st.caption(period_caption(period))
    frame = trend_frame(points)
    if frame.empty:
        st.info(HELP_TEXT["trends_empty"])
        return
    st.altair_chart(_build_trend_chart(frame), use_container_width=True)


def _render_admin_panel(store: RecordStore) -> None:
    st.sidebar.markdown("#### Admin")
    st.sidebar.caption(HELP_TEXT["backup"])
    st.sidebar.download_button(
        label="⬇️ Backup (JSON)",
        data=export_rounds(store.rounds),
        file_name=export_filename(),
        mime=EXPORT_MIME,
        use_container_width=True,
    )

    nonce = int(st.session_state.get(UPLOADER_NONCE_KEY, 0))
    uploaded = st.sidebar.file_uploader("⬆️ Restore", type=["json"], key=f"{UPLOADER_KEY}_{nonce}")
    if uploaded is None:
        return
    try:
        restored = parse_backup(uploaded.getvalue())
    except (ImportParseError, ImportFormatError) as exc:
        logger.warning("Rejected backup %s: %s", uploaded.name, exc.message)
        st.sidebar.error(exc.message)
        return

    st.sidebar.warning(HELP_TEXT["restore_warning"])
    st.sidebar.caption(f"{uploaded.name}: {len(restored)} rounds")
    confirmed = st.sidebar.checkbox("Overwrite existing rounds", key=f"{RESTORE_CONFIRM_KEY}_{nonce}")
    if st.sidebar.button("Restore", disabled=not confirmed, use_container_width=True, key="restore_apply"):
        store.replace_all(restored)
        # New widget keys reset the uploader and the confirmation box.
        st.session_state[UPLOADER_NONCE_KEY] = nonce + 1
        _flash(HELP_TEXT["restore_done"])
        st.rerun()


def _render_commentary(board: CommentaryBoard | None, slot: Any) -> None:
    if board is None:
        return
    with slot.container():
        st.markdown('<div class="cf-card-title">🎙️ Commentary</div>', unsafe_allow_html=True)
        if board.loading:
            with st.spinner(LOADING_TEXT):
                text = board.wait()
        else:
            text = board.text
        st.markdown(f'<div class="cf-commentary">{html.escape(text)}</div>', unsafe_allow_html=True)


def main() -> None:
    st.set_page_config(page_title=f"{APP_TITLE} Scoreboard", layout="wide")
    settings = load_settings(secret_api_key=_secret_api_key())
    configure_logging(settings.log_level)
    _inject_styles()

    store = _get_store(str(settings.data_path))
    board = _get_commentary_board(settings)
    if board is not None and store.rounds:
        board.request(store.rounds)

    _render_top_header()
    _render_flash()
    if store.loaded_from_seed:
        st.caption(HELP_TEXT["seed_fallback"])
    _render_admin_panel(store)
    _render_round_form(store)

    commentary_slot = st.empty()
    st.markdown(SECTION_GAP_MD, unsafe_allow_html=True)

    period = st.session_state.get(PERIOD_KEY, RankingPeriod.ALL_TIME)
    filtered = filter_rounds(store.rounds, period, datetime.now())
    stats = compute_player_stats(filtered, store.rounds)

    _render_leaderboard(stats)
    st.markdown(SECTION_GAP_MD, unsafe_allow_html=True)
    _render_history(store)
    st.markdown(SECTION_GAP_MD, unsafe_allow_html=True)
    _render_trends(project_trend(filtered), period)

    st.markdown(f'<div class="cf-disclaimer">{APP_DISCLAIMER}</div>', unsafe_allow_html=True)
    _render_commentary(board, commentary_slot)


if __name__ == "__main__":
    main()
