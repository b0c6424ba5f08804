from __future__ import annotations

import json
import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable, Sequence

from google import genai

from clubf4_core.brand import APP_NAME
from clubf4_core.errors import CommentaryFetchError
from clubf4_core.models import MEMBERS, Round

logger = logging.getLogger(__name__)

RECENT_ROUND_COUNT = 3
LOADING_TEXT = "Analyzing performance data..."

DEFAULT_COMMENTARY = (
    "안녕하십니까, 전설적인 \"CLUB F4\"의 전담 해설가입니다. "
    "최근 경기에서 정점에 선 GREGORY님은 필드의 '황제'라는 칭호가 전혀 아깝지 않은 독보적인 샷 메이킹과 "
    "완벽한 경기 운영을 유감없이 보여주고 계십니다. "
    "특히 매 경기 무서운 집중력으로 타수를 줄여나가고 계신 BIRCHAN님의 가파른 상승세와, "
    "언제든 다시 70대 타수로 복귀할 준비가 된 PETER님의 매서운 추격 기세가 맞물리며 "
    "CLUB F4의 긴장감은 그 어느 때보다 뜨겁게 달아오르고 있습니다. "
    "한편, 우리 SEVEN님은 최근 홀컵이 수줍게 공을 밀어내는 야속한 순간들이 잦았으나, "
    "이는 필드 구석구석 잔디와 깊은 대화를 나누며 다음 라운드의 대반전을 위해 위대한 서사를 준비하는 과정이라 "
    "믿어 의심치 않습니다. "
    "네 분 모두 실력이 눈부시게 상향 평준화되며 아마추어 골프의 품격을 새롭게 정의하고 계신 만큼, "
    "다음 라운드에서 펼쳐질 더 우아하고 격조 높은 명승부를 설레는 마음으로 중계석에서 기다려 보겠습니다."
)

_BRIEF = """당신은 "{club}"라는 전설적인 아마추어 골프 모임의 전문 해설가입니다.
멤버는 {members} 네 명의 남성 골퍼입니다.

최근 경기 데이터를 바탕으로 다음 가이드라인에 따라 한국어 코멘터리를 작성하세요:
1. 현재 가장 낮은 스코어를 기록 중인 멤버를 '황제'로 칭하며 독보적인 실력을 치켜세우세요.
2. 가장 점수가 높은(실력이 다소 부진한) 멤버에게는 "잔디와 대화를 나눈다"거나 "홀컵이 공을 밀어낸다"는 식의 유쾌하고 위트 있는 농담을 건네세요.
3. BIRCHAN님의 최근 상승세나 다른 멤버들의 추격 기세도 언급하며 다음 라운드의 기대감을 높이세요.
4. 전체적으로 고급스럽고 격려하는 분위기를 유지하세요.
5. 4~5문장 내외로 풍성하게 작성하세요.
6. 가독성을 위해 명조체 스타일의 우아하고 격조 높은 문체(안녕하십니까... 합니다... 습니다...)를 사용하세요.

최근 경기 데이터:
{rounds}
"""


def summarize_round_line(r: Round) -> str:
    scores = ", ".join(f"{entry.player.value}: {entry.score}" for entry in r.scores)
    return f"날짜: {r.date.isoformat()}, 코스: {r.course}, 스코어: {scores}"


def build_commentary_prompt(rounds: Sequence[Round]) -> str:
    return _BRIEF.format(
        club=APP_NAME,
        members=", ".join(m.value for m in MEMBERS),
        rounds="\n".join(summarize_round_line(r) for r in rounds),
    )


def latest_rounds(rounds: Sequence[Round], count: int = RECENT_ROUND_COUNT) -> list[Round]:
    return list(rounds[-count:]) if count > 0 else []


def _extract_text(resp: Any) -> str:
    text = getattr(resp, "text", None)
    if isinstance(text, str) and text.strip():
        return text.strip()
    try:
        parts = resp.candidates[0].content.parts
    except (AttributeError, IndexError, TypeError):
        return ""
    out = [p.text for p in parts or [] if isinstance(getattr(p, "text", None), str) and p.text]
    return "\n".join(out).strip()


class GeminiCommentator:
    """Calls Gemini for a short commentary; any failure yields the default text."""

    def __init__(self, api_key: str | None, model: str, client: Any | None = None) -> None:
        self.api_key = api_key
        self.model = model
        self._client = client

    def _get_client(self) -> Any:
        if self._client is None:
            if not self.api_key:
                raise CommentaryFetchError("Gemini API key is not configured.")
            self._client = genai.Client(api_key=self.api_key)
        return self._client

    def fetch(self, recent_rounds: Sequence[Round]) -> str:
        try:
            resp = self._get_client().models.generate_content(
                model=self.model,
                contents=build_commentary_prompt(recent_rounds),
            )
        except CommentaryFetchError:
            raise
        except Exception as exc:
            raise CommentaryFetchError(f"Gemini request failed: {exc}") from exc
        text = _extract_text(resp)
        if not text:
            raise CommentaryFetchError("Gemini returned an empty response.")
        return text

    def summarize(self, recent_rounds: Sequence[Round]) -> str:
        try:
            return self.fetch(recent_rounds)
        except CommentaryFetchError as exc:
            logger.warning("Commentary unavailable, using default text: %s", exc.message)
            return DEFAULT_COMMENTARY


def _fingerprint(rounds: Sequence[Round]) -> str:
    return json.dumps([r.to_dict() for r in rounds], sort_keys=True, ensure_ascii=False)


class CommentaryBoard:
    """Holds the commentary shown in the UI.

    Each request gets a generation number; a result is applied only if its
    generation is still the latest when it completes.
    """

    def __init__(
        self,
        summarize: Callable[[Sequence[Round]], str],
        executor: ThreadPoolExecutor | None = None,
    ) -> None:
        self._summarize = summarize
        self._executor = executor or ThreadPoolExecutor(max_workers=2, thread_name_prefix="commentary")
        self._lock = threading.Lock()
        self._generation = 0
        self._fingerprint: str | None = None
        self._future: Future[str] | None = None
        self._text = LOADING_TEXT
        self._loading = False

    @property
    def loading(self) -> bool:
        with self._lock:
            return self._loading

    @property
    def text(self) -> str:
        with self._lock:
            return self._text

    def request(self, rounds: Sequence[Round]) -> int:
        recent = latest_rounds(rounds)
        if not recent:
            return self._generation
        fingerprint = _fingerprint(recent)
        with self._lock:
            if fingerprint == self._fingerprint:
                return self._generation
            self._generation += 1
            generation = self._generation
            self._fingerprint = fingerprint
            self._loading = True
            self._future = self._executor.submit(self._run, generation, recent)
        return generation

    def _run(self, generation: int, recent: Sequence[Round]) -> str:
        try:
            text = self._summarize(recent) or DEFAULT_COMMENTARY
        except Exception as exc:
            logger.warning("Commentary request %d failed: %s", generation, exc)
            text = DEFAULT_COMMENTARY
        with self._lock:
            if generation != self._generation:
                logger.debug("Discarding stale commentary from request %d", generation)
                return text
            self._text = text
            self._loading = False
        return text

    def wait(self) -> str:
        with self._lock:
            future = self._future
        if future is not None:
            future.result()
        return self.text
