from __future__ import annotations

import json
import logging
import sqlite3
import time
from datetime import date
from pathlib import Path
from typing import Iterable, Sequence

from clubf4_core.backup import rounds_to_payload
from clubf4_core.errors import PersistenceReadError, RoundNotFoundError
from clubf4_core.models import Round, ScoreEntry, sort_rounds

logger = logging.getLogger(__name__)

STORAGE_KEY = "clubf4_games"
UNREADABLE_SUFFIX = ".unreadable"


class KeyValueStorage:
    """A single-table key/value store, standing in for browser local storage."""

    def __init__(self, db_path: str | Path) -> None:
        self.db_path = Path(db_path)
        if str(db_path) != ":memory:":
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
        # Streamlit reruns the script on worker threads that share this connection.
        self.conn = sqlite3.connect(str(db_path), check_same_thread=False)
        self.initialize()

    def initialize(self) -> None:
        self.conn.execute(
            """
            CREATE TABLE IF NOT EXISTS kv_store (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL,
                updated_at TEXT DEFAULT CURRENT_TIMESTAMP
            )
            """
        )
        self.conn.commit()

    def get(self, key: str) -> str | None:
        row = self.conn.execute("SELECT value FROM kv_store WHERE key = ?", (key,)).fetchone()
        return None if row is None else str(row[0])

    def set(self, key: str, value: str) -> None:
        self.conn.execute(
            """
            INSERT INTO kv_store (key, value, updated_at) VALUES (?, ?, CURRENT_TIMESTAMP)
            ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = CURRENT_TIMESTAMP
            """,
            (key, value),
        )
        self.conn.commit()

    def delete(self, key: str) -> None:
        self.conn.execute("DELETE FROM kv_store WHERE key = ?", (key,))
        self.conn.commit()

    def close(self) -> None:
        self.conn.close()


def _new_round_id(existing: Iterable[str]) -> str:
    taken = set(existing)
    candidate = int(time.time() * 1000)
    while str(candidate) in taken:
        candidate += 1
    return str(candidate)


class RecordStore:
    """Owns the round collection and writes it back to storage after every change."""

    def __init__(self, storage: KeyValueStorage, seed: Sequence[Round], key: str = STORAGE_KEY) -> None:
        self.storage = storage
        self.key = key
        self.seed = list(seed)
        self._rounds: list[Round] = []
        self.revision = 0
        self.loaded_from_seed = False

    @property
    def rounds(self) -> tuple[Round, ...]:
        return tuple(self._rounds)

    @property
    def unreadable_key(self) -> str:
        return f"{self.key}{UNREADABLE_SUFFIX}"

    def _keep_unreadable(self, raw: str) -> None:
        existing = self.storage.get(self.unreadable_key)
        if existing is None:
            self.storage.set(self.unreadable_key, raw)
        elif existing != raw:
            logger.warning("%s already holds earlier unreadable data; leaving it untouched", self.unreadable_key)

    def _read_persisted(self) -> list[Round]:
        raw = self.storage.get(self.key)
        if raw is None:
            raise PersistenceReadError("No saved rounds.")
        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as exc:
            self._keep_unreadable(raw)
            raise PersistenceReadError(f"Saved rounds are unreadable: {exc}") from exc
        if not isinstance(payload, list):
            self._keep_unreadable(raw)
            raise PersistenceReadError("Saved rounds are not a JSON array.")
        rounds: list[Round] = []
        skipped: list[str] = []
        for idx, item in enumerate(payload):
            try:
                rounds.append(Round.from_dict(item))
            except ValueError as exc:
                skipped.append(f"#{idx + 1}: {exc}")
        if skipped:
            # The raw payload is copied aside before any save drops the skipped rounds.
            self._keep_unreadable(raw)
            logger.warning(
                "Skipped %d saved round(s) (%s); original data kept under %s",
                len(skipped),
                "; ".join(skipped),
                self.unreadable_key,
            )
        return rounds

    def load(self) -> tuple[Round, ...]:
        try:
            self._rounds = self._read_persisted()
            self.loaded_from_seed = False
        except PersistenceReadError as exc:
            logger.warning("%s Falling back to the built-in rounds.", exc.message)
            self._rounds = list(self.seed)
            self.loaded_from_seed = True
        self.revision += 1
        return self.rounds

    def save(self) -> None:
        self.storage.set(self.key, json.dumps(rounds_to_payload(self._rounds), ensure_ascii=False))

    def _commit(self) -> None:
        self.revision += 1
        self.loaded_from_seed = False
        self.save()

    def _index_of(self, round_id: str) -> int:
        for idx, r in enumerate(self._rounds):
            if r.id == round_id:
                return idx
        raise RoundNotFoundError(round_id)

    def get(self, round_id: str) -> Round:
        return self._rounds[self._index_of(round_id)]

    def add(self, round_date: date, course: str, scores: Iterable[ScoreEntry]) -> Round:
        new_round = Round(
            id=_new_round_id(r.id for r in self._rounds),
            date=round_date,
            course=course,
            scores=tuple(scores),
        )
        self._rounds = sort_rounds([*self._rounds, new_round])
        self._commit()
        logger.info("Recorded round %s at %s on %s", new_round.id, course, round_date.isoformat())
        return new_round

    def update(
        self,
        round_id: str,
        round_date: date | None = None,
        course: str | None = None,
        scores: Iterable[ScoreEntry] | None = None,
    ) -> Round:
        idx = self._index_of(round_id)
        changes: dict[str, object] = {}
        if round_date is not None:
            changes["date"] = round_date
        if course is not None:
            changes["course"] = course
        if scores is not None:
            changes["scores"] = scores
        updated = self._rounds[idx].with_changes(**changes)
        rounds = list(self._rounds)
        rounds[idx] = updated
        self._rounds = sort_rounds(rounds)
        self._commit()
        logger.info("Updated round %s", round_id)
        return updated

    def remove(self, round_id: str) -> Round:
        idx = self._index_of(round_id)
        removed = self._rounds[idx]
        self._rounds = self._rounds[:idx] + self._rounds[idx + 1 :]
        self._commit()
        logger.info("Deleted round %s", round_id)
        return removed

    def replace_all(self, rounds: Sequence[Round]) -> None:
        self._rounds = list(rounds)
        self._commit()
        logger.info("Restored %d rounds from backup", len(self._rounds))
