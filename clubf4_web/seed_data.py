from __future__ import annotations

from pathlib import Path

from clubf4_core.backup import parse_backup
from clubf4_core.errors import ImportFormatError, ImportParseError
from clubf4_core.models import MEMBERS, Round

SEED_PATH = Path(__file__).resolve().parent / "data" / "seed_rounds.json"


def load_seed_rounds(path: Path | None = None) -> list[Round]:
    seed_path = path or SEED_PATH
    with seed_path.open("r", encoding="utf-8") as f:
        return parse_backup(f.read())


def validate_seed(path: Path | None = None) -> list[str]:
    try:
        rounds = load_seed_rounds(path=path)
    except (ImportParseError, ImportFormatError) as exc:
        return [exc.message]

    errors: list[str] = []
    if not rounds:
        errors.append("Seed dataset has no rounds.")
    for r in rounds:
        if not r.course.strip():
            errors.append(f"Round {r.id} is missing a course name.")
        missing = [m.value for m in MEMBERS if r.score_for(m) is None]
        if missing:
            errors.append(f"Round {r.id} has no score for {missing}")
        bad = [e.player.value for e in r.scores if e.score <= 0]
        if bad:
            errors.append(f"Round {r.id} has non-positive scores for {bad}")
    return errors


if __name__ == "__main__":
    problems = validate_seed(path=SEED_PATH)
    if problems:
        print("Seed dataset validation failed:")
        for p in problems:
            print(f"- {p}")
        raise SystemExit(1)
    print("Seed dataset validation passed.")
