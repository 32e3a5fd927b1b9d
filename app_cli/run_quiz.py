from __future__ import annotations
import argparse, json, logging, random
from pathlib import Path
from typing import List, Optional
from quiz_core.audit_export import to_csv, to_json
from quiz_core.config import AUDIT_EXPORT_ENABLED
from quiz_core.engine import QuizSession, run_session
from quiz_core.errors import QuizParseError
from quiz_core.parser import load_quiz


def _write_audit(path: Path, events) -> None:
    if path.suffix.lower() == ".json":
        path.write_text(json.dumps(to_json(events), indent=2) + "\n", encoding="utf-8")
    else:
        path.write_text(to_csv(events), encoding="utf-8")


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Take a plain-text quiz in the terminal.")
    ap.add_argument("path", help="quiz document")
    ap.add_argument("--seed", type=int, default=None, help="fix question/answer shuffling")
    ap.add_argument("--audit", default=None, help="write a per-question trace (.csv or .json)")
    ap.add_argument("-v", "--verbose", action="store_true")
    a = ap.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if a.verbose else logging.WARNING,
                        format="[%(levelname)s] %(message)s")

    try:
        quiz = load_quiz(a.path)
    except QuizParseError as e:
        print(f"Could not parse quiz: {e.describe()}")
        return 1
    except (OSError, ValueError) as e:
        print(f"Could not read quiz file: {e}")
        return 1

    rng = random.Random(a.seed) if a.seed is not None else None
    session = QuizSession(quiz, rng=rng)
    try:
        res = run_session(session, read_line=input, emit=print)
    except EOFError:
        print("\nInput ended before the quiz was finished.")
        return 1
    except KeyboardInterrupt:
        print("\nStopped by user.")
        return 1

    print(f"Score: {res.score:g} / {res.total_score:g} ({res.percentage:.1f}%)")
    if a.audit:
        if not AUDIT_EXPORT_ENABLED:
            print("Audit export is disabled.")
        else:
            _write_audit(Path(a.audit), res.audit_events)
            print(f"Audit: {a.audit}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
