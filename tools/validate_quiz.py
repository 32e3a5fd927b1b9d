from __future__ import annotations
import argparse
from collections import Counter
from typing import List, Optional
from quiz_core.errors import QuizParseError
from quiz_core.parser import load_quiz


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Check quiz documents for syntax errors.")
    ap.add_argument("paths", nargs="+")
    a = ap.parse_args(argv)

    failed = 0
    for path in a.paths:
        try:
            quiz = load_quiz(path)
        except QuizParseError as e:
            failed += 1
            print(f"{path}:{e.line}: {e.describe()}")
            continue
        except (OSError, ValueError) as e:
            failed += 1
            print(f"{path}: could not read: {e}")
            continue
        kinds = Counter(q.kind for q in quiz.questions)
        shuffled = sum(1 for q in quiz.questions if not q.config.ordered)
        print(f"{path}: {len(quiz.questions)} questions "
              f"(typed={kinds['typed']} choice={kinds['choice']} shuffled={shuffled}), "
              f"total score {quiz.total_score:g}")

    if failed:
        print(f"\n{failed} of {len(a.paths)} files failed.")
        return 2
    print("\n✓ All files parsed")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
