from __future__ import annotations

from typing import Callable, Iterable

import pytest

from quiz_core.parser import parse_quiz
from quiz_core.types import Quiz


def build_quiz_text(
    *,
    quiz_settings: Iterable[str] = (),
    n_choice: int = 2,
    n_typed: int = 1,
    shuffled: bool = False,
    value: float | None = None,
) -> str:
    """Create a deterministic quiz document for tests."""

    blocks: list[str] = []
    for idx in range(n_choice):
        lines = []
        if shuffled:
            lines.append(";ordered: false")
        if value is not None:
            lines.append(f";value: {value}")
        lines.append(f"?Choice question {idx}")
        lines.append(f"+right {idx}")
        lines.append(f"-wrong {idx}a")
        lines.append(f"-wrong {idx}b")
        blocks.append("\n".join(lines))
    for idx in range(n_typed):
        blocks.append(f"?Typed question {idx}\n+Answer {idx}")

    body = "\n\n".join(blocks)
    settings = list(quiz_settings)
    if settings:
        return "---\n" + "\n".join(settings) + "\n---\n" + body
    return body


def scripted(lines: Iterable[str]) -> Callable[[], str]:
    """A line source that replays ``lines`` and then raises EOFError like input()."""

    it = iter(lines)

    def read_line() -> str:
        try:
            return next(it)
        except StopIteration:
            raise EOFError from None

    return read_line


SAMPLE = """---
# sample quiz
;tutorial: false
---
# comment-only block, skipped

?What is 2 + 2?
+4

;value: 2
;ordered-answers: false
?Pick the primes
+2
+3
-4
-6

;case-sensitive: true
?Name the language of this project
+Python
"""


@pytest.fixture
def sample_text() -> str:
    return SAMPLE


@pytest.fixture
def sample_quiz() -> Quiz:
    return parse_quiz(SAMPLE)
