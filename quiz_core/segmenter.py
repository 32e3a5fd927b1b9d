"""Delimiter based segmentation of quiz documents.

No grammar, no backtracking: a document is cut at a handful of fixed tokens.

* ``\\n---`` separates the quiz-level settings from the question body.
* blank lines separate question blocks.
* ``\\n?`` separates a block's settings from its question.
* ``\\n+`` / ``\\n-`` start correct / incorrect answers.
"""
from __future__ import annotations

import re
from typing import Iterator, List, Tuple

__all__ = [
    "QUIZ_FENCE",
    "QUESTION_MARKER",
    "ANSWER_MARKERS",
    "split_quiz",
    "split_blocks",
    "split_question",
    "iter_segment_bounds",
    "segment_answers",
    "fold",
]

QUIZ_FENCE = "---"
QUESTION_MARKER = "?"
ANSWER_MARKERS = ("+", "-")

_BLANK_LINE_RX = re.compile(r"\r?\n\r?\n")
_NEWLINE_RX = re.compile(r"\r?\n")


def split_quiz(text: str) -> Tuple[str, str, bool]:
    """Return ``(config_text, body_text, fenced)``.

    A leading fence is dropped first so a document may open with ``---``.
    Without a ``\\n---`` fence the whole document is body and ``fenced`` is
    false; otherwise the fence line itself is consumed.
    """

    if text.startswith(QUIZ_FENCE):
        text = text[len(QUIZ_FENCE):]
    head, sep, tail = text.partition("\n" + QUIZ_FENCE)
    if not sep:
        return "", text, False
    return head, tail, True


def split_blocks(body: str) -> List[str]:
    """Split on blank lines; empty pieces are kept so callers can count lines."""

    return _BLANK_LINE_RX.split(body)


def split_question(block: str) -> Tuple[str, str, bool]:
    """Return ``(config_text, body, marker_consumed)`` for one block.

    ``marker_consumed`` is true when the ``\\n?`` path was taken, i.e. one
    newline was eaten between the settings and the question.  A block without
    any marker is all settings and yields an empty body.
    """

    head, sep, tail = block.partition("\n" + QUESTION_MARKER)
    if sep:
        return head, tail.strip(), True
    if block.startswith(QUESTION_MARKER):
        return "", block[len(QUESTION_MARKER):].strip(), False
    return block, "", False


def iter_segment_bounds(body: str) -> Iterator[Tuple[int, int]]:
    """Yield ``(start, end)`` slices that tile ``body`` exactly.

    A new segment starts at every newline directly followed by an answer
    marker; that newline belongs to the segment it opens.
    """

    start = 0
    n = len(body)
    i = 1
    while i < n:
        if body[i] == "\n" and i + 1 < n and body[i + 1] in ANSWER_MARKERS:
            yield start, i
            start = i
        i += 1
    if start < n:
        yield start, n


def fold(text: str) -> str:
    return _NEWLINE_RX.sub(" ", text).strip()


def segment_answers(body: str) -> Tuple[str, List[Tuple[bool, str]]]:
    """Cut a question body into its title and ``(correct, text)`` answers."""

    title = ""
    answers: List[Tuple[bool, str]] = []
    for idx, (start, end) in enumerate(iter_segment_bounds(body)):
        segment = body[start:end]
        if idx == 0:
            title = fold(segment)
            continue
        # later segments always open with "\n" plus a marker
        answers.append((segment[1] == "+", fold(segment[2:])))
    return title, answers
