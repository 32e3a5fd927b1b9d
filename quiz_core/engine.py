# quiz_core/engine.py
from __future__ import annotations
from typing import Any, Callable, Dict, List, Optional, Sequence, TypeVar
import logging, random

from .types import Prepared, Question, Quiz, Result
from .scoring import score_question
from .config import load_config, make_rng, DEBUG_TRACE, TRACE_FIELDS


log = logging.getLogger(__name__)

T = TypeVar("T")

LineSource = Callable[[], str]
Sink = Callable[[str], Any]

TUTORIAL: tuple[str, ...] = (
    "How to answer:",
    "  - Typed questions: type your answer and press enter, then press enter on an empty line to submit.",
    "  - (n) options: exactly one is correct. [n] options: select every correct one.",
    "  - Select options by index, separated by spaces or commas, e.g. `0 2`.",
    "  - Typing a new line before submitting replaces what you typed before.",
    "",
)


def _emit_trace(**values: object) -> None:
    if not DEBUG_TRACE:
        return
    pairs = [f"{key}={values[key]}" for key in TRACE_FIELDS if key in values]
    if pairs:
        log.info("trace %s", " ".join(pairs))


def shuffle(items: Sequence[T], rng: random.Random) -> List[T]:
    """Fisher-Yates on a copy: index ``i`` ascending, swapped with a uniform pick from ``[i, n)``."""

    out = list(items)
    n = len(out)
    for i in range(n):
        j = rng.randrange(i, n)
        out[i], out[j] = out[j], out[i]
    return out


def order_questions(questions: Sequence[Question], rng: random.Random) -> List[Question]:
    """Shuffled unordered questions first, then ordered ones in document order."""

    unordered = [q for q in questions if not q.config.ordered]
    ordered = [q for q in questions if q.config.ordered]
    return shuffle(unordered, rng) + ordered


def prepare(question: Question, rng: random.Random) -> Prepared:
    if question.config.ordered_answers or question.kind == "typed":
        display = list(question.answers)
    else:
        display = shuffle(question.answers, rng)
    correct = sorted(i for i, a in enumerate(display) if a.correct)
    return Prepared(question=question, display=display, correct_indices=correct)


def render_question(prepared: Prepared) -> List[str]:
    lines = [prepared.question.title]
    if prepared.question.kind == "choice":
        open_, close = ("[", "]") if prepared.multi else ("(", ")")
        for i, ans in enumerate(prepared.display):
            lines.append(f"  {open_}{i}{close} {ans.text}")
    return lines


def collect_response(read_line: LineSource) -> str:
    """Read lines until a blank one; the last non-empty line is the response.

    ``read_line`` raises ``EOFError`` at end of input, like :func:`input`.
    """

    candidate = ""
    while True:
        line = read_line().rstrip("\r\n")
        if not line.strip():
            return candidate
        candidate = line


class QuizSession:
    def __init__(self, quiz: Quiz, rng: Optional[random.Random] = None):
        self.cfg = load_config()
        self.rng = rng if rng is not None else make_rng(self.cfg)
        self.quiz = quiz
        self.order: List[Question] = order_questions(quiz.questions, self.rng)
        self._pos = 0
        self._current: Optional[Prepared] = None
        self.score = 0.0
        self.answered = 0
        self.correct = 0
        self.audit_events: List[Dict[str, object]] = []

    def next_item(self) -> Optional[Prepared]:
        if self._current is not None:
            return self._current
        if self._pos >= len(self.order):
            return None
        self._current = prepare(self.order[self._pos], self.rng)
        self._pos += 1
        return self._current

    def answer_current(self, response: Any) -> Dict[str, object]:
        """Grade the pending question and return its audit event."""

        prepared = self._current
        if prepared is None:
            raise RuntimeError("no question is waiting for an answer")
        awarded, meta = score_question(prepared, response)
        self.score += awarded
        self.answered += 1
        if meta["correct"]:
            self.correct += 1
        event: Dict[str, object] = {
            "step": self.answered,
            "kind": meta["type"],
            "title": prepared.question.title,
            "value": prepared.question.config.value,
            "response": meta["response"],
            "expected": meta["expected"],
            "correct": meta["correct"],
            "awarded": awarded,
            "score_after": self.score,
        }
        self.audit_events.append(event)
        _emit_trace(**event)
        self._current = None
        return event

    def finalize(self) -> Result:
        return Result(
            score=self.score,
            total_score=self.quiz.total_score,
            answered=self.answered,
            correct=self.correct,
            audit_events=list(self.audit_events),
        )


def _feedback(prepared: Prepared, event: Dict[str, object]) -> str:
    if event["correct"]:
        return "Correct!"
    if prepared.question.kind == "typed":
        return f"Incorrect. Expected: {prepared.question.answers[0].text}"
    return "Incorrect. Expected: " + " ".join(str(i) for i in prepared.correct_indices)


def run_session(
    session: QuizSession,
    read_line: Optional[LineSource] = None,
    emit: Optional[Sink] = None,
) -> Result:
    read_line = read_line or input
    emit = emit or print
    if session.quiz.config.tutorial:
        for line in TUTORIAL:
            emit(line)
    while True:
        prepared = session.next_item()
        if prepared is None:
            break
        for line in render_question(prepared):
            emit(line)
        try:
            raw = collect_response(read_line)
        except EOFError:
            log.warning("input ended during question %d of %d", session.answered + 1, len(session.order))
            raise
        event = session.answer_current(raw)
        emit(_feedback(prepared, event))
        emit("")
    return session.finalize()


def take_quiz(
    quiz: Quiz,
    read_line: Optional[LineSource] = None,
    emit: Optional[Sink] = None,
    rng: Optional[random.Random] = None,
) -> float:
    """Run the whole quiz against a line source and return the accumulated score."""

    return run_session(QuizSession(quiz, rng), read_line, emit).score
