from __future__ import annotations
from typing import Any, Dict, Iterable, List, Set, Tuple, Union
import re
from .types import Prepared, Question

_SELECTION_SPLIT_RX = re.compile(r"[ .;,]+")
_INDEX_RX = re.compile(r"\+?[0-9]+")

Selection = Union[str, Iterable[int]]


def parse_selection(line: str) -> Set[int]:
    """Indices named on one response line; tokens that are not numbers are ignored."""
    out: Set[int] = set()
    for tok in _SELECTION_SPLIT_RX.split(line.strip()):
        if _INDEX_RX.fullmatch(tok):
            out.add(int(tok))
    return out


def _fold(text: str, case_sensitive: bool) -> str:
    return text if case_sensitive else text.casefold()


def grade_typed(question: Question, response: str) -> bool:
    expected = question.answers[0].text
    cs = question.config.case_sensitive
    return _fold(response.strip(), cs) == _fold(expected, cs)


def grade_choice(correct_indices: Iterable[int], selection: Iterable[int]) -> bool:
    # exact set match; no partial credit
    return sorted(set(selection)) == sorted(set(correct_indices))


def _as_selection(response: Selection) -> List[int]:
    if isinstance(response, str):
        return sorted(parse_selection(response))
    return sorted(set(int(v) for v in response))


def score_question(prepared: Prepared, response: Any) -> Tuple[float, Dict[str, Any]]:
    """
    Returns (points awarded, meta).
    typed: response is the submitted text.
    choice: response is a set of display indices or a raw selection line.
    """
    q = prepared.question
    if q.kind == "typed":
        text = str(response or "")
        ok = grade_typed(q, text)
        meta = {"type": "typed", "response": text.strip(), "expected": q.answers[0].text}
    else:
        chosen = _as_selection(response if response is not None else "")
        ok = grade_choice(prepared.correct_indices, chosen)
        meta = {"type": "choice", "response": chosen, "expected": list(prepared.correct_indices)}
    meta["correct"] = ok
    return (q.config.value if ok else 0.0), meta
