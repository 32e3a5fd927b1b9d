from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List, Literal, Tuple

QuestionKind = Literal["typed", "choice"]


@dataclass(frozen=True)
class Config:
    """Flat snapshot of question settings; children are derived with ``dataclasses.replace``."""

    value: float = 1.0
    case_sensitive: bool = False
    ordered: bool = True
    ordered_answers: bool = True
    tutorial: bool = True


@dataclass(frozen=True)
class Answer:
    correct: bool
    text: str


@dataclass(frozen=True)
class Question:
    title: str
    answers: Tuple[Answer, ...]
    config: Config = field(default_factory=Config)

    @property
    def kind(self) -> QuestionKind:
        return "typed" if len(self.answers) == 1 else "choice"


@dataclass(frozen=True)
class Quiz:
    config: Config
    questions: Tuple[Question, ...]
    total_score: float = 0.0


@dataclass
class Prepared:
    """A question as presented: display order fixed, correct indices resolved."""

    question: Question
    display: List[Answer]
    correct_indices: List[int]

    @property
    def multi(self) -> bool:
        return len(self.correct_indices) > 1


@dataclass
class Result:
    score: float
    total_score: float
    answered: int
    correct: int
    audit_events: List[Dict[str, object]] = field(default_factory=list)

    @property
    def percentage(self) -> float:
        return 100.0 * self.score / self.total_score if self.total_score > 0 else 0.0
