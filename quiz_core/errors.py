"""Positioned parse errors for quiz documents.

Each layer of the parser owns one exception class.  The class carries a
``kind`` tag, the ``context`` fragment (first physical line of the offending
region, at most 32 characters) and ``lines_parsed``: the number of newline
delimited lines consumed before the error site.  Outer layers wrap the inner
error untouched and only adjust the fields they own, so the caller can always
report ``line = lines_parsed + 1``.
"""
from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional

CONTEXT_MAX = 32

__all__ = [
    "CONTEXT_MAX",
    "context_of",
    "ConfigErrorKind",
    "QuestionErrorKind",
    "QuizErrorKind",
    "QuizParseError",
    "ConfigError",
    "QuestionError",
    "QuizError",
    "error_payload",
]


def context_of(text: str) -> str:
    """Return the first physical line of ``text`` truncated to ``CONTEXT_MAX`` chars."""

    first = text.split("\n", 1)[0].rstrip("\r")
    return first[:CONTEXT_MAX]


class ConfigErrorKind(Enum):
    INVALID_OPTION = "invalid_option"
    INVALID_VALUE = "invalid_value"
    MISSING_DELIMITER = "missing_delimiter"


class QuestionErrorKind(Enum):
    MISSING_DELIMITER = "missing_delimiter"
    CONFIG_ERROR = "config_error"
    NO_CORRECT_ANSWER = "no_correct_answer"
    ONLY_CONFIG = "only_config"


class QuizErrorKind(Enum):
    CONFIG_ERROR = "config_error"
    QUESTION_ERROR = "question_error"


_MESSAGES: Dict[Enum, str] = {
    ConfigErrorKind.INVALID_OPTION: "unknown option",
    ConfigErrorKind.INVALID_VALUE: "invalid value",
    ConfigErrorKind.MISSING_DELIMITER: "setting is missing its ';' prefix",
    QuestionErrorKind.MISSING_DELIMITER: "question is missing its '?' marker",
    QuestionErrorKind.CONFIG_ERROR: "bad question setting",
    QuestionErrorKind.NO_CORRECT_ANSWER: "question has no correct ('+') answer",
    QuestionErrorKind.ONLY_CONFIG: "block contains no question",
    QuizErrorKind.CONFIG_ERROR: "bad quiz setting",
    QuizErrorKind.QUESTION_ERROR: "bad question",
}

_WRAPPER_KINDS = frozenset(
    {QuestionErrorKind.CONFIG_ERROR, QuizErrorKind.CONFIG_ERROR, QuizErrorKind.QUESTION_ERROR}
)


class QuizParseError(ValueError):
    """Base of the parse error hierarchy."""

    kind: Enum

    def __init__(
        self,
        kind: Enum,
        context: str = "",
        lines_parsed: int = 0,
        inner: Optional["QuizParseError"] = None,
    ):
        self.kind = kind
        self.context = context[:CONTEXT_MAX]
        self.lines_parsed = int(lines_parsed)
        self.inner = inner
        super().__init__(self.describe())

    @property
    def line(self) -> int:
        return self.lines_parsed + 1

    def chain(self) -> List["QuizParseError"]:
        out: List[QuizParseError] = []
        err: Optional[QuizParseError] = self
        while err is not None:
            out.append(err)
            err = err.inner
        return out

    def root(self) -> "QuizParseError":
        return self.chain()[-1]

    def _display_context(self) -> str:
        for err in reversed(self.chain()):
            if err.context:
                return err.context
        return ""

    def _own_message(self) -> str:
        return _MESSAGES[self.kind]

    def _message(self) -> str:
        # wrapping layers only say where; the first non-wrapping one says what
        for err in self.chain():
            if err.inner is None or err.kind not in _WRAPPER_KINDS:
                return err._own_message()
        return self._own_message()

    def describe(self) -> str:
        msg = f"line {self.line}: {self._message()}"
        ctx = self._display_context()
        if ctx:
            msg += f": {ctx!r}"
        return msg

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(kind={self.kind.name}, context={self.context!r}, "
            f"lines_parsed={self.lines_parsed}, inner={self.inner!r})"
        )


class ConfigError(QuizParseError):
    kind: ConfigErrorKind

    def __init__(
        self,
        kind: ConfigErrorKind,
        context: str = "",
        lines_parsed: int = 0,
        expected: Optional[str] = None,
    ):
        self.expected = expected
        super().__init__(kind, context, lines_parsed)

    def _own_message(self) -> str:
        if self.kind is ConfigErrorKind.INVALID_VALUE and self.expected:
            return f"invalid value (expected {self.expected})"
        return _MESSAGES[self.kind]


class QuestionError(QuizParseError):
    kind: QuestionErrorKind


class QuizError(QuizParseError):
    kind: QuizErrorKind


def error_payload(err: QuizParseError) -> Dict[str, Any]:
    """Render an error chain as a JSON-safe dict."""

    chain = []
    for e in err.chain():
        entry: Dict[str, Any] = {
            "layer": type(e).__name__,
            "kind": e.kind.value,
            "context": e.context,
            "lines_parsed": e.lines_parsed,
        }
        if isinstance(e, ConfigError) and e.expected:
            entry["expected"] = e.expected
        chain.append(entry)
    return {
        "kind": err.root().kind.value,
        "line": err.line,
        "context": err._display_context(),
        "message": err.describe(),
        "chain": chain,
    }
