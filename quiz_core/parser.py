from __future__ import annotations
import logging
from pathlib import Path
from typing import List, Union

from . import config as settings
from .directives import parse_config
from .errors import (
    ConfigError,
    ConfigErrorKind,
    QuestionError,
    QuestionErrorKind,
    QuizError,
    QuizErrorKind,
    context_of,
)
from .segmenter import segment_answers, split_blocks, split_question, split_quiz
from .types import Answer, Config, Question, Quiz

log = logging.getLogger(__name__)

__all__ = ["parse_question", "parse_quiz", "load_quiz"]


def parse_question(base: Config, text: str) -> Question:
    """Build one :class:`Question` from a blank-line delimited block.

    ``base`` is the quiz-level config; the block's own directives are applied
    on top of it.  Raises :class:`QuestionError`; ``ONLY_CONFIG`` means the
    block holds nothing but comments/settings and may be skipped.
    """

    config_text, body, marker_consumed = split_question(text)
    body_ctx = context_of(body)

    try:
        config = parse_config(base, config_text)
    except ConfigError as exc:
        if exc.kind is ConfigErrorKind.MISSING_DELIMITER and not body:
            # plain text and no body: most likely a question without its "?"
            raise QuestionError(
                QuestionErrorKind.MISSING_DELIMITER, body_ctx, exc.lines_parsed, inner=exc
            ) from exc
        raise QuestionError(
            QuestionErrorKind.CONFIG_ERROR, body_ctx, exc.lines_parsed, inner=exc
        ) from exc

    lines_parsed = config_text.count("\n") + (1 if marker_consumed else 0)
    if not body:
        raise QuestionError(QuestionErrorKind.ONLY_CONFIG, body_ctx, lines_parsed)

    title, pairs = segment_answers(body)
    answers = tuple(Answer(correct=ok, text=txt) for ok, txt in pairs)
    if not any(a.correct for a in answers):
        raise QuestionError(QuestionErrorKind.NO_CORRECT_ANSWER, body_ctx, lines_parsed)

    return Question(title=title, answers=answers, config=config)


def parse_quiz(text: str) -> Quiz:
    """Parse a whole document into a :class:`Quiz`.

    Raises :class:`QuizError` with ``lines_parsed`` relative to the start of
    the document.  Comment/config-only blocks are skipped silently.
    """

    config_text, body, fenced = split_quiz(text)
    try:
        quiz_config = parse_config(Config(), config_text)
    except ConfigError as exc:
        raise QuizError(
            QuizErrorKind.CONFIG_ERROR, exc.context, exc.lines_parsed, inner=exc
        ) from exc

    lines_parsed = config_text.count("\n") + (1 if fenced else 0)
    questions: List[Question] = []
    for block in split_blocks(body):
        if block:
            try:
                questions.append(parse_question(quiz_config, block))
            except QuestionError as exc:
                if exc.kind is not QuestionErrorKind.ONLY_CONFIG:
                    raise QuizError(
                        QuizErrorKind.QUESTION_ERROR,
                        exc.context,
                        lines_parsed + exc.lines_parsed,
                        inner=exc,
                    ) from exc
                log.debug("skipping comment block at line %d", lines_parsed + 1)
        # two newlines for the separating blank line
        lines_parsed += 2 + block.count("\n")

    total = sum((q.config.value for q in questions), 0.0)
    log.debug("parsed %d questions, total score %.2f", len(questions), total)
    return Quiz(config=quiz_config, questions=tuple(questions), total_score=total)


def load_quiz(path: Union[str, Path]) -> Quiz:
    p = Path(path)
    size = p.stat().st_size
    if size > settings.MAX_DOCUMENT_BYTES:
        raise ValueError(
            f"{p} is {size} bytes, larger than the {settings.MAX_DOCUMENT_BYTES} byte limit"
        )
    return parse_quiz(p.read_text(encoding="utf-8"))
