from __future__ import annotations

import pytest

from quiz_core.errors import (
    ConfigErrorKind,
    QuestionErrorKind,
    QuizError,
    QuizErrorKind,
    error_payload,
)
from quiz_core.parser import load_quiz, parse_quiz
from quiz_core.types import Answer, Config
from tests.conftest import build_quiz_text


def test_single_question_document():
    quiz = parse_quiz("?question\n+answer")
    assert len(quiz.questions) == 1
    q = quiz.questions[0]
    assert q.title == "question"
    assert q.answers == (Answer(True, "answer"),)
    assert quiz.total_score == 1.0


def test_question_value_feeds_total_score():
    quiz = parse_quiz(";value: 2\n?question\n+answer")
    assert quiz.questions[0].config.value == 2.0
    assert quiz.total_score == 2.0


def test_empty_document_has_zero_score():
    quiz = parse_quiz("")
    assert quiz.questions == ()
    assert quiz.total_score == 0.0
    assert quiz.config == Config()


def test_total_score_is_sum_of_question_values():
    quiz = parse_quiz(build_quiz_text(n_choice=3, n_typed=2, value=1.5))
    assert len(quiz.questions) == 5
    assert quiz.total_score == sum(q.config.value for q in quiz.questions)
    assert quiz.total_score == 3 * 1.5 + 2 * 1.0


def test_sample_document(sample_quiz):
    assert sample_quiz.config.tutorial is False
    titles = [q.title for q in sample_quiz.questions]
    assert titles == ["What is 2 + 2?", "Pick the primes", "Name the language of this project"]
    primes = sample_quiz.questions[1]
    assert primes.config.value == 2.0 and primes.config.ordered_answers is False
    assert [a.correct for a in primes.answers] == [True, True, False, False]
    assert sample_quiz.questions[2].config.case_sensitive is True
    assert sample_quiz.total_score == 4.0


def test_quiz_settings_are_inherited_and_overridable():
    text = build_quiz_text(quiz_settings=[";value: 3", ";ordered: false"], n_choice=1, n_typed=0)
    text += "\n\n;value: 1\n?own value\n+x"
    quiz = parse_quiz(text)
    assert quiz.config.value == 3.0
    assert [q.config.value for q in quiz.questions] == [3.0, 1.0]
    assert all(q.config.ordered is False for q in quiz.questions)


def test_comment_blocks_are_skipped():
    quiz = parse_quiz("# intro\n# more\n\n?q\n+a\n\n;value: 5\n# trailing settings only")
    assert len(quiz.questions) == 1
    assert quiz.total_score == 1.0


def test_crlf_document():
    quiz = parse_quiz("?one\r\n+a\r\n\r\n?two\r\n+b\r\n-c")
    assert [q.title for q in quiz.questions] == ["one", "two"]
    assert quiz.questions[1].answers == (Answer(True, "b"), Answer(False, "c"))


def test_quiz_config_error_position():
    with pytest.raises(QuizError) as ei:
        parse_quiz("---\n;value: 2\n;nope: 1\n---\n?q\n+a")
    err = ei.value
    assert err.kind is QuizErrorKind.CONFIG_ERROR
    assert err.inner.kind is ConfigErrorKind.INVALID_OPTION
    assert err.line == 3


def test_plain_text_document_reports_missing_delimiter():
    with pytest.raises(QuizError) as ei:
        parse_quiz("value: 1")
    err = ei.value
    assert err.kind is QuizErrorKind.QUESTION_ERROR
    assert err.inner.kind is QuestionErrorKind.MISSING_DELIMITER
    assert err.root().kind is ConfigErrorKind.MISSING_DELIMITER
    assert err.lines_parsed == 0


def test_no_correct_answer_document():
    with pytest.raises(QuizError) as ei:
        parse_quiz("?question\n- inc-answer")
    assert ei.value.inner.kind is QuestionErrorKind.NO_CORRECT_ANSWER
    assert ei.value.line == 1


@pytest.mark.parametrize(
    "text,line",
    [
        # no fence: second question starts on line 4
        ("?ok\n+a\n\n?bad\n-b", 4),
        # extra blank lines still count
        ("?ok\n+a\n\n\n\n?bad\n-b", 6),
        # fence plus settings
        ("---\n;value: 2\n---\n?ok\n+a\n\n?bad\n-b", 7),
        # settings above the bad question are counted too
        ("?ok\n+a\n\n# note\n;value: 3\n?bad\n-b", 6),
        # comment block in between
        ("# intro\n\n?ok\n+a\n\n?bad\n-b", 6),
        # empty config between the fences
        ("---\n---\n?bad\n-b", 3),
    ],
)
def test_error_line_numbers_point_at_the_question(text, line):
    with pytest.raises(QuizError) as ei:
        parse_quiz(text)
    assert ei.value.line == line
    assert text.split("\n")[line - 1].startswith("?bad")


def test_config_error_inside_block_is_positioned_globally():
    text = "?ok\n+a\n\n;value: 2\n;value: abc\n?q\n+a"
    with pytest.raises(QuizError) as ei:
        parse_quiz(text)
    err = ei.value
    assert err.inner.kind is QuestionErrorKind.CONFIG_ERROR
    assert err.root().kind is ConfigErrorKind.INVALID_VALUE
    assert err.line == 5
    assert err.context == "q"
    assert "'abc'" in err.describe()


def test_error_payload_shape():
    with pytest.raises(QuizError) as ei:
        parse_quiz("?ok\n+a\n\nforgot marker")
    payload = error_payload(ei.value)
    assert payload["line"] == 4
    assert payload["kind"] == "missing_delimiter"
    assert payload["context"] == "forgot marker"
    assert [c["layer"] for c in payload["chain"]] == ["QuizError", "QuestionError", "ConfigError"]


def test_load_quiz_reads_utf8(tmp_path):
    path = tmp_path / "quiz.txt"
    path.write_text("?Größe?\n+groß", encoding="utf-8")
    quiz = load_quiz(path)
    assert quiz.questions[0].answers[0].text == "groß"


def test_load_quiz_rejects_oversized_files(tmp_path, monkeypatch):
    from quiz_core import config

    monkeypatch.setattr(config, "MAX_DOCUMENT_BYTES", 4, raising=False)
    path = tmp_path / "quiz.txt"
    path.write_text("?q\n+a", encoding="utf-8")
    with pytest.raises(ValueError):
        load_quiz(path)
