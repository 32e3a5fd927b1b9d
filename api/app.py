from __future__ import annotations
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel
import logging, os, typing as t

from quiz_core import config
from quiz_core.errors import QuizParseError, error_payload
from quiz_core.parser import parse_quiz
from quiz_core.types import Config, Question, Quiz

log = logging.getLogger(__name__)

app = FastAPI(title="Quiz Markup API")


@app.get("/")
def root():
    return {"status": "ok", "service": "quiz-markup-api"}


ALLOWED_ORIGINS = [
    o.strip() for o in os.getenv("ALLOWED_ORIGINS", "http://localhost:3000").split(",") if o.strip()
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
    allow_credentials=False,
)

# ---- Schemas ----
class DocumentReq(BaseModel):
    text: str

# ---- Helpers ----
def _serialize_config(cfg: Config) -> dict[str, t.Any]:
    return {
        "value": cfg.value,
        "case_sensitive": cfg.case_sensitive,
        "ordered": cfg.ordered,
        "ordered_answers": cfg.ordered_answers,
        "tutorial": cfg.tutorial,
    }


def _serialize_question(q: Question) -> dict[str, t.Any]:
    return {
        "title": q.title,
        "kind": q.kind,  # "typed"|"choice"
        "config": _serialize_config(q.config),
        "answers": [{"correct": a.correct, "text": a.text} for a in q.answers],
    }


def _serialize_quiz(quiz: Quiz) -> dict[str, t.Any]:
    return {
        "config": _serialize_config(quiz.config),
        "questions": [_serialize_question(q) for q in quiz.questions],
        "total_score": quiz.total_score,
    }


def _check_size(text: str) -> None:
    size = len(text.encode("utf-8"))
    if size > config.MAX_DOCUMENT_BYTES:
        raise HTTPException(413, f"document is {size} bytes; limit is {config.MAX_DOCUMENT_BYTES}")

# ---- Health ----
@app.get("/health")
def health():
    return {
        "max_document_bytes": config.MAX_DOCUMENT_BYTES,
        "debug_trace": config.DEBUG_TRACE,
    }

# ---- Documents ----
@app.post("/quizzes/parse")
def parse_document(req: DocumentReq):
    _check_size(req.text)
    try:
        quiz = parse_quiz(req.text)
    except QuizParseError as e:
        log.info("rejected document: %s", e.describe())
        return JSONResponse(status_code=422, content={"error": error_payload(e)})
    return _serialize_quiz(quiz)


@app.post("/quizzes/validate")
def validate_document(req: DocumentReq):
    _check_size(req.text)
    try:
        quiz = parse_quiz(req.text)
    except QuizParseError as e:
        return {"ok": False, "error": error_payload(e)}
    return {"ok": True, "questions": len(quiz.questions), "total_score": quiz.total_score}
