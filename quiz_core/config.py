from __future__ import annotations
import os, json, pathlib, random


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError:
        return default


MAX_DOCUMENT_BYTES: int = 1 << 20

AUDIT_EXPORT_ENABLED: bool = True

DEBUG_TRACE: bool = False
TRACE_FIELDS: tuple[str, ...] = (
    "step",
    "kind",
    "title",
    "value",
    "response",
    "expected",
    "awarded",
    "score_after",
)
# // env overrides for ops; quiz directives never come from here.
MAX_DOCUMENT_BYTES = _env_int("MAX_DOCUMENT_BYTES", MAX_DOCUMENT_BYTES)
AUDIT_EXPORT_ENABLED = _env_bool("AUDIT_EXPORT_ENABLED", AUDIT_EXPORT_ENABLED)
DEBUG_TRACE = _env_bool("DEBUG_TRACE", False)


def load_config() -> dict:
    cfg = {}
    p = pathlib.Path("config.json")
    if p.exists():
        try: cfg = json.loads(p.read_text(encoding="utf-8"))
        except (OSError, ValueError): cfg = {}
    e = os.environ
    if e.get("SEED"):
        try: cfg["SEED"] = int(e["SEED"])
        except ValueError: pass
    return cfg


def make_rng(cfg: dict) -> random.Random:
    s = cfg.get("SEED")
    if s is not None:
        return random.Random(int(s))
    return random.Random()
