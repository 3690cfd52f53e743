from __future__ import annotations
import os, json, pathlib


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


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw.strip())
    except ValueError:
        return default


SCORE_MIN: float = 1.0
SCORE_MAX: float = 5.0
SCORE_ABSENT: float = 1.0
CONSOLIDATED_NEUTRAL: float = 3.0

STRENGTH_THRESHOLD: float = 4.0
GROWTH_THRESHOLD: float = 3.0
RELATIVE_PICK: int = 2
FALLBACK_LABEL: str = "Unique Learner"

CONFIDENCE_BASELINE: float = 30.0
AGREEMENT_BONUS_MAX: float = 30.0
AGREEMENT_PER_POINT: float = 12.0
PROFESSIONAL_BONUS: float = 25.0
COMPLETENESS_BONUS_MAX: float = 30.0
SOURCE_BONUS: float = 5.0
SOURCE_BONUS_MAX: float = 15.0
CONFIDENCE_HIGH: float = 80.0
CONFIDENCE_MEDIUM: float = 60.0
PROFESSIONAL_TAGS: tuple[str, ...] = ("teacher_classroom", "teacher", "professional", "educator")

SEVERE_CONFLICT_DIFF: float = 3.0
CONTEXT_DIFF_THRESHOLD: float = 1.5
CONTEXT_RECOMMEND_MIN: int = 2

CONSISTENT_STRENGTH_MIN: float = 3.5
EMERGING_GROWTH_MIN: float = 0.5
MILESTONE_SIGNIFICANT: float = 1.0
MILESTONE_PROGRESS: float = 0.5

QUIZ_WEIGHTS: dict[str, float] = {
    "parent_home": 0.6,
    "teacher_classroom": 0.8,
    "student_self": 0.3,
    "general": 1.0,
}
DEFAULT_QUIZ_WEIGHT: float = 0.5
CONFIDENCE_BOOSTS: dict[str, int] = {
    "parent_home": 30,
    "teacher_classroom": 40,
    "student_self": 15,
    "general": 50,
}
DEFAULT_CONFIDENCE_BOOST: int = 25
DIMINISHING_FACTOR: float = 0.5
COMPLETENESS_TARGET: float = 80.0

AUDIT_EXPORT_ENABLED: bool = True

DEBUG_TRACE: bool = False
TRACE_FIELDS: tuple[str, ...] = (
    "op",
    "quiz_type",
    "age_group",
    "responses",
    "ignored",
    "sources",
    "excluded",
)
# // env overrides for staging/ops; defaults match the published scale.
STRENGTH_THRESHOLD = _env_float("STRENGTH_THRESHOLD", STRENGTH_THRESHOLD)
GROWTH_THRESHOLD = _env_float("GROWTH_THRESHOLD", GROWTH_THRESHOLD)
CONFIDENCE_BASELINE = _env_float("CONFIDENCE_BASELINE", CONFIDENCE_BASELINE)
AGREEMENT_BONUS_MAX = _env_float("AGREEMENT_BONUS_MAX", AGREEMENT_BONUS_MAX)
AGREEMENT_PER_POINT = _env_float("AGREEMENT_PER_POINT", AGREEMENT_PER_POINT)
PROFESSIONAL_BONUS = _env_float("PROFESSIONAL_BONUS", PROFESSIONAL_BONUS)
COMPLETENESS_BONUS_MAX = _env_float("COMPLETENESS_BONUS_MAX", COMPLETENESS_BONUS_MAX)
SOURCE_BONUS = _env_float("SOURCE_BONUS", SOURCE_BONUS)
SEVERE_CONFLICT_DIFF = _env_float("SEVERE_CONFLICT_DIFF", SEVERE_CONFLICT_DIFF)
CONTEXT_DIFF_THRESHOLD = _env_float("CONTEXT_DIFF_THRESHOLD", CONTEXT_DIFF_THRESHOLD)
DIMINISHING_FACTOR = _env_float("DIMINISHING_FACTOR", DIMINISHING_FACTOR)
RELATIVE_PICK = _env_int("RELATIVE_PICK", RELATIVE_PICK)
AUDIT_EXPORT_ENABLED = _env_bool("AUDIT_EXPORT_ENABLED", AUDIT_EXPORT_ENABLED)
DEBUG_TRACE = _env_bool("DEBUG_TRACE", False)


def load_config() -> dict:
    cfg = {}
    p = pathlib.Path("config.json")
    if p.exists():
        try: cfg = json.loads(p.read_text(encoding="utf-8"))
        except (OSError, ValueError): cfg = {}
    if not isinstance(cfg, dict):
        cfg = {}
    e = os.environ
    if e.get("DIMINISHING_FACTOR"): cfg["DIMINISHING_FACTOR"] = DIMINISHING_FACTOR
    if e.get("BASE_URL"): cfg["BASE_URL"] = e.get("BASE_URL")
    if e.get("AUDIT_EXPORT_ENABLED"): cfg["AUDIT_EXPORT_ENABLED"] = AUDIT_EXPORT_ENABLED
    cfg.setdefault("QUIZ_WEIGHTS", dict(QUIZ_WEIGHTS))
    cfg.setdefault("CONFIDENCE_BOOSTS", dict(CONFIDENCE_BOOSTS))
    cfg.setdefault("DIMINISHING_FACTOR", DIMINISHING_FACTOR)
    return cfg
