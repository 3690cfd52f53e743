from __future__ import annotations
from typing import Any, Dict, Mapping, Optional
import logging, math

from .types import Likert, Choice, MultiChoice, Malformed, ResponseValue
from .question_bank import SKILLS, PREFERENCES, skill_for
from .config import SCORE_ABSENT, SCORE_MIN, SCORE_MAX, DEBUG_TRACE, TRACE_FIELDS

log = logging.getLogger(__name__)


def _emit_trace(**values: object) -> None:
    if not DEBUG_TRACE:
        return
    ordered = [f"{key}={values[key]}" for key in TRACE_FIELDS if key in values]
    if ordered:
        log.info("trace %s", " ".join(ordered))


def classify_response(raw: Any) -> ResponseValue:
    """Normalize a raw submitted value into one response variant.

    Only the top level of ``raw`` is inspected; list elements are type-checked
    but never descended into.
    """
    if isinstance(raw, bool):
        return Malformed("bool")
    if isinstance(raw, (int, float)):
        try:
            val = float(raw)
        except OverflowError:
            return Malformed("overflow")
        if not math.isfinite(val):
            return Malformed("non-finite")
        return Likert(val)
    if isinstance(raw, str):
        return Choice(raw)
    if isinstance(raw, (list, tuple)):
        if all(isinstance(v, str) for v in raw):
            return MultiChoice(tuple(raw))
        return Malformed("mixed-list")
    return Malformed(type(raw).__name__)


def _likert_points(value: float) -> float:
    # 1-2 -> 0.0, 3-4 -> 0.5, 5 -> 1.0; out-of-range values land on the nearest tier
    if value >= 5: return 1.0
    if value >= 3: return 0.5
    return 0.0


def points_from_response(question_id: Any, raw: Any) -> float:
    """Return 0.0, 0.5 or 1.0 for one response. Never raises."""
    skill = skill_for(question_id)
    if skill is None or skill in PREFERENCES:
        return 0.0
    resp = classify_response(raw)
    if isinstance(resp, Likert):
        return _likert_points(resp.value)
    return 0.0


def _points_to_score(avg_points: float) -> float:
    score = round(1 + 4 * avg_points, 2)
    return max(SCORE_MIN, min(SCORE_MAX, score))


def default_scores() -> Dict[str, Any]:
    return {skill: SCORE_ABSENT for skill in SKILLS}


def calculate_scores(
    responses: Any,
    quiz_type: str = "general",
    age_group: Optional[str] = None,
) -> Dict[str, Any]:
    """Aggregate one submission into the 8-skill vector plus preferences.

    Skills with no response score 1.0. ``quiz_type`` and ``age_group`` are
    accepted for parity with the quiz configuration layer and do not change
    the arithmetic.
    """
    scores = default_scores()
    if not isinstance(responses, Mapping):
        _emit_trace(op="score", quiz_type=quiz_type, age_group=age_group, responses=0, ignored=0)
        return scores

    totals = {skill: 0.0 for skill in SKILLS}
    counts = {skill: 0 for skill in SKILLS}
    prefs: Dict[str, Any] = {}
    ignored = 0
    for qid, raw in responses.items():
        skill = skill_for(qid)
        if skill is None:
            ignored += 1
            continue
        if skill in PREFERENCES:
            resp = classify_response(raw)
            if isinstance(resp, Choice):
                prefs[skill] = resp.value
            elif isinstance(resp, MultiChoice):
                prefs[skill] = list(resp.values)
            else:
                log.debug("preference %s ignored: %s", qid, getattr(resp, "raw_type", "numeric"))
            continue
        totals[skill] += points_from_response(qid, raw)
        counts[skill] += 1

    for skill in SKILLS:
        if counts[skill]:
            scores[skill] = _points_to_score(totals[skill] / counts[skill])
    for pref in PREFERENCES:
        if pref in prefs:
            scores[pref] = prefs[pref]

    if ignored:
        log.debug("ignored %d responses with unmapped question ids", ignored)
    _emit_trace(op="score", quiz_type=quiz_type, age_group=age_group, responses=len(responses), ignored=ignored)
    return scores


def numeric_skill_scores(scores: Any) -> Dict[str, float]:
    """Finite numeric skill entries of a score vector, in skill order."""
    out: Dict[str, float] = {}
    if not isinstance(scores, Mapping):
        return out
    for skill in SKILLS:
        val = scores.get(skill)
        if isinstance(val, bool) or not isinstance(val, (int, float)):
            continue
        try:
            fval = float(val)
        except OverflowError:
            continue
        if math.isfinite(fval):
            out[skill] = fval
    return out
