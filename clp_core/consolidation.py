from __future__ import annotations
from typing import Any, Dict, List, Mapping, Optional, Tuple
import logging, math

from .types import ScoredSource
from .question_bank import SKILLS, PREFERENCES
from .scoring import numeric_skill_scores, _emit_trace
from .config import CONSOLIDATED_NEUTRAL, SCORE_MIN, SCORE_MAX

log = logging.getLogger(__name__)


def valid_weight(weight: Any) -> Optional[float]:
    """Finite positive weight, or None when the source must be ignored."""
    if isinstance(weight, bool) or not isinstance(weight, (int, float)):
        return None
    try:
        w = float(weight)
    except OverflowError:
        return None
    if not math.isfinite(w) or w <= 0:
        return None
    return w


def as_source(obj: Any) -> Optional[ScoredSource]:
    """Accept a ScoredSource or a mapping in either snake_case or camelCase."""
    if isinstance(obj, ScoredSource):
        return obj
    if not isinstance(obj, Mapping):
        return None
    scores = obj.get("scores")
    return ScoredSource(
        scores=scores if isinstance(scores, Mapping) else {},
        weight=obj.get("weight"),
        quiz_type=str(obj.get("quiz_type", obj.get("quizType")) or "general"),
        respondent_type=str(obj.get("respondent_type", obj.get("respondentType")) or "general"),
        timestamp=obj.get("timestamp"),
    )


def normalize_sources(sources: Any) -> List[ScoredSource]:
    if sources is None or isinstance(sources, (str, bytes, Mapping)):
        return []
    try:
        items = list(sources)
    except TypeError:
        return []
    out = []
    for obj in items:
        src = as_source(obj)
        if src is not None:
            out.append(src)
    return out


def _skill_pairs(sources: List[ScoredSource], skill: str) -> List[Tuple[int, float, float]]:
    pairs = []
    for idx, src in enumerate(sources):
        w = valid_weight(src.weight)
        if w is None:
            continue
        val = numeric_skill_scores(src.scores).get(skill)
        if val is None:
            continue
        pairs.append((idx, val, w))
    return pairs


def _weighted_mean(pairs: List[Tuple[int, float, float]]) -> Optional[float]:
    if not pairs:
        return None
    # rescale by the largest weight so huge weights cannot overflow the products
    top = max(w for _, _, w in pairs)
    num = sum(val * (w / top) for _, val, w in pairs)
    den = sum(w / top for _, _, w in pairs)
    if den <= 0:
        return None
    return num / den


def consolidate(sources: Any) -> Dict[str, Any]:
    """Weighted average of N scored sources into one score vector.

    Per skill, only sources holding a finite score and a finite positive
    weight contribute. A skill nobody supplied defaults to the neutral 3.0.
    Preferences are carried from the latest source that recorded them.
    """
    srcs = normalize_sources(sources)
    out: Dict[str, Any] = {}
    excluded = sum(1 for s in srcs if valid_weight(s.weight) is None)
    for skill in SKILLS:
        mean = _weighted_mean(_skill_pairs(srcs, skill))
        if mean is None:
            out[skill] = CONSOLIDATED_NEUTRAL
        else:
            out[skill] = max(SCORE_MIN, min(SCORE_MAX, round(mean, 2)))
    for src in srcs:
        if not isinstance(src.scores, Mapping):
            continue
        for pref in PREFERENCES:
            val = src.scores.get(pref)
            if isinstance(val, str) or (isinstance(val, list) and all(isinstance(v, str) for v in val)):
                out[pref] = list(val) if isinstance(val, list) else val
    if excluded:
        log.debug("consolidation excluded %d sources with invalid weight", excluded)
    _emit_trace(op="consolidate", sources=len(srcs), excluded=excluded)
    return out


def consolidation_trace(sources: Any) -> List[Dict[str, Any]]:
    """Per (skill, source) contribution rows behind a consolidate() call."""
    srcs = normalize_sources(sources)
    events: List[Dict[str, Any]] = []
    for skill in SKILLS:
        pairs = _skill_pairs(srcs, skill)
        top = max((w for _, _, w in pairs), default=1.0)
        total = sum(w / top for _, _, w in pairs)
        used = {idx: w / top for idx, _, w in pairs}
        for idx, src in enumerate(srcs):
            val = numeric_skill_scores(src.scores).get(skill)
            w = used.get(idx)
            share = (w / total) if (w is not None and total > 0) else 0.0
            events.append({
                "skill": skill,
                "source": idx,
                "quiz_type": src.quiz_type,
                "respondent_type": src.respondent_type,
                "score": val,
                "weight": valid_weight(src.weight) or 0.0,
                "included": w is not None,
                "share": round(share, 4),
            })
    return events
