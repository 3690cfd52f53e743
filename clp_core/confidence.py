"""Confidence, completeness and conflict estimates over a set of scored sources.

Every function here is total: empty, single-source or malformed inputs give a
finite result in range. A source consolidation would ignore (zero, negative,
non-finite or non-numeric weight) is ignored here too; otherwise weights are
not consulted and a source counts once whenever it carries finite scores.
"""
from __future__ import annotations

import logging
from itertools import combinations
from typing import Any, Dict, List, Optional

from .types import ConfidenceReport, ConflictReport, ScoredSource
from .question_bank import SKILLS
from .scoring import numeric_skill_scores
from .consolidation import normalize_sources, valid_weight
from .config import (
    CONFIDENCE_BASELINE,
    AGREEMENT_BONUS_MAX,
    AGREEMENT_PER_POINT,
    PROFESSIONAL_BONUS,
    COMPLETENESS_BONUS_MAX,
    SOURCE_BONUS,
    SOURCE_BONUS_MAX,
    CONFIDENCE_HIGH,
    CONFIDENCE_MEDIUM,
    PROFESSIONAL_TAGS,
    SEVERE_CONFLICT_DIFF,
)

log = logging.getLogger(__name__)


def _effective(sources: Any) -> List[ScoredSource]:
    return [src for src in normalize_sources(sources) if valid_weight(src.weight) is not None]


def _numeric(sources: List[ScoredSource]) -> List[Dict[str, float]]:
    return [numeric_skill_scores(src.scores) for src in sources]


def common_skills(sources: Any) -> List[str]:
    """Skills holding a finite score in every source."""
    vectors = _numeric(_effective(sources))
    if not vectors:
        return []
    return [s for s in SKILLS if all(s in vec for vec in vectors)]


def shared_skills(sources: Any) -> List[str]:
    """Skills holding a finite score in at least two sources."""
    vectors = _numeric(_effective(sources))
    return [s for s in SKILLS if sum(1 for vec in vectors if s in vec) >= 2]


def average_skill_difference(sources: Any) -> Optional[float]:
    """Mean absolute pairwise difference over every (skill, source pair) both populated."""
    vectors = _numeric(_effective(sources))
    total = 0.0
    comparisons = 0
    for skill in SKILLS:
        for a, b in combinations([vec[skill] for vec in vectors if skill in vec], 2):
            total += abs(a - b)
            comparisons += 1
    if not comparisons:
        return None
    return total / comparisons


def coverage(sources: Any) -> float:
    """Average fraction of the 8 skills populated per source, 0..1."""
    vectors = _numeric(_effective(sources))
    if not vectors:
        return 0.0
    return sum(len(vec) / len(SKILLS) for vec in vectors) / len(vectors)


def _is_professional(src: ScoredSource) -> bool:
    tags = {str(src.quiz_type).lower(), str(src.respondent_type).lower()}
    return any(tag in PROFESSIONAL_TAGS for tag in tags)


def has_professional_input(sources: Any) -> bool:
    return any(_is_professional(src) for src in _effective(sources))


def confidence_level(value: float) -> str:
    if value >= CONFIDENCE_HIGH: return "high"
    if value >= CONFIDENCE_MEDIUM: return "medium"
    return "low"


def detect_conflicts(sources: Any) -> ConflictReport:
    """Flag skills whose spread across sources reaches the severe threshold."""
    vectors = _numeric(_effective(sources))
    if len(vectors) < 2:
        return ConflictReport(requires_manual_review=False, severity="none")
    spreads: Dict[str, float] = {}
    for skill in SKILLS:
        vals = [vec[skill] for vec in vectors if skill in vec]
        if len(vals) >= 2:
            spreads[skill] = round(max(vals) - min(vals), 2)
    severe = [s for s, d in spreads.items() if d >= SEVERE_CONFLICT_DIFF]
    if len(severe) >= 2: severity = "high"
    elif severe: severity = "medium"
    else: severity = "low"
    if severe:
        log.debug("severe conflicts on %s", ", ".join(severe))
    return ConflictReport(
        requires_manual_review=bool(severe),
        severity=severity,
        affected_skills=severe,
        max_differences=spreads,
        recommended_action="schedule_conference" if severity == "high" else "provide_context_recommendations",
    )


def confidence_report(sources: Any) -> ConfidenceReport:
    """Baseline plus agreement, professional, completeness and extra-source bonuses.

    Every term is non-negative; disagreement between sources is reported
    through the conflict report rather than subtracted here.
    """
    srcs = _effective(sources)
    avg_diff = average_skill_difference(srcs)
    agreement = 0.0
    if avg_diff is not None:
        agreement = AGREEMENT_BONUS_MAX - AGREEMENT_PER_POINT * avg_diff
        agreement = max(0.0, min(AGREEMENT_BONUS_MAX, agreement))
    professional = PROFESSIONAL_BONUS if any(_is_professional(s) for s in srcs) else 0.0
    completeness = COMPLETENESS_BONUS_MAX * coverage(srcs)
    populated = sum(1 for vec in _numeric(srcs) if vec)
    extra = min(SOURCE_BONUS_MAX, SOURCE_BONUS * max(0, populated - 1))
    value = CONFIDENCE_BASELINE + agreement + professional + completeness + extra
    value = round(max(0.0, min(100.0, value)), 1)
    return ConfidenceReport(
        confidence=value,
        level=confidence_level(value),
        baseline=CONFIDENCE_BASELINE,
        agreement_bonus=round(agreement, 2),
        professional_bonus=professional,
        completeness_bonus=round(completeness, 2),
        source_bonus=extra,
        average_difference=None if avg_diff is None else round(avg_diff, 3),
        conflicts=detect_conflicts(srcs),
    )


def confidence(sources: Any) -> float:
    return confidence_report(sources).confidence


def _role(src: ScoredSource) -> str:
    rt = str(src.respondent_type).lower()
    qt = str(src.quiz_type).lower()
    if rt == "parent" or qt == "parent_home": return "parent"
    if rt == "teacher" or qt == "teacher_classroom": return "teacher"
    return rt or "general"


def source_counts(sources: Any) -> Dict[str, int]:
    counts = {"parent": 0, "teacher": 0, "total": 0}
    for src in normalize_sources(sources):
        role = _role(src)
        if role in counts:
            counts[role] += 1
        counts["total"] += 1
    return counts


def completeness_percentage(sources: Any) -> int:
    """40 for parent input, 40 for teacher input, 5 per source; capped at 100."""
    counts = source_counts(sources)
    score = (40 if counts["parent"] else 0) + (40 if counts["teacher"] else 0) + 5 * counts["total"]
    return min(100, score)


def missing_contexts(sources: Any) -> List[str]:
    counts = source_counts(sources)
    out = []
    if not counts["parent"]: out.append("parent_home")
    if not counts["teacher"]: out.append("teacher_classroom")
    return out
