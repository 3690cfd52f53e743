# clp_core/context.py
from __future__ import annotations
from typing import Any, Dict

from .types import ContextComparison
from .scoring import numeric_skill_scores
from .config import CONTEXT_DIFF_THRESHOLD, CONTEXT_RECOMMEND_MIN


def compare_contexts(home_scores: Any, school_scores: Any) -> ContextComparison:
    """Contrast a home (parent) vector against a school (teacher) vector.

    A skill differs significantly when |home - school| exceeds the context
    threshold. The pattern tips to one side only when that side leads on more
    than twice as many significant skills as the other.
    """
    home = numeric_skill_scores(home_scores)
    school = numeric_skill_scores(school_scores)
    diffs: Dict[str, float] = {}
    significant = []
    home_adv = school_adv = 0
    for skill, h in home.items():
        if skill not in school:
            continue
        d = h - school[skill]
        diffs[skill] = round(d, 2)
        if abs(d) > CONTEXT_DIFF_THRESHOLD:
            significant.append(skill)
            if d > 0: home_adv += 1
            else: school_adv += 1
    pattern = "balanced"
    if home_adv > school_adv * 2: pattern = "home_advantaged"
    elif school_adv > home_adv * 2: pattern = "school_advantaged"
    return ContextComparison(
        significant_differences=significant,
        differences=diffs,
        pattern=pattern,
        recommendations_needed=len(significant) > CONTEXT_RECOMMEND_MIN,
    )
