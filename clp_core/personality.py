# clp_core/personality.py
from __future__ import annotations
from typing import Any, Dict, List, Tuple

from .types import StrengthsAndGrowth
from .scoring import numeric_skill_scores
from .config import STRENGTH_THRESHOLD, GROWTH_THRESHOLD, RELATIVE_PICK, FALLBACK_LABEL

LABELS: Dict[Tuple[str, str], str] = {}
def _pair(a, b): return tuple(sorted((a, b)))
def _init():
    pairs = {
        ("Communication", "Collaboration"): "Social Communicator",
        ("Communication", "Creative Innovation"): "Creative Storyteller",
        ("Communication", "Confidence"): "Confident Leader",
        ("Communication", "Content"): "Knowledge Communicator",
        ("Communication", "Critical Thinking"): "Thoughtful Communicator",
        ("Communication", "Literacy"): "Language Leader",
        ("Communication", "Math"): "Mathematical Communicator",
        ("Collaboration", "Creative Innovation"): "Creative Collaborator",
        ("Collaboration", "Confidence"): "Natural Leader",
        ("Collaboration", "Content"): "Team Scholar",
        ("Collaboration", "Critical Thinking"): "Strategic Partner",
        ("Collaboration", "Literacy"): "Reading Partner",
        ("Collaboration", "Math"): "Math Team Player",
        ("Creative Innovation", "Critical Thinking"): "Creative Problem Solver",
        ("Creative Innovation", "Confidence"): "Fearless Creator",
        ("Creative Innovation", "Content"): "Innovative Learner",
        ("Creative Innovation", "Literacy"): "Creative Writer",
        ("Creative Innovation", "Math"): "Mathematical Innovator",
        ("Critical Thinking", "Content"): "Analytical Scholar",
        ("Critical Thinking", "Confidence"): "Bold Analyst",
        ("Critical Thinking", "Literacy"): "Critical Reader",
        ("Critical Thinking", "Math"): "Mathematical Thinker",
        ("Confidence", "Content"): "Confident Scholar",
        ("Confidence", "Literacy"): "Reading Champion",
        ("Confidence", "Math"): "Math Confident",
        ("Literacy", "Math"): "Academic All-Star",
        ("Content", "Literacy"): "Knowledge Reader",
        ("Content", "Math"): "Mathematical Scholar",
    }
    for k, v in pairs.items(): LABELS[_pair(*k)] = v
_init()


def _ranked(scores: Any) -> List[Tuple[str, float]]:
    # stable sort keeps skill declaration order on ties
    return sorted(numeric_skill_scores(scores).items(), key=lambda kv: -kv[1])


def personality_label(scores: Any) -> str:
    ranked = _ranked(scores)
    if len(ranked) < 2:
        return FALLBACK_LABEL
    primary, secondary = ranked[0][0], ranked[1][0]
    return LABELS.get(_pair(primary, secondary), FALLBACK_LABEL)


def strengths_and_growth(scores: Any) -> StrengthsAndGrowth:
    numeric = numeric_skill_scores(scores)
    strengths = [s for s, v in numeric.items() if v >= STRENGTH_THRESHOLD]
    growth = [s for s, v in numeric.items() if v < GROWTH_THRESHOLD]
    if not strengths:
        # compressed profiles still get a relative top/bottom pick
        ranked = _ranked(scores)
        return StrengthsAndGrowth(
            strengths=[s for s, _ in ranked[:RELATIVE_PICK]],
            growth_areas=[s for s, _ in ranked[-RELATIVE_PICK:]] if ranked else [],
        )
    return StrengthsAndGrowth(strengths=strengths, growth_areas=growth)


def describe(scores: Any) -> Dict[str, Any]:
    """Label, strengths/growth lists and a one-line narrative for a score vector."""
    sg = strengths_and_growth(scores)
    lead = sg.strengths[0] if sg.strengths else "learning"
    grow = sg.growth_areas[0] if sg.growth_areas else "various areas"
    return {
        "personality_label": personality_label(scores),
        "strengths": list(sg.strengths),
        "growth_areas": list(sg.growth_areas),
        "description": (
            f"This child demonstrates strong {lead} skills with opportunities to grow in {grow}."
        ),
    }
