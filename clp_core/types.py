from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Literal, Tuple, Union, Mapping, Any
ResponseType = Literal["LIKERT","CHOICE","MULTI"]
QuizType = Literal["parent_home","teacher_classroom","student_self","general"]
PrefValue = Union[str, List[str]]
@dataclass(frozen=True)
class Question:
    id: int; skill: Optional[str]; type: ResponseType
    age_groups: Tuple[str, ...] = ()
    options: Optional[Tuple[str, ...]] = None
    context: str = "universal"

# Raw response values normalized once at the boundary.
@dataclass(frozen=True)
class Likert:
    value: float
@dataclass(frozen=True)
class Choice:
    value: str
@dataclass(frozen=True)
class MultiChoice:
    values: Tuple[str, ...]
@dataclass(frozen=True)
class Malformed:
    raw_type: str
ResponseValue = Union[Likert, Choice, MultiChoice, Malformed]

@dataclass
class ScoredSource:
    scores: Mapping[str, Any]
    weight: float
    quiz_type: str = "general"
    respondent_type: str = "general"
    timestamp: Optional[str] = None
@dataclass
class StrengthsAndGrowth:
    strengths: List[str]
    growth_areas: List[str]
@dataclass
class ConflictReport:
    requires_manual_review: bool
    severity: Literal["none","low","medium","high"]
    affected_skills: List[str] = field(default_factory=list)
    max_differences: Dict[str, float] = field(default_factory=dict)
    recommended_action: str = "none"
@dataclass
class ConfidenceReport:
    confidence: float
    level: Literal["low","medium","high"]
    baseline: float
    agreement_bonus: float
    professional_bonus: float
    completeness_bonus: float
    source_bonus: float
    average_difference: Optional[float]
    conflicts: ConflictReport
@dataclass
class ContextComparison:
    significant_differences: List[str]
    differences: Dict[str, float]
    pattern: Literal["home_advantaged","school_advantaged","balanced"]
    recommendations_needed: bool
@dataclass
class ProgressSummary:
    growth_indicators: Dict[str, float]
    consistent_strengths: List[str]
    emerging_strengths: List[str]
@dataclass
class Milestones:
    significant_growth_areas: List[str]
    strong_progress_indicators: List[str]
    expected_growth_pattern: bool
