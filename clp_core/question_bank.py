from __future__ import annotations
import json, importlib.resources as ir
from typing import Dict, List, Optional
from .types import Question
SKILLS = ["Communication","Collaboration","Content","Critical Thinking","Creative Innovation","Confidence","Literacy","Math"]
PREFERENCES = ["Engagement","Modality","Social","Interests"]
AGE_GROUPS = ["3-4","4-5","5-6","6-8","8-10","10+"]
CORE_QUESTION_COUNT = 24
# 1-24 score three questions per skill; 25-28 capture preferences.
SKILL_MAPPING: Dict[int, str] = {qid: SKILLS[(qid - 1) // 3] for qid in range(1, CORE_QUESTION_COUNT + 1)}
SKILL_MAPPING.update({CORE_QUESTION_COUNT + 1 + i: pref for i, pref in enumerate(PREFERENCES)})
def skill_for(question_id) -> Optional[str]:
    """Mapped skill or preference field; None for anything outside 1-28."""
    if isinstance(question_id, bool):
        return None
    if isinstance(question_id, str):
        text = question_id.strip()
        # plain ASCII digits only
        if not (text.isascii() and text.isdigit()): return None
        question_id = int(text)
    if isinstance(question_id, float):
        if not question_id.is_integer(): return None
        question_id = int(question_id)
    if not isinstance(question_id, int):
        return None
    return SKILL_MAPPING.get(question_id)
def is_preference(question_id) -> bool:
    return skill_for(question_id) in PREFERENCES
def load_bank() -> List[Question]:
    data = ir.files(__package__).joinpath("data/questions.json").read_text(encoding="utf-8")
    raw = json.loads(data)
    out = []
    for r in raw:
        r = dict(r)
        r["age_groups"] = tuple(r.get("age_groups") or ())
        if r.get("options") is not None:
            r["options"] = tuple(r["options"])
        out.append(Question(**r))
    return out
def questions_for_age(age_group: str) -> List[Question]:
    return [q for q in load_bank() if age_group in q.age_groups]
