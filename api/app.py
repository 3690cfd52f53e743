from __future__ import annotations
from fastapi import FastAPI, HTTPException, Response
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel
from dataclasses import asdict
import logging, os, uuid, typing as t

# ---- Engine imports ----
from clp_core.scoring import calculate_scores
from clp_core.personality import describe
from clp_core.consolidation import consolidate, consolidation_trace
from clp_core.confidence import confidence_report, completeness_percentage, source_counts
from clp_core.context import compare_contexts
from clp_core.progress import build_progress, detect_milestones
from clp_core.recommendations import (
    consolidation_status,
    contextual_recommendations,
    next_assessment_recommendations,
)
from clp_core.config import load_config, AUDIT_EXPORT_ENABLED
from clp_core.audit_export import to_json as audit_to_json, to_csv as audit_to_csv
from .weighting import confidence_boost, weighted_sources
from .storage import (
    delete_profile,
    list_profiles_for_child,
    load_profile,
    save_profile,
    utcnow_iso,
)

log = logging.getLogger(__name__)

SCORING_VERSION = "CLP 2.0"

app = FastAPI(title="Learning Profile API")


@app.get("/")
def root():
    return {"status": "ok", "service": "learning-profile-api"}


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
class ScoreReq(BaseModel):
    responses: dict[str, t.Any] | None = None
    quiz_type: str = "general"
    age_group: str | None = None

class ConsolidateReq(BaseModel):
    profile_id: str | None = None
    child_name: str | None = None
    age_group: str | None = None
    precise_age_months: int | None = None
    quiz_type: str | None = None          # "parent_home" | "teacher_classroom" | "student_self" | "general"
    respondent_type: str | None = None    # "parent" | "teacher" | "student" | "general"
    respondent_name: str | None = None
    responses: dict[str, t.Any] | None = None
    assessment_context: dict[str, t.Any] | None = None

# ---- Helpers ----
def _metadata(profile: dict[str, t.Any]) -> dict[str, t.Any]:
    return {
        "childName": profile.get("child_name"),
        "ageGroup": profile.get("age_group"),
        "createdAt": profile.get("created_at"),
        "updatedAt": profile.get("updated_at"),
        "totalAssessments": len(profile.get("assessments") or []),
        "personalityLabel": profile.get("personality_label"),
    }


def _refresh(profile: dict[str, t.Any], cfg: dict[str, t.Any]) -> dict[str, t.Any]:
    """Re-consolidate every stored assessment and rebuild derived fields."""
    sources = weighted_sources(profile.get("assessments") or [], cfg)
    consolidated = consolidate(sources)
    report = confidence_report(sources)
    summary = describe(consolidated)
    counts = source_counts(sources)
    profile.update(
        consolidated_scores=consolidated,
        personality_label=summary["personality_label"],
        strengths=summary["strengths"],
        growth_areas=summary["growth_areas"],
        description=summary["description"],
        confidence_percentage=report.confidence,
        confidence_level=report.level,
        confidence_breakdown={k: v for k, v in asdict(report).items() if k != "conflicts"},
        completeness_percentage=completeness_percentage(sources),
        conflicts=asdict(report.conflicts),
        total_assessments=counts["total"],
        parent_assessments=counts["parent"],
        teacher_assessments=counts["teacher"],
        source_weights=[s.weight for s in sources],
        scoring_version=SCORING_VERSION,
    )
    return profile


def _profile_or_404(profile_id: str) -> dict[str, t.Any]:
    profile = load_profile(profile_id)
    if not profile:
        raise HTTPException(404, "profile not found")
    return profile

# ---- Health ----
@app.get("/health")
def health():
    return {
        "scoring_version": SCORING_VERSION,
        "audit_export": AUDIT_EXPORT_ENABLED,
        "data_dir": os.getenv("DATA_DIR", "data"),
    }

# ---- Scoring ----
@app.post("/assessments/score")
def score_assessment(req: ScoreReq):
    scores = calculate_scores(req.responses or {}, req.quiz_type, req.age_group)
    return {"scores": scores, **describe(scores), "quiz_type": req.quiz_type}


@app.post("/profiles/consolidate")
def consolidate_profile(req: ConsolidateReq):
    if not req.child_name or not req.quiz_type or not req.respondent_type or req.responses is None:
        raise HTTPException(
            400, "Missing required fields: child_name, quiz_type, respondent_type, responses"
        )
    cfg = load_config()
    now = utcnow_iso()
    is_new = True
    profile: dict[str, t.Any]
    if req.profile_id:
        profile = _profile_or_404(req.profile_id)
        is_new = False
    else:
        profile = {
            "id": str(uuid.uuid4()),
            "child_name": req.child_name,
            "age_group": req.age_group,
            "precise_age_months": req.precise_age_months,
            "created_at": now,
            "assessments": [],
        }

    scores = calculate_scores(req.responses, req.quiz_type, req.age_group or profile.get("age_group"))
    assessment = {
        "id": str(uuid.uuid4()),
        "quiz_type": req.quiz_type,
        "respondent_type": req.respondent_type,
        "respondent_name": req.respondent_name,
        "responses": req.responses,
        "scores": scores,
        "created_at": now,
        "context": req.assessment_context or {},
        "confidence_boost": confidence_boost(req.quiz_type, cfg),
    }
    previous = [a.get("id") for a in profile.get("assessments") or []]
    profile.setdefault("assessments", []).append(assessment)
    if req.age_group:
        profile["age_group"] = req.age_group
    if req.precise_age_months is not None:
        profile["precise_age_months"] = req.precise_age_months
    profile["updated_at"] = now
    _refresh(profile, cfg)
    save_profile(profile["id"], profile, _metadata(profile))

    sources = weighted_sources(profile["assessments"], cfg)
    if profile["conflicts"].get("requires_manual_review"):
        log.info("profile %s flagged for manual review: %s", profile["id"], profile["conflicts"].get("affected_skills"))
    return {
        "profile": {k: v for k, v in profile.items() if k != "assessments"},
        "assessment": {
            "id": assessment["id"],
            "quiz_type": req.quiz_type,
            "respondent_type": req.respondent_type,
            "respondent_name": req.respondent_name,
            "scores": scores,
            **describe(scores),
        },
        "consolidation": {
            "is_new_profile": is_new,
            "previous_assessments": previous,
            "data_sources": profile["total_assessments"],
            "next_recommendations": next_assessment_recommendations(sources),
            "status": consolidation_status(sources, profile["confidence_percentage"]),
        },
        "recommendations": contextual_recommendations(profile["consolidated_scores"]),
    }


@app.get("/profiles/{profile_id}")
def get_profile(profile_id: str):
    return _profile_or_404(profile_id)


@app.get("/profiles/{profile_id}/progress")
def get_progress(profile_id: str):
    profile = _profile_or_404(profile_id)
    sources = weighted_sources(profile.get("assessments") or [], load_config())
    latest: dict[str, t.Any] = {}
    for src in sources:
        latest[src.respondent_type] = src.scores
    context = None
    if "parent" in latest and "teacher" in latest:
        context = asdict(compare_contexts(latest["parent"], latest["teacher"]))
    return {
        "profile_id": profile_id,
        "progress": asdict(build_progress(sources)),
        "milestones": asdict(detect_milestones(sources)),
        "context": context,
    }


@app.get("/profiles/{profile_id}/audit.json")
def get_audit_json(profile_id: str):
    if not AUDIT_EXPORT_ENABLED:
        raise HTTPException(404, "audit export disabled")
    profile = _profile_or_404(profile_id)
    events = consolidation_trace(weighted_sources(profile.get("assessments") or [], load_config()))
    return {"profile_id": profile_id, **audit_to_json(events)}


@app.get("/profiles/{profile_id}/audit.csv")
def get_audit_csv(profile_id: str):
    if not AUDIT_EXPORT_ENABLED:
        raise HTTPException(404, "audit export disabled")
    profile = _profile_or_404(profile_id)
    events = consolidation_trace(weighted_sources(profile.get("assessments") or [], load_config()))
    body = audit_to_csv(events)
    filename = f"{profile_id}_audit.csv"
    return Response(
        content=body,
        media_type="text/csv",
        headers={"Content-Disposition": f"attachment; filename=\"{filename}\""},
    )


@app.delete("/profiles/{profile_id}")
def delete_profile_endpoint(profile_id: str):
    ok = delete_profile(profile_id)
    if not ok:
        raise HTTPException(404, "profile not found")
    return {"ok": True}


@app.get("/children/{child_name}/profiles")
def list_profiles(child_name: str):
    return {"profiles": list_profiles_for_child(child_name)}
