"""
Job Routes

GET /jobs - List active jobs with filters (match scores when logged in)
GET /jobs/recommendations - Personalized recommendations
GET /jobs/user/applications - Current user's applications
GET /jobs/{job_id} - Job details (match score, applied flag, skill gaps when logged in)
POST /jobs/{job_id}/apply - Apply to job
"""

from collections import Counter
from typing import Optional

from fastapi import APIRouter, HTTPException, Depends, Query

from career_portal.core.auth import get_current_user, get_optional_user
from career_portal.models.documents import User
from career_portal.services.mongo_service import get_job_service, get_user_service
from career_portal.services.scoring_service import job_match_score, missing_job_skills
from career_portal.schemas.schemas import (
    JobType, WorkArrangement, ApplicationStatus, ApplyResponse, ApplicationSnapshot, Pagination
)

router = APIRouter(prefix="/jobs", tags=["Jobs"])

RECOMMENDATION_MIN_SCORE = 20


@router.get("")
async def list_jobs(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    job_type: Optional[JobType] = Query(None),
    work_arrangement: Optional[WorkArrangement] = Query(None),
    location: Optional[str] = Query(None, description="City, state or country"),
    skills: Optional[str] = Query(None, description="Comma-separated skill names"),
    company: Optional[str] = Query(None),
    search: Optional[str] = Query(None, description="Search in title and description"),
    sort_by: str = Query("created_at"),
    sort_order: str = Query("desc", pattern="^(asc|desc)$"),
    user: Optional[User] = Depends(get_optional_user)
):
    """List active job postings with filters and pagination."""
    service = get_job_service()
    if sort_by not in service.SORT_FIELDS:
        sort_by = "created_at"
    query = service.build_query(
        job_type=job_type.value if job_type else None,
        work_arrangement=work_arrangement.value if work_arrangement else None,
        location=location, skills=skills, company=company, search=search
    )
    jobs, total = service.list(query, page=page, limit=limit, sort_by=sort_by, sort_order=sort_order)

    results = [job.public_dict() for job in jobs]
    if user:
        for data, job in zip(results, jobs):
            data["match_score"] = job_match_score(user.skills, job)
        # Best matches first unless the caller asked for a specific sort
        if sort_by == "created_at":
            results.sort(key=lambda j: j["match_score"], reverse=True)

    return {
        "jobs": results,
        "pagination": Pagination.build(page, limit, total),
        "filters": {
            "job_types": [t.value for t in JobType],
            "work_arrangements": [w.value for w in WorkArrangement],
        }
    }


@router.get("/recommendations")
async def job_recommendations(
    limit: int = Query(10, ge=1, le=50),
    user: User = Depends(get_current_user)
):
    """
    Jobs matching the user's preferences, scored against their skills.

    Only jobs scoring above 20 are returned, best first.
    """
    prefs = user.preferences
    candidates = get_job_service().find_for_preferences(
        job_types=prefs.job_types,
        work_environment=prefs.work_environment,
        industries=prefs.industries,
        limit=limit * 3
    )

    scored = []
    for job in candidates:
        data = job.public_dict()
        data["match_score"] = job_match_score(user.skills, job)
        if data["match_score"] > RECOMMENDATION_MIN_SCORE:
            scored.append(data)

    scored.sort(key=lambda j: j["match_score"], reverse=True)
    scored = scored[:limit]

    return {
        "recommendations": scored,
        "message": (
            "No recommendations found. Try updating your skills or preferences."
            if not scored else f"Found {len(scored)} personalized recommendations"
        )
    }


@router.get("/user/applications")
async def my_applications(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=50),
    status: Optional[ApplicationStatus] = Query(None),
    user: User = Depends(get_current_user)
):
    """Get the current user's job applications, newest first."""
    all_applications = get_job_service().applications_for_user(user.id)

    filtered = [
        a for a in all_applications
        if status is None or a["application"]["status"] == status.value
    ]
    start = (page - 1) * limit
    counts = Counter(a["application"]["status"] for a in all_applications)

    return {
        "applications": filtered[start:start + limit],
        "pagination": Pagination.build(page, limit, len(filtered)),
        "status_counts": {s.value: counts.get(s.value, 0) for s in ApplicationStatus},
    }


@router.get("/{job_id}")
async def get_job(job_id: str, user: Optional[User] = Depends(get_optional_user)):
    """Get details of a specific job."""
    service = get_job_service()
    job = service.get(job_id)

    if not job:
        raise HTTPException(status_code=404, detail="Job not found")

    service.increment_views(job.id)
    job.views += 1

    data = job.public_dict()
    if user:
        data["match_score"] = job_match_score(user.skills, job)
        data["has_applied"] = job.has_applicant(user.id)
        data["skill_gaps"] = missing_job_skills(user.skills, job)

    return {"job": data}


@router.post("/{job_id}/apply", response_model=ApplyResponse)
async def apply_to_job(job_id: str, user: User = Depends(get_current_user)):
    """Apply to a job. Cannot apply twice to same job."""
    service = get_job_service()
    job = service.get(job_id)

    if not job:
        raise HTTPException(status_code=404, detail="Job not found")
    if job.status != "active":
        raise HTTPException(status_code=400, detail="Job is no longer accepting applications")

    match_score = job_match_score(user.skills, job)

    # Existence check and append are a single conditional update
    applied_date = service.add_applicant(job.id, user.id, match_score)
    if applied_date is None:
        current = service.get(job.id)
        if current is None or current.status != "active":
            raise HTTPException(status_code=400, detail="Job is no longer accepting applications")
        raise HTTPException(status_code=400, detail="You have already applied to this job")

    get_user_service().log_activity(
        user.id,
        "job_applied",
        f"Applied to {job.title} at {job.company.name}",
        {"job_id": job.id, "job_title": job.title, "company": job.company.name, "match_score": match_score}
    )

    return ApplyResponse(
        message="Application submitted successfully",
        application=ApplicationSnapshot(
            job_id=job.id, job_title=job.title, company=job.company.name,
            applied_date=applied_date, match_score=match_score, status="applied"
        )
    )
