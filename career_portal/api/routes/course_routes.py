"""
Course Routes

GET /courses - List courses with filters (relevance scores when logged in)
GET /courses/recommendations - Courses ranked against the user's skill gaps
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from career_portal.core.auth import get_current_user, get_optional_user
from career_portal.models.documents import User
from career_portal.services.mongo_service import get_course_service, get_job_service
from career_portal.services.scoring_service import skill_gap_names, course_relevance_score, rank_courses
from career_portal.schemas.schemas import SkillLevel, PricingType, Pagination

router = APIRouter(prefix="/courses", tags=["Courses"])


@router.get("")
async def list_courses(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    level: Optional[SkillLevel] = Query(None),
    category: Optional[str] = Query(None),
    provider: Optional[str] = Query(None),
    pricing: Optional[PricingType] = Query(None),
    search: Optional[str] = Query(None, description="Search in title and description"),
    sort_by: str = Query("ratings.average"),
    sort_order: str = Query("desc", pattern="^(asc|desc)$"),
    user: Optional[User] = Depends(get_optional_user)
):
    """List active courses with filters and pagination."""
    service = get_course_service()
    query = service.build_query(
        level=level.value if level else None,
        category=category,
        provider=provider,
        pricing=pricing.value if pricing else None,
        search=search
    )
    courses, total = service.list(query, page=page, limit=limit, sort_by=sort_by, sort_order=sort_order)

    results = [course.model_dump() for course in courses]
    if user:
        gaps = skill_gap_names(user.skills, get_job_service().all_active())
        for data, course in zip(results, courses):
            data["relevance_score"] = course_relevance_score(user.skills, gaps, course)

    return {
        "courses": results,
        "pagination": Pagination.build(page, limit, total),
        "filters": {
            "levels": [lv.value for lv in SkillLevel],
            "pricing_types": [p.value for p in PricingType],
        }
    }


@router.get("/recommendations")
async def course_recommendations(
    limit: int = Query(10, ge=1, le=50),
    user: User = Depends(get_current_user)
):
    """
    Top-rated courses scored against the user's skills and market gaps.

    Courses with zero relevance are dropped.
    """
    gaps = skill_gap_names(user.skills, get_job_service().all_active())
    candidates = get_course_service().top_rated(limit * 2)

    ranked = rank_courses(user.skills, gaps, candidates, limit)
    recommendations = []
    for item in ranked:
        data = item["course"].model_dump()
        data["relevance_score"] = item["relevance_score"]
        recommendations.append(data)

    return {
        "recommendations": recommendations,
        "skill_gaps": gaps,
        "message": (
            "No course recommendations yet. Add skills to your profile to get started."
            if not recommendations else f"Found {len(recommendations)} recommended courses"
        )
    }
