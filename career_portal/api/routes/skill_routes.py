"""
Skill Routes

GET /skills/analysis - Market demand vs. the user's skills
"""

from fastapi import APIRouter, Depends

from career_portal.core.auth import get_current_user
from career_portal.models.documents import User
from career_portal.services.mongo_service import get_job_service
from career_portal.services.scoring_service import analyze_skill_gaps

router = APIRouter(prefix="/skills", tags=["Skills"])


@router.get("/analysis")
async def skill_analysis(user: User = Depends(get_current_user)):
    """
    Compare the user's skills with demand across all active jobs.

    Returns skill gaps (top 10 missing), trending skills (top 10 overall)
    and the user's total skill count.
    """
    jobs = get_job_service().all_active()
    return {"analysis": analyze_skill_gaps(user.skills, jobs)}
