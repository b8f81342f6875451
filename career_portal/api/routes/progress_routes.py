"""
Progress Routes

GET /progress/timeline - Activity log grouped by day
GET /progress/stats - Profile, skill, activity and goal counters
"""

from fastapi import APIRouter, Depends

from career_portal.core.auth import get_current_user
from career_portal.models.documents import User
from career_portal.services.progress_service import build_timeline, progress_stats

router = APIRouter(prefix="/progress", tags=["Progress"])


@router.get("/timeline")
async def timeline(user: User = Depends(get_current_user)):
    """Last 50 activities, newest first, grouped by calendar day."""
    return build_timeline(user)


@router.get("/stats")
async def stats(user: User = Depends(get_current_user)):
    return {"stats": progress_stats(user)}
