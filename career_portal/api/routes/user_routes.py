"""
User Routes

PUT /users/profile - Update profile, preferences and career goals
POST /users/skills - Add or update skills
DELETE /users/skills/{skill_name} - Remove a skill
GET /users/dashboard - Dashboard summary
"""

from typing import Any, Dict

from fastapi import APIRouter, HTTPException, Depends

from career_portal.core.auth import get_current_user
from career_portal.models.documents import User
from career_portal.services.mongo_service import get_user_service
from career_portal.services.progress_service import build_dashboard
from career_portal.services.skill_service import upsert_skills, remove_skill
from career_portal.schemas.schemas import UserUpdateRequest, SkillsUpdate, MessageResponse

router = APIRouter(prefix="/users", tags=["Users"])

# Sub-objects of the profile that are always present and merged field by field
MERGED_PROFILE_OBJECTS = {"location", "university"}


def _profile_updates(data: Dict[str, Any]) -> Dict[str, Any]:
    updates = {}
    for key, value in data.items():
        if key in MERGED_PROFILE_OBJECTS:
            for sub_key, sub_value in (value or {}).items():
                updates[f"profile.{key}.{sub_key}"] = sub_value
        else:
            updates[f"profile.{key}"] = value
    return updates


@router.put("/profile")
async def update_profile(data: UserUpdateRequest, user: User = Depends(get_current_user)):
    """Update profile fields. Only provided fields are changed."""
    updates: Dict[str, Any] = {}

    if data.profile:
        updates.update(_profile_updates(data.profile.model_dump(exclude_unset=True)))
    if data.preferences:
        for key, value in data.preferences.model_dump(exclude_unset=True, mode="json").items():
            updates[f"preferences.{key}"] = value
    if data.career_goals:
        for key, value in data.career_goals.model_dump(exclude_unset=True).items():
            updates[f"career_goals.{key}"] = value or []

    if not updates:
        raise HTTPException(status_code=400, detail="No fields to update")

    users = get_user_service()
    users.update_fields(user.id, updates)
    users.log_activity(user.id, "profile_updated", "User profile updated successfully")

    updated = users.get_by_id(user.id)
    return {
        "message": "Profile updated successfully",
        "user": {
            "id": updated.id,
            "profile": updated.profile.model_dump(),
            "preferences": updated.preferences.model_dump(),
            "career_goals": updated.career_goals.model_dump(),
        }
    }


@router.post("/skills")
async def update_skills(data: SkillsUpdate, user: User = Depends(get_current_user)):
    """Add skills or update existing ones (matched by name, any case)."""
    skills = upsert_skills(user.skills, data.skills)

    users = get_user_service()
    users.set_skills(user.id, skills)
    users.log_activity(
        user.id,
        "skills_updated",
        f"Updated {len(data.skills)} skill(s)",
        {"skills_updated": [s.name for s in data.skills]}
    )

    return {
        "message": "Skills updated successfully",
        "skills": [s.model_dump() for s in skills]
    }


@router.delete("/skills/{skill_name}", response_model=MessageResponse)
async def delete_skill(skill_name: str, user: User = Depends(get_current_user)):
    """Remove a skill from profile."""
    remaining, removed = remove_skill(user.skills, skill_name)
    if not removed:
        raise HTTPException(status_code=404, detail="Skill not found in profile")

    users = get_user_service()
    users.set_skills(user.id, remaining)
    users.log_activity(
        user.id, "skills_updated", f"Removed skill {skill_name}", {"skills_removed": [skill_name]}
    )
    return MessageResponse(message="Skill removed")


@router.get("/dashboard")
async def dashboard(user: User = Depends(get_current_user)):
    """Profile completion, skills by category, recent activity and quick actions."""
    return build_dashboard(user)
