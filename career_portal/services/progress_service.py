"""
Progress & Dashboard Service

Derives profile completion, activity counts and the activity timeline from
a single user record. Two completion metrics exist and are reported under
different names:

- profile_completion: phone, university, bio, skills, resume, short-term goal.
  This is the canonical metric shown on the dashboard and in progress stats.
- profile_visibility: phone, bio, city, university, skills, resume.
  How discoverable the profile is; reported next to completion on the dashboard.
"""

from collections import OrderedDict
from datetime import datetime, timedelta
from typing import Dict, List, Optional

from career_portal.models.documents import Activity, Skill, User


ACTIVITY_TYPES = {
    "user_registered": "account",
    "user_login": "account",
    "user_logout": "account",
    "password_reset_requested": "account",
    "profile_updated": "profile",
    "skills_updated": "skills",
    "resume_uploaded": "resume",
    "resume_deleted": "resume",
    "job_applied": "job",
    "course_enrolled": "learning",
}

TIMELINE_LIMIT = 50
RECENT_ACTIVITY_LIMIT = 5


def _percentage(checks: List[bool]) -> int:
    if not checks:
        return 0
    completed = sum(1 for c in checks if c)
    return int(completed * 100 / len(checks) + 0.5)


def profile_completion(user: User) -> int:
    """Canonical completion percentage (0-100)."""
    return _percentage([
        bool(user.profile.phone),
        bool(user.profile.university.name),
        bool(user.profile.bio),
        len(user.skills) > 0,
        user.has_resume,
        len(user.career_goals.short_term) > 0,
    ])


def profile_visibility(user: User) -> int:
    """Discoverability percentage (0-100)."""
    return _percentage([
        bool(user.profile.phone),
        bool(user.profile.bio),
        bool(user.profile.location.city),
        bool(user.profile.university.name),
        len(user.skills) > 0,
        user.has_resume,
    ])


def activity_type(action: str) -> str:
    return ACTIVITY_TYPES.get(action, "other")


def count_activities_since(activities: List[Activity], days: int, now: Optional[datetime] = None) -> int:
    cutoff = (now or datetime.utcnow()) - timedelta(days=days)
    return sum(1 for a in activities if a.timestamp > cutoff)


def recent_activities(user: User, limit: int = RECENT_ACTIVITY_LIMIT) -> List[Activity]:
    return sorted(user.activity_log, key=lambda a: a.timestamp, reverse=True)[:limit]


def build_timeline(user: User, limit: int = TIMELINE_LIMIT) -> dict:
    """Most recent activities, newest first, grouped by calendar day."""
    grouped: Dict[str, List[dict]] = OrderedDict()
    for activity in recent_activities(user, limit):
        day = activity.timestamp.date().isoformat()
        grouped.setdefault(day, []).append({
            "id": activity.id,
            "action": activity.action,
            "description": activity.description,
            "timestamp": activity.timestamp,
            "metadata": activity.metadata,
            "type": activity_type(activity.action),
        })

    return {
        "timeline": grouped,
        "total_activities": len(user.activity_log),
    }


def skills_by_category(skills: List[Skill]) -> Dict[str, List[Skill]]:
    grouped: Dict[str, List[Skill]] = {}
    for skill in skills:
        grouped.setdefault(skill.category or "other", []).append(skill)
    return grouped


def last_profile_update(user: User) -> Optional[datetime]:
    updates = [a.timestamp for a in user.activity_log if a.action == "profile_updated"]
    return max(updates) if updates else user.created_at


def progress_stats(user: User, now: Optional[datetime] = None) -> dict:
    now = now or datetime.utcnow()
    month_ago = now - timedelta(days=30)

    return {
        "profile": {
            "completion_percentage": profile_completion(user),
            "last_updated": last_profile_update(user),
        },
        "skills": {
            "total": len(user.skills),
            "by_category": {k: len(v) for k, v in skills_by_category(user.skills).items()},
            "recently_added": sum(
                1 for s in user.skills if s.added_date and s.added_date > month_ago
            ),
        },
        "activities": {
            "this_week": count_activities_since(user.activity_log, 7, now),
            "this_month": count_activities_since(user.activity_log, 30, now),
            "total": len(user.activity_log),
        },
        "goals": {
            "short_term": len(user.career_goals.short_term),
            "long_term": len(user.career_goals.long_term),
            "target_roles": len(user.career_goals.target_roles),
        },
    }


def build_dashboard(user: User) -> dict:
    completion = profile_completion(user)

    return {
        "user": {
            "id": user.id,
            "full_name": user.full_name,
            "email": user.email,
            "profile_picture": user.profile.profile_picture,
        },
        "stats": {
            "profile_completion": completion,
            "profile_visibility": profile_visibility(user),
            "total_skills": len(user.skills),
            "has_resume": user.has_resume,
            "member_since": user.created_at,
            "last_active": user.last_login,
        },
        "skills_by_category": {
            k: [s.model_dump() for s in v] for k, v in skills_by_category(user.skills).items()
        },
        "recent_activities": [a.model_dump() for a in recent_activities(user)],
        "quick_actions": [
            {
                "title": "Upload Resume",
                "description": "Get personalized job matches",
                "action": "upload-resume",
                "completed": user.has_resume,
            },
            {
                "title": "Complete Profile",
                "description": "Improve your visibility",
                "action": "complete-profile",
                "completed": completion >= 80,
            },
            {
                "title": "Set Career Goals",
                "description": "Define your career path",
                "action": "set-goals",
                "completed": len(user.career_goals.short_term) > 0,
            },
        ],
    }
