"""
Models module - MongoDB document models.

Difference from schemas:
- Models: stored documents (users, jobs, courses) and their embedded records
- Schemas: API contract (what client sends/receives)
"""

from career_portal.models.documents import User, Job, Course, Skill, Activity

__all__ = ["User", "Job", "Course", "Skill", "Activity"]
