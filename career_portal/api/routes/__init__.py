"""
API Routes - Combines all route modules into single router.
"""

from fastapi import APIRouter

from career_portal.api.routes.auth_routes import router as auth_router
from career_portal.api.routes.user_routes import router as user_router
from career_portal.api.routes.resume_routes import router as resume_router
from career_portal.api.routes.job_routes import router as job_router
from career_portal.api.routes.skill_routes import router as skill_router
from career_portal.api.routes.course_routes import router as course_router
from career_portal.api.routes.progress_routes import router as progress_router
from career_portal.api.routes.chat_routes import router as chat_router

# Main API router
api_router = APIRouter()

# Include all sub-routers
api_router.include_router(auth_router)
api_router.include_router(user_router)
api_router.include_router(resume_router)
api_router.include_router(job_router)
api_router.include_router(skill_router)
api_router.include_router(course_router)
api_router.include_router(progress_router)
api_router.include_router(chat_router)
