"""
Student Career Portal - Main Application

FastAPI backend with:
- MongoDB for users, jobs and courses
- Skill-based job matching, course relevance and skill-gap analysis
- Optional DeepSeek AI for resume skill extraction
- JWT authentication

Run: uvicorn career_portal.main:app --reload
"""

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from career_portal.api.routes import api_router
from career_portal.db.mongodb import init_mongo_indexes, close_mongo_client, test_mongo_connection
from career_portal.core.config import get_settings

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger("career_portal")

# Create FastAPI app
app = FastAPI(
    title="Student Career Portal",
    description="""
    Career portal for students.

    ## Features
    - **Authentication**: JWT-based registration and login
    - **Profile**: Personal details, preferences, career goals and skills
    - **Resume**: Upload with keyword (and optional AI) skill extraction
    - **Jobs**: Search, match scores, recommendations and applications
    - **Skills**: Market demand vs. your skills
    - **Courses**: Relevance-ranked course recommendations
    - **Progress**: Activity timeline and statistics
    - **Chat**: Scripted career assistant
    """,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(api_router, prefix="/api")


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


@app.on_event("startup")
async def startup_event():
    """Initialize MongoDB indexes on startup."""
    try:
        init_mongo_indexes()
        logger.info("MongoDB indexes initialized")
    except Exception as e:
        logger.warning(f"MongoDB index initialization failed: {e}")


@app.on_event("shutdown")
async def shutdown_event():
    close_mongo_client()


@app.get("/api/health", tags=["Health"])
async def health_check():
    return {
        "status": "OK",
        "mongodb": "connected" if test_mongo_connection() else "disconnected",
        "version": "1.0.0"
    }
