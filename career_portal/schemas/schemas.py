"""
Pydantic Schemas - Request/Response Validation

All API request and response schemas in one file for simplicity.
"""

from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional, List, Any, Dict
from datetime import datetime
from enum import Enum


# ============================================================
# ENUMS
# ============================================================

class SkillLevel(str, Enum):
    beginner = "beginner"
    intermediate = "intermediate"
    advanced = "advanced"
    expert = "expert"


class SkillCategory(str, Enum):
    technical = "technical"
    soft = "soft"
    language = "language"
    certification = "certification"


class JobType(str, Enum):
    full_time = "full-time"
    part_time = "part-time"
    internship = "internship"
    contract = "contract"
    temporary = "temporary"


class PreferredJobType(str, Enum):
    full_time = "full-time"
    part_time = "part-time"
    internship = "internship"
    contract = "contract"
    remote = "remote"


class WorkArrangement(str, Enum):
    remote = "remote"
    hybrid = "hybrid"
    onsite = "onsite"


class WorkEnvironment(str, Enum):
    remote = "remote"
    hybrid = "hybrid"
    onsite = "onsite"
    flexible = "flexible"


class JobStatus(str, Enum):
    active = "active"
    paused = "paused"
    closed = "closed"
    draft = "draft"


class ApplicationStatus(str, Enum):
    applied = "applied"
    reviewing = "reviewing"
    interview = "interview"
    offer = "offer"
    rejected = "rejected"
    withdrawn = "withdrawn"


class CourseStatus(str, Enum):
    active = "active"
    inactive = "inactive"
    coming_soon = "coming-soon"
    archived = "archived"


class PricingType(str, Enum):
    free = "free"
    paid = "paid"
    subscription = "subscription"
    one_time = "one-time"


# ============================================================
# AUTH SCHEMAS
# ============================================================

class RegisterRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=6)
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)

    @field_validator("first_name", "last_name")
    @classmethod
    def strip_names(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class ForgotPasswordRequest(BaseModel):
    email: EmailStr


class UserSummary(BaseModel):
    id: str
    email: str
    first_name: str
    last_name: str
    full_name: str
    profile_complete: Optional[bool] = None
    has_resume: Optional[bool] = None


class TokenResponse(BaseModel):
    message: str
    access_token: str
    token_type: str = "bearer"
    user: UserSummary


# ============================================================
# SKILL SCHEMAS
# ============================================================

class SkillIn(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    level: Optional[SkillLevel] = None
    category: Optional[SkillCategory] = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("skill name must not be blank")
        return v


class SkillsUpdate(BaseModel):
    skills: List[SkillIn]


# ============================================================
# PROFILE SCHEMAS
# ============================================================

class LocationUpdate(BaseModel):
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None


class UniversityUpdate(BaseModel):
    name: Optional[str] = None
    degree: Optional[str] = None
    major: Optional[str] = None
    graduation_year: Optional[int] = Field(None, ge=1950, le=2100)
    gpa: Optional[float] = Field(None, ge=0, le=10)


class ProfileUpdate(BaseModel):
    first_name: Optional[str] = Field(None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(None, min_length=1, max_length=100)
    phone: Optional[str] = None
    date_of_birth: Optional[datetime] = None
    location: Optional[LocationUpdate] = None
    university: Optional[UniversityUpdate] = None
    bio: Optional[str] = Field(None, max_length=500)
    profile_picture: Optional[str] = None


class SalaryRange(BaseModel):
    min: Optional[float] = Field(None, ge=0)
    max: Optional[float] = Field(None, ge=0)
    currency: str = "USD"


class NotificationPreferences(BaseModel):
    email: bool = True
    push: bool = True
    job_alerts: bool = True
    course_recommendations: bool = True


class PreferencesUpdate(BaseModel):
    job_types: Optional[List[PreferredJobType]] = None
    industries: Optional[List[str]] = None
    locations: Optional[List[str]] = None
    salary_range: Optional[SalaryRange] = None
    work_environment: Optional[WorkEnvironment] = None
    notifications: Optional[NotificationPreferences] = None


class CareerGoalsUpdate(BaseModel):
    short_term: Optional[List[str]] = None
    long_term: Optional[List[str]] = None
    target_roles: Optional[List[str]] = None
    target_companies: Optional[List[str]] = None
    desired_skills: Optional[List[str]] = None


class UserUpdateRequest(BaseModel):
    profile: Optional[ProfileUpdate] = None
    preferences: Optional[PreferencesUpdate] = None
    career_goals: Optional[CareerGoalsUpdate] = None


# ============================================================
# JOB SCHEMAS
# ============================================================

class ApplicationSnapshot(BaseModel):
    job_id: str
    job_title: str
    company: str
    applied_date: datetime
    match_score: int
    status: str


class ApplyResponse(BaseModel):
    message: str
    application: ApplicationSnapshot


class Pagination(BaseModel):
    current_page: int
    total_pages: int
    total_items: int
    has_next: bool
    has_prev: bool

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> "Pagination":
        return cls(
            current_page=page,
            total_pages=-(-total // limit) if limit else 0,
            total_items=total,
            has_next=page * limit < total,
            has_prev=page > 1,
        )


# ============================================================
# CHAT SCHEMAS
# ============================================================

class ChatRequest(BaseModel):
    message: str = ""
    context: Optional[Dict[str, Any]] = None


class ChatAction(BaseModel):
    type: str
    target: str
    label: str


class ChatResponse(BaseModel):
    response: str
    suggestions: List[str] = []
    actions: List[ChatAction] = []


# ============================================================
# GENERIC SCHEMAS
# ============================================================

class MessageResponse(BaseModel):
    message: str
    success: bool = True


class ErrorResponse(BaseModel):
    detail: str
