"""
Domain records for the documents stored in MongoDB.

Raw documents are converted exactly once, at the collection-service
boundary, with from_mongo(). Every nested optional field gets its default
here so the scoring and progress code never has to guard against missing
keys. Unknown or missing skill levels resolve to 'intermediate'.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field, field_validator

from career_portal.schemas.schemas import SkillCategory, SkillLevel


def coerce_level(v: Any) -> SkillLevel:
    if isinstance(v, SkillLevel):
        return v
    try:
        return SkillLevel(str(v).strip().lower())
    except ValueError:
        return SkillLevel.intermediate


class _Record(BaseModel):
    model_config = ConfigDict(extra="ignore", use_enum_values=True, validate_default=True)


class _Document(_Record):
    id: str = ""

    @classmethod
    def from_mongo(cls, doc: Optional[dict]):
        if doc is None:
            return None
        data = dict(doc)
        data["id"] = str(data.pop("_id", ""))
        return cls.model_validate(data)

    def to_mongo(self) -> dict:
        return self.model_dump(exclude={"id"})


# ============================================================
# SKILLS
# ============================================================

class Skill(_Record):
    name: str
    level: SkillLevel = SkillLevel.intermediate
    category: Optional[SkillCategory] = None
    required: bool = True
    verified: bool = False
    added_date: Optional[datetime] = None

    @field_validator("level", mode="before")
    @classmethod
    def _default_level(cls, v: Any) -> SkillLevel:
        return coerce_level(v)

    @field_validator("category", mode="before")
    @classmethod
    def _known_category(cls, v: Any) -> Optional[SkillCategory]:
        if v is None or isinstance(v, SkillCategory):
            return v
        try:
            return SkillCategory(str(v).strip().lower())
        except ValueError:
            return None

    @field_validator("required", mode="before")
    @classmethod
    def _default_required(cls, v: Any) -> bool:
        return True if v is None else v

    @property
    def key(self) -> str:
        """Case-insensitive identity used by every skill comparison."""
        return self.name.strip().lower()


# ============================================================
# USERS
# ============================================================

class Location(_Record):
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None


class University(_Record):
    name: Optional[str] = None
    degree: Optional[str] = None
    major: Optional[str] = None
    graduation_year: Optional[int] = None
    gpa: Optional[float] = None


class Profile(_Record):
    first_name: str = ""
    last_name: str = ""
    phone: Optional[str] = None
    date_of_birth: Optional[datetime] = None
    location: Location = Field(default_factory=Location)
    university: University = Field(default_factory=University)
    bio: Optional[str] = None
    profile_picture: Optional[str] = None


class Notifications(_Record):
    email: bool = True
    push: bool = True
    job_alerts: bool = True
    course_recommendations: bool = True


class SalaryExpectation(_Record):
    min: Optional[float] = None
    max: Optional[float] = None
    currency: str = "USD"


class Preferences(_Record):
    job_types: List[str] = []
    industries: List[str] = []
    locations: List[str] = []
    salary_range: Optional[SalaryExpectation] = None
    work_environment: Optional[str] = None
    notifications: Notifications = Field(default_factory=Notifications)


class CareerGoals(_Record):
    short_term: List[str] = []
    long_term: List[str] = []
    target_roles: List[str] = []
    target_companies: List[str] = []
    desired_skills: List[str] = []


class Contact(_Record):
    email: Optional[str] = None
    phone: Optional[str] = None


class ParsedResume(_Record):
    skills: List[Skill] = []
    contact: Contact = Field(default_factory=Contact)
    years_of_experience: int = 0
    experience: List[Dict[str, Any]] = []
    education: List[Dict[str, Any]] = []
    projects: List[Dict[str, Any]] = []
    certifications: List[Dict[str, Any]] = []


class Resume(_Record):
    file_name: str
    file_path: str
    upload_date: Optional[datetime] = None
    parsed_data: ParsedResume = Field(default_factory=ParsedResume)


class Activity(_Record):
    id: str = Field(default_factory=lambda: str(ObjectId()))
    action: str
    description: str = ""
    timestamp: datetime = Field(default_factory=datetime.utcnow)
    metadata: Dict[str, Any] = {}

    @field_validator("metadata", mode="before")
    @classmethod
    def _default_metadata(cls, v: Any) -> Dict[str, Any]:
        return v or {}


class User(_Document):
    email: str
    password_hash: str = ""
    profile: Profile = Field(default_factory=Profile)
    preferences: Preferences = Field(default_factory=Preferences)
    skills: List[Skill] = []
    resume: Optional[Resume] = None
    career_goals: CareerGoals = Field(default_factory=CareerGoals)
    activity_log: List[Activity] = []
    is_active: bool = True
    last_login: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def full_name(self) -> str:
        return f"{self.profile.first_name} {self.profile.last_name}".strip()

    @property
    def skill_names(self) -> List[str]:
        return [s.name for s in self.skills]

    @property
    def has_resume(self) -> bool:
        return bool(self.resume and self.resume.file_name)

    @property
    def profile_complete(self) -> bool:
        return bool(self.profile.phone and self.profile.university.name)

    def find_skill(self, name: str) -> Optional[Skill]:
        key = name.strip().lower()
        return next((s for s in self.skills if s.key == key), None)


# ============================================================
# JOBS
# ============================================================

class JobLocation(_Record):
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    remote: bool = False


class Company(_Record):
    name: str
    logo: Optional[str] = None
    website: Optional[str] = None
    size: Optional[str] = None
    industry: Optional[str] = None
    location: JobLocation = Field(default_factory=JobLocation)


class ExperienceRange(_Record):
    min: Optional[int] = None
    max: Optional[int] = None
    unit: str = "years"


class EducationRequirement(_Record):
    level: Optional[str] = None
    field: Optional[str] = None
    required: bool = False


class Requirements(_Record):
    skills: List[Skill] = []
    experience: ExperienceRange = Field(default_factory=ExperienceRange)
    education: EducationRequirement = Field(default_factory=EducationRequirement)
    certifications: List[str] = []
    languages: List[str] = []


class Salary(_Record):
    min: Optional[float] = None
    max: Optional[float] = None
    currency: str = "USD"
    period: str = "yearly"


class Compensation(_Record):
    salary: Salary = Field(default_factory=Salary)
    benefits: List[str] = []


class Applicant(_Record):
    user: str
    applied_date: Optional[datetime] = None
    status: str = "applied"
    match_score: Optional[int] = None
    notes: Optional[str] = None

    @field_validator("user", mode="before")
    @classmethod
    def _stringify_user(cls, v: Any) -> str:
        return str(v)


class Job(_Document):
    title: str
    company: Company
    description: str = ""
    requirements: Requirements = Field(default_factory=Requirements)
    compensation: Compensation = Field(default_factory=Compensation)
    job_type: str = "full-time"
    work_arrangement: str = "onsite"
    application_deadline: Optional[datetime] = None
    start_date: Optional[datetime] = None
    tags: List[str] = []
    featured: bool = False
    status: str = "active"
    posted_by: Optional[str] = None
    applicants: List[Applicant] = []
    views: int = 0
    applications: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def skills(self) -> List[Skill]:
        return self.requirements.skills

    def has_applicant(self, user_id: str) -> bool:
        return any(a.user == user_id for a in self.applicants)

    def public_dict(self) -> dict:
        """Serializable view without applicant records."""
        data = self.model_dump(exclude={"applicants"})
        data["application_count"] = len(self.applicants)
        return data


# ============================================================
# COURSES
# ============================================================

class Provider(_Record):
    name: str
    logo: Optional[str] = None
    website: Optional[str] = None
    rating: Optional[float] = None


class Instructor(_Record):
    name: Optional[str] = None
    bio: Optional[str] = None
    rating: Optional[float] = None


class CourseContent(_Record):
    hours: Optional[float] = None
    weeks: Optional[float] = None
    level: SkillLevel = SkillLevel.intermediate
    language: str = "English"

    @field_validator("level", mode="before")
    @classmethod
    def _default_level(cls, v: Any) -> SkillLevel:
        return coerce_level(v)


class Pricing(_Record):
    type: str = "free"
    amount: float = 0
    currency: str = "USD"
    discount_price: Optional[float] = None


class Ratings(_Record):
    average: float = 0
    count: int = 0


class CourseCertification(_Record):
    offered: bool = False
    type: Optional[str] = None
    accredited: Optional[bool] = None


class Course(_Document):
    title: str
    description: str = ""
    provider: Provider
    instructor: Optional[Instructor] = None
    content: CourseContent = Field(default_factory=CourseContent)
    skills: List[Skill] = []
    prerequisites: List[str] = []
    learning_outcomes: List[str] = []
    pricing: Pricing = Field(default_factory=Pricing)
    certification: CourseCertification = Field(default_factory=CourseCertification)
    ratings: Ratings = Field(default_factory=Ratings)
    tags: List[str] = []
    category: str = ""
    subcategory: Optional[str] = None
    difficulty: str = "medium"
    featured: bool = False
    trending: bool = False
    status: str = "active"
    external_url: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
