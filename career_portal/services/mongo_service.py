"""
MongoDB Service - CRUD operations for document collections.

Collections in this database:
1. users    - accounts, profile, skills, resume record, activity log
2. jobs     - postings with skill requirements and applicant records
3. courses  - course catalogue with taught skills

Raw documents never leave this module: every read is converted to a typed
record (career_portal.models) and every write takes plain values.
"""

import logging
import re
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from bson import ObjectId
from pymongo import ASCENDING, DESCENDING
from pymongo.collection import Collection

from career_portal.db.mongodb import get_collection, COLLECTIONS
from career_portal.models.documents import Activity, Course, Job, Resume, Skill, User


# ============================================================
# HELPERS
# ============================================================

def to_object_id(value: str) -> Optional[ObjectId]:
    """Parse a path/token id; None when it is not a valid ObjectId."""
    if isinstance(value, ObjectId):
        return value
    if value and ObjectId.is_valid(value):
        return ObjectId(value)
    return None


def icontains(value: str) -> dict:
    """Case-insensitive substring match on user-supplied text."""
    return {"$regex": re.escape(value.strip()), "$options": "i"}


def sort_direction(order: str) -> int:
    return ASCENDING if order == "asc" else DESCENDING


# ============================================================
# USERS COLLECTION
# ============================================================

class UserService:
    """
    Handles user account documents.
    Skills and the activity log are embedded arrays on the user.
    """

    def __init__(self):
        self.collection: Collection = get_collection(COLLECTIONS["users"])
        self.logger = logging.getLogger(self.__class__.__name__)

    def create(self, email: str, password_hash: str, first_name: str, last_name: str) -> User:
        """
        Insert a new account.

        Raises:
            pymongo.errors.DuplicateKeyError if the email is taken
        """
        now = datetime.utcnow()
        user = User(
            email=email.lower(),
            password_hash=password_hash,
            profile={"first_name": first_name, "last_name": last_name},
            last_login=now,
            created_at=now,
            updated_at=now,
        )
        result = self.collection.insert_one(user.to_mongo())
        user.id = str(result.inserted_id)
        self.logger.info(f"Registered user {user.id}")
        return user

    def get_by_id(self, user_id: str) -> Optional[User]:
        oid = to_object_id(user_id)
        if oid is None:
            return None
        return User.from_mongo(self.collection.find_one({"_id": oid}))

    def get_by_email(self, email: str) -> Optional[User]:
        return User.from_mongo(self.collection.find_one({"email": email.lower()}))

    def email_exists(self, email: str) -> bool:
        return self.collection.find_one({"email": email.lower()}, {"_id": 1}) is not None

    def update_fields(self, user_id: str, fields: Dict[str, Any]) -> bool:
        """$set arbitrary (dotted) fields on a user."""
        if not fields:
            return False
        fields = {**fields, "updated_at": datetime.utcnow()}
        result = self.collection.update_one({"_id": to_object_id(user_id)}, {"$set": fields})
        return result.matched_count > 0

    def record_login(self, user_id: str) -> None:
        self.update_fields(user_id, {"last_login": datetime.utcnow()})

    def set_skills(self, user_id: str, skills: List[Skill]) -> bool:
        return self.update_fields(user_id, {"skills": [s.model_dump() for s in skills]})

    def set_resume(self, user_id: str, resume: Resume) -> bool:
        return self.update_fields(user_id, {"resume": resume.model_dump()})

    def clear_resume(self, user_id: str) -> bool:
        result = self.collection.update_one(
            {"_id": to_object_id(user_id)},
            {"$unset": {"resume": ""}, "$set": {"updated_at": datetime.utcnow()}}
        )
        return result.modified_count > 0

    def log_activity(
        self,
        user_id: str,
        action: str,
        description: str = "",
        metadata: Optional[dict] = None
    ) -> Activity:
        """Append one entry to the user's activity log (atomic $push)."""
        activity = Activity(action=action, description=description, metadata=metadata or {})
        self.collection.update_one(
            {"_id": to_object_id(user_id)},
            {"$push": {"activity_log": activity.model_dump()}}
        )
        return activity


# ============================================================
# JOBS COLLECTION
# ============================================================

class JobService:
    """
    Handles job postings and their applicant records.
    """

    SORT_FIELDS = {"created_at", "title", "views", "applications", "application_deadline"}

    def __init__(self):
        self.collection: Collection = get_collection(COLLECTIONS["jobs"])
        self.logger = logging.getLogger(self.__class__.__name__)

    def insert(self, job: Job) -> str:
        now = datetime.utcnow()
        job.created_at = job.created_at or now
        job.updated_at = now
        result = self.collection.insert_one(job.to_mongo())
        return str(result.inserted_id)

    def get(self, job_id: str) -> Optional[Job]:
        oid = to_object_id(job_id)
        if oid is None:
            return None
        return Job.from_mongo(self.collection.find_one({"_id": oid}))

    def build_query(
        self,
        job_type: Optional[str] = None,
        work_arrangement: Optional[str] = None,
        location: Optional[str] = None,
        skills: Optional[str] = None,
        company: Optional[str] = None,
        search: Optional[str] = None
    ) -> dict:
        """Translate listing filters into a Mongo query over active jobs."""
        query: Dict[str, Any] = {"status": "active"}
        clauses: List[dict] = []

        if job_type:
            query["job_type"] = job_type
        if work_arrangement:
            query["work_arrangement"] = work_arrangement
        if company:
            query["company.name"] = icontains(company)
        if location:
            clauses.append({"$or": [
                {"company.location.city": icontains(location)},
                {"company.location.state": icontains(location)},
                {"company.location.country": icontains(location)},
            ]})
        if skills:
            names = [s for s in (part.strip() for part in skills.split(",")) if s]
            if names:
                clauses.append({"$or": [
                    {"requirements.skills.name": icontains(name)} for name in names
                ]})
        if search:
            clauses.append({"$or": [
                {"title": icontains(search)},
                {"description": icontains(search)},
            ]})

        if clauses:
            query["$and"] = clauses
        return query

    def list(
        self,
        query: dict,
        page: int = 1,
        limit: int = 20,
        sort_by: str = "created_at",
        sort_order: str = "desc"
    ) -> Tuple[List[Job], int]:
        if sort_by not in self.SORT_FIELDS:
            sort_by = "created_at"
        cursor = (
            self.collection.find(query)
            .sort(sort_by, sort_direction(sort_order))
            .skip((page - 1) * limit)
            .limit(limit)
        )
        total = self.collection.count_documents(query)
        return [Job.from_mongo(doc) for doc in cursor], total

    def find_for_preferences(
        self,
        job_types: List[str],
        work_environment: Optional[str],
        industries: List[str],
        limit: int
    ) -> List[Job]:
        """Newest active jobs compatible with a user's stated preferences."""
        query: Dict[str, Any] = {"status": "active"}
        if job_types:
            query["job_type"] = {"$in": job_types}
        if work_environment:
            query["work_arrangement"] = work_environment
        if industries:
            query["company.industry"] = {"$in": industries}

        cursor = self.collection.find(query).sort("created_at", DESCENDING).limit(limit)
        return [Job.from_mongo(doc) for doc in cursor]

    def all_active(self) -> List[Job]:
        """Every active job, in insertion order (skill demand is computed over this)."""
        cursor = self.collection.find({"status": "active"}).sort("_id", ASCENDING)
        return [Job.from_mongo(doc) for doc in cursor]

    def increment_views(self, job_id: str) -> None:
        self.collection.update_one({"_id": to_object_id(job_id)}, {"$inc": {"views": 1}})

    def add_applicant(self, job_id: str, user_id: str, match_score: int) -> Optional[datetime]:
        """
        Record an application, at most once per (job, user).

        The existence check and the append happen in one conditional update,
        so two concurrent requests cannot both succeed.

        Returns:
            The application date, or None when the user already applied
            or the job stopped accepting applications (callers re-read the
            job to tell the two apart).
        """
        applied_date = datetime.utcnow()
        user_oid = to_object_id(user_id)
        result = self.collection.update_one(
            {
                "_id": to_object_id(job_id),
                "status": "active",
                "applicants.user": {"$ne": user_oid},
            },
            {
                "$push": {"applicants": {
                    "user": user_oid,
                    "applied_date": applied_date,
                    "status": "applied",
                    "match_score": match_score,
                }},
                "$inc": {"applications": 1},
                "$set": {"updated_at": applied_date},
            }
        )
        if result.modified_count == 0:
            return None
        self.logger.info(f"User {user_id} applied to job {job_id}")
        return applied_date

    def applications_for_user(self, user_id: str, status: Optional[str] = None) -> List[dict]:
        """
        All applications a user made, newest first.

        Returns:
            List of {"job_id", "title", "company", "job_type",
                     "work_arrangement", "application", "created_at"}
        """
        applications = []
        for doc in self.collection.find({"applicants.user": to_object_id(user_id)}):
            job = Job.from_mongo(doc)
            for applicant in job.applicants:
                if applicant.user != user_id:
                    continue
                if status and applicant.status != status:
                    continue
                applications.append({
                    "job_id": job.id,
                    "title": job.title,
                    "company": job.company.model_dump(),
                    "job_type": job.job_type,
                    "work_arrangement": job.work_arrangement,
                    "application": applicant.model_dump(),
                    "created_at": job.created_at,
                })

        applications.sort(key=lambda a: a["application"]["applied_date"] or datetime.min, reverse=True)
        return applications


# ============================================================
# COURSES COLLECTION
# ============================================================

class CourseService:
    """
    Handles the course catalogue.
    """

    SORT_FIELDS = {"ratings.average", "created_at", "title", "pricing.amount"}

    def __init__(self):
        self.collection: Collection = get_collection(COLLECTIONS["courses"])

    def insert(self, course: Course) -> str:
        now = datetime.utcnow()
        course.created_at = course.created_at or now
        course.updated_at = now
        result = self.collection.insert_one(course.to_mongo())
        return str(result.inserted_id)

    def build_query(
        self,
        level: Optional[str] = None,
        category: Optional[str] = None,
        provider: Optional[str] = None,
        pricing: Optional[str] = None,
        search: Optional[str] = None
    ) -> dict:
        query: Dict[str, Any] = {"status": "active"}
        if level:
            query["content.level"] = level
        if category:
            query["category"] = category
        if provider:
            query["provider.name"] = icontains(provider)
        if pricing:
            query["pricing.type"] = pricing
        if search:
            query["$or"] = [
                {"title": icontains(search)},
                {"description": icontains(search)},
            ]
        return query

    def list(
        self,
        query: dict,
        page: int = 1,
        limit: int = 20,
        sort_by: str = "ratings.average",
        sort_order: str = "desc"
    ) -> Tuple[List[Course], int]:
        if sort_by not in self.SORT_FIELDS:
            sort_by = "ratings.average"
        cursor = (
            self.collection.find(query)
            .sort(sort_by, sort_direction(sort_order))
            .skip((page - 1) * limit)
            .limit(limit)
        )
        total = self.collection.count_documents(query)
        return [Course.from_mongo(doc) for doc in cursor], total

    def top_rated(self, limit: int) -> List[Course]:
        cursor = (
            self.collection.find({"status": "active"})
            .sort("ratings.average", DESCENDING)
            .limit(limit)
        )
        return [Course.from_mongo(doc) for doc in cursor]


# ============================================================
# CONVENIENCE FUNCTIONS
# ============================================================

def get_user_service() -> UserService:
    return UserService()


def get_job_service() -> JobService:
    return JobService()


def get_course_service() -> CourseService:
    return CourseService()
