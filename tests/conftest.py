"""
Shared fixtures: an in-memory MongoDB (mongomock) injected into the
collection services, a temporary resume directory and an API client.
"""

import mongomock
import pytest
from fastapi.testclient import TestClient

from career_portal.core.config import get_settings
from career_portal.db.mongodb import set_mongo_client, init_mongo_indexes
from career_portal.main import app
from career_portal.models.documents import Course, Job, Skill
from career_portal.services.mongo_service import CourseService, JobService


@pytest.fixture(autouse=True)
def mongo():
    client = mongomock.MongoClient()
    set_mongo_client(client)
    init_mongo_indexes()
    yield client
    set_mongo_client(None)


@pytest.fixture(autouse=True)
def settings(tmp_path):
    settings = get_settings()
    saved = (settings.upload_dir, settings.deepseek_api_key)
    settings.upload_dir = str(tmp_path / "resumes")
    settings.deepseek_api_key = ""
    yield settings
    settings.upload_dir, settings.deepseek_api_key = saved


@pytest.fixture
def client():
    return TestClient(app)


def register(client, email="ada@example.com", password="secret123", first_name="Ada", last_name="Lovelace"):
    response = client.post("/api/auth/register", json={
        "email": email,
        "password": password,
        "first_name": first_name,
        "last_name": last_name,
    })
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def auth_headers(client):
    token = register(client)["access_token"]
    return {"Authorization": f"Bearer {token}"}


def skills(*specs):
    """skills(("Python", "advanced"), ("Excel", "beginner", False))"""
    result = []
    for entry in specs:
        name, level = entry[0], entry[1]
        required = entry[2] if len(entry) > 2 else True
        result.append(Skill(name=name, level=level, required=required))
    return result


def make_job(title="Backend Developer", company="Acme", job_skills=(), **fields):
    job = Job(
        title=title,
        company={"name": company, "industry": fields.pop("industry", None)},
        requirements={"skills": [s.model_dump() for s in job_skills]},
        **fields
    )
    job.id = JobService().insert(job)
    return job


def make_course(title="Course", course_skills=(), rating=4.0, **fields):
    course = Course(
        title=title,
        provider={"name": fields.pop("provider", "Academy")},
        skills=[s.model_dump() for s in course_skills],
        ratings={"average": rating, "count": 10},
        **fields
    )
    course.id = CourseService().insert(course)
    return course
