#!/usr/bin/env python3
"""
Seed Script

Replaces the jobs and courses collections with sample data for local
development. Users are left untouched.
Run: python scripts/seed.py
"""
from career_portal.db.mongodb import test_mongo_connection, init_mongo_indexes, get_collection, COLLECTIONS
from career_portal.models.documents import Job, Course
from career_portal.services.mongo_service import JobService, CourseService


SAMPLE_JOBS = [
    {
        "title": "Software Engineer - Campus Hire",
        "company": {
            "name": "Infosys Limited",
            "website": "https://infosys.com",
            "size": "large",
            "industry": "Information Technology",
            "location": {"city": "Bangalore", "state": "Karnataka", "country": "India"},
        },
        "description": "Graduate software engineer program with a full training track.",
        "requirements": {
            "skills": [
                {"name": "Java", "level": "intermediate", "required": True},
                {"name": "Python", "level": "beginner", "required": False},
                {"name": "SQL", "level": "beginner", "required": True},
                {"name": "Data Structures", "level": "intermediate", "required": True},
                {"name": "Algorithms", "level": "intermediate", "required": True},
            ],
            "experience": {"min": 0, "max": 1},
            "education": {"level": "bachelor", "field": "Engineering", "required": True},
        },
        "compensation": {
            "salary": {"min": 350000, "max": 450000, "currency": "INR"},
            "benefits": ["Health Insurance", "Training Program"],
        },
        "job_type": "full-time",
        "work_arrangement": "onsite",
        "tags": ["campus-hire", "fresher"],
    },
    {
        "title": "Frontend Developer",
        "company": {
            "name": "TechCorp Inc.",
            "website": "https://techcorp.com",
            "size": "medium",
            "industry": "Technology",
            "location": {"city": "San Francisco", "state": "CA", "country": "USA"},
        },
        "description": "Build user-facing features with modern JavaScript frameworks.",
        "requirements": {
            "skills": [
                {"name": "JavaScript", "level": "intermediate", "required": True},
                {"name": "React", "level": "intermediate", "required": True},
                {"name": "HTML", "level": "advanced", "required": True},
                {"name": "CSS", "level": "advanced", "required": True},
                {"name": "TypeScript", "level": "beginner", "required": False},
            ],
            "experience": {"min": 2, "max": 5},
        },
        "compensation": {"salary": {"min": 80000, "max": 120000}},
        "job_type": "full-time",
        "work_arrangement": "hybrid",
        "tags": ["frontend", "react"],
    },
    {
        "title": "Data Analyst - Campus Recruitment",
        "company": {
            "name": "Wipro Limited",
            "website": "https://wipro.com",
            "size": "large",
            "industry": "Information Technology",
            "location": {"city": "Chennai", "state": "Tamil Nadu", "country": "India"},
        },
        "description": "Work with large datasets and support data-driven decisions.",
        "requirements": {
            "skills": [
                {"name": "Python", "level": "intermediate", "required": True},
                {"name": "SQL", "level": "intermediate", "required": True},
                {"name": "Excel", "level": "advanced", "required": True},
                {"name": "Power BI", "level": "beginner", "required": False},
                {"name": "Statistics", "level": "intermediate", "required": True},
            ],
        },
        "compensation": {"salary": {"min": 400000, "max": 500000, "currency": "INR"}},
        "job_type": "full-time",
        "work_arrangement": "hybrid",
        "tags": ["data", "analytics"],
    },
    {
        "title": "Machine Learning Intern",
        "company": {
            "name": "DataMinds Labs",
            "size": "startup",
            "industry": "Artificial Intelligence",
            "location": {"city": "Pune", "country": "India", "remote": True},
        },
        "description": "Three-month internship training and evaluating ML models.",
        "requirements": {
            "skills": [
                {"name": "Python", "level": "intermediate", "required": True},
                {"name": "Machine Learning", "level": "beginner", "required": True},
                {"name": "Statistics", "level": "beginner", "required": False},
            ],
        },
        "job_type": "internship",
        "work_arrangement": "remote",
        "tags": ["internship", "ml"],
    },
]

SAMPLE_COURSES = [
    {
        "title": "Complete React Developer Course",
        "description": "Hooks, routing and state management for production React apps.",
        "provider": {"name": "CodeAcademy Pro", "website": "https://codeacademy.pro", "rating": 4.8},
        "content": {"hours": 40, "weeks": 8, "level": "intermediate"},
        "skills": [
            {"name": "React", "level": "advanced", "category": "technical"},
            {"name": "JavaScript", "level": "intermediate", "category": "technical"},
        ],
        "pricing": {"type": "paid", "amount": 89.99, "discount_price": 49.99},
        "certification": {"offered": True, "type": "Certificate of Completion"},
        "ratings": {"average": 4.7, "count": 2341},
        "category": "Programming",
        "tags": ["react", "frontend"],
        "featured": True,
        "trending": True,
    },
    {
        "title": "Python for Data Science",
        "description": "Python, pandas and numpy for data analysis, with ML basics.",
        "provider": {"name": "DataLearn Institute", "website": "https://datalearn.io", "rating": 4.6},
        "instructor": {"name": "Dr. Michael Chen", "rating": 4.8},
        "content": {"hours": 60, "weeks": 12, "level": "beginner"},
        "skills": [
            {"name": "Python", "level": "intermediate", "category": "technical"},
            {"name": "Data Analysis", "level": "intermediate", "category": "technical"},
            {"name": "Machine Learning", "level": "beginner", "category": "technical"},
        ],
        "pricing": {"type": "paid", "amount": 129.99},
        "certification": {"offered": True, "type": "Professional Certificate", "accredited": True},
        "ratings": {"average": 4.5, "count": 1205},
        "category": "Data Science",
        "tags": ["python", "data-science"],
        "trending": True,
    },
    {
        "title": "SQL Fundamentals",
        "description": "Queries, joins and aggregation on relational databases.",
        "provider": {"name": "DB School"},
        "content": {"hours": 12, "weeks": 3, "level": "beginner"},
        "skills": [{"name": "SQL", "level": "intermediate", "category": "technical"}],
        "pricing": {"type": "free"},
        "ratings": {"average": 4.4, "count": 980},
        "category": "Databases",
        "tags": ["sql"],
    },
    {
        "title": "Introduction to Machine Learning",
        "description": "Supervised and unsupervised learning with practical examples.",
        "provider": {"name": "ML Academy", "rating": 4.7},
        "content": {"hours": 35, "weeks": 6, "level": "beginner"},
        "skills": [
            {"name": "Machine Learning", "level": "intermediate", "category": "technical"},
            {"name": "Python", "level": "beginner", "category": "technical"},
            {"name": "Statistics", "level": "beginner", "category": "technical"},
        ],
        "pricing": {"type": "free"},
        "ratings": {"average": 4.3, "count": 3420},
        "category": "Machine Learning",
        "tags": ["machine-learning", "python"],
    },
]


def seed():
    print("\n[1] Clearing jobs and courses...")
    get_collection(COLLECTIONS["jobs"]).delete_many({})
    get_collection(COLLECTIONS["courses"]).delete_many({})

    print("[2] Inserting sample jobs...")
    jobs = JobService()
    for data in SAMPLE_JOBS:
        job_id = jobs.insert(Job.model_validate(data))
        print(f"    ✅ {data['title']} ({job_id})")

    print("[3] Inserting sample courses...")
    courses = CourseService()
    for data in SAMPLE_COURSES:
        course_id = courses.insert(Course.model_validate(data))
        print(f"    ✅ {data['title']} ({course_id})")


def main():
    print("=" * 50)
    print("SEEDING SAMPLE DATA")
    print("=" * 50)

    if not test_mongo_connection():
        print("❌ Cannot reach MongoDB. Check MONGODB_URI.")
        return 1

    init_mongo_indexes()
    seed()
    print(f"\n🎉 Seeded {len(SAMPLE_JOBS)} jobs and {len(SAMPLE_COURSES)} courses")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
