from datetime import datetime, timedelta

from career_portal.models.documents import Activity, User
from career_portal.services.progress_service import (
    activity_type,
    build_dashboard,
    build_timeline,
    count_activities_since,
    profile_completion,
    profile_visibility,
    progress_stats,
)

NOW = datetime(2024, 3, 15, 12, 0, 0)


def make_user(**fields):
    fields.setdefault("profile", {"first_name": "Ada", "last_name": "Lovelace"})
    return User(email="ada@example.com", **fields)


def activity(action, days_ago, hour=0):
    return Activity(action=action, description=action, timestamp=NOW - timedelta(days=days_ago, hours=hour))


def test_empty_profile_completion_is_zero():
    user = make_user()
    assert profile_completion(user) == 0
    assert profile_visibility(user) == 0


def test_full_profile_completion():
    user = make_user(
        profile={
            "first_name": "Ada", "last_name": "Lovelace", "phone": "555-0100", "bio": "Math",
            "location": {"city": "London"}, "university": {"name": "Cambridge"},
        },
        skills=[{"name": "Python"}],
        resume={"file_name": "cv.pdf", "file_path": "/tmp/cv.pdf"},
        career_goals={"short_term": ["Internship"]},
    )
    assert profile_completion(user) == 100
    assert profile_visibility(user) == 100


def test_partial_completion_rounds():
    # phone and skills: 2 of 6
    user = make_user(profile={"first_name": "Ada", "phone": "555-0100"}, skills=[{"name": "Python"}])
    assert profile_completion(user) == 33


def test_completion_metrics_differ_on_city_and_goals():
    user = make_user(profile={"first_name": "Ada", "location": {"city": "London"}})
    assert profile_completion(user) == 0
    assert profile_visibility(user) == 17


def test_activity_windows():
    log = [activity("user_login", 1), activity("user_login", 10), activity("user_login", 40)]
    assert count_activities_since(log, 7, NOW) == 1
    assert count_activities_since(log, 30, NOW) == 2


def test_timeline_groups_by_day_newest_first():
    user = make_user(activity_log=[
        activity("user_registered", 2),
        activity("skills_updated", 0, hour=3),
        activity("resume_uploaded", 0, hour=1),
    ])
    result = build_timeline(user)

    days = list(result["timeline"])
    assert days == ["2024-03-15", "2024-03-13"]
    assert [a["action"] for a in result["timeline"]["2024-03-15"]] == ["resume_uploaded", "skills_updated"]
    assert result["timeline"]["2024-03-15"][0]["type"] == "resume"
    assert result["total_activities"] == 3


def test_timeline_limited_to_fifty():
    user = make_user(activity_log=[activity("user_login", 0, hour=i) for i in range(60)])
    result = build_timeline(user)
    assert sum(len(v) for v in result["timeline"].values()) == 50
    assert result["total_activities"] == 60


def test_unknown_activity_type():
    assert activity_type("job_applied") == "job"
    assert activity_type("something_else") == "other"


def test_progress_stats():
    user = make_user(
        skills=[
            {"name": "Python", "category": "technical", "added_date": NOW - timedelta(days=2)},
            {"name": "Teamwork", "category": "soft", "added_date": NOW - timedelta(days=90)},
        ],
        career_goals={"short_term": ["Internship"], "target_roles": ["Data Analyst", "ML Engineer"]},
        activity_log=[activity("profile_updated", 3), activity("user_login", 20)],
        created_at=NOW - timedelta(days=100),
    )
    stats = progress_stats(user, now=NOW)

    assert stats["skills"] == {"total": 2, "by_category": {"technical": 1, "soft": 1}, "recently_added": 1}
    assert stats["activities"] == {"this_week": 1, "this_month": 2, "total": 2}
    assert stats["goals"] == {"short_term": 1, "long_term": 0, "target_roles": 2}
    assert stats["profile"]["last_updated"] == NOW - timedelta(days=3)


def test_dashboard_sections():
    user = make_user(
        skills=[{"name": "Python", "category": "technical"}, {"name": "Chess"}],
        activity_log=[activity("user_login", d) for d in range(8)],
    )
    dashboard = build_dashboard(user)

    assert dashboard["user"]["full_name"] == "Ada Lovelace"
    assert dashboard["stats"]["total_skills"] == 2
    assert dashboard["stats"]["has_resume"] is False
    assert set(dashboard["skills_by_category"]) == {"technical", "other"}
    assert len(dashboard["recent_activities"]) == 5
    upload = next(a for a in dashboard["quick_actions"] if a["action"] == "upload-resume")
    assert upload["completed"] is False
