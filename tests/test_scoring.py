import numpy as np

from career_portal.models.documents import Course, Job, Skill
from career_portal.services.scoring_service import (
    aggregate_skill_demand,
    analyze_skill_gaps,
    calculate_match_score,
    calculate_relevance_score,
    level_index,
    missing_job_skills,
    rank_courses,
    skill_gap_names,
)
from tests.conftest import skills


def job_with(*specs, title="Job"):
    return Job(title=title, company={"name": "Acme"}, requirements={"skills": [s.model_dump() for s in skills(*specs)]})


def course_with(*specs, title="Course"):
    return Course(title=title, provider={"name": "Academy"}, skills=[s.model_dump() for s in skills(*specs)])


# ---------- match score ----------

def test_required_skill_capped_at_requested_level():
    user = skills(("Python", "advanced"))
    job = skills(("Python", "intermediate", True))
    assert calculate_match_score(user, job) == 50


def test_no_user_skills_scores_zero():
    job = skills(("SQL", "intermediate", True), ("Excel", "beginner", False))
    assert calculate_match_score([], job) == 0


def test_job_without_skills_scores_zero():
    assert calculate_match_score(skills(("Python", "expert")), []) == 0


def test_expert_on_every_skill_scores_hundred():
    user = skills(("SQL", "expert"), ("Excel", "expert"))
    job = skills(("SQL", "expert", True), ("Excel", "beginner", False))
    assert calculate_match_score(user, job) == 100


def test_optional_skill_uses_user_level():
    # 3.75 of 5 points
    user = skills(("Excel", "advanced"))
    job = skills(("Excel", "beginner", False))
    assert calculate_match_score(user, job) == 75


def test_mixed_required_and_optional():
    # required: min(5.0, 7.5) = 5.0 of 10; optional: 1.25 of 5 -> 6.25 / 15
    user = skills(("SQL", "intermediate"), ("Excel", "beginner"))
    job = skills(("SQL", "advanced", True), ("Excel", "expert", False))
    assert calculate_match_score(user, job) == 42


def test_names_compared_case_insensitively():
    user = skills(("python", "expert"))
    job = skills(("PYTHON", "expert", True))
    assert calculate_match_score(user, job) == 100


def test_half_scores_round_up():
    # 2.5 / 20 = 12.5%
    user = skills(("Go", "beginner"))
    job = skills(("Go", "expert", True), ("Rust", "expert", True))
    assert calculate_match_score(user, job) == 13


def test_unknown_level_counts_as_intermediate():
    user = [Skill(name="Python", level="guru")]
    job = skills(("Python", "expert", True))
    assert calculate_match_score(user, job) == 50


def test_score_monotonic_in_user_level():
    job = skills(("Python", "expert", True), ("Docker", "beginner", False))
    scores = [
        calculate_match_score(skills(("Python", level), ("Docker", level)), job)
        for level in ["beginner", "intermediate", "advanced", "expert"]
    ]
    assert scores == sorted(scores)
    assert all(0 <= s <= 100 for s in scores)


def test_missing_job_skills():
    user = skills(("Python", "expert"))
    job = job_with(("python", "expert"), ("SQL", "beginner"), ("Excel", "beginner", False))
    assert missing_job_skills(user, job) == ["sql", "excel"]


def test_level_index_defaults_to_intermediate():
    assert level_index("expert") == 3
    assert level_index("nonsense") == 1
    assert level_index(None) == 1


# ---------- course relevance ----------

def test_gap_skill_adds_twenty():
    course = skills(("Docker", "intermediate"))
    assert calculate_relevance_score([], ["docker"], course) == 20


def test_new_skill_adds_ten():
    course = skills(("Docker", "intermediate"))
    assert calculate_relevance_score([], [], course) == 10


def test_upgrade_adds_five():
    user = skills(("Python", "beginner"))
    course = skills(("Python", "advanced"))
    assert calculate_relevance_score(user, [], course) == 5


def test_owned_at_same_level_adds_nothing():
    user = skills(("Python", "advanced"))
    course = skills(("Python", "advanced"))
    assert calculate_relevance_score(user, [], course) == 0


def test_relevance_sums_over_course_skills():
    user = skills(("Python", "beginner"))
    course = skills(("Python", "expert"), ("Pandas", "intermediate"), ("Docker", "beginner"))
    assert calculate_relevance_score(user, ["Docker"], course) == 5 + 10 + 20


def test_rank_courses_drops_irrelevant_and_sorts():
    user = skills(("Python", "expert"))
    useless = course_with(("Python", "beginner"), title="Useless")
    some = course_with(("SQL", "beginner"), title="Some")
    best = course_with(("Docker", "beginner"), ("SQL", "beginner"), title="Best")

    ranked = rank_courses(user, ["docker"], [useless, some, best])

    assert [r["course"].title for r in ranked] == ["Best", "Some"]
    assert [r["relevance_score"] for r in ranked] == [30, 10]


def test_rank_courses_limit():
    courses = [course_with(("Skill%d" % i, "beginner"), title=str(i)) for i in range(5)]
    assert len(rank_courses([], [], courses, limit=2)) == 2


# ---------- skill demand & gaps ----------

def test_demand_counts_case_insensitively_and_sorts():
    jobs = [
        job_with(("Python", "beginner"), ("SQL", "intermediate")),
        job_with(("python", "expert"), ("Excel", "beginner")),
        job_with(("PYTHON", "advanced"), ("sql", "advanced")),
    ]
    demand = aggregate_skill_demand(jobs)

    assert [(d["name"], d["count"]) for d in demand] == [("Python", 3), ("SQL", 2), ("Excel", 1)]
    # beginner=1, expert=4, advanced=3
    assert np.isclose(demand[0]["avg_level"], 8 / 3)


def test_demand_ties_keep_first_seen_order():
    jobs = [job_with(("Go", "beginner"), ("Rust", "beginner")), job_with(("Rust", "beginner"), ("Go", "beginner"))]
    assert [d["name"] for d in aggregate_skill_demand(jobs)] == ["Go", "Rust"]


def test_gap_analysis_excludes_owned_skills():
    jobs = [
        job_with(("Python", "advanced"), ("SQL", "intermediate")),
        job_with(("Python", "expert"), ("Docker", "beginner")),
    ]
    analysis = analyze_skill_gaps(skills(("python", "beginner")), jobs)

    assert analysis["total_skills"] == 1
    assert [g["name"] for g in analysis["skill_gaps"]] == ["SQL", "Docker"]
    assert analysis["trending_skills"][0] == {"name": "Python", "demand": 2, "has_skill": True}
    assert all(g["priority"] == "low" for g in analysis["skill_gaps"])


def test_gap_priority_and_recommended_level():
    jobs = [job_with(("Kubernetes", "expert")) for _ in range(11)]
    jobs += [job_with(("Docker", "beginner")) for _ in range(6)]
    gaps = {g["name"]: g for g in analyze_skill_gaps([], jobs)["skill_gaps"]}

    assert gaps["Kubernetes"]["priority"] == "high"
    assert gaps["Kubernetes"]["recommended_level"] == "advanced"
    assert gaps["Docker"]["priority"] == "medium"
    assert gaps["Docker"]["recommended_level"] == "intermediate"


def test_gap_analysis_limits_to_ten():
    jobs = [job_with(*[("Skill%d" % i, "beginner") for i in range(25)])]
    analysis = analyze_skill_gaps([], jobs)
    assert len(analysis["skill_gaps"]) == 10
    assert len(analysis["trending_skills"]) == 10


def test_no_jobs_means_no_gaps():
    analysis = analyze_skill_gaps(skills(("Python", "expert")), [])
    assert analysis == {"total_skills": 1, "skill_gaps": [], "trending_skills": []}


def test_skill_gap_names():
    jobs = [job_with(("Python", "beginner"), ("SQL", "beginner"))]
    assert skill_gap_names(skills(("Python", "beginner")), jobs) == ["SQL"]


def test_levels_omitted_on_job_skills():
    job = [Skill(name="SQL"), Skill(name="Excel", required=False)]
    assert calculate_match_score([], job) == 0
    assert calculate_match_score([Skill(name="sql")], job) == 33


def test_superset_at_required_level_earns_required_portion():
    job = skills(("Python", "advanced", True), ("SQL", "intermediate", True), ("Excel", "beginner", False))
    user = skills(("Python", "expert"), ("SQL", "intermediate"))
    score = calculate_match_score(user, job)
    assert 50 <= score <= 100


def test_more_matched_required_skills_never_lowers_score():
    job = skills(("Python", "expert", True), ("SQL", "expert", True), ("Docker", "expert", True))
    held = [("Python", "expert"), ("SQL", "expert"), ("Docker", "expert")]
    scores = [calculate_match_score(skills(*held[:n]), job) for n in range(4)]
    assert scores == [0, 33, 67, 100]


def test_adding_gap_skill_adds_exactly_twenty():
    user = skills(("Python", "beginner"))
    course = skills(("Python", "advanced"))
    before = calculate_relevance_score(user, ["Kubernetes"], course)
    after = calculate_relevance_score(user, ["Kubernetes"], course + skills(("Kubernetes", "beginner")))
    assert after - before == 20
