"""
Match Scoring & Skill Gap Service

PURPOSE:
Compare a user's skills with job requirements and course content.

HOW IT WORKS:
1. Match score (0-100): weighted sum over a job's required and optional skills
2. Course relevance: additive score for gaps closed, new skills and level upgrades
3. Skill gaps: demand frequency over every active job minus the user's skills

Every function here is pure: the caller fetches the records for the request,
the scores are computed and returned, nothing is written back. Skill names
are compared case-insensitively everywhere.
"""

from typing import Dict, Iterable, List, Optional, Sequence

import numpy as np

from career_portal.models.documents import Course, Job, Skill


LEVEL_ORDER = ["beginner", "intermediate", "advanced", "expert"]

# Contribution of a matched skill, by the level being scored
REQUIRED_LEVEL_SCORES = {"beginner": 2.5, "intermediate": 5.0, "advanced": 7.5, "expert": 10.0}
OPTIONAL_LEVEL_SCORES = {"beginner": 1.25, "intermediate": 2.5, "advanced": 3.75, "expert": 5.0}

REQUIRED_WEIGHT = 10
OPTIONAL_WEIGHT = 5

GAP_SCORE = 20
NEW_SKILL_SCORE = 10
UPGRADE_SCORE = 5

TRENDING_LIMIT = 20
ANALYSIS_LIMIT = 10

# 1..4 ordinal used for the average demanded level
DEFAULT_LEVEL_RANK = 2


def _index_by_name(skills: Iterable[Skill]) -> Dict[str, Skill]:
    """Lookup table keyed by lower-cased name; first occurrence wins."""
    index: Dict[str, Skill] = {}
    for skill in skills:
        index.setdefault(skill.key, skill)
    return index


def level_index(level: Optional[str]) -> int:
    """Position of a level in LEVEL_ORDER; unknown levels count as intermediate."""
    try:
        return LEVEL_ORDER.index(level)
    except ValueError:
        return LEVEL_ORDER.index("intermediate")


# ============================================================
# MATCH SCORE (user <-> job)
# ============================================================

def calculate_match_score(user_skills: Sequence[Skill], job_skills: Sequence[Skill]) -> int:
    """
    Compute how well a user's skills satisfy a job's skill list.

    Required skills weigh 10 each and a match earns the lower of the user's
    level and the requested level. Optional skills weigh 5 each and a match
    earns the user's level on the half-weight table.

    Returns:
        Integer between 0 and 100 (0 when the job lists no skills)
    """
    user_index = _index_by_name(user_skills)

    score = 0.0
    max_score = 0.0

    for job_skill in job_skills:
        user_skill = user_index.get(job_skill.key)

        if job_skill.required:
            max_score += REQUIRED_WEIGHT
            if user_skill:
                user_level_score = REQUIRED_LEVEL_SCORES.get(user_skill.level, REQUIRED_LEVEL_SCORES["intermediate"])
                req_level_score = REQUIRED_LEVEL_SCORES.get(job_skill.level, REQUIRED_LEVEL_SCORES["intermediate"])
                score += min(user_level_score, req_level_score)
        else:
            max_score += OPTIONAL_WEIGHT
            if user_skill:
                score += OPTIONAL_LEVEL_SCORES.get(user_skill.level, OPTIONAL_LEVEL_SCORES["intermediate"])

    if max_score == 0:
        return 0

    # Python's round() is banker's rounding; half-up keeps x.5 scores stable
    return int(np.floor(score / max_score * 100 + 0.5))


def job_match_score(user_skills: Sequence[Skill], job: Job) -> int:
    return calculate_match_score(user_skills, job.skills)


def missing_job_skills(user_skills: Sequence[Skill], job: Job) -> List[str]:
    """Lower-cased names of every job skill the user does not list."""
    user_index = _index_by_name(user_skills)
    return [s.key for s in job.skills if s.key not in user_index]


# ============================================================
# COURSE RELEVANCE
# ============================================================

def calculate_relevance_score(
    user_skills: Sequence[Skill],
    skill_gaps: Iterable[str],
    course_skills: Sequence[Skill]
) -> int:
    """
    Rank a course for a user. Unbounded, non-negative.

    Per course skill:
    - in the skill gap list: +20
    - not held by the user: +10
    - held at a lower level than the course teaches: +5
    """
    user_index = _index_by_name(user_skills)
    gap_keys = {g.strip().lower() for g in skill_gaps}

    score = 0
    for course_skill in course_skills:
        if course_skill.key in gap_keys:
            score += GAP_SCORE
            continue

        user_skill = user_index.get(course_skill.key)
        if user_skill is None:
            score += NEW_SKILL_SCORE
        elif level_index(course_skill.level) > level_index(user_skill.level):
            score += UPGRADE_SCORE

    return score


def course_relevance_score(user_skills: Sequence[Skill], skill_gaps: Iterable[str], course: Course) -> int:
    return calculate_relevance_score(user_skills, skill_gaps, course.skills)


def rank_courses(
    user_skills: Sequence[Skill],
    skill_gaps: Sequence[str],
    courses: Sequence[Course],
    limit: Optional[int] = None
) -> List[dict]:
    """
    Score courses and keep the relevant ones, best first.

    Returns:
        List of {"course": Course, "relevance_score": int} with score > 0
    """
    scored = [
        {"course": course, "relevance_score": course_relevance_score(user_skills, skill_gaps, course)}
        for course in courses
    ]
    scored = [s for s in scored if s["relevance_score"] > 0]
    scored.sort(key=lambda s: s["relevance_score"], reverse=True)
    return scored[:limit] if limit is not None else scored


# ============================================================
# SKILL DEMAND & GAPS
# ============================================================

def aggregate_skill_demand(jobs: Iterable[Job]) -> List[dict]:
    """
    Count how often each skill is asked for across the given jobs.

    Skills are grouped case-insensitively; the display name is the first
    spelling encountered. Results are sorted by descending count, ties keep
    encounter order.

    Returns:
        List of {"name": str, "count": int, "avg_level": float}
    """
    names: Dict[str, str] = {}
    ranks: Dict[str, List[int]] = {}

    for job in jobs:
        for skill in job.skills:
            key = skill.key
            if not key:
                continue
            names.setdefault(key, skill.name.strip())
            ranks.setdefault(key, []).append(level_index(skill.level) + 1)

    demand = [
        {
            "name": names[key],
            "count": len(levels),
            "avg_level": float(np.mean(levels)) if levels else float(DEFAULT_LEVEL_RANK),
        }
        for key, levels in ranks.items()
    ]
    # sort() is stable, so equal counts keep the order skills were first seen
    demand.sort(key=lambda d: d["count"], reverse=True)
    return demand


def demand_priority(count: int) -> str:
    if count > 10:
        return "high"
    if count > 5:
        return "medium"
    return "low"


def recommended_level(avg_level: float) -> str:
    return "advanced" if avg_level > 2.5 else "intermediate"


def analyze_skill_gaps(user_skills: Sequence[Skill], jobs: Iterable[Job]) -> dict:
    """
    Full skill gap analysis for one user against the active job corpus.

    Returns:
        {
            "total_skills": 4,
            "skill_gaps": [{"name", "demand", "recommended_level", "priority"}],
            "trending_skills": [{"name", "demand", "has_skill"}]
        }
    """
    user_keys = set(_index_by_name(user_skills))
    trending = aggregate_skill_demand(jobs)[:TRENDING_LIMIT]

    gaps = [
        {
            "name": d["name"],
            "demand": d["count"],
            "recommended_level": recommended_level(d["avg_level"]),
            "priority": demand_priority(d["count"]),
        }
        for d in trending
        if d["name"].lower() not in user_keys
    ]

    return {
        "total_skills": len(user_skills),
        "skill_gaps": gaps[:ANALYSIS_LIMIT],
        "trending_skills": [
            {
                "name": d["name"],
                "demand": d["count"],
                "has_skill": d["name"].lower() in user_keys,
            }
            for d in trending[:ANALYSIS_LIMIT]
        ],
    }


def skill_gap_names(user_skills: Sequence[Skill], jobs: Iterable[Job]) -> List[str]:
    """Names of trending skills the user lacks (input for course relevance)."""
    user_keys = set(_index_by_name(user_skills))
    return [
        d["name"] for d in aggregate_skill_demand(jobs)[:TRENDING_LIMIT]
        if d["name"].lower() not in user_keys
    ]
