"""
Skill list maintenance for a user's profile.

Names are matched case-insensitively; list order is append order.
"""

from datetime import datetime
from typing import List, Sequence, Tuple

from career_portal.models.documents import Skill
from career_portal.schemas.schemas import SkillIn


def upsert_skills(current: Sequence[Skill], updates: Sequence[SkillIn]) -> List[Skill]:
    """
    Apply skill edits from the profile page.

    An existing skill (same name, any case) is updated in place with the
    fields that were sent and takes the new spelling; anything else is
    appended with added_date set.
    """
    skills = [s.model_copy() for s in current]
    now = datetime.utcnow()

    for update in updates:
        key = update.name.lower()
        index = next((i for i, s in enumerate(skills) if s.key == key), None)
        changes = update.model_dump(exclude_none=True, mode="json")

        if index is None:
            skills.append(Skill(**changes, added_date=now))
        else:
            skills[index] = skills[index].model_copy(update=changes)

    return skills


def add_missing_skills(current: Sequence[Skill], found: Sequence[Skill]) -> Tuple[List[Skill], List[Skill]]:
    """
    Append skills found in a resume that the user does not list yet.
    Existing entries are never changed.

    Returns:
        (merged skill list, skills that were added)
    """
    skills = list(current)
    known = {s.key for s in skills}
    added = []
    now = datetime.utcnow()

    for skill in found:
        if skill.key in known:
            continue
        new_skill = skill.model_copy(update={"added_date": now})
        skills.append(new_skill)
        added.append(new_skill)
        known.add(skill.key)

    return skills, added


def remove_skill(current: Sequence[Skill], name: str) -> Tuple[List[Skill], bool]:
    key = name.strip().lower()
    remaining = [s for s in current if s.key != key]
    return remaining, len(remaining) != len(current)
