"""
Resume Parsing Service - keyword extraction from resume text.

PURPOSE:
Turn an uploaded resume into profile data:
1. Skills (fixed keyword table, level intermediate, category technical)
2. Contact details (email, phone)
3. Years of experience ("5+ years of experience")

When a DeepSeek API key is configured the AI skill extractor runs as well
and its extra skills are appended to the keyword result. A failing AI call
is logged and the keyword result is used on its own.
"""

import logging
import re
from datetime import datetime
from typing import List, Optional

from career_portal.core.config import get_settings
from career_portal.models.documents import Contact, ParsedResume, Resume, Skill, User
from career_portal.services.deepseek_client import get_deepseek_client
from career_portal.services.mongo_service import UserService
from career_portal.services.skill_service import add_missing_skills
from career_portal.utils.file_upload import delete_resume_file, extract_text, save_resume_file

settings = get_settings()


SKILL_KEYWORDS = [
    'javascript', 'python', 'java', 'react', 'node.js', 'html', 'css',
    'sql', 'mongodb', 'express', 'angular', 'vue', 'typescript', 'php',
    'c++', 'c#', 'ruby', 'go', 'swift', 'kotlin', 'flutter', 'docker',
    'kubernetes', 'aws', 'azure', 'gcp', 'git', 'linux', 'machine learning',
    'data science', 'artificial intelligence', 'blockchain', 'cybersecurity'
]

# Whole-token match: "java" must not fire inside "javascript", "go" not inside "good"
_KEYWORD_PATTERNS = [
    (kw, re.compile(r'(?<![\w+#.])' + re.escape(kw) + r'(?![\w+#])', re.IGNORECASE))
    for kw in SKILL_KEYWORDS
]

EMAIL_RE = re.compile(r'\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b')
PHONE_RE = re.compile(r'(\+?\d{1,3}[-.\s]?)?\(?\d{3}\)?[-.\s]?\d{3}[-.\s]?\d{4}')
EXPERIENCE_RE = re.compile(r'(\d+)\+?\s*(years?|yrs?)\s*(of\s*)?(experience|exp)', re.IGNORECASE)


def extract_keyword_skills(text: str) -> List[Skill]:
    return [
        Skill(name=kw, level="intermediate", category="technical")
        for kw, pattern in _KEYWORD_PATTERNS
        if pattern.search(text)
    ]


def extract_contact(text: str) -> Contact:
    email = EMAIL_RE.search(text)
    phone = PHONE_RE.search(text)
    return Contact(
        email=email.group(0) if email else None,
        phone=phone.group(0).strip() if phone else None,
    )


def extract_years_of_experience(text: str) -> int:
    match = EXPERIENCE_RE.search(text)
    return int(match.group(1)) if match else 0


class ResumeParsingService:
    """
    Complete resume workflow:
    1. Extract text from the uploaded file
    2. Parse skills, contact details and experience
    3. Store the file on disk (replacing any previous resume)
    4. Append new skills, fill a missing phone number
    5. Log the upload in the activity timeline
    """

    def __init__(self, user_service: Optional[UserService] = None):
        self.user_service = user_service or UserService()
        self.logger = logging.getLogger(self.__class__.__name__)

    def parse(self, text: str) -> ParsedResume:
        skills = extract_keyword_skills(text)

        if settings.ai_enabled:
            skills = self._merge_ai_skills(text, skills)

        return ParsedResume(
            skills=skills,
            contact=extract_contact(text),
            years_of_experience=extract_years_of_experience(text),
        )

    def _merge_ai_skills(self, text: str, skills: List[Skill]) -> List[Skill]:
        try:
            ai_names = get_deepseek_client().extract_skills(text)
        except Exception as e:
            self.logger.warning(f"AI skill extraction failed, using keywords only: {e}")
            return skills

        known = {s.key for s in skills}
        for name in ai_names:
            if name.lower() not in known:
                skills.append(Skill(name=name, level="intermediate", category="technical"))
                known.add(name.lower())
        return skills

    def process_upload(self, user: User, content: bytes, filename: str, ext: str) -> dict:
        """
        Full pipeline for one upload.

        Returns:
            {
                "file_name": "cv.pdf",
                "upload_date": datetime,
                "skills_extracted": 5,
                "skills": [...],
                "skills_added": 3,
                "years_of_experience": 2
            }
        """
        text = extract_text(content, ext)
        parsed = self.parse(text)

        path = save_resume_file(content, ext)
        upload_date = datetime.utcnow()
        resume = Resume(file_name=filename, file_path=path, upload_date=upload_date, parsed_data=parsed)
        merged_skills, added = add_missing_skills(user.skills, parsed.skills)

        updates = {
            "resume": resume.model_dump(),
            "skills": [s.model_dump() for s in merged_skills],
        }
        if parsed.contact.phone and not user.profile.phone:
            updates["profile.phone"] = parsed.contact.phone

        try:
            self.user_service.update_fields(user.id, updates)
        except Exception:
            delete_resume_file(path)
            raise

        if user.resume and user.resume.file_path != path:
            delete_resume_file(user.resume.file_path)

        self.user_service.log_activity(
            user.id,
            "resume_uploaded",
            f'Resume "{filename}" uploaded and parsed successfully',
            {"file_name": filename, "skills_extracted": len(parsed.skills)},
        )
        self.logger.info(f"Parsed resume for user {user.id}: {len(parsed.skills)} skills")

        return {
            "file_name": filename,
            "upload_date": upload_date,
            "skills_extracted": len(parsed.skills),
            "skills": [s.model_dump() for s in parsed.skills],
            "skills_added": len(added),
            "years_of_experience": parsed.years_of_experience,
        }


def analyze_resume(user: User) -> dict:
    """Completeness flags, improvement suggestions and a 0-100 score."""
    parsed = user.resume.parsed_data
    completeness = {
        "has_contact": bool(user.profile.phone and user.email),
        "has_experience": len(parsed.experience) > 0,
        "has_education": len(parsed.education) > 0,
        "has_projects": len(parsed.projects) > 0,
        "has_skills": len(user.skills) > 0,
    }

    suggestions = []
    if not completeness["has_contact"]:
        suggestions.append({
            "type": "contact",
            "message": "Add your phone number to complete your contact information",
            "priority": "high",
        })
    if len(user.skills) < 5:
        suggestions.append({
            "type": "skills",
            "message": "Add more skills to improve your profile visibility",
            "priority": "medium",
        })
    if not completeness["has_projects"]:
        suggestions.append({
            "type": "projects",
            "message": "Add projects to showcase your practical experience",
            "priority": "medium",
        })

    done = sum(1 for v in completeness.values() if v)
    return {
        "skills_count": len(user.skills),
        "experience_years": parsed.years_of_experience,
        "completeness": completeness,
        "suggestions": suggestions,
        "overall_score": int(done * 100 / len(completeness) + 0.5),
    }


def get_resume_parser() -> ResumeParsingService:
    """Get resume parsing service instance."""
    return ResumeParsingService()
