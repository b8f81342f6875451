"""
Student Career Portal
Profile, resume and skill tracking with job and course matching.

Architecture:
- MongoDB: users (with embedded skills, resume and activity log), jobs, courses
- Scoring: skill match, course relevance and market skill-gap analysis
- DeepSeek AI: optional resume skill extraction
"""

__version__ = "1.0.0"
