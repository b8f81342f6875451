"""
Career assistant chat - scripted replies.

An ordered list of (predicate, reply) rules evaluated first-match, with a
default reply when nothing matches. No state is kept between messages.
"""

import re
from dataclasses import dataclass, field
from typing import Callable, List

from career_portal.models.documents import User


@dataclass
class ChatReply:
    text: str
    suggestions: List[str] = field(default_factory=list)
    actions: List[dict] = field(default_factory=list)


@dataclass
class ChatRule:
    name: str
    matches: Callable[[str], bool]
    reply: Callable[[User], ChatReply]


def _mentions(*keywords: str) -> Callable[[str], bool]:
    def predicate(message: str) -> bool:
        return any(k in message for k in keywords)
    return predicate


def _says(*words: str) -> Callable[[str], bool]:
    pattern = re.compile(r"\b(" + "|".join(words) + r")\b")

    def predicate(message: str) -> bool:
        return pattern.search(message) is not None
    return predicate


def _navigate(target: str, label: str) -> dict:
    return {"type": "navigate", "target": target, "label": label}


def _resume_reply(user: User) -> ChatReply:
    if user.has_resume:
        return ChatReply(
            "I see you've uploaded your resume! I can help you analyze it and suggest "
            "improvements to make it more attractive to employers.",
            ["Analyze my resume", "Get resume tips", "Update my skills from resume"],
        )
    return ChatReply(
        "I notice you haven't uploaded your resume yet. Uploading your resume helps me "
        "provide better job matches and skill analysis!",
        ["Upload my resume", "Learn about resume tips", "See what information I need"],
        [_navigate("/profile", "Upload Resume")],
    )


RULES: List[ChatRule] = [
    ChatRule(
        "greeting",
        _says("hello", "hi", "hey"),
        lambda user: ChatReply(
            f"Hello {user.profile.first_name}! I'm here to help you with your career journey. "
            "How can I assist you today?",
            ["Help me find jobs", "Analyze my skills", "Recommend courses", "Update my profile"],
        ),
    ),
    ChatRule(
        "jobs",
        _mentions("job", "career"),
        lambda user: ChatReply(
            "I can help you find the perfect job opportunities! Based on your skills and "
            "preferences, I can show you personalized job matches.",
            ["Show me job recommendations", "Help me improve my resume", "What skills should I learn?"],
            [_navigate("/opportunities", "View Jobs")],
        ),
    ),
    ChatRule(
        "skills",
        _mentions("skill", "learn"),
        lambda user: ChatReply(
            "Great question! I can analyze your current skills and identify gaps in the market. "
            "This helps you focus on learning the most valuable skills for your career.",
            ["Analyze my skill gaps", "Recommend courses", "Show trending skills"],
            [_navigate("/skills", "View Skills Analysis")],
        ),
    ),
    ChatRule("resume", _mentions("resume", "cv"), _resume_reply),
    ChatRule(
        "courses",
        _mentions("course", "training"),
        lambda user: ChatReply(
            "I can recommend personalized courses based on your skill gaps and career goals. "
            "These courses are from trusted providers and will help boost your career prospects.",
            ["Show course recommendations", "Find free courses", "Courses for my skill gaps"],
            [_navigate("/courses", "Browse Courses")],
        ),
    ),
    ChatRule(
        "progress",
        _mentions("progress", "track"),
        lambda user: ChatReply(
            "Let me show you your career progress! I track your activities, skill development, "
            "and achievements to help you see how far you've come.",
            ["Show my progress", "View my timeline", "See my achievements"],
            [_navigate("/track", "View Progress")],
        ),
    ),
]

DEFAULT_REPLY = ChatReply(
    "I'm here to help you with your career development! I can assist with job searching, "
    "skill analysis, course recommendations, and tracking your progress.",
    ["Find me jobs", "Analyze my skills", "Recommend courses", "Show my progress", "Help with my resume"],
)


def generate_reply(message: str, user: User) -> ChatReply:
    text = message.lower()
    for rule in RULES:
        if rule.matches(text):
            return rule.reply(user)
    return DEFAULT_REPLY
