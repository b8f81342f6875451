"""
DeepSeek skill extractor

The DeepSeek endpoint speaks the OpenAI chat-completions protocol, so the
openai client is pointed at settings.deepseek_base_url.

Only called for resume uploads when settings.deepseek_api_key is set; the
keyword extractor runs regardless.
"""
import json
import logging
import re
from typing import List, Optional

from openai import OpenAI

from career_portal.core.config import get_settings

settings = get_settings()
logger = logging.getLogger(__name__)

MODEL = "deepseek-chat"

FENCE_RE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL)

SKILLS_PROMPT = """You read resumes and list the skills they mention.
Answer with a JSON array of strings and nothing else, e.g. ["Python", "SQL", "Teamwork"].
Cover languages, frameworks, tools, databases, platforms and soft skills.
Do not invent skills that are not in the text."""


class DeepSeekClient:
    def __init__(self):
        self.client = OpenAI(api_key=settings.deepseek_api_key, base_url=settings.deepseek_base_url)
        self.model = MODEL

    def _call_api(self, system_prompt: str, user_content: str, max_tokens: int = 1000) -> str:
        """One chat completion; returns the message text."""
        completion = self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_content},
            ],
            max_tokens=max_tokens,
            temperature=0.1,
        )
        return completion.choices[0].message.content or ""

    def _extract_json(self, text: str):
        """Parse a JSON reply, with or without a markdown code fence around it."""
        text = text.strip()
        fenced = FENCE_RE.match(text)
        if fenced:
            text = fenced.group(1)
        return json.loads(text)

    def extract_skills(self, text: str) -> List[str]:
        """
        Skill names found in resume text.

        Raises:
            ValueError if the reply is not a JSON array
        """
        reply = self._extract_json(self._call_api(SKILLS_PROMPT, text, max_tokens=300))
        if not isinstance(reply, list):
            raise ValueError("Skill extraction did not return a JSON array")

        names = [str(s).strip() for s in reply if s and str(s).strip()]
        logger.info(f"AI extracted {len(names)} skills")
        return names


_deepseek_client: Optional[DeepSeekClient] = None


def get_deepseek_client() -> DeepSeekClient:
    global _deepseek_client
    if _deepseek_client is None:
        _deepseek_client = DeepSeekClient()
    return _deepseek_client
