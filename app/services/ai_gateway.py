"""
AI Text Gateway

Gemini exposes an OpenAI-compatible API, so we use the openai library.

AI is used ONLY for free text:
- Drafting a project description from a short brief
- Scoring a bid proposal against a project
- Ranking consultants for a project (matchmaking advice)

The returned text is passed through as-is: no retries, no caching, no
parsing. Provider errors propagate to the caller.
"""
import logging
from typing import List

from openai import OpenAI

from app.core.config import get_settings

logger = logging.getLogger(__name__)

settings = get_settings()


class AIGateway:
    """
    Wrapper for the hosted text model with one method per prompt.
    """

    def __init__(self):
        self.client = OpenAI(
            api_key=settings.gemini_api_key or "missing-api-key",
            base_url=settings.ai_base_url
        )
        self.model = settings.ai_model

    def _call_api(self, system_prompt: str, user_content: str, max_tokens: int = 1500) -> str:
        """
        Internal method to call the model.
        Returns raw text response.
        """
        logger.info("AI request: %s", system_prompt.splitlines()[0][:60])
        response = self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_content}
            ],
            max_tokens=max_tokens
        )
        return response.choices[0].message.content

    def generate_job_description(self, brief: str) -> str:
        """
        Draft a professional HR project description from a brief.
        """
        system_prompt = """You write professional HR service project descriptions.
Include sections for Scope of Work, Required Expertise, and Expected Deliverables.
Format the answer as Markdown."""

        return self._call_api(
            system_prompt,
            f'Generate a professional HR service project description based on this brief: "{brief}".'
        )

    def analyze_bid(self, project_description: str, bid_proposal: str) -> str:
        """
        Score a proposal 1-10 for relevance and summarise pros and cons.
        """
        system_prompt = """Analyze this bid proposal against the project description.
Provide a score from 1-10 on relevance and a brief summary of pros and cons."""

        return self._call_api(
            system_prompt,
            f"Project: {project_description}\nBid: {bid_proposal}",
            max_tokens=800
        )

    def get_matchmaking_advice(self, project_description: str, consultant_bios: List[str]) -> str:
        """
        Rank the top 3 consultants for a project.

        consultant_bios: one "name: bio" line per seller.
        """
        system_prompt = """As an AI HR Matchmaker, analyze this project description and the list of consultant bios.
Rank the top 3 consultants for this project and explain why they are a good fit.
Return the response in a structured format."""

        consultants = "\n".join(f"{i + 1}. {bio}" for i, bio in enumerate(consultant_bios))
        return self._call_api(
            system_prompt,
            f"Project: {project_description}\n\nConsultants:\n{consultants}"
        )

    def test_connection(self) -> bool:
        """Test if the AI API is reachable"""
        try:
            response = self._call_api(
                "You are a test assistant.",
                "Reply with exactly: OK",
                max_tokens=10
            )
            return "OK" in (response or "").upper()
        except Exception as e:
            logger.error("AI connection failed: %s", e)
            return False


# Singleton instance
_ai_gateway: AIGateway = None


def get_ai_gateway() -> AIGateway:
    """Get or create the AI gateway (singleton pattern)"""
    global _ai_gateway
    if _ai_gateway is None:
        _ai_gateway = AIGateway()
    return _ai_gateway
