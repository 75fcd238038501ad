import logging
import os
from typing import Optional

from pydantic_ai import Agent
from pydantic_ai.models.anthropic import AnthropicModel

from spendwise.core.config import settings, get_anthropic_api_key

logger = logging.getLogger(__name__)


ANSWER_SYSTEM_PROMPT = """You are a friendly, practical personal-finance coach inside an expense tracking app.

The user is looking at an insight about their own spending and asked for more detail.
The question has the form "<insight title>: <what they want to know>".

- Answer in 3 to 5 short sentences of plain text
- Give concrete, actionable steps (amounts, percentages, habits) rather than generic advice
- Be encouraging and non-judgmental
- No markdown, no bullet points, no headings
- Do not ask follow-up questions"""


class AgentFactory:
    """Factory for creating and caching AI agents"""

    _answer_agent: Optional[Agent] = None

    @classmethod
    def get_answer_agent(cls) -> Agent:
        """Get or create the agent that explains insights"""
        if cls._answer_agent is None:
            cls._answer_agent = cls._create_answer_agent()
        return cls._answer_agent

    @classmethod
    def reset(cls):
        cls._answer_agent = None

    @classmethod
    def _create_answer_agent(cls) -> Agent:
        # AnthropicModel reads the key from the environment
        api_key = get_anthropic_api_key()
        if api_key:
            os.environ["ANTHROPIC_API_KEY"] = api_key
        else:
            logger.error("No Anthropic API key found")

        model = AnthropicModel(settings.ANTHROPIC_DEFAULT_MODEL)
        logger.info(f"Created answer agent on {settings.ANTHROPIC_DEFAULT_MODEL}")

        return Agent(
            model=model,
            system_prompt=ANSWER_SYSTEM_PROMPT,
            model_settings={"max_tokens": settings.ANSWER_MAX_TOKENS, "temperature": 0.4},
        )
