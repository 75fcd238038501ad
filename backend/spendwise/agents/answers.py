from spendwise.agents.factory import AgentFactory


async def generate_insight_answer(question: str) -> str:
    """Generate a natural-language answer for an insight question.

    Provider errors are not handled here; callers decide on the fallback.
    """
    if not question or not question.strip():
        raise ValueError("question must not be empty")

    agent = AgentFactory.get_answer_agent()
    result = await agent.run(question.strip())
    return str(result.output).strip()
