"""
Generation — chat-model wiring and prompt construction.

Public API
----------
- :func:`get_llm` — build the configured ``ChatOpenAI`` client.
- :class:`Generator` — ``generate(messages) -> str`` with error translation.
- :func:`build_answer_prompt` — the grounded ``[system, user]`` prompt.
"""

from pagemind.generation.llm import Generator, get_llm
from pagemind.generation.prompts import SUPPORT_AGENT_SYSTEM, build_answer_prompt

__all__ = [
    "Generator",
    "SUPPORT_AGENT_SYSTEM",
    "build_answer_prompt",
    "get_llm",
]
