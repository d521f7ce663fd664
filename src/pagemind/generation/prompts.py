"""Prompt templates for grounded question answering."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from langchain_core.messages import HumanMessage, SystemMessage

if TYPE_CHECKING:
    from langchain_core.messages import BaseMessage

SUPPORT_AGENT_SYSTEM = (
    "You are an AI support agent, expert in providing support to users on "
    "behalf of a webpage. Given the context about page content, reply the "
    "user accordingly."
)


def build_answer_prompt(
    question: str,
    urls: Sequence[str],
    bodies: Sequence[str],
) -> list[BaseMessage]:
    """Build the ``[system, user]`` messages for one question.

    *urls* and *bodies* are joined with ``", "`` in retrieval order; both
    may be empty when nothing was retrieved.
    """
    user = (
        f"Query: {question}\n\n"
        f"URL: {', '.join(urls)}\n\n"
        f"Retrieved context: {', '.join(bodies)}"
    )
    return [
        SystemMessage(content=SUPPORT_AGENT_SYSTEM),
        HumanMessage(content=user),
    ]
