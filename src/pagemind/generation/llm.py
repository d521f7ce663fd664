"""LLM initialisation: single place to swap chat providers.

Supports two modes:

1. **OpenAI cloud** (default) — set ``OPENAI_API_KEY``.
2. **OpenAI-compatible endpoint** — set ``LLM_BASE_URL`` (e.g. a local
   vLLM server exposing ``/v1/chat/completions``); ``ChatOpenAI`` works
   unchanged against it.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from langchain_openai import ChatOpenAI

from pagemind.errors import GenerationFailed

if TYPE_CHECKING:
    from langchain_core.language_models import BaseChatModel
    from langchain_core.messages import BaseMessage

logger = logging.getLogger(__name__)


def get_llm(
    model_name: str,
    *,
    api_key: str = "",
    base_url: str = "",
    temperature: float = 0.0,
) -> ChatOpenAI:
    """Return the configured chat model.

    When *base_url* is set the client is pointed at that endpoint instead
    of the OpenAI cloud API, with a dummy key when none is configured.
    """
    kwargs: dict = {
        "model": model_name,
        "temperature": temperature,
    }

    if base_url:
        logger.info("Using OpenAI-compatible endpoint: %s", base_url)
        kwargs["base_url"] = base_url
        # Local servers don't need a real key; LangChain requires a non-empty value.
        kwargs["api_key"] = api_key or "EMPTY"
    else:
        kwargs["api_key"] = api_key or None

    return ChatOpenAI(**kwargs)


class Generator:
    """Turns an ordered ``[system, user]`` message list into a completion."""

    def __init__(self, llm: BaseChatModel) -> None:
        self._llm = llm

    def generate(self, messages: Sequence[BaseMessage]) -> str:
        try:
            response = self._llm.invoke(list(messages))
        except Exception as exc:
            raise GenerationFailed("Chat completion failed", {"messages": len(messages)}) from exc

        content = response.content
        if not isinstance(content, str):
            raise GenerationFailed("Chat completion returned non-text content")
        return content
