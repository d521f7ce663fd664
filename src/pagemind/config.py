"""Shared configuration loaded from environment / .env file."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application-wide settings, populated from env vars or .env file."""

    # LLM
    openai_api_key: str = Field(default="", description="OpenAI API key (chat + embeddings)")
    llm_model_name: str = Field(default="gpt-3.5-turbo", description="Chat model identifier")
    llm_base_url: str = Field(
        default="",
        description=(
            "Base URL for an OpenAI-compatible chat API. Leave empty to use "
            "OpenAI cloud."
        ),
    )
    llm_temperature: float = 0.0

    # Vector store
    chroma_host: str = "localhost"
    chroma_port: int = 8000
    chroma_collection: str = "PAGEMIND_COLLECTION_1"

    # Embedding
    embedding_provider: str = Field(default="openai", description="'openai' or 'huggingface'")
    embedding_model: str = "text-embedding-3-small"

    # Ingestion
    chunk_count: int = Field(default=100, gt=0, description="Chunks produced per page body")
    request_timeout: int = 30
    fetch_max_retries: int = 3
    ingest_max_workers: int = 4

    # Retrieval
    retrieval_k: int = Field(default=3, gt=0, description="Nearest neighbours per question")

    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


# Defaults for entry points; orchestrators receive their parameters explicitly.
settings = Settings()
