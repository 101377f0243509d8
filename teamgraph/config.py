"""
Pipeline configuration.

Values come from the environment (and a .env file, if present) so that the
HTTP layer and batch jobs share one source of truth.
"""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

# Default model - can use any LiteLLM supported model
# Examples:
#   - "gemini/gemini-2.5-flash" (Google Gemini)
#   - "claude-sonnet-4-20250514" (Anthropic Claude)
#   - "gpt-4o" (OpenAI GPT-4)
DEFAULT_MODEL = "gemini/gemini-2.5-flash"

ENV_PREFIX = "TEAMGRAPH_"


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    value = os.getenv(ENV_PREFIX + name)
    if value is None or value == "":
        return default
    return value


@dataclass
class PipelineConfig:
    """Pipeline configuration."""

    # LLM (LiteLLM format)
    model: str = DEFAULT_MODEL
    temperature: float = 0.0
    max_tokens: int = 4096
    request_timeout: Optional[float] = None

    # Document store
    mongo_uri: str = "mongodb://localhost:27017"
    database: str = "teamgraph"
    nodes_collection: str = "knowledgeNodes"
    edges_collection: str = "knowledgeEdges"

    # Traversal
    max_forward_depth: int = 2

    # Logging
    log_level: str = "INFO"
    log_format: str = "console"  # or "json"

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None) -> "PipelineConfig":
        """
        Build a config from TEAMGRAPH_* environment variables.

        Args:
            dotenv_path: Optional .env file; defaults to python-dotenv's lookup
        """
        load_dotenv(dotenv_path)
        defaults = cls()
        timeout = _env("REQUEST_TIMEOUT")
        return cls(
            model=_env("MODEL", defaults.model),
            temperature=float(_env("TEMPERATURE", str(defaults.temperature))),
            max_tokens=int(_env("MAX_TOKENS", str(defaults.max_tokens))),
            request_timeout=float(timeout) if timeout is not None else None,
            mongo_uri=_env("MONGO_URI", defaults.mongo_uri),
            database=_env("DATABASE", defaults.database),
            nodes_collection=_env("NODES_COLLECTION", defaults.nodes_collection),
            edges_collection=_env("EDGES_COLLECTION", defaults.edges_collection),
            max_forward_depth=int(
                _env("MAX_FORWARD_DEPTH", str(defaults.max_forward_depth))
            ),
            log_level=_env("LOG_LEVEL", defaults.log_level).upper(),
            log_format=_env("LOG_FORMAT", defaults.log_format).lower(),
        )
