"""
Base extractor class for LLM-based extraction.

Supports multiple LLM providers through LiteLLM. The completion client is
injected so extractors can run against a stub in tests.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Optional, Protocol

import litellm
import structlog

from ..config import DEFAULT_MODEL
from ..errors import ModelServiceError
from ..extraction.structured_extractor import coerce_batch, load_graph_json
from ..schema.graph import GraphBatch
from ..schema.state import ExtractionState, Message

logger = structlog.get_logger()


class CompletionClient(Protocol):
    """Language-model completion service."""

    async def complete(self, system_prompt: str, user_prompt: str) -> str: ...


class LiteLLMClient:
    """CompletionClient backed by litellm.acompletion."""

    def __init__(
        self,
        model: str = DEFAULT_MODEL,
        temperature: float = 0.0,
        max_tokens: int = 4096,
        timeout: Optional[float] = None,
        **kwargs: Any,
    ) -> None:
        """
        Initialize client.

        Args:
            model: LiteLLM model identifier (e.g., "gemini/gemini-2.5-flash")
            temperature: Sampling temperature
            max_tokens: Max tokens in response
            timeout: Per-request timeout in seconds
            **kwargs: Additional arguments for litellm.acompletion
        """
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.timeout = timeout
        self.extra_params = kwargs

    async def complete(self, system_prompt: str, user_prompt: str) -> str:
        params = dict(self.extra_params)
        if self.timeout is not None:
            params["timeout"] = self.timeout
        try:
            response = await litellm.acompletion(
                model=self.model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                temperature=self.temperature,
                max_tokens=self.max_tokens,
                **params,
            )
        except Exception as e:
            raise ModelServiceError(f"{self.model}: {e}") from e

        content = response.choices[0].message.content
        if content is None:
            raise ModelServiceError(f"{self.model}: empty completion")
        return content


@dataclass
class AgentResult:
    """Result from an extractor execution."""

    success: bool
    output: GraphBatch = field(default_factory=GraphBatch)
    errors: list[str] = field(default_factory=list)


class MessageExtractor(ABC):
    """
    Base class for extractors.

    Turns the latest message of a conversation into a candidate batch.
    """

    name = "base"

    def accepts(self, message: Message) -> bool:
        """Whether this extractor handles `message` at all."""
        return True

    @abstractmethod
    async def execute(self, message: Message) -> AgentResult:
        """Run the extractor on one message."""

    async def extract(self, state: ExtractionState) -> AgentResult:
        """Extract from the latest message in `state`."""
        message = state.last_message
        if message is None or not self.accepts(message):
            return AgentResult(success=True)
        return await self.execute(message)


class BaseExtractor(MessageExtractor):
    """
    Base class for model-backed extractors.

    Extraction fails open: a model-side failure or unparseable output
    yields an unsuccessful result with an empty batch.
    """

    def __init__(self, client: CompletionClient) -> None:
        self.client = client

    @abstractmethod
    def get_system_prompt(self, message: Message) -> str:
        """Return the system prompt for this extractor."""

    @abstractmethod
    def format_input(self, message: Message) -> str:
        """Format the message into a user prompt."""

    def postprocess(self, batch: GraphBatch, message: Message) -> GraphBatch:
        """Hook to enforce extractor-specific rules on the parsed batch."""
        return batch

    async def execute(self, message: Message) -> AgentResult:
        """
        Run the extractor on one message.

        Args:
            message: Message to extract from

        Returns:
            AgentResult with the parsed batch (empty on failure)
        """
        try:
            response_text = await self.client.complete(
                self.get_system_prompt(message),
                self.format_input(message),
            )
        except Exception as e:
            logger.warning("Extraction failed", extractor=self.name, error=str(e))
            return AgentResult(success=False, errors=[str(e)])

        data = load_graph_json(response_text)
        if data is None:
            return AgentResult(success=False, errors=["model output is not a JSON object"])

        batch = self.postprocess(coerce_batch(data), message)
        return AgentResult(success=True, output=batch)
