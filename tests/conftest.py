"""
Shared fixtures: a stub completion client and an in-memory store.
"""

from typing import Union

import pytest

from teamgraph.store.memory import InMemoryGraphStore


class StubCompletionClient:
    """CompletionClient returning canned responses and recording prompts."""

    def __init__(self, response: Union[str, Exception] = '{"nodes": [], "edges": []}') -> None:
        self.response = response
        self.calls: list[tuple[str, str]] = []

    async def complete(self, system_prompt: str, user_prompt: str) -> str:
        self.calls.append((system_prompt, user_prompt))
        if isinstance(self.response, Exception):
            raise self.response
        return self.response


@pytest.fixture
def store() -> InMemoryGraphStore:
    return InMemoryGraphStore()


@pytest.fixture
def stub_client() -> StubCompletionClient:
    return StubCompletionClient()
