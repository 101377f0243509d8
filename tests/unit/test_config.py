"""
Tests for configuration, the LiteLLM client and logging setup.
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock

import litellm
import pytest
import structlog

from teamgraph.agents.base import LiteLLMClient
from teamgraph.config import DEFAULT_MODEL, PipelineConfig
from teamgraph.errors import ModelServiceError
from teamgraph.logging_config import configure_logging


def completion(content):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


class TestPipelineConfig:
    """Tests for PipelineConfig."""

    def test_defaults(self):
        """Test default values."""
        config = PipelineConfig()
        assert config.model == DEFAULT_MODEL
        assert config.max_forward_depth == 2
        assert config.nodes_collection == "knowledgeNodes"
        assert config.edges_collection == "knowledgeEdges"

    def test_from_env(self, monkeypatch, tmp_path):
        """Test TEAMGRAPH_* variables override defaults."""
        monkeypatch.setenv("TEAMGRAPH_MODEL", "gpt-4o")
        monkeypatch.setenv("TEAMGRAPH_MAX_FORWARD_DEPTH", "3")
        monkeypatch.setenv("TEAMGRAPH_REQUEST_TIMEOUT", "12.5")
        monkeypatch.setenv("TEAMGRAPH_LOG_LEVEL", "debug")
        monkeypatch.setenv("TEAMGRAPH_DATABASE", "")

        config = PipelineConfig.from_env(dotenv_path=str(tmp_path / "missing.env"))

        assert config.model == "gpt-4o"
        assert config.max_forward_depth == 3
        assert config.request_timeout == 12.5
        assert config.log_level == "DEBUG"
        assert config.database == "teamgraph"

    def test_from_dotenv_file(self, monkeypatch, tmp_path):
        """Test values are read from a .env file."""
        # teardown restores the pre-test value
        monkeypatch.setenv("TEAMGRAPH_MONGO_URI", "unset")
        monkeypatch.delenv("TEAMGRAPH_MONGO_URI")
        env_file = tmp_path / ".env"
        env_file.write_text("TEAMGRAPH_MONGO_URI=mongodb://db:27017\n")

        config = PipelineConfig.from_env(dotenv_path=str(env_file))

        assert config.mongo_uri == "mongodb://db:27017"


class TestLiteLLMClient:
    """Tests for LiteLLMClient."""

    @pytest.mark.asyncio
    async def test_complete(self, monkeypatch):
        """Test messages and parameters passed to litellm."""
        mock = AsyncMock(return_value=completion('{"nodes": []}'))
        monkeypatch.setattr(litellm, "acompletion", mock)
        client = LiteLLMClient(model="gpt-4o", timeout=5.0)

        text = await client.complete("system", "user")

        assert text == '{"nodes": []}'
        kwargs = mock.await_args.kwargs
        assert kwargs["model"] == "gpt-4o"
        assert kwargs["messages"] == [
            {"role": "system", "content": "system"},
            {"role": "user", "content": "user"},
        ]
        assert kwargs["temperature"] == 0.0
        assert kwargs["timeout"] == 5.0

    @pytest.mark.asyncio
    async def test_service_error_wrapped(self, monkeypatch):
        """Test provider exceptions become ModelServiceError."""
        monkeypatch.setattr(litellm, "acompletion", AsyncMock(side_effect=RuntimeError("rate limited")))

        with pytest.raises(ModelServiceError, match="rate limited"):
            await LiteLLMClient().complete("system", "user")

    @pytest.mark.asyncio
    async def test_empty_completion(self, monkeypatch):
        """Test a completion without content is a service error."""
        monkeypatch.setattr(litellm, "acompletion", AsyncMock(return_value=completion(None)))

        with pytest.raises(ModelServiceError):
            await LiteLLMClient().complete("system", "user")


class TestLogging:
    """Tests for configure_logging."""

    def test_configure_json(self, capsys):
        """Test JSON rendering at the requested level."""
        configure_logging("WARNING", "json")
        try:
            logger = structlog.get_logger()
            logger.info("hidden")
            logger.warning("shown", extractor="chat")
            out = capsys.readouterr().out
        finally:
            structlog.reset_defaults()

        assert "hidden" not in out
        assert '"event": "shown"' in out
        assert '"extractor": "chat"' in out
