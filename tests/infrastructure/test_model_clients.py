"""
Model client tests

Covers create_client() routing and the request/response mapping of each
provider client. SDK clients are replaced with mocks; nothing hits the network.
"""

from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import anthropic
import httpx
import openai
import pytest
from google.genai import errors as genai_errors

from sweep_gauge.domain.exceptions import ProviderError
from sweep_gauge.infrastructure.model_clients.claude import ClaudeClient
from sweep_gauge.infrastructure.model_clients.factory import create_client
from sweep_gauge.infrastructure.model_clients.groq import GROQ_BASE_URL, GroqClient
from sweep_gauge.infrastructure.model_clients.lmstudio import LMStudioClient
from sweep_gauge.infrastructure.model_clients.vertex_ai import VertexAIClient
from sweep_gauge.sweep_config import ExperimentConfig, GroqConfig, SweepConfig

REQUEST = httpx.Request("POST", "https://provider.test/v1/chat")


def _chat_completion(text="Qubits hold superpositions.", total_tokens=33):
    return SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content=text))],
        usage=SimpleNamespace(total_tokens=total_tokens),
    )


@pytest.fixture
def groq_config():
    return SweepConfig(
        experiment=ExperimentConfig(max_tokens=256),
        groq=GroqConfig(api_key="gsk_test", request_timeout_ms=5000),
    )


class TestCreateClient:
    """create_client() routing"""

    def test_default_is_groq(self, groq_config):
        client = create_client("mixtral-8x7b-32768", groq_config)
        assert isinstance(client, GroqClient)
        assert client.max_tokens == 256

    def test_lmstudio_prefix(self, groq_config):
        client = create_client("lmstudio/qwen2.5-7b", groq_config)
        assert isinstance(client, LMStudioClient)

    @patch.dict("os.environ", {"ANTHROPIC_API_KEY": "test-key"})
    def test_claude(self, groq_config):
        client = create_client("claude-haiku-4-5-20251001", groq_config)
        assert isinstance(client, ClaudeClient)

    @patch.dict("os.environ", {"GCP_PROJECT_ID": "test-project"})
    def test_gemini(self, groq_config):
        with patch("sweep_gauge.infrastructure.model_clients.vertex_ai.genai.Client"):
            client = create_client("gemini-2.5-flash", groq_config)
        assert isinstance(client, VertexAIClient)

    def test_groq_without_key(self, monkeypatch):
        monkeypatch.delenv("GROQ_API_KEY", raising=False)
        with pytest.raises(ValueError, match="GROQ_API_KEY is not set"):
            create_client("mixtral-8x7b-32768", SweepConfig())


class TestGroqClient:

    def test_key_from_env(self, monkeypatch):
        monkeypatch.setenv("GROQ_API_KEY", "gsk_env")
        monkeypatch.delenv("GROQ_BASE_URL", raising=False)
        client = GroqClient("mixtral-8x7b-32768")
        assert client.base_url == GROQ_BASE_URL

    def test_generate_passes_sampling_parameters(self):
        client = GroqClient("mixtral-8x7b-32768", api_key="gsk_test")
        client.client = MagicMock()
        client.client.chat.completions.create.return_value = _chat_completion()

        result = client.generate("Explain qubits", temperature=0.3, top_p=0.9)

        kwargs = client.client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "mixtral-8x7b-32768"
        assert kwargs["temperature"] == 0.3
        assert kwargs["top_p"] == 0.9
        assert kwargs["max_tokens"] == 1024
        assert kwargs["messages"] == [{"role": "user", "content": "Explain qubits"}]

        assert result.text == "Qubits hold superpositions."
        assert result.tokens_used == 33
        assert result.model_name == "mixtral-8x7b-32768"
        assert result.latency_ms >= 0

    def test_model_and_token_overrides(self):
        client = GroqClient("mixtral-8x7b-32768", api_key="gsk_test")
        client.client = MagicMock()
        client.client.chat.completions.create.return_value = _chat_completion()

        result = client.generate("Hi", temperature=1.0, top_p=1.0, model="llama3-70b-8192", max_tokens=10)

        kwargs = client.client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "llama3-70b-8192"
        assert kwargs["max_tokens"] == 10
        assert result.model_name == "llama3-70b-8192"

    def test_empty_content_and_missing_usage(self):
        client = GroqClient("mixtral-8x7b-32768", api_key="gsk_test")
        client.client = MagicMock()
        client.client.chat.completions.create.return_value = SimpleNamespace(
            choices=[SimpleNamespace(message=SimpleNamespace(content=None))],
            usage=None,
        )

        result = client.generate("Hi", temperature=0.5, top_p=0.5)
        assert result.text == ""
        assert result.tokens_used == 0

    def test_api_error_becomes_provider_error(self):
        client = GroqClient("mixtral-8x7b-32768", api_key="gsk_test")
        client.client = MagicMock()
        client.client.chat.completions.create.side_effect = openai.APIConnectionError(request=REQUEST)

        with pytest.raises(ProviderError, match="groq request failed") as exc_info:
            client.generate("Hi", temperature=0.5, top_p=0.5)
        assert exc_info.value.model_name == "mixtral-8x7b-32768"
        assert isinstance(exc_info.value.__cause__, openai.APIError)


class TestLMStudioClient:

    def test_prefix_stripped_for_api(self):
        client = LMStudioClient("lmstudio/qwen2.5-7b")
        client.client = MagicMock()
        client.client.chat.completions.create.return_value = _chat_completion()

        result = client.generate("Hi", temperature=0.7, top_p=0.9)

        assert client.client.chat.completions.create.call_args.kwargs["model"] == "qwen2.5-7b"
        assert result.model_name == "lmstudio/qwen2.5-7b"

    def test_base_url_from_env(self, monkeypatch):
        monkeypatch.setenv("LMSTUDIO_BASE_URL", "http://gpu-box:1234/v1")
        assert LMStudioClient("lmstudio/qwen2.5-7b").base_url == "http://gpu-box:1234/v1"


class TestClaudeClient:

    def test_missing_key(self, monkeypatch):
        monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
        with pytest.raises(ValueError, match="ANTHROPIC_API_KEY is not set"):
            ClaudeClient("claude-haiku-4-5-20251001")

    def test_generate(self):
        client = ClaudeClient("claude-haiku-4-5-20251001", api_key="test-key")
        client.client = MagicMock()
        client.client.messages.create.return_value = SimpleNamespace(
            content=[
                SimpleNamespace(type="text", text="Qubits "),
                SimpleNamespace(type="text", text="entangle."),
            ],
            usage=SimpleNamespace(input_tokens=12, output_tokens=8),
        )

        result = client.generate("Explain qubits", temperature=0.2, top_p=0.8)

        kwargs = client.client.messages.create.call_args.kwargs
        assert kwargs["temperature"] == 0.2
        assert kwargs["top_p"] == 0.8
        assert result.text == "Qubits entangle."
        assert result.tokens_used == 20

    def test_api_error_becomes_provider_error(self):
        client = ClaudeClient("claude-haiku-4-5-20251001", api_key="test-key")
        client.client = MagicMock()
        client.client.messages.create.side_effect = anthropic.APIConnectionError(request=REQUEST)

        with pytest.raises(ProviderError, match="Claude request failed"):
            client.generate("Hi", temperature=0.5, top_p=0.5)


class TestVertexAIClient:

    @pytest.fixture
    def client(self):
        with patch("sweep_gauge.infrastructure.model_clients.vertex_ai.genai.Client") as mock_cls:
            client = VertexAIClient("gemini-2.5-flash", project_id="test-project")
        client.client = mock_cls.return_value
        return client

    def test_missing_project(self, monkeypatch):
        monkeypatch.delenv("GCP_PROJECT_ID", raising=False)
        with pytest.raises(ValueError, match="GCP_PROJECT_ID is not set"):
            VertexAIClient("gemini-2.5-flash")

    def test_generate(self, client):
        client.client.models.generate_content.return_value = SimpleNamespace(
            text="Qubits.",
            usage_metadata=SimpleNamespace(total_token_count=21),
        )

        result = client.generate("Explain qubits", temperature=0.4, top_p=0.95, max_tokens=64)

        config = client.client.models.generate_content.call_args.kwargs["config"]
        assert config.temperature == 0.4
        assert config.top_p == 0.95
        assert config.max_output_tokens == 64
        assert result.text == "Qubits."
        assert result.tokens_used == 21

    def test_api_error_becomes_provider_error(self, client):
        client.client.models.generate_content.side_effect = genai_errors.APIError(
            503, {"error": {"message": "unavailable", "status": "UNAVAILABLE"}}
        )
        with pytest.raises(ProviderError, match="Vertex AI request failed"):
            client.generate("Hi", temperature=0.5, top_p=0.5)
