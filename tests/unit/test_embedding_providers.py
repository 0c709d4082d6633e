"""Unit tests for the OpenAI embedding provider adapter."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import openai
import pytest

from prepdocs.config.settings import Settings
from prepdocs.providers.embedding.openai_embedding_provider import OpenAIEmbeddingProvider
from prepdocs.utils.errors import EmbeddingError

_CLIENT_PATH = "prepdocs.providers.embedding.openai_embedding_provider.openai.AsyncOpenAI"


def _settings(**overrides) -> Settings:
    defaults = {
        "openai_api_key": "sk-test",
        "openai_base_url": "",
        "openai_embedding_model": "",
    }
    defaults.update(overrides)
    return Settings(_env_file=None, **defaults)


def _response(vectors: list[list[float]]) -> MagicMock:
    response = MagicMock()
    response.data = [MagicMock(embedding=v) for v in vectors]
    response.usage = MagicMock(total_tokens=10 * len(vectors))
    return response


class TestOpenAIEmbeddingProvider:
    @pytest.fixture()
    def settings(self) -> Settings:
        return _settings()

    def test_get_provider_name(self, settings: Settings) -> None:
        assert OpenAIEmbeddingProvider(settings).get_provider_name() == "openai_embedding"

    def test_provider_name_with_base_url(self) -> None:
        provider = OpenAIEmbeddingProvider(_settings(openai_base_url="http://localhost:8080/v1"))
        assert provider.get_provider_name() == "openai-compatible_embedding"

    def test_is_available_with_key(self, settings: Settings) -> None:
        assert OpenAIEmbeddingProvider(settings).is_available() is True

    def test_is_available_without_key(self) -> None:
        with patch(_CLIENT_PATH):
            provider = OpenAIEmbeddingProvider(_settings(openai_api_key=""))
        assert provider.is_available() is False

    def test_default_dimension(self, settings: Settings) -> None:
        assert OpenAIEmbeddingProvider(settings).get_dimension() == 1536

    def test_large_model_dimension(self) -> None:
        provider = OpenAIEmbeddingProvider(_settings(openai_embedding_model="text-embedding-3-large"))
        assert provider.get_dimension() == 3072

    @pytest.mark.asyncio
    async def test_embed_success(self, settings: Settings) -> None:
        mock_client = AsyncMock()
        mock_client.embeddings.create = AsyncMock(return_value=_response([[0.1] * 4, [0.2] * 4]))

        with patch(_CLIENT_PATH, return_value=mock_client):
            provider = OpenAIEmbeddingProvider(settings)
            result = await provider.embed(["hello", "world"])

        assert result == [[0.1] * 4, [0.2] * 4]
        mock_client.embeddings.create.assert_awaited_once_with(
            input=["hello", "world"],
            model="text-embedding-3-small",
        )

    @pytest.mark.asyncio
    async def test_embed_single(self, settings: Settings) -> None:
        mock_client = AsyncMock()
        mock_client.embeddings.create = AsyncMock(return_value=_response([[0.5] * 4]))

        with patch(_CLIENT_PATH, return_value=mock_client):
            provider = OpenAIEmbeddingProvider(settings)
            result = await provider.embed_single("hello")

        assert result == [0.5] * 4

    @pytest.mark.asyncio
    async def test_embed_empty_makes_no_call(self, settings: Settings) -> None:
        mock_client = AsyncMock()

        with patch(_CLIENT_PATH, return_value=mock_client):
            provider = OpenAIEmbeddingProvider(settings)
            assert await provider.embed([]) == []

        mock_client.embeddings.create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_embed_batches_large_input(self, settings: Settings) -> None:
        async def _create(input, model):  # noqa: A002 -- mirrors the SDK keyword
            return _response([[0.3] for _ in input])

        mock_client = AsyncMock()
        mock_client.embeddings.create = AsyncMock(side_effect=_create)

        with patch(_CLIENT_PATH, return_value=mock_client):
            provider = OpenAIEmbeddingProvider(settings)
            result = await provider.embed(["t"] * 2050)

        assert len(result) == 2050
        assert mock_client.embeddings.create.await_count == 2

    @pytest.mark.asyncio
    async def test_embed_error(self, settings: Settings) -> None:
        mock_client = AsyncMock()
        mock_client.embeddings.create = AsyncMock(
            side_effect=openai.APIError(
                message="Rate limit",
                request=MagicMock(),
                body=None,
            )
        )

        with patch(_CLIENT_PATH, return_value=mock_client):
            provider = OpenAIEmbeddingProvider(settings)
            with pytest.raises(EmbeddingError) as exc_info:
                await provider.embed(["test"])

        assert exc_info.value.provider_name == "openai_embedding"
