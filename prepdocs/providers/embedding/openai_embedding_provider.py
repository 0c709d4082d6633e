"""Text embeddings through the OpenAI embeddings API.

Implements :class:`IEmbeddingProvider` on top of ``openai.AsyncOpenAI``.
Setting ``openai_base_url`` points the same client at any gateway that
speaks the OpenAI embeddings protocol.
"""

from __future__ import annotations

from typing import Iterator

import openai
import structlog

from prepdocs.config.settings import Settings
from prepdocs.interfaces.embedding_provider import IEmbeddingProvider
from prepdocs.utils.errors import EmbeddingError

logger = structlog.get_logger(logger_name=__name__)

# Inputs per embeddings.create call accepted by the API.
_MAX_INPUTS_PER_CALL = 2048
_DEFAULT_MODEL = "text-embedding-3-small"
_FALLBACK_DIMENSION = 1536

_MODEL_DIMENSIONS: dict[str, int] = {
    "text-embedding-3-small": 1536,
    "text-embedding-3-large": 3072,
    "text-embedding-ada-002": 1536,
}


def _chunked(texts: list[str], size: int) -> Iterator[list[str]]:
    for start in range(0, len(texts), size):
        yield texts[start : start + size]


class OpenAIEmbeddingProvider(IEmbeddingProvider):
    """Embedding provider for OpenAI and OpenAI-compatible endpoints.

    Parameters
    ----------
    settings:
        Reads ``openai_api_key``, ``openai_base_url`` and
        ``openai_embedding_model`` (``text-embedding-3-small`` when empty).
    """

    def __init__(self, settings: Settings) -> None:
        self._api_key = settings.openai_api_key
        self._model = settings.openai_embedding_model or _DEFAULT_MODEL
        self._dimension = _MODEL_DIMENSIONS.get(self._model, _FALLBACK_DIMENSION)

        if settings.openai_base_url:
            self._client = openai.AsyncOpenAI(
                api_key=self._api_key,
                base_url=settings.openai_base_url,
            )
            self._provider_label = "openai-compatible_embedding"
        else:
            self._client = openai.AsyncOpenAI(api_key=self._api_key)
            self._provider_label = "openai_embedding"

    async def embed(self, texts: list[str]) -> list[list[float]]:
        """Embed *texts*, issuing one API call per 2048 inputs."""
        vectors: list[list[float]] = []
        for batch in _chunked(texts, _MAX_INPUTS_PER_CALL):
            vectors.extend(await self._embed_batch(batch))
        return vectors

    async def embed_single(self, text: str) -> list[float]:
        vectors = await self._embed_batch([text])
        return vectors[0]

    def get_dimension(self) -> int:
        return self._dimension

    def get_provider_name(self) -> str:
        return self._provider_label

    def is_available(self) -> bool:
        return bool(self._api_key)

    async def _embed_batch(self, batch: list[str]) -> list[list[float]]:
        try:
            response = await self._client.embeddings.create(input=batch, model=self._model)
        except openai.APIError as exc:
            logger.warning(
                "openai_embedding_failed",
                model=self._model,
                provider=self._provider_label,
                batch_size=len(batch),
                error=str(exc),
            )
            raise EmbeddingError(
                message=f"{self._provider_label} API error: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        logger.debug(
            "openai_embedding_batch",
            model=self._model,
            batch_size=len(batch),
            tokens=response.usage.total_tokens if response.usage else None,
        )
        return [item.embedding for item in response.data]
