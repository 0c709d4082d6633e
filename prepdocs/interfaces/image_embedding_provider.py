"""Abstract base class for image vectorization providers.

Image embeddings are an optional capability: a deployment without a vision
service simply does not construct one, and
:meth:`prepdocs.services.ingestion.EmbedService.embed_image_blob` refuses to
run without it.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


# Concrete implementation: AzureVisionImageEmbeddingProvider
# Located in: prepdocs/providers/image_embedding/
class IImageEmbeddingProvider(ABC):
    """Contract for services that turn a publicly reachable image into a vector."""

    @abstractmethod
    async def vectorize_image(self, image_url: str) -> list[float]:
        """Return the embedding vector of the image at *image_url*.

        Raises
        ------
        prepdocs.utils.errors.EmbeddingError
            If the vectorization call fails.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier, e.g. ``"azure-vision"``."""

    @abstractmethod
    def is_available(self) -> bool:
        """Return ``True`` if an endpoint and key are configured."""
