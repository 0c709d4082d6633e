"""Image embedding provider implementations (optional capability)."""

from prepdocs.providers.image_embedding.azure_vision_image_embedding_provider import (
    AzureVisionImageEmbeddingProvider,
)

__all__ = ["AzureVisionImageEmbeddingProvider"]
