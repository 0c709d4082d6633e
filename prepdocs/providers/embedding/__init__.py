"""Text embedding provider implementations.

Embeddings convert section text into numeric vectors; the same provider
must be used for ingestion and for query embedding so both share one
vector space.
"""

from prepdocs.providers.embedding.openai_embedding_provider import OpenAIEmbeddingProvider

__all__ = ["OpenAIEmbeddingProvider"]
