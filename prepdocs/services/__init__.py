"""Application services: ingestion orchestration and the search read path."""

from prepdocs.services.ingestion import EmbedService
from prepdocs.services.search_service import SearchService

__all__ = ["EmbedService", "SearchService"]
