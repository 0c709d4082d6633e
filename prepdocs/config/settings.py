"""Application settings loaded from environment variables via pydantic-settings.

Values are read from (highest priority first) environment variables, then a
``.env`` file in the working directory, then the defaults below.  Field
``openai_api_key`` maps to env var ``OPENAI_API_KEY`` and so on.

An empty string means "not configured": :func:`prepdocs.main.build_services`
skips optional providers whose endpoint or key is empty and fails fast when a
required one is missing.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict

from prepdocs.models.content import SplitterConfig


class Settings(BaseSettings):
    """prepdocs settings.

    Environment variables override defaults. Loaded from .env file when present.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # === Document analysis (Azure AI Document Intelligence) ===
    document_intelligence_endpoint: str = ""
    document_intelligence_key: str = ""
    document_intelligence_model: str = "prebuilt-layout"

    # === Text embeddings (OpenAI or OpenAI-compatible) ===
    openai_api_key: str = ""
    openai_base_url: str = ""
    openai_embedding_model: str = ""  # empty -> text-embedding-3-small

    # === Image embeddings (Azure AI Vision multimodal retrieval) ===
    vision_endpoint: str = ""
    vision_key: str = ""
    include_image_embeddings: bool = False

    # === Content store ===
    chromadb_persist_dir: str = "./data/chromadb"
    chromadb_collection: str = "content"
    chromadb_image_collection: str = "images"

    # === Corpus archive ===
    corpus_archive_enabled: bool = True
    corpus_archive_dir: str = "./data/corpus"

    # === Section splitting ===
    max_section_length: int = 500
    sentence_search_limit: int = 100
    section_overlap: int = 100

    # === Runtime ===
    ingest_concurrency: int = 1

    # === App Config ===
    app_env: str = "development"
    log_level: str = "INFO"

    def get_splitter_config(self) -> SplitterConfig:
        """Return the section splitter configuration built from these settings."""
        return SplitterConfig(
            max_section_length=self.max_section_length,
            sentence_search_limit=self.sentence_search_limit,
            section_overlap=self.section_overlap,
        )

    def has_image_embeddings(self) -> bool:
        """Return ``True`` if image embeddings are enabled and a vision service is configured."""
        return self.include_image_embeddings and bool(self.vision_endpoint and self.vision_key)
