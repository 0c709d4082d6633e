"""Content store implementations.

ChromaDB is the sole content store.  It keeps text sections and images in
two cosine-distance collections under CHROMADB_PERSIST_DIR.

To swap ChromaDB for another vector database (MongoDB Atlas, Azure AI
Search, Qdrant), create a new class implementing IContentStore and register
it in main.py.
"""

from prepdocs.providers.content_store.chromadb_provider import ChromaDBContentStore

__all__ = ["ChromaDBContentStore"]
