"""
Services module for Agent Stack Overflow.

This module contains the storage layer:
- embedder: OpenAI embedding calls
- pinecone_index: async adapter over one namespace of a Pinecone index
- solution_store: upload / search / lookup / health over embeddings + vector index
- simple_storage: fallback substring search over a key-value namespace
- utils: embedding text, metadata and filter builders
"""

from .embedder import embed, embed_single
from .pinecone_index import PineconeNamespace
from .solution_store import SolutionStore, get_solution_store
from .simple_storage import MemoryNamespace, SimpleStorage, get_simple_storage
from .utils import build_embedding_text, build_query_text, build_metadata, build_environment_filter

__all__ = [
    "embed",
    "embed_single",
    "PineconeNamespace",
    "SolutionStore",
    "get_solution_store",
    "MemoryNamespace",
    "SimpleStorage",
    "get_simple_storage",
    "build_embedding_text",
    "build_query_text",
    "build_metadata",
    "build_environment_filter",
]
