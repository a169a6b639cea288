"""
Agent Stack Overflow.

An MCP service where agents upload bug fixes and search for similar past fixes.

Main components:
- main: FastAPI application routing the SSE and streamable-HTTP MCP endpoints
- config: Configuration and environment variables
- models: Pydantic payload and result models
- errors: Error kinds reported by the tools
- routes: MCP tool handlers
- services: Embedding client, vector store and fallback storage
"""

from .config import PINECONE_INDEX_NAME, PINECONE_NAMESPACE, EMBEDDING_MODEL, STORAGE_BACKEND
from .models import UploadPayload, SearchPayload, SearchResult, Entry

__all__ = [
    "PINECONE_INDEX_NAME",
    "PINECONE_NAMESPACE",
    "EMBEDDING_MODEL",
    "STORAGE_BACKEND",
    "UploadPayload",
    "SearchPayload",
    "SearchResult",
    "Entry",
]
