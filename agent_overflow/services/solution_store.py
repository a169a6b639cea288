import uuid
import logging
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Dict, List, Optional, Protocol

from ..config import (
    OPENAI_API_KEY,
    PINECONE_API_KEY,
    PINECONE_INDEX_NAME,
    PINECONE_NAMESPACE,
    MAX_SEARCH_RESULTS,
    SEARCH_FILTER_MODE,
    SEARCH_TOP_K,
)
from ..errors import StorageReadError, StorageWriteError, describe
from ..models import LookupOutcome, SearchPayload, SearchResult, UploadPayload
from .embedder import embed_single
from .pinecone_index import PineconeNamespace
from .utils import (
    build_embedding_text,
    build_environment_filter,
    build_metadata,
    build_query_text,
)

FILTER_MODES = ("embedding-only", "strict")
HEALTH_CHECK_TEXT = "test connectivity"

Embedder = Callable[[str, str], Awaitable[List[float]]]


class VectorIndex(Protocol):
    async def upsert(self, vectors: List[Dict[str, Any]]) -> Any: ...

    async def query(
        self,
        vector: List[float],
        top_k: int,
        include_metadata: bool = True,
        filter: Optional[Dict[str, Any]] = None,
    ) -> List[Dict[str, Any]]: ...

    async def fetch(self, ids: List[str]) -> Dict[str, Dict[str, Any]]: ...


# -------------------------
# SOLUTION STORE
# -------------------------

class SolutionStore:
    def __init__(
        self,
        index: VectorIndex,
        openai_api_key: str,
        index_name: str = PINECONE_INDEX_NAME,
        namespace_name: str = PINECONE_NAMESPACE,
        filter_mode: str = SEARCH_FILTER_MODE,
        top_k: int = SEARCH_TOP_K,
        embedder: Embedder = embed_single,
    ):
        if filter_mode not in FILTER_MODES:
            raise ValueError(f"Unknown search filter mode {filter_mode!r}; expected one of {FILTER_MODES}")

        self.index = index
        self.openai_api_key = openai_api_key
        self.index_name = index_name
        self.namespace_name = namespace_name
        self.filter_mode = filter_mode
        self.top_k = max(1, min(top_k, MAX_SEARCH_RESULTS))
        self.embedder = embedder

    # -------------------------
    # STORE
    # -------------------------
    async def store_solution(self, payload: UploadPayload) -> str:
        try:
            bug_id = str(uuid.uuid4())
            logging.debug(f"Starting solution storage for ID: {bug_id}")

            embedding_text = build_embedding_text(payload)
            logging.debug(f"Embedding text length: {len(embedding_text)} characters")

            embedding = await self.embedder(embedding_text, self.openai_api_key)
            logging.debug(f"Generated embedding with {len(embedding)} dimensions")

            created_at = datetime.now(timezone.utc).isoformat()
            vector = {
                "id": bug_id,
                "values": embedding,
                "metadata": build_metadata(payload, created_at),
            }

            logging.debug(f"Upserting vector to index {self.index_name}, namespace {self.namespace_name}")
            await self.index.upsert([vector])

            logging.info(f"✅ Stored solution with ID {bug_id}")
            return bug_id

        except Exception as e:
            logging.error(f"[SolutionStore] Error storing solution: {e}", exc_info=True)
            raise StorageWriteError(f"Failed to store solution: {describe(e)}") from e

    # -------------------------
    # SEARCH
    # -------------------------
    async def search_solutions(self, payload: SearchPayload) -> List[SearchResult]:
        try:
            search_text = build_query_text(payload)
            logging.debug(f'Searching with query: "{search_text}"')

            query_embedding = await self.embedder(search_text, self.openai_api_key)
            logging.debug(f"Query embedding has {len(query_embedding)} dimensions")

            where = None
            if self.filter_mode == "strict":
                where = build_environment_filter(payload.environment)
            logging.debug(f"Performing vector search (filter mode: {self.filter_mode})")

            matches = await self.index.query(
                vector=query_embedding,
                top_k=self.top_k,
                include_metadata=True,
                filter=where,
            )

            results = [
                SearchResult.from_metadata(match["id"], match.get("score"), match.get("metadata"))
                for match in matches[: self.top_k]
            ]

            logging.info(f'Found {len(results)} solutions for query: "{search_text}"')
            return results

        except Exception as e:
            logging.error(f"[SolutionStore] Error searching solutions: {e}", exc_info=True)
            raise StorageReadError(f"Failed to search solutions: {describe(e)}") from e

    # -------------------------
    # GET BY ID
    # -------------------------
    async def lookup_solution(self, bug_id: str) -> LookupOutcome:
        try:
            records = await self.index.fetch([bug_id])
        except Exception as e:
            logging.error(f"[SolutionStore] Error fetching solution {bug_id}: {e}", exc_info=True)
            return LookupOutcome(status="failed", error=describe(e))

        record = records.get(bug_id)
        if not record:
            return LookupOutcome(status="not_found")

        # direct fetch has no similarity score
        result = SearchResult.from_metadata(record.get("id") or bug_id, 1.0, record.get("metadata"))
        return LookupOutcome(status="found", result=result)

    async def get_solution(self, bug_id: str) -> Optional[SearchResult]:
        """Point lookup. Returns None both when the id is unknown and when the fetch fails."""
        outcome = await self.lookup_solution(bug_id)
        return outcome.result

    # -------------------------
    # HEALTH
    # -------------------------
    async def health_check(self) -> Dict[str, str]:
        """Live check: one throwaway embedding and one top-1 query. Never raises."""
        status = "healthy"
        try:
            vector = await self.embedder(HEALTH_CHECK_TEXT, self.openai_api_key)
            await self.index.query(vector=vector, top_k=1, include_metadata=False)
        except Exception as e:
            logging.error(f"[SolutionStore] Health check failed: {e}")
            status = "unhealthy"

        return {
            "status": status,
            "indexName": self.index_name,
            "namespace": self.namespace_name,
        }


# -------------------------
# SAFE LAZY INITIALIZATION
# -------------------------

_solution_store_instance: Optional[SolutionStore] = None


def get_solution_store() -> SolutionStore:
    """Process-wide store wired to the configured Pinecone namespace."""
    global _solution_store_instance
    if _solution_store_instance is None:
        index = PineconeNamespace(PINECONE_API_KEY, PINECONE_INDEX_NAME, PINECONE_NAMESPACE)
        _solution_store_instance = SolutionStore(index, OPENAI_API_KEY)
    return _solution_store_instance
