import logging
from typing import Any, Dict, List, Optional

from fastapi.concurrency import run_in_threadpool
from pinecone import Pinecone


def _as_dict(metadata: Any) -> Dict[str, Any]:
    return dict(metadata) if metadata else {}


class PineconeNamespace:
    """
    Async view of one namespace of a hosted Pinecone index.

    The Pinecone client is built on first use, so constructing this object
    never touches the network and a missing key surfaces as a call failure.
    Results are reshaped into plain dicts so the store does not depend on
    SDK response types.
    """

    def __init__(self, api_key: str, index_name: str, namespace: str):
        self.api_key = api_key
        self.index_name = index_name
        self.namespace = namespace
        self._index = None

    def _get_index(self):
        if self._index is None:
            client = Pinecone(api_key=self.api_key)
            self._index = client.Index(self.index_name)
            logging.info(f"Connected to Pinecone index {self.index_name} (namespace {self.namespace})")
        return self._index

    async def upsert(self, vectors: List[Dict[str, Any]]) -> Any:
        index = await run_in_threadpool(self._get_index)
        return await run_in_threadpool(index.upsert, vectors=vectors, namespace=self.namespace)

    async def query(
        self,
        vector: List[float],
        top_k: int,
        include_metadata: bool = True,
        filter: Optional[Dict[str, Any]] = None,
    ) -> List[Dict[str, Any]]:
        index = await run_in_threadpool(self._get_index)
        kwargs: Dict[str, Any] = {
            "vector": vector,
            "top_k": top_k,
            "include_metadata": include_metadata,
            "namespace": self.namespace,
        }
        if filter:
            kwargs["filter"] = filter

        resp = await run_in_threadpool(index.query, **kwargs)
        return [
            {"id": match.id, "score": match.score, "metadata": _as_dict(match.metadata)}
            for match in (resp.matches or [])
        ]

    async def fetch(self, ids: List[str]) -> Dict[str, Dict[str, Any]]:
        index = await run_in_threadpool(self._get_index)
        resp = await run_in_threadpool(index.fetch, ids=ids, namespace=self.namespace)
        records = resp.vectors or {}
        return {
            record_id: {"id": record.id, "metadata": _as_dict(record.metadata)}
            for record_id, record in records.items()
        }
