"""
Tool handlers.

Each handler validates its payload, delegates to a store and returns a plain
envelope dict. Errors never escape: they become ``{"success": False, "error": ...}``.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Dict

from ..config import SERVER_VERSION
from ..errors import describe
from ..models import SearchInput, SearchPayload, UploadInput, UploadPayload, parse_payload
from ..services.simple_storage import SimpleStorage
from ..services.solution_store import SolutionStore


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _failure(e: Exception, default: str) -> Dict[str, Any]:
    return {"success": False, "error": describe(e, default)}


# -------------------------
# VECTOR STORE TOOLS
# -------------------------

async def upload_solution(store: SolutionStore, data: Dict[str, Any]) -> Dict[str, Any]:
    try:
        payload = parse_payload(UploadPayload, data)
        bug_id = await store.store_solution(payload)

        return {
            "success": True,
            "message": "Solution uploaded successfully with vector embedding!",
            "bugId": bug_id,
            "problem": {
                "error_type": payload.problem.error_type,
                "agent_summary": payload.problem.agent_summary,
            },
            "environment": payload.environment.model_dump(),
        }

    except Exception as e:
        logging.error(f"[upload] Failed: {e}")
        return _failure(e, "Upload failed")


async def search_solutions(store: SolutionStore, data: Dict[str, Any]) -> Dict[str, Any]:
    try:
        payload = parse_payload(SearchPayload, data)
        results = await store.search_solutions(payload)

        return {
            "success": True,
            "message": f"Found {len(results)} solution(s) using vector similarity",
            "query": {
                "error_message": payload.problem.error_message,
                "agent_summary": payload.problem.agent_summary,
            },
            "environment": payload.environment.model_dump(),
            "results": [r.to_dict() for r in results],
        }

    except Exception as e:
        logging.error(f"[search] Failed: {e}")
        return _failure(e, "Search failed")


async def health(store: SolutionStore) -> Dict[str, Any]:
    try:
        pinecone_health = await store.health_check()
        # the service is up whenever the health check returns; index health is nested
        return {
            "status": "healthy",
            "timestamp": _now(),
            "version": SERVER_VERSION,
            "pinecone": pinecone_health,
        }

    except Exception as e:
        logging.error(f"[health] Failed: {e}")
        return {"status": "unhealthy", "error": describe(e), "timestamp": _now()}


# -------------------------
# FALLBACK STORE TOOLS
# -------------------------

async def upload_entry(storage: SimpleStorage, data: Dict[str, Any]) -> Dict[str, Any]:
    try:
        entry = await storage.store(parse_payload(UploadInput, data))
        return {
            "success": True,
            "message": "Entry uploaded successfully!",
            "entry": entry.model_dump(mode="json"),
        }

    except Exception as e:
        logging.error(f"[upload] Failed: {e}")
        return _failure(e, "Upload failed")


async def search_entries(storage: SimpleStorage, data: Dict[str, Any]) -> Dict[str, Any]:
    try:
        query = parse_payload(SearchInput, data).query
        entries = await storage.search(query)
        return {
            "success": True,
            "message": f"Found {len(entries)} result(s)",
            "query": query,
            "results": [e.model_dump(mode="json") for e in entries],
        }

    except Exception as e:
        logging.error(f"[search] Failed: {e}")
        return _failure(e, "Search failed")


async def simple_health() -> Dict[str, Any]:
    return {
        "status": "healthy",
        "timestamp": _now(),
        "version": SERVER_VERSION,
        "backend": "simple",
    }
