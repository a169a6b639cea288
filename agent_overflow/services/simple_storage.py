"""
Fallback storage without embeddings or a vector index.

Entries live in a prefix-scannable key-value namespace and search is a
case-insensitive substring match, newest first.
"""
import uuid
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Protocol

from ..models import Entry, UploadInput

ENTRY_PREFIX = "entry:"


class KeyValueNamespace(Protocol):
    async def put(self, key: str, value: Dict[str, Any]) -> None: ...

    async def list(self, prefix: str) -> Dict[str, Dict[str, Any]]: ...


class MemoryNamespace:
    """In-process key-value namespace; contents are lost on restart."""

    def __init__(self):
        self._items: Dict[str, Dict[str, Any]] = {}

    async def put(self, key: str, value: Dict[str, Any]) -> None:
        self._items[key] = dict(value)

    async def list(self, prefix: str) -> Dict[str, Dict[str, Any]]:
        return {
            key: dict(value)
            for key, value in sorted(self._items.items())
            if key.startswith(prefix)
        }


class SimpleStorage:
    def __init__(self, namespace: KeyValueNamespace):
        self.namespace = namespace

    async def store(self, data: UploadInput) -> Entry:
        entry = Entry(
            id=str(uuid.uuid4()),
            title=data.title,
            description=data.description,
            code=data.code,
            tags=list(data.tags),
            createdAt=datetime.now(timezone.utc),
        )

        await self.namespace.put(f"{ENTRY_PREFIX}{entry.id}", entry.model_dump(mode="json"))
        logging.info(f"✅ Entry stored with ID {entry.id}")
        return entry

    async def search(self, query: str) -> List[Entry]:
        needle = query.lower()
        matches: List[Entry] = []

        items = await self.namespace.list(ENTRY_PREFIX)
        for raw in items.values():
            # createdAt comes back as an ISO string
            entry = Entry.model_validate(raw)
            haystack = " ".join([entry.title, entry.description, entry.code, " ".join(entry.tags)]).lower()
            if needle in haystack:
                matches.append(entry)

        matches.sort(key=lambda e: e.createdAt, reverse=True)
        logging.debug(f'Simple search for "{query}" matched {len(matches)} of {len(items)} entries')
        return matches


_simple_storage_instance: Optional[SimpleStorage] = None


def get_simple_storage() -> SimpleStorage:
    global _simple_storage_instance
    if _simple_storage_instance is None:
        _simple_storage_instance = SimpleStorage(MemoryNamespace())
    return _simple_storage_instance
