import os, sys
from pathlib import Path

import pytest

# Add project root to sys.path for imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

# Keep the suite offline and independent of a developer .env
os.environ.setdefault("OPENAI_API_KEY", "test-openai")
os.environ.setdefault("PINECONE_API_KEY", "test-pinecone")
os.environ.setdefault("STORAGE_BACKEND", "pinecone")
os.environ.setdefault("SEARCH_FILTER_MODE", "embedding-only")


class FakeIndex:
    """Stand-in for a vector index namespace: keeps vectors in a dict, ranks by insertion order."""

    def __init__(self):
        self.vectors = {}
        self.upserts = []
        self.queries = []
        self.fetches = []
        self.fail_with = None

    def _maybe_fail(self):
        if self.fail_with is not None:
            raise self.fail_with

    async def upsert(self, vectors):
        self._maybe_fail()
        self.upserts.append(vectors)
        for v in vectors:
            self.vectors[v["id"]] = v
        return {"upsertedCount": len(vectors)}

    async def query(self, vector, top_k, include_metadata=True, filter=None):
        self._maybe_fail()
        self.queries.append({"vector": vector, "top_k": top_k, "include_metadata": include_metadata, "filter": filter})
        matches = []
        for v in self.vectors.values():
            meta = v["metadata"]
            if filter and any(meta.get(k) != cond["$eq"] for k, cond in filter.items()):
                continue
            matches.append({
                "id": v["id"],
                "score": 0.9,
                "metadata": dict(meta) if include_metadata else {},
            })
        return matches[:top_k]

    async def fetch(self, ids):
        self._maybe_fail()
        self.fetches.append(ids)
        return {i: {"id": i, "metadata": dict(self.vectors[i]["metadata"])} for i in ids if i in self.vectors}


class FakeEmbedder:
    def __init__(self, dimension=8):
        self.dimension = dimension
        self.calls = []
        self.fail_with = None

    async def __call__(self, text, api_key):
        self.calls.append((text, api_key))
        if self.fail_with is not None:
            raise self.fail_with
        return [float(len(text) % 7)] * self.dimension


@pytest.fixture
def fake_index():
    return FakeIndex()


@pytest.fixture
def fake_embedder():
    return FakeEmbedder()


@pytest.fixture
def store(fake_index, fake_embedder):
    from agent_overflow.services.solution_store import SolutionStore

    return SolutionStore(
        fake_index,
        "test-openai",
        index_name="test-index",
        namespace_name="test-namespace",
        filter_mode="embedding-only",
        embedder=fake_embedder,
    )


@pytest.fixture
def upload_data():
    return {
        "problem": {
            "error_type": "TypeError",
            "error_message": "cannot read x of undefined",
            "agent_summary": "null deref on user object",
        },
        "environment": {"language": "TypeScript", "primary_library": "React"},
        "solution": {
            "solution_payload": "add null check",
            "agent_explanation": "guard before access",
        },
    }


@pytest.fixture
def search_data():
    return {
        "problem": {
            "error_message": "undefined property access",
            "agent_summary": "null deref",
        },
        "environment": {"language": "TypeScript", "primary_library": "React"},
    }
