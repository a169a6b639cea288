import asyncio
from types import SimpleNamespace

import pytest

from agent_overflow.errors import AuthenticationError, EmbeddingProviderError
from agent_overflow.services import embedder


class FakeEmbeddings:
    def __init__(self, error=None):
        self.requests = []
        self.error = error

    async def create(self, **kwargs):
        self.requests.append(kwargs)
        if self.error is not None:
            raise self.error
        # deliberately out of order; the client must sort by index
        data = [
            SimpleNamespace(index=i, embedding=[float(i), float(len(text))])
            for i, text in enumerate(kwargs["input"])
        ]
        return SimpleNamespace(data=list(reversed(data)))


class FakeClient:
    def __init__(self, api_key, embeddings, created):
        self.api_key = api_key
        self.embeddings = embeddings
        self.closed = False
        created.append(self)

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        self.closed = True


def _patch_client(monkeypatch, embeddings):
    created = []

    def fake_client(api_key):
        return FakeClient(api_key, embeddings, created)

    monkeypatch.setattr(embedder, "AsyncOpenAI", fake_client)
    return created


def test_embed_returns_one_vector_per_text_in_order(monkeypatch):
    fake = FakeEmbeddings()
    created = _patch_client(monkeypatch, fake)

    vectors = asyncio.run(embedder.embed(["a", "bbb", "cc"], "sk-test", model="m", dimensions=2))

    assert vectors == [[0.0, 1.0], [1.0, 3.0], [2.0, 2.0]]
    assert [c.api_key for c in created] == ["sk-test"]
    assert len(fake.requests) == 1
    assert fake.requests[0] == {"input": ["a", "bbb", "cc"], "model": "m", "dimensions": 2}


def test_embed_omits_dimensions_when_unset(monkeypatch):
    fake = FakeEmbeddings()
    _patch_client(monkeypatch, fake)

    asyncio.run(embedder.embed(["hello"], "sk-test", model="text-embedding-ada-002", dimensions=None))

    assert "dimensions" not in fake.requests[0]


def test_embed_single_returns_sole_vector(monkeypatch):
    _patch_client(monkeypatch, FakeEmbeddings())

    vector = asyncio.run(embedder.embed_single("hello", "sk-test"))

    assert vector == [0.0, 5.0]


def test_missing_credential_fails_before_any_call(monkeypatch):
    fake = FakeEmbeddings()
    created = _patch_client(monkeypatch, fake)

    with pytest.raises(AuthenticationError):
        asyncio.run(embedder.embed(["hello"], ""))

    assert created == []
    assert fake.requests == []


def test_provider_error_is_wrapped_with_original_message(monkeypatch):
    _patch_client(monkeypatch, FakeEmbeddings(error=RuntimeError("quota exceeded")))

    with pytest.raises(EmbeddingProviderError) as excinfo:
        asyncio.run(embedder.embed_single("hello", "sk-test"))

    assert "quota exceeded" in str(excinfo.value)
    assert str(excinfo.value).startswith("Failed to generate embeddings")


def test_empty_input_is_rejected(monkeypatch):
    _patch_client(monkeypatch, FakeEmbeddings())

    with pytest.raises(EmbeddingProviderError):
        asyncio.run(embedder.embed([], "sk-test"))


def test_client_is_closed_after_each_call(monkeypatch):
    created = _patch_client(monkeypatch, FakeEmbeddings())

    asyncio.run(embedder.embed_single("one", "sk-test"))
    asyncio.run(embedder.embed_single("two", "sk-test"))

    assert len(created) == 2
    assert all(c.closed for c in created)


def test_client_is_closed_when_provider_fails(monkeypatch):
    created = _patch_client(monkeypatch, FakeEmbeddings(error=RuntimeError("timeout")))

    with pytest.raises(EmbeddingProviderError):
        asyncio.run(embedder.embed_single("hello", "sk-test"))

    assert created[0].closed is True
