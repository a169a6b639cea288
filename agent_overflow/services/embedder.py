import logging
from typing import List, Optional, Sequence

from openai import AsyncOpenAI

from ..config import EMBEDDING_DIMENSIONS, EMBEDDING_MODEL
from ..errors import AuthenticationError, EmbeddingProviderError, describe


def _create_client(api_key: str) -> AsyncOpenAI:
    if not api_key:
        raise AuthenticationError("OPENAI_API_KEY is required")
    return AsyncOpenAI(api_key=api_key)


async def embed(
    texts: Sequence[str],
    api_key: str,
    model: str = EMBEDDING_MODEL,
    dimensions: Optional[int] = EMBEDDING_DIMENSIONS,
) -> List[List[float]]:
    """Embed *texts* with one provider call; vectors come back in input order."""
    if not texts:
        raise EmbeddingProviderError("Failed to generate embeddings: no input texts")

    client = _create_client(api_key)

    request = {"input": list(texts), "model": model}
    if dimensions:
        request["dimensions"] = dimensions

    try:
        async with client:
            resp = await client.embeddings.create(**request)
    except Exception as e:
        logging.error(f"[Embedder] Error generating embeddings: {e}")
        raise EmbeddingProviderError(f"Failed to generate embeddings: {describe(e)}") from e

    # the API tags each vector with its input position
    items = sorted(resp.data, key=lambda item: item.index)
    return [item.embedding for item in items]


async def embed_single(text: str, api_key: str) -> List[float]:
    vectors = await embed([text], api_key)
    return vectors[0]
