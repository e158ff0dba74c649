"""
embeddings client — fetches one vector per word from the provider.

the provider is free to return results in any order, so every response
is re-sorted by the index it assigns before anything else looks at it.
"""

import logging
from typing import Protocol, Sequence

import numpy as np
import openai
from numpy.typing import NDArray

from .config import Config, DEFAULT_CONFIG
from .errors import EmbeddingProviderError

logger = logging.getLogger(__name__)


class EmbeddingProvider(Protocol):
    """anything that turns words into a (len(words), D) array."""

    def embed(self, words: Sequence[str]) -> NDArray[np.float64]:
        ...


class OpenAIEmbeddingProvider:
    """embedding provider backed by the openai embeddings endpoint."""

    name = "openai"

    def __init__(self, client: "openai.OpenAI", model: str = DEFAULT_CONFIG.embedding_model):
        self.client = client
        self.model = model

    def embed(self, words: Sequence[str]) -> NDArray[np.float64]:
        """
        fetch embeddings for all words in a single batched request.

        args:
            words: words to embed, in submission order

        returns:
            array of shape (len(words), D), row i belongs to words[i]
        """
        words = list(words)
        try:
            response = self.client.embeddings.create(model=self.model, input=words)
        except openai.OpenAIError as e:
            logger.warning("embedding request failed for %d words: %s", len(words), e)
            raise EmbeddingProviderError(f"embedding request failed: {e}", provider=self.name) from e

        return rows_in_request_order(response.data, len(words), provider=self.name)


def rows_in_request_order(
    items: Sequence,
    expected: int,
    provider: str | None = None,
) -> NDArray[np.float64]:
    """
    sort provider items by .index and stack their .embedding vectors.

    raises EmbeddingProviderError if an item is malformed, or if the
    count, the indices or the vector lengths don't line up with the
    request.
    """
    if items is None or len(items) != expected:
        got = "none" if items is None else len(items)
        raise EmbeddingProviderError(
            f"expected {expected} embeddings, got {got}", provider=provider
        )

    for item in items:
        index = getattr(item, "index", None)
        embedding = getattr(item, "embedding", None)
        if not isinstance(index, int) or isinstance(index, bool):
            raise EmbeddingProviderError(
                f"embedding item has no integer index: {index!r}", provider=provider
            )
        if embedding is None or isinstance(embedding, (str, bytes)) or not hasattr(embedding, "__len__"):
            raise EmbeddingProviderError(
                f"embedding item {index} has no vector", provider=provider
            )

    ordered = sorted(items, key=lambda item: item.index)
    indices = [item.index for item in ordered]
    if indices != list(range(expected)):
        raise EmbeddingProviderError(
            f"embedding indices don't match request: {indices}", provider=provider
        )

    lengths = {len(item.embedding) for item in ordered}
    if len(lengths) != 1 or 0 in lengths:
        raise EmbeddingProviderError(
            f"embedding vector lengths disagree: {sorted(lengths)}", provider=provider
        )

    # keep doubles; float32 can flip a score sitting near x.5
    try:
        return np.asarray([item.embedding for item in ordered], dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise EmbeddingProviderError(f"embedding vectors are not numeric: {e}", provider=provider) from e


def build_openai_provider(config: Config = DEFAULT_CONFIG) -> OpenAIEmbeddingProvider:
    """construct the openai client handle from config."""
    client = openai.OpenAI(api_key=config.openai_api_key)
    return OpenAIEmbeddingProvider(client, model=config.embedding_model)
