"""
score a word set — the core of the game.

embed the words, compare every pair, average, scale. the same math backs
live submissions and leaderboard migrations.
"""

import math
from dataclasses import dataclass, field
from typing import Sequence

import numpy as np
from numpy.typing import NDArray

from .embeddings import EmbeddingProvider
from .errors import EmbeddingProviderError
from .vectormath import (
    DEFAULT_SCALE,
    PairDistance,
    ScoreScale,
    average_distance,
    pair_distances,
)


@dataclass
class ScoreResult:
    """result of scoring one submission."""

    # integer-rounded scaled score, 0-100
    score: int

    # one record per i < j, 21 for seven words
    pair_distances: list[PairDistance] = field(default_factory=list)

    # unscaled mean pair distance (for debugging)
    average_distance: float = 0.0


@dataclass
class Rescore:
    """score plus the diagnostics a migration reports per entry."""

    score: int
    average_distance: float
    embedding_count: int
    vector_length: int


class Scorer:
    """turns words into a score using an embedding provider and a scale."""

    def __init__(self, provider: EmbeddingProvider, scale: ScoreScale = DEFAULT_SCALE):
        self.provider = provider
        self.scale = scale

    def score(self, words: Sequence[str]) -> ScoreResult:
        """
        score a validated submission.

        args:
            words: validated lowercase words, in submission order

        returns:
            ScoreResult with the final score and all pair distances

        raises:
            EmbeddingProviderError if the embeddings can't produce a score
        """
        words = list(words)
        embeddings = self._embed(words)

        avg = average_distance(embeddings)
        score = self._final_score(avg)

        return ScoreResult(
            score=score,
            pair_distances=pair_distances(words, embeddings, self.scale),
            average_distance=avg,
        )

    def rescore(self, words: Sequence[str]) -> Rescore:
        """re-embed and re-score a stored word set, without pair records."""
        words = list(words)
        embeddings = self._embed(words)

        avg = average_distance(embeddings)
        return Rescore(
            score=self._final_score(avg),
            average_distance=avg,
            embedding_count=int(embeddings.shape[0]),
            vector_length=int(embeddings.shape[1]),
        )

    def _embed(self, words: list[str]) -> NDArray[np.float64]:
        try:
            embeddings = np.asarray(self.provider.embed(words), dtype=np.float64)
        except ValueError as e:
            # ragged rows: vectors of different lengths
            raise EmbeddingProviderError(f"unusable embeddings: {e}") from e

        if embeddings.ndim != 2 or embeddings.shape[0] != len(words):
            raise EmbeddingProviderError(
                f"expected {len(words)} embeddings, got shape {embeddings.shape}"
            )
        return embeddings

    def _final_score(self, avg: float) -> int:
        scaled = self.scale(avg)
        # zero-norm vectors end up here as NaN; never hand one out
        if not math.isfinite(scaled):
            raise EmbeddingProviderError(
                f"score is not a finite number (average distance {avg})"
            )
        return int(round(scaled))
