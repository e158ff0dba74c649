"""
distance math for a submitted word set.

given one embedding per word, compare every pair by cosine distance,
average the pairs, and squash the average into a 0-100 score.
"""

import math
from dataclasses import dataclass
from typing import Sequence

import numpy as np
from numpy.typing import ArrayLike, NDArray

SCALE_POLICIES = ("sigmoid", "linear")


@dataclass(frozen=True)
class ScoreScale:
    """
    calibrated map from average cosine distance to a 0-100 score.

    sigmoid: center is the distance that maps to 50, steepness controls
    how fast scores spread around it. output stays inside (0, 100).

    linear: floor maps to 0, floor + span maps to 100, clamped outside.
    """

    policy: str = "sigmoid"
    center: float = 0.63
    steepness: float = 10.5
    floor: float = 0.4
    span: float = 0.7

    def __post_init__(self):
        if self.policy not in SCALE_POLICIES:
            raise ValueError(
                f"scale policy must be one of {SCALE_POLICIES}, got: {self.policy!r}"
            )
        if self.policy == "sigmoid" and self.steepness <= 0:
            raise ValueError(f"steepness must be positive, got: {self.steepness}")
        if self.policy == "linear" and self.span <= 0:
            raise ValueError(f"span must be positive, got: {self.span}")

    def __call__(self, avg_dist: float) -> float:
        if self.policy == "sigmoid":
            return _sigmoid(self.steepness * (avg_dist - self.center)) * 100.0
        return _linear(avg_dist, self.floor, self.span)


DEFAULT_SCALE = ScoreScale()


@dataclass
class PairDistance:
    """distance between words i and j (i < j) of a submission."""

    word1: str
    word2: str
    i: int
    j: int

    # raw cosine distance in [0, 2]
    distance: float

    # the same distance pushed through the score scale
    scaled_score: float

    def to_dict(self) -> dict:
        return {
            "word1": self.word1,
            "word2": self.word2,
            "i": self.i,
            "j": self.j,
            "distance": self.distance,
            "scaledScore": self.scaled_score,
        }


def cosine_similarity(a: ArrayLike, b: ArrayLike) -> float:
    """
    dot(a, b) / (|a| * |b|).

    returns NaN when either vector has zero norm; callers decide what
    a NaN means for them.
    """
    a = np.asarray(a, dtype=np.float64)
    b = np.asarray(b, dtype=np.float64)
    if a.shape != b.shape:
        raise ValueError(f"vector length mismatch: {a.shape} vs {b.shape}")

    denom = np.linalg.norm(a) * np.linalg.norm(b)
    if denom == 0:
        return math.nan
    return float(np.dot(a, b) / denom)


def cosine_distance(a: ArrayLike, b: ArrayLike) -> float:
    """1 - similarity, with similarity clamped to [-1, 1] first."""
    sim = cosine_similarity(a, b)
    if math.isnan(sim):
        return sim
    return 1.0 - max(-1.0, min(1.0, sim))


def average_distance(embeddings: ArrayLike) -> float:
    """
    mean cosine distance over all C(n, 2) unordered pairs.

    args:
        embeddings: n vectors, shape (n, D)

    returns:
        the mean distance, or 0.0 when there are fewer than two vectors
    """
    X = np.asarray(embeddings, dtype=np.float64)
    n = X.shape[0] if X.ndim == 2 else 0
    if n < 2:
        return 0.0

    norms = np.linalg.norm(X, axis=1)

    # zero-norm rows turn into NaN here instead of raising
    with np.errstate(divide="ignore", invalid="ignore"):
        sims: NDArray[np.float64] = (X @ X.T) / np.outer(norms, norms)

    # float overshoot past +/-1 (np.clip keeps NaN as NaN)
    sims = np.clip(sims, -1.0, 1.0)

    i, j = np.triu_indices(n, k=1)
    return float(np.mean(1.0 - sims[i, j]))


def pair_distances(
    words: Sequence[str],
    embeddings: ArrayLike,
    scale: ScoreScale = DEFAULT_SCALE,
) -> list[PairDistance]:
    """one PairDistance per i < j, in (i, j) order."""
    X = np.asarray(embeddings, dtype=np.float64)
    if len(words) != X.shape[0]:
        raise ValueError(f"{len(words)} words but {X.shape[0]} embeddings")

    pairs: list[PairDistance] = []
    for i in range(len(words)):
        for j in range(i + 1, len(words)):
            distance = cosine_distance(X[i], X[j])
            pairs.append(PairDistance(
                word1=words[i],
                word2=words[j],
                i=i,
                j=j,
                distance=distance,
                scaled_score=scale(distance),
            ))
    return pairs


def scale_score(avg_dist: float, scale: ScoreScale = DEFAULT_SCALE) -> float:
    """map an average distance to 0-100 with the given scale."""
    return scale(avg_dist)


def _sigmoid(z: float) -> float:
    # split on sign so exp() never overflows
    if z >= 0:
        return 1.0 / (1.0 + math.exp(-z))
    e = math.exp(z)
    return e / (1.0 + e)


def _linear(avg_dist: float, floor: float, span: float) -> float:
    value = (avg_dist - floor) / span * 100.0
    if math.isnan(value):
        return value
    return max(0.0, min(100.0, value))
