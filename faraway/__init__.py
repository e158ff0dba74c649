"""
faraway — seven words, as far apart as possible

scores a submitted set of words by how semantically distant they are
from one another, using embedding vectors, and keeps a leaderboard of
the best-scoring sets.
"""

from .config import Config, DEFAULT_CONFIG
from .canonical import CanonicalWordSet, canonicalize
from .vectormath import (
    ScoreScale,
    average_distance,
    cosine_distance,
    cosine_similarity,
    scale_score,
)
from .scorer import Scorer, ScoreResult
from .leaderboard import LeaderboardEntry, LeaderboardStore
from .migration import MigrationReport, migrate
from .service import GameService, build_service

__all__ = [
    "Config",
    "DEFAULT_CONFIG",
    "CanonicalWordSet",
    "canonicalize",
    "ScoreScale",
    "average_distance",
    "cosine_distance",
    "cosine_similarity",
    "scale_score",
    "Scorer",
    "ScoreResult",
    "LeaderboardEntry",
    "LeaderboardStore",
    "MigrationReport",
    "migrate",
    "GameService",
    "build_service",
]
