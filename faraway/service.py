"""
game service — what the http endpoints do, minus the http.

wires the checker, scorer and store handles together. everything is
constructed once at startup and lives as long as the process.
"""

import hmac
import logging
from typing import Any

from .config import Config, DEFAULT_CONFIG
from .dictionary import WordChecker, build_checker
from .embeddings import build_openai_provider
from .errors import AuthorizationError, DuplicateEntryError
from .filters import validate_words
from .leaderboard import LeaderboardStore, build_store
from .migration import MigrationReport, migrate
from .scorer import Scorer

logger = logging.getLogger(__name__)


class GameService:
    def __init__(
        self,
        checker: WordChecker,
        scorer: Scorer,
        store: LeaderboardStore,
        config: Config = DEFAULT_CONFIG,
    ):
        self.checker = checker
        self.scorer = scorer
        self.store = store
        self.config = config

    def submit(self, raw_words: Any) -> dict:
        """
        validate, score and record a submission.

        returns {score, pairDistances, leaderboard}. raises
        ValidationError, DuplicateEntryError, EmbeddingProviderError
        or PersistenceError.
        """
        words = validate_words(raw_words, self.checker, self.config)
        result = self.scorer.score(words)

        if not self.store.insert_if_absent(words, result.score):
            raise DuplicateEntryError("This set of words is already on the leaderboard.")
        logger.info("scored %s -> %d", " ".join(words), result.score)

        return {
            "score": result.score,
            "pairDistances": [p.to_dict() for p in result.pair_distances],
            "leaderboard": self.leaderboard(),
        }

    def leaderboard(self) -> list[dict]:
        """top entries, highest score first."""
        return [e.to_dict() for e in self.store.top_n(self.config.leaderboard_size)]

    def migrate(self, secret: str | None) -> MigrationReport:
        """re-score the board; needs the configured migration secret."""
        expected = self.config.migrate_secret
        if not expected or not secret or not hmac.compare_digest(
            secret.encode("utf-8"), expected.encode("utf-8")
        ):
            raise AuthorizationError("Unauthorized.")
        return migrate(self.store, self.scorer)


def build_service(config: Config = DEFAULT_CONFIG) -> GameService:
    """build the service and its client handles from config."""
    return GameService(
        checker=build_checker(config),
        scorer=Scorer(build_openai_provider(config), config.scale),
        store=build_store(config),
        config=config,
    )
