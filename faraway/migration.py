"""
re-score the whole leaderboard after a calibration change.

every stored word set is re-embedded and re-scored one at a time (the
provider rate-limits us, so no concurrency here). a failing entry is
recorded and skipped; only entries with a fresh, finite score make it
back onto the rebuilt board.
"""

import logging
from dataclasses import dataclass, field

from .errors import FarawayError
from .leaderboard import LeaderboardEntry, LeaderboardStore
from .scorer import Scorer

logger = logging.getLogger(__name__)


@dataclass
class MigrationItem:
    """outcome for one leaderboard entry."""

    words: tuple[str, ...]
    old_score: float

    # set on success
    new_score: int | None = None

    # set on failure
    error: str | None = None

    # diagnostics, when the embeddings came back
    average_distance: float | None = None
    embedding_count: int | None = None
    vector_length: int | None = None

    @property
    def ok(self) -> bool:
        return self.new_score is not None

    def to_dict(self) -> dict:
        old = self.old_score
        if float(old).is_integer():
            old = int(old)
        out = {
            "words": list(self.words),
            "oldScore": old,
            "newScore": self.new_score,
        }
        if self.error is not None:
            out["error"] = self.error
        if self.average_distance is not None:
            out["avgDist"] = self.average_distance
            out["embeddingCount"] = self.embedding_count
            out["vectorLength"] = self.vector_length
        return out


@dataclass
class MigrationReport:
    items: list[MigrationItem] = field(default_factory=list)
    message: str = ""

    @property
    def succeeded(self) -> int:
        return sum(1 for item in self.items if item.ok)

    @property
    def failed(self) -> int:
        return sum(1 for item in self.items if not item.ok)

    def to_dict(self) -> dict:
        return {
            "message": self.message,
            "succeeded": self.succeeded,
            "failed": self.failed,
            "migrated": [item.to_dict() for item in self.items],
        }


def rescore_entry(entry: LeaderboardEntry, scorer: Scorer) -> MigrationItem:
    """re-score one entry; failures land in the item, never raise."""
    item = MigrationItem(words=entry.words, old_score=entry.score)
    try:
        result = scorer.rescore(entry.words)
    except FarawayError as e:
        item.error = str(e)
        return item
    except Exception as e:
        # one broken entry must not sink the rest of the batch
        logger.error("unexpected error re-scoring %s", " ".join(entry.words), exc_info=True)
        item.error = f"unexpected error: {type(e).__name__}"
        return item

    item.new_score = result.score
    item.average_distance = result.average_distance
    item.embedding_count = result.embedding_count
    item.vector_length = result.vector_length
    return item


def migrate(store: LeaderboardStore, scorer: Scorer) -> MigrationReport:
    """
    re-score every leaderboard entry and rebuild the board.

    args:
        store: leaderboard to migrate
        scorer: scorer carrying the new scale

    returns:
        MigrationReport with per-entry detail and success/failure counts

    raises:
        PersistenceError if the board can't be read or rewritten
    """
    entries = store.all()
    if not entries:
        return MigrationReport(message="Leaderboard is already empty.")

    logger.info("migrating %d leaderboard entries", len(entries))

    items: list[MigrationItem] = []
    for n, entry in enumerate(entries, 1):
        item = rescore_entry(entry, scorer)
        if item.ok:
            logger.info("[%d/%d] %s: %s -> %s", n, len(entries), " ".join(item.words),
                        item.old_score, item.new_score)
        else:
            logger.warning("[%d/%d] %s failed: %s", n, len(entries), " ".join(item.words),
                           item.error)
        items.append(item)

    # failed entries are dropped, not kept with stale scores
    store.replace_all(
        LeaderboardEntry(item.words, item.new_score) for item in items if item.ok
    )

    report = MigrationReport(items=items)
    report.message = f"Migrated {report.succeeded} entries ({report.failed} failed)."
    logger.info(report.message)
    return report
