"""
leaderboard store on top of a redis sorted set.

members are serialized {words, score} entries ranked by score. the
serialized member is also the uniqueness key: a conditional add (NX)
is the only thing standing between a word set and a second entry.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Sequence

import redis

from .canonical import CanonicalWordSet, parse_member, serialize_member
from .config import Config, DEFAULT_CONFIG
from .errors import PersistenceError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LeaderboardEntry:
    """one ranked word set. words are always in canonical order."""

    words: tuple[str, ...]
    score: float

    @classmethod
    def of(cls, words: Iterable[str], score: float) -> "LeaderboardEntry":
        return cls(CanonicalWordSet.of(words).words, score)

    def to_dict(self) -> dict:
        score = self.score
        if float(score).is_integer():
            score = int(score)
        return {"words": list(self.words), "score": score}


class LeaderboardStore:
    """ranked word sets, highest score first."""

    def __init__(self, client: "redis.Redis", key: str = DEFAULT_CONFIG.leaderboard_key):
        self.client = client
        self.key = key

    def insert_if_absent(self, words: Sequence[str], score: float) -> bool:
        """
        add an entry unless the exact same member is already stored.

        returns True if the entry was added, False for a duplicate.
        """
        member = serialize_member(CanonicalWordSet.of(words), score)
        try:
            added = self.client.zadd(self.key, {member: score}, nx=True)
        except redis.RedisError as e:
            raise PersistenceError(f"leaderboard insert failed: {e}") from e
        return bool(added)

    def top_n(self, n: int = DEFAULT_CONFIG.leaderboard_size) -> list[LeaderboardEntry]:
        """the n highest-scoring entries, descending."""
        if n <= 0:
            return []
        return self._range(0, n - 1)

    def all(self) -> list[LeaderboardEntry]:
        """every entry, descending. only migration needs this."""
        return self._range(0, -1)

    def size(self) -> int:
        try:
            return int(self.client.zcard(self.key))
        except redis.RedisError as e:
            raise PersistenceError(f"leaderboard size failed: {e}") from e

    def replace_all(self, entries: Iterable[LeaderboardEntry]) -> None:
        """
        drop the whole leaderboard, then add every entry unconditionally.

        not atomic: readers between the delete and the add see an empty
        (or short) board, and a crash in between leaves it that way.
        """
        mapping = {
            serialize_member(CanonicalWordSet.of(e.words), e.score): e.score
            for e in entries
        }
        try:
            self.client.delete(self.key)
            if mapping:
                self.client.zadd(self.key, mapping)
        except redis.RedisError as e:
            raise PersistenceError(f"leaderboard replace failed: {e}") from e
        logger.info("leaderboard %r replaced with %d entries", self.key, len(mapping))

    def _range(self, start: int, end: int) -> list[LeaderboardEntry]:
        try:
            raw = self.client.zrange(self.key, start, end, desc=True)
        except redis.RedisError as e:
            raise PersistenceError(f"leaderboard read failed: {e}") from e

        entries: list[LeaderboardEntry] = []
        for member in raw:
            try:
                words, score = parse_member(member)
            except ValueError as e:
                # one bad member shouldn't hide the rest of the board
                logger.error("skipping unreadable leaderboard member %r: %s", member, e)
                continue
            entries.append(LeaderboardEntry(words.words, score))
        return entries


def build_store(config: Config = DEFAULT_CONFIG) -> LeaderboardStore:
    """construct the redis client handle from config."""
    client = redis.Redis.from_url(config.redis_url)
    return LeaderboardStore(client, key=config.leaderboard_key)
