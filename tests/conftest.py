"""
shared fakes for the test suite.

nothing here talks to the network: redis, the embedding provider, the
dictionary api and the openai client are all stood in for.
"""

import hashlib
import sys
import threading
from pathlib import Path
from types import SimpleNamespace

import numpy as np
import pytest
import redis

# add project root to path so tests run without an install
sys.path.insert(0, str(Path(__file__).parent.parent))

from faraway.config import Config
from faraway.errors import EmbeddingProviderError
from faraway.leaderboard import LeaderboardStore
from faraway.scorer import Scorer
from faraway.service import GameService


SCENARIO_WORDS = ["apple", "boat", "cactus", "drum", "eagle", "fire", "glass"]


def word_vector(word: str, dim: int = 16) -> np.ndarray:
    """stable pseudo-random non-negative vector for a word."""
    seed = int.from_bytes(hashlib.sha256(word.encode("utf-8")).digest()[:8], "little")
    return np.random.default_rng(seed).random(dim)


class FakeSortedSets:
    """in-memory stand-in for the redis sorted-set commands we use."""

    def __init__(self):
        self.sets: dict[str, dict[str, float]] = {}
        self.fail = False
        self.commands: list[str] = []

    def _check(self, command: str):
        self.commands.append(command)
        if self.fail:
            raise redis.ConnectionError("connection refused")

    def zadd(self, name, mapping, nx=False):
        self._check("zadd")
        zset = self.sets.setdefault(name, {})
        added = 0
        for member, score in mapping.items():
            if member in zset:
                if not nx:
                    zset[member] = float(score)
                continue
            zset[member] = float(score)
            added += 1
        return added

    def zrange(self, name, start, end, desc=False):
        self._check("zrange")
        zset = self.sets.get(name, {})
        ordered = sorted(zset.items(), key=lambda kv: (kv[1], kv[0]), reverse=desc)
        stop = None if end == -1 else end + 1
        return [member.encode("utf-8") for member, _ in ordered[start:stop]]

    def zcard(self, name):
        self._check("zcard")
        return len(self.sets.get(name, {}))

    def delete(self, name):
        self._check("delete")
        return 1 if self.sets.pop(name, None) is not None else 0


class FakeProvider:
    """deterministic embedding provider that records every request."""

    def __init__(self, vectors: dict | None = None, fail_on: set | None = None):
        self.vectors = vectors or {}
        self.fail_on = set(fail_on or ())
        self.calls: list[list[str]] = []

    def embed(self, words):
        words = list(words)
        self.calls.append(words)
        if self.fail_on.intersection(words):
            raise EmbeddingProviderError("provider exploded", provider="fake")
        return np.asarray([self.vectors.get(w, word_vector(w)) for w in words])


class StaticChecker:
    """word checker that rejects a fixed set of words."""

    def __init__(self, invalid: set | None = None):
        self.invalid = set(invalid or ())
        self.checked: list[str] = []
        self._lock = threading.Lock()

    def is_word(self, word):
        with self._lock:
            self.checked.append(word)
        return word not in self.invalid


class FakeOpenAIClient:
    """mimics openai.OpenAI().embeddings.create, answering in reverse order."""

    def __init__(self, dim: int = 8, error: Exception | None = None, drop: int = 0):
        self.dim = dim
        self.error = error
        self.drop = drop
        self.requests: list[dict] = []
        self.embeddings = SimpleNamespace(create=self._create)

    def _create(self, model, input):
        self.requests.append({"model": model, "input": list(input)})
        if self.error is not None:
            raise self.error
        data = [
            SimpleNamespace(index=i, embedding=word_vector(w, self.dim).tolist())
            for i, w in enumerate(input)
        ]
        data = data[: len(data) - self.drop]
        return SimpleNamespace(data=list(reversed(data)))


@pytest.fixture
def config():
    return Config(migrate_secret="s3cret")


@pytest.fixture
def sorted_sets():
    return FakeSortedSets()


@pytest.fixture
def store(sorted_sets, config):
    return LeaderboardStore(sorted_sets, key=config.leaderboard_key)


@pytest.fixture
def provider():
    return FakeProvider()


@pytest.fixture
def checker():
    return StaticChecker()


@pytest.fixture
def scorer(provider, config):
    return Scorer(provider, config.scale)


@pytest.fixture
def service(checker, scorer, store, config):
    return GameService(checker=checker, scorer=scorer, store=store, config=config)
