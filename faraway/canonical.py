"""
canonical identity for a word set.

the same seven words in any order are one leaderboard entry. the sorted
form is the identity; the submitted order is only kept for display.
"""

import json
from dataclasses import dataclass
from typing import Any, Iterable


def canonicalize(words: Iterable[str]) -> list[str]:
    """return a sorted copy of words."""
    return sorted(words)


@dataclass(frozen=True)
class CanonicalWordSet:
    """sorted, hashable word set. build with CanonicalWordSet.of()."""

    words: tuple[str, ...]

    @classmethod
    def of(cls, words: Iterable[str]) -> "CanonicalWordSet":
        return cls(tuple(canonicalize(words)))

    def __iter__(self):
        return iter(self.words)

    def __len__(self) -> int:
        return len(self.words)


def serialize_member(words: CanonicalWordSet, score: float) -> str:
    """
    serialize a leaderboard entry into its store member string.

    keys are sorted and separators are compact so one logical entry
    always yields the exact same bytes.
    """
    payload = {"words": list(words.words), "score": _plain_number(score)}
    return json.dumps(payload, sort_keys=True, separators=(",", ":"))


def parse_member(raw: Any) -> tuple[CanonicalWordSet, float]:
    """
    parse a stored member back into (words, score).

    accepts str, bytes, or an already-decoded dict. extra fields
    (e.g. a timestamp on older entries) are ignored.
    """
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8")
    data = json.loads(raw) if isinstance(raw, str) else raw

    if not isinstance(data, dict) or "words" not in data or "score" not in data:
        raise ValueError(f"malformed leaderboard member: {raw!r}")

    words = data["words"]
    if not isinstance(words, list) or not all(isinstance(w, str) for w in words):
        raise ValueError(f"leaderboard member words must be a list of strings: {raw!r}")
    score = data["score"]
    if isinstance(score, bool) or not isinstance(score, (int, float)):
        raise ValueError(f"leaderboard member score must be a number: {raw!r}")
    return CanonicalWordSet.of(data["words"]), float(data["score"])


def _plain_number(score: float) -> int | float:
    """integral scores serialize as 42, not 42.0."""
    score = float(score)
    return int(score) if score.is_integer() else score
