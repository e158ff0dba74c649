"""
submission filters for a seven-word entry.

checks, in order:
- the payload is a list of exactly word_count strings
- every word is non-empty ascii alphabetic (after lowercasing)
- every word is recognized by the word checker (all checked at once)

the cheap checks run first so a malformed payload never costs an
external call.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any

from .config import Config, DEFAULT_CONFIG
from .dictionary import WordChecker
from .errors import ValidationError

logger = logging.getLogger(__name__)


def is_well_formed(word: str) -> bool:
    """non-empty, ascii, alphabetic only."""
    return bool(word) and word.isascii() and word.isalpha()


def normalize_words(raw: Any, config: Config = DEFAULT_CONFIG) -> list[str]:
    """
    lowercase and strip each submitted word.

    raises ValidationError unless raw is a list of exactly
    config.word_count strings.
    """
    if not isinstance(raw, list) or len(raw) != config.word_count:
        raise ValidationError(f"Exactly {config.word_count} words required.")
    if not all(isinstance(w, str) for w in raw):
        raise ValidationError(f"Exactly {config.word_count} words required.")
    return [w.strip().lower() for w in raw]


def validate_words(
    raw: Any,
    checker: WordChecker,
    config: Config = DEFAULT_CONFIG,
) -> list[str]:
    """
    run every filter over a submission.

    args:
        raw: the submitted payload (expected: list of strings)
        checker: word-validity checker
        config: service config (word count, worker count)

    returns:
        the normalized words, in submission order

    raises:
        ValidationError naming every rejected word
    """
    words = normalize_words(raw, config)

    malformed = [w for w in words if not is_well_formed(w)]
    if malformed:
        raise ValidationError(
            f"Not a valid word: {', '.join(malformed)}", invalid_words=malformed
        )

    # independent reads, so check them all concurrently
    with ThreadPoolExecutor(max_workers=max(1, config.check_workers)) as pool:
        checks = list(pool.map(checker.is_word, words))

    invalid = [w for w, ok in zip(words, checks) if not ok]
    if invalid:
        logger.info("rejected submission, unrecognized words: %s", invalid)
        raise ValidationError(
            f"Not a valid word: {', '.join(invalid)}", invalid_words=invalid
        )

    return words
