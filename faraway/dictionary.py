"""
word-validity checkers.

the default asks a public dictionary api one word at a time. the
wordfreq checker answers offline from zipf frequencies, which is handy
for local runs and for deployments that can't reach the api.
"""

from __future__ import annotations

import logging
from typing import Protocol
from urllib.parse import quote

import requests
from wordfreq import zipf_frequency

from .config import Config, DEFAULT_CONFIG
from .errors import ConfigError

logger = logging.getLogger(__name__)


class WordChecker(Protocol):
    def is_word(self, word: str) -> bool:
        ...


class DictionaryApiChecker:
    """
    recognized == the dictionary api has an entry for the word.

    fails open: if the api can't be reached the word counts as valid,
    so a third-party outage never blocks play.
    """

    def __init__(
        self,
        session: requests.Session | None = None,
        base_url: str = DEFAULT_CONFIG.dictionary_url,
        timeout: float = DEFAULT_CONFIG.dictionary_timeout,
    ):
        self.session = session or requests.Session()
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def is_word(self, word: str) -> bool:
        url = f"{self.base_url}/{quote(word)}"
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            logger.warning("dictionary lookup failed for %r, treating as valid: %s", word, e)
            return True
        return response.ok


class WordfreqChecker:
    """recognized == zipf frequency above min_zipf."""

    def __init__(self, lang: str = "en", wordlist: str = "small", min_zipf: float = 0.0):
        self.lang = lang
        self.wordlist = wordlist
        self.min_zipf = min_zipf

    def is_word(self, word: str) -> bool:
        z = float(zipf_frequency(word, self.lang, wordlist=self.wordlist))
        return z > self.min_zipf


def build_checker(config: Config = DEFAULT_CONFIG) -> WordChecker:
    """pick the checker named by config.word_checker."""
    if config.word_checker == "dictionaryapi":
        return DictionaryApiChecker(
            base_url=config.dictionary_url,
            timeout=config.dictionary_timeout,
        )
    if config.word_checker == "wordfreq":
        return WordfreqChecker()
    raise ConfigError(f"unknown word checker: {config.word_checker!r}")
