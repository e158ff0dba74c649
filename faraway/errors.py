"""
error taxonomy for the faraway service.

every error carries the http status the app layer answers with, so the
routes never need their own mapping table.
"""


class FarawayError(Exception):
    """base exception for all faraway errors."""

    status_code = 500


class ValidationError(FarawayError):
    """
    the submission itself is unacceptable.

    raised when:
    - the payload is not exactly word_count words
    - a word is empty or non-alphabetic
    - the dictionary check rejects one or more words

    never retried.
    """

    status_code = 400

    def __init__(self, message: str, invalid_words: list[str] | None = None):
        super().__init__(message)
        self.invalid_words = list(invalid_words or [])


class DuplicateEntryError(FarawayError):
    """the canonical word set is already on the leaderboard."""

    status_code = 409


class EmbeddingProviderError(FarawayError):
    """
    the embedding call failed or returned something unusable.

    raised when:
    - the provider is unreachable or answers with an error
    - the number of vectors does not match the number of words
    - the vectors disagree in length
    - the resulting score is not a finite number
    """

    status_code = 502

    def __init__(self, message: str, provider: str | None = None):
        super().__init__(message)
        self.provider = provider


class PersistenceError(FarawayError):
    """the leaderboard store is unreachable or a command failed."""

    status_code = 503


class AuthorizationError(FarawayError):
    """missing or mismatched migration secret."""

    status_code = 401


class ConfigError(FarawayError):
    """invalid configuration value."""

    pass
