"""
configuration for the faraway scoring service.

all the magic numbers live here so they're easy to tweak.
"""

import os
from pathlib import Path
from dataclasses import dataclass
from typing import Mapping

from dotenv import load_dotenv

from .errors import ConfigError
from .vectormath import ScoreScale


@dataclass
class Config:
    """service configuration — tweak these as needed."""

    # a submission is exactly this many words
    word_count: int = 7

    # embedding model identifier sent to the provider
    embedding_model: str = "text-embedding-3-small"

    # score scaling: "sigmoid" (current calibration) or "linear"
    scale_policy: str = "sigmoid"
    sigmoid_center: float = 0.63
    sigmoid_steepness: float = 10.5
    linear_floor: float = 0.4
    linear_span: float = 0.7

    # redis sorted set holding the leaderboard
    leaderboard_key: str = "leaderboard"
    leaderboard_size: int = 10
    redis_url: str = "redis://localhost:6379/0"

    # credentials
    openai_api_key: str | None = None
    migrate_secret: str | None = None

    # word-validity checker: "dictionaryapi" or "wordfreq"
    word_checker: str = "dictionaryapi"
    dictionary_url: str = "https://api.dictionaryapi.dev/api/v2/entries/en"
    dictionary_timeout: float = 5.0
    check_workers: int = 7

    # logging
    log_level: str = "INFO"
    log_format: str = "text"

    def __post_init__(self):
        """build the scale once so a bad policy fails at startup."""
        self.scale

    @property
    def scale(self) -> ScoreScale:
        return ScoreScale(
            policy=self.scale_policy,
            center=self.sigmoid_center,
            steepness=self.sigmoid_steepness,
            floor=self.linear_floor,
            span=self.linear_span,
        )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Config":
        """
        build a config from environment variables.

        credentials use the names the hosting setup already exports
        (OPENAI_API_KEY, REDIS_URL, MIGRATE_SECRET); everything else can be
        overridden with a FARAWAY_ prefix, e.g. FARAWAY_SCALE_POLICY=linear.

        when reading the real environment, .env.local and .env in the
        working directory are loaded first (already-set variables win).
        """
        if environ is None:
            load_env_files()
        env = os.environ if environ is None else environ
        kwargs: dict = {}

        for name, field_type in _ENV_FIELDS.items():
            raw = env.get(f"FARAWAY_{name.upper()}")
            if raw is None or raw == "":
                continue
            try:
                kwargs[name] = field_type(raw)
            except ValueError:
                raise ConfigError(
                    f"FARAWAY_{name.upper()} must be {field_type.__name__}, got: {raw!r}"
                ) from None

        redis_url = env.get("REDIS_URL") or env.get("UPSTASH_REDIS_URL")
        if redis_url:
            kwargs["redis_url"] = redis_url
        if env.get("OPENAI_API_KEY"):
            kwargs["openai_api_key"] = env["OPENAI_API_KEY"]
        if env.get("MIGRATE_SECRET"):
            kwargs["migrate_secret"] = env["MIGRATE_SECRET"]

        try:
            return cls(**kwargs)
        except ValueError as e:
            raise ConfigError(str(e)) from e


def load_env_files(root: Path | None = None) -> list[Path]:
    """
    load .env.local then .env from root (default: cwd) into os.environ.

    existing variables are never overridden, so .env.local beats .env
    and the real environment beats both. returns the files loaded.
    """
    root = Path.cwd() if root is None else Path(root)
    loaded: list[Path] = []
    for name in (".env.local", ".env"):
        path = root / name
        if path.is_file():
            load_dotenv(path, override=False)
            loaded.append(path)
    return loaded


# fields that can be overridden through FARAWAY_* variables
_ENV_FIELDS = {
    "word_count": int,
    "embedding_model": str,
    "scale_policy": str,
    "sigmoid_center": float,
    "sigmoid_steepness": float,
    "linear_floor": float,
    "linear_span": float,
    "leaderboard_key": str,
    "leaderboard_size": int,
    "word_checker": str,
    "dictionary_url": str,
    "dictionary_timeout": float,
    "check_workers": int,
    "log_level": str,
    "log_format": str,
}


# default config instance
DEFAULT_CONFIG = Config()
