"""Configuration for the channel analytics engine."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import FrozenSet

from dotenv import load_dotenv

load_dotenv()


DEFAULT_STOP_WORDS = frozenset({
    # Japanese particles and auxiliaries
    "の", "に", "は", "を", "た", "が", "で", "て", "と", "し",
    "れ", "さ", "ある", "いる", "も", "する", "から", "な", "こと",
    # English filler words
    "the", "and", "for", "with", "you", "how", "this", "that",
    "from", "are", "was", "but",
})



def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError:
        return default



def _env_words(name: str) -> FrozenSet[str]:
    raw = os.getenv(name, "")
    return frozenset(word.strip() for word in raw.split(",") if word.strip())


@dataclass(frozen=True)
class AnalysisConfig:
    stop_words: FrozenSet[str] = field(default=DEFAULT_STOP_WORDS)
    top_results_count: int = 5
    videos_to_fetch: int = 25
    min_word_length: int = 2
    max_word_results: int = 10

    @staticmethod
    def from_env() -> "AnalysisConfig":
        return AnalysisConfig(
            stop_words=DEFAULT_STOP_WORDS | _env_words("EXTRA_STOP_WORDS"),
            top_results_count=max(1, _env_int("TOP_RESULTS_COUNT", 5)),
            videos_to_fetch=max(1, _env_int("VIDEOS_TO_FETCH", 25)),
            min_word_length=max(1, _env_int("MIN_WORD_LENGTH", 2)),
            max_word_results=max(1, _env_int("MAX_WORD_RESULTS", 10)),
        )
