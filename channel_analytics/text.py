"""Title tokenization and word frequency counting."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, Iterable, List, Sequence

WORD_SEPARATORS = re.compile(r"[\s,.!?;:'\"()/\-_&+\[\]{}【】「」『』、。]")
NUMERIC_ONLY = re.compile(r"^[0-9]+$")

BIGRAM_LIMIT = 10


@dataclass(frozen=True)
class WordCount:
    word: str
    count: int



def split_words(title: str, stop_words: Iterable[str] = (), min_length: int = 2) -> List[str]:
    """Split a title into candidate keywords, dropping stop words and numbers."""
    stop = set(stop_words)
    return [
        word for word in WORD_SEPARATORS.split(title)
        if word
        and len(word) >= min_length
        and word not in stop
        and not NUMERIC_ONLY.match(word)
    ]



def _ranked(counts: Dict[str, int]) -> List[WordCount]:
    # sorted() is stable, so equal counts keep first-seen order
    return [
        WordCount(word=word, count=count)
        for word, count in sorted(counts.items(), key=lambda item: item[1], reverse=True)
    ]



def _bigram_counts(titles: Sequence[str]) -> List[WordCount]:
    counts: Dict[str, int] = {}
    for title in titles:
        for index in range(len(title) - 1):
            segment = title[index:index + 2]
            if segment.strip() and not NUMERIC_ONLY.match(segment):
                counts[segment] = counts.get(segment, 0) + 1
    return _ranked(counts)[:BIGRAM_LIMIT]



def word_frequency(
    titles: Sequence[str],
    stop_words: Iterable[str] = (),
    min_length: int = 2,
) -> List[WordCount]:
    """
    Count keyword frequency across titles, most frequent first.

    Titles that cannot be segmented into words (e.g. unspaced Japanese) fall
    back to overlapping two-character substrings, capped at ten entries.
    """
    stop = set(stop_words)
    counts: Dict[str, int] = {}
    for title in titles:
        for word in split_words(title, stop, min_length):
            counts[word] = counts.get(word, 0) + 1

    result = _ranked(counts)
    if not result and titles:
        return _bigram_counts(titles)
    return result
