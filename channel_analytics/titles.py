"""Title & keyword analysis for top and bottom performing videos."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from channel_analytics import stats
from channel_analytics.config import AnalysisConfig
from channel_analytics.models import VideoRecord
from channel_analytics.text import WordCount, word_frequency

NUMBER_PREFIX_PATTERN = re.compile(r"^[0-9]+")
QUESTION_PATTERN = re.compile(r"[?？]")
BRACKET_PATTERN = re.compile(r"[\[({【].*[\])}】]")
COLON_PATTERN = re.compile(r"[:：]")
EMOJI_PATTERN = re.compile("[\U0001F300-\U0001F6FF\u2600-\u26FF]")

PLACEHOLDER_WORDS = ("this topic", "beginners", "results", "tips", "secrets")

THUMBNAIL_RECOMMENDATIONS = (
    "Use large, high-contrast text of no more than 3-5 words that complements the title instead of repeating it.",
    "Show a clear face with a strong emotion; close-ups of expressions consistently lift click-through rates.",
    "Keep one focal subject and a simple background so the thumbnail still reads at mobile size.",
    "Keep a consistent colour palette and layout across uploads so returning viewers recognise the channel.",
)


@dataclass(frozen=True)
class TitlePatterns:
    number_in_beginning: float
    question_usage: float
    bracket_usage: float
    colon_usage: float
    emoji_usage: float
    typical_length: int


@dataclass(frozen=True)
class TitleSuggestion:
    pattern: str
    description: str
    example: str


@dataclass(frozen=True)
class ThumbnailFeatures:
    recommendations: Tuple[str, ...]


@dataclass(frozen=True)
class TitleAnalysis:
    avg_length: float
    high_words: List[WordCount]
    low_words: List[WordCount]
    patterns: TitlePatterns
    title_suggestions: List[TitleSuggestion]
    thumbnail_features: ThumbnailFeatures



def _percent(hits: int, total: int) -> float:
    return round(stats.safe_div(hits, total) * 100, 1)



def detect_title_patterns(videos: Sequence[VideoRecord]) -> TitlePatterns:
    """Incidence of common title devices, as a percentage of the cohort."""
    titles = [video.title for video in videos]
    total = len(titles)

    return TitlePatterns(
        number_in_beginning=_percent(sum(1 for t in titles if NUMBER_PREFIX_PATTERN.search(t)), total),
        question_usage=_percent(sum(1 for t in titles if QUESTION_PATTERN.search(t)), total),
        bracket_usage=_percent(sum(1 for t in titles if BRACKET_PATTERN.search(t)), total),
        colon_usage=_percent(sum(1 for t in titles if COLON_PATTERN.search(t)), total),
        emoji_usage=_percent(sum(1 for t in titles if EMOJI_PATTERN.search(t)), total),
        typical_length=int(round(stats.mean([len(t) for t in titles]))),
    )



def suggest_titles(words: Sequence[WordCount], patterns: TitlePatterns) -> List[TitleSuggestion]:
    """
    Four title templates built from the most frequent keywords.

    The template for the most used pattern comes first; ties keep the order
    question, numbered, colon, combo.
    """
    picked = [item.word for item in words[:5]]
    picked.extend(PLACEHOLDER_WORDS[len(picked):])
    w1, w2, w3, w4, w5 = picked[:5]

    candidates = [
        (patterns.question_usage, TitleSuggestion(
            pattern="question",
            description="Open with a question your audience is already asking",
            example=f"Why is everyone talking about {w1}? The truth about {w2}",
        )),
        (patterns.number_in_beginning, TitleSuggestion(
            pattern="numbered-bracket",
            description="Lead with a number and a bracketed hook",
            example=f"5 {w1} tricks that change everything [{w2} edition]",
        )),
        (patterns.colon_usage, TitleSuggestion(
            pattern="colon",
            description="Name the topic, then promise the payoff after a colon",
            example=f"{w1}: the complete guide to {w3}",
        )),
        (max(patterns.emoji_usage, patterns.bracket_usage), TitleSuggestion(
            pattern="emoji-bracket-combo",
            description="Combine a bracketed label with an emoji for visual contrast",
            example=f"【{w4}】{w5} x {w1} special ✨",
        )),
    ]
    candidates.sort(key=lambda item: item[0], reverse=True)
    return [suggestion for _, suggestion in candidates]



def thumbnail_recommendations() -> ThumbnailFeatures:
    """Static thumbnail advice; no image analysis is performed."""
    return ThumbnailFeatures(recommendations=THUMBNAIL_RECOMMENDATIONS)



def analyze_titles(
    videos: Sequence[VideoRecord],
    top: Sequence[VideoRecord],
    bottom: Sequence[VideoRecord],
    config: Optional[AnalysisConfig] = None,
) -> TitleAnalysis:
    config = config or AnalysisConfig()
    limit = config.max_word_results

    def count_words(cohort: Sequence[VideoRecord]) -> List[WordCount]:
        return word_frequency(
            [video.title for video in cohort],
            config.stop_words,
            config.min_word_length,
        )

    high_words = count_words(top)
    if not high_words and videos:
        high_words = count_words(videos)
    high_words = high_words[:limit]

    patterns = detect_title_patterns(top)

    return TitleAnalysis(
        avg_length=stats.mean([len(video.title) for video in videos]),
        high_words=high_words,
        low_words=count_words(bottom)[:limit],
        patterns=patterns,
        title_suggestions=suggest_titles(high_words, patterns),
        thumbnail_features=thumbnail_recommendations(),
    )
