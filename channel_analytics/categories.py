"""
Content category classification

Each video is matched against an ordered rule table of (category, patterns)
using its title plus tags. Rules are checked in table order and the first
category with a matching pattern wins; unmatched videos fall into OTHER.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Pattern, Sequence, Tuple

from channel_analytics import stats
from channel_analytics.models import ContentCategory, VideoRecord, VideoSummary
from channel_analytics.text import split_words

CATEGORY_RULES: Tuple[Tuple[ContentCategory, Tuple[Pattern[str], ...]], ...] = (
    (ContentCategory.DISCUSSION, (
        re.compile(r"考察|解説|分析|まとめ|議論|理由|なぜ|違い|どっち|どちら", re.IGNORECASE),
        re.compile(r"analysis|theory|explained|why|difference|discussion", re.IGNORECASE),
    )),
    (ContentCategory.HOWTO, (
        re.compile(r"方法|やり方|仕方|手順|解説|講座|ガイド|チュートリアル|入門|初心者|基本|使い方|コツ|ポイント", re.IGNORECASE),
        re.compile(r"how\s*to|tutorial|guide|tips|tricks", re.IGNORECASE),
    )),
    (ContentCategory.RANKING, (
        re.compile(r"ランキング|人気|おすすめ|ベスト|トップ|選び方|厳選", re.IGNORECASE),
        re.compile(r"ranking|top\s*\d+|best\s*\d+", re.IGNORECASE),
    )),
    (ContentCategory.REACTION, (
        re.compile(r"リアクション|反応|見てみた|聞いてみた|初見|初めて|驚き", re.IGNORECASE),
        re.compile(r"reaction|reacting\s*to|first\s*time", re.IGNORECASE),
    )),
    (ContentCategory.REVIEW, (
        re.compile(r"レビュー|感想|使ってみた|試してみた|紹介|インプレ|購入品|開封|比較|評価", re.IGNORECASE),
        re.compile(r"review|unboxing|versus|comparison", re.IGNORECASE),
    )),
    (ContentCategory.VLOG, (
        re.compile(r"日常|休日|休み|旅行|旅|観光|vlog|ルーティン|生活|暮らし|一日", re.IGNORECASE),
        re.compile(r"vlog|diary|daily|routine|day\s*in", re.IGNORECASE),
    )),
)

NICHE_MAX_VIDEOS = 5
NICHE_MIN_RELATIVE_VIEWS = 120
NICHE_MIN_SCORE = 110
SUCCESS_SAMPLE_SIZE = 3
SUCCESS_FACTOR_LIMIT = 5


@dataclass(frozen=True)
class SuccessFactors:
    common_phrases: List[str]
    tag_suggestions: List[str]


@dataclass(frozen=True)
class CategoryPerformance:
    category: ContentCategory
    name_japanese: str
    count: int
    avg_views: float
    avg_engagement: float
    relative_views_performance: float
    relative_engagement_performance: float
    combined_score: float
    top_performer: Optional[VideoSummary]
    worst_performer: Optional[VideoSummary]
    success_factors: SuccessFactors


@dataclass(frozen=True)
class NichePotential:
    category: ContentCategory
    name_japanese: str
    count: int
    relative_performance: float
    potential_growth: float
    recommendation: str


@dataclass(frozen=True)
class ContentDistribution:
    distribution: Dict[str, float]
    diversification_score: float
    is_balanced: bool
    is_dominated: bool
    dominant_category: Optional[ContentCategory]
    recommendation: str


@dataclass(frozen=True)
class CategoryAnalysis:
    top_format: str
    common_formats: Dict[str, int]
    themes: List[str]
    type_performance: List[CategoryPerformance]
    most_effective_type: Optional[CategoryPerformance]
    least_effective_type: Optional[CategoryPerformance]
    niche_potential: Optional[NichePotential]
    content_distribution: ContentDistribution



def classify_text(text: str) -> ContentCategory:
    for category, patterns in CATEGORY_RULES:
        if any(pattern.search(text) for pattern in patterns):
            return category
    return ContentCategory.OTHER



def classify(video: VideoRecord) -> ContentCategory:
    return classify_text(video.title + " " + " ".join(video.tags))



def _relative(value: float, baseline: float) -> float:
    # A zero channel baseline reads as parity rather than zero performance
    if not baseline:
        return 100.0
    return value / baseline * 100



def _common_items(groups: Sequence[Sequence[str]]) -> List[str]:
    """Items present in at least half of the groups (and in at least two)."""
    threshold = max(2, math.ceil(len(groups) * 0.5))
    counts: Dict[str, int] = {}
    for group in groups:
        for item in dict.fromkeys(group):
            counts[item] = counts.get(item, 0) + 1
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return [item for item, count in ranked if count >= threshold][:SUCCESS_FACTOR_LIMIT]



def success_factors(
    videos: Sequence[VideoRecord],
    stop_words: Sequence[str] = (),
    min_length: int = 2,
) -> SuccessFactors:
    sample = sorted(videos, key=lambda video: video.views, reverse=True)[:SUCCESS_SAMPLE_SIZE]
    return SuccessFactors(
        common_phrases=_common_items([split_words(video.title, stop_words, min_length) for video in sample]),
        tag_suggestions=_common_items([list(video.tags) for video in sample]),
    )



def diversity(counts: Dict[ContentCategory, int]) -> ContentDistribution:
    """Normalized Shannon entropy of the category mix, as a 0-100 score."""
    present = {category: count for category, count in counts.items() if count > 0}
    total = sum(present.values())

    shares = {category: stats.safe_div(count, total) for category, count in present.items()}
    entropy = -sum(share * math.log2(share) for share in shares.values() if share > 0)
    max_entropy = math.log2(len(present)) if len(present) > 1 else 0.0
    score = round(stats.clamp(stats.safe_div(entropy, max_entropy) * 100, 0, 100), 1)

    dominant = max(shares.items(), key=lambda item: item[1])[0] if shares else None
    is_dominated = bool(shares) and max(shares.values()) > 0.6

    if score < 30:
        recommendation = (
            "Your catalogue leans heavily on a single content type. "
            "Test adjacent formats to reach new viewers without abandoning your core audience."
        )
    elif score > 80:
        recommendation = (
            "Your content is spread across many types. "
            "Consolidate around the best-performing formats so the channel identity stays clear."
        )
    else:
        recommendation = (
            "Your content mix is reasonably balanced. "
            "Maintain it while shifting weight toward the formats with the highest combined score."
        )

    return ContentDistribution(
        distribution={category.value: round(share * 100, 1) for category, share in shares.items()},
        diversification_score=score,
        is_balanced=40 <= score <= 70,
        is_dominated=is_dominated,
        dominant_category=dominant,
        recommendation=recommendation,
    )



def analyze_categories(
    videos: Sequence[VideoRecord],
    stop_words: Sequence[str] = (),
    min_length: int = 2,
) -> CategoryAnalysis:
    groups: Dict[ContentCategory, List[VideoRecord]] = {}
    for video in videos:
        groups.setdefault(classify(video), []).append(video)

    channel_avg_views = stats.mean([video.views for video in videos])
    channel_avg_engagement = stats.mean([video.engagement_rate for video in videos])

    performances = []
    for category, members in groups.items():
        avg_views = stats.mean([video.views for video in members])
        avg_engagement = stats.mean([video.engagement_rate for video in members])
        relative_views = _relative(avg_views, channel_avg_views)
        relative_engagement = _relative(avg_engagement, channel_avg_engagement)
        by_views = sorted(members, key=lambda video: video.views, reverse=True)

        performances.append(CategoryPerformance(
            category=category,
            name_japanese=category.display_name,
            count=len(members),
            avg_views=round(avg_views, 1),
            avg_engagement=round(avg_engagement, 2),
            relative_views_performance=round(relative_views, 1),
            relative_engagement_performance=round(relative_engagement, 1),
            combined_score=round((relative_views + relative_engagement) / 2, 1),
            top_performer=VideoSummary.of(by_views[0]),
            worst_performer=VideoSummary.of(by_views[-1]),
            success_factors=success_factors(members, stop_words, min_length),
        ))

    performances.sort(key=lambda item: item.combined_score, reverse=True)

    niche_candidates = [
        item for item in performances
        if item.count < NICHE_MAX_VIDEOS
        and item.relative_views_performance > NICHE_MIN_RELATIVE_VIEWS
        and item.combined_score > NICHE_MIN_SCORE
    ]
    niche = None
    if niche_candidates:
        best = niche_candidates[0]
        growth = round((best.relative_views_performance - 100) / 10, 1)
        niche = NichePotential(
            category=best.category,
            name_japanese=best.name_japanese,
            count=best.count,
            relative_performance=best.relative_views_performance,
            potential_growth=growth,
            recommendation=(
                f"Only {best.count} {best.category.value} videos so far, yet they average "
                f"{best.relative_views_performance:.0f}% of the channel's typical views. "
                f"Producing more of them is the clearest untapped opportunity."
            ),
        )

    counts = {category: len(members) for category, members in groups.items()}
    top_format = max(counts.items(), key=lambda item: item[1])[0].value if counts else "unknown"

    themes = list(dict.fromkeys(tag for video in videos for tag in video.tags))[:10]

    return CategoryAnalysis(
        top_format=top_format,
        common_formats={category.value: count for category, count in counts.items()},
        themes=themes,
        type_performance=performances,
        most_effective_type=performances[0] if performances else None,
        least_effective_type=performances[-1] if len(performances) >= 2 else None,
        niche_potential=niche,
        content_distribution=diversity(counts),
    )
