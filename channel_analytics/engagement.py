"""
Engagement / growth correlation

Asks whether a well-engaged upload is followed by a better performing next
upload. Works on the chronological sequence of videos:
- trend of engagement and view growth between the first and second half
- lagged Pearson correlation: engagement[i] against growth[i + 1]
- growth following above- vs below-average engagement uploads
- shared traits of the most and least engaging uploads
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import List, Sequence

from channel_analytics import stats
from channel_analytics.models import VideoRecord

MIN_VIDEOS = 5
STRONG_CORRELATION = 0.5
ACTIONABLE_CORRELATION = 0.3
COHORT_SIZE = 3


@dataclass(frozen=True)
class EngagementPoint:
    video: VideoRecord
    published_at: datetime
    engagement: float
    growth: float


@dataclass(frozen=True)
class TrendDelta:
    first_half_avg: float
    second_half_avg: float
    change_percentage: float
    is_improving: bool
    trend_description: str


@dataclass(frozen=True)
class EngagementComparison:
    high_engagement_growth: float
    low_engagement_growth: float
    difference_percentage: float


@dataclass(frozen=True)
class EngagementGrowthAnalysis:
    has_sufficient_data: bool
    correlation_score: float
    is_strong_correlation: bool
    engagement_trend: TrendDelta
    growth_rate_trend: TrendDelta
    engagement_comparison_data: EngagementComparison
    high_engagement_features: List[str]
    low_engagement_features: List[str]
    insight: str
    recommendations_based_on_correlation: List[str]



def extract_common_features(points: Sequence[EngagementPoint]) -> List[str]:
    """Traits shared across a small cohort of uploads."""
    if not points:
        return []

    features = []

    comment_ratio = stats.mean([
        stats.safe_div(point.video.comments, point.video.likes) for point in points
    ])
    if comment_ratio > 0.1:
        features.append("participatory content (high comment-to-like ratio)")

    title_length = stats.mean([len(point.video.title) for point in points])
    if title_length < 30:
        features.append("concise titles")
    elif title_length > 50:
        features.append("detailed titles")

    hours = [point.published_at.hour for point in points]
    if len(set(hours)) < len(hours):
        features.append("posts at a consistent time")

    weekdays = [point.published_at.weekday() for point in points]
    if len(set(weekdays)) < len(weekdays):
        features.append("posts on a consistent weekday")

    return features



def _describe(change: float) -> str:
    magnitude = abs(change)
    if magnitude < 5:
        return "stable"
    if magnitude < 20:
        return "slightly improving" if change > 0 else "slightly declining"
    return "improving strongly" if change > 0 else "declining strongly"



def _trend(first: Sequence[float], second: Sequence[float], relative: bool) -> TrendDelta:
    first_avg = stats.mean(first)
    second_avg = stats.mean(second)
    if relative:
        change = stats.safe_div(second_avg - first_avg, abs(first_avg)) * 100
    else:
        change = second_avg - first_avg
    return TrendDelta(
        first_half_avg=round(first_avg, 2),
        second_half_avg=round(second_avg, 2),
        change_percentage=round(change, 2),
        is_improving=change > 0,
        trend_description=_describe(change),
    )



def _timeline(videos: Sequence[VideoRecord]) -> List[EngagementPoint]:
    dated = [(video.published_at, video) for video in videos]
    dated = sorted(
        ((moment, video) for moment, video in dated if moment is not None),
        key=lambda item: item[0],
    )

    points = []
    previous_views = None
    for moment, video in dated:
        growth = 0.0
        if previous_views is not None:
            growth = stats.safe_div(video.views - previous_views, previous_views) * 100
        points.append(EngagementPoint(
            video=video,
            published_at=moment,
            engagement=video.engagement_rate,
            growth=growth,
        ))
        previous_views = video.views
    return points



def _insight(correlation: float) -> str:
    if correlation > STRONG_CORRELATION:
        return (
            f"Strong positive link (r = {correlation:.2f}): uploads with high engagement "
            "tend to be followed by uploads that grow faster. Engagement is feeding your reach."
        )
    if correlation < -STRONG_CORRELATION:
        return (
            f"Strong negative link (r = {correlation:.2f}): highly engaging uploads tend to be "
            "followed by weaker ones. Your most engaged audience may not be the one driving new views."
        )
    return (
        f"Weak or no link (r = {correlation:.2f}) between an upload's engagement and the next "
        "upload's growth. Growth on this channel is driven by other factors."
    )



def _recommendations(
    correlation: float,
    comparison: EngagementComparison,
    high_features: Sequence[str],
) -> List[str]:
    if correlation > ACTIONABLE_CORRELATION:
        recommendations = [
            "Double down on engagement: ask a concrete question in every video and pin a comment that invites replies.",
        ]
        if high_features:
            recommendations.append(
                "Replicate what your most engaging uploads share: " + ", ".join(high_features) + "."
            )
        recommendations.append(
            f"Uploads after high-engagement videos grew {comparison.high_engagement_growth:.1f}% "
            f"versus {comparison.low_engagement_growth:.1f}% after low-engagement ones "
            f"({comparison.difference_percentage:+.1f} points)."
        )
        return recommendations

    if correlation < -ACTIONABLE_CORRELATION:
        return [
            "Engagement and the next upload's growth move in opposite directions, which is unusual. "
            "Check whether highly engaging videos target a narrow existing audience rather than new viewers.",
            "Balance community-focused uploads with broader, search-friendly topics.",
        ]

    return [
        "Engagement is not what moves growth here; focus on titles, thumbnails and topic selection.",
        "Test posting times and days, since discovery rather than audience interaction is the lever.",
    ]



def _insufficient() -> EngagementGrowthAnalysis:
    flat = TrendDelta(0.0, 0.0, 0.0, False, "insufficient data")
    return EngagementGrowthAnalysis(
        has_sufficient_data=False,
        correlation_score=0.0,
        is_strong_correlation=False,
        engagement_trend=flat,
        growth_rate_trend=flat,
        engagement_comparison_data=EngagementComparison(0.0, 0.0, 0.0),
        high_engagement_features=[],
        low_engagement_features=[],
        insight=f"Insufficient data: at least {MIN_VIDEOS} dated videos are needed to relate engagement to growth.",
        recommendations_based_on_correlation=[],
    )



def analyze_engagement_growth(videos: Sequence[VideoRecord]) -> EngagementGrowthAnalysis:
    points = _timeline(videos)
    if len(points) < MIN_VIDEOS:
        return _insufficient()

    engagement = [point.engagement for point in points]
    growth = [point.growth for point in points]

    middle = len(points) // 2
    engagement_trend = _trend(engagement[:middle], engagement[middle:], relative=True)
    growth_trend = _trend(growth[:middle], growth[middle:], relative=False)

    correlation = stats.pearson(engagement[:-1], growth[1:])

    average_engagement = stats.mean(engagement)
    after_high = [growth[i + 1] for i in range(len(points) - 1) if engagement[i] > average_engagement]
    after_low = [growth[i + 1] for i in range(len(points) - 1) if engagement[i] <= average_engagement]
    high_growth = stats.mean(after_high)
    low_growth = stats.mean(after_low)
    comparison = EngagementComparison(
        high_engagement_growth=round(high_growth, 2),
        low_engagement_growth=round(low_growth, 2),
        difference_percentage=round(high_growth - low_growth, 2),
    )

    by_engagement = sorted(points, key=lambda point: point.engagement, reverse=True)
    high_features = extract_common_features(by_engagement[:COHORT_SIZE])
    low_features = extract_common_features(by_engagement[::-1][:COHORT_SIZE])

    return EngagementGrowthAnalysis(
        has_sufficient_data=True,
        correlation_score=round(correlation, 3),
        is_strong_correlation=abs(correlation) > STRONG_CORRELATION,
        engagement_trend=engagement_trend,
        growth_rate_trend=growth_trend,
        engagement_comparison_data=comparison,
        high_engagement_features=high_features,
        low_engagement_features=low_features,
        insight=_insight(correlation),
        recommendations_based_on_correlation=_recommendations(correlation, comparison, high_features),
    )
