"""Channel analysis: runs every analyzer over one video set and assembles the report."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, List, Mapping, Optional, Sequence, Union

from channel_analytics import stats
from channel_analytics.categories import CategoryAnalysis, analyze_categories
from channel_analytics.config import AnalysisConfig
from channel_analytics.duration import DurationAnalysis, analyze_durations, to_minutes
from channel_analytics.engagement import EngagementGrowthAnalysis, analyze_engagement_growth
from channel_analytics.models import ChannelRecord, VideoRecord
from channel_analytics.posting import (
    PostingAnalysis,
    PostingFrequency,
    ScheduleRecommendation,
    analyze_posting_frequency,
    analyze_posting_patterns,
    optimize_schedule,
)
from channel_analytics.tags import TagStat, analyze_tags
from channel_analytics.titles import TitleAnalysis, analyze_titles

TREND_WINDOW = 10


@dataclass(frozen=True)
class SummaryStats:
    avg_views: float
    median_views: float
    views_std_dev: float
    avg_likes: float
    avg_comments: float
    avg_engagement: float


@dataclass(frozen=True)
class TrendAnalysis:
    change: float
    new_avg: float
    old_avg: float


@dataclass(frozen=True)
class AnalysisReport:
    channel: ChannelRecord
    count: int
    stats: SummaryStats
    tags: List[TagStat]
    titles: TitleAnalysis
    posting: PostingAnalysis
    duration: DurationAnalysis
    trend: TrendAnalysis
    frequency: PostingFrequency
    schedule: ScheduleRecommendation
    categories: CategoryAnalysis
    engagement_growth: EngagementGrowthAnalysis
    top: List[VideoRecord]
    top_engagement: List[VideoRecord]



def _emit(logger: Optional[Callable[[str], None]], message: str) -> None:
    if logger:
        logger(message)



def summary_stats(videos: Sequence[VideoRecord]) -> SummaryStats:
    views = [video.views for video in videos]
    return SummaryStats(
        avg_views=stats.mean(views),
        median_views=stats.median(views),
        views_std_dev=stats.stddev(views),
        avg_likes=stats.mean([video.likes for video in videos]),
        avg_comments=stats.mean([video.comments for video in videos]),
        avg_engagement=stats.mean([video.engagement_rate for video in videos]),
    )



def analyze_time_trend(videos: Sequence[VideoRecord]) -> TrendAnalysis:
    """Mean views of the ten newest uploads against the ten oldest."""
    dated = [(video.published_at, video) for video in videos]
    dated = [(moment, video) for moment, video in dated if moment is not None]
    if len(dated) < TREND_WINDOW:
        return TrendAnalysis(change=0.0, new_avg=0.0, old_avg=0.0)

    dated.sort(key=lambda item: item[0])
    old_avg = stats.mean([video.views for _, video in dated[:TREND_WINDOW]])
    new_avg = stats.mean([video.views for _, video in dated[-TREND_WINDOW:]])
    return TrendAnalysis(
        change=stats.safe_div(new_avg - old_avg, old_avg) * 100,
        new_avg=new_avg,
        old_avg=old_avg,
    )



def _as_record(video: Union[VideoRecord, Mapping[str, Any]]) -> VideoRecord:
    if isinstance(video, VideoRecord):
        return video
    return VideoRecord.from_dict(dict(video))



def analyze(
    videos: Sequence[Union[VideoRecord, Mapping[str, Any]]],
    channel: Union[ChannelRecord, Mapping[str, Any]],
    config: Optional[AnalysisConfig] = None,
    logger: Optional[Callable[[str], None]] = None,
) -> AnalysisReport:
    """Run every analyzer over the same video set and collect one report."""
    config = config or AnalysisConfig()
    if not isinstance(channel, ChannelRecord):
        channel = ChannelRecord.from_dict(dict(channel))

    enriched = [_as_record(video) for video in videos]
    enriched = [video.with_metrics(to_minutes(video.duration)) for video in enriched]
    limit = config.top_results_count

    by_views = sorted(enriched, key=lambda video: video.views, reverse=True)
    top = by_views[:limit]
    bottom = by_views[-limit:] if by_views else []
    top_engagement = sorted(enriched, key=lambda video: video.engagement_rate, reverse=True)[:limit]

    _emit(logger, f"📊 Analyzing {len(enriched)} videos from {channel.title or 'channel'}...")

    _emit(logger, "🏷️  Analyzing tags...")
    tags = analyze_tags(enriched)

    _emit(logger, "📝 Analyzing titles and keywords...")
    titles = analyze_titles(enriched, top, bottom, config)

    _emit(logger, "📅 Analyzing posting patterns...")
    posting = analyze_posting_patterns(enriched)
    frequency = analyze_posting_frequency(enriched)
    schedule = optimize_schedule(posting, frequency, len(enriched))

    _emit(logger, "⏱️ Analyzing durations...")
    duration = analyze_durations(enriched)

    _emit(logger, "🗂️ Classifying content categories...")
    categories = analyze_categories(enriched, tuple(config.stop_words), config.min_word_length)

    _emit(logger, "📈 Correlating engagement with growth...")
    engagement_growth = analyze_engagement_growth(enriched)

    return AnalysisReport(
        channel=channel,
        count=len(enriched),
        stats=summary_stats(enriched),
        tags=tags,
        titles=titles,
        posting=posting,
        duration=duration,
        trend=analyze_time_trend(enriched),
        frequency=frequency,
        schedule=schedule,
        categories=categories,
        engagement_growth=engagement_growth,
        top=top,
        top_engagement=top_engagement,
    )
