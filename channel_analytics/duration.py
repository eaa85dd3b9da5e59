"""
Video duration analysis

Groups videos into six fixed length buckets, finds the lengths that earn the
most views and engagement, compares against genre norms and flags a gap
between what the channel produces most and what performs best.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from channel_analytics import stats
from channel_analytics.categories import classify
from channel_analytics.models import ContentCategory, VideoRecord

HOURS_PATTERN = re.compile(r"(\d+)H")
MINUTES_PATTERN = re.compile(r"(\d+)M")
SECONDS_PATTERN = re.compile(r"(\d+)S")

# (label, lower bound inclusive, upper bound exclusive) in minutes
DURATION_BUCKETS: Tuple[Tuple[str, float, Optional[float]], ...] = (
    ("0-3min", 0, 3),
    ("3-5min", 3, 5),
    ("5-10min", 5, 10),
    ("10-15min", 10, 15),
    ("15-20min", 15, 20),
    ("20min+", 20, None),
)

REPRESENTATIVE_VIDEOS = 5
MIN_VIDEOS_FOR_OPTIMAL = 2
MIN_VIDEOS_FOR_OPPORTUNITY = 3

GENRE_DURATION_RANGES: Dict[ContentCategory, Tuple[int, int]] = {
    ContentCategory.DISCUSSION: (10, 20),
    ContentCategory.HOWTO: (5, 15),
    ContentCategory.RANKING: (8, 15),
    ContentCategory.REACTION: (5, 12),
    ContentCategory.REVIEW: (8, 15),
    ContentCategory.VLOG: (8, 20),
    ContentCategory.OTHER: (5, 15),
}


@dataclass(frozen=True)
class DurationBucket:
    label: str
    min_minutes: float
    max_minutes: Optional[float]
    count: int
    total_views: int
    total_engagement: float
    avg_views: float
    avg_engagement: float
    videos: List[VideoRecord]


@dataclass(frozen=True)
class GenreDurationRecommendation:
    main_genre: ContentCategory
    main_genre_name: str
    video_count: int
    average_minutes: float
    recommended_min_minutes: float
    recommended_max_minutes: float
    general_min_minutes: int
    general_max_minutes: int
    recommendation: str


@dataclass(frozen=True)
class GrowthOpportunity:
    current_focus: str
    current_focus_count: int
    recommended_range: str
    reason_views: int
    reason_engagement: float
    recommendation: str


@dataclass(frozen=True)
class DurationAnalysis:
    avg_minutes: float
    best: List[VideoRecord]
    buckets: List[DurationBucket]
    optimal_for_views: Optional[str]
    optimal_for_engagement: Optional[str]
    genre_recommendation: Optional[GenreDurationRecommendation]
    growth_opportunity: Optional[GrowthOpportunity]


@dataclass
class _BucketTotals:
    label: str
    min_minutes: float
    max_minutes: Optional[float]
    count: int = 0
    views: int = 0
    engagement: float = 0.0
    videos: List[VideoRecord] = field(default_factory=list)

    def add(self, video: VideoRecord) -> None:
        self.count += 1
        self.views += video.views
        self.engagement += video.engagement_rate

        if len(self.videos) < REPRESENTATIVE_VIDEOS:
            self.videos.append(video)
            return
        weakest = min(range(len(self.videos)), key=lambda index: self.videos[index].views)
        if video.views > self.videos[weakest].views:
            self.videos[weakest] = video

    def freeze(self) -> DurationBucket:
        return DurationBucket(
            label=self.label,
            min_minutes=self.min_minutes,
            max_minutes=self.max_minutes,
            count=self.count,
            total_views=self.views,
            total_engagement=round(self.engagement, 2),
            avg_views=round(stats.safe_div(self.views, self.count), 1),
            avg_engagement=round(stats.safe_div(self.engagement, self.count), 2),
            videos=sorted(self.videos, key=lambda video: video.views, reverse=True),
        )



def to_minutes(iso_duration: str) -> float:
    """
    Convert an ISO 8601 duration to minutes using its H/M/S parts.
    Example: PT1H2M3S = 62.05 minutes
    """
    text = iso_duration or ""
    hours = HOURS_PATTERN.search(text)
    minutes = MINUTES_PATTERN.search(text)
    seconds = SECONDS_PATTERN.search(text)
    return (
        int(hours.group(1) if hours else 0) * 60
        + int(minutes.group(1) if minutes else 0)
        + int(seconds.group(1) if seconds else 0) / 60
    )



def bucket_for(minutes: float) -> str:
    for label, lower, upper in DURATION_BUCKETS:
        if minutes >= lower and (upper is None or minutes < upper):
            return label
    return DURATION_BUCKETS[0][0]



def _performance_score(bucket: DurationBucket) -> float:
    return bucket.avg_views * (1 + bucket.avg_engagement / 100)



def genre_recommendation(videos: Sequence[VideoRecord]) -> Optional[GenreDurationRecommendation]:
    genres: Dict[ContentCategory, List[VideoRecord]] = {}
    for video in videos:
        genres.setdefault(classify(video), []).append(video)
    if not genres:
        return None

    main_genre, members = max(genres.items(), key=lambda item: len(item[1]))
    average = stats.mean([video.minutes or 0.0 for video in members])
    low = max(1.0, round(average * 0.8, 1))
    high = max(1.0, round(average * 1.2, 1))
    general_min, general_max = GENRE_DURATION_RANGES[main_genre]

    return GenreDurationRecommendation(
        main_genre=main_genre,
        main_genre_name=main_genre.display_name,
        video_count=len(members),
        average_minutes=round(average, 1),
        recommended_min_minutes=low,
        recommended_max_minutes=high,
        general_min_minutes=general_min,
        general_max_minutes=general_max,
        recommendation=(
            f"Your main genre is {main_genre.value} ({len(members)} videos). "
            f"For this channel aim for {low:g}-{high:g} minutes; "
            f"{main_genre.value} content generally performs well at {general_min}-{general_max} minutes."
        ),
    )



def growth_opportunity(buckets: Sequence[DurationBucket]) -> Optional[GrowthOpportunity]:
    populated = [bucket for bucket in buckets if bucket.count >= 1]
    if not populated:
        return None

    best = max(populated, key=_performance_score)
    most_produced = max(populated, key=lambda bucket: bucket.count)
    if best.label == most_produced.label or most_produced.count < MIN_VIDEOS_FOR_OPPORTUNITY:
        return None

    views_gap = int(round(best.avg_views - most_produced.avg_views))
    engagement_gap = round(best.avg_engagement - most_produced.avg_engagement, 2)
    return GrowthOpportunity(
        current_focus=most_produced.label,
        current_focus_count=most_produced.count,
        recommended_range=best.label,
        reason_views=views_gap,
        reason_engagement=engagement_gap,
        recommendation=(
            f"Most uploads are {most_produced.label} ({most_produced.count} videos), but {best.label} "
            f"videos average {views_gap:+,} views and {engagement_gap:+.2f} engagement points. "
            f"Shift part of the schedule toward {best.label} videos."
        ),
    )



def analyze_durations(videos: Sequence[VideoRecord]) -> DurationAnalysis:
    timed = [video.with_metrics(to_minutes(video.duration)) for video in videos]

    totals = [_BucketTotals(label, lower, upper) for label, lower, upper in DURATION_BUCKETS]
    index = {item.label: item for item in totals}
    for video in timed:
        index[bucket_for(video.minutes or 0.0)].add(video)
    buckets = [item.freeze() for item in totals]

    qualified = [bucket for bucket in buckets if bucket.count >= MIN_VIDEOS_FOR_OPTIMAL]
    optimal_views = max(qualified, key=lambda bucket: bucket.avg_views).label if qualified else None
    optimal_engagement = max(qualified, key=lambda bucket: bucket.avg_engagement).label if qualified else None

    return DurationAnalysis(
        avg_minutes=stats.mean([video.minutes for video in timed if video.minutes]),
        best=sorted(timed, key=lambda video: video.views, reverse=True)[:REPRESENTATIVE_VIDEOS],
        buckets=buckets,
        optimal_for_views=optimal_views,
        optimal_for_engagement=optimal_engagement,
        genre_recommendation=genre_recommendation(timed),
        growth_opportunity=growth_opportunity(buckets),
    )
