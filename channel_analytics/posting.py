"""
Posting pattern & frequency analysis

Covers:
- Per-weekday performance
- Interval statistics between uploads and a consistency label
- Publish-hour performance
- A schedule optimizer proposing an achievable cadence
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, List, Sequence, Tuple

from channel_analytics import stats
from channel_analytics.models import VideoRecord

DAY_NAMES = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")

MIN_VIDEOS_FOR_FREQUENCY = 3
MIN_VIDEOS_FOR_SCHEDULE = 5
MIN_POSTS_PER_HOUR = 3

UNKNOWN_PATTERN = "unknown"
IRREGULAR_PATTERN = "irregular"

# (upper bound on mean gap in days, label), checked in order
FREQUENCY_PATTERNS = (
    (1.5, "daily"),
    (3.5, "every 2-3 days"),
    (7.5, "weekly"),
    (14.5, "biweekly"),
    (31.0, "monthly"),
)
LESS_THAN_MONTHLY = "less than monthly"


@dataclass(frozen=True)
class DayStats:
    count: int
    views: int
    engagement: float
    avg_views: float
    avg_engagement: float


@dataclass(frozen=True)
class PostingAnalysis:
    best_day: str
    best_day_avg_views: float
    days: Dict[str, DayStats]


@dataclass(frozen=True)
class HourStats:
    hour: int
    count: int
    avg_views: float
    avg_engagement: float


@dataclass(frozen=True)
class PostingFrequency:
    days_between_posts: float
    interval_std_dev: float
    is_consistent: bool
    discipline_score: float
    pattern: str
    posts_per_month: float
    preferred_days: List[str]
    best_hours: List[HourStats]


@dataclass(frozen=True)
class ScheduleRecommendation:
    has_sufficient_data: bool
    recommended_days: List[str]
    recommended_frequency: str
    sustainability_score: int
    notes: List[str]
    recommendation: str



def _weekday_name(moment: datetime) -> str:
    # datetime.weekday() is Monday=0; DAY_NAMES starts on Sunday
    return DAY_NAMES[(moment.weekday() + 1) % 7]



def _dated(videos: Sequence[VideoRecord]) -> List[Tuple[datetime, VideoRecord]]:
    dated = []
    for video in videos:
        published_at = video.published_at
        if published_at is not None:
            dated.append((published_at, video))
    return dated



def analyze_posting_patterns(videos: Sequence[VideoRecord]) -> PostingAnalysis:
    """Views and engagement aggregated per weekday."""
    totals = {day: {"count": 0, "views": 0, "engagement": 0.0} for day in DAY_NAMES}

    for published_at, video in _dated(videos):
        bucket = totals[_weekday_name(published_at)]
        bucket["count"] += 1
        bucket["views"] += video.views
        bucket["engagement"] += video.engagement_rate

    days = {
        day: DayStats(
            count=data["count"],
            views=data["views"],
            engagement=data["engagement"],
            avg_views=stats.safe_div(data["views"], data["count"]),
            avg_engagement=stats.safe_div(data["engagement"], data["count"]),
        )
        for day, data in totals.items()
    }

    posted = [(day, data) for day, data in days.items() if data.count]
    if not posted:
        return PostingAnalysis(best_day="", best_day_avg_views=0.0, days=days)

    best_day, best = max(posted, key=lambda item: item[1].avg_views)
    return PostingAnalysis(best_day=best_day, best_day_avg_views=best.avg_views, days=days)



def post_intervals(videos: Sequence[VideoRecord]) -> List[int]:
    """Whole-day gaps between consecutive uploads, oldest first (rounded up)."""
    moments = sorted(published_at for published_at, _ in _dated(videos))
    gaps = []
    for previous, current in zip(moments, moments[1:]):
        seconds = abs((current - previous).total_seconds())
        gaps.append(math.ceil(seconds / 86400))
    return gaps



def discipline_score(mean_gap: float, std_gap: float) -> float:
    """0-100 regularity score from the coefficient of variation of gaps."""
    if mean_gap <= 0:
        return 0.0
    return stats.clamp(100 - 100 * std_gap / mean_gap, 0, 100)



def frequency_pattern(mean_gap: float, is_consistent: bool) -> str:
    if not is_consistent:
        return IRREGULAR_PATTERN
    for upper_bound, label in FREQUENCY_PATTERNS:
        if mean_gap <= upper_bound:
            return label
    return LESS_THAN_MONTHLY



def analyze_posting_hours(videos: Sequence[VideoRecord]) -> List[HourStats]:
    """Top three publish hours by average views, among hours with 3+ uploads."""
    buckets: Dict[int, List[VideoRecord]] = {}
    for published_at, video in _dated(videos):
        buckets.setdefault(published_at.hour, []).append(video)

    hours = [
        HourStats(
            hour=hour,
            count=len(members),
            avg_views=stats.mean([video.views for video in members]),
            avg_engagement=stats.mean([video.engagement_rate for video in members]),
        )
        for hour, members in sorted(buckets.items())
        if len(members) >= MIN_POSTS_PER_HOUR
    ]
    hours.sort(key=lambda item: item.avg_views, reverse=True)
    return hours[:3]



def analyze_posting_frequency(videos: Sequence[VideoRecord]) -> PostingFrequency:
    if len(videos) < MIN_VIDEOS_FOR_FREQUENCY:
        return PostingFrequency(
            days_between_posts=0.0,
            interval_std_dev=0.0,
            is_consistent=False,
            discipline_score=0.0,
            pattern=UNKNOWN_PATTERN,
            posts_per_month=0.0,
            preferred_days=[],
            best_hours=[],
        )

    gaps = post_intervals(videos)
    mean_gap = stats.mean(gaps)
    std_gap = stats.stddev(gaps)
    is_consistent = std_gap < mean_gap * 0.5

    day_counts = {day: 0 for day in DAY_NAMES}
    for published_at, _ in _dated(videos):
        day_counts[_weekday_name(published_at)] += 1
    preferred_days = [
        day for day, count in sorted(day_counts.items(), key=lambda item: item[1], reverse=True)
        if count > 0
    ]

    return PostingFrequency(
        days_between_posts=round(mean_gap, 1),
        interval_std_dev=round(std_gap, 2),
        is_consistent=is_consistent,
        discipline_score=round(discipline_score(mean_gap, std_gap), 1),
        pattern=frequency_pattern(mean_gap, is_consistent),
        posts_per_month=round(30 / max(1.0, mean_gap), 1),
        preferred_days=preferred_days[:3],
        best_hours=analyze_posting_hours(videos),
    )



def _achievable_cadence(mean_gap: float, discipline: float, current_pattern: str) -> Tuple[str, int]:
    """Pick a frequency the channel can sustain, with a 0-100 sustainability score."""
    if mean_gap <= 3.5:
        if discipline >= 70:
            return f"keep the current pace ({current_pattern})", 90
        return "3-4 times per week", 70

    if mean_gap <= 7.5:
        if discipline >= 60:
            return f"keep the current pace ({current_pattern})", 85
        return "weekly", 75

    if mean_gap <= 14.5 and discipline >= 60:
        return "weekly", 70

    # Always ask for a shorter gap than the current one
    target_gap = max(5.0, mean_gap * 0.8)
    if target_gap <= 7.5:
        label = "weekly"
    else:
        label = f"every {round(target_gap)} days"
    return label, 65 if discipline >= 50 else 55



def optimize_schedule(
    posting: PostingAnalysis,
    frequency: PostingFrequency,
    video_count: int,
) -> ScheduleRecommendation:
    ranked_days = sorted(
        ((day, data) for day, data in posting.days.items() if data.count),
        key=lambda item: item[1].avg_views,
        reverse=True,
    )

    if len(ranked_days) < 2 or video_count < MIN_VIDEOS_FOR_SCHEDULE:
        return ScheduleRecommendation(
            has_sufficient_data=False,
            recommended_days=[],
            recommended_frequency="insufficient data",
            sustainability_score=0,
            notes=[],
            recommendation=(
                "Not enough upload history to recommend a schedule yet. "
                "Publish at least five videos across two or more weekdays and re-run the analysis."
            ),
        )

    recommended_days = [day for day, _ in ranked_days[:3]]
    cadence, sustainability = _achievable_cadence(
        frequency.days_between_posts,
        frequency.discipline_score,
        frequency.pattern,
    )

    notes = []
    if frequency.best_hours:
        hours = ", ".join(f"{item.hour:02d}:00" for item in frequency.best_hours)
        notes.append(f"Uploads published around {hours} have drawn the most views.")

    most_posted = set(frequency.preferred_days[:2])
    most_viewed = {day for day, _ in ranked_days[:2]}
    if most_posted and most_posted != most_viewed:
        notes.append(
            f"You post most often on {' and '.join(frequency.preferred_days[:2])}, "
            f"but {' and '.join(day for day, _ in ranked_days[:2])} uploads average more views."
        )
    elif not frequency.is_consistent:
        notes.append(
            f"Your upload interval is irregular; fix releases to {', '.join(recommended_days)} "
            "so viewers learn when to expect new videos."
        )

    recommendation = (
        f"Publish on {', '.join(recommended_days)} at a cadence of {cadence}. "
        + " ".join(notes)
        + (" " if notes else "")
        + f"Sustainability score: {sustainability}/100."
    )

    return ScheduleRecommendation(
        has_sufficient_data=True,
        recommended_days=recommended_days,
        recommended_frequency=cadence,
        sustainability_score=sustainability,
        notes=notes,
        recommendation=recommendation,
    )
