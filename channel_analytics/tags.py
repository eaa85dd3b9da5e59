"""Tag performance aggregation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Sequence

from channel_analytics.models import VideoRecord

MIN_TAG_USES = 2


@dataclass(frozen=True)
class TagStat:
    tag: str
    count: int
    avg_views: float



def analyze_tags(videos: Sequence[VideoRecord]) -> List[TagStat]:
    """Average views per tag, for tags used on at least two videos."""
    uses: Dict[str, int] = {}
    views: Dict[str, int] = {}

    for video in videos:
        for tag in video.tags:
            uses[tag] = uses.get(tag, 0) + 1
            views[tag] = views.get(tag, 0) + video.views

    stats = [
        TagStat(tag=tag, count=count, avg_views=views[tag] / count)
        for tag, count in uses.items()
        if count >= MIN_TAG_USES
    ]
    stats.sort(key=lambda item: item.avg_views, reverse=True)
    return stats
