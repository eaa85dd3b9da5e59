"""Core records shared by every analyzer."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from dateutil import parser as dateparser



def _to_int(value: Any) -> int:
    """Coerce an upstream count to a non-negative int, 0 when malformed."""
    if isinstance(value, bool):
        return 0
    try:
        number = int(float(value))
    except (TypeError, ValueError, OverflowError):
        return 0
    return max(0, number)



def parse_published(raw_value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO publish timestamp, keeping the wall-clock time of its offset."""
    if not raw_value:
        return None
    try:
        parsed = dateparser.parse(raw_value)
    except (ValueError, OverflowError, TypeError):
        return None
    if parsed is None:
        return None
    return parsed.replace(tzinfo=None) if parsed.tzinfo else parsed



def engagement_rate(likes: int, views: int) -> float:
    """Likes per view as a percentage."""
    if views <= 0:
        return 0.0
    return likes * 100 / views


class ContentCategory(str, Enum):
    DISCUSSION = "discussion"
    HOWTO = "howto"
    RANKING = "ranking"
    REACTION = "reaction"
    REVIEW = "review"
    VLOG = "vlog"
    OTHER = "other"

    @property
    def display_name(self) -> str:
        return CATEGORY_DISPLAY_NAMES[self]


CATEGORY_DISPLAY_NAMES = {
    ContentCategory.DISCUSSION: "考察/分析",
    ContentCategory.HOWTO: "ハウツー/解説",
    ContentCategory.RANKING: "ランキング/おすすめ",
    ContentCategory.REACTION: "リアクション",
    ContentCategory.REVIEW: "レビュー/紹介",
    ContentCategory.VLOG: "Vlog/日常",
    ContentCategory.OTHER: "オリジナルコンテンツ",
}


@dataclass(frozen=True)
class VideoRecord:
    id: str
    title: str
    published: str
    duration: str
    views: int
    likes: int
    comments: int
    tags: Tuple[str, ...] = ()
    minutes: Optional[float] = None
    engagement: Optional[float] = None

    @staticmethod
    def from_dict(raw: Dict[str, Any]) -> "VideoRecord":
        """
        Build a record from either the flat shape or the Data API shape.

        Flat:     {"views": 10, "likes": 1, "comments": 0, "published": ...}
        Data API: {"statistics": {"viewCount": 10, ...}, "publishedAt": ...}
        """
        statistics = raw.get("statistics") or {}
        tags = raw.get("tags") or []
        if isinstance(tags, str):
            tags = [tags]
        return VideoRecord(
            id=str(raw.get("id") or ""),
            title=str(raw.get("title") or ""),
            published=str(raw.get("published") or raw.get("publishedAt") or ""),
            duration=str(raw.get("duration") or ""),
            views=_to_int(raw.get("views", statistics.get("viewCount", 0))),
            likes=_to_int(raw.get("likes", statistics.get("likeCount", 0))),
            comments=_to_int(raw.get("comments", statistics.get("commentCount", 0))),
            tags=tuple(str(tag) for tag in tags),
        )

    @property
    def engagement_rate(self) -> float:
        if self.engagement is not None:
            return self.engagement
        return engagement_rate(self.likes, self.views)

    @property
    def published_at(self) -> Optional[datetime]:
        return parse_published(self.published)

    def with_metrics(self, minutes: Optional[float] = None) -> "VideoRecord":
        """Return a copy carrying the derived engagement (and minutes when given)."""
        return replace(
            self,
            engagement=engagement_rate(self.likes, self.views),
            minutes=minutes if minutes is not None else self.minutes,
        )


@dataclass(frozen=True)
class ChannelRecord:
    title: str
    description: str = ""
    subscriber_count: int = 0
    video_count: int = 0
    view_count: int = 0
    uploads_playlist_id: str = ""

    @staticmethod
    def from_dict(raw: Dict[str, Any]) -> "ChannelRecord":
        return ChannelRecord(
            title=str(raw.get("title") or ""),
            description=str(raw.get("description") or ""),
            subscriber_count=_to_int(raw.get("subscriberCount", 0)),
            video_count=_to_int(raw.get("videoCount", 0)),
            view_count=_to_int(raw.get("viewCount", 0)),
            uploads_playlist_id=str(raw.get("uploadsPlaylistId") or ""),
        )


@dataclass(frozen=True)
class VideoSummary:
    id: str
    title: str
    views: int
    engagement: float

    @staticmethod
    def of(video: VideoRecord) -> "VideoSummary":
        return VideoSummary(
            id=video.id,
            title=video.title,
            views=video.views,
            engagement=round(video.engagement_rate, 2),
        )
