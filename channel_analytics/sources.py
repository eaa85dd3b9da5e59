"""
Data sources for the analytics engine

The engine only needs two things from the outside world: a channel record
and up to N video records for its uploads playlist. RawDataSource serves both
from a saved raw_data.json snapshot, shaped like the YouTube Data API
responses: {"channel": {...}, "videos": [...], "metadata": {...}}.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol, Union

from channel_analytics.models import ChannelRecord, VideoRecord


class ChannelNotFoundError(ValueError):
    """Raised when a channel source has no channel for the given identifier."""


class VideoSource(Protocol):
    def fetch_videos(self, playlist_id: str, count: int) -> List[VideoRecord]:
        """Return up to `count` videos; fewer is not an error."""


class ChannelSource(Protocol):
    def fetch_channel(self, channel_id: Optional[str] = None) -> ChannelRecord:
        """Return the channel or raise ChannelNotFoundError."""


class RawDataSource:
    def __init__(self, raw_data: Dict[str, Any]):
        if not isinstance(raw_data, dict):
            raise ValueError("Raw data must be a JSON object with 'channel' and 'videos'")
        self.raw_data = raw_data
        self.channel_data = raw_data.get("channel") or {}
        self.videos_data = raw_data.get("videos") or []

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "RawDataSource":
        raw_path = Path(path)
        if not raw_path.exists():
            raise ValueError(f"Raw data file not found: {raw_path}")
        try:
            with raw_path.open("r", encoding="utf-8") as raw_file:
                data = json.load(raw_file)
        except json.JSONDecodeError as exc:
            raise ValueError(f"Raw data file is not valid JSON: {raw_path} ({exc})") from exc
        return cls(data)

    @property
    def channel_id(self) -> str:
        return str(self.channel_data.get("id") or "")

    def fetch_channel(self, channel_id: Optional[str] = None) -> ChannelRecord:
        if not self.channel_data:
            raise ChannelNotFoundError("Channel not found in raw data")
        if channel_id and self.channel_id and channel_id != self.channel_id:
            raise ChannelNotFoundError(f"Channel not found: {channel_id}")
        return ChannelRecord.from_dict(self.channel_data)

    def fetch_videos(self, playlist_id: str = "", count: int = 0) -> List[VideoRecord]:
        """Videos from the snapshot; the playlist id is ignored since a snapshot holds one channel."""
        videos = [VideoRecord.from_dict(item) for item in self.videos_data if isinstance(item, dict)]
        if count > 0:
            return videos[:count]
        return videos


class TextFileAdviceGenerator:
    """Advice generator that returns previously generated text from disk."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def generate(self, prompt: str) -> str:
        return self.path.read_text(encoding="utf-8")
