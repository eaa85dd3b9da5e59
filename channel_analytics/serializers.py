"""Serializer helpers for analysis.json / advice.json output."""

from __future__ import annotations

import dataclasses
from datetime import datetime
from enum import Enum
from typing import Any, Dict



def camel_case(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)



def to_dict(value: Any) -> Any:
    """Recursively turn result dataclasses into JSON-ready data with camelCase keys."""
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {
            camel_case(item.name): to_dict(getattr(value, item.name))
            for item in dataclasses.fields(value)
        }
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, dict):
        return {str(key.value if isinstance(key, Enum) else key): to_dict(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_dict(item) for item in value]
    return value



def report_to_dict(report) -> Dict[str, Any]:
    return to_dict(report)



def advice_to_dict(tree) -> Dict[str, Any]:
    return to_dict(tree)



def extract_summary_metrics(analysis: Dict) -> Dict[str, Any]:
    stats = analysis.get("stats", {})
    return {
        "videos_analyzed": int(analysis.get("count", 0)),
        "avg_views": round(float(stats.get("avgViews", 0)), 1),
        "avg_engagement": round(float(stats.get("avgEngagement", 0)), 2),
        "best_day": analysis.get("posting", {}).get("bestDay") or "",
        "posting_pattern": analysis.get("frequency", {}).get("pattern") or "unknown",
        "top_format": analysis.get("categories", {}).get("topFormat") or "unknown",
    }
