"""Analysis runner: raw_data.json in, analysis.json and advice.json out."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Callable, Dict, Optional, Union

from channel_analytics.advice import AdviceGenerator, generate_advice
from channel_analytics.config import AnalysisConfig
from channel_analytics.report import analyze
from channel_analytics.serializers import advice_to_dict, extract_summary_metrics, report_to_dict
from channel_analytics.sources import RawDataSource



def _emit(logger: Optional[Callable[[str], None]], message: str) -> None:
    if logger:
        logger(message)



def _write_json(path: Path, data: Dict) -> None:
    with path.open("w", encoding="utf-8") as output_file:
        json.dump(data, output_file, indent=2, ensure_ascii=False)



def run_analysis_pipeline(
    raw_data_path: Union[str, Path],
    config: Optional[AnalysisConfig] = None,
    generator: Optional[AdviceGenerator] = None,
    output_folder: Optional[Union[str, Path]] = None,
    logger: Optional[Callable[[str], None]] = None,
) -> Dict:
    """Run the full analysis and return paths/summary metadata."""
    config = config or AnalysisConfig.from_env()
    raw_data_path = Path(raw_data_path)

    source = RawDataSource.from_file(raw_data_path)
    channel = source.fetch_channel()
    videos = source.fetch_videos(channel.uploads_playlist_id, config.videos_to_fetch)
    _emit(logger, f"Loaded {len(videos)} videos for: {channel.title or source.channel_id}")

    output_root = Path(output_folder) if output_folder else raw_data_path.parent
    output_root.mkdir(parents=True, exist_ok=True)

    report = analyze(videos, channel, config=config, logger=logger)
    analysis_data = report_to_dict(report)
    analysis_path = output_root / "analysis.json"
    _write_json(analysis_path, analysis_data)
    _emit(logger, f"Analysis saved: {analysis_path}")

    _emit(logger, "💡 Structuring advice...")
    advice = generate_advice(report, generator)
    advice_path = output_root / "advice.json"
    _write_json(advice_path, advice_to_dict(advice))
    _emit(logger, f"Advice saved: {advice_path}")

    return {
        "channel_id": source.channel_id,
        "channel_name": channel.title,
        "raw_data_path": str(raw_data_path),
        "analysis_path": str(analysis_path),
        "advice_path": str(advice_path),
        "summary": extract_summary_metrics(analysis_data),
    }
