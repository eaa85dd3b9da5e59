#!/usr/bin/env python3
"""
YouTube Channel Growth Analytics
Analyzes a saved channel snapshot and writes analysis.json and advice.json

Usage:
    python3 main.py path/to/raw_data.json [path/to/generated_advice.txt]
"""

import sys

from channel_analytics.config import AnalysisConfig
from channel_analytics.runner import run_analysis_pipeline
from channel_analytics.sources import ChannelNotFoundError, TextFileAdviceGenerator


def main():
    if len(sys.argv) < 2:
        print("Usage: python3 main.py path/to/raw_data.json [path/to/generated_advice.txt]")
        sys.exit(1)

    raw_data_path = sys.argv[1]
    generator = TextFileAdviceGenerator(sys.argv[2]) if len(sys.argv) > 2 else None

    print(f"\n🚀 Analyzing: {raw_data_path}")
    try:
        result = run_analysis_pipeline(
            raw_data_path,
            config=AnalysisConfig.from_env(),
            generator=generator,
            logger=print,
        )
    except ChannelNotFoundError as e:
        print(f"\n❌ Channel Error: {e}")
        sys.exit(1)
    except ValueError as e:
        print(f"\n❌ Validation Error: {e}")
        sys.exit(1)
    except Exception as e:
        print(f"\n❌ Error: {e}")
        import traceback
        traceback.print_exc()
        sys.exit(1)

    summary = result["summary"]
    print(f"\n📊 Videos analyzed: {summary['videos_analyzed']}")
    print(f"   Average views: {summary['avg_views']:,.0f}")
    print(f"   Average engagement: {summary['avg_engagement']:.2f}%")
    print(f"   Posting pattern: {summary['posting_pattern']}")
    print(f"   Best day: {summary['best_day'] or 'n/a'}")
    print(f"   Top format: {summary['top_format']}")
    print(f"\n✨ Analysis: {result['analysis_path']}")
    print(f"✨ Advice: {result['advice_path']}")
    print("\n✅ Analysis Complete!")


if __name__ == "__main__":
    main()
