import json
import unittest

from channel_analytics.config import AnalysisConfig
from channel_analytics.models import ChannelRecord, VideoRecord
from channel_analytics.report import analyze, analyze_time_trend
from channel_analytics.serializers import camel_case, extract_summary_metrics, report_to_dict


def _video(video_id, title, published, views, likes, comments=0, duration="PT8M", tags=("test", "channel")):
    return VideoRecord(
        id=video_id,
        title=title,
        published=published,
        duration=duration,
        views=views,
        likes=likes,
        comments=comments,
        tags=tuple(tags),
    )


def _five_videos():
    return [
        _video(f"v{index}", f"Episode {index} recap", f"2025-01-{index * 7 - 6:02d}T10:00:00Z", index * 1000, index * 50)
        for index in range(1, 6)
    ]


class AnalyzeTests(unittest.TestCase):
    def test_end_to_end_summary(self):
        report = analyze(_five_videos(), ChannelRecord(title="Test Channel"))

        self.assertEqual(report.count, 5)
        self.assertAlmostEqual(report.stats.avg_engagement, 5.0)
        self.assertEqual(report.stats.avg_views, 3000)
        self.assertEqual(report.stats.median_views, 3000)
        self.assertEqual(report.top[0].views, 5000)
        self.assertEqual([video.views for video in report.top], [5000, 4000, 3000, 2000, 1000])
        self.assertEqual(report.frequency.pattern, "weekly")
        self.assertEqual(report.tags[0].avg_views, 3000)
        self.assertEqual(report.trend.change, 0)

    def test_derived_fields_are_attached_to_copies(self):
        videos = _five_videos()
        report = analyze(videos, ChannelRecord(title="Test Channel"))
        self.assertIsNone(videos[0].minutes)
        self.assertEqual(report.top[0].minutes, 8)
        self.assertAlmostEqual(report.top[0].engagement, 5.0)

    def test_accepts_data_api_shaped_dicts(self):
        raw = {
            "id": "x1",
            "title": "Raw video",
            "publishedAt": "2025-01-01T10:00:00Z",
            "duration": "PT3M",
            "statistics": {"viewCount": "1000", "likeCount": "50", "commentCount": "oops"},
        }
        report = analyze([raw], {"title": "Raw Channel", "subscriberCount": "12"})
        self.assertEqual(report.channel.subscriber_count, 12)
        self.assertEqual(report.top[0].views, 1000)
        self.assertEqual(report.top[0].comments, 0)

    def test_min_word_length_reaches_category_phrases(self):
        report = analyze(_five_videos(), ChannelRecord(title="T"), config=AnalysisConfig(min_word_length=6))
        phrases = report.categories.type_performance[0].success_factors.common_phrases
        self.assertIn("Episode", phrases)
        self.assertNotIn("recap", phrases)

    def test_top_results_count_is_configurable(self):
        report = analyze(_five_videos(), ChannelRecord(title="T"), config=AnalysisConfig(top_results_count=2))
        self.assertEqual(len(report.top), 2)
        self.assertEqual(len(report.top_engagement), 2)

    def test_empty_channel(self):
        report = analyze([], ChannelRecord(title="Empty"))
        self.assertEqual(report.count, 0)
        self.assertEqual(report.stats.avg_views, 0)
        self.assertEqual(report.top, [])
        self.assertEqual(report.frequency.pattern, "unknown")
        self.assertFalse(report.engagement_growth.has_sufficient_data)

    def test_progress_messages(self):
        messages = []
        analyze(_five_videos(), ChannelRecord(title="Test Channel"), logger=messages.append)
        self.assertTrue(messages)
        self.assertIn("Test Channel", messages[0])


class TimeTrendTests(unittest.TestCase):
    def test_newest_ten_against_oldest_ten(self):
        videos = [
            _video(f"v{day}", "t", f"2025-01-{day:02d}T10:00:00Z", 100 if day <= 10 else 150, 0)
            for day in range(1, 21)
        ]
        trend = analyze_time_trend(videos)
        self.assertEqual(trend.old_avg, 100)
        self.assertEqual(trend.new_avg, 150)
        self.assertAlmostEqual(trend.change, 50.0)

    def test_fewer_than_ten_videos(self):
        trend = analyze_time_trend(_five_videos())
        self.assertEqual((trend.change, trend.new_avg, trend.old_avg), (0, 0, 0))


class SerializationTests(unittest.TestCase):
    def test_camel_case_keys(self):
        self.assertEqual(camel_case("best_day_avg_views"), "bestDayAvgViews")
        self.assertEqual(camel_case("count"), "count")

    def test_report_to_dict_is_json_ready(self):
        data = report_to_dict(analyze(_five_videos(), ChannelRecord(title="Test Channel")))

        self.assertIn("engagementGrowth", data)
        self.assertIn("topEngagement", data)
        self.assertAlmostEqual(data["stats"]["avgEngagement"], 5.0)
        self.assertIn("Monday", data["posting"]["days"])
        self.assertIn("diversificationScore", data["categories"]["contentDistribution"])
        self.assertIsInstance(data["top"][0]["tags"], list)
        json.dumps(data, ensure_ascii=False)

    def test_extract_summary_metrics(self):
        data = report_to_dict(analyze(_five_videos(), ChannelRecord(title="Test Channel")))
        summary = extract_summary_metrics(data)
        self.assertEqual(summary["videos_analyzed"], 5)
        self.assertEqual(summary["avg_views"], 3000)
        self.assertEqual(summary["posting_pattern"], "weekly")


if __name__ == "__main__":
    unittest.main()
