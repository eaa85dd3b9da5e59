import os
import unittest
from unittest import mock

from channel_analytics.config import DEFAULT_STOP_WORDS, AnalysisConfig


class ConfigTests(unittest.TestCase):
    def test_default_top_results_count(self):
        previous = os.environ.get("TOP_RESULTS_COUNT")
        if "TOP_RESULTS_COUNT" in os.environ:
            del os.environ["TOP_RESULTS_COUNT"]
        try:
            config = AnalysisConfig.from_env()
            self.assertEqual(config.top_results_count, 5)
        finally:
            if previous is not None:
                os.environ["TOP_RESULTS_COUNT"] = previous

    def test_invalid_integers_fall_back_to_defaults(self):
        with mock.patch.dict(os.environ, {"VIDEOS_TO_FETCH": "lots", "MIN_WORD_LENGTH": "0"}):
            config = AnalysisConfig.from_env()
        self.assertEqual(config.videos_to_fetch, 25)
        self.assertEqual(config.min_word_length, 1)

    def test_extra_stop_words_extend_defaults(self):
        with mock.patch.dict(os.environ, {"EXTRA_STOP_WORDS": "vlog, ramen ,"}):
            config = AnalysisConfig.from_env()
        self.assertIn("vlog", config.stop_words)
        self.assertIn("ramen", config.stop_words)
        self.assertTrue(DEFAULT_STOP_WORDS <= config.stop_words)


class VideoRecordTests(unittest.TestCase):
    def test_malformed_counts_coerce_to_zero(self):
        from channel_analytics.models import VideoRecord

        video = VideoRecord.from_dict({"id": "a", "views": "abc", "likes": -4, "comments": None})
        self.assertEqual((video.views, video.likes, video.comments), (0, 0, 0))
        self.assertEqual(video.engagement_rate, 0)

    def test_published_at_keeps_wall_clock_time(self):
        from channel_analytics.models import VideoRecord

        video = VideoRecord.from_dict({"id": "a", "publishedAt": "2025-01-06T18:30:00+09:00"})
        self.assertEqual(video.published_at.hour, 18)
        self.assertIsNone(video.published_at.tzinfo)
        self.assertIsNone(VideoRecord.from_dict({"id": "b", "published": "garbage"}).published_at)


if __name__ == "__main__":
    unittest.main()
