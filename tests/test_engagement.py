import unittest
from datetime import datetime

from channel_analytics.engagement import (
    EngagementPoint,
    analyze_engagement_growth,
    extract_common_features,
)
from channel_analytics.models import VideoRecord


def _video(video_id, published, views, likes, title="Short title", comments=0):
    return VideoRecord(
        id=video_id,
        title=title,
        published=published,
        duration="PT8M",
        views=views,
        likes=likes,
        comments=comments,
    ).with_metrics()


def _alternating_videos():
    # engagement alternates 10% / 1% while views alternate 100 / 200
    videos = []
    for index in range(6):
        views = 100 if index % 2 == 0 else 200
        likes = 10 if index % 2 == 0 else 2
        videos.append(_video(f"v{index}", f"2024-01-0{index + 1}T10:00:00Z", views, likes))
    return videos


class EngagementGrowthTests(unittest.TestCase):
    def test_insufficient_data(self):
        result = analyze_engagement_growth(_alternating_videos()[:4])
        self.assertFalse(result.has_sufficient_data)
        self.assertEqual(result.correlation_score, 0)
        self.assertEqual(result.high_engagement_features, [])

    def test_lagged_correlation_and_cohorts(self):
        result = analyze_engagement_growth(_alternating_videos())

        self.assertTrue(result.has_sufficient_data)
        self.assertAlmostEqual(result.correlation_score, 1.0)
        self.assertTrue(result.is_strong_correlation)

        comparison = result.engagement_comparison_data
        self.assertEqual(comparison.high_engagement_growth, 100.0)
        self.assertEqual(comparison.low_engagement_growth, -50.0)
        self.assertEqual(comparison.difference_percentage, 150.0)
        self.assertTrue(result.insight.startswith("Strong positive"))
        self.assertTrue(result.recommendations_based_on_correlation)

    def test_half_trends(self):
        result = analyze_engagement_growth(_alternating_videos())

        self.assertEqual(result.engagement_trend.first_half_avg, 7.0)
        self.assertEqual(result.engagement_trend.second_half_avg, 4.0)
        self.assertFalse(result.engagement_trend.is_improving)
        self.assertEqual(result.engagement_trend.trend_description, "declining strongly")

        self.assertEqual(result.growth_rate_trend.first_half_avg, 16.67)
        self.assertEqual(result.growth_rate_trend.second_half_avg, 50.0)
        self.assertEqual(result.growth_rate_trend.change_percentage, 33.33)
        self.assertTrue(result.growth_rate_trend.is_improving)

    def test_high_engagement_features(self):
        result = analyze_engagement_growth(_alternating_videos())
        self.assertIn("posts at a consistent time", result.high_engagement_features)
        self.assertIn("concise titles", result.high_engagement_features)

    def test_anti_correlated_series(self):
        # engagement alternates 10% / 1% while views alternate 200 / 100
        videos = []
        for index in range(6):
            views = 200 if index % 2 == 0 else 100
            likes = 20 if index % 2 == 0 else 1
            videos.append(_video(f"v{index}", f"2024-01-0{index + 1}T10:00:00Z", views, likes))
        result = analyze_engagement_growth(videos)

        self.assertAlmostEqual(result.correlation_score, -1.0)
        self.assertTrue(result.is_strong_correlation)
        self.assertTrue(result.insight.startswith("Strong negative"))
        self.assertTrue(
            result.recommendations_based_on_correlation[0].startswith(
                "Engagement and the next upload's growth move in opposite directions"
            )
        )
        self.assertEqual(result.engagement_comparison_data.high_engagement_growth, -50.0)
        self.assertEqual(result.engagement_comparison_data.low_engagement_growth, 100.0)

    def test_flat_series_has_no_link(self):
        videos = [_video(f"v{index}", f"2024-01-0{index + 1}T10:00:00Z", 100, 5) for index in range(5)]
        result = analyze_engagement_growth(videos)

        self.assertEqual(result.correlation_score, 0)
        self.assertFalse(result.is_strong_correlation)
        self.assertTrue(result.insight.startswith("Weak or no link"))
        self.assertTrue(
            result.recommendations_based_on_correlation[0].startswith("Engagement is not what moves growth here")
        )


class CommonFeatureTests(unittest.TestCase):
    def _point(self, video):
        return EngagementPoint(
            video=video,
            published_at=video.published_at,
            engagement=video.engagement_rate,
            growth=0.0,
        )

    def test_participatory_and_weekday(self):
        title = "A considerably longer title that keeps going past fifty characters"
        points = [
            self._point(_video("a", "2024-01-01T08:00:00Z", 100, 10, title=title, comments=5)),
            self._point(_video("b", "2024-01-08T12:00:00Z", 100, 10, title=title, comments=5)),
        ]
        features = extract_common_features(points)
        self.assertIn("participatory content (high comment-to-like ratio)", features)
        self.assertIn("detailed titles", features)
        self.assertIn("posts on a consistent weekday", features)
        self.assertNotIn("posts at a consistent time", features)

    def test_empty_cohort(self):
        self.assertEqual(extract_common_features([]), [])


if __name__ == "__main__":
    unittest.main()
