import unittest

from channel_analytics.models import VideoRecord
from channel_analytics.tags import analyze_tags
from channel_analytics.text import WordCount
from channel_analytics.titles import (
    TitlePatterns,
    analyze_titles,
    detect_title_patterns,
    suggest_titles,
)


def _video(video_id, title, views, tags=(), likes=0):
    return VideoRecord(
        id=video_id,
        title=title,
        published="2025-01-01T10:00:00Z",
        duration="PT5M",
        views=views,
        likes=likes,
        comments=0,
        tags=tuple(tags),
    )


def _patterns(**overrides):
    values = dict(
        number_in_beginning=0.0,
        question_usage=0.0,
        bracket_usage=0.0,
        colon_usage=0.0,
        emoji_usage=0.0,
        typical_length=20,
    )
    values.update(overrides)
    return TitlePatterns(**values)


class TagAnalyzerTests(unittest.TestCase):
    def test_average_views_per_repeated_tag(self):
        videos = [
            _video("a", "First", 100, tags=["x", "solo"]),
            _video("b", "Second", 300, tags=["x"]),
        ]
        result = analyze_tags(videos)
        self.assertEqual(len(result), 1)
        self.assertEqual(result[0].tag, "x")
        self.assertEqual(result[0].count, 2)
        self.assertEqual(result[0].avg_views, 200)

    def test_sorted_by_average_views(self):
        videos = [
            _video("a", "A", 100, tags=["low", "high"]),
            _video("b", "B", 100, tags=["low"]),
            _video("c", "C", 900, tags=["high"]),
        ]
        self.assertEqual([item.tag for item in analyze_tags(videos)], ["high", "low"])

    def test_no_tags(self):
        self.assertEqual(analyze_tags([_video("a", "A", 100)]), [])


class TitlePatternTests(unittest.TestCase):
    def test_detects_leading_number_and_question(self):
        patterns = detect_title_patterns([
            _video("a", "10 tips for you?", 1),
            _video("b", "Plain title", 1),
        ])
        self.assertEqual(patterns.number_in_beginning, 50.0)
        self.assertEqual(patterns.question_usage, 50.0)
        self.assertEqual(patterns.bracket_usage, 0.0)

    def test_detects_full_width_question_and_brackets(self):
        patterns = detect_title_patterns([_video("a", "【検証】本当に効く？", 1)])
        self.assertEqual(patterns.question_usage, 100.0)
        self.assertEqual(patterns.bracket_usage, 100.0)

    def test_empty_cohort(self):
        patterns = detect_title_patterns([])
        self.assertEqual(patterns.question_usage, 0.0)
        self.assertEqual(patterns.typical_length, 0)


class TitleSuggestionTests(unittest.TestCase):
    def test_dominant_pattern_first(self):
        suggestions = suggest_titles([WordCount("rice", 3)], _patterns(question_usage=10.0, colon_usage=80.0))
        self.assertEqual(suggestions[0].pattern, "colon")
        self.assertEqual(suggestions[1].pattern, "question")
        self.assertIn("rice", suggestions[0].example)

    def test_ties_keep_template_order(self):
        suggestions = suggest_titles([], _patterns())
        self.assertEqual(
            [item.pattern for item in suggestions],
            ["question", "numbered-bracket", "colon", "emoji-bracket-combo"],
        )
        self.assertIn("this topic", suggestions[0].example)


class TitleAnalyzerTests(unittest.TestCase):
    def test_high_and_low_words_come_from_cohorts(self):
        top = [_video("a", "Ramen secrets revealed", 1000), _video("b", "Ramen at home", 900)]
        bottom = [_video("c", "Boring salad", 10)]
        analysis = analyze_titles(top + bottom, top, bottom)

        self.assertEqual(analysis.high_words[0], WordCount("Ramen", 2))
        self.assertEqual(analysis.low_words[0].word, "Boring")
        self.assertEqual(len(analysis.title_suggestions), 4)
        self.assertEqual(len(analysis.thumbnail_features.recommendations), 4)


if __name__ == "__main__":
    unittest.main()
