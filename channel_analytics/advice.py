"""
Advice structuring

Generated advice arrives as free text using "## " section headings and
optional "### " subsection headings. parse_advice turns it into an
AdviceTree; when nothing usable comes back, fallback_advice builds a fixed
tree from the analysis report instead.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List, Optional, Protocol, Sequence, Tuple, Union

from channel_analytics import stats
from channel_analytics.models import ContentCategory
from channel_analytics.titles import (
    BRACKET_PATTERN,
    COLON_PATTERN,
    EMOJI_PATTERN,
    NUMBER_PREFIX_PATTERN,
    QUESTION_PATTERN,
)

SECTION_HEADING = re.compile(r"^##\s+(.*)$")
SUBSECTION_HEADING = re.compile(r"^###\s+(.*)$")
STRAY_HASH = re.compile(r"^#\s*")
LEADING_HASHES = re.compile(r"^#+\s*")


@dataclass(frozen=True)
class AdviceSubsection:
    title: str
    content: Tuple[str, ...]


@dataclass(frozen=True)
class AdviceSection:
    title: str
    content: Tuple[str, ...]
    subsections: Optional[Tuple[AdviceSubsection, ...]] = None


@dataclass(frozen=True)
class AdviceTree:
    sections: Tuple[AdviceSection, ...]


@dataclass(frozen=True)
class GeneratedAdvice:
    text: str


@dataclass(frozen=True)
class AdviceFailure:
    error: str


AdviceOutcome = Union[GeneratedAdvice, AdviceFailure]


class AdviceGenerator(Protocol):
    def generate(self, prompt: str) -> str:
        """Return advice text for the prompt, raising on any failure."""


@dataclass
class _SubsectionDraft:
    title: str
    lines: List[str] = field(default_factory=list)

    def build(self) -> Optional[AdviceSubsection]:
        title = self.title.strip()
        content = "\n".join(self.lines).strip()
        if not title or not content:
            return None
        return AdviceSubsection(title=title, content=(content,))


@dataclass
class _SectionDraft:
    title: str
    lines: List[str] = field(default_factory=list)
    subsections: List[_SubsectionDraft] = field(default_factory=list)

    def add_line(self, line: str) -> None:
        if self.subsections:
            self.subsections[-1].lines.append(line)
        else:
            self.lines.append(line)

    def build(self) -> Optional[AdviceSection]:
        title = self.title.strip()
        if not title:
            return None

        intro = "\n".join(self.lines).strip()
        content = tuple(
            STRAY_HASH.sub("", paragraph).strip()
            for paragraph in [intro]
            if paragraph.strip() and paragraph.strip() != "#"
        )
        subsections = tuple(
            built for built in (draft.build() for draft in self.subsections) if built is not None
        )
        return AdviceSection(title=title, content=content, subsections=subsections or None)



def parse_advice(text: Optional[str]) -> AdviceTree:
    """
    Split heading-delimited text into sections and subsections.

    Non-blank text before the first "## " heading forms its own section,
    titled by its first line. Empty or whitespace-only input yields an
    empty tree.
    """
    sections: List[AdviceSection] = []
    current: Optional[_SectionDraft] = None

    def close() -> None:
        if current is not None:
            built = current.build()
            if built is not None:
                sections.append(built)

    for line in (text or "").splitlines():
        section_match = SECTION_HEADING.match(line)
        if section_match:
            close()
            current = _SectionDraft(title=section_match.group(1))
            continue
        if current is None:
            if line.strip():
                current = _SectionDraft(title=LEADING_HASHES.sub("", line.strip()))
            continue

        subsection_match = SUBSECTION_HEADING.match(line)
        if subsection_match:
            current.subsections.append(_SubsectionDraft(title=subsection_match.group(1)))
        else:
            current.add_line(line)
    close()

    return AdviceTree(sections=tuple(sections))



def _category_name(report) -> str:
    try:
        return ContentCategory(report.categories.top_format).value
    except ValueError:
        return ContentCategory.OTHER.value



def fallback_advice(report) -> AdviceTree:
    """Deterministic advice used whenever generated advice is missing or unusable."""
    channel_title = report.channel.title or "this channel"
    pattern = report.frequency.pattern or "irregular"
    best_day = report.posting.best_day or "your best performing day"

    return AdviceTree(sections=(
        AdviceSection(
            title="Content strategy",
            content=(
                f"The data shows that {_category_name(report)} content performs best on "
                f"\"{channel_title}\", and related uploads attract the most views.",
            ),
            subsections=(
                AdviceSubsection(
                    title="Build series around your hits",
                    content=(
                        "Create follow-ups and spin-offs of your current most viewed videos.",
                        "A series keeps existing viewers coming back for the next episode.",
                    ),
                ),
                AdviceSubsection(
                    title="Answer your viewers' problems",
                    content=(
                        "Cover common mistakes and how to fix them.",
                        "Use real questions from your comment section to raise audience involvement.",
                    ),
                ),
            ),
        ),
        AdviceSection(
            title="Title and tag optimization",
            content=(
                "Concrete title and tag tactics based on what already works on the channel.",
            ),
            subsections=(
                AdviceSubsection(
                    title="Title structure",
                    content=(
                        "Reuse the structure of your best performing titles.",
                        "Place popular keywords at the start of the title or in another prominent position.",
                    ),
                ),
            ),
        ),
        AdviceSection(
            title="Audience growth and engagement",
            content=("Ways to win new viewers and deepen engagement with existing ones.",),
            subsections=(
                AdviceSubsection(
                    title="Posting schedule",
                    content=(
                        f"Keep your current posting pattern ({pattern}) and move releases to "
                        f"{best_day}, the day with the highest average views.",
                        "Reply actively in the comments to build a community around the channel.",
                    ),
                ),
                AdviceSubsection(
                    title="Engagement techniques",
                    content=(
                        "Ask viewers a clear question in the video and invite their opinions.",
                        "Ask for the subscription at the moment of the video where retention is highest.",
                    ),
                ),
            ),
        ),
    ))



def structure_advice(raw_text: Optional[str], report) -> AdviceTree:
    tree = parse_advice(raw_text)
    if not tree.sections:
        return fallback_advice(report)
    return tree



def find_title_patterns(videos: Sequence) -> List[str]:
    """Title devices used by more than 20% of the given videos (and by at least two)."""
    checks = (
        ("brackets", BRACKET_PATTERN),
        ("colon", COLON_PATTERN),
        ("emoji", EMOJI_PATTERN),
        ("leading number", NUMBER_PREFIX_PATTERN),
        ("question", QUESTION_PATTERN),
    )
    threshold = max(1, len(videos) * 0.2)
    return [
        name for name, pattern in checks
        if sum(1 for video in videos if pattern.search(video.title)) > threshold
    ]



def build_advice_prompt(report) -> str:
    """Structured prompt handed to the external advice generator."""
    channel = report.channel
    words = report.titles.high_words
    keywords = (
        ", ".join(f'"{item.word}" ({item.count}x)' for item in words[:5])
        if words else "no distinctive keywords found"
    )
    top_tags = ", ".join(f'"{item.tag}" ({round(item.avg_views):,} views)' for item in report.tags[:5])
    top_videos = "\n".join(
        f"{index}. \"{video.title}\" - {video.views:,} views, "
        f"{round(video.minutes) if video.minutes else '?'} min"
        for index, video in enumerate(report.top[:3], start=1)
    )

    best_minutes = [round(video.minutes) for video in report.duration.best[:3] if video.minutes]
    best_minutes = [minutes for minutes in best_minutes if minutes > 0]
    optimal_duration = round(stats.mean(best_minutes)) if best_minutes else round(report.duration.avg_minutes)

    comment_like_ratio = stats.safe_div(report.stats.avg_comments, report.stats.avg_likes)
    if comment_like_ratio > 0.1:
        audience_engagement = "high"
    elif comment_like_ratio > 0.05:
        audience_engagement = "medium"
    else:
        audience_engagement = "low"

    patterns = ", ".join(find_title_patterns(report.top)) or "no specific pattern"
    format_name = _category_name(report)
    frequency = report.frequency

    return f"""# Channel analysis: "{channel.title}"

## Channel overview
- Subscribers: {channel.subscriber_count:,}
- Average views: {round(report.stats.avg_views):,}
- Average engagement rate: {report.stats.avg_engagement:.2f}%
- Main content type: {format_name}

## Posting pattern
- Current frequency: {frequency.pattern} (every {frequency.days_between_posts} days)
- Preferred days: {", ".join(frequency.preferred_days) or "none"}
- Consistency: {"regular schedule" if frequency.is_consistent else "irregular"}
- Best day by views: {report.posting.best_day or "unknown"} (avg {round(report.posting.best_day_avg_views):,} views)

## Top videos
{top_videos or "none"}

## What works
- Title patterns: {patterns}
- Popular keywords: {keywords}
- Effective tags: {top_tags or "none"}
- Optimal duration: about {optimal_duration} minutes
- View trend: {report.trend.change:.1f}%
- Audience engagement: {audience_engagement} (comment-to-like ratio)

Acting as a YouTube strategy expert, give specific, actionable advice for this
channel in three sections: content strategy, title and tag optimization, and
audience growth and engagement. Avoid generic advice. Separate sections with
"## Section name" and subsections with "### Subsection name".
"""



def request_advice(generator: AdviceGenerator, prompt: str) -> AdviceOutcome:
    try:
        text = generator.generate(prompt)
    except Exception as exc:  # pylint: disable=broad-except
        return AdviceFailure(error=str(exc) or exc.__class__.__name__)
    return GeneratedAdvice(text=text or "")



def generate_advice(report, generator: Optional[AdviceGenerator]) -> AdviceTree:
    """Ask the generator for advice, falling back to the fixed tree on any failure."""
    if generator is None:
        return fallback_advice(report)

    outcome = request_advice(generator, build_advice_prompt(report))
    if isinstance(outcome, AdviceFailure):
        return fallback_advice(report)
    return structure_advice(outcome.text, report)
