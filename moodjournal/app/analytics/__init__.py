"""Mood classification and journal analytics."""

from .engine import (
    AnalyticsReport,
    DistributionEntry,
    EmojiUsage,
    StreakResult,
    TimeRange,
    TrendPoint,
    WordCountPoint,
    WordCountStats,
    build_report,
    distribution,
    emoji_usage,
    filter_by_range,
    streaks,
    trends,
    word_count_stats,
    word_count_trend,
)
from .moods import (
    CATEGORY_NAMES,
    MOOD_CATEGORY_MAP,
    MOOD_EMOJIS,
    MoodCategory,
    classify,
    emoji_for_category,
    is_known_mood,
)

__all__ = [
    "AnalyticsReport",
    "CATEGORY_NAMES",
    "DistributionEntry",
    "EmojiUsage",
    "MOOD_CATEGORY_MAP",
    "MOOD_EMOJIS",
    "MoodCategory",
    "StreakResult",
    "TimeRange",
    "TrendPoint",
    "WordCountPoint",
    "WordCountStats",
    "build_report",
    "classify",
    "distribution",
    "emoji_for_category",
    "emoji_usage",
    "filter_by_range",
    "is_known_mood",
    "streaks",
    "trends",
    "word_count_stats",
    "word_count_trend",
]
