from __future__ import annotations

import datetime as dt

from pydantic import BaseModel, Field

from ..analytics import MoodCategory, TimeRange


class DistributionItem(BaseModel):
    category: MoodCategory
    count: int = Field(..., ge=0)


class EmojiUsageItem(BaseModel):
    emoji: str
    count: int = Field(..., ge=0)


class TrendPointModel(BaseModel):
    date: dt.date
    date_formatted: str
    counts: dict[str, int]


class WordCountPointModel(BaseModel):
    date: dt.date
    label: str
    words: int


class StreakSummary(BaseModel):
    current_streak: int = Field(..., ge=0)
    longest_streak: int = Field(..., ge=0)


class WordCountSummary(BaseModel):
    average: int
    max: int
    min: int


class AnalyticsReportModel(BaseModel):
    time_range: TimeRange
    range_label: str
    total_entries: int
    entries_in_range: int
    streaks: StreakSummary
    word_counts: WordCountSummary
    primary_mood: MoodCategory | None
    primary_mood_emoji: str | None
    primary_mood_share: int | None
    distribution: list[DistributionItem]
    trends: list[TrendPointModel]
    emoji_usage: list[EmojiUsageItem]
    word_count_trend: list[WordCountPointModel]
