"""Pure aggregations over journal entries.

Every function here works on an in-memory snapshot and holds no state, so
they are safe to call from concurrent requests. Two differently scoped views
of the same history flow through the module: the *filtered* view (after
:func:`filter_by_range`) feeds distribution, trends and word counts, while
streaks always look at the full history.
"""

from __future__ import annotations

import math
from collections import Counter
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from enum import Enum
from itertools import pairwise
from typing import Protocol

from .moods import MoodCategory, classify, emoji_for_category

_MONTHS = (
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
)


class EntryLike(Protocol):
    date: date
    mood: str
    content: str


class TimeRange(str, Enum):
    LAST_7_DAYS = "7days"
    LAST_30_DAYS = "30days"
    LAST_90_DAYS = "90days"
    ALL = "all"

    @property
    def days(self) -> int | None:
        return {
            TimeRange.LAST_7_DAYS: 7,
            TimeRange.LAST_30_DAYS: 30,
            TimeRange.LAST_90_DAYS: 90,
        }.get(self)

    @property
    def label(self) -> str:
        if self.days is None:
            return "all time"
        return f"the last {self.days} days"


@dataclass(frozen=True)
class DistributionEntry:
    category: MoodCategory
    count: int


@dataclass(frozen=True)
class EmojiUsage:
    emoji: str
    count: int


@dataclass(frozen=True)
class TrendPoint:
    date: date
    date_formatted: str
    counts: dict[str, int]


@dataclass(frozen=True)
class WordCountPoint:
    date: date
    label: str
    words: int


@dataclass(frozen=True)
class StreakResult:
    current_streak: int = 0
    longest_streak: int = 0


@dataclass(frozen=True)
class WordCountStats:
    average: int = 0
    max: int = 0
    min: int = 0


@dataclass(frozen=True)
class AnalyticsReport:
    time_range: TimeRange
    range_label: str
    total_entries: int
    entries_in_range: int
    streaks: StreakResult
    word_counts: WordCountStats
    primary_mood: MoodCategory | None = None
    primary_mood_emoji: str | None = None
    primary_mood_share: int | None = None
    distribution: list[DistributionEntry] = field(default_factory=list)
    trends: list[TrendPoint] = field(default_factory=list)
    emoji_usage: list[EmojiUsage] = field(default_factory=list)
    word_count_trend: list[WordCountPoint] = field(default_factory=list)


def as_day(value: date | datetime | str) -> date:
    """Strip time-of-day so comparisons happen at calendar-day granularity."""

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def format_day(value: date, *, with_year: bool = True) -> str:
    label = f"{_MONTHS[value.month - 1]} {value.day}"
    if with_year:
        return f"{label}, {value.year}"
    return label


def count_words(content: str | None) -> int:
    return len((content or "").split())


def _sorted_desc(entries: Iterable[EntryLike]) -> list[EntryLike]:
    return sorted(entries, key=lambda entry: as_day(entry.date), reverse=True)


def filter_by_range(
    entries: Iterable[EntryLike],
    time_range: TimeRange | str,
    now: date | datetime,
) -> list[EntryLike]:
    """Entries inside the window ending at ``now``, newest first.

    The cutoff is ``now`` minus N calendar days and is inclusive.
    """

    window = TimeRange(time_range)
    if window.days is None:
        return _sorted_desc(entries)
    cutoff = as_day(now) - timedelta(days=window.days)
    return _sorted_desc(entry for entry in entries if as_day(entry.date) >= cutoff)


def distribution(entries: Iterable[EntryLike]) -> list[DistributionEntry]:
    """Entry count per mood category, most frequent first.

    Equal counts keep category enumeration order.
    """

    tally = Counter(classify(entry.mood) for entry in entries)
    ranked = [
        DistributionEntry(category=category, count=tally[category])
        for category in MoodCategory
        if tally[category] > 0
    ]
    ranked.sort(key=lambda item: item.count, reverse=True)
    return ranked


def emoji_usage(entries: Iterable[EntryLike]) -> list[EmojiUsage]:
    tally = Counter(entry.mood for entry in entries)
    return [EmojiUsage(emoji=emoji, count=count) for emoji, count in tally.most_common()]


def trends(entries: Iterable[EntryLike]) -> list[TrendPoint]:
    """One point per calendar date with zero-filled category counts."""

    by_day: dict[date, Counter[MoodCategory]] = {}
    for entry in entries:
        by_day.setdefault(as_day(entry.date), Counter())[classify(entry.mood)] += 1

    return [
        TrendPoint(
            date=day,
            date_formatted=format_day(day),
            counts={category.value: tally[category] for category in MoodCategory},
        )
        for day, tally in sorted(by_day.items())
    ]


def word_count_trend(entries: Iterable[EntryLike], limit: int = 10) -> list[WordCountPoint]:
    recent = _sorted_desc(entries)[:limit]
    return [
        WordCountPoint(
            date=as_day(entry.date),
            label=format_day(as_day(entry.date), with_year=False),
            words=count_words(entry.content),
        )
        for entry in reversed(recent)
    ]


def streaks(all_entries: Iterable[EntryLike], now: date | datetime) -> StreakResult:
    """Current and longest run of consecutive journaling days.

    Pass the full history here, never a windowed view. The current streak
    stays alive while the latest entry is from yesterday or later.
    """

    days = sorted({as_day(entry.date) for entry in all_entries})
    if not days:
        return StreakResult()

    one_day = timedelta(days=1)
    yesterday = as_day(now) - one_day

    current = 0
    if days[-1] >= yesterday:
        current = 1
        for newer, older in pairwise(reversed(days)):
            if newer - older != one_day:
                break
            current += 1

    # a lone day is a run of one, even when the current streak has lapsed
    longest = max(current, 1)
    run = 1
    for previous, following in pairwise(days):
        if following - previous == one_day:
            run += 1
            longest = max(longest, run)
        else:
            run = 1

    return StreakResult(current_streak=current, longest_streak=longest)


def word_count_stats(entries: Sequence[EntryLike]) -> WordCountStats:
    counts = [count_words(entry.content) for entry in entries]
    if not counts:
        return WordCountStats()
    # half-up rounding, not banker's rounding
    average = math.floor(sum(counts) / len(counts) + 0.5)
    return WordCountStats(average=average, max=max(counts), min=min(counts))


def build_report(
    all_entries: Sequence[EntryLike],
    time_range: TimeRange | str,
    now: date | datetime,
) -> AnalyticsReport:
    window = TimeRange(time_range)
    filtered = filter_by_range(all_entries, window, now)
    ranked = distribution(filtered)

    primary = ranked[0].category if ranked else None
    share = round(ranked[0].count / len(filtered) * 100) if ranked else None

    return AnalyticsReport(
        time_range=window,
        range_label=window.label,
        total_entries=len(all_entries),
        entries_in_range=len(filtered),
        streaks=streaks(all_entries, now),
        word_counts=word_count_stats(filtered),
        primary_mood=primary,
        primary_mood_emoji=emoji_for_category(primary) if primary else None,
        primary_mood_share=share,
        distribution=ranked,
        trends=trends(filtered),
        emoji_usage=emoji_usage(filtered),
        word_count_trend=word_count_trend(filtered),
    )


__all__ = [
    "AnalyticsReport",
    "DistributionEntry",
    "EmojiUsage",
    "EntryLike",
    "StreakResult",
    "TimeRange",
    "TrendPoint",
    "WordCountPoint",
    "WordCountStats",
    "as_day",
    "build_report",
    "count_words",
    "distribution",
    "emoji_usage",
    "filter_by_range",
    "format_day",
    "streaks",
    "trends",
    "word_count_stats",
    "word_count_trend",
]
