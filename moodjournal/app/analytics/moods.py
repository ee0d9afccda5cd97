from __future__ import annotations

from enum import Enum
from types import MappingProxyType


class MoodCategory(str, Enum):
    HAPPY = "happy"
    SAD = "sad"
    ANGRY = "angry"
    LOVE = "love"
    NEUTRAL = "neutral"


# Display order of the mood picker.
MOOD_EMOJIS: tuple[str, ...] = (
    "😊",
    "😍",
    "😌",
    "🥰",
    "😎",
    "😢",
    "😞",
    "😡",
    "😴",
    "🤔",
)

MOOD_CATEGORY_MAP = MappingProxyType(
    {
        "😊": MoodCategory.HAPPY,
        "😍": MoodCategory.LOVE,
        "😌": MoodCategory.HAPPY,
        "🥰": MoodCategory.LOVE,
        "😎": MoodCategory.HAPPY,
        "😢": MoodCategory.SAD,
        "😞": MoodCategory.SAD,
        "😡": MoodCategory.ANGRY,
        "😴": MoodCategory.NEUTRAL,
        "🤔": MoodCategory.NEUTRAL,
    }
)

CATEGORY_NAMES = MappingProxyType(
    {
        MoodCategory.HAPPY: "Happy",
        MoodCategory.SAD: "Sad",
        MoodCategory.ANGRY: "Angry",
        MoodCategory.LOVE: "Love",
        MoodCategory.NEUTRAL: "Neutral",
    }
)

_CATEGORY_EMOJI = MappingProxyType(
    {
        MoodCategory.HAPPY: "😊",
        MoodCategory.SAD: "😢",
        MoodCategory.ANGRY: "😡",
        MoodCategory.LOVE: "😍",
        MoodCategory.NEUTRAL: "😌",
    }
)


def classify(mood: str) -> MoodCategory:
    """Map a mood emoji to its coarse category; unknown values are neutral."""

    return MOOD_CATEGORY_MAP.get(mood, MoodCategory.NEUTRAL)


def emoji_for_category(category: MoodCategory | str) -> str:
    """Representative emoji for a category, used in chart legends."""

    try:
        return _CATEGORY_EMOJI[MoodCategory(category)]
    except ValueError:
        return ""


def is_known_mood(mood: str) -> bool:
    return mood in MOOD_CATEGORY_MAP


__all__ = [
    "CATEGORY_NAMES",
    "MOOD_CATEGORY_MAP",
    "MOOD_EMOJIS",
    "MoodCategory",
    "classify",
    "emoji_for_category",
    "is_known_mood",
]
