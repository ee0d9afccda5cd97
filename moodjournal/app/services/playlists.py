"""Music suggestions shown next to the day's mood."""

from __future__ import annotations

from types import MappingProxyType
from typing import NamedTuple

_TWEMOJI_BASE = "https://cdn.jsdelivr.net/gh/twitter/twemoji@14.0.2/assets/svg"
_YOUTUBE = "https://www.youtube.com/watch?v="


class Playlist(NamedTuple):
    title: str
    description: str
    image_url: str
    youtube_url: str | None = None


def _playlist(title: str, description: str, icon: str, video: str | None = None) -> Playlist:
    return Playlist(
        title=title,
        description=description,
        image_url=f"{_TWEMOJI_BASE}/{icon}.svg",
        youtube_url=f"{_YOUTUBE}{video}" if video else None,
    )


PLAYLISTS = MappingProxyType(
    {
        "😊": (
            _playlist("Happy Hits", "Upbeat and cheerful songs to maintain your happy mood", "1f3b6", "I140iNpx1xM"),
            _playlist("Good Vibes", "Feel-good tunes for a positive day", "1f3b5", "Ln4KSN0rchI"),
            _playlist(
                "Sunshine Pop",
                "Bright and sunny melodies to brighten your day",
                "1f31e",
                "HyHNuVaZJ-k&list=PLhd1HyMTk3f5PzRjJzmzH7kkxjfkz9rOZ",
            ),
        ),
        "😍": (
            _playlist("Love Songs", "Romantic tunes for when you're feeling love", "1f3b6"),
            _playlist("Dreamy Romance", "Soft and tender melodies for those loving moments", "1f3b5"),
            _playlist("Sweet Serenades", "Beautiful ballads that speak to the heart", "1f498"),
        ),
        "😌": (
            _playlist("Peaceful Calm", "Gentle melodies for your relaxed state of mind", "1f3b6"),
            _playlist("Tranquil Moments", "Serene sounds to enhance your contentment", "1f3b5"),
            _playlist("Gentle Flow", "Soft ambient music for peaceful reflection", "1f30a"),
        ),
        "🥰": (
            _playlist("Heartfelt Hits", "Songs that capture feelings of appreciation and love", "1f3b6"),
            _playlist("Warm & Cozy", "Comforting tunes for those warm fuzzy feelings", "1f3b5"),
            _playlist("Sweet Melodies", "Delightful songs that make your heart smile", "1f496"),
        ),
        "😎": (
            _playlist("Confidence Boost", "Tracks to boost your confidence and cool factor", "1f3b6"),
            _playlist("Swagger Sounds", "Music with attitude for when you're feeling cool", "1f3b5"),
            _playlist("Smooth Grooves", "Laid-back tracks with serious style", "1f3b8"),
        ),
        "😢": (
            _playlist(
                "Melancholy Melodies",
                "Songs that understand your sadness",
                "1f3b6",
                "60ItHLz5WEA&list=PLw-VjHDlEOgvWPpRBs9FRGgJcKpDimTqf",
            ),
            _playlist(
                "Healing Tunes",
                "Music to help process your feelings",
                "1f3b5",
                "6Ejga4kJUts&list=PLCVGGn6GhhDtYomlFrJ-cUxdpC5e2gNiP",
            ),
            _playlist(
                "Rainy Day Reflections",
                "Contemplative songs for emotional moments",
                "1f327",
                "M_nGCIASWHA&list=PL-xO__JU8YNTDb5x3sRsWmEuJZW9vJZ0U",
            ),
        ),
        "😞": (
            _playlist("Blue Mood", "Songs to accompany your disappointment", "1f3b6"),
            _playlist("Uplift Your Spirit", "Tunes to help you rise from disappointment", "1f3b5"),
            _playlist("Tomorrow Is New", "Music that reminds you better days are ahead", "1f305"),
        ),
        "😡": (
            _playlist("Release The Tension", "High-energy tracks to channel your frustration", "1f3b6"),
            _playlist("Calm The Storm", "Music to help soothe intense emotions", "1f3b5"),
            _playlist("Power Through", "Strong beats to transform anger into strength", "26a1"),
        ),
        "😴": (
            _playlist("Sleep Sounds", "Gentle melodies to help you drift into sleep", "1f3b6"),
            _playlist("Dream Journey", "Peaceful tunes for restful nights", "1f3b5"),
            _playlist("Night Whispers", "Soothing ambient sounds for bedtime", "1f319"),
        ),
        "🤔": (
            _playlist("Focus Flow", "Music to help you concentrate and think clearly", "1f3b6"),
            _playlist("Deep Thoughts", "Instrumental tracks for contemplative moments", "1f3b5"),
            _playlist("Mind Expansion", "Thought-provoking music for curious moments", "1f9e0"),
        ),
    }
)

DEFAULT_PLAYLISTS: tuple[Playlist, ...] = (
    _playlist(
        "Mood Mix",
        "A balanced mix of songs for any mood",
        "1f3b6",
        "kTJczUoc26U&list=PLfOG5qRn-NH5sTwG5_XQWlRKWUZnqYN6f",
    ),
    _playlist(
        "Daily Discovery",
        "New music to discover regardless of your mood",
        "1f3b5",
        "CvUK-YWYcaE&list=PLO2MyApnT0PKMeBKzPz0y43QHwSnXSvxD",
    ),
    _playlist(
        "Timeless Classics",
        "Evergreen hits that work for any emotion",
        "1f3b8",
        "C4p_Oyez1JI&list=PLf8_TFoQQLQqsOQR02EgMTJqpLqDJN9vS",
    ),
)


def playlists_for(mood: str | None) -> list[Playlist]:
    """Suggestions for a mood emoji, falling back to the general mix."""

    return list(PLAYLISTS.get(mood or "", DEFAULT_PLAYLISTS))


__all__ = ["DEFAULT_PLAYLISTS", "PLAYLISTS", "Playlist", "playlists_for"]
