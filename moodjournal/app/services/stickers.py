"""Read-only sticker catalog shown in the journal sticker panel."""

from __future__ import annotations

from types import MappingProxyType
from typing import NamedTuple

_TWEMOJI_BASE = "https://cdn.jsdelivr.net/gh/twitter/twemoji@14.0.2/assets/svg"


class StickerItem(NamedTuple):
    id: str
    type: str
    image_url: str


def _catalog(category: str, *items: tuple[str, str]) -> tuple[StickerItem, ...]:
    return tuple(
        StickerItem(id=sticker_id, type=category, image_url=f"{_TWEMOJI_BASE}/{code}.svg")
        for sticker_id, code in items
    )


STICKERS = MappingProxyType(
    {
        "animals": _catalog(
            "animals",
            ("dog", "1f436"),
            ("cat", "1f431"),
            ("bear", "1f43b"),
            ("rabbit", "1f430"),
            ("fox", "1f98a"),
            ("deer", "1f98c"),
            ("panda", "1f43c"),
            ("penguin", "1f427"),
        ),
        "flowers": _catalog(
            "flowers",
            ("sunflower", "1f33b"),
            ("rose", "1f339"),
            ("tulip", "1f337"),
            ("blossom", "1f338"),
            ("hibiscus", "1f33a"),
            ("daisy", "1f33c"),
        ),
        "food": _catalog(
            "food",
            ("strawberry", "1f353"),
            ("cake", "1f370"),
            ("cookie", "1f36a"),
            ("candy", "1f36c"),
        ),
        "weather": _catalog(
            "weather",
            ("rainbow", "1f308"),
            ("sun", "2600"),
            ("cloud", "2601"),
            ("moon", "1f319"),
        ),
        "objects": _catalog(
            "objects",
            ("heart", "2764"),
            ("star", "2b50"),
            ("sparkles", "2728"),
            ("balloon", "1f388"),
        ),
    }
)

STICKER_CATEGORIES: tuple[str, ...] = ("all", *STICKERS)


def stickers_for(category: str = "all") -> list[StickerItem]:
    """Stickers of one category, or every sticker for ``all``; unknown is empty."""

    if category == "all":
        return [item for items in STICKERS.values() for item in items]
    return list(STICKERS.get(category, ()))


__all__ = ["STICKERS", "STICKER_CATEGORIES", "StickerItem", "stickers_for"]
