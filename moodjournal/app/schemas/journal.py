from __future__ import annotations

import datetime as dt

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..analytics.moods import MOOD_EMOJIS, is_known_mood


class StickerPlacement(BaseModel):
    id: str = Field(..., min_length=1, max_length=64)
    type: str = Field(..., min_length=1, max_length=32)
    image_url: str = Field(..., min_length=1, max_length=500)
    pos_x: float
    pos_y: float
    width: float = Field(..., gt=0)
    height: float = Field(..., gt=0)


class JournalEntryWrite(BaseModel):
    date: dt.date
    mood: str
    content: str = Field(default="", max_length=10_000)
    stickers: list[StickerPlacement] | None = None

    @field_validator("mood")
    @classmethod
    def _validate_mood(cls, value: str) -> str:
        if not is_known_mood(value):
            raise ValueError(f"mood must be one of {' '.join(MOOD_EMOJIS)}")
        return value

    def sticker_payload(self) -> list[dict[str, object]] | None:
        if self.stickers is None:
            return None
        return [sticker.model_dump() for sticker in self.stickers]


class JournalEntryModel(BaseModel):
    id: int
    date: dt.date
    mood: str
    content: str
    stickers: list[StickerPlacement] | None = None
    created_at: dt.datetime | None = None
    updated_at: dt.datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class JournalListResponse(BaseModel):
    items: list[JournalEntryModel]
