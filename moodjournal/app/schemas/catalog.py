from __future__ import annotations

from pydantic import BaseModel

from ..analytics import MoodCategory


class MoodOption(BaseModel):
    emoji: str
    category: MoodCategory
    label: str


class MoodListResponse(BaseModel):
    items: list[MoodOption]


class StickerModel(BaseModel):
    id: str
    type: str
    image_url: str


class StickerListResponse(BaseModel):
    category: str
    categories: list[str]
    items: list[StickerModel]


class PlaylistModel(BaseModel):
    title: str
    description: str
    image_url: str
    youtube_url: str | None = None


class PlaylistListResponse(BaseModel):
    mood: str | None
    personalized: bool
    items: list[PlaylistModel]
