from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

ColorMode = Literal["light", "dark", "system"]
ThemeColor = Literal["default", "purple", "blue", "green", "pink"]
FontSize = Literal["small", "medium", "large"]
BackgroundGradient = Literal["orange-blue", "pink-purple", "green-blue", "yellow-orange"]


class DisplaySettings(BaseModel):
    color_mode: ColorMode = "light"
    theme_color: ThemeColor = "default"
    font_size: FontSize = "medium"
    zoom_level: int = Field(default=100, ge=75, le=150, multiple_of=5)
    background_gradient: BackgroundGradient = "orange-blue"


class DisplaySettingsUpdate(BaseModel):
    color_mode: ColorMode | None = None
    theme_color: ThemeColor | None = None
    font_size: FontSize | None = None
    zoom_level: int | None = Field(default=None, ge=75, le=150, multiple_of=5)
    background_gradient: BackgroundGradient | None = None
