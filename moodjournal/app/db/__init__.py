"""Database utilities for the mood journal."""

from .models import (
    Base,
    JournalEntry,
    Reminder,
    SettingEntry,
)

__all__ = [
    "Base",
    "JournalEntry",
    "Reminder",
    "SettingEntry",
]
