from __future__ import annotations

import csv
import io
import json
from collections.abc import Mapping, Sequence
from datetime import date
from typing import Any

from sqlalchemy import case, select, text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import async_sessionmaker

from ..db.models import JournalEntry, Reminder, SettingEntry

DISPLAY_SETTINGS_DEFAULTS: dict[str, Any] = {
    "color_mode": "light",
    "theme_color": "default",
    "font_size": "medium",
    "zoom_level": 100,
    "background_gradient": "orange-blue",
}
_SETTINGS_PREFIX = "display."

_PRIORITY_ORDER = case(
    {"high": 0, "medium": 1, "low": 2},
    value=Reminder.priority,
    else_=3,
)


class NotFoundError(LookupError):
    """Raised when a record addressed by id does not exist."""

    kind = "record"

    def __init__(self, record_id: int) -> None:
        super().__init__(f"{self.kind} with id {record_id} not found")
        self.record_id = record_id


class EntryNotFoundError(NotFoundError):
    kind = "Journal entry"


class ReminderNotFoundError(NotFoundError):
    kind = "Reminder"


class DuplicateEntryDateError(ValueError):
    """Raised when moving an entry onto a date that already has one."""

    def __init__(self, day: date) -> None:
        super().__init__(f"a journal entry already exists for {day.isoformat()}")
        self.day = day


class StorageService:
    """Persist journal entries, reminders and display settings."""

    def __init__(self, session_factory: async_sessionmaker) -> None:
        self._session_factory = session_factory

    async def healthcheck(self) -> None:
        async with self._session_factory() as session:
            await session.execute(text("SELECT 1"))

    # -- settings helpers ------------------------------------------------
    async def get_setting(self, key: str) -> str | None:
        async with self._session_factory() as session:
            result = await session.execute(
                select(SettingEntry).where(SettingEntry.key == key)
            )
            entry = result.scalar_one_or_none()
            return entry.value if entry else None

    async def set_setting(self, key: str, value: str) -> None:
        async with self._session_factory() as session:
            result = await session.execute(
                select(SettingEntry).where(SettingEntry.key == key)
            )
            entry = result.scalar_one_or_none()
            if entry is None:
                entry = SettingEntry(key=key, value=value)
                session.add(entry)
            else:
                entry.value = value
            await session.commit()

    async def get_display_settings(self) -> dict[str, Any]:
        keys = [f"{_SETTINGS_PREFIX}{name}" for name in DISPLAY_SETTINGS_DEFAULTS]
        async with self._session_factory() as session:
            result = await session.execute(
                select(SettingEntry).where(SettingEntry.key.in_(keys))
            )
            stored = {
                row.key.removeprefix(_SETTINGS_PREFIX): json.loads(row.value)
                for row in result.scalars().all()
            }
        return {**DISPLAY_SETTINGS_DEFAULTS, **stored}

    async def update_display_settings(self, changes: Mapping[str, Any]) -> dict[str, Any]:
        """Store only the provided fields and return the merged settings."""

        for name, value in changes.items():
            if name not in DISPLAY_SETTINGS_DEFAULTS or value is None:
                continue
            await self.set_setting(f"{_SETTINGS_PREFIX}{name}", json.dumps(value))
        return await self.get_display_settings()

    # -- journal entries -------------------------------------------------
    async def list_journal_entries(self, *, limit: int | None = None) -> Sequence[JournalEntry]:
        query = select(JournalEntry).order_by(JournalEntry.date.desc())
        if limit is not None:
            query = query.limit(limit)
        async with self._session_factory() as session:
            result = await session.execute(query)
            return list(result.scalars().all())

    async def get_journal_entry(self, entry_id: int) -> JournalEntry | None:
        async with self._session_factory() as session:
            return await session.get(JournalEntry, entry_id)

    async def get_journal_entry_by_date(self, day: date) -> JournalEntry | None:
        async with self._session_factory() as session:
            return await session.scalar(select(JournalEntry).where(JournalEntry.date == day))

    async def save_journal_entry(
        self,
        *,
        day: date,
        mood: str,
        content: str,
        stickers: list[dict[str, Any]] | None,
    ) -> tuple[JournalEntry, bool]:
        """Create the entry for ``day`` or overwrite the existing one.

        Returns the stored entry and whether it was newly created.
        """

        async with self._session_factory() as session:
            entry = await session.scalar(select(JournalEntry).where(JournalEntry.date == day))
            created = entry is None
            if entry is None:
                entry = JournalEntry(date=day, mood=mood, content=content, stickers=stickers)
                session.add(entry)
            else:
                entry.mood = mood
                entry.content = content
                entry.stickers = stickers
            await session.commit()
            await session.refresh(entry)
            return entry, created

    async def update_journal_entry(
        self,
        entry_id: int,
        *,
        day: date,
        mood: str,
        content: str,
        stickers: list[dict[str, Any]] | None,
    ) -> JournalEntry:
        async with self._session_factory() as session:
            entry = await session.get(JournalEntry, entry_id)
            if entry is None:
                raise EntryNotFoundError(entry_id)
            entry.date = day
            entry.mood = mood
            entry.content = content
            entry.stickers = stickers
            try:
                await session.commit()
            except IntegrityError as exc:
                await session.rollback()
                raise DuplicateEntryDateError(day) from exc
            await session.refresh(entry)
            return entry

    async def delete_journal_entry(self, entry_id: int) -> bool:
        async with self._session_factory() as session:
            entry = await session.get(JournalEntry, entry_id)
            if entry is None:
                return False
            await session.delete(entry)
            await session.commit()
            return True

    # -- reminders -------------------------------------------------------
    async def list_reminders(self) -> Sequence[Reminder]:
        async with self._session_factory() as session:
            result = await session.execute(
                select(Reminder).order_by(
                    Reminder.due_date.asc(),
                    _PRIORITY_ORDER,
                    Reminder.id.asc(),
                )
            )
            return list(result.scalars().all())

    async def get_reminder(self, reminder_id: int) -> Reminder | None:
        async with self._session_factory() as session:
            return await session.get(Reminder, reminder_id)

    async def create_reminder(
        self,
        *,
        title: str,
        note: str,
        due_date: date,
        priority: str | None = None,
        completed: bool | None = None,
    ) -> Reminder:
        async with self._session_factory() as session:
            reminder = Reminder(
                title=title,
                note=note,
                due_date=due_date,
                priority=priority or "medium",
                completed=bool(completed),
            )
            session.add(reminder)
            await session.commit()
            await session.refresh(reminder)
            return reminder

    async def update_reminder(
        self,
        reminder_id: int,
        *,
        title: str,
        note: str,
        due_date: date,
        priority: str | None = None,
        completed: bool | None = None,
    ) -> Reminder:
        async with self._session_factory() as session:
            reminder = await session.get(Reminder, reminder_id)
            if reminder is None:
                raise ReminderNotFoundError(reminder_id)
            reminder.title = title
            reminder.note = note
            reminder.due_date = due_date
            if priority is not None:
                reminder.priority = priority
            if completed is not None:
                reminder.completed = completed
            await session.commit()
            await session.refresh(reminder)
            return reminder

    async def toggle_reminder(self, reminder_id: int) -> Reminder:
        async with self._session_factory() as session:
            reminder = await session.get(Reminder, reminder_id)
            if reminder is None:
                raise ReminderNotFoundError(reminder_id)
            reminder.completed = not reminder.completed
            await session.commit()
            await session.refresh(reminder)
            return reminder

    async def delete_reminder(self, reminder_id: int) -> bool:
        async with self._session_factory() as session:
            reminder = await session.get(Reminder, reminder_id)
            if reminder is None:
                return False
            await session.delete(reminder)
            await session.commit()
            return True

    # -- export ----------------------------------------------------------
    async def export_journal(self) -> bytes:
        entries = await self.list_journal_entries()

        buffer = io.StringIO()
        writer = csv.writer(buffer)
        writer.writerow(["id", "date", "mood", "content", "stickers"])
        for entry in entries:
            writer.writerow(
                [
                    entry.id,
                    entry.date.isoformat(),
                    entry.mood,
                    entry.content,
                    json.dumps(entry.stickers or [], ensure_ascii=False),
                ]
            )
        return buffer.getvalue().encode("utf-8")


__all__ = [
    "DISPLAY_SETTINGS_DEFAULTS",
    "DuplicateEntryDateError",
    "EntryNotFoundError",
    "NotFoundError",
    "ReminderNotFoundError",
    "StorageService",
]
