from __future__ import annotations

from datetime import date

import pytest
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from moodjournal.app.db import JournalEntry, Reminder, SettingEntry


@pytest.mark.anyio
async def test_journal_and_reminder_crud(temp_session_factory):
    session_factory = temp_session_factory

    async with session_factory() as session:
        journal = JournalEntry(
            date=date(2024, 1, 4),
            mood="😊",
            content="note",
            stickers=[{"id": "cat", "type": "animals", "pos_x": 10, "pos_y": 20}],
        )
        reminder = Reminder(title="Call mom", note="Sunday evening", due_date=date(2024, 1, 7))
        session.add_all([journal, reminder])
        await session.commit()

        await session.refresh(journal)
        await session.refresh(reminder)

        assert journal.id > 0
        assert reminder.id > 0
        assert reminder.priority == "medium"
        assert reminder.completed is False

    async with session_factory() as session:
        journals = (await session.execute(select(JournalEntry))).scalars().all()
        reminders = (await session.execute(select(Reminder))).scalars().all()
        assert journals[0].stickers[0]["id"] == "cat"
        assert journals[0].date == date(2024, 1, 4)
        assert any(item.title == "Call mom" for item in reminders)


@pytest.mark.anyio
async def test_journal_date_is_unique(temp_session_factory):
    session_factory = temp_session_factory

    async with session_factory() as session:
        session.add(JournalEntry(date=date(2024, 2, 29), mood="😴", content=""))
        await session.commit()

    async with session_factory() as session:
        session.add(JournalEntry(date=date(2024, 2, 29), mood="😡", content="again"))
        with pytest.raises(IntegrityError):
            await session.commit()


@pytest.mark.anyio
async def test_setting_entry_unique_key(temp_session_factory):
    session_factory = temp_session_factory

    async with session_factory() as session:
        session.add(SettingEntry(key="display.color_mode", value='"light"'))
        await session.commit()

    async with session_factory() as session:
        query = select(SettingEntry).where(SettingEntry.key == "display.color_mode")
        result = await session.execute(query)
        setting = result.scalar_one()
        setting.value = '"dark"'
        await session.commit()

    async with session_factory() as session:
        query = select(SettingEntry).where(SettingEntry.key == "display.color_mode")
        setting = (await session.execute(query)).scalar_one()
        assert setting.value == '"dark"'
