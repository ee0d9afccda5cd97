from __future__ import annotations

import logging
import time
from dataclasses import asdict
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status
from fastapi.responses import StreamingResponse

from ...analytics import CATEGORY_NAMES, MOOD_EMOJIS, TimeRange, build_report, classify
from ...core.config import Settings, get_settings
from ...metrics import ANALYTICS_LATENCY, ANALYTICS_REPORTS, API_COUNTER, JOURNAL_WRITES
from ...schemas.analytics import AnalyticsReportModel
from ...schemas.catalog import (
    MoodListResponse,
    MoodOption,
    PlaylistListResponse,
    PlaylistModel,
    StickerListResponse,
    StickerModel,
)
from ...schemas.journal import JournalEntryModel, JournalEntryWrite, JournalListResponse
from ...schemas.reminder import ReminderListResponse, ReminderModel, ReminderWrite
from ...schemas.settings import DisplaySettings, DisplaySettingsUpdate
from ...services.playlists import PLAYLISTS, playlists_for
from ...services.ratelimit import RateLimiter
from ...services.stickers import STICKER_CATEGORIES, stickers_for
from ...services.storage import (
    DuplicateEntryDateError,
    EntryNotFoundError,
    ReminderNotFoundError,
    StorageService,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["journal"])


def get_storage_service(request: Request) -> StorageService:
    return request.app.state.storage_service


def get_rate_limiter(request: Request) -> RateLimiter:
    return request.app.state.rate_limiter


def _enforce_write_limit(limiter: RateLimiter, key: str, settings: Settings) -> None:
    if limiter.allow(key, limit=settings.journal_write_limit_per_min, window_seconds=60):
        return
    logger.warning("write rate limit hit", extra={"extra_fields": {"limit_key": key}})
    raise HTTPException(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        detail="rate limited",
        headers={"Retry-After": str(limiter.retry_after(key, window_seconds=60))},
    )


# -- journal ---------------------------------------------------------------
@router.get("/journal", response_model=JournalListResponse)
async def list_journal_entries(
    storage: StorageService = Depends(get_storage_service),
    limit: int | None = Query(default=None, ge=1, le=1000),
) -> JournalListResponse:
    entries = await storage.list_journal_entries(limit=limit)
    items = [JournalEntryModel.model_validate(e, from_attributes=True) for e in entries]
    API_COUNTER.labels(endpoint="journal_list").inc()
    return JournalListResponse(items=items)


@router.get("/journal/{day}", response_model=JournalEntryModel)
async def get_journal_entry_by_date(
    day: date,
    storage: StorageService = Depends(get_storage_service),
) -> JournalEntryModel:
    entry = await storage.get_journal_entry_by_date(day)
    if entry is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No entry found for this date",
        )
    API_COUNTER.labels(endpoint="journal_get").inc()
    return JournalEntryModel.model_validate(entry, from_attributes=True)


@router.post("/journal", response_model=JournalEntryModel)
async def save_journal_entry(
    payload: JournalEntryWrite,
    response: Response,
    storage: StorageService = Depends(get_storage_service),
    limiter: RateLimiter = Depends(get_rate_limiter),
    settings: Settings = Depends(get_settings),
) -> JournalEntryModel:
    _enforce_write_limit(limiter, "journal:write", settings)
    entry, created = await storage.save_journal_entry(
        day=payload.date,
        mood=payload.mood,
        content=payload.content,
        stickers=payload.sticker_payload(),
    )
    response.status_code = status.HTTP_201_CREATED if created else status.HTTP_200_OK
    JOURNAL_WRITES.labels(result="created" if created else "updated").inc()
    API_COUNTER.labels(endpoint="journal_save").inc()
    return JournalEntryModel.model_validate(entry, from_attributes=True)


@router.put("/journal/{entry_id}", response_model=JournalEntryModel)
async def update_journal_entry(
    entry_id: int,
    payload: JournalEntryWrite,
    storage: StorageService = Depends(get_storage_service),
    limiter: RateLimiter = Depends(get_rate_limiter),
    settings: Settings = Depends(get_settings),
) -> JournalEntryModel:
    _enforce_write_limit(limiter, "journal:write", settings)
    try:
        entry = await storage.update_journal_entry(
            entry_id,
            day=payload.date,
            mood=payload.mood,
            content=payload.content,
            stickers=payload.sticker_payload(),
        )
    except EntryNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except DuplicateEntryDateError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    JOURNAL_WRITES.labels(result="updated").inc()
    API_COUNTER.labels(endpoint="journal_update").inc()
    return JournalEntryModel.model_validate(entry, from_attributes=True)


@router.delete("/journal/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_journal_entry(
    entry_id: int,
    storage: StorageService = Depends(get_storage_service),
) -> Response:
    if not await storage.delete_journal_entry(entry_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Journal entry not found")
    API_COUNTER.labels(endpoint="journal_delete").inc()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# -- reminders -------------------------------------------------------------
@router.get("/reminders", response_model=ReminderListResponse)
async def list_reminders(
    storage: StorageService = Depends(get_storage_service),
) -> ReminderListResponse:
    reminders = await storage.list_reminders()
    items = [ReminderModel.model_validate(r, from_attributes=True) for r in reminders]
    API_COUNTER.labels(endpoint="reminders_list").inc()
    return ReminderListResponse(items=items)


@router.get("/reminders/{reminder_id}", response_model=ReminderModel)
async def get_reminder(
    reminder_id: int,
    storage: StorageService = Depends(get_storage_service),
) -> ReminderModel:
    reminder = await storage.get_reminder(reminder_id)
    if reminder is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Reminder not found")
    return ReminderModel.model_validate(reminder, from_attributes=True)


@router.post(
    "/reminders",
    response_model=ReminderModel,
    status_code=status.HTTP_201_CREATED,
)
async def create_reminder(
    payload: ReminderWrite,
    storage: StorageService = Depends(get_storage_service),
    limiter: RateLimiter = Depends(get_rate_limiter),
    settings: Settings = Depends(get_settings),
) -> ReminderModel:
    _enforce_write_limit(limiter, "reminders:write", settings)
    reminder = await storage.create_reminder(
        title=payload.title,
        note=payload.note,
        due_date=payload.due_date,
        priority=payload.priority,
        completed=payload.completed,
    )
    API_COUNTER.labels(endpoint="reminders_create").inc()
    return ReminderModel.model_validate(reminder, from_attributes=True)


@router.put("/reminders/{reminder_id}", response_model=ReminderModel)
async def update_reminder(
    reminder_id: int,
    payload: ReminderWrite,
    storage: StorageService = Depends(get_storage_service),
    limiter: RateLimiter = Depends(get_rate_limiter),
    settings: Settings = Depends(get_settings),
) -> ReminderModel:
    _enforce_write_limit(limiter, "reminders:write", settings)
    try:
        reminder = await storage.update_reminder(
            reminder_id,
            title=payload.title,
            note=payload.note,
            due_date=payload.due_date,
            priority=payload.priority,
            completed=payload.completed,
        )
    except ReminderNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    API_COUNTER.labels(endpoint="reminders_update").inc()
    return ReminderModel.model_validate(reminder, from_attributes=True)


@router.patch("/reminders/{reminder_id}/toggle", response_model=ReminderModel)
async def toggle_reminder(
    reminder_id: int,
    storage: StorageService = Depends(get_storage_service),
) -> ReminderModel:
    try:
        reminder = await storage.toggle_reminder(reminder_id)
    except ReminderNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    API_COUNTER.labels(endpoint="reminders_toggle").inc()
    return ReminderModel.model_validate(reminder, from_attributes=True)


@router.delete("/reminders/{reminder_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_reminder(
    reminder_id: int,
    storage: StorageService = Depends(get_storage_service),
) -> Response:
    if not await storage.delete_reminder(reminder_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Reminder not found")
    API_COUNTER.labels(endpoint="reminders_delete").inc()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# -- settings --------------------------------------------------------------
@router.get("/settings", response_model=DisplaySettings)
async def read_settings(
    storage: StorageService = Depends(get_storage_service),
) -> DisplaySettings:
    stored = await storage.get_display_settings()
    return DisplaySettings.model_validate(stored)


@router.put("/settings", response_model=DisplaySettings)
async def update_settings(
    payload: DisplaySettingsUpdate,
    storage: StorageService = Depends(get_storage_service),
) -> DisplaySettings:
    merged = await storage.update_display_settings(payload.model_dump(exclude_none=True))
    API_COUNTER.labels(endpoint="settings_update").inc()
    return DisplaySettings.model_validate(merged)


# -- analytics and catalogs ------------------------------------------------
@router.get("/analytics", response_model=AnalyticsReportModel)
async def analytics_report(
    storage: StorageService = Depends(get_storage_service),
    settings: Settings = Depends(get_settings),
    time_range: TimeRange | None = Query(default=None, alias="range"),
    today: date | None = Query(default=None),
) -> AnalyticsReportModel:
    window = time_range or TimeRange(settings.analytics_default_range)
    now = today or date.today()
    entries = await storage.list_journal_entries()

    started = time.perf_counter()
    report = build_report(entries, window, now)
    ANALYTICS_LATENCY.observe(time.perf_counter() - started)
    ANALYTICS_REPORTS.labels(time_range=window.value).inc()
    logger.info(
        "analytics computed",
        extra={
            "time_range": window.value,
            "extra_fields": {
                "entries_total": report.total_entries,
                "entries_in_range": report.entries_in_range,
            },
        },
    )
    API_COUNTER.labels(endpoint="analytics").inc()
    return AnalyticsReportModel.model_validate(asdict(report))


@router.get("/moods", response_model=MoodListResponse)
async def list_moods() -> MoodListResponse:
    items = []
    for emoji in MOOD_EMOJIS:
        category = classify(emoji)
        items.append(MoodOption(emoji=emoji, category=category, label=CATEGORY_NAMES[category]))
    return MoodListResponse(items=items)


@router.get("/stickers", response_model=StickerListResponse)
async def list_stickers(category: str = Query(default="all")) -> StickerListResponse:
    if category not in STICKER_CATEGORIES:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="unknown sticker category")
    items = [StickerModel(**item._asdict()) for item in stickers_for(category)]
    return StickerListResponse(
        category=category,
        categories=list(STICKER_CATEGORIES),
        items=items,
    )


@router.get("/playlists", response_model=PlaylistListResponse)
async def list_playlists(mood: str | None = Query(default=None, max_length=16)) -> PlaylistListResponse:
    items = [PlaylistModel(**item._asdict()) for item in playlists_for(mood)]
    return PlaylistListResponse(mood=mood, personalized=mood in PLAYLISTS, items=items)


@router.get("/export/journal")
async def export_journal(
    storage: StorageService = Depends(get_storage_service),
) -> StreamingResponse:
    content = await storage.export_journal()
    API_COUNTER.labels(endpoint="export_journal").inc()
    return StreamingResponse(
        iter([content]),
        media_type="text/csv",
        headers={"Content-Disposition": "attachment; filename=moodjournal-export.csv"},
    )
