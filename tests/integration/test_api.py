from __future__ import annotations

import csv
import io

import pytest
from fastapi.testclient import TestClient

from moodjournal.app.core.config import get_settings


def _save_entry(client: TestClient, day: str, mood: str = "😊", content: str = "") -> dict:
    response = client.post(
        "/api/v1/journal",
        json={"date": day, "mood": mood, "content": content},
    )
    assert response.status_code in {200, 201}
    return response.json()


def test_health_endpoint(test_client: TestClient) -> None:
    response = test_client.get("/healthz")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "version": "0.1.0-test"}


def test_readyz_reports_database(test_client: TestClient) -> None:
    response = test_client.get("/readyz")
    assert response.status_code == 200
    body = response.json()
    assert body["ready"] is True
    assert body["db"] == {"ok": True, "detail": "ok"}


def test_metrics_endpoint(test_client: TestClient) -> None:
    test_client.get("/healthz")
    response = test_client.get("/metrics")
    assert response.status_code == 200
    assert "moodjournal_requests_total" in response.text


def test_journal_upsert_flow(test_client: TestClient) -> None:
    create_response = test_client.post(
        "/api/v1/journal",
        json={
            "date": "2024-01-04",
            "mood": "😊",
            "content": "Long walk by the river",
            "stickers": [
                {
                    "id": "sun",
                    "type": "weather",
                    "image_url": "https://example.com/sun.svg",
                    "pos_x": 12.5,
                    "pos_y": 40,
                    "width": 64,
                    "height": 64,
                }
            ],
        },
    )
    assert create_response.status_code == 201
    created = create_response.json()
    assert isinstance(created["id"], int)
    assert created["stickers"][0]["id"] == "sun"

    update_response = test_client.post(
        "/api/v1/journal",
        json={"date": "2024-01-04", "mood": "😢", "content": "Rain later"},
    )
    assert update_response.status_code == 200
    assert update_response.json()["id"] == created["id"]
    assert update_response.json()["stickers"] is None

    list_response = test_client.get("/api/v1/journal")
    items = list_response.json()["items"]
    assert len(items) == 1
    assert items[0]["mood"] == "😢"

    by_date = test_client.get("/api/v1/journal/2024-01-04")
    assert by_date.status_code == 200
    assert by_date.json()["content"] == "Rain later"

    missing = test_client.get("/api/v1/journal/2024-01-05")
    assert missing.status_code == 404
    assert missing.json()["detail"] == "No entry found for this date"


def test_journal_rejects_invalid_payloads(test_client: TestClient) -> None:
    bad_mood = test_client.post(
        "/api/v1/journal",
        json={"date": "2024-01-04", "mood": "🦄", "content": ""},
    )
    bad_date = test_client.post(
        "/api/v1/journal",
        json={"date": "2024-02-30", "mood": "😊", "content": ""},
    )
    bad_sticker = test_client.post(
        "/api/v1/journal",
        json={
            "date": "2024-01-04",
            "mood": "😊",
            "stickers": [
                {"id": "cat", "type": "animals", "image_url": "x", "pos_x": 0, "pos_y": 0,
                 "width": 0, "height": 10}
            ],
        },
    )

    assert bad_mood.status_code == 422
    assert bad_date.status_code == 422
    assert bad_sticker.status_code == 422


def test_journal_update_and_delete(test_client: TestClient) -> None:
    first = _save_entry(test_client, "2024-03-01", "😊", "one")
    _save_entry(test_client, "2024-03-02", "😡", "two")

    moved = test_client.put(
        f"/api/v1/journal/{first['id']}",
        json={"date": "2024-03-05", "mood": "😍", "content": "moved"},
    )
    assert moved.status_code == 200
    assert moved.json()["date"] == "2024-03-05"

    clash = test_client.put(
        f"/api/v1/journal/{first['id']}",
        json={"date": "2024-03-02", "mood": "😍", "content": "clash"},
    )
    assert clash.status_code == 409

    missing = test_client.put(
        "/api/v1/journal/9999",
        json={"date": "2024-03-09", "mood": "😍", "content": ""},
    )
    assert missing.status_code == 404

    deleted = test_client.delete(f"/api/v1/journal/{first['id']}")
    assert deleted.status_code == 204
    assert test_client.delete(f"/api/v1/journal/{first['id']}").status_code == 404


def test_reminder_flow(test_client: TestClient) -> None:
    low = test_client.post(
        "/api/v1/reminders",
        json={"title": "Water plants", "note": "balcony", "due_date": "2024-06-02", "priority": "low"},
    )
    high = test_client.post(
        "/api/v1/reminders",
        json={"title": "Therapy", "note": "bring notes", "due_date": "2024-06-02", "priority": "high"},
    )
    early = test_client.post(
        "/api/v1/reminders",
        json={"title": "Gym", "note": "legs", "due_date": "2024-06-01"},
    )
    assert low.status_code == high.status_code == early.status_code == 201
    assert early.json()["priority"] == "medium"
    assert early.json()["completed"] is False

    listing = test_client.get("/api/v1/reminders").json()["items"]
    assert [item["title"] for item in listing] == ["Gym", "Therapy", "Water plants"]

    reminder_id = high.json()["id"]
    toggled = test_client.patch(f"/api/v1/reminders/{reminder_id}/toggle")
    assert toggled.status_code == 200
    assert toggled.json()["completed"] is True

    updated = test_client.put(
        f"/api/v1/reminders/{reminder_id}",
        json={"title": "Therapy session", "note": "bring journal", "due_date": "2024-06-03"},
    )
    assert updated.status_code == 200
    assert updated.json()["priority"] == "high"
    assert updated.json()["completed"] is True

    assert test_client.get(f"/api/v1/reminders/{reminder_id}").status_code == 200
    assert test_client.delete(f"/api/v1/reminders/{reminder_id}").status_code == 204
    assert test_client.get(f"/api/v1/reminders/{reminder_id}").status_code == 404
    assert test_client.patch(f"/api/v1/reminders/{reminder_id}/toggle").status_code == 404


def test_reminder_validation(test_client: TestClient) -> None:
    empty_title = test_client.post(
        "/api/v1/reminders",
        json={"title": "", "note": "x", "due_date": "2024-06-01"},
    )
    bad_priority = test_client.post(
        "/api/v1/reminders",
        json={"title": "x", "note": "y", "due_date": "2024-06-01", "priority": "urgent"},
    )
    assert empty_title.status_code == 422
    assert bad_priority.status_code == 422


def test_settings_partial_update(test_client: TestClient) -> None:
    defaults = test_client.get("/api/v1/settings")
    assert defaults.status_code == 200
    assert defaults.json() == {
        "color_mode": "light",
        "theme_color": "default",
        "font_size": "medium",
        "zoom_level": 100,
        "background_gradient": "orange-blue",
    }

    updated = test_client.put("/api/v1/settings", json={"color_mode": "dark", "zoom_level": 125})
    assert updated.status_code == 200
    assert updated.json()["color_mode"] == "dark"
    assert updated.json()["zoom_level"] == 125
    assert updated.json()["font_size"] == "medium"

    assert test_client.put("/api/v1/settings", json={"zoom_level": 160}).status_code == 422
    assert test_client.put("/api/v1/settings", json={"zoom_level": 102}).status_code == 422
    assert test_client.put("/api/v1/settings", json={"theme_color": "neon"}).status_code == 422
    assert test_client.get("/api/v1/settings").json()["zoom_level"] == 125


def test_analytics_report(test_client: TestClient) -> None:
    _save_entry(test_client, "2024-01-01", "😊", "new year walk")
    _save_entry(test_client, "2024-01-02", "😊", "back to work")
    _save_entry(test_client, "2024-01-04", "😢", "missed a day and felt low")
    _save_entry(test_client, "2023-10-01", "😡", "long ago")

    response = test_client.get("/api/v1/analytics", params={"range": "7days", "today": "2024-01-04"})

    assert response.status_code == 200
    body = response.json()
    assert body["time_range"] == "7days"
    assert body["range_label"] == "the last 7 days"
    assert body["total_entries"] == 4
    assert body["entries_in_range"] == 3
    assert body["streaks"] == {"current_streak": 1, "longest_streak": 2}
    assert body["distribution"] == [
        {"category": "happy", "count": 2},
        {"category": "sad", "count": 1},
    ]
    assert [point["date"] for point in body["trends"]] == ["2024-01-01", "2024-01-02", "2024-01-04"]
    assert body["trends"][0]["date_formatted"] == "Jan 1, 2024"
    assert body["primary_mood"] == "happy"
    assert body["primary_mood_emoji"] == "😊"
    assert body["primary_mood_share"] == 67
    assert body["word_counts"] == {"average": 4, "max": 6, "min": 3}

    everything = test_client.get("/api/v1/analytics", params={"range": "all", "today": "2024-01-04"})
    assert everything.json()["entries_in_range"] == 4


def test_analytics_defaults_and_validation(test_client: TestClient) -> None:
    empty = test_client.get("/api/v1/analytics")
    assert empty.status_code == 200
    body = empty.json()
    assert body["time_range"] == "7days"
    assert body["total_entries"] == 0
    assert body["primary_mood"] is None
    assert body["streaks"] == {"current_streak": 0, "longest_streak": 0}
    assert body["trends"] == []

    assert test_client.get("/api/v1/analytics", params={"range": "14days"}).status_code == 422


def test_moods_catalog(test_client: TestClient) -> None:
    response = test_client.get("/api/v1/moods")
    items = response.json()["items"]
    assert len(items) == 10
    assert items[0] == {"emoji": "😊", "category": "happy", "label": "Happy"}
    assert {"emoji": "😡", "category": "angry", "label": "Angry"} in items


def test_stickers_catalog(test_client: TestClient) -> None:
    everything = test_client.get("/api/v1/stickers")
    assert everything.status_code == 200
    body = everything.json()
    assert body["category"] == "all"
    assert body["categories"][0] == "all"

    flowers = test_client.get("/api/v1/stickers", params={"category": "flowers"}).json()
    assert flowers["items"]
    assert all(item["type"] == "flowers" for item in flowers["items"])
    assert len(flowers["items"]) < len(body["items"])

    assert test_client.get("/api/v1/stickers", params={"category": "cars"}).status_code == 404


def test_export_journal_csv(test_client: TestClient) -> None:
    _save_entry(test_client, "2024-01-04", "😍", "dinner, with friends")

    response = test_client.get("/api/v1/export/journal")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert "moodjournal-export.csv" in response.headers["content-disposition"]
    rows = list(csv.reader(io.StringIO(response.text)))
    assert rows[0] == ["id", "date", "mood", "content", "stickers"]
    assert rows[1][1:4] == ["2024-01-04", "😍", "dinner, with friends"]


@pytest.fixture()
def limited_client(monkeypatch: pytest.MonkeyPatch, test_client: TestClient) -> TestClient:
    settings = get_settings()
    monkeypatch.setattr(settings, "journal_write_limit_per_min", 2)
    return test_client


def test_journal_writes_are_rate_limited(limited_client: TestClient) -> None:
    _save_entry(limited_client, "2024-01-01")
    _save_entry(limited_client, "2024-01-02")

    response = limited_client.post(
        "/api/v1/journal",
        json={"date": "2024-01-03", "mood": "😊", "content": ""},
    )

    assert response.status_code == 429
    assert int(response.headers["Retry-After"]) >= 1


def test_playlists_for_mood(test_client: TestClient) -> None:
    happy = test_client.get("/api/v1/playlists", params={"mood": "😊"})
    fallback = test_client.get("/api/v1/playlists")

    assert happy.status_code == 200
    assert happy.json()["personalized"] is True
    assert happy.json()["items"][0]["title"] == "Happy Hits"
    assert fallback.json()["personalized"] is False
    assert fallback.json()["mood"] is None
    assert [item["title"] for item in fallback.json()["items"]][0] == "Mood Mix"
