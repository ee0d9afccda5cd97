from __future__ import annotations

import argparse
import json
from datetime import date, datetime
from pathlib import Path

from sqlalchemy import create_engine, text

DEFAULT_SQLITE_URL = "sqlite:///./data/moodjournal.db"
TABLES = ("journal_entries", "reminders", "settings")


def _serialize_row(row: dict[str, object]) -> dict[str, object]:
    serialized: dict[str, object] = {}
    for key, value in row.items():
        if isinstance(value, (date, datetime)):
            serialized[key] = value.isoformat()
        else:
            serialized[key] = value
    return serialized


def export_sqlite(sqlite_url: str, output_path: Path) -> dict[str, list[dict[str, object]]]:
    engine = create_engine(sqlite_url)
    payload: dict[str, list[dict[str, object]]] = {table: [] for table in TABLES}

    with engine.begin() as connection:
        for table in TABLES:
            result = connection.execute(text(f"SELECT * FROM {table} ORDER BY id"))
            payload[table] = [_serialize_row(dict(row)) for row in result.mappings()]
    engine.dispose()

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
    return payload


def main() -> None:
    parser = argparse.ArgumentParser(description="Export mood journal data from SQLite to JSON")
    parser.add_argument("--sqlite-url", default=DEFAULT_SQLITE_URL, help="SQLite DATABASE_URL")
    parser.add_argument(
        "--output",
        default="data/moodjournal_export.json",
        type=Path,
        help="Path to export JSON file",
    )
    args = parser.parse_args()

    export_sqlite(args.sqlite_url, args.output)


if __name__ == "__main__":
    main()
