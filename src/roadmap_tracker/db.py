"""SQLite storage for items, months and settings."""
import sqlite3
import uuid
from datetime import date, datetime
from pathlib import Path

from loguru import logger

from roadmap_tracker.config import DEFAULT_DB_PATH
from roadmap_tracker.models import (
    Confidence, Difficulty, MonthModule, Priority, Status, StudyItem,
)
from roadmap_tracker.months import month_id_for, month_name, next_month_id, parse_month_id

SCHEMA = """
CREATE TABLE IF NOT EXISTS months (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS items (
    id TEXT PRIMARY KEY,
    month_id TEXT NOT NULL REFERENCES months(id) ON DELETE CASCADE,
    name TEXT NOT NULL,
    pattern TEXT DEFAULT 'General',
    difficulty TEXT DEFAULT 'Easy',
    priority TEXT DEFAULT 'Normal',
    status TEXT DEFAULT 'Not Started',
    confidence TEXT DEFAULT 'None',
    last_reviewed_at TEXT,
    scheduled_date TEXT,
    attempts INTEGER DEFAULT 0,
    revision_count INTEGER DEFAULT 0,
    notes TEXT DEFAULT ''
);

CREATE TABLE IF NOT EXISTS user_settings (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    key TEXT NOT NULL UNIQUE,
    value TEXT
);
"""


def get_connection(db_path: str = DEFAULT_DB_PATH) -> sqlite3.Connection:
    """Return a SQLite connection with row factory and foreign keys enabled."""
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


def init_db(db_path: str = DEFAULT_DB_PATH) -> None:
    """Initialize the database, creating all tables if they don't exist."""
    Path(db_path).parent.mkdir(parents=True, exist_ok=True)
    conn = get_connection(db_path)
    conn.executescript(SCHEMA)
    conn.commit()
    conn.close()


def get_setting(db_path: str, key: str, default: str = None) -> str | None:
    conn = get_connection(db_path)
    row = conn.execute("SELECT value FROM user_settings WHERE key = ?", (key,)).fetchone()
    conn.close()
    return row["value"] if row else default


def set_setting(db_path: str, key: str, value: str) -> None:
    conn = get_connection(db_path)
    conn.execute(
        "INSERT INTO user_settings (key, value) VALUES (?, ?) ON CONFLICT(key) DO UPDATE SET value=?",
        (key, value, value),
    )
    conn.commit()
    conn.close()


# --- months ---

def add_month(db_path: str, month_id: str) -> MonthModule:
    parse_month_id(month_id)
    month = MonthModule(id=month_id, name=month_name(month_id))
    conn = get_connection(db_path)
    conn.execute("INSERT OR IGNORE INTO months (id, name) VALUES (?, ?)", (month.id, month.name))
    conn.commit()
    conn.close()
    return month


def list_months(db_path: str) -> list[MonthModule]:
    conn = get_connection(db_path)
    rows = conn.execute("SELECT * FROM months ORDER BY id").fetchall()
    conn.close()
    return [MonthModule(id=r["id"], name=r["name"]) for r in rows]


def get_current_month_id(db_path: str, today: date) -> str:
    """Current month from settings; the first call registers `today`'s month."""
    current = get_setting(db_path, "current_month_id")
    if current:
        return current
    current = month_id_for(today)
    add_month(db_path, current)
    set_setting(db_path, "current_month_id", current)
    return current


def add_next_month(db_path: str, today: date) -> str:
    """Append the month after the latest one and make it current."""
    months = list_months(db_path)
    last = months[-1].id if months else get_current_month_id(db_path, today)
    month_id = next_month_id(last)
    add_month(db_path, month_id)
    set_setting(db_path, "current_month_id", month_id)
    logger.debug("Switched to month {}", month_id)
    return month_id


def delete_month(db_path: str, month_id: str, today: date) -> str:
    """Drop a month and its items. Returns the month that is current afterwards."""
    conn = get_connection(db_path)
    conn.execute("DELETE FROM items WHERE month_id = ?", (month_id,))
    conn.execute("DELETE FROM months WHERE id = ?", (month_id,))
    conn.commit()
    conn.close()
    remaining = list_months(db_path)
    current = get_setting(db_path, "current_month_id")
    if not remaining:
        conn = get_connection(db_path)
        conn.execute("DELETE FROM user_settings WHERE key = 'current_month_id'")
        conn.commit()
        conn.close()
        return get_current_month_id(db_path, today)
    if current == month_id:
        current = remaining[-1].id
        set_setting(db_path, "current_month_id", current)
    return current


# --- items ---

def _to_item(row: sqlite3.Row) -> StudyItem:
    return StudyItem(
        id=row["id"],
        month_id=row["month_id"],
        name=row["name"],
        pattern=row["pattern"],
        difficulty=Difficulty(row["difficulty"]),
        priority=Priority(row["priority"]),
        status=Status(row["status"]),
        confidence=Confidence(row["confidence"]),
        last_reviewed_at=datetime.fromisoformat(row["last_reviewed_at"]) if row["last_reviewed_at"] else None,
        scheduled_date=date.fromisoformat(row["scheduled_date"]) if row["scheduled_date"] else None,
        attempts=row["attempts"],
        revision_count=row["revision_count"],
        notes=row["notes"] or "",
    )


def _to_row(item: StudyItem) -> tuple:
    return (
        item.id,
        item.month_id,
        item.name,
        item.pattern,
        item.difficulty.value,
        item.priority.value,
        item.status.value,
        item.confidence.value,
        item.last_reviewed_at.isoformat() if item.last_reviewed_at else None,
        item.scheduled_date.isoformat() if item.scheduled_date else None,
        item.attempts,
        item.revision_count,
        item.notes,
    )


def add_item(db_path: str, month_id: str, name: str, **fields) -> StudyItem:
    """Create a new item in a month (registering the month if needed)."""
    add_month(db_path, month_id)
    item = StudyItem(id=uuid.uuid4().hex[:9], month_id=month_id, name=name, **fields)
    save_item(db_path, item)
    return item


def save_item(db_path: str, item: StudyItem) -> None:
    conn = get_connection(db_path)
    conn.execute(
        """INSERT INTO items (id, month_id, name, pattern, difficulty, priority, status,
            confidence, last_reviewed_at, scheduled_date, attempts, revision_count, notes)
        VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
        ON CONFLICT(id) DO UPDATE SET
            month_id=excluded.month_id, name=excluded.name, pattern=excluded.pattern,
            difficulty=excluded.difficulty, priority=excluded.priority, status=excluded.status,
            confidence=excluded.confidence, last_reviewed_at=excluded.last_reviewed_at,
            scheduled_date=excluded.scheduled_date, attempts=excluded.attempts,
            revision_count=excluded.revision_count, notes=excluded.notes""",
        _to_row(item),
    )
    conn.commit()
    conn.close()
    logger.debug("Saved item {} ({})", item.id, item.status.value)


def get_item(db_path: str, item_id: str) -> StudyItem:
    conn = get_connection(db_path)
    row = conn.execute("SELECT * FROM items WHERE id = ?", (item_id,)).fetchone()
    conn.close()
    if row is None:
        raise KeyError(item_id)
    return _to_item(row)


def load_items(db_path: str, month_id: str | None = None) -> list[StudyItem]:
    """Items in insertion order, optionally limited to one month."""
    conn = get_connection(db_path)
    if month_id is None:
        rows = conn.execute("SELECT * FROM items ORDER BY rowid").fetchall()
    else:
        rows = conn.execute("SELECT * FROM items WHERE month_id = ? ORDER BY rowid", (month_id,)).fetchall()
    conn.close()
    return [_to_item(r) for r in rows]


def delete_item(db_path: str, item_id: str) -> None:
    conn = get_connection(db_path)
    conn.execute("DELETE FROM items WHERE id = ?", (item_id,))
    conn.commit()
    conn.close()
