"""
PersistentStore — durable key → collection snapshots.

Every repository keeps its whole collection under one well-known key. A save
overwrites that key wholesale; a load that can't make sense of the stored
text fails open and hands back an empty collection.
"""

from __future__ import annotations

import json
import logging
import sqlite3
from typing import Any, Dict, List

logger = logging.getLogger(__name__)

FORMAT_VERSION = 1

# Well-known collection keys
TASKS_KEY = "tasks"
NOTES_KEY = "notes"
PROJECTS_KEY = "projects"
FOLDERS_KEY = "folders"
HABITS_KEY = "habits"
POMODORO_KEY = "pomodoroSessions"
CALENDAR_KEY = "calendarEvents"

ALL_KEYS = (
    TASKS_KEY, NOTES_KEY, PROJECTS_KEY, FOLDERS_KEY,
    HABITS_KEY, POMODORO_KEY, CALENDAR_KEY,
)


class PersistentStore:
    """JSON snapshots on top of the kv_store table."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self.conn = conn

    # ── Core contract ───────────────────────────────────────────────────────

    def load(self, key: str) -> List[Dict[str, Any]]:
        """Return the stored collection for key, or [] if absent or unreadable."""
        row = self.conn.execute(
            "SELECT value FROM kv_store WHERE key = ?", (key,)
        ).fetchone()
        if row is None:
            return []
        try:
            payload = json.loads(row["value"])
        except json.JSONDecodeError:
            logger.warning("Stored value for %r is not valid JSON; starting empty.", key)
            return []

        # bare arrays are the un-versioned layout
        if isinstance(payload, list):
            return payload
        if isinstance(payload, dict) and isinstance(payload.get("items"), list):
            version = payload.get("version")
            if version != FORMAT_VERSION:
                logger.warning("Key %r stored with format version %r; reading best-effort.",
                               key, version)
            return payload["items"]

        logger.warning("Stored value for %r has unexpected shape; starting empty.", key)
        return []

    def save(self, key: str, items: List[Dict[str, Any]]) -> None:
        """Overwrite the stored collection for key."""
        value = json.dumps({"version": FORMAT_VERSION, "items": items})
        self.conn.execute(
            """INSERT INTO kv_store (key, value, updated_at)
               VALUES (?, ?, datetime('now'))
               ON CONFLICT(key) DO UPDATE SET
                   value = excluded.value, updated_at = excluded.updated_at""",
            (key, value),
        )
        self.conn.commit()
        logger.debug("Saved %d item(s) under %r", len(items), key)

    # ── Housekeeping ────────────────────────────────────────────────────────

    def keys(self) -> List[str]:
        rows = self.conn.execute("SELECT key FROM kv_store ORDER BY key").fetchall()
        return [r["key"] for r in rows]

    def clear(self, key: str) -> None:
        self.conn.execute("DELETE FROM kv_store WHERE key = ?", (key,))
        self.conn.commit()

    def clear_all(self) -> None:
        """Delete every collection. Requires explicit confirmation in the UI."""
        self.conn.execute("DELETE FROM kv_store")
        self.conn.commit()
        logger.warning("All stored collections have been cleared.")

    # ── Data export / import ────────────────────────────────────────────────

    def export_all(self) -> Dict[str, List[Dict[str, Any]]]:
        """Every well-known collection, keyed by name (missing ones as [])."""
        return {key: self.load(key) for key in ALL_KEYS}

    def import_all(self, data: Dict[str, Any]) -> int:
        """Overwrite collections from an export dict. Returns keys written."""
        written = 0
        for key in ALL_KEYS:
            items = data.get(key)
            if isinstance(items, list):
                self.save(key, items)
                written += 1
            elif items is not None:
                logger.warning("Import skipped %r: expected a list.", key)
        return written


# ---------------------------------------------------------------------------
# Explanation (for interviews)
# ---------------------------------------------------------------------------
# What this file does:
#   The durable side of the app. Each collection is one JSON document in a
#   single SQLite table; saves replace the document, loads parse it back.
#
# Key design decisions:
#   - Versioned envelope {"version": 1, "items": [...]}: gives future code a
#     hook for migrations. Bare arrays are still read so older snapshots
#     don't vanish.
#   - Fail open: corrupt JSON means "start this collection empty", never a
#     crash on launch. The warning in the log is the only trace.
#   - UPSERT (ON CONFLICT DO UPDATE) keeps one row per key without a
#     separate "does it exist?" query.
#
# Interviewer-friendly talking points:
#   1. Whole-collection writes are fine at personal scale (hundreds of
#      records). A team app would store rows, not snapshots.
#   2. SQLite instead of loose JSON files: atomic writes for free, so a
#      crash mid-save can't leave a half-written file behind.
