"""Repository for opaque keyed blobs."""

import sqlite3


def save_blob(conn: sqlite3.Connection, key: str, value: bytes) -> None:
    """Insert or replace the blob stored under key."""
    conn.execute(
        "INSERT INTO blobs (key, value, updated_at) VALUES (?, ?, CURRENT_TIMESTAMP) "
        "ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = CURRENT_TIMESTAMP",
        (key, value),
    )
    conn.commit()


def load_blob(conn: sqlite3.Connection, key: str) -> bytes | None:
    row = conn.execute("SELECT value FROM blobs WHERE key = ?", (key,)).fetchone()
    if row is None:
        return None
    value = row[0]
    return value.encode() if isinstance(value, str) else bytes(value)


def delete_blob(conn: sqlite3.Connection, key: str) -> bool:
    cursor = conn.execute("DELETE FROM blobs WHERE key = ?", (key,))
    conn.commit()
    return cursor.rowcount > 0
