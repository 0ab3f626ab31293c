# did_whisper/database.py

import logging
import sqlite3

from did_whisper import config

logger = logging.getLogger(__name__)

_conn = None


def get_db():
    """
    Returns a global SQLite connection and initializes the schema if needed.
    check_same_thread=False so FastAPI worker threads can share it.
    """
    global _conn
    if _conn is None:
        config.ensure_directories()

        _conn = sqlite3.connect(config.DB_PATH, check_same_thread=False)
        _conn.row_factory = sqlite3.Row

        _conn.execute("PRAGMA journal_mode=WAL")
        _conn.execute("PRAGMA synchronous=NORMAL")

        _conn.execute("""
            CREATE TABLE IF NOT EXISTS messages (
                message_id TEXT PRIMARY KEY,
                key_id TEXT NOT NULL,
                expiration_seconds INTEGER NOT NULL DEFAULT 0,
                cipher TEXT NOT NULL,
                created_at INTEGER NOT NULL
            );
        """)
        _conn.execute(
            "CREATE INDEX IF NOT EXISTS idx_messages_created ON messages(created_at)"
        )

        _conn.commit()
        logger.info("Database initialized at %s", config.DB_PATH)

    return _conn


def close_db():
    global _conn
    if _conn is not None:
        _conn.close()
        _conn = None
