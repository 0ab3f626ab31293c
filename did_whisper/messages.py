# did_whisper/messages.py

import logging
import secrets
import time

from did_whisper.database import get_db
from did_whisper.expiration import is_expired
from did_whisper.models import Envelope

logger = logging.getLogger(__name__)


def store_message(envelope: Envelope, now: int | None = None) -> str:
    """Persist an envelope and return its message id."""
    now = int(time.time()) if now is None else now
    message_id = secrets.token_urlsafe(18)

    db = get_db()
    db.execute(
        """
        INSERT INTO messages(message_id, key_id, expiration_seconds, cipher, created_at)
        VALUES (?, ?, ?, ?, ?)
        """,
        (message_id, envelope.key_id, envelope.expiration_seconds, envelope.cipher, now),
    )
    db.commit()
    logger.info("Stored message %s for %s (expires in %ss)", message_id, envelope.key_id,
                envelope.expiration_seconds or "never")
    return message_id


def load_message(message_id: str, now: int | None = None) -> tuple[Envelope | None, bool]:
    """
    Returns (envelope, expired).
    Expired messages are deleted on read and come back as (None, True).
    """
    db = get_db()
    row = db.execute(
        "SELECT key_id, expiration_seconds, cipher, created_at FROM messages WHERE message_id=?",
        (message_id,),
    ).fetchone()

    if not row:
        return None, False

    if is_expired(row["created_at"], row["expiration_seconds"], now):
        delete_message(message_id)
        return None, True

    envelope = Envelope(
        key_id=row["key_id"],
        expiration_seconds=row["expiration_seconds"],
        cipher=row["cipher"],
    )
    return envelope, False


def delete_message(message_id: str) -> None:
    db = get_db()
    db.execute("DELETE FROM messages WHERE message_id=?", (message_id,))
    db.commit()


def purge_expired(now: int | None = None) -> int:
    """Remove every expired message; returns how many were removed."""
    now = int(time.time()) if now is None else now
    db = get_db()
    cur = db.execute(
        """
        DELETE FROM messages
        WHERE expiration_seconds > 0 AND created_at + expiration_seconds <= ?
        """,
        (now,),
    )
    db.commit()
    if cur.rowcount:
        logger.info("Purged %d expired messages", cur.rowcount)
    return cur.rowcount
