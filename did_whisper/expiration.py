# did_whisper/expiration.py

import time

NEVER = 0

EXPIRATION_SECONDS = {
    "5m": 5 * 60,
    "1h": 60 * 60,
    "1d": 24 * 60 * 60,
    "1w": 7 * 24 * 60 * 60,
}

# Unknown tokens fall back to the longest duration. Existing callers rely on
# this, so a bad token is never an error.
DEFAULT_TOKEN = "1w"


def to_seconds(token) -> int:
    """
    Map an expiration token ("5m", "1h", "1d", "1w") to seconds.
    None, 0 and "0" mean the message never expires.
    """
    if token is None or token == 0 or token == "0":
        return NEVER
    if not isinstance(token, str):
        return EXPIRATION_SECONDS[DEFAULT_TOKEN]
    return EXPIRATION_SECONDS.get(token, EXPIRATION_SECONDS[DEFAULT_TOKEN])


def is_expired(created_at: int, expiration_seconds: int, now: int | None = None) -> bool:
    if not expiration_seconds:
        return False
    if now is None:
        now = int(time.time())
    return now >= created_at + expiration_seconds
