# did_whisper/encoding.py

import base58 as b58


def b58encode(data: bytes) -> str:
    """Raw bytes -> base58 (bitcoin alphabet) text."""
    return b58.b58encode(data).decode("ascii")


def b58decode(text: str) -> bytes:
    """
    base58 text -> raw bytes.
    Raises ValueError for anything that is not non-empty base58 text.
    """
    if not isinstance(text, str) or not text:
        raise ValueError("expected non-empty base58 text")
    try:
        return b58.b58decode(text)
    except Exception as e:
        raise ValueError(f"Invalid base58 encoding: {e}") from e
