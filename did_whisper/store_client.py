# did_whisper/store_client.py

import logging

import requests
from pydantic import ValidationError

from did_whisper.config import STORE_MAX_RETRIES, STORE_TIMEOUT
from did_whisper.errors import StorageTransportError
from did_whisper.models import Envelope
from did_whisper.transport import with_retry

logger = logging.getLogger(__name__)

WHISPER_PATH = "/whisper"


def whisper_url(base_url: str) -> str:
    """Append the conventional /whisper suffix unless it is already there."""
    base = base_url.rstrip("/")
    if base.endswith(WHISPER_PATH):
        return base
    return base + WHISPER_PATH


class MessageStoreClient:
    """HTTP client for a store that keeps envelopes until they expire."""

    def __init__(self, timeout: int = STORE_TIMEOUT, max_retries: int = STORE_MAX_RETRIES, session=None):
        self.timeout = timeout
        self.max_retries = max_retries
        self.session = session or requests

    def put(self, envelope: Envelope, url: str):
        """
        Upload an envelope. Returns the store's acknowledgment
        (parsed JSON when the store answers with JSON, raw text otherwise).
        """
        target = whisper_url(url)

        def _put():
            r = self.session.put(target, json=envelope.to_json(), timeout=self.timeout)
            r.raise_for_status()
            logger.debug("Store PUT OK: %s (%d chars)", target, len(envelope.cipher))
            if "json" in r.headers.get("Content-Type", ""):
                return r.json()
            return r.text

        return with_retry(_put, max_retries=self.max_retries, error_cls=StorageTransportError, label="Store PUT")

    def get(self, url: str) -> Envelope:
        def _get():
            r = self.session.get(url, headers={"Accept": "application/json"}, timeout=self.timeout)
            r.raise_for_status()
            logger.debug("Store GET OK: %s", url)
            return r.json()

        obj = with_retry(_get, max_retries=self.max_retries, error_cls=StorageTransportError, label="Store GET")

        try:
            return Envelope.model_validate(obj)
        except ValidationError as exc:
            raise StorageTransportError(f"Store returned a malformed envelope from {url}") from exc
