# did_whisper/documents.py
"""
Document-fetch capabilities for IdentityKeyResolver.

  local   -> LocalDocumentResolver  (documents this node owns, with secret keys)
  ledger  -> LedgerDocumentResolver (public documents over HTTP)
  all     -> local first, then ledger
"""

import json
import logging
from pathlib import Path
from urllib.parse import quote

import requests

from did_whisper.config import DOCS_DIR, RESOLVER_MAX_RETRIES, RESOLVER_TIMEOUT, ledger_url_for_mode
from did_whisper.errors import ResolutionTransportError
from did_whisper.transport import with_retry

logger = logging.getLogger(__name__)

LOCATIONS = ("local", "ledger", "all")


def _check_location(location: str):
    if location not in LOCATIONS:
        raise ValueError(f"Unknown DID location: {location!r}")


class LocalDocumentResolver:
    """
    DID documents stored as JSON files, one per DID.
    Only documents the caller controls live here.
    """

    def __init__(self, docs_dir: Path | None = None):
        self.docs_dir = Path(docs_dir) if docs_dir is not None else DOCS_DIR

    def path_for(self, did: str) -> Path:
        return self.docs_dir / f"{quote(did, safe='')}.json"

    def save_document(self, doc: dict) -> Path:
        did = doc.get("id")
        if not isinstance(did, str) or not did:
            raise ValueError("DID document has no 'id'")
        path = self.path_for(did)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(doc, indent=2))
        logger.info("Stored local DID document %s", did)
        return path

    def fetch_document(self, did: str, location: str = "local", mode: str = "") -> dict | None:
        _check_location(location)
        if location == "ledger":
            return None

        path = self.path_for(did)
        if not path.exists():
            return None

        try:
            return json.loads(path.read_text())
        except (OSError, json.JSONDecodeError) as exc:
            raise ResolutionTransportError(f"Unreadable local DID document {path}: {exc}") from exc


class LedgerDocumentResolver:
    """
    Public DID documents served at GET {base}/dids/{did}.
    A 404 means the DID is not registered.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: int = RESOLVER_TIMEOUT,
        max_retries: int = RESOLVER_MAX_RETRIES,
    ):
        self.base_url = base_url.rstrip("/") if base_url else None
        self.timeout = timeout
        self.max_retries = max_retries

    def url_for(self, did: str, mode: str) -> str:
        base = self.base_url or ledger_url_for_mode(mode)
        return f"{base}/dids/{quote(did, safe=':')}"

    def fetch_document(self, did: str, location: str = "ledger", mode: str = "test") -> dict | None:
        _check_location(location)
        if location == "local":
            return None

        try:
            url = self.url_for(did, mode)
        except ValueError as exc:
            raise ResolutionTransportError(f"No ledger configured for mode {mode!r}") from exc

        def _get():
            r = requests.get(url, headers={"Accept": "application/ld+json, application/json"}, timeout=self.timeout)
            if r.status_code == 404:
                return None
            r.raise_for_status()
            logger.debug("Ledger lookup OK: %s", did)
            return r.json()

        try:
            doc = with_retry(
                _get,
                max_retries=self.max_retries,
                error_cls=ResolutionTransportError,
                label="DID resolver",
            )
        except ValueError as exc:
            # body was not JSON
            raise ResolutionTransportError(f"DID resolver returned invalid JSON for {did}") from exc

        # Some ledgers wrap the document: {"found": true, "doc": {...}}
        if isinstance(doc, dict) and "found" in doc:
            return doc.get("doc") if doc.get("found") else None
        return doc


class DocumentResolver:
    """Routes a fetch to the local store, the ledger, or both."""

    def __init__(self, local: LocalDocumentResolver | None = None, ledger: LedgerDocumentResolver | None = None):
        self.local = local if local is not None else LocalDocumentResolver()
        self.ledger = ledger if ledger is not None else LedgerDocumentResolver()

    def fetch_document(self, did: str, location: str, mode: str) -> dict | None:
        _check_location(location)

        if location in ("local", "all"):
            doc = self.local.fetch_document(did, "local", mode)
            if doc is not None or location == "local":
                return doc

        return self.ledger.fetch_document(did, "ledger", mode)
