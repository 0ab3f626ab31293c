import os
import logging
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------
BASE_DIR = Path(os.getenv("WHISPER_BASE_DIR", "./whisper_data"))
DOCS_DIR = Path(os.getenv("WHISPER_DOCS_DIR", str(BASE_DIR / "dids")))
DB_PATH = Path(os.getenv("WHISPER_DB_PATH", str(BASE_DIR / "whisper.db")))

# ---------------------------------------------------------------------------
# DID resolution
# ---------------------------------------------------------------------------
WHISPER_MODE = os.getenv("WHISPER_MODE", "test")
LEDGER_URL = os.getenv("WHISPER_LEDGER_URL", "")
LEDGER_HOSTS = {
    "live": "https://veres.one",
    "test": "https://genesis.testnet.veres.one",
    "dev": "https://genesis.veres.one.localhost:42443",
}
RESOLVER_TIMEOUT = int(os.getenv("RESOLVER_TIMEOUT", "30"))
RESOLVER_MAX_RETRIES = int(os.getenv("RESOLVER_MAX_RETRIES", "3"))

# ---------------------------------------------------------------------------
# Message store
# ---------------------------------------------------------------------------
STORE_TIMEOUT = int(os.getenv("STORE_TIMEOUT", "30"))
STORE_MAX_RETRIES = int(os.getenv("STORE_MAX_RETRIES", "3"))

# ---------------------------------------------------------------------------
# Server
# ---------------------------------------------------------------------------
WHISPER_PORT = int(os.getenv("WHISPER_PORT", "8080"))
WHISPER_HOST = os.getenv("WHISPER_HOST", "0.0.0.0")
SSL_CERTFILE = os.getenv("SSL_CERTFILE", "")
SSL_KEYFILE = os.getenv("SSL_KEYFILE", "")

# ---------------------------------------------------------------------------
# Limits
# ---------------------------------------------------------------------------
MAX_MESSAGE_SIZE = int(os.getenv("MAX_MESSAGE_SIZE", str(1024 * 1024)))  # 1 MB
CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*").split(",")

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

logging.basicConfig(
    level=getattr(logging, LOG_LEVEL, logging.INFO),
    format="%(asctime)s  %(name)-28s  %(levelname)-7s  %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def ledger_url_for_mode(mode: str) -> str:
    """
    Base URL of the ledger resolver for a given mode.
    WHISPER_LEDGER_URL overrides the per-mode default.
    """
    if LEDGER_URL:
        return LEDGER_URL.rstrip("/")
    try:
        return LEDGER_HOSTS[mode]
    except KeyError:
        raise ValueError(f"Unknown ledger mode: {mode!r}") from None


def ensure_directories():
    BASE_DIR.mkdir(parents=True, exist_ok=True)
    DOCS_DIR.mkdir(parents=True, exist_ok=True)
    DB_PATH.parent.mkdir(parents=True, exist_ok=True)
