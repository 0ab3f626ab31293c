# did_whisper/transport.py

import logging
import time

import requests

logger = logging.getLogger(__name__)


def with_retry(func, *, max_retries: int, error_cls, label: str):
    """
    Execute *func* with exponential-backoff retry on transient errors
    (timeouts, refused connections). Any other requests error, including
    HTTP error statuses, is raised immediately as *error_cls*.
    """
    last_exc = None
    attempts = max(1, max_retries)
    for attempt in range(attempts):
        try:
            return func()
        except (requests.exceptions.Timeout, requests.exceptions.ConnectionError) as exc:
            last_exc = exc
            if attempt < attempts - 1:
                wait = 2 ** attempt
                logger.warning(
                    "%s retry %d/%d in %ds: %s", label, attempt + 1, attempts, wait, exc
                )
                time.sleep(wait)
        except requests.exceptions.RequestException as exc:
            raise error_cls(f"{label} request error: {exc}") from exc

    raise error_cls(
        f"{label} failed after {attempts} attempts: {last_exc}"
    ) from last_exc
