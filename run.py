import logging

import uvicorn

from did_whisper.config import (
    WHISPER_PORT, WHISPER_HOST, SSL_CERTFILE, SSL_KEYFILE,
    LOG_LEVEL, ensure_directories,
)

logger = logging.getLogger(__name__)


if __name__ == "__main__":
    ensure_directories()

    ssl_options = {}
    if SSL_CERTFILE and SSL_KEYFILE:
        ssl_options = {"ssl_certfile": SSL_CERTFILE, "ssl_keyfile": SSL_KEYFILE}
    else:
        logger.info("SSL_CERTFILE/SSL_KEYFILE not set, serving plain HTTP")

    uvicorn.run(
        "did_whisper.main:app",
        port=WHISPER_PORT,
        host=WHISPER_HOST,
        reload=False,
        log_level=LOG_LEVEL.lower(),
        **ssl_options,
    )
