from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.responses import JSONResponse
import logging

from did_whisper.config import ensure_directories, MAX_MESSAGE_SIZE, CORS_ORIGINS
from did_whisper.database import get_db
from did_whisper.messages import load_message, purge_expired, store_message
from did_whisper.models import Envelope

logger = logging.getLogger(__name__)

app = FastAPI(title="DID Whisper Store", version="1.0.0")

# --------------------------------------------
# CORS
# --------------------------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# --------------------------------------------
# Middleware: message size limit
# --------------------------------------------
@app.middleware("http")
async def limit_message_size(request: Request, call_next):
    if request.method == "PUT" and request.url.path == "/whisper":
        cl = request.headers.get("content-length")
        if cl is not None and cl.isdigit() and int(cl) > MAX_MESSAGE_SIZE:
            return JSONResponse(
                status_code=413,
                content={"error": f"Message too large (max {MAX_MESSAGE_SIZE} bytes)"}
            )
    return await call_next(request)


@app.on_event("startup")
def startup():
    ensure_directories()
    get_db()
    purge_expired()
    logger.info("Whisper store ready")


# ---------------------------------------------------------
# HEALTH CHECK
# ---------------------------------------------------------
@app.get("/health")
def health_check():
    checks = {"database": False}

    try:
        db = get_db()
        db.execute("SELECT 1").fetchone()
        checks["database"] = True
    except Exception as e:
        logger.error(f"Health check DB failed: {e}")

    all_ok = all(checks.values())
    return JSONResponse(
        status_code=200 if all_ok else 503,
        content={"status": "healthy" if all_ok else "degraded", "checks": checks}
    )


# ---------------------------------------------------------
# WHISPER
# ---------------------------------------------------------
@app.put("/whisper")
def put_whisper(envelope: Envelope, request: Request):
    message_id = store_message(envelope)
    url = str(request.url_for("get_whisper", message_id=message_id))
    return {"status": "ok", "id": message_id, "url": url}


@app.get("/whisper/{message_id}", name="get_whisper")
def get_whisper(message_id: str):
    envelope, expired = load_message(message_id)
    if expired:
        raise HTTPException(status_code=410, detail="message expired")
    if envelope is None:
        raise HTTPException(status_code=404, detail="message not found")
    return JSONResponse(content=envelope.to_json())
