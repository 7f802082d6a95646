# scam_scanner/main.py
import logging
from typing import Any, List

from fastapi import BackgroundTasks, Body, Depends, FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.requests import Request

from scam_scanner.config import get_settings
from scam_scanner.models import (
    AnalyticsSnapshot,
    ClientConfig,
    ConversationRecord,
    DetectScamResponse,
    MockScammerResponse,
)
from scam_scanner.utils.auth import require_api_key
from scam_scanner.services.conversation_log import ConversationLog
from scam_scanner.services.persistence import persist_scam_message
from scam_scanner.services.responder import ScanService
from scam_scanner.services.scam_detector import classify, matched_keywords

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger("honeypot")

settings = get_settings()

app = FastAPI(title="Scam Scanner API", version="1.0.0")
service = ScanService(conversation_log=ConversationLog(capacity=settings.conversation_log_capacity))

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "x-api-key"],
)


def get_scan_service() -> ScanService:
    return service


# ----------------------------
# Helpers
# ----------------------------
def _as_text(value: Any) -> str:
    if not value:
        return ""
    return value if isinstance(value, str) else str(value)


def _field(payload: Any, name: str) -> Any:
    # Bodies that are not JSON objects carry no fields
    return payload.get(name) if isinstance(payload, dict) else None


# ----------------------------
# Error shape: every failure is {"error": "..."}
# ----------------------------
@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)}, headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.warning(f"RequestValidationError on {request.url.path}: {exc.errors()}")
    return JSONResponse(status_code=400, content={"error": "Invalid request body"})


@app.exception_handler(Exception)
def global_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error: {exc}")
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


# ----------------------------
# Public routes
# ----------------------------
@app.get("/health")
def health():
    return {"status": "ok"}


@app.get("/api/config", response_model=ClientConfig)
def client_config():
    # Dashboard bootstrap, readable without a key
    s = get_settings()
    return ClientConfig(supabaseUrl=s.supabase_url, supabaseAnonKey=s.supabase_anon_key, apiKey=s.api_key)


# ----------------------------
# Dashboard API - API key protected when one is configured
# ----------------------------
@app.get("/api/scan", response_model=ConversationRecord)
def latest_scan(
    scans: ScanService = Depends(get_scan_service),
    _: None = Depends(require_api_key),
):
    return scans.latest()


@app.get("/api/analytics", response_model=AnalyticsSnapshot)
def analytics(
    scans: ScanService = Depends(get_scan_service),
    _: None = Depends(require_api_key),
):
    return scans.analytics_snapshot()


@app.get("/api/conversations", response_model=List[ConversationRecord])
def conversations(
    scans: ScanService = Depends(get_scan_service),
    _: None = Depends(require_api_key),
):
    return scans.recent_conversations(20)


@app.post("/api/mock-scammer", response_model=MockScammerResponse)
def mock_scammer(
    payload: Any = Body(default=None),
    scans: ScanService = Depends(get_scan_service),
    _: None = Depends(require_api_key),
):
    """
    Simulated scammer turn:
    - Classifies, categorizes and extracts entities from the message
    - Updates analytics and conversation history
    - Returns the canned agent reply plus the stored record
    Empty or missing message is scanned as "".
    """
    record, reply = scans.build_response(_as_text(_field(payload, "message")))
    return MockScammerResponse(reply=reply, output=record)


@app.post("/detect-scam", response_model=DetectScamResponse)
def detect_scam_endpoint(
    background_tasks: BackgroundTasks,
    payload: Any = Body(default=None),
    _: None = Depends(require_api_key),
):
    message = _field(payload, "message")
    if not message:
        return JSONResponse(status_code=400, content={"error": "Message is required"})

    try:
        text = _as_text(message)
        language = _as_text(_field(payload, "language")) or "English"

        classification = classify(text)
        logger.info(
            f"detect-scam is_scam={classification.scamDetected} confidence={classification.confidence} "
            f"keywords={matched_keywords(text)} language={language}"
        )

        # Fire-and-forget: the response never waits on the sink
        background_tasks.add_task(
            persist_scam_message,
            message=text,
            is_scam=classification.scamDetected,
            confidence=classification.confidence,
            language=language,
        )

        return DetectScamResponse(
            is_scam=classification.scamDetected,
            confidence_score=classification.confidence,
            explanation=(
                "Message contains scam-related keywords"
                if classification.scamDetected
                else "No scam patterns detected"
            ),
        )
    except Exception as e:
        logger.exception(f"detect-scam failed: {e}")
        return JSONResponse(status_code=500, content={"error": "Internal server error"})


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=settings.port)
