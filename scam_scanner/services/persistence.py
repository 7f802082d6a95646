# scam_scanner/services/persistence.py
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests

from scam_scanner.config import Settings, get_settings

logger = logging.getLogger("honeypot.persistence")


def build_scam_message_row(
    *,
    message: str,
    is_scam: bool,
    confidence: float,
    language: str = "English",
) -> Dict[str, Any]:
    return {
        "message_text": message,
        "is_scam": is_scam,
        "confidence_score": confidence,
        "language": language,
    }


def persist_scam_message(
    *,
    message: str,
    is_scam: bool,
    confidence: float,
    language: str = "English",
    settings: Optional[Settings] = None,
    timeout_seconds: int = 5,
) -> bool:
    """
    Best-effort insert of one detection into the Supabase table.
    Runs as a background task: never raises, never retries.
    Returns True if the row was accepted, False otherwise (or when disabled).
    """
    settings = settings or get_settings()
    if not settings.persistence_enabled:
        return False

    url = f"{settings.supabase_url}/rest/v1/{settings.supabase_table}"
    headers = {
        "apikey": settings.supabase_anon_key,
        "Authorization": f"Bearer {settings.supabase_anon_key}",
        "Prefer": "return=minimal",
    }
    row = build_scam_message_row(message=message, is_scam=is_scam, confidence=confidence, language=language)

    try:
        resp = requests.post(url, json=[row], headers=headers, timeout=timeout_seconds)
    except Exception as e:
        logger.error(f"Supabase insert error | table={settings.supabase_table} | err={e}")
        return False

    # Treat any 2xx as success
    if 200 <= resp.status_code < 300:
        logger.info(f"Supabase insert success | table={settings.supabase_table} | status={resp.status_code}")
        return True

    logger.error(
        f"Supabase insert non-2xx | table={settings.supabase_table} | status={resp.status_code} | body={resp.text[:200]}"
    )
    return False
