# scam_scanner/services/scam_detector.py
from __future__ import annotations
from typing import List

from scam_scanner.models import Classification

# Keyword-hit scoring: each keyword counts once no matter how often it appears
SCAM_KEYWORDS = [
    "verify",
    "kyc",
    "account",
    "urgent",
    "otp",
    "click",
    "link",
    "bank",
    "upi",
    "loan",
    "refund",
    "blocked",
    "suspended",
    "payment",
]

BASE_CONFIDENCE = 0.30
CONFIDENCE_PER_HIT = 0.10
MAX_CONFIDENCE = 0.95
SCAM_HIT_THRESHOLD = 2


def matched_keywords(text: str) -> List[str]:
    t = (text or "").lower()
    return [k for k in SCAM_KEYWORDS if k in t]


def count_keyword_hits(text: str) -> int:
    return len(matched_keywords(text))


def confidence_for_hits(hits: int) -> float:
    # Clamp score
    return round(min(BASE_CONFIDENCE + hits * CONFIDENCE_PER_HIT, MAX_CONFIDENCE), 2)


def classify(text: str) -> Classification:
    hits = count_keyword_hits(text)
    return Classification(
        scamDetected=hits >= SCAM_HIT_THRESHOLD,
        confidence=confidence_for_hits(hits),
    )
