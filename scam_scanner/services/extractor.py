# scam_scanner/services/extractor.py
from __future__ import annotations
import re
from typing import Dict, List, Pattern

from scam_scanner.models import EntitySet


# --- Regex patterns (compiled once, applied independently) ---

# UPI: handle@provider (email-like shape)
UPI_RE = re.compile(r"[\w.-]+@[\w.-]+", re.ASCII)

# IFSC: e.g., HDFC0001234 (uppercase only)
IFSC_RE = re.compile(r"\b[A-Z]{4}0[A-Z0-9]{6}\b", re.ASCII)

# Bank account-ish: 9 to 18 digits
BANK_ACCT_RE = re.compile(r"\b\d{9,18}\b", re.ASCII)

# Phone: plain 10-digit run. Also matched by BANK_ACCT_RE; both lists keep it.
PHONE_RE = re.compile(r"\b\d{10}\b", re.ASCII)

URL_RE = re.compile(r"https?://[^\s]+")


ENTITY_PATTERNS: Dict[str, Pattern[str]] = {
    "upiIds": UPI_RE,
    "bankAccounts": BANK_ACCT_RE,
    "ifscCodes": IFSC_RE,
    "phoneNumbers": PHONE_RE,
    "phishingLinks": URL_RE,
}


def _find_all(pattern: Pattern[str], text: str) -> List[str]:
    return [m.group(0) for m in pattern.finditer(text)]


def extract_entities(text: str) -> EntitySet:
    """
    Extract financial/contact identifiers from a single message.
    Every pattern scans the full text on its own; matches keep their
    order of appearance and duplicates are not removed.
    """
    t = text or ""
    return EntitySet(**{field: _find_all(pattern, t) for field, pattern in ENTITY_PATTERNS.items()})
