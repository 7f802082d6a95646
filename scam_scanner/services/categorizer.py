# scam_scanner/services/categorizer.py
from __future__ import annotations
from typing import Tuple

from scam_scanner.models import Category

DEFAULT_CATEGORY: Category = "phishing"

# Checked in order, first match wins ("loan" beats "upi", etc.)
CATEGORY_RULES: Tuple[Tuple[Category, Tuple[str, ...]], ...] = (
    ("loan", ("loan",)),
    ("kyc", ("kyc",)),
    ("upi", ("upi",)),
    ("bank", ("bank", "ifsc")),
)


def categorize(text: str) -> Category:
    t = (text or "").lower()
    for category, needles in CATEGORY_RULES:
        if any(n in t for n in needles):
            return category
    return DEFAULT_CATEGORY
