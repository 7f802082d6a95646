# scam_scanner/services/analytics.py
from __future__ import annotations
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Optional

from scam_scanner.models import CATEGORIES, AnalyticsSnapshot, Classification, ConversationRecord


class AnalyticsAggregator:
    """
    Running counters over every classified message.
    Not synchronized on its own: ScanService serializes all access.
    """
    def __init__(self):
        self.total_messages: int = 0
        self.scams_detected: int = 0
        # Dashboard expects all five keys from the first request
        self.categories: Dict[str, int] = {c: 0 for c in CATEGORIES}
        self.latest: Optional[ConversationRecord] = None

    def record(
        self,
        classification: Classification,
        category: str,
        record: Optional[ConversationRecord] = None,
    ) -> None:
        self.total_messages += 1
        if classification.scamDetected:
            self.scams_detected += 1
            self.categories[category] = self.categories.get(category, 0) + 1
        if record is not None:
            self.latest = record

    def detection_rate(self) -> float:
        if not self.total_messages:
            return 0
        # Ties round up (0.125 -> 0.13)
        rate = Decimal(self.scams_detected / self.total_messages)
        return float(rate.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))

    def snapshot(self) -> AnalyticsSnapshot:
        return AnalyticsSnapshot(
            totalMessages=self.total_messages,
            scamsDetected=self.scams_detected,
            categories=dict(self.categories),
            detectionRate=self.detection_rate(),
        )
