# scam_scanner/services/responder.py
from __future__ import annotations
import logging
import threading
from datetime import datetime, timezone
from typing import List, Optional, Tuple

from scam_scanner.models import AnalyticsSnapshot, ConversationRecord, ConversationTurn, EntitySet
from scam_scanner.services.analytics import AnalyticsAggregator
from scam_scanner.services.categorizer import categorize
from scam_scanner.services.conversation_log import DEFAULT_RECENT, ConversationLog
from scam_scanner.services.extractor import extract_entities
from scam_scanner.services.scam_detector import classify

logger = logging.getLogger("honeypot.responder")

SCAM_REPLY = "I can help. Please share your UPI ID, bank account, and IFSC for verification."
SAFE_REPLY = "Thanks for the message. Can you clarify the issue?"


def utc_timestamp() -> str:
    # 2024-01-01T10:00:00.000Z
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def placeholder_record() -> ConversationRecord:
    """Served by /api/scan before anything has been scanned."""
    return ConversationRecord(
        scamDetected=False,
        confidence=0,
        category="unknown",
        entities=EntitySet(),
        conversation=[],
        timestamp=utc_timestamp(),
    )


class ScanService:
    """
    Owns the process-wide analytics and conversation history.
    Classification runs outside the lock; the analytics update and the
    log insert for one message happen together under it.
    """
    def __init__(
        self,
        analytics: Optional[AnalyticsAggregator] = None,
        conversation_log: Optional[ConversationLog] = None,
    ):
        self.analytics = analytics or AnalyticsAggregator()
        self.conversation_log = conversation_log if conversation_log is not None else ConversationLog()
        self._lock = threading.Lock()

    def build_response(self, text: str) -> Tuple[ConversationRecord, str]:
        text = text or ""
        classification = classify(text)
        category = categorize(text)
        entities = extract_entities(text)

        reply = SCAM_REPLY if classification.scamDetected else SAFE_REPLY

        record = ConversationRecord(
            scamDetected=classification.scamDetected,
            confidence=classification.confidence,
            category=category,
            entities=entities,
            conversation=[
                ConversationTurn(role="scammer", text=text),
                ConversationTurn(role="agent", text=reply),
            ],
            timestamp=utc_timestamp(),
        )

        with self._lock:
            self.analytics.record(classification, category, record)
            self.conversation_log.append(record)

        logger.info(
            f"scan scamDetected={record.scamDetected} confidence={record.confidence} "
            f"category={category} text={text[:120]}"
        )
        return record, reply

    def latest(self) -> ConversationRecord:
        with self._lock:
            latest = self.analytics.latest
        return latest if latest is not None else placeholder_record()

    def analytics_snapshot(self) -> AnalyticsSnapshot:
        with self._lock:
            return self.analytics.snapshot()

    def recent_conversations(self, n: int = DEFAULT_RECENT) -> List[ConversationRecord]:
        with self._lock:
            return self.conversation_log.recent(n)
