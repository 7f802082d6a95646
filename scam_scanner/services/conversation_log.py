# scam_scanner/services/conversation_log.py
from __future__ import annotations
from collections import deque
from itertools import islice
from typing import Deque, List, Optional

from scam_scanner.models import ConversationRecord

DEFAULT_RECENT = 20


class ConversationLog:
    """
    Most-recent-first history of scan records.
    capacity=None keeps everything; otherwise the oldest records fall off.
    """
    def __init__(self, capacity: Optional[int] = None):
        # Readers always get a full page of recent records
        if capacity is not None and capacity < DEFAULT_RECENT:
            raise ValueError(f"capacity must be at least {DEFAULT_RECENT} or None")
        self.capacity = capacity
        self._records: Deque[ConversationRecord] = deque(maxlen=capacity)

    def append(self, record: ConversationRecord) -> None:
        self._records.appendleft(record)

    def recent(self, n: int = DEFAULT_RECENT) -> List[ConversationRecord]:
        if n <= 0:
            return []
        return list(islice(self._records, n))

    def __len__(self) -> int:
        return len(self._records)
