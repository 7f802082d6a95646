# scam_scanner/models.py
from __future__ import annotations
from pydantic import BaseModel, ConfigDict, Field
from typing import Dict, List, Literal, Tuple

Category = Literal["phishing", "loan", "kyc", "upi", "bank"]

CATEGORIES: List[str] = ["phishing", "loan", "kyc", "upi", "bank"]


class Classification(BaseModel):
    model_config = ConfigDict(frozen=True)

    scamDetected: bool
    confidence: float


class EntitySet(BaseModel):
    model_config = ConfigDict(frozen=True)

    upiIds: Tuple[str, ...] = ()
    bankAccounts: Tuple[str, ...] = ()
    ifscCodes: Tuple[str, ...] = ()
    phoneNumbers: Tuple[str, ...] = ()
    phishingLinks: Tuple[str, ...] = ()


class ConversationTurn(BaseModel):
    model_config = ConfigDict(frozen=True)

    role: Literal["scammer", "agent"]
    text: str


class ConversationRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    scamDetected: bool
    confidence: float
    # "unknown" only appears on the placeholder served before the first scan
    category: str
    entities: EntitySet = Field(default_factory=EntitySet)
    conversation: Tuple[ConversationTurn, ...] = ()
    timestamp: str


class AnalyticsSnapshot(BaseModel):
    totalMessages: int
    scamsDetected: int
    categories: Dict[str, int]
    detectionRate: float


class MockScammerResponse(BaseModel):
    reply: str
    output: ConversationRecord


class DetectScamResponse(BaseModel):
    is_scam: bool
    confidence_score: float
    explanation: str


class ClientConfig(BaseModel):
    supabaseUrl: str
    supabaseAnonKey: str
    apiKey: str
