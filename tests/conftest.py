import pytest
from fastapi.testclient import TestClient

from scam_scanner.main import app, get_scan_service
from scam_scanner.services.conversation_log import ConversationLog
from scam_scanner.services.responder import ScanService


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in ("API_KEY", "SUPABASE_URL", "SUPABASE_ANON_KEY", "SUPABASE_TABLE", "CONVERSATION_LOG_CAPACITY"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def scan_service():
    return ScanService(conversation_log=ConversationLog(capacity=100))


@pytest.fixture
def client(scan_service):
    app.dependency_overrides[get_scan_service] = lambda: scan_service
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
