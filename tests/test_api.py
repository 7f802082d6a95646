import pytest

from scam_scanner.services import persistence
from scam_scanner.services.responder import SCAM_REPLY


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_scan_placeholder_before_any_message(client):
    body = client.get("/api/scan").json()
    assert body["category"] == "unknown"
    assert body["scamDetected"] is False
    assert body["confidence"] == 0
    assert body["conversation"] == []
    assert body["entities"] == {
        "upiIds": [],
        "bankAccounts": [],
        "ifscCodes": [],
        "phoneNumbers": [],
        "phishingLinks": [],
    }


def test_mock_scammer_updates_state(client):
    resp = client.post("/api/mock-scammer", json={"message": "Please pay your loan upi 9876543210"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["reply"] == SCAM_REPLY
    assert body["output"]["category"] == "loan"
    assert body["output"]["entities"]["phoneNumbers"] == ["9876543210"]
    assert body["output"]["conversation"][1] == {"role": "agent", "text": SCAM_REPLY}

    assert client.get("/api/scan").json() == body["output"]

    analytics = client.get("/api/analytics").json()
    assert analytics["totalMessages"] == 1
    assert analytics["scamsDetected"] == 1
    assert analytics["categories"]["loan"] == 1
    assert analytics["detectionRate"] == 1


def test_mock_scammer_without_message(client):
    resp = client.post("/api/mock-scammer", json={})
    assert resp.status_code == 200
    output = resp.json()["output"]
    assert output["confidence"] == 0.3
    assert output["conversation"][0] == {"role": "scammer", "text": ""}


def test_mock_scammer_with_non_object_body(client):
    for body in ([], ["verify", "kyc"], "otp link", 42):
        resp = client.post("/api/mock-scammer", json=body)
        assert resp.status_code == 200
        assert resp.json()["output"]["conversation"][0] == {"role": "scammer", "text": ""}
    assert client.get("/api/analytics").json()["totalMessages"] == 4


def test_mock_scammer_without_body(client):
    resp = client.post("/api/mock-scammer")
    assert resp.status_code == 200
    assert resp.json()["output"]["scamDetected"] is False


def test_fresh_analytics(client):
    assert client.get("/api/analytics").json() == {
        "totalMessages": 0,
        "scamsDetected": 0,
        "categories": {"phishing": 0, "loan": 0, "kyc": 0, "upi": 0, "bank": 0},
        "detectionRate": 0,
    }


def test_conversations_returns_latest_twenty(client):
    for i in range(25):
        client.post("/api/mock-scammer", json={"message": f"message {i}"})

    records = client.get("/api/conversations").json()
    assert len(records) == 20
    assert records[0]["conversation"][0]["text"] == "message 24"
    assert records[-1]["conversation"][0]["text"] == "message 5"


def test_detect_scam(client):
    resp = client.post("/detect-scam", json={"message": "urgent: verify your bank account"})
    assert resp.status_code == 200
    assert resp.json() == {
        "is_scam": True,
        "confidence_score": 0.7,
        "explanation": "Message contains scam-related keywords",
    }


def test_detect_scam_clean_message(client):
    body = client.post("/detect-scam", json={"message": "see you at lunch", "language": "Hindi"}).json()
    assert body == {"is_scam": False, "confidence_score": 0.3, "explanation": "No scam patterns detected"}


@pytest.mark.parametrize("payload", [{}, {"message": ""}, {"language": "English"}, [], ["message"]])
def test_detect_scam_requires_message(client, payload):
    resp = client.post("/detect-scam", json=payload)
    assert resp.status_code == 400
    assert resp.json() == {"error": "Message is required"}


def test_detect_scam_does_not_touch_analytics(client):
    client.post("/detect-scam", json={"message": "otp link"})
    assert client.get("/api/analytics").json()["totalMessages"] == 0


def test_detect_scam_schedules_persistence(client, monkeypatch):
    calls = []
    monkeypatch.setattr("scam_scanner.main.persist_scam_message", lambda **kw: calls.append(kw))

    client.post("/detect-scam", json={"message": "refund payment"})
    assert calls == [
        {"message": "refund payment", "is_scam": True, "confidence": 0.5, "language": "English"}
    ]


def test_detect_scam_survives_sink_failure(client, monkeypatch):
    monkeypatch.setenv("SUPABASE_URL", "https://db.example")
    monkeypatch.setenv("SUPABASE_ANON_KEY", "anon")

    def boom(*args, **kwargs):
        raise persistence.requests.ConnectionError("down")

    monkeypatch.setattr(persistence.requests, "post", boom)
    resp = client.post("/detect-scam", json={"message": "refund payment"})
    assert resp.status_code == 200
    assert resp.json()["is_scam"] is True


class TestApiKey:
    @pytest.fixture(autouse=True)
    def _api_key(self, monkeypatch):
        monkeypatch.setenv("API_KEY", "s3cret")

    @pytest.mark.parametrize(
        "method, path",
        [
            ("get", "/api/scan"),
            ("get", "/api/analytics"),
            ("get", "/api/conversations"),
            ("post", "/api/mock-scammer"),
            ("post", "/detect-scam"),
        ],
    )
    def test_rejects_missing_or_wrong_key(self, client, method, path):
        for headers in ({}, {"x-api-key": "nope"}):
            resp = getattr(client, method)(path, headers=headers)
            assert resp.status_code == 401
            assert resp.json() == {"error": "Unauthorized"}

    def test_accepts_matching_key(self, client):
        resp = client.get("/api/analytics", headers={"x-api-key": "s3cret"})
        assert resp.status_code == 200

    def test_public_routes_stay_open(self, client):
        assert client.get("/health").status_code == 200
        assert client.get("/api/config").json()["apiKey"] == "s3cret"

    def test_preflight_skips_key_check(self, client):
        resp = client.options(
            "/api/scan",
            headers={
                "Origin": "http://dashboard.example",
                "Access-Control-Request-Method": "GET",
                "Access-Control-Request-Headers": "x-api-key",
            },
        )
        assert resp.status_code == 200
        assert resp.headers["access-control-allow-origin"] == "*"
