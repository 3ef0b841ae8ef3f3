from caresync.api.routes_sms import TEST_MESSAGE
from caresync.core.config import settings
from caresync.services.sms_gateway import SMSResult


def test_send_sms_normalizes_and_greets(client, fake_gateway):
    resp = client.post("/send-sms", json={"to": "0712 345 678", "message": "your results are ready", "name": "Jane"})

    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert body["success"] is True
    assert body["data"]["status"] == "Success"
    destination, message, _ = fake_gateway.calls[0]
    assert destination == "+254712345678"
    assert message == "Hi Jane, your results are ready"


def test_send_sms_numeric_recipient(client, fake_gateway):
    resp = client.post("/send-sms", json={"to": 254712345678, "message": "ping"})

    assert resp.status_code == 200, resp.text
    assert fake_gateway.calls[0][:2] == ("+254712345678", "ping")


def test_send_sms_rejects_invalid_number(client, fake_gateway):
    resp = client.post("/send-sms", json={"to": "0812345678", "message": "ping"})

    assert resp.status_code == 400
    body = resp.json()
    assert body == {
        "success": False,
        "error": "Invalid Kenya phone number format",
        "code": "SMS100",
        "details": {"phone": "0812345678"},
    }
    assert fake_gateway.calls == []


def test_send_sms_requires_fields(client, fake_gateway):
    assert client.post("/send-sms", json={"to": "0712345678"}).status_code == 400
    assert client.post("/send-sms", json={"message": "ping"}).status_code == 400
    assert fake_gateway.calls == []


def test_send_sms_provider_rejection(client, fake_gateway):
    raw = {"SMSMessageData": {"Message": "Sent to 0/1", "Recipients": [{"status": "UserInBlacklist"}]}}
    fake_gateway.queue(SMSResult.failure("UserInBlacklist", raw=raw))

    resp = client.post("/send-sms", json={"to": "0712345678", "message": "ping"})

    assert resp.status_code == 400
    assert resp.json() == {"success": False, "error": "Failed to send SMS", "result": raw}


def test_send_sms_transport_error(client, fake_gateway):
    fake_gateway.queue(SMSResult.failure("connection refused", transport_error=True))

    resp = client.post("/send-sms", json={"to": "0712345678", "message": "ping"})

    assert resp.status_code == 500
    body = resp.json()
    assert body["success"] is False
    assert body["details"] == "connection refused"


def test_test_sms_uses_configured_number(client, fake_gateway):
    resp = client.post("/test-sms")

    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert body["success"] is True
    assert body["to"] == settings.TEST_PHONE_NUMBER
    assert fake_gateway.calls[0][:2] == (settings.TEST_PHONE_NUMBER, TEST_MESSAGE)


def test_test_sms_failure(client, fake_gateway):
    fake_gateway.queue(SMSResult.failure("HTTP 401: invalid key", transport_error=True))

    resp = client.post("/test-sms")

    assert resp.status_code == 500
    assert resp.json()["error"] == "Test SMS failed"
