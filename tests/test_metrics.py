def test_metrics_endpoint_available(client):
    client.post("/api/reminders", json={"phone": "0712345678", "medication": "Aspirin", "sendAt": "2026-10-20T08:00:00Z"})

    resp = client.get("/metrics")
    assert resp.status_code == 200
    text = resp.text
    assert 'reminders_created_total{type="medication"}' in text
    assert "reminder_dispatch_sent_total" in text
    assert "reminder_dispatch_failed_total" in text
    assert "reminder_dispatch_overlaps_total" in text
    assert "sms_direct_sends_total" in text
    # Bucket boundary sanity (one mid bucket)
    assert (
        'reminder_dispatch_tick_seconds_bucket{le="30"}' in text
        or 'reminder_dispatch_tick_seconds_bucket{le="30.0"}' in text
    )
