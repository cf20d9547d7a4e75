import smtplib

import pytest

from stocktrack.services import NotificationService


class FakeSMTP:
    sent = []

    def __init__(self, host, port, timeout=None):
        self.host = host

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def starttls(self):
        pass

    def login(self, user, password):
        pass

    def send_message(self, message):
        FakeSMTP.sent.append(message)


class BrokenSMTP(FakeSMTP):
    def send_message(self, message):
        raise smtplib.SMTPServerDisconnected("connection lost")


@pytest.fixture(autouse=True)
def reset_outbox():
    FakeSMTP.sent = []


def test_send_notification(client, admin_headers, monkeypatch):
    monkeypatch.setattr(smtplib, "SMTP", FakeSMTP)

    r = client.post("/api/send-notification", json={"product_name": "Shampoo", "current_stock": 2},
                    headers=admin_headers)

    assert r.status_code == 200
    assert len(FakeSMTP.sent) == 1
    message = FakeSMTP.sent[0]
    assert message["Subject"] == "Stock Alert: Low Stock Level"
    assert message["To"] == "owner@example.com"
    assert "Shampoo has reached a low level of 2" in message.get_content()


def test_send_failure_is_reported(client, admin_headers, monkeypatch):
    monkeypatch.setattr(smtplib, "SMTP", BrokenSMTP)

    r = client.post("/api/send-notification", json={"product_name": "Shampoo", "current_stock": 1},
                    headers=admin_headers)

    assert r.status_code == 500
    assert r.json()["detail"] == "Failed to send notification"


def test_notification_requires_session(client):
    r = client.post("/api/send-notification", json={"product_name": "Shampoo", "current_stock": 1})
    assert r.status_code == 401


def test_alert_message_body():
    message = NotificationService.build_stock_alert("Conditioner", 0)
    assert "Conditioner" in message.get_content()
