#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Tests for the webhook receiver endpoints.
"""

import json
from dataclasses import replace
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from lead_webhook_sync.api import create_app
from lead_webhook_sync.api.signature import compute_signature
from lead_webhook_sync.exceptions import RemoteApiError

SGCRM_PAYLOAD = {
    "event": "contact.created",
    "data": {
        "id": "sgcrm_1",
        "email": "test.lead@example.com",
        "firstName": "Test",
        "lastName": "Lead",
        "phoneNumber": "+1-555-0123",
        "company": "Test Company",
    },
}

SMARTLEAD_PAYLOAD = {
    "event_type": "EMAIL_REPLY",
    "to_email": "prospect@example.com",
    "to_name": "Jane Doe",
    "campaign_name": "Q3 Outreach",
    "sl_email_lead_id": 991,
}


@pytest.fixture
def client(app_config, orchestrator):
    return TestClient(create_app(app_config, orchestrator=orchestrator))


@pytest.fixture
def signed_client(app_config, orchestrator):
    config = replace(app_config, webhook_secret="s3cret")
    return TestClient(create_app(config, orchestrator=orchestrator))


def post_json(client, path, payload, headers=None):
    return client.post(
        path,
        content=json.dumps(payload).encode("utf-8"),
        headers={"Content-Type": "application/json", **(headers or {})},
    )


class TestWebhookEndpoints:
    """Tests for POST /webhook/<source>."""

    def test_salesgodcrm_created_then_updated(self, client, fake_hubspot):
        first = post_json(client, "/webhook/salesgodscrm", SGCRM_PAYLOAD)
        second = post_json(client, "/webhook/salesgodscrm", SGCRM_PAYLOAD)

        assert first.status_code == 200
        assert first.json()["success"] is True
        assert first.json()["action"] == "created"
        assert second.json()["action"] == "updated"
        assert first.json()["hubspotContactId"] == second.json()["hubspotContactId"]
        assert len(fake_hubspot.calls_of("create")) == 1

    def test_smartlead_audit_log(self, client):
        response = post_json(client, "/webhook/smartlead", SMARTLEAD_PAYLOAD)

        assert response.status_code == 200
        audit = response.json()["auditLog"]
        assert audit["source_system"] == "Smartlead"
        assert audit["source_id"] == "991"
        assert audit["event_type"] == "EMAIL_REPLY"
        assert audit["smartlead_campaign"] == "Q3 Outreach"

    def test_missing_email(self, client, fake_hubspot):
        payload = {"to_name": "No Email", "campaign_name": "X"}

        response = post_json(client, "/webhook/smartlead", payload)

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "Missing email in webhook payload"
        assert body["payload"] == payload
        assert body["availableFields"] == ["to_name", "campaign_name"]
        assert fake_hubspot.calls == []

    def test_invalid_json(self, client, fake_hubspot):
        response = client.post(
            "/webhook/salesgodscrm",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid JSON payload"}
        assert fake_hubspot.calls == []

    def test_non_object_json(self, client):
        response = post_json(client, "/webhook/salesgodscrm", ["not", "an", "object"])

        assert response.status_code == 400

    def test_hubspot_failure_returns_500(self, client, fake_hubspot):
        fake_hubspot.search_by_email = MagicMock(
            side_effect=RemoteApiError("search_contact", "timed out")
        )

        response = post_json(client, "/webhook/salesgodscrm", SGCRM_PAYLOAD)

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "Webhook processing failed"
        assert "search_contact" in body["message"]

    def test_unexpected_error_returns_500(self, client, fake_hubspot):
        fake_hubspot.search_by_email = MagicMock(side_effect=KeyError("boom"))

        response = post_json(client, "/webhook/smartlead", SMARTLEAD_PAYLOAD)

        assert response.status_code == 500
        assert response.json()["error"] == "Webhook processing failed"

    def test_unknown_path(self, client):
        assert post_json(client, "/webhook/unknown", SGCRM_PAYLOAD).status_code == 404

    def test_get_not_allowed(self, client):
        assert client.get("/webhook/smartlead").status_code == 405


class TestSignatureGate:
    """Tests for HMAC verification on the webhook endpoints."""

    def test_valid_signature(self, signed_client):
        body = json.dumps(SGCRM_PAYLOAD).encode("utf-8")

        response = signed_client.post(
            "/webhook/salesgodscrm",
            content=body,
            headers={
                "Content-Type": "application/json",
                "X-Webhook-Signature": compute_signature("s3cret", body),
            },
        )

        assert response.status_code == 200

    def test_header_name_is_case_insensitive(self, signed_client):
        body = json.dumps(SMARTLEAD_PAYLOAD).encode("utf-8")

        response = signed_client.post(
            "/webhook/smartlead",
            content=body,
            headers={"x-webhook-signature": compute_signature("s3cret", body)},
        )

        assert response.status_code == 200

    def test_wrong_signature(self, signed_client, fake_hubspot):
        response = post_json(
            signed_client,
            "/webhook/salesgodscrm",
            SGCRM_PAYLOAD,
            headers={"X-Webhook-Signature": compute_signature("wrong", b"{}")},
        )

        assert response.status_code == 401
        assert response.json() == {"error": "Unauthorized: Invalid signature"}
        assert fake_hubspot.calls == []

    def test_non_ascii_signature(self, signed_client, fake_hubspot):
        response = signed_client.post(
            "/webhook/salesgodscrm",
            content=b'{"email":"a@b.com"}',
            headers={"X-Webhook-Signature": "café".encode("latin-1")},
        )

        assert response.status_code == 401
        assert response.json() == {"error": "Unauthorized: Invalid signature"}
        assert fake_hubspot.calls == []

    def test_missing_signature(self, signed_client, fake_hubspot):
        response = post_json(signed_client, "/webhook/smartlead", SMARTLEAD_PAYLOAD)

        assert response.status_code == 401
        assert fake_hubspot.calls == []

    def test_signature_over_reserialized_body_fails(self, signed_client):
        """The signature must cover the exact bytes sent."""
        compact = json.dumps(SGCRM_PAYLOAD, separators=(",", ":")).encode("utf-8")

        response = signed_client.post(
            "/webhook/salesgodscrm",
            content=json.dumps(SGCRM_PAYLOAD, indent=2).encode("utf-8"),
            headers={"X-Webhook-Signature": compute_signature("s3cret", compact)},
        )

        assert response.status_code == 401

    def test_unsigned_accepted_without_secret(self, client):
        response = post_json(client, "/webhook/salesgodscrm", SGCRM_PAYLOAD)

        assert response.status_code == 200


class TestServiceEndpoints:
    """Tests for /health and /."""

    def test_health(self, client, fake_hubspot):
        response = client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "ok"
        assert body["hubspotConnected"] is True
        assert "timestamp" in body
        assert fake_hubspot.calls == []

    def test_index(self, client):
        body = client.get("/").json()

        assert body["service"] == "Lead Webhook Sync"
        assert body["endpoints"] == ["/webhook/salesgodscrm", "/webhook/smartlead", "/health"]
        assert body["sources"][1] == {
            "name": "smartlead",
            "path": "/webhook/smartlead",
            "source_system": "Smartlead Email Campaign",
        }
