#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Pytest configuration file for the lead webhook sync test suite.
"""

import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import pytest

# Add the src directory to Python path for accessing lead_webhook_sync
project_root = Path(__file__).parent.parent
src_path = os.path.join(project_root, "src")
if src_path not in sys.path:
    sys.path.insert(0, src_path)

from lead_webhook_sync.config import AppConfig
from lead_webhook_sync.hubspot import ContactResolver
from lead_webhook_sync.sources import SalesGodCRMSource, SmartleadSource
from lead_webhook_sync.sync import SyncOrchestrator


# Define pytest markers
def pytest_configure(config):
    """Configure pytest."""
    config.addinivalue_line(
        "markers", "integration: mark test as requiring integration setup"
    )
    config.addinivalue_line(
        "markers", "hubspot: mark test as requiring HubSpot access"
    )


class FakeHubSpotContactsClient:
    """
    In-memory stand-in for HubSpotContactsClient.

    Records every call so tests can assert on what reached "HubSpot".
    """

    def __init__(self, contacts: Optional[Dict[str, Dict[str, Any]]] = None):
        self.contacts: Dict[str, Dict[str, Any]] = dict(contacts or {})
        self.calls: List[Tuple[str, Any]] = []
        self._next_id = 1000

    def search_by_email(self, email: str) -> Optional[Dict[str, Any]]:
        self.calls.append(("search", email))
        for contact_id, properties in self.contacts.items():
            if properties.get("email") == email:
                return {"id": contact_id, "properties": dict(properties)}
        return None

    def create_contact(self, properties: Dict[str, Any]) -> Tuple[str, Dict[str, Any]]:
        self.calls.append(("create", dict(properties)))
        self._next_id += 1
        contact_id = str(self._next_id)
        self.contacts[contact_id] = dict(properties)
        return contact_id, dict(properties)

    def update_contact(self, contact_id: str, properties: Dict[str, Any]) -> Dict[str, Any]:
        self.calls.append(("update", (contact_id, dict(properties))))
        self.contacts[contact_id].update(properties)
        return dict(self.contacts[contact_id])

    def calls_of(self, kind: str) -> List[Any]:
        return [args for name, args in self.calls if name == kind]


@pytest.fixture
def fake_hubspot() -> FakeHubSpotContactsClient:
    """Empty in-memory HubSpot."""
    return FakeHubSpotContactsClient()


@pytest.fixture
def orchestrator(fake_hubspot: FakeHubSpotContactsClient) -> SyncOrchestrator:
    """Orchestrator wired to the in-memory HubSpot."""
    return SyncOrchestrator(ContactResolver(fake_hubspot))


@pytest.fixture
def salesgodcrm() -> SalesGodCRMSource:
    return SalesGodCRMSource()


@pytest.fixture
def smartlead() -> SmartleadSource:
    return SmartleadSource()


@pytest.fixture
def app_config() -> AppConfig:
    """Configuration with a token and no webhook secret."""
    return AppConfig(
        hubspot_access_token="test-token",
        hubspot_request_timeout=5.0,
        webhook_secret=None,
        port=3000,
        log_file_path=None,
    )


@pytest.fixture(scope="function")
def mock_env_vars(monkeypatch, tmp_path: Path):
    """
    Set up environment variables for testing.

    Args:
        monkeypatch: Pytest monkeypatch fixture
        tmp_path: Temporary directory for the log file
    """
    monkeypatch.setenv("HUBSPOT_ACCESS_TOKEN", "env-token")
    monkeypatch.setenv("WEBHOOK_SECRET", "s3cret")
    monkeypatch.setenv("HUBSPOT_REQUEST_TIMEOUT", "2.5")
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("LOG_FILE_PATH", str(tmp_path / "sync.log"))
    monkeypatch.setenv("JSON_LOGS", "true")
