#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Unit tests for the remote contact resolver.
"""

import unittest
from unittest.mock import MagicMock

from lead_webhook_sync.exceptions import RemoteApiError
from lead_webhook_sync.hubspot import ContactResolver
from lead_webhook_sync.models import ContactIntent
from lead_webhook_sync.sources import SalesGodCRMSource, SmartleadSource


class TestContactResolver(unittest.TestCase):
    """Tests for ContactResolver.resolve."""

    def setUp(self):
        self.client = MagicMock()
        self.resolver = ContactResolver(self.client)
        self.intent = ContactIntent(
            email="jane@example.com",
            first_name="Jane",
            last_name=None,
            phone="+1-555-0100",
            company=None,
        )

    def test_existing_contact(self):
        self.client.search_by_email.return_value = {
            "id": "501",
            "properties": {"email": "jane@example.com", "firstname": "Janet"},
        }

        remote = self.resolver.resolve(self.intent, SalesGodCRMSource())

        self.assertTrue(remote.existed)
        self.assertEqual(remote.contact_id, "501")
        self.assertEqual(remote.get_property("firstname"), "Janet")
        self.client.search_by_email.assert_called_once_with("jane@example.com")
        self.client.create_contact.assert_not_called()

    def test_new_contact_created_with_provenance(self):
        self.client.search_by_email.return_value = None
        self.client.create_contact.return_value = ("777", {"email": "jane@example.com"})

        remote = self.resolver.resolve(self.intent, SmartleadSource())

        self.assertFalse(remote.existed)
        self.assertEqual(remote.contact_id, "777")
        self.client.create_contact.assert_called_once_with({
            "email": "jane@example.com",
            "source_system": "Smartlead Email Campaign",
            "firstname": "Jane",
            "phone": "+1-555-0100",
        })

    def test_search_failure_propagates(self):
        self.client.search_by_email.side_effect = RemoteApiError("search_contact", "boom", status=502)

        with self.assertRaises(RemoteApiError) as ctx:
            self.resolver.resolve(self.intent, SalesGodCRMSource())

        self.assertEqual(ctx.exception.operation, "search_contact")
        self.client.create_contact.assert_not_called()

    def test_create_failure_propagates(self):
        self.client.search_by_email.return_value = None
        self.client.create_contact.side_effect = RemoteApiError("create_contact", "boom", status=400)

        with self.assertRaises(RemoteApiError):
            self.resolver.resolve(self.intent, SalesGodCRMSource())
