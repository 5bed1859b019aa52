#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Lead Webhook Sync

Receives contact webhooks from lead platforms (SalesGodCRM, Smartlead) and
upserts the contacts into HubSpot, tagging each one with its source system.
"""

__version__ = "1.0.0"
