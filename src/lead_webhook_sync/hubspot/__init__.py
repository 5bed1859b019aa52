#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
HubSpot integration package.

Provides the contacts API client plus the resolve and reconcile steps of a
contact sync.
"""

from .client import HubSpotContactsClient
from .reconciler import CONTACT_FIELD_MAPPINGS, SOURCE_SYSTEM_PROPERTY, PropertyReconciler
from .resolver import ContactResolver

__all__ = [
    "HubSpotContactsClient",
    "ContactResolver",
    "PropertyReconciler",
    "CONTACT_FIELD_MAPPINGS",
    "SOURCE_SYSTEM_PROPERTY",
]
