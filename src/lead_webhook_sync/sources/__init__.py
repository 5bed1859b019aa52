"""
Webhook source systems.

Each source maps its own payload shape to a ContactIntent. Adding a source
system means adding one WebhookSource subclass and registering it.
"""

from .base import WebhookSource, first_non_empty, first_string, split_full_name
from .registry import SourceRegistry, default_registry
from .salesgodcrm import SalesGodCRMSource
from .smartlead import SmartleadSource

__all__ = [
    "WebhookSource",
    "SalesGodCRMSource",
    "SmartleadSource",
    "SourceRegistry",
    "default_registry",
    "first_non_empty",
    "first_string",
    "split_full_name",
]
