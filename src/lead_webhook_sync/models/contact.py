#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Contact Models - Defines the records passed between the sync stages.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional

# Property name -> new value. Always carries "source_system".
PropertyPatch = Dict[str, str]


@dataclass
class ContactIntent:
    """
    Normalized contact data extracted from one inbound webhook.

    Built fresh for every event and never persisted.
    """

    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None
    company: Optional[str] = None
    source_system_id: Optional[str] = None

    # Audit-only extras; never written to HubSpot
    event_type: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def contact_fields(self) -> Dict[str, Optional[str]]:
        """Return the contact fields keyed by their intent attribute name."""
        return {
            "first_name": self.first_name,
            "last_name": self.last_name,
            "phone": self.phone,
            "company": self.company,
        }


@dataclass
class RemoteContact:
    """HubSpot's view of a contact at resolution time."""

    contact_id: str
    existed: bool
    properties: Dict[str, Any] = field(default_factory=dict)

    def get_property(self, name: str) -> Optional[str]:
        """
        Get a property value, or None if it is absent or blank.

        Accepts both flat v3 values and legacy ``{"value": ...}`` mappings.
        """
        value = self.properties.get(name)
        if isinstance(value, Mapping):
            value = value.get("value")
        if value is None:
            return None

        value = str(value).strip()
        return value or None

    def has_property(self, name: str) -> bool:
        return self.get_property(name) is not None


@dataclass
class AuditRecord:
    """Structured record of one completed sync, emitted as a log line."""

    hubspot_contact_id: str
    email: str
    action: str
    source_system: str
    properties_updated: List[str] = field(default_factory=list)
    source_id: Optional[str] = None
    event_type: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> Dict[str, Any]:
        """Convert audit record to dictionary."""
        data = {
            "timestamp": self.timestamp.isoformat(),
            "source_id": self.source_id,
            "hubspot_contact_id": self.hubspot_contact_id,
            "email": self.email,
            "action": self.action,
            "source_system": self.source_system,
            "properties_updated": list(self.properties_updated),
        }

        if self.event_type:
            data["event_type"] = self.event_type

        data.update(self.metadata)
        return data


@dataclass
class SyncResult:
    """Outcome of a successful sync."""

    hubspot_contact_id: str
    action: str
    audit_record: AuditRecord

    def to_response(self) -> Dict[str, Any]:
        """Build the JSON body returned to the webhook sender."""
        return {
            "success": True,
            "hubspotContactId": self.hubspot_contact_id,
            "action": self.action,
            "auditLog": self.audit_record.to_dict(),
        }
