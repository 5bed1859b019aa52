#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Base Source - Abstract base class for webhook source systems.

Each source system that can post contacts to the service is one subclass. The
subclass knows where its webhook is mounted, which label it stamps on HubSpot
contacts, and how to turn its payload shape into a ContactIntent.
"""

import abc
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from lead_webhook_sync.exceptions import MissingIdentity
from lead_webhook_sync.models import ContactIntent


def resolve_path(payload: Mapping[str, Any], path: str) -> Any:
    """
    Resolve a dotted path (``contact.email``) against a nested mapping.

    Returns None as soon as a segment is missing or not a mapping.
    """
    current: Any = payload
    for segment in path.split("."):
        if not isinstance(current, Mapping):
            return None
        current = current.get(segment)
    return current


def first_non_empty(payload: Mapping[str, Any], paths: Sequence[str]) -> Optional[str]:
    """
    Return the first candidate path holding a non-empty value.

    Strings are stripped; whitespace-only strings count as empty. Numbers are
    stringified so numeric ids survive. Any other type is skipped.
    """
    for path in paths:
        value = resolve_path(payload, path)
        if isinstance(value, bool):
            continue
        if isinstance(value, (int, float)):
            return str(value)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None


def first_string(payload: Mapping[str, Any], paths: Sequence[str]) -> Optional[str]:
    """
    Return the first candidate path holding a non-empty string, unchanged.

    Used for the email identity key: any non-empty string is accepted as is,
    including whitespace-only values.
    """
    for path in paths:
        value = resolve_path(payload, path)
        if isinstance(value, str) and value:
            return value
    return None


def split_full_name(full_name: Optional[str]) -> Tuple[Optional[str], Optional[str]]:
    """
    Split a full name into first and last name.

    The first token is the first name; the remaining tokens joined by a single
    space are the last name. Empty parts become None.
    """
    if not full_name:
        return None, None

    parts = full_name.split()
    if not parts:
        return None, None

    first_name = parts[0]
    last_name = " ".join(parts[1:]) or None
    return first_name, last_name


class WebhookSource(abc.ABC):
    """
    Abstract base class for all webhook sources.

    Subclasses set the class attributes and implement the field lookups; the
    shared normalize() assembles the ContactIntent.
    """

    # Registry key
    name: str = ""

    # Path the webhook is mounted at
    path: str = ""

    # Value written to the HubSpot source_system property
    source_system_label: str = ""

    # Label used in audit records and logs
    audit_label: str = ""

    # HubSpot custom property holding the sender's own id, if defined
    foreign_id_property: Optional[str] = None

    # Ordered candidate paths for the email address
    email_paths: Sequence[str] = ()

    @abc.abstractmethod
    def extract_contact_fields(self, payload: Mapping[str, Any]) -> Dict[str, Optional[str]]:
        """
        Extract first_name, last_name, phone and company from a payload.

        Args:
            payload: Webhook JSON body

        Returns:
            Dict: Field values keyed by ContactIntent attribute name
        """

    @abc.abstractmethod
    def extract_source_id(self, payload: Mapping[str, Any]) -> Optional[str]:
        """Extract the sender's own id for the contact, if any."""

    def extract_event_type(self, payload: Mapping[str, Any]) -> Optional[str]:
        """Extract the sender's event name, if any."""
        return None

    def extract_metadata(self, payload: Mapping[str, Any]) -> Dict[str, Any]:
        """Extract source-specific values to carry into the audit record."""
        return {}

    def extract_email(self, payload: Mapping[str, Any]) -> Optional[str]:
        return first_string(payload, self.email_paths)

    def normalize(self, payload: Mapping[str, Any]) -> ContactIntent:
        """
        Map a webhook payload to a ContactIntent.

        Args:
            payload: Webhook JSON body

        Returns:
            ContactIntent: Normalized contact

        Raises:
            MissingIdentity: If no email candidate resolves to a non-empty string
        """
        email = self.extract_email(payload)
        if not email:
            raise MissingIdentity(self.name, available_fields=list(payload.keys()))

        fields = self.extract_contact_fields(payload)

        return ContactIntent(
            email=email,
            first_name=fields.get("first_name"),
            last_name=fields.get("last_name"),
            phone=fields.get("phone"),
            company=fields.get("company"),
            source_system_id=self.extract_source_id(payload),
            event_type=self.extract_event_type(payload),
            metadata=self.extract_metadata(payload),
        )

    def describe(self) -> Dict[str, Any]:
        """Describe the source for the service index endpoint."""
        return {
            "name": self.name,
            "path": self.path,
            "source_system": self.source_system_label,
        }

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r}, path={self.path!r})"


def nested_paths(field_name: str, containers: List[str]) -> List[str]:
    """Build ``field, container.field, ...`` candidate paths."""
    return [field_name] + [f"{container}.{field_name}" for container in containers]
