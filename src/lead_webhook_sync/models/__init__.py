"""
Data models for contact synchronization.
"""

from .contact import AuditRecord, ContactIntent, PropertyPatch, RemoteContact, SyncResult

__all__ = ["AuditRecord", "ContactIntent", "PropertyPatch", "RemoteContact", "SyncResult"]
