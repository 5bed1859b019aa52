"""
Contact sync orchestration.
"""

from .orchestrator import ACTION_CREATED, ACTION_UPDATED, SyncOrchestrator

__all__ = ["SyncOrchestrator", "ACTION_CREATED", "ACTION_UPDATED"]
