#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Source Registry - Looks up webhook sources by name or mount path.
"""

from typing import Dict, Iterator, List, Optional

from lead_webhook_sync.sources.base import WebhookSource
from lead_webhook_sync.sources.salesgodcrm import SalesGodCRMSource
from lead_webhook_sync.sources.smartlead import SmartleadSource
from lead_webhook_sync.utils.logger import get_logger

logger = get_logger(__name__)


class SourceRegistry:
    """Registry of the webhook sources the service accepts."""

    def __init__(self, sources: Optional[List[WebhookSource]] = None):
        """
        Initialize the source registry.

        Args:
            sources: Sources to register up front
        """
        self.sources: Dict[str, WebhookSource] = {}

        for source in sources or []:
            self.register(source)

    def register(self, source: WebhookSource) -> None:
        """
        Register a source.

        Raises:
            ValueError: If the name or path is already taken
        """
        if not source.name or not source.path:
            raise ValueError(f"Source {source!r} must define a name and a path")

        if source.name in self.sources:
            raise ValueError(f"Source already registered: {source.name}")

        if self.get_by_path(source.path):
            raise ValueError(f"Webhook path already registered: {source.path}")

        self.sources[source.name] = source
        logger.debug(f"Registered webhook source {source.name} at {source.path}")

    def get(self, name: str) -> Optional[WebhookSource]:
        return self.sources.get(name)

    def get_by_path(self, path: str) -> Optional[WebhookSource]:
        for source in self.sources.values():
            if source.path == path:
                return source
        return None

    def names(self) -> List[str]:
        return list(self.sources)

    def __iter__(self) -> Iterator[WebhookSource]:
        return iter(self.sources.values())

    def __len__(self) -> int:
        return len(self.sources)


def default_registry() -> SourceRegistry:
    """Build a registry holding every built-in source."""
    return SourceRegistry([SalesGodCRMSource(), SmartleadSource()])
