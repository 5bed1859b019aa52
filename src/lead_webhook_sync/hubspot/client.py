#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
HubSpot API Integration

Provides a thin client over the HubSpot contacts API: search by email, create,
and update properties. Every failure is raised as RemoteApiError; nothing is
retried here, the webhook sender retries on a 500.
"""

from typing import Any, Callable, Dict, List, Optional, Tuple

import hubspot
import urllib3
from hubspot.crm.contacts import ApiException

from lead_webhook_sync.exceptions import RemoteApiError
from lead_webhook_sync.utils.logger import get_logger, log_integration_event

# Configure logger
logger = get_logger(__name__)

# Constants
DEFAULT_TIMEOUT = 10.0  # seconds

# Properties fetched alongside every search hit
CONTACT_PROPERTIES = [
    "email",
    "firstname",
    "lastname",
    "phone",
    "company",
    "source_system",
]


class HubSpotContactsClient:
    """
    Client for the HubSpot CRM contacts API.

    Holds no per-request state, so one instance is shared by all requests.
    """

    def __init__(
        self,
        access_token: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT,
        api_client: Optional[Any] = None,
    ):
        """
        Initialize the HubSpot client.

        Args:
            access_token: HubSpot private app access token
            timeout: Per-request timeout in seconds
            api_client: Pre-built hubspot.Client (used by tests)
        """
        if api_client is None:
            if not access_token:
                raise ValueError("HubSpot access token is required")
            api_client = hubspot.Client.create(access_token=access_token)

        self.client = api_client
        self.timeout = timeout

        log_integration_event("hubspot", "initialize", "Initialized HubSpot contacts client")

    def _call(self, operation: str, request_func: Callable[..., Any], **kwargs) -> Any:
        """
        Make an API request, translating failures to RemoteApiError.

        Args:
            operation: Operation name for logs and errors
            request_func: SDK method to call
            **kwargs: Keyword arguments for the SDK method

        Returns:
            Any: Response from the API
        """
        try:
            return request_func(_request_timeout=self.timeout, **kwargs)

        except ApiException as e:
            logger.error(f"HubSpot API error during {operation}: {e.status} {e.reason} {e.body}")
            raise RemoteApiError(operation, e, status=e.status, body=e.body) from e

        except (urllib3.exceptions.HTTPError, OSError) as e:
            # Timeouts and connection failures
            logger.error(f"HubSpot transport error during {operation}: {e}")
            raise RemoteApiError(operation, e) from e

    def search_by_email(self, email: str) -> Optional[Dict[str, Any]]:
        """
        Find a contact by exact email match.

        When HubSpot holds duplicates the most recently created one wins.

        Args:
            email: Contact email

        Returns:
            Optional[Dict]: ``{"id", "properties"}`` if found, None otherwise
        """
        search_request = {
            "filterGroups": [
                {
                    "filters": [
                        {
                            "propertyName": "email",
                            "operator": "EQ",
                            "value": email,
                        }
                    ]
                }
            ],
            "sorts": [{"propertyName": "createdate", "direction": "DESCENDING"}],
            "properties": CONTACT_PROPERTIES,
            "limit": 1,
        }

        result = self._call(
            "search_contact",
            self.client.crm.contacts.search_api.do_search,
            public_object_search_request=search_request,
        )

        results: List[Any] = list(result.results or [])
        if not results:
            log_integration_event("hubspot", "search", f"No contact found for {email}")
            return None

        contact = results[0]
        log_integration_event("hubspot", "search", f"Found contact {contact.id} for {email}")
        return {"id": contact.id, "properties": dict(contact.properties or {})}

    def create_contact(self, properties: Dict[str, Any]) -> Tuple[str, Dict[str, Any]]:
        """
        Create a new contact.

        Args:
            properties: Contact properties, must include email

        Returns:
            Tuple containing:
            - str: New contact ID
            - Dict: Properties as stored by HubSpot
        """
        log_integration_event("hubspot", "create", f"Creating contact for {properties.get('email')}")

        contact = self._call(
            "create_contact",
            self.client.crm.contacts.basic_api.create,
            simple_public_object_input_for_create={"properties": properties},
        )

        return contact.id, dict(contact.properties or properties)

    def update_contact(self, contact_id: str, properties: Dict[str, Any]) -> Dict[str, Any]:
        """
        Update properties on an existing contact.

        Args:
            contact_id: HubSpot contact ID
            properties: Properties to set

        Returns:
            Dict: Properties as stored by HubSpot
        """
        contact = self._call(
            "update_contact",
            self.client.crm.contacts.basic_api.update,
            contact_id=contact_id,
            simple_public_object_input={"properties": properties},
        )

        log_integration_event(
            "hubspot",
            "update",
            f"Updated contact {contact_id} with {', '.join(sorted(properties))}",
        )
        return dict(contact.properties or {})
