#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Webhook test harness.

Sends sample SalesGodCRM or Smartlead webhooks to a running receiver so the
HubSpot sync can be checked end to end:

    lead-webhook-test --url http://localhost:3000 --email test@example.com
    lead-webhook-test --source smartlead --secret s3cret --wait
"""

import sys
import json
import time
import argparse
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import requests
from tenacity import RetryError, retry, retry_if_exception_type, stop_after_delay, wait_fixed

from lead_webhook_sync.api.signature import compute_signature
from lead_webhook_sync.config import DEFAULT_SIGNATURE_HEADER
from lead_webhook_sync.sources import SalesGodCRMSource, SmartleadSource

DEFAULT_URL = "http://localhost:3000"
DEFAULT_EMAIL = "test.lead@example.com"
REQUEST_TIMEOUT = 30  # seconds


def salesgodcrm_payloads(email: str) -> List[Dict[str, Any]]:
    """A new-contact event followed by an update for the same email."""
    now = datetime.now(timezone.utc)
    stamp = int(now.timestamp() * 1000)
    return [
        {
            "event": "contact.created",
            "data": {
                "id": f"sgcrm_{stamp}",
                "email": email,
                "firstName": "Test",
                "lastName": "Lead",
                "phoneNumber": "+1-555-0123",
                "company": "Test Company",
            },
            "timestamp": now.isoformat(),
        },
        {
            "event": "contact.updated",
            "data": {
                "id": f"sgcrm_{stamp}",
                "email": email,
                "firstName": "Updated",
                "lastName": "Lead",
                "phoneNumber": "+1-555-0124",
                "company": "Updated Company",
            },
            "timestamp": now.isoformat(),
        },
    ]


def smartlead_payloads(email: str) -> List[Dict[str, Any]]:
    """A single Smartlead reply event."""
    return [
        {
            "event_type": "EMAIL_REPLY",
            "to_email": email,
            "to_name": "Test Lead",
            "from_email": "outreach@example.com",
            "campaign_name": "Test Campaign",
            "campaign_id": 1001,
            "sl_email_lead_id": int(time.time()),
        }
    ]


SAMPLE_PAYLOADS = {
    SalesGodCRMSource.name: (SalesGodCRMSource.path, salesgodcrm_payloads),
    SmartleadSource.name: (SmartleadSource.path, smartlead_payloads),
}


def send_webhook(
    url: str,
    payload: Dict[str, Any],
    secret: Optional[str] = None,
    session: Optional[requests.Session] = None,
) -> requests.Response:
    """
    POST a payload, signing the exact serialized body when a secret is given.

    Args:
        url: Full webhook URL
        payload: JSON payload
        secret: Shared webhook secret
        session: Session to send with

    Returns:
        requests.Response: Receiver response
    """
    body = json.dumps(payload)
    headers = {"Content-Type": "application/json"}

    if secret:
        headers[DEFAULT_SIGNATURE_HEADER] = compute_signature(secret, body)

    http = session or requests.Session()
    return http.post(url, data=body.encode("utf-8"), headers=headers, timeout=REQUEST_TIMEOUT)


def wait_for_health(base_url: str, timeout: float = 30.0, interval: float = 1.0) -> bool:
    """
    Poll the receiver's health check until it answers.

    Returns:
        bool: True once /health returned 200, False on timeout
    """

    @retry(
        stop=stop_after_delay(timeout),
        wait=wait_fixed(interval),
        retry=retry_if_exception_type(requests.RequestException),
    )
    def _check() -> None:
        response = requests.get(base_url.rstrip("/") + "/health", timeout=REQUEST_TIMEOUT)
        response.raise_for_status()

    try:
        _check()
        return True
    except RetryError:
        return False


def print_response(label: str, response: requests.Response) -> None:
    print(f"{label} Response: {response.status_code}")
    try:
        print("Response:", json.dumps(response.json(), indent=2))
    except ValueError:
        print("Response:", response.text)


def setup_argparse() -> argparse.ArgumentParser:
    """
    Set up command-line argument parsing.

    Returns:
        argparse.ArgumentParser: Configured argument parser
    """
    parser = argparse.ArgumentParser(description="Send sample webhooks to the lead webhook receiver")
    parser.add_argument("--url", default=DEFAULT_URL, help=f"Receiver base URL (default: {DEFAULT_URL})")
    parser.add_argument("--email", default=DEFAULT_EMAIL, help="Contact email to send")
    parser.add_argument("--secret", default="", help="Shared webhook secret for HMAC signing")
    parser.add_argument(
        "--source",
        choices=sorted(SAMPLE_PAYLOADS),
        default=SalesGodCRMSource.name,
        help="Source system to impersonate",
    )
    parser.add_argument(
        "--delay",
        type=float,
        default=2.0,
        help="Seconds between consecutive webhooks (default: 2)",
    )
    parser.add_argument(
        "--wait",
        action="store_true",
        help="Wait for /health to answer before sending",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Run the harness. Returns a process exit code."""
    args = setup_argparse().parse_args(argv)

    path, build_payloads = SAMPLE_PAYLOADS[args.source]
    url = args.url.rstrip("/") + path

    print(f"Testing {args.source} -> HubSpot webhook integration\n")
    print(f"Target URL: {url}")
    print(f"Test Email: {args.email}")
    print(f"HMAC Verification: {'ENABLED' if args.secret else 'DISABLED'}\n")

    if args.wait and not wait_for_health(args.url):
        print(f"Receiver at {args.url} did not become healthy")
        return 1

    session = requests.Session()
    failures = 0

    for index, payload in enumerate(build_payloads(args.email), start=1):
        if index > 1:
            time.sleep(args.delay)

        print(f"Test {index}: sending {payload.get('event') or payload.get('event_type')} webhook...")
        try:
            response = send_webhook(url, payload, secret=args.secret or None, session=session)
        except requests.RequestException as e:
            print(f"Test {index} Failed: {e}")
            return 1

        print_response(f"Test {index}", response)
        if not response.ok:
            failures += 1
        print()

    if failures:
        print(f"{failures} test(s) returned an error status")
        return 1

    print("All tests completed!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
