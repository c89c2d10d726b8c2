"""
Email sending utilities.

Two transports are available:

* ``MuttTransport`` pipes the body into the local ``mutt`` client, which
  relays through the mail setup of the host.
* ``HttpTransport`` posts the message to a notification endpoint, with
  the API key sent in the ``X-Api-Key`` header.

Every failure is raised as ``DeliveryError``.
"""

from __future__ import annotations

import logging
import subprocess
from typing import List, Optional

import requests

from ...errors import DeliveryError


class MuttTransport:
    """Send plain text mail through the ``mutt`` command line client."""

    def __init__(self, executable: str = "mutt", timeout: float = 120.0) -> None:
        self.executable = executable
        self.timeout = timeout

    def send(self, subject: str, body: str, recipients: List[str]) -> None:
        command = [self.executable, "-s", subject, "--", *recipients]
        logging.info("[email] Sending report through mutt", extra={"para": ",".join(recipients), "subject": subject})
        try:
            completed = subprocess.run(
                command,
                input=body,
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except (OSError, subprocess.SubprocessError) as err:
            raise DeliveryError(f"mutt could not be run: {err}") from err
        if completed.returncode != 0:
            raise DeliveryError(
                f"mutt exited with code {completed.returncode}: {completed.stderr.strip()}"
            )


class HttpTransport:
    """Send mail through an HTTP notification service."""

    def __init__(self, endpoint: Optional[str], key: Optional[str], timeout: float = 20.0) -> None:
        self.endpoint = endpoint
        self.key = key
        self.timeout = timeout

    def send(self, subject: str, body: str, recipients: List[str]) -> None:
        if not self.endpoint or not self.key:
            raise DeliveryError("EMAIL_ENDPOINT/EMAIL_KEY not configured (set in environment)")
        json_body = {
            "to": recipients,
            "subject": subject,
            "body": body,
            "isHtml": False,
        }
        # Log email details without sensitive information
        logging.info("[email] Sending report over HTTP", extra={"para": ",".join(recipients), "subject": subject})
        try:
            response = requests.post(
                self.endpoint,
                json=json_body,
                headers={
                    "accept": "*/*",
                    "X-Api-Key": self.key,
                    "Content-Type": "application/json",
                },
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.RequestException as err:
            raise DeliveryError(f"Notification endpoint rejected the report: {err}") from err


def get_transport(config):
    """Return the transport selected by ``config.mail_transport``."""
    if config.mail_transport == "mutt":
        return MuttTransport()
    if config.mail_transport == "http":
        return HttpTransport(config.email_endpoint, config.email_key)
    raise ValueError(f"Unknown mail transport: {config.mail_transport}")
