"""Checks that must pass before any network call is made."""

from __future__ import annotations

import logging
import shutil

from ..errors import PrerequisiteMissing


def check_prerequisites(config) -> None:
    """Raise ``PrerequisiteMissing`` if the selected mail transport cannot work."""
    if config.mail_transport == "mutt":
        if shutil.which("mutt") is None:
            logging.error("[prereqs] mutt is not installed")
            raise PrerequisiteMissing("Falta instalar mutt.")
    elif config.mail_transport == "http":
        if not config.email_endpoint or not config.email_key:
            logging.error("[prereqs] HTTP mail transport is not configured")
            raise PrerequisiteMissing("EMAIL_ENDPOINT y EMAIL_KEY son requeridos para MAIL_TRANSPORT=http.")
    logging.debug("[prereqs] Prerequisites satisfied")
