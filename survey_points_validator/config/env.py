"""
Environment configuration loader.

This module reads the environment variables that drive a validation
run and exposes them via a ``Config`` dataclass.  Values are validated
when loaded; an invalid value raises ``ValueError`` so the command line
entry point can stop before any network call.

Supported variables:

* ``EMAILS`` – comma-separated report recipients (default ``angoca@yahoo.com``).
* ``LOG_LEVEL`` – one of ``TRACE``, ``DEBUG``, ``INFO``, ``WARN``, ``ERROR``,
  ``FATAL`` (default ``ERROR``).
* ``CLEAN_FILES`` – delete the intermediate files at the end (default ``true``).
* ``WORK_DIR`` – directory for the run files (default: a new temp directory).
* ``OVERPASS_URL`` – Overpass interpreter endpoint.
* ``OVERPASS_TIMEOUT`` – HTTP timeout in seconds (default ``60``).
* ``COMPARISON_MODE`` – ``greater`` (default) or ``inequality``.
* ``SEND_EMPTY_REPORT`` – email the report even without discrepancies.
* ``MAIL_TRANSPORT`` – ``mutt`` (default) or ``http``.
* ``EMAIL_ENDPOINT`` / ``EMAIL_KEY`` – settings of the ``http`` transport.

A ``.env`` file in the working directory is honoured through
``python-dotenv``.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import List, Mapping, Optional

from dotenv import load_dotenv
load_dotenv()

DEFAULT_RECIPIENTS = "angoca@yahoo.com"
DEFAULT_OVERPASS_URL = "https://overpass-api.de/api/interpreter"

# Accepted names mapped to the canonical ``logging`` level name.
LOG_LEVELS = {
    "TRACE": "TRACE",
    "DEBUG": "DEBUG",
    "INFO": "INFO",
    "WARN": "WARNING",
    "WARNING": "WARNING",
    "ERROR": "ERROR",
    "FATAL": "CRITICAL",
    "CRITICAL": "CRITICAL",
}
COMPARISON_MODES = ("greater", "inequality")
MAIL_TRANSPORTS = ("mutt", "http")

_TRUE = {"true", "1", "yes", "y", "on"}
_FALSE = {"false", "0", "no", "n", "off"}


@dataclass
class Config:
    """Holds the configuration of one validation run."""

    recipients: List[str] = field(default_factory=lambda: [DEFAULT_RECIPIENTS])
    log_level: str = "ERROR"
    clean_files: bool = True
    work_dir: Optional[str] = None
    overpass_url: str = DEFAULT_OVERPASS_URL
    overpass_timeout: float = 60.0
    comparison_mode: str = "greater"
    send_empty_report: bool = False
    mail_transport: str = "mutt"
    email_endpoint: Optional[str] = None
    email_key: Optional[str] = None


def parse_recipients(value: str) -> List[str]:
    """Split a comma-separated address list, rejecting invalid entries."""
    recipients = [addr.strip() for addr in value.split(",") if addr.strip()]
    if not recipients:
        raise ValueError("Environment variable EMAILS must list at least one address")
    for addr in recipients:
        if "@" not in addr:
            raise ValueError(f"Invalid email address in EMAILS: {addr!r}")
    return recipients


def parse_bool(name: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise ValueError(f"Environment variable {name} must be true or false, got {value!r}")


def _choice(name: str, value: str, choices) -> str:
    lowered = value.strip().lower()
    if lowered not in choices:
        raise ValueError(f"Environment variable {name} must be one of {', '.join(choices)}, got {value!r}")
    return lowered


def load_config(environ: Optional[Mapping[str, str]] = None) -> Config:
    """Load configuration from environment variables.

    Args:
        environ: Mapping to read instead of ``os.environ``.

    Raises:
        ValueError: If a variable holds an invalid value.

    Returns:
        Config: A populated configuration dataclass.
    """
    env = os.environ if environ is None else environ

    log_level = env.get("LOG_LEVEL", "ERROR").strip().upper()
    if log_level not in LOG_LEVELS:
        raise ValueError(f"Environment variable LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {log_level!r}")

    timeout_raw = env.get("OVERPASS_TIMEOUT", "60")
    try:
        overpass_timeout = float(timeout_raw)
    except ValueError:
        raise ValueError(f"Environment variable OVERPASS_TIMEOUT must be a number, got {timeout_raw!r}") from None
    if overpass_timeout <= 0:
        raise ValueError("Environment variable OVERPASS_TIMEOUT must be positive")

    return Config(
        recipients=parse_recipients(env.get("EMAILS", DEFAULT_RECIPIENTS)),
        log_level=LOG_LEVELS[log_level],
        clean_files=parse_bool("CLEAN_FILES", env.get("CLEAN_FILES", "true")),
        work_dir=env.get("WORK_DIR") or None,
        overpass_url=env.get("OVERPASS_URL") or DEFAULT_OVERPASS_URL,
        overpass_timeout=overpass_timeout,
        comparison_mode=_choice("COMPARISON_MODE", env.get("COMPARISON_MODE", "greater"), COMPARISON_MODES),
        send_empty_report=parse_bool("SEND_EMPTY_REPORT", env.get("SEND_EMPTY_REPORT", "false")),
        mail_transport=_choice("MAIL_TRANSPORT", env.get("MAIL_TRANSPORT", "mutt"), MAIL_TRANSPORTS),
        email_endpoint=env.get("EMAIL_ENDPOINT") or None,
        email_key=env.get("EMAIL_KEY") or None,
    )
