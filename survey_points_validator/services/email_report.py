"""
Build and send the discrepancy report.

The report is plain text: a header with the start time, one line per
discrepancy and a footer with the end time and a link to the project.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import List, Optional

from ..errors import DeliveryError
from ..models import Report

SUBJECT = "Revisión de ubicación de puntos geodésicos"
PROJECT_URL = "https://github.com/MaptimeBogota/SurveyPoints-validator"


def _format_time(when: Optional[datetime]) -> str:
    return (when or datetime.now()).strftime("%a %d %b %Y %H:%M:%S")


def build_report_text(report: Report) -> str:
    lines: List[str] = [
        "Validación de ubicación de puntos geodésicos (survey point) en Colombia",
        "sobre OpenStreetMap.",
        "",
        f"Hora de inicio: {_format_time(report.started_at)}.",
        "",
    ]
    lines.extend(entry.format_line() for entry in report.entries)
    lines.extend([
        "",
        f"Hora de fin: {_format_time(report.finished_at)}",
        "",
        "Este reporte fue creado por medio del script de chequeo:",
        PROJECT_URL,
    ])
    return "\n".join(lines) + "\n"


def send_report(report: Report, recipients: List[str], transport, send_empty: bool = False) -> bool:
    """Email the report to ``recipients``.

    Returns:
        ``True`` when the report was handed to the transport, ``False``
        when it was skipped because it holds no discrepancies.

    Raises:
        DeliveryError: If the transport fails.
    """
    if not report.has_discrepancies and not send_empty:
        logging.info("[sendReport] No discrepancies found, email not sent")
        return False
    body = build_report_text(report)
    logging.info(
        "[sendReport] Subject and recipients",
        extra={"subject": SUBJECT, "para": ",".join(recipients), "entries": len(report.entries)},
    )
    try:
        transport.send(SUBJECT, body, recipients)
    except DeliveryError:
        raise
    except Exception as err:
        raise DeliveryError(f"Report delivery failed: {err}") from err
    logging.info("[sendReport] Report sent")
    return True
