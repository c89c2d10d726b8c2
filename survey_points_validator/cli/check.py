"""
Run the survey point validation from the command line.

The run downloads the survey points of Colombia from Overpass, checks
their coordinates, emails the report and removes the intermediate
files.  ``-h``/``--help`` prints the usage and exits with code 1.

Exit codes are listed in ``survey_points_validator.errors.ExitCode``.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from datetime import datetime
from typing import List, Optional

from .. import __version__
from ..config import Config, load_config
from ..config.queries import build_survey_points_query
from ..errors import (
    DeliveryError,
    ExitCode,
    FetchError,
    PrerequisiteMissing,
)
from ..infra.notifications.email import get_transport
from ..infra.overpass.client import fetch_survey_points
from ..infra.reporting.json_reporter import (
    DISCREPANCIES_FILE,
    LOG_FILE,
    QUERY_FILE,
    REPORT_FILE,
    SURVEY_POINTS_FILE,
    clean_files,
    create_work_dir,
    write_json,
    write_text,
)
from ..models import Report
from ..services.email_report import build_report_text, send_report
from ..services.prerequisites import check_prerequisites
from ..services.survey_check import validate_csv

TRACE = 5
LOG_FORMAT = "%(asctime)s %(levelname)s %(message)s"

HELP_EPILOG = """\
Este script verifica las coordenadas del elemento y de sus etiquetas
para corroborar que está bien ubicado.
Busca todos los elementos man_made=survey_point de Colombia.

Para cambiar los destinatarios del reporte enviado por correo
electrónico, se modifica la variable de entorno EMAILS:
  export EMAILS="maptime.bogota@gmail.com,contact@osm.org"

Otras variables: LOG_LEVEL, CLEAN_FILES, WORK_DIR, OVERPASS_URL,
OVERPASS_TIMEOUT, COMPARISON_MODE, SEND_EMPTY_REPORT, MAIL_TRANSPORT,
EMAIL_ENDPOINT, EMAIL_KEY.
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="survey-points-check",
        description=f"survey-points-check version {__version__}",
        epilog=HELP_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
    )
    parser.add_argument('-h', '--help', action='store_true', help='Show this message and exit')
    return parser


def setup_logging(level: str, log_path: str) -> None:
    """Log to stderr and to ``log_path``.

    Raises:
        OSError: If the log file cannot be opened.
    """
    logging.addLevelName(TRACE, "TRACE")
    file_handler = logging.FileHandler(log_path, encoding="utf-8")
    logging.basicConfig(
        level=TRACE if level == "TRACE" else getattr(logging, level),
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(), file_handler],
        force=True,
    )


def run_pipeline(config: Config, work_dir: str, transport=None) -> Report:
    """Fetch, validate and report; return the report that was built.

    Raises:
        FetchError: If the survey points cannot be downloaded.
        DeliveryError: If the report cannot be sent.
    """
    report = Report(started_at=datetime.now())

    query = build_survey_points_query()
    write_text(os.path.join(work_dir, QUERY_FILE), query)

    logging.info("[check] Fetching survey points")
    csv_text = fetch_survey_points(query, url=config.overpass_url, timeout=config.overpass_timeout)
    write_text(os.path.join(work_dir, SURVEY_POINTS_FILE), csv_text)

    result = validate_csv(csv_text, mode=config.comparison_mode)
    report.extend(result.entries)
    write_json(os.path.join(work_dir, DISCREPANCIES_FILE), [e.to_dict() for e in report.entries])

    report.finish()
    write_text(os.path.join(work_dir, REPORT_FILE), build_report_text(report))

    if transport is None:
        transport = get_transport(config)
    send_report(report, config.recipients, transport, send_empty=config.send_empty_report)

    if config.clean_files:
        clean_files(work_dir)
    return report


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.help:
        parser.print_help()
        return ExitCode.HELP_MESSAGE

    try:
        config = load_config()
    except ValueError as err:
        print(f"ERROR: {err}", file=sys.stderr)
        return ExitCode.GENERIC_FAILURE

    try:
        work_dir = create_work_dir(config.work_dir)
    except OSError as err:
        print(f"ERROR: El directorio de trabajo no pudo ser creado: {err}", file=sys.stderr)
        return ExitCode.GENERIC_FAILURE
    try:
        setup_logging(config.log_level, os.path.join(work_dir, LOG_FILE))
    except OSError as err:
        print(f"ERROR: El archivo de log no pudo ser creado: {err}", file=sys.stderr)
        return ExitCode.LOGGER_UTILITY

    logging.info("[check] Preparing environment")
    logging.debug("[check] Output saved in %s", work_dir)

    try:
        check_prerequisites(config)
    except PrerequisiteMissing as err:
        logging.error("%s", err)
        return ExitCode.MISSING_LIBRARY

    logging.warning("[check] Starting process")
    try:
        run_pipeline(config, work_dir)
    except FetchError as err:
        logging.error("[check] Survey points download failed: %s", err)
        return ExitCode.GENERIC_FAILURE
    except DeliveryError as err:
        logging.error("[check] Report could not be delivered: %s", err)
        return ExitCode.GENERIC_FAILURE
    except KeyboardInterrupt:
        logging.warning("[check] The script was terminated")
        return ExitCode.INTERRUPTED
    except Exception as err:
        logging.error("Error executing cli/check", exc_info=err)
        return ExitCode.GENERIC_FAILURE
    logging.warning("[check] Process finished")
    return ExitCode.SUCCESS


if __name__ == '__main__':
    sys.exit(main())
