import logging

import pytest

from survey_points_validator.config import Config

ENV_VARS = (
    "EMAILS",
    "LOG_LEVEL",
    "CLEAN_FILES",
    "WORK_DIR",
    "OVERPASS_URL",
    "OVERPASS_TIMEOUT",
    "COMPARISON_MODE",
    "SEND_EMPTY_REPORT",
    "MAIL_TRANSPORT",
    "EMAIL_ENDPOINT",
    "EMAIL_KEY",
)


class FakeTransport:
    def __init__(self, error=None):
        self.sent = []
        self.error = error

    def send(self, subject, body, recipients):
        if self.error is not None:
            raise self.error
        self.sent.append({"subject": subject, "body": body, "recipients": list(recipients)})


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def config(tmp_path):
    return Config(recipients=["maptime.bogota@gmail.com"], work_dir=str(tmp_path))


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture(autouse=True)
def close_file_handlers():
    yield
    root = logging.getLogger()
    for handler in list(root.handlers):
        if isinstance(handler, logging.FileHandler):
            root.removeHandler(handler)
            handler.close()


@pytest.fixture
def transport_factory():
    return FakeTransport
