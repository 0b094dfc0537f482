import os

import pytest
from fastapi.testclient import TestClient

# Required settings must exist before anything reads the environment
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret")

from nagarconnect.core.config import Settings  # noqa: E402
from nagarconnect.db.db import Database  # noqa: E402
from nagarconnect.main import create_app  # noqa: E402
from nagarconnect.providers.base import EmailDeliveryError, EmailProvider  # noqa: E402
from nagarconnect.tests.helpers import ADMIN_EMAIL  # noqa: E402


class RecordingEmailProvider(EmailProvider):
    """Keeps sent messages in memory; ``fail`` makes every send raise."""

    def __init__(self):
        self.sent = []
        self.fail = False

    def is_available(self) -> bool:
        return True

    def send_email(self, to, subject, html, sender=None) -> str:
        if self.fail:
            raise EmailDeliveryError("provider down")
        self.sent.append({"to": to, "subject": subject, "html": html})
        return f"test-{len(self.sent)}"


@pytest.fixture
def settings(tmp_path):
    return Settings(
        database_url="sqlite://",
        jwt_secret_key="test-secret",
        admin_emails=ADMIN_EMAIL,
        storage_dir=str(tmp_path / "uploads"),
        public_base_url="http://testserver",
        mapbox_public_token=None,
        resend_api_key=None,
        notification_function_url=None,
        realtime_poll_seconds=0,
        realtime_debounce_seconds=0.01,
    )


@pytest.fixture
def database():
    database = Database("sqlite://")
    database.create_db_and_tables()
    yield database
    database.dispose()


@pytest.fixture
def db(database):
    with database.session() as session:
        yield session


@pytest.fixture
def email_provider():
    return RecordingEmailProvider()


@pytest.fixture
def client(settings, email_provider):
    app = create_app(settings, email_provider=email_provider)
    with TestClient(app) as client:
        yield client

