import pytest

from hotel_listing.config import get_settings
from hotel_listing.core.logging.builder import setup_logging
from hotel_listing.core.logging.filters import reset_request_id, set_request_id


class DummySettings:
    """Minimal Settings stand-in for the logging builder."""

    LOG_FORMAT = "json"
    LOG_LEVEL = "INFO"
    LOG_TO_STDOUT = False
    LOG_DIR = None
    LOG_MAX_BYTES = 1000
    LOG_BACKUP_COUNT = 1
    ENV = "development"
    ENABLE_SQL_LOGGING = False


@pytest.fixture
def dummy_settings() -> DummySettings:
    return DummySettings()


@pytest.fixture
def restore_logging():
    """Re-apply the suite's logging config after a test installs its own."""
    yield
    setup_logging(get_settings())


@pytest.fixture
def clean_request_id():
    token = set_request_id(None)
    yield
    reset_request_id(token)
