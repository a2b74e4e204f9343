"""
Test Configuration

Environment setup MUST happen before any application import, because settings
and the loguru sinks are built at import time.
"""

import os
from pathlib import Path


def _early_setup_test_environment() -> None:
    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)

    os.environ.setdefault('SECRET_KEY', 'reading_room_test_secret_key')
    os.environ.setdefault('POSTGRES_DB', 'reading_room_test_db')
    os.environ.setdefault('WAITING_LIST_DISPATCH_SCOPE', 'location')


_early_setup_test_environment()

import pytest  # noqa: E402

from test.service.reading_room.fakes import FakeUnitOfWork  # noqa: E402


@pytest.fixture
def uow() -> FakeUnitOfWork:
    return FakeUnitOfWork()
