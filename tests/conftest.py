"""Test configuration for pytest."""

import logging
import os
import pytest


@pytest.fixture(autouse=True)
def configure_test_logging():
    """Configure logging for tests to be minimal."""
    os.environ['IMG_DUPLICATES_LOG_LEVEL'] = 'WARNING'

    logging.getLogger().setLevel(logging.WARNING)

    # Skipped and unreadable images are expected in several tests
    for logger_name in ['img_duplicates.sources', 'img_duplicates.dedup.model', 'img_duplicates.dedup.ranking']:
        logging.getLogger(logger_name).setLevel(logging.ERROR)
