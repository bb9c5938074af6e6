"""Pytest configuration and fixtures."""

import logging

import pytest
import structlog


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo CLI logging setup so handlers never outlive a captured stream."""
    yield
    structlog.reset_defaults()
    for handler in list(logging.root.handlers):
        logging.root.removeHandler(handler)
