"""Pytest configuration and shared fixtures for klaw-match tests."""

import logging

import pytest

import klaw_match._config
from klaw_match._logging import LOGGER_NAME, clear_log_hooks


@pytest.fixture(autouse=True)
def reset_state(monkeypatch):
    """Reset global config, log hooks and the package logger around each test."""
    monkeypatch.delenv('KLAW_MATCH_LOG_LEVEL', raising=False)
    monkeypatch.setattr(klaw_match._config, '_config', None)
    logger = logging.getLogger(LOGGER_NAME)
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    clear_log_hooks()
    yield
    clear_log_hooks()
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate
