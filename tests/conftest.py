# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Shared pytest fixtures."""

import logging

import pytest


@pytest.fixture
def isolated_logging():
    """Restore root logger handlers and level changed by setup_logging()."""
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    yield
    for handler in root_logger.handlers:
        if handler not in handlers:
            handler.close()
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)
