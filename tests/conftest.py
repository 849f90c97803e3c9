"""Pytest configuration and fixtures."""

import logging

import pytest

from subcheck.formatting import Formatting, configure
from subcheck.verbose import teardown_logger


@pytest.fixture(autouse=True)
def restore_formatting():
    """Run every test with default formatting and restore the previous one after."""
    previous = configure(Formatting())
    yield
    configure(previous)


@pytest.fixture(autouse=True)
def cleanup_loggers():
    """Clean up debug loggers set up by tests to prevent name collisions."""
    yield

    loggers_to_remove = [
        name
        for name in logging.Logger.manager.loggerDict.keys()
        if name.startswith("subcheck_test")
    ]

    for name in loggers_to_remove:
        teardown_logger(name)
        del logging.Logger.manager.loggerDict[name]


class FakeHost:
    """Stand-in for a test context with a ``fail`` method."""

    def __init__(self):
        self.messages: list[str] = []

    def fail(self, msg: str) -> None:
        self.messages.append(msg)

    @property
    def failed(self) -> bool:
        return bool(self.messages)


@pytest.fixture
def host():
    return FakeHost()
