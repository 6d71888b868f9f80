"""Shared fixtures."""

import logging
import threading

import pytest


class _SetOnAbort(logging.Handler):
    """Sets an event when the upload pool reports it is draining after a failure."""

    def __init__(self, event: threading.Event):
        super().__init__(logging.DEBUG)
        self.event = event

    def emit(self, record):
        if "in-flight" in record.getMessage():
            self.event.set()


@pytest.fixture
def abort_observed():
    """Event set once a pooled deploy has seen its first failure."""
    event = threading.Event()
    handler = _SetOnAbort(event)
    upload_logger = logging.getLogger("bindeploy.repository.uploads")
    previous_level = upload_logger.level
    upload_logger.setLevel(logging.DEBUG)
    upload_logger.addHandler(handler)
    yield event
    upload_logger.removeHandler(handler)
    upload_logger.setLevel(previous_level)
