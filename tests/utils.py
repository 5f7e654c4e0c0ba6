import contextlib
import logging
import os
from typing import List  # noqa:F401

from sqltrace.internal.logger import record_fields


@contextlib.contextmanager
def override_env(env, replace_os_env=False):
    """
    Temporarily override ``os.environ`` with provided values::

        >>> with override_env(dict(SQLTRACE_ENABLED="false")):
            # Your test
    """
    # Copy the full original environment
    original = dict(os.environ)

    # We allow callers to clear out the environment to prevent leaking variables into the test
    if replace_os_env:
        os.environ.clear()

    for k in list(os.environ.keys()):
        if k.startswith("SQLTRACE_"):
            del os.environ[k]

    # Update based on the passed in arguments
    os.environ.update(env)
    try:
        yield
    finally:
        # Full clear the environment out and reset back to the original
        os.environ.clear()
        os.environ.update(original)


class TelemetryRecorder(logging.Handler):
    """Handler keeping every record it receives, like a dummy writer keeps spans."""

    def __init__(self, logger=None):
        super(TelemetryRecorder, self).__init__(level=logging.DEBUG)
        self.logger = logger
        self.records = []  # type: List[logging.LogRecord]

    @classmethod
    @contextlib.contextmanager
    def attached(cls, name):
        logger = logging.getLogger(name)
        level, propagate = logger.level, logger.propagate
        recorder = cls(logger)
        logger.setLevel(logging.DEBUG)
        logger.propagate = False
        logger.addHandler(recorder)
        try:
            yield recorder
        finally:
            logger.removeHandler(recorder)
            logger.setLevel(level)
            logger.propagate = propagate

    def emit(self, record):
        self.records.append(record)

    def pop(self):
        # type: () -> List[logging.LogRecord]
        records, self.records = self.records, []
        return records

    def pop_one(self):
        # type: () -> logging.LogRecord
        records = self.pop()
        assert len(records) == 1, [r.getMessage() for r in records]
        return records[0]


def fields(record):
    return record_fields(record)


def levels(records):
    return [r.levelno for r in records]
