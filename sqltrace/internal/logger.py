"""
Logging utilities for internal use.
Usage:
    import sqltrace.internal.logger as logger
    log = logger.get_logger(__name__)

Telemetry records carry their data as ``sql.*`` attributes (see
:mod:`sqltrace.ext.sql`). :class:`SQLFormatter` renders them after the message::

    handler = logging.StreamHandler()
    handler.setFormatter(SQLFormatter("%(levelname)s %(message)s"))
    logging.getLogger("sqltrace").addHandler(handler)

    # example result
    INFO sql executed sql.kind=execute sql.query='INSERT INTO t(x) VALUES (?)' sql.args=[1] sql.duration=0.000412
"""

import logging
from typing import Any  # noqa:F401
from typing import Dict  # noqa:F401


FIELD_PREFIX = "sql."


def get_logger(name):
    # type: (str) -> logging.Logger
    """
    Retrieve or create a ``Logger`` instance with consistent behavior for internal use.
    """
    logger = logging.getLogger(name)
    logger.propagate = True
    return logger


def record_fields(record):
    # type: (logging.LogRecord) -> Dict[str, Any]
    """Return the ``sql.*`` attributes of ``record`` in the order they were set."""
    return {k: v for k, v in vars(record).items() if k.startswith(FIELD_PREFIX)}


class SQLFormatter(logging.Formatter):
    def format(self, record):
        # type: (logging.LogRecord) -> str
        formatted = super(SQLFormatter, self).format(record)
        fields = record_fields(record)
        if not fields:
            return formatted
        rendered = " ".join("%s=%s" % (k, self.format_value(v)) for k, v in fields.items())
        head, sep, tail = formatted.partition("\n")
        return "%s %s%s%s" % (head, rendered, sep, tail)

    def format_value(self, value):
        # type: (Any) -> str
        if isinstance(value, float):
            return "%.6f" % value
        if isinstance(value, BaseException):
            return repr("%s: %s" % (type(value).__name__, value))
        return repr(value)
