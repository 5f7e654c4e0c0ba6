"""
Traced wrappers around the connectivity SPI.

Wrap a driver, or a connector you already built, and use the result wherever
the original would be used::

    import logging

    from sqltrace import wrap_connector
    from sqltrace.context import background
    from sqltrace.driver import named_values

    connector = wrap_connector(make_connector(dsn), logger=logging.getLogger("myapp.sql"))
    with connector.connect(background()) as conn:
        conn.exec_context(background(), "INSERT INTO t(x) VALUES (?)", named_values([1]))

Wrappers implement every optional capability of their role, so a traced
object can itself be wrapped again.
"""
from typing import Optional  # noqa:F401

from sqltrace.internal.logger import get_logger
from sqltrace.settings import config

from .conn import TracedConn
from .driver import DSNConnector
from .driver import TracedConnector
from .driver import TracedDriver
from .stmt import TracedStmt
from .tx import TracedTx


def _default_logger(logger):
    if logger is None:
        return get_logger(config.logger)
    return logger


def wrap_driver(driver, logger=None):
    # type: (object, Optional[object]) -> TracedDriver
    """Return ``driver`` wrapped; ``logger`` receives the telemetry records."""
    return TracedDriver(driver, _default_logger(logger))


def wrap_connector(connector, logger=None):
    # type: (object, Optional[object]) -> TracedConnector
    """Return ``connector`` wrapped, along with a traced view of its driver."""
    return TracedConnector(connector, _default_logger(logger))


__all__ = [
    "DSNConnector",
    "TracedConn",
    "TracedConnector",
    "TracedDriver",
    "TracedStmt",
    "TracedTx",
    "wrap_connector",
    "wrap_driver",
]
