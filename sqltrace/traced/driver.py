from sqltrace.driver import DriverContext
from sqltrace.driver import probe

from .base import TracedObject
from .conn import TracedConn


class TracedDriver(TracedObject):
    """TracedDriver wraps a driver so that every connection it opens is traced."""

    def open(self, name):
        conn = self.__wrapped__.open(name)
        return TracedConn(conn, self._self_logger)

    def open_connector(self, name):
        opener = probe(self.__wrapped__, DriverContext)
        if opener is None:
            return DSNConnector(name, self)
        connector = opener.open_connector(name)
        return TracedConnector(connector, self._self_logger, driver=self)


class TracedConnector(TracedObject):
    """TracedConnector wraps a connector so that every connection it hands out is traced."""

    def __init__(self, connector, logger, driver=None):
        super(TracedConnector, self).__init__(connector, logger)
        if driver is None:
            driver = TracedDriver(connector.driver(), logger)
        self._self_driver = driver

    def connect(self, ctx):
        conn = self.__wrapped__.connect(ctx)
        return TracedConn(conn, self._self_logger)

    def driver(self):
        return self._self_driver


class DSNConnector(object):
    """Connector for drivers that can only open connections by name."""

    __slots__ = ("name", "_driver")

    def __init__(self, name, driver):
        # type: (str, TracedDriver) -> None
        self.name = name
        self._driver = driver

    def connect(self, ctx):
        return self._driver.open(self.name)

    def driver(self):
        return self._driver
