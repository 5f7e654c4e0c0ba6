import os

from sqltrace.internal.utils.formats import asbool


class SQLTraceConfig(object):
    """
    Configuration read from the environment when the object is created.

    ``SQLTRACE_ENABLED``
        Emit telemetry for wrapped operations. Calls are forwarded either way.
        Default: ``True``
    ``SQLTRACE_LOG_ARGS``
        Include bound arguments in telemetry records. Default: ``True``
    ``SQLTRACE_LOGGER``
        Name of the logger used when no telemetry logger is given. Default: ``"sqltrace"``
    ``SQLTRACE_PING_QUERY``
        Query used to check liveness of connections that cannot ping. Default: ``"SELECT 1"``

    Attributes can be changed at runtime; the wrappers read them at every call.
    """

    def __init__(self):
        self.enabled = asbool(os.getenv("SQLTRACE_ENABLED", default=True))
        self.log_args = asbool(os.getenv("SQLTRACE_LOG_ARGS", default=True))
        self.logger = os.getenv("SQLTRACE_LOGGER", default="sqltrace")
        self.ping_query = os.getenv("SQLTRACE_PING_QUERY", default="SELECT 1")

    def __repr__(self):
        return "{}(enabled={!r}, log_args={!r}, logger={!r}, ping_query={!r})".format(
            self.__class__.__name__, self.enabled, self.log_args, self.logger, self.ping_query
        )


config = SQLTraceConfig()
