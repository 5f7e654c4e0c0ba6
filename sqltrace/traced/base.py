import logging
import time

import wrapt

from sqltrace.driver import SKIP
from sqltrace.settings import config
from sqltrace.telemetry import TelemetryEvent  # noqa:F401
from sqltrace.telemetry import emit


class TracedObject(wrapt.ObjectProxy):
    """Proxy owning one delegate and the telemetry logger shared with its parent."""

    def __init__(self, wrapped, logger):
        super(TracedObject, self).__init__(wrapped)
        self._self_logger = logger

    def _trace_method(self, method, event, ok, failed, *args, **kwargs):
        """
        Internal function to time a call to the delegate and log its outcome
        :param method: The delegate callable
        :param event: The TelemetryEvent describing the call, completed with duration and error
        :param ok: Message logged at INFO when the call returns
        :param failed: Message logged at ERROR when the call raises
        :param args: The args that will be passed as positional args to the wrapped method
        :return: The result of the wrapped method invocation, unchanged
        """
        if not config.enabled:
            return method(*args, **kwargs)

        start = time.perf_counter()
        try:
            result = method(*args, **kwargs)
        except Exception as e:
            event.duration = time.perf_counter() - start
            event.error = e
            emit(self._self_logger, logging.ERROR, failed, event)
            raise
        event.duration = time.perf_counter() - start

        if result is SKIP:
            # the delegate declined the call itself
            return self._unsupported(event)
        emit(self._self_logger, logging.INFO, ok, event)
        return result

    def _unsupported(self, event):
        # type: (TelemetryEvent) -> object
        if config.enabled:
            event.duration = None
            event.unsupported = True
            if event.capability is None:
                # a base operation declined by the delegate
                event.capability = event.kind
            emit(self._self_logger, logging.WARNING, "driver does not support %s", event, event.capability)
        return SKIP
