from sqltrace.ext import sql
from sqltrace.telemetry import TelemetryEvent

from .base import TracedObject


class TracedTx(TracedObject):
    """TracedTx wraps a transaction and logs how it ends."""

    def commit(self):
        return self._trace_method(
            self.__wrapped__.commit,
            TelemetryEvent(sql.COMMIT),
            "transaction committed",
            "transaction commit failed",
        )

    def rollback(self):
        return self._trace_method(
            self.__wrapped__.rollback,
            TelemetryEvent(sql.ROLLBACK),
            "transaction rolled back",
            "transaction rollback failed",
        )
