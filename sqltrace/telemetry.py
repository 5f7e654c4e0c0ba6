"""
Telemetry events emitted by the traced wrappers.

Each completed operation produces exactly one log record on the telemetry
logger: INFO when the delegate succeeded, ERROR when it raised, WARNING when it
lacks the requested capability. The event data is attached to the record as
``sql.*`` attributes so that structured handlers can pick it up without
parsing the message.
"""
import logging
from typing import Any  # noqa:F401
from typing import Dict  # noqa:F401
from typing import Optional
from typing import Union  # noqa:F401

import attr

from sqltrace.driver import TxOptions
from sqltrace.ext import sql
from sqltrace.settings import config


@attr.s(slots=True)
class TelemetryEvent(object):
    kind = attr.ib(type=str)
    query = attr.ib(type=Optional[str], default=None)
    args = attr.ib(type=object, default=None)
    duration = attr.ib(type=Optional[float], default=None)
    error = attr.ib(type=Optional[BaseException], default=None)
    tx_options = attr.ib(type=Optional[TxOptions], default=None)
    capability = attr.ib(type=Optional[str], default=None)
    # capability is only reported when the delegate lacks it
    unsupported = attr.ib(type=bool, default=False)

    def to_fields(self):
        # type: () -> Dict[str, Any]
        fields = {sql.KIND: self.kind}  # type: Dict[str, Any]
        if self.query is not None:
            fields[sql.QUERY_TEXT] = self.query
        if self.args is not None and config.log_args:
            fields[sql.ARGS] = self.args
        if self.tx_options is not None:
            fields[sql.ISOLATION] = str(self.tx_options.isolation)
            fields[sql.READ_ONLY] = self.tx_options.read_only
        if self.duration is not None:
            fields[sql.DURATION] = self.duration
        if self.error is not None:
            fields[sql.ERROR] = self.error
        if self.unsupported:
            fields[sql.CAPABILITY] = self.capability
        return fields


def emit(logger, level, msg, event, *args):
    # type: (Union[logging.Logger, logging.LoggerAdapter], int, str, TelemetryEvent, Any) -> None
    fields = event.to_fields()
    # LoggerAdapter.process replaces ``extra`` with the adapter's own, so the
    # adapter fields are merged here and the record goes to the wrapped logger.
    while isinstance(logger, logging.LoggerAdapter):
        merged = dict(logger.extra or {})
        merged.update(fields)
        fields = merged
        logger = logger.logger
    logger.log(level, msg, *args, extra=fields)
