from sqltrace.driver import ConnBeginTx
from sqltrace.driver import ConnPrepareContext
from sqltrace.driver import ExecerContext
from sqltrace.driver import NamedValueChecker
from sqltrace.driver import Pinger
from sqltrace.driver import QueryerContext
from sqltrace.driver import SKIP
from sqltrace.driver import SessionResetter
from sqltrace.driver import Validator
from sqltrace.driver import probe
from sqltrace.ext import sql
from sqltrace.internal.logger import get_logger
from sqltrace.settings import config
from sqltrace.telemetry import TelemetryEvent

from .base import TracedObject
from .stmt import TracedStmt
from .tx import TracedTx


log = get_logger(__name__)


class TracedConn(TracedObject):
    """TracedConn wraps a connection and logs the statements run through it.

    Each optional capability is looked up on the delegate at every call. When
    it is missing the operation either degrades to a base operation with the
    same observable behavior (``prepare_context``, ``begin_tx``, ``ping``,
    ``reset_session``, ``is_valid``) or returns :data:`~sqltrace.driver.SKIP`
    (``exec_context``, ``query_context``, ``check_named_value``). Executing
    without the caller's context would ignore its cancellation and deadline,
    so the caller gets to pick its own fallback instead.
    """

    def close(self):
        return self.__wrapped__.close()

    def prepare(self, query):
        stmt = self._trace_method(
            self.__wrapped__.prepare,
            TelemetryEvent(sql.PREPARE, query),
            "stmt prepared",
            "stmt prepare failed",
            query,
        )
        if stmt is SKIP:
            return stmt
        return TracedStmt(stmt, self._self_logger, query)

    def prepare_context(self, ctx, query):
        preparer = probe(self.__wrapped__, ConnPrepareContext)
        if preparer is None:
            return self.prepare(query)

        stmt = self._trace_method(
            preparer.prepare_context,
            TelemetryEvent(sql.PREPARE, query, capability="ConnPrepareContext"),
            "stmt prepared",
            "stmt prepare failed",
            ctx,
            query,
        )
        if stmt is SKIP:
            return stmt
        return TracedStmt(stmt, self._self_logger, query)

    def exec_context(self, ctx, query, args):
        event = TelemetryEvent(sql.EXECUTE, query, args, capability="ExecerContext")
        execer = probe(self.__wrapped__, ExecerContext)
        if execer is None:
            return self._unsupported(event)
        return self._trace_method(execer.exec_context, event, "sql executed", "sql execution failed", ctx, query, args)

    def query_context(self, ctx, query, args):
        event = TelemetryEvent(sql.QUERY, query, args, capability="QueryerContext")
        queryer = probe(self.__wrapped__, QueryerContext)
        if queryer is None:
            return self._unsupported(event)
        return self._trace_method(queryer.query_context, event, "sql queried", "sql query failed", ctx, query, args)

    def begin(self):
        tx = self._trace_method(
            self.__wrapped__.begin,
            TelemetryEvent(sql.BEGIN),
            "transaction started",
            "transaction start failed",
        )
        if tx is SKIP:
            return tx
        return TracedTx(tx, self._self_logger)

    def begin_tx(self, ctx, opts):
        beginner = probe(self.__wrapped__, ConnBeginTx)
        if beginner is None:
            # the base path has no options to report
            return self.begin()

        tx = self._trace_method(
            beginner.begin_tx,
            TelemetryEvent(sql.BEGIN, tx_options=opts, capability="ConnBeginTx"),
            "transaction started",
            "transaction start failed",
            ctx,
            opts,
        )
        if tx is SKIP:
            return tx
        return TracedTx(tx, self._self_logger)

    def ping(self, ctx):
        pinger = probe(self.__wrapped__, Pinger)
        if pinger is None:
            log.debug("connection cannot ping, probing with %r", config.ping_query)
            rows = self.query_context(ctx, config.ping_query, [])
            if rows is SKIP:
                return rows
            return rows.close()

        return self._trace_method(
            pinger.ping,
            TelemetryEvent(sql.PING, capability="Pinger"),
            "connection pinged",
            "connection ping failed",
            ctx,
        )

    def reset_session(self, ctx):
        resetter = probe(self.__wrapped__, SessionResetter)
        if resetter is None:
            return None
        return resetter.reset_session(ctx)

    def is_valid(self):
        validator = probe(self.__wrapped__, Validator)
        if validator is None:
            # assume valid
            return True
        return validator.is_valid()

    def check_named_value(self, nv):
        checker = probe(self.__wrapped__, NamedValueChecker)
        if checker is None or checker.check_named_value(nv) is SKIP:
            return self._unsupported(TelemetryEvent(sql.CHECK, capability="NamedValueChecker"))
        return None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
