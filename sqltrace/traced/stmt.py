from sqltrace.driver import NamedValueChecker
from sqltrace.driver import SKIP
from sqltrace.driver import StmtExecContext
from sqltrace.driver import StmtQueryContext
from sqltrace.driver import probe
from sqltrace.driver import values
from sqltrace.ext import sql
from sqltrace.telemetry import TelemetryEvent

from .base import TracedObject


class TracedStmt(TracedObject):
    """TracedStmt wraps a prepared statement and logs its executions.

    Every record carries the query text the statement was prepared from.
    """

    def __init__(self, stmt, logger, query):
        super(TracedStmt, self).__init__(stmt, logger)
        self._self_query = query

    @property
    def query_text(self):
        return self._self_query

    def close(self):
        return self.__wrapped__.close()

    def num_input(self):
        return self.__wrapped__.num_input()

    def exec(self, args):
        return self._trace_method(
            self.__wrapped__.exec,
            TelemetryEvent(sql.EXECUTE, self._self_query, args),
            "stmt executed",
            "stmt execution failed",
            args,
        )

    def query(self, args):
        return self._trace_method(
            self.__wrapped__.query,
            TelemetryEvent(sql.QUERY, self._self_query, args),
            "stmt queried",
            "stmt query failed",
            args,
        )

    # Unlike TracedConn, a statement without context support degrades to the
    # plain call: it is already bound to its connection, so dropping the
    # context cannot change how a connection is acquired.
    def exec_context(self, ctx, args):
        execer = probe(self.__wrapped__, StmtExecContext)
        if execer is None:
            return self.exec(values(args))
        return self._trace_method(
            execer.exec_context,
            TelemetryEvent(sql.EXECUTE, self._self_query, args, capability="StmtExecContext"),
            "stmt executed",
            "stmt execution failed",
            ctx,
            args,
        )

    def query_context(self, ctx, args):
        queryer = probe(self.__wrapped__, StmtQueryContext)
        if queryer is None:
            return self.query(values(args))
        return self._trace_method(
            queryer.query_context,
            TelemetryEvent(sql.QUERY, self._self_query, args, capability="StmtQueryContext"),
            "stmt queried",
            "stmt query failed",
            ctx,
            args,
        )

    def check_named_value(self, nv):
        checker = probe(self.__wrapped__, NamedValueChecker)
        if checker is None or checker.check_named_value(nv) is SKIP:
            return self._unsupported(TelemetryEvent(sql.CHECK, self._self_query, capability="NamedValueChecker"))
        return None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
