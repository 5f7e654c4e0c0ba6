"""
In-memory delegates used by the tests.

``BaseConn``, ``BaseStmt`` and ``BaseDriver`` implement only the base contract;
the other classes add optional capabilities one at a time so that every
combination the wrappers probe for can be built. Every fake records its calls
and raises the exception registered for a method in ``errors``.
"""
import time

from sqltrace.driver import SKIP


class Recorder(object):
    def __init__(self):
        self.calls = []
        self.errors = {}

    def _record(self, name, *args):
        self.calls.append((name,) + args)
        err = self.errors.get(name)
        if err is not None:
            raise err

    def called(self, name):
        return [c[1:] for c in self.calls if c[0] == name]


class ConstResult(object):
    def __init__(self, last_insert_id=0, rows_affected=1):
        self._last_insert_id = last_insert_id
        self._rows_affected = rows_affected

    def last_insert_id(self):
        return self._last_insert_id

    def rows_affected(self):
        return self._rows_affected


class ConstRows(Recorder):
    def __init__(self, rows=((1,),), columns=("1",)):
        super(ConstRows, self).__init__()
        self._rows = iter(rows)
        self._columns = list(columns)

    def columns(self):
        return self._columns

    def close(self):
        self._record("close")

    def __iter__(self):
        return self

    def __next__(self):
        return next(self._rows)


class BaseTx(Recorder):
    def commit(self):
        self._record("commit")

    def rollback(self):
        self._record("rollback")


class BaseStmt(Recorder):
    def __init__(self, query, result=None, rows=None, delay=0.0):
        super(BaseStmt, self).__init__()
        self.query_text = query
        self.result = result or ConstResult()
        self.rows = rows or ConstRows()
        self.delay = delay

    def close(self):
        self._record("close")

    def num_input(self):
        self._record("num_input")
        return self.query_text.count("?")

    def exec(self, args):
        self._record("exec", args)
        time.sleep(self.delay)
        return self.result

    def query(self, args):
        self._record("query", args)
        time.sleep(self.delay)
        return self.rows


class ContextStmt(BaseStmt):
    def exec_context(self, ctx, args):
        self._record("exec_context", ctx, args)
        time.sleep(self.delay)
        return self.result

    def query_context(self, ctx, args):
        self._record("query_context", ctx, args)
        time.sleep(self.delay)
        return self.rows


class CheckingStmt(BaseStmt):
    def check_named_value(self, nv):
        self._record("check_named_value", nv)
        if isinstance(nv.value, bytes):
            return SKIP
        nv.value = str(nv.value)
        return None


class BaseConn(Recorder):
    stmt_class = BaseStmt

    def __init__(self, result=None, rows=None, delay=0.0):
        super(BaseConn, self).__init__()
        self.result = result or ConstResult()
        self.rows = rows or ConstRows()
        self.delay = delay
        self.tx = BaseTx()
        self.dsn = "fake://"

    def prepare(self, query):
        self._record("prepare", query)
        return self.stmt_class(query, result=self.result, rows=self.rows, delay=self.delay)

    def close(self):
        self._record("close")

    def begin(self):
        self._record("begin")
        return self.tx


class QueryerConn(BaseConn):
    def query_context(self, ctx, query, args):
        self._record("query_context", ctx, query, args)
        return self.rows


class FullConn(QueryerConn):
    stmt_class = ContextStmt

    def __init__(self, *args, **kwargs):
        self.valid = kwargs.pop("valid", True)
        super(FullConn, self).__init__(*args, **kwargs)

    def prepare_context(self, ctx, query):
        self._record("prepare_context", ctx, query)
        return self.stmt_class(query, result=self.result, rows=self.rows, delay=self.delay)

    def exec_context(self, ctx, query, args):
        self._record("exec_context", ctx, query, args)
        time.sleep(self.delay)
        return self.result

    def query_context(self, ctx, query, args):
        self._record("query_context", ctx, query, args)
        time.sleep(self.delay)
        return self.rows

    def begin_tx(self, ctx, opts):
        self._record("begin_tx", ctx, opts)
        return self.tx

    def ping(self, ctx):
        self._record("ping", ctx)

    def reset_session(self, ctx):
        self._record("reset_session", ctx)

    def is_valid(self):
        self._record("is_valid")
        return self.valid

    def check_named_value(self, nv):
        self._record("check_named_value", nv)
        if isinstance(nv.value, bool):
            nv.value = int(nv.value)
            return None
        return SKIP


class DecliningConn(BaseConn):
    """Implements the context-aware methods but declines every call."""

    def exec_context(self, ctx, query, args):
        self._record("exec_context", ctx, query, args)
        return SKIP

    def query_context(self, ctx, query, args):
        self._record("query_context", ctx, query, args)
        return SKIP


class BaseDriver(Recorder):
    def __init__(self, conn_class=BaseConn):
        super(BaseDriver, self).__init__()
        self.conn_class = conn_class
        self.conns = []

    def open(self, name):
        self._record("open", name)
        conn = self.conn_class()
        self.conns.append(conn)
        return conn


class ConstConnector(Recorder):
    def __init__(self, name, driver):
        super(ConstConnector, self).__init__()
        self.name = name
        self._driver = driver

    def connect(self, ctx):
        self._record("connect", ctx)
        return self._driver.open(self.name)

    def driver(self):
        return self._driver


class ContextDriver(BaseDriver):
    def open_connector(self, name):
        self._record("open_connector", name)
        return ConstConnector(name, self)
