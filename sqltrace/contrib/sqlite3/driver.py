import sqlite3
from typing import Any  # noqa:F401
from typing import List  # noqa:F401
from typing import Optional  # noqa:F401
from typing import Sequence  # noqa:F401

from sqltrace.context import background
from sqltrace.driver import Error
from sqltrace.driver import IsolationLevel
from sqltrace.driver import NamedValue
from sqltrace.driver import TxOptions  # noqa:F401
from sqltrace.internal.logger import get_logger


log = get_logger(__name__)

# sqlite calls the progress handler every N virtual machine instructions
PROGRESS_INTERVAL = 1000

SUPPORTED_ISOLATION_LEVELS = (IsolationLevel.DEFAULT, IsolationLevel.SERIALIZABLE)


def _check_ctx(ctx):
    if ctx is None:
        return
    err = ctx.err()
    if err is not None:
        raise err


def _params(args):
    # type: (Sequence[Any]) -> Any
    if not args or not isinstance(args[0], NamedValue):
        return list(args)
    if any(nv.name for nv in args):
        return {nv.name: nv.value for nv in args}
    return [nv.value for nv in args]


class SQLiteResult(object):
    __slots__ = ("_last_insert_id", "_rows_affected")

    def __init__(self, last_insert_id, rows_affected):
        # type: (Optional[int], int) -> None
        self._last_insert_id = last_insert_id
        self._rows_affected = rows_affected

    def last_insert_id(self):
        # type: () -> int
        if self._last_insert_id is None:
            raise Error("last insert id is not available")
        return self._last_insert_id

    def rows_affected(self):
        # type: () -> int
        return self._rows_affected


class SQLiteRows(object):
    """Rows of a query. The context of the query is checked before each fetch."""

    def __init__(self, cursor, ctx=None):
        # type: (sqlite3.Cursor, Any) -> None
        self._cursor = cursor
        self._ctx = ctx

    def columns(self):
        # type: () -> List[str]
        return [d[0] for d in self._cursor.description or ()]

    def close(self):
        self._cursor.close()

    def __iter__(self):
        return self

    def __next__(self):
        _check_ctx(self._ctx)
        row = self._cursor.fetchone()
        if row is None:
            raise StopIteration
        return row


class SQLiteTx(object):
    def __init__(self, conn, read_only=False):
        # type: (SQLiteConn, bool) -> None
        self._conn = conn
        self._read_only = read_only

    def _end(self, statement):
        try:
            self._conn._db.execute(statement)
        finally:
            if self._read_only:
                self._conn._db.execute("PRAGMA query_only = OFF")

    def commit(self):
        self._end("COMMIT")

    def rollback(self):
        self._end("ROLLBACK")


class SQLiteStmt(object):
    def __init__(self, conn, query):
        # type: (SQLiteConn, str) -> None
        self._conn = conn
        self._query = query
        self._closed = False

    def _check_open(self):
        if self._closed:
            raise Error("statement is closed")

    def close(self):
        self._check_open()
        self._closed = True

    def num_input(self):
        # type: () -> int
        # sqlite3 does not expose the parameter count of a statement
        return -1

    def exec(self, args):
        return self.exec_context(None, args)

    def query(self, args):
        return self.query_context(None, args)

    def exec_context(self, ctx, args):
        self._check_open()
        return self._conn.exec_context(ctx, self._query, args)

    def query_context(self, ctx, args):
        self._check_open()
        return self._conn.query_context(ctx, self._query, args)


class SQLiteConn(object):
    def __init__(self, db):
        # type: (sqlite3.Connection) -> None
        self._db = db

    def _execute(self, ctx, query, args):
        # type: (Any, str, Sequence[Any]) -> sqlite3.Cursor
        _check_ctx(ctx)
        if ctx is None or ctx is background():
            return self._db.execute(query, _params(args))

        self._db.set_progress_handler(ctx.done, PROGRESS_INTERVAL)
        try:
            return self._db.execute(query, _params(args))
        except sqlite3.OperationalError:
            err = ctx.err()
            if err is not None:
                raise err
            raise
        finally:
            self._db.set_progress_handler(None, PROGRESS_INTERVAL)

    def prepare(self, query):
        return SQLiteStmt(self, query)

    def prepare_context(self, ctx, query):
        _check_ctx(ctx)
        return self.prepare(query)

    def close(self):
        self._db.close()

    def begin(self):
        self._db.execute("BEGIN")
        return SQLiteTx(self)

    def begin_tx(self, ctx, opts):
        _check_ctx(ctx)
        if opts.isolation not in SUPPORTED_ISOLATION_LEVELS:
            raise Error("sqlite3: unsupported isolation level: %s" % opts.isolation)
        self._db.execute("BEGIN")
        if opts.read_only:
            self._db.execute("PRAGMA query_only = ON")
        return SQLiteTx(self, read_only=opts.read_only)

    def exec_context(self, ctx, query, args):
        cursor = self._execute(ctx, query, args)
        try:
            return SQLiteResult(cursor.lastrowid, cursor.rowcount)
        finally:
            cursor.close()

    def query_context(self, ctx, query, args):
        return SQLiteRows(self._execute(ctx, query, args), ctx)

    def is_valid(self):
        # type: () -> bool
        try:
            self._db.total_changes
        except sqlite3.ProgrammingError:
            log.debug("sqlite3 connection is closed")
            return False
        return True


class SQLiteConnector(object):
    def __init__(self, name, driver):
        # type: (str, SQLiteDriver) -> None
        self._name = name
        self._driver = driver

    def connect(self, ctx):
        _check_ctx(ctx)
        return self._driver.open(self._name)

    def driver(self):
        return self._driver


class SQLiteDriver(object):
    def open(self, name):
        # type: (str) -> SQLiteConn
        db = sqlite3.connect(name, isolation_level=None, check_same_thread=False)
        return SQLiteConn(db)

    def open_connector(self, name):
        # type: (str) -> SQLiteConnector
        return SQLiteConnector(name, self)
