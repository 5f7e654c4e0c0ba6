"""
The sqlite3 driver exposes the built-in ``sqlite3`` module through the
connectivity SPI, so that it can be wrapped like any other driver.


Usage
~~~~~

::

    from sqltrace import wrap_driver
    from sqltrace.context import background
    from sqltrace.contrib.sqlite3 import SQLiteDriver
    from sqltrace.driver import named_values

    connector = wrap_driver(SQLiteDriver()).open_connector(":memory:")
    with connector.connect(background()) as conn:
        conn.exec_context(background(), "CREATE TABLE users (id INTEGER, name TEXT)", [])
        conn.exec_context(background(), "INSERT INTO users VALUES (?, ?)", named_values([1, "alice"]))


Connections are opened in autocommit mode; ``begin``/``begin_tx`` issue an
explicit ``BEGIN``. Only the ``DEFAULT`` and ``SERIALIZABLE`` isolation levels
are accepted, and read-only transactions set ``PRAGMA query_only`` until they
end. A context that is canceled while a statement runs interrupts it and the
context error is raised instead of sqlite's own. Rows check the context of
their query before each fetch, so a context that ends while rows are being
read stops the iteration with its error.
"""
from .driver import SQLiteConn
from .driver import SQLiteConnector
from .driver import SQLiteDriver
from .driver import SQLiteResult
from .driver import SQLiteRows
from .driver import SQLiteStmt
from .driver import SQLiteTx


__all__ = [
    "SQLiteConn",
    "SQLiteConnector",
    "SQLiteDriver",
    "SQLiteResult",
    "SQLiteRows",
    "SQLiteStmt",
    "SQLiteTx",
]
