"""
Connectivity SPI that :mod:`sqltrace` wraps.

The base contract (``Driver``, ``Connector``, ``Conn``, ``Stmt``, ``Tx``,
``Result`` and ``Rows``) must be implemented by every delegate. Everything else
is an optional capability: a delegate may provide it or not, and callers find
out with :func:`probe`::

    execer = probe(conn, ExecerContext)
    if execer is None:
        return SKIP
    return execer.exec_context(ctx, query, args)
"""

from enum import IntEnum
import functools
from typing import Any
from typing import Iterator
from typing import List
from typing import Optional
from typing import Protocol
from typing import Sequence
from typing import Tuple
from typing import Type
from typing import TypeVar
from typing import runtime_checkable

import attr


T = TypeVar("T")


class Error(Exception):
    """Base class of the errors defined by the SPI."""


class BadConnection(Error):
    """The connection is in a bad state and should not be used again."""


class _Skip(object):
    __slots__ = ()

    def __repr__(self):
        return "SKIP"

    def __reduce__(self):
        return "SKIP"


# Returned (never raised) when a delegate does not provide the requested
# capability. Callers compare with ``is``.
SKIP = _Skip()


class IsolationLevel(IntEnum):
    DEFAULT = 0
    READ_UNCOMMITTED = 1
    READ_COMMITTED = 2
    WRITE_COMMITTED = 3
    REPEATABLE_READ = 4
    SNAPSHOT = 5
    SERIALIZABLE = 6
    LINEARIZABLE = 7

    def __str__(self):
        return " ".join(p.capitalize() for p in self.name.split("_"))


@attr.s(slots=True)
class NamedValue(object):
    """A bound argument. ``ordinal`` is 1-based; ``name`` is empty for positional arguments."""

    value = attr.ib(type=object)
    ordinal = attr.ib(type=int, default=0)
    name = attr.ib(type=str, default="")


@attr.s(frozen=True, slots=True)
class TxOptions(object):
    isolation = attr.ib(type=IsolationLevel, default=IsolationLevel.DEFAULT, converter=IsolationLevel)
    read_only = attr.ib(type=bool, default=False)


def named_values(args):
    # type: (Sequence[Any]) -> List[NamedValue]
    return [NamedValue(value=v, ordinal=i) for i, v in enumerate(args, 1)]


def values(args):
    # type: (Sequence[NamedValue]) -> List[Any]
    return [nv.value for nv in args]


# Base contract


class Result(Protocol):
    def last_insert_id(self) -> int:
        ...

    def rows_affected(self) -> int:
        ...


class Rows(Protocol):
    def columns(self) -> List[str]:
        ...

    def close(self) -> None:
        ...

    def __iter__(self) -> Iterator[Tuple[Any, ...]]:
        ...


class Tx(Protocol):
    def commit(self) -> None:
        ...

    def rollback(self) -> None:
        ...


class Stmt(Protocol):
    def close(self) -> None:
        ...

    def num_input(self) -> int:
        """Number of placeholders, or -1 when the driver cannot tell."""

    def exec(self, args: Sequence[Any]) -> Result:
        ...

    def query(self, args: Sequence[Any]) -> Rows:
        ...


class Conn(Protocol):
    def prepare(self, query: str) -> Stmt:
        ...

    def close(self) -> None:
        ...

    def begin(self) -> Tx:
        ...


class Driver(Protocol):
    def open(self, name: str) -> Conn:
        ...


class Connector(Protocol):
    def connect(self, ctx: Any) -> Conn:
        ...

    def driver(self) -> Driver:
        ...


# Optional capabilities


@runtime_checkable
class DriverContext(Protocol):
    def open_connector(self, name: str) -> Connector:
        ...


@runtime_checkable
class ConnPrepareContext(Protocol):
    def prepare_context(self, ctx: Any, query: str) -> Stmt:
        ...


@runtime_checkable
class ExecerContext(Protocol):
    def exec_context(self, ctx: Any, query: str, args: Sequence[NamedValue]) -> Result:
        ...


@runtime_checkable
class QueryerContext(Protocol):
    def query_context(self, ctx: Any, query: str, args: Sequence[NamedValue]) -> Rows:
        ...


@runtime_checkable
class ConnBeginTx(Protocol):
    def begin_tx(self, ctx: Any, opts: TxOptions) -> Tx:
        ...


@runtime_checkable
class Pinger(Protocol):
    def ping(self, ctx: Any) -> None:
        ...


@runtime_checkable
class SessionResetter(Protocol):
    def reset_session(self, ctx: Any) -> None:
        ...


@runtime_checkable
class Validator(Protocol):
    def is_valid(self) -> bool:
        ...


@runtime_checkable
class NamedValueChecker(Protocol):
    def check_named_value(self, nv: NamedValue) -> Optional[_Skip]:
        ...


@runtime_checkable
class StmtExecContext(Protocol):
    def exec_context(self, ctx: Any, args: Sequence[NamedValue]) -> Result:
        ...


@runtime_checkable
class StmtQueryContext(Protocol):
    def query_context(self, ctx: Any, args: Sequence[NamedValue]) -> Rows:
        ...


@functools.lru_cache(maxsize=None)
def _methods(capability):
    # type: (type) -> Tuple[str, ...]
    return tuple(
        name
        for name, value in vars(capability).items()
        if callable(value) and not name.startswith("_")
    )


def probe(obj, capability):
    # type: (Any, Type[T]) -> Optional[T]
    """Return ``obj`` if it provides every method of ``capability``, ``None`` otherwise.

    The lookup is dynamic so that proxies forwarding attribute access (``wrapt``
    proxies, ``mock`` objects) are probed on what they actually expose.
    """
    for name in _methods(capability):
        if not callable(getattr(obj, name, None)):
            return None
    return obj
