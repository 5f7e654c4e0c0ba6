"""Cancellable request scopes handed to the context-aware operations of the SPI.

The decorator never looks inside a context; it only passes it along. Drivers
check :meth:`Context.err` (or wait on it) to honor cancellation and deadlines.
"""
import threading
import time
from typing import Optional
import weakref

from sqltrace.driver import Error


class Canceled(Error):
    def __init__(self):
        super(Canceled, self).__init__("context canceled")


class DeadlineExceeded(Error):
    def __init__(self):
        super(DeadlineExceeded, self).__init__("context deadline exceeded")


class Context(object):
    __slots__ = ("_parent", "_deadline", "_done", "_err", "_children", "_lock", "__weakref__")

    def __init__(self, parent=None, deadline=None):
        # type: (Optional[Context], Optional[float]) -> None
        self._parent = parent
        if parent is not None and parent.deadline is not None:
            deadline = parent.deadline if deadline is None else min(deadline, parent.deadline)
        self._deadline = deadline
        self._done = threading.Event()
        self._err = None  # type: Optional[Error]
        # children are held weakly so that scopes nobody refers to any more
        # do not accumulate under a long-lived parent
        self._children = weakref.WeakSet()  # type: weakref.WeakSet[Context]
        self._lock = threading.Lock()
        if parent is not None:
            parent._attach(self)

    @property
    def deadline(self):
        # type: () -> Optional[float]
        """Monotonic time after which the context expires, if any."""
        return self._deadline

    def _attach(self, child):
        # type: (Context) -> None
        with self._lock:
            err = self._err
            if err is None:
                siblings = list(self._children)
                self._children.add(child)
        if err is not None:
            child._finish(err)
            return
        # release siblings whose deadline passed unobserved
        for sibling in siblings:
            sibling._expire()

    def _finish(self, err):
        # type: (Error) -> None
        with self._lock:
            if self._err is not None:
                return
            self._err = err
            children = list(self._children)
            self._children.clear()
        self._done.set()
        for child in children:
            child._finish(err)
        if self._parent is not None:
            self._parent._detach(self)

    def _detach(self, child):
        # type: (Context) -> None
        with self._lock:
            self._children.discard(child)

    def _expire(self):
        # type: () -> None
        if self._deadline is not None and self._err is None and time.monotonic() >= self._deadline:
            self._finish(DeadlineExceeded())

    def cancel(self):
        # type: () -> None
        """Cancel the context and its children, and release it from its parent."""
        self._finish(Canceled())

    def done(self):
        # type: () -> bool
        self._expire()
        return self._done.is_set()

    def err(self):
        # type: () -> Optional[Error]
        """``None`` while the context is live, the cancellation cause afterwards."""
        self._expire()
        return self._err

    def wait(self, timeout=None):
        # type: (Optional[float]) -> bool
        """Block until the context is done or ``timeout`` seconds elapse. Return :meth:`done`."""
        if self._deadline is not None:
            remaining = max(self._deadline - time.monotonic(), 0.0)
            timeout = remaining if timeout is None else min(timeout, remaining)
        self._done.wait(timeout)
        return self.done()

    def __repr__(self):
        return "Context(deadline=%r, err=%r)" % (self._deadline, self._err)


class _Background(Context):
    __slots__ = ()

    def _attach(self, child):
        pass

    def cancel(self):
        pass


_BACKGROUND = _Background()


def background():
    # type: () -> Context
    """The root context: never canceled, no deadline."""
    return _BACKGROUND


def with_cancel(parent):
    # type: (Context) -> Context
    return Context(parent)


def with_timeout(parent, seconds):
    # type: (Context, float) -> Context
    return Context(parent, deadline=time.monotonic() + seconds)
