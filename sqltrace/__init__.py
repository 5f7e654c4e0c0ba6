from .driver import SKIP
from .settings import config
from .traced import TracedConn
from .traced import TracedConnector
from .traced import TracedDriver
from .traced import TracedStmt
from .traced import TracedTx
from .traced import wrap_connector
from .traced import wrap_driver
from .version import __version__


__all__ = [
    "SKIP",
    "TracedConn",
    "TracedConnector",
    "TracedDriver",
    "TracedStmt",
    "TracedTx",
    "__version__",
    "config",
    "wrap_connector",
    "wrap_driver",
]
