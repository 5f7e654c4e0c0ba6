from .config import SQLTraceConfig
from .config import config


__all__ = ["SQLTraceConfig", "config"]
