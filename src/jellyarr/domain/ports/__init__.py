from .lifecycle import ShutdownCallback, ShutdownHooksPort
from .transport import HttpTransportPort

__all__ = [
    "HttpTransportPort",
    "ShutdownCallback",
    "ShutdownHooksPort",
]
