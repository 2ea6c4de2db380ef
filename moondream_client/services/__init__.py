from .errors import TransportError
from .interfaces import VisionClient
from .moondream_client import MoondreamClient

__all__ = [
    "MoondreamClient",
    "TransportError",
    "VisionClient",
]
