"""
Client for the Moondream vision API.
"""

from .config import ClientConfig, DEFAULT_ENDPOINT
from .schemas.results import (
    BoundingBox,
    CaptionLength,
    CaptionResult,
    DetectResult,
    Point,
    PointsResult,
    QueryResult,
)
from .services.errors import TransportError
from .services.moondream_client import MoondreamClient

__version__ = "0.1.1"

__all__ = [
    "BoundingBox",
    "CaptionLength",
    "CaptionResult",
    "ClientConfig",
    "DEFAULT_ENDPOINT",
    "DetectResult",
    "MoondreamClient",
    "Point",
    "PointsResult",
    "QueryResult",
    "TransportError",
]
