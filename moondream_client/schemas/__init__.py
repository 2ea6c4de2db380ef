from .results import (
    BoundingBox,
    CaptionLength,
    CaptionResult,
    DetectResult,
    Point,
    PointsResult,
    QueryResult,
)

__all__ = [
    "BoundingBox",
    "CaptionLength",
    "CaptionResult",
    "DetectResult",
    "Point",
    "PointsResult",
    "QueryResult",
]
