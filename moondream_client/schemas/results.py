from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Mapping, Optional, Tuple


class CaptionLength(str, Enum):
    """Length of the caption produced by the `/caption` endpoint."""

    SHORT = "short"
    NORMAL = "normal"


@dataclass(frozen=True)
class Point:
    """Centre point returned by the `/point` endpoint.

    Coordinates are normalized to the image dimensions (0..1). The server is
    trusted; out-of-range values are kept as-is.
    """

    x: float
    y: float

    def to_pixels(self, width: int, height: int) -> Tuple[int, int]:
        return int(round(self.x * width)), int(round(self.y * height))


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned box in normalized (left, top, right, bottom) form."""

    x_min: float
    y_min: float
    x_max: float
    y_max: float

    def to_xyxy(self, width: int, height: int) -> Tuple[int, int, int, int]:
        x1 = int(round(self.x_min * width))
        y1 = int(round(self.y_min * height))
        x2 = int(round(self.x_max * width))
        y2 = int(round(self.y_max * height))
        return x1, y1, x2, y2


@dataclass(frozen=True)
class PointsResult:
    request_id: Optional[str]
    points: List[Point] = field(default_factory=list)
    count: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PointsResult":
        raw = _require_list(data, "points")
        points = [Point(x=_number(p, "x"), y=_number(p, "y")) for p in raw]
        count = data.get("count")
        if count is not None:
            if isinstance(count, bool) or not isinstance(count, int):
                raise TypeError(f"'count' must be an integer, got {count!r}")
            if count < 0:
                raise ValueError(f"'count' must not be negative, got {count}")
        return cls(request_id=_request_id(data), points=points, count=count)


@dataclass(frozen=True)
class DetectResult:
    request_id: Optional[str]
    objects: List[BoundingBox] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DetectResult":
        raw = _require_list(data, "objects")
        objects = [
            BoundingBox(
                x_min=_number(o, "x_min"),
                y_min=_number(o, "y_min"),
                x_max=_number(o, "x_max"),
                y_max=_number(o, "y_max"),
            )
            for o in raw
        ]
        return cls(request_id=_request_id(data), objects=objects)


@dataclass(frozen=True)
class CaptionResult:
    request_id: Optional[str]
    caption: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CaptionResult":
        return cls(request_id=_request_id(data), caption=_string(data, "caption"))


@dataclass(frozen=True)
class QueryResult:
    request_id: Optional[str]
    answer: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "QueryResult":
        return cls(request_id=_request_id(data), answer=_string(data, "answer"))


def _require_mapping(obj: Any) -> Mapping[str, Any]:
    if not isinstance(obj, Mapping):
        raise TypeError(f"expected a JSON object, got {type(obj).__name__}")
    return obj


def _require_list(data: Mapping[str, Any], key: str) -> list:
    value = _require_mapping(data)[key]
    if not isinstance(value, list):
        raise TypeError(f"'{key}' must be a list, got {type(value).__name__}")
    return value


def _number(obj: Any, key: str) -> float:
    value = _require_mapping(obj)[key]
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"'{key}' must be a number, got {value!r}")
    try:
        return float(value)
    except OverflowError as exc:
        raise ValueError(f"'{key}' is out of range for a float") from exc


def _string(data: Mapping[str, Any], key: str) -> str:
    value = _require_mapping(data)[key]
    if not isinstance(value, str):
        raise TypeError(f"'{key}' must be a string, got {value!r}")
    return value


def _request_id(data: Mapping[str, Any]) -> Optional[str]:
    value = _require_mapping(data).get("request_id")
    if value is not None and not isinstance(value, str):
        raise TypeError(f"'request_id' must be a string, got {value!r}")
    return value
