from __future__ import annotations

from typing import Iterable, Optional, Tuple

import cv2
import numpy as np

from moondream_client.schemas.results import BoundingBox, Point

DEFAULT_COLOR: Tuple[int, int, int] = (0, 255, 0)


def draw_boxes(
    image_bgr: np.ndarray,
    objects: Iterable[BoundingBox],
    label: Optional[str] = None,
    color: Tuple[int, int, int] = DEFAULT_COLOR,
) -> np.ndarray:
    """Draw normalized bounding boxes onto a BGR image and return a copy.

    - image_bgr: OpenCV image (H, W, 3) in BGR.
    - objects: boxes from a DetectResult.
    - label: optional text drawn above each box (e.g. the detected object).
    """
    out = image_bgr.copy()
    h, w = out.shape[:2]
    for box in objects:
        x1, y1, x2, y2 = box.to_xyxy(w, h)
        cv2.rectangle(out, (x1, y1), (x2, y2), color, 2)
        if label:
            (tw, th), baseline = cv2.getTextSize(label, cv2.FONT_HERSHEY_SIMPLEX, 0.5, 1)
            ty = max(th + 4, y1)
            cv2.rectangle(out, (x1, ty - th - 4), (x1 + tw + 2, ty + baseline - 4), (0, 0, 0), -1)
            cv2.putText(out, label, (x1 + 1, ty - 5), cv2.FONT_HERSHEY_SIMPLEX, 0.5, (255, 255, 255), 1, cv2.LINE_AA)
    return out


def draw_points(
    image_bgr: np.ndarray,
    points: Iterable[Point],
    color: Tuple[int, int, int] = DEFAULT_COLOR,
    radius: int = 6,
) -> np.ndarray:
    """Draw normalized points as filled circles and return a copy."""
    out = image_bgr.copy()
    h, w = out.shape[:2]
    for p in points:
        cx, cy = p.to_pixels(w, h)
        cv2.circle(out, (cx, cy), radius, color, -1, cv2.LINE_AA)
        # Outline keeps the marker visible on light backgrounds
        cv2.circle(out, (cx, cy), radius, (0, 0, 0), 1, cv2.LINE_AA)
    return out
