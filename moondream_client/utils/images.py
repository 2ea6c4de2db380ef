from __future__ import annotations

"""Caller-side helpers to turn images into references the API accepts.

The client itself never encodes images; these are used by the CLI and by
callers that start from a file or an OpenCV frame.
"""

import base64
import mimetypes
from pathlib import Path
from typing import Union

import cv2
import numpy as np
import requests

_EXT_MIME = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".webp": "image/webp",
    ".bmp": "image/bmp",
}


def is_remote_url(image: str) -> bool:
    return image.startswith(("http://", "https://"))


def read_image_bgr(path: Union[str, Path]) -> np.ndarray:
    img = cv2.imread(str(path), cv2.IMREAD_COLOR)
    if img is None:
        raise RuntimeError(f"Failed to read image from path: {path}")
    return img


def read_image_bgr_from_url(url: str, timeout: float = 10.0) -> np.ndarray:
    r = requests.get(url, timeout=timeout)
    r.raise_for_status()
    data = np.frombuffer(r.content, dtype=np.uint8)
    img = cv2.imdecode(data, cv2.IMREAD_COLOR)
    if img is None:
        raise RuntimeError(f"Failed to decode image from URL: {url}")
    return img


def read_image_bgr_from_data_uri(uri: str) -> np.ndarray:
    header, sep, payload = uri.partition(",")
    if not uri.startswith("data:") or not sep or not header.endswith(";base64"):
        raise ValueError("Expected a data:<mime>;base64,<payload> URI")
    try:
        raw = base64.b64decode(payload, validate=True)
    except ValueError as exc:
        raise ValueError(f"Invalid base64 payload in data URI: {exc}") from exc
    img = cv2.imdecode(np.frombuffer(raw, dtype=np.uint8), cv2.IMREAD_COLOR)
    if img is None:
        raise RuntimeError("Failed to decode image from data URI")
    return img


def to_data_uri(image_bgr: np.ndarray, ext: str = ".jpg", quality: int = 90) -> str:
    """Encode an OpenCV BGR image as `data:<mime>;base64,<payload>`."""
    ext = ext.lower() if ext.startswith(".") else f".{ext.lower()}"
    mime = _EXT_MIME.get(ext)
    if mime is None:
        raise ValueError(f"Unsupported image extension: {ext}")
    params = [int(cv2.IMWRITE_JPEG_QUALITY), int(quality)] if mime == "image/jpeg" else []
    ok, buf = cv2.imencode(ext, image_bgr, params)
    if not ok:
        raise RuntimeError(f"{ext} encode failed")
    return _data_uri(mime, buf.tobytes())


def file_to_data_uri(path: Union[str, Path]) -> str:
    """Encode a file's raw bytes, keeping its original format."""
    path = Path(path)
    mime = _EXT_MIME.get(path.suffix.lower()) or mimetypes.guess_type(path.name)[0]
    if mime is None or not mime.startswith("image/"):
        raise ValueError(f"Cannot determine image type of {path}")
    return _data_uri(mime, path.read_bytes())


def _data_uri(mime: str, data: bytes) -> str:
    return f"data:{mime};base64,{base64.b64encode(data).decode('ascii')}"
