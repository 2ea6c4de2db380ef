from __future__ import annotations

"""Interfaces (Protocols) for service components.

Callers such as the CLI depend on these rather than on `MoondreamClient`.
"""

from typing import Optional, Protocol

from moondream_client.schemas.results import (
    CaptionLength,
    CaptionResult,
    DetectResult,
    PointsResult,
    QueryResult,
)


class VisionClient(Protocol):
    def points(self, image: str, object: str) -> PointsResult: ...
    def detect(self, image: str, object: str) -> DetectResult: ...
    def caption(self, image: str, length: Optional[CaptionLength] = None) -> CaptionResult: ...
    def query(self, image: str, question: str) -> QueryResult: ...
