from __future__ import annotations

from typing import Optional

import requests


class TransportError(Exception):
    """Failure of a Moondream API call.

    Covers connection errors, timeouts, non-2xx responses and bodies that do
    not match the expected schema. The original exception is chained as
    ``__cause__``.

    - status_code: HTTP status when the server answered, else None
    - detail: best-effort error text taken from the response body, if any
    """

    def __init__(self, message: str, status_code: Optional[int] = None, detail: Optional[str] = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail

    @classmethod
    def from_response(cls, response: requests.Response, exc: Exception) -> "TransportError":
        detail = _error_detail(response)
        message = f"Moondream error: {exc}"
        if detail:
            message = f"{message} ({detail})"
        return cls(message, status_code=response.status_code, detail=detail)


def _error_detail(response: requests.Response) -> Optional[str]:
    try:
        data = response.json()
    except ValueError:
        text = (response.text or "").strip()
        return text[:200] or None
    if isinstance(data, dict):
        for key in ("error", "detail", "message"):
            value = data.get(key)
            if value:
                return str(value)
    return None
