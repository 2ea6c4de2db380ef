from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Iterable, Optional, Tuple, TypeVar

import requests

from moondream_client.config import AUTH_HEADER, ClientConfig
from moondream_client.schemas.results import (
    CaptionLength,
    CaptionResult,
    DetectResult,
    PointsResult,
    QueryResult,
)
from moondream_client.services.errors import TransportError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class MoondreamClient:
    """HTTP client for the Moondream vision API.

    Responsibilities:
    - Build and send requests to the `/point`, `/detect`, `/caption` and `/query` endpoints
    - Map JSON responses into typed result objects
    - Surface every transport or decoding failure as `TransportError`

    Usage:
        client = MoondreamClient.remote(os.environ["MOONDREAM_API_KEY"])
        res = client.caption("https://example.com/image.jpg", CaptionLength.SHORT)

    Instances are immutable; the `with_*` builders return a new client that
    shares the same pooled `requests.Session`.
    """

    def __init__(self, config: Optional[ClientConfig] = None, session: Optional[requests.Session] = None) -> None:
        self._config = config or ClientConfig()
        self._session = session or requests.Session()

    @classmethod
    def local(cls, endpoint: str, session: Optional[requests.Session] = None) -> "MoondreamClient":
        """Client for an unauthenticated local deployment at `endpoint`."""
        return cls(ClientConfig(token="").with_endpoint(endpoint), session=session)

    @classmethod
    def remote(cls, token: str, session: Optional[requests.Session] = None) -> "MoondreamClient":
        """Client for the hosted service, authenticated with `token`."""
        return cls(ClientConfig(token=token), session=session)

    # -- configuration -------------------------------------------------

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def token(self) -> str:
        return self._config.token

    @property
    def endpoint(self) -> str:
        return self._config.endpoint

    @property
    def headers(self) -> Tuple[Tuple[str, str], ...]:
        return self._config.headers

    @property
    def timeout(self) -> float:
        return self._config.timeout

    def with_endpoint(self, endpoint: str) -> "MoondreamClient":
        return MoondreamClient(self._config.with_endpoint(endpoint), session=self._session)

    def with_timeout(self, timeout: float) -> "MoondreamClient":
        return MoondreamClient(self._config.with_timeout(timeout), session=self._session)

    def with_headers(self, headers: Iterable[Tuple[str, str]]) -> "MoondreamClient":
        return MoondreamClient(self._config.with_headers(headers), session=self._session)

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> "MoondreamClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"MoondreamClient(endpoint={self.endpoint!r}, timeout={self.timeout!r})"

    # -- operations ----------------------------------------------------

    def points(self, image: str, object: str) -> PointsResult:
        """Locate the centre point of every `object` in the image."""
        return self._post("point", {"image_url": image, "object": object}, PointsResult.from_dict)

    def detect(self, image: str, object: str) -> DetectResult:
        """Return bounding boxes for every `object` in the image."""
        return self._post("detect", {"image_url": image, "object": object}, DetectResult.from_dict)

    def caption(self, image: str, length: Optional[CaptionLength] = None) -> CaptionResult:
        """Caption the image. `length` defaults to `CaptionLength.NORMAL`."""
        length = CaptionLength(length) if length is not None else CaptionLength.NORMAL
        return self._post("caption", {"image_url": image, "length": length.value}, CaptionResult.from_dict)

    def query(self, image: str, question: str) -> QueryResult:
        """Answer a free-form `question` about the image."""
        return self._post("query", {"image_url": image, "question": question}, QueryResult.from_dict)

    # -- transport -----------------------------------------------------

    def _headers(self) -> Dict[str, str]:
        headers: Dict[str, str] = {AUTH_HEADER: self._config.token}
        for name, value in self._config.headers:
            headers[name] = value
        return headers

    def _post(self, suffix: str, payload: Dict[str, Any], parse: Callable[[Any], T]) -> T:
        url = f"{self._config.endpoint}/{suffix}"
        logger.debug("POST %s", url)
        try:
            r = self._session.post(url, json=payload, headers=self._headers(), timeout=self._config.timeout)
        except requests.RequestException as exc:
            logger.warning("Request to %s failed: %s", url, exc)
            raise TransportError(f"Moondream error: {exc}") from exc

        try:
            r.raise_for_status()
        except requests.HTTPError as exc:
            logger.warning("Request to %s returned HTTP %s", url, r.status_code)
            raise TransportError.from_response(r, exc) from exc
        # raise_for_status only covers 4xx/5xx
        if not 200 <= r.status_code < 300:
            raise TransportError(f"Moondream error: unexpected HTTP status {r.status_code}", status_code=r.status_code)

        try:
            return parse(r.json())
        except (ValueError, TypeError, KeyError, OverflowError) as exc:
            logger.warning("Unexpected response body from %s: %s", url, exc)
            raise TransportError(f"Moondream error: invalid response body: {exc}", status_code=r.status_code) from exc
