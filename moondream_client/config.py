from __future__ import annotations

"""Client configuration and CLI defaults.

`ClientConfig` is the immutable connection configuration held by
`MoondreamClient`. `Config` reads environment variables for the CLI.
"""

from dataclasses import dataclass, field, replace
import os
from typing import Iterable, Optional, Tuple

DEFAULT_ENDPOINT = "https://api.moondream.ai/v1"
DEFAULT_TIMEOUT = 5.0
AUTH_HEADER = "X-Moondream-Auth"


@dataclass(frozen=True)
class ClientConfig:
    # Set only at construction
    token: str = ""
    endpoint: str = DEFAULT_ENDPOINT
    # Ordered (name, value) pairs sent after the auth header
    headers: Tuple[Tuple[str, str], ...] = ()
    # Seconds
    timeout: float = DEFAULT_TIMEOUT

    def with_endpoint(self, endpoint: str) -> "ClientConfig":
        if endpoint.endswith("/"):
            endpoint = endpoint[:-1]
        return replace(self, endpoint=endpoint)

    def with_timeout(self, timeout: float) -> "ClientConfig":
        return replace(self, timeout=float(timeout))

    def with_headers(self, headers: Iterable[Tuple[str, str]]) -> "ClientConfig":
        return replace(self, headers=tuple((str(k), str(v)) for k, v in headers))


@dataclass(frozen=True)
class Config:
    api_url: Optional[str] = field(default_factory=lambda: os.getenv("MOONDREAM_ENDPOINT"))
    api_token: Optional[str] = field(default_factory=lambda: os.getenv("MOONDREAM_API_KEY"))
    timeout: float = DEFAULT_TIMEOUT
