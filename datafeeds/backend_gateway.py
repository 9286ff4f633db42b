"""Trading backend gateway.

The only component that talks to the bot backend. Every call returns a
GatewayResult; transport and decoding failures are absorbed here, logged,
and surfaced to the user as a single "Cannot connect" notification.
No retries: callers poll again on their own cadence.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

import httpx

from core.config import settings
from core.helpers.reasons import FailureKind
from core.logging_utils import get_logger
from core.notifications import NotificationChannel

logger = get_logger(__name__)


class Endpoint(str, Enum):
    """Logical backend endpoints and their paths."""
    MARKET_STATUS = "/market-status"
    START = "/start"
    STOP = "/stop"
    SCAN = "/scan"
    SQUAREOFF = "/squareoff"
    PORTFOLIO = "/portfolio"
    TRADES = "/trades"
    SIGNALS = "/signals"

    @property
    def path(self) -> str:
        return self.value


@dataclass(frozen=True)
class GatewayResult:
    """Decoded JSON payload or a typed failure."""
    endpoint: str
    ok: bool
    data: Any = None
    error: Optional[FailureKind] = None
    detail: str = ""

    @classmethod
    def success(cls, endpoint: str, data: Any) -> "GatewayResult":
        return cls(endpoint=endpoint, ok=True, data=data)

    @classmethod
    def failure(cls, endpoint: str, detail: str) -> "GatewayResult":
        return cls(endpoint=endpoint, ok=False, error=FailureKind.UNREACHABLE, detail=detail)


class BackendGateway:
    """Thin async request/response wrapper over the trading backend."""

    def __init__(
        self,
        notifier: NotificationChannel,
        base_url: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.notifier = notifier
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        self._client = client
        self._owns_client = client is None

        # Stats
        self.requests = 0
        self.failures = 0

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create the httpx client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers={"Content-Type": "application/json"},
            )
            self._owns_client = True
        return self._client

    async def close(self):
        """Close the client (process teardown)."""
        if self._client is not None and self._owns_client and not self._client.is_closed:
            await self._client.aclose()

    async def call(self, endpoint: Endpoint | str, method: str = "GET") -> GatewayResult:
        """Issue one request. Never raises for transport or decoding failures."""
        path = endpoint.path if isinstance(endpoint, Endpoint) else str(endpoint)
        method = method.upper()
        if method not in ("GET", "POST"):
            raise ValueError(f"Unsupported method: {method}")

        self.requests += 1
        try:
            client = self._get_client()
            resp = await client.request(method, path, headers={"Content-Type": "application/json"})
            resp.raise_for_status()
            data = resp.json()
        except httpx.HTTPStatusError as e:
            return self._fail(path, method, f"HTTP {e.response.status_code}")
        except httpx.HTTPError as e:
            return self._fail(path, method, f"{type(e).__name__}: {e}")
        except ValueError as e:
            # Body was not JSON
            return self._fail(path, method, f"invalid JSON: {e}")

        logger.debug("[GATEWAY] %s %s ok", method, path)
        return GatewayResult.success(path, data)

    async def get(self, endpoint: Endpoint | str) -> GatewayResult:
        return await self.call(endpoint, "GET")

    async def post(self, endpoint: Endpoint | str) -> GatewayResult:
        return await self.call(endpoint, "POST")

    def _fail(self, path: str, method: str, detail: str) -> GatewayResult:
        self.failures += 1
        logger.warning("[GATEWAY] %s %s failed: %s", method, path, detail)
        self.notifier.error("Error", "Cannot connect to backend!")
        return GatewayResult.failure(path, detail)

    def get_stats(self) -> dict:
        return {
            "requests": self.requests,
            "failures": self.failures,
            "base_url": self.base_url,
        }
