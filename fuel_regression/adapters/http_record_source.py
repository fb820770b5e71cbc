# fuel_regression/adapters/http_record_source.py
from __future__ import annotations

from typing import Any, Dict, List

import httpx

from fuel_regression.utils.logger import logs
from fuel_regression.utils.retry import AsyncRetry
from fuel_regression.utils.errors import DataUnavailableError


class HttpRecordSource:
    """
    Downloads a JSON array of records over HTTP(S).

    - transport / status / JSON errors -> DataUnavailableError
    - max_attempts > 1 retries inside this adapter only
    """

    def __init__(
        self,
        url: str,
        *,
        timeout: float = 10.0,
        max_attempts: int = 1,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.url = url
        self.timeout = timeout
        self.max_attempts = max_attempts
        self._transport = transport

    @classmethod
    def from_config(cls, cfg) -> "HttpRecordSource":
        return cls(cfg.url, timeout=cfg.timeout, max_attempts=cfg.max_attempts)

    async def fetch(self) -> List[Dict[str, Any]]:
        try:
            payload = await AsyncRetry.run(
                self._get,
                exceptions=(httpx.TransportError, httpx.HTTPStatusError),
                max_attempts=self.max_attempts,
                delay=0.5,
            )
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise DataUnavailableError(f"GET {self.url} failed: {e}") from e
        except ValueError as e:
            raise DataUnavailableError(f"GET {self.url}: invalid JSON: {e}") from e

        if not isinstance(payload, list):
            raise DataUnavailableError(
                f"GET {self.url}: expected a JSON array, got {type(payload).__name__}"
            )

        logs.info(f"[HttpRecordSource] {len(payload)} records from {self.url}")
        return payload

    async def _get(self) -> Any:
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            response = await client.get(self.url)
            response.raise_for_status()
            return response.json()
