from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import httpx
from pydantic import ValidationError

from src.transforms.countries import CountryRecord, transform_countries
from src.utils.logging import get_logger


logger = get_logger(component="rest_countries_client")


class CountryAPIError(Exception):
    pass


class TransportError(CountryAPIError):
    pass


class APITimeoutError(TransportError):
    pass


class APIUnexpectedStatusError(TransportError):
    def __init__(self, status_code: int, body_text: str | None = None) -> None:
        super().__init__(f"Unexpected status code: {status_code}")
        self.status_code = status_code
        self.body_text = body_text


class DecodeError(CountryAPIError):
    pass


@dataclass(frozen=True)
class APIResult:
    status_code: int
    data: Any
    headers: dict[str, str]


class RestCountriesClient:
    """
    REST Countries client
    - GET-only, single endpoint, no auth
    - timeout_seconds=None means no timeout at all
    - Async httpx
    """

    def __init__(
        self,
        *,
        base_url: str = "https://restcountries.com",
        endpoint: str = "/v3.1/all",
        timeout_seconds: float | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._endpoint = endpoint if endpoint.startswith("/") else f"/{endpoint}"
        self._timeout = float(timeout_seconds) if timeout_seconds is not None else None

        # An injected client belongs to the caller; we only close our own.
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            base_url=self._base_url,
            timeout=self._timeout,
        )

    @property
    def url(self) -> str:
        return f"{self._base_url}{self._endpoint}"

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def get_countries(self) -> APIResult:
        try:
            resp = await self._client.get(self.url)
        except httpx.TimeoutException as e:
            raise APITimeoutError("Request timeout") from e
        except httpx.RequestError as e:
            raise TransportError(f"Request error: {e}") from e

        resp_headers = {k: v for k, v in resp.headers.items()}

        if resp.status_code != 200:
            body_text: str | None
            try:
                body_text = resp.text
            except UnicodeDecodeError:
                body_text = None
            raise APIUnexpectedStatusError(resp.status_code, body_text=body_text)

        try:
            data = resp.json()
        except ValueError as e:
            raise DecodeError("Failed to parse JSON") from e

        return APIResult(status_code=resp.status_code, data=data, headers=resp_headers)

    async def fetch_all(self) -> list[CountryRecord]:
        result = await self.get_countries()
        try:
            records = transform_countries(result.data)
        except ValidationError as e:
            raise DecodeError(f"Country payload does not match the expected shape ({e.error_count()} errors)") from e
        except ValueError as e:
            raise DecodeError(str(e)) from e

        logger.info("countries_fetched", url=self.url, records=len(records))
        return records
