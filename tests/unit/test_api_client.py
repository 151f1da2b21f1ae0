from __future__ import annotations

import json
from pathlib import Path

import httpx
import pytest

from src.collector.api_client import (
    APITimeoutError,
    APIUnexpectedStatusError,
    DecodeError,
    RestCountriesClient,
    TransportError,
)


def _payload() -> list:
    p = Path(__file__).resolve().parents[1] / "fixtures" / "api_responses" / "countries.json"
    return json.loads(p.read_text(encoding="utf-8"))


def _client(handler) -> tuple[RestCountriesClient, httpx.AsyncClient]:
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return RestCountriesClient(http_client=http), http


@pytest.mark.asyncio
async def test_fetch_all_single_plain_get() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=_payload())

    client, http = _client(handler)
    records = await client.fetch_all()
    await http.aclose()

    assert len(seen) == 1
    req = seen[0]
    assert req.method == "GET"
    assert str(req.url) == "https://restcountries.com/v3.1/all"
    assert req.url.query == b""
    assert "authorization" not in req.headers
    assert len(records) == 8
    assert records[0].name == "Peru"


@pytest.mark.asyncio
async def test_fetch_all_utf8_body() -> None:
    body = '[{"name": {"common": "Perú"}, "region": "Américas", "population": 1, "area": 2}]'.encode("utf-8")

    client, http = _client(lambda request: httpx.Response(200, content=body))
    records = await client.fetch_all()
    await http.aclose()

    assert records[0].name == "Perú"
    assert records[0].region == "Américas"


@pytest.mark.asyncio
async def test_malformed_json_raises_decode_error() -> None:
    client, http = _client(lambda request: httpx.Response(200, content=b"[{not json"))
    with pytest.raises(DecodeError):
        await client.fetch_all()
    await http.aclose()


@pytest.mark.asyncio
async def test_non_array_body_raises_decode_error() -> None:
    client, http = _client(lambda request: httpx.Response(200, json={"message": "nope"}))
    with pytest.raises(DecodeError):
        await client.fetch_all()
    await http.aclose()


@pytest.mark.asyncio
async def test_missing_required_field_raises_decode_error() -> None:
    payload = _payload()
    del payload[3]["population"]
    client, http = _client(lambda request: httpx.Response(200, json=payload))
    with pytest.raises(DecodeError) as exc:
        await client.fetch_all()
    await http.aclose()

    assert exc.value.__cause__ is not None


@pytest.mark.asyncio
async def test_connection_error_raises_transport_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client, http = _client(handler)
    with pytest.raises(TransportError):
        await client.fetch_all()
    await http.aclose()


@pytest.mark.asyncio
async def test_timeout_raises_timeout_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("slow", request=request)

    client, http = _client(handler)
    with pytest.raises(APITimeoutError):
        await client.fetch_all()
    await http.aclose()


@pytest.mark.asyncio
async def test_unexpected_status_carries_body() -> None:
    client, http = _client(lambda request: httpx.Response(503, text="upstream down"))
    with pytest.raises(APIUnexpectedStatusError) as exc:
        await client.get_countries()
    await http.aclose()

    assert isinstance(exc.value, TransportError)
    assert exc.value.status_code == 503
    assert exc.value.body_text == "upstream down"


@pytest.mark.asyncio
async def test_injected_client_is_left_open() -> None:
    client, http = _client(lambda request: httpx.Response(200, json=[]))
    assert await client.fetch_all() == []
    await client.aclose()

    assert not http.is_closed
    await http.aclose()


@pytest.mark.asyncio
async def test_endpoint_normalization() -> None:
    client = RestCountriesClient(base_url="https://example.test/", endpoint="v3.1/all")
    assert client.url == "https://example.test/v3.1/all"
    await client.aclose()
