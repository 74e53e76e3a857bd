r"""Integration tests decorating a real ``httpx.AsyncClient``.

The client talks to an in-process ``httpx.MockTransport``, so no network
access is needed.
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import Mock

import httpx
import pytest

from aretryify import RetryingProxy, retryify

if TYPE_CHECKING:
    from collections.abc import Callable

BASE_URL = "https://api.example.com"


async def raise_on_error_status(response: httpx.Response) -> None:
    response.raise_for_status()


def is_unauthorized(error: Exception) -> bool:
    return isinstance(error, httpx.HTTPStatusError) and error.response.status_code == 401


def make_client(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        base_url=BASE_URL,
        transport=httpx.MockTransport(handler),
        event_hooks={"response": [raise_on_error_status]},
        headers={"Authorization": "Bearer expired"},
    )


@pytest.mark.asyncio
async def test_httpx_client_refreshes_token_on_401(mock_asleep: Mock) -> None:  # noqa: ARG001
    requests: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request.headers["Authorization"])
        if request.headers["Authorization"] != "Bearer fresh":
            return httpx.Response(401, json={"error": "token expired"})
        return httpx.Response(200, json={"name": "playlist"})

    async with make_client(handler) as client:

        def refresh_token(attempt: int, args: tuple, kwargs: dict) -> None:  # noqa: ARG001
            client.headers["Authorization"] = "Bearer fresh"

        api = retryify(
            client,
            max_retries=1,
            should_retry=is_unauthorized,
            before_retry=refresh_token,
            member_selector=lambda name: not name.startswith("_"),
        )
        response = await api.get("/playlists/1")

    assert isinstance(api, RetryingProxy)
    assert response.status_code == 200
    assert response.json() == {"name": "playlist"}
    assert requests == ["Bearer expired", "Bearer fresh"]


@pytest.mark.asyncio
async def test_httpx_client_non_retryable_status(mock_asleep: Mock) -> None:
    on_exhausted = Mock()

    def handler(request: httpx.Request) -> httpx.Response:  # noqa: ARG001
        return httpx.Response(404)

    async with make_client(handler) as client:
        api = retryify(client, should_retry=is_unauthorized, on_exhausted=on_exhausted)
        with pytest.raises(httpx.HTTPStatusError) as exc_info:
            await api.get("/missing")

    assert exc_info.value.response.status_code == 404
    mock_asleep.assert_not_called()
    on_exhausted.assert_called_once_with(exc_info.value, "/missing")


@pytest.mark.asyncio
async def test_httpx_client_transport_error_is_retried(mock_asleep: Mock) -> None:
    attempts = []

    def handler(request: httpx.Request) -> httpx.Response:
        attempts.append(request.url.path)
        if len(attempts) < 3:
            msg = "connection refused"
            raise httpx.ConnectError(msg, request=request)
        return httpx.Response(201, json={"created": True})

    async with make_client(handler) as client:
        api = retryify(
            client,
            max_retries=3,
            should_retry=lambda error: isinstance(error, httpx.TransportError),
        )
        response = await api.post("/items", json={"name": "item"})

    assert response.status_code == 201
    assert attempts == ["/items", "/items", "/items"]
    assert mock_asleep.call_count == 2


@pytest.mark.asyncio
async def test_httpx_client_shape_is_preserved() -> None:
    async with make_client(lambda request: httpx.Response(200)) as client:
        api = retryify(client, member_selector=lambda name: name in {"get", "post"})

        assert api.base_url == client.base_url
        assert api.headers is client.headers
        assert api.build_request == client.build_request
        assert api.get.__wrapped__ == client.get
        request = api.build_request("GET", "/ping")

    assert isinstance(request, httpx.Request)
    assert request.url == httpx.URL(f"{BASE_URL}/ping")
