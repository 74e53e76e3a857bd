r"""Unit tests for the retryify decorator factory."""

from __future__ import annotations

import inspect
from unittest.mock import AsyncMock, Mock, call

import pytest

from aretryify import RetryingProxy, RetryPolicy, retryify


class BaseClient:
    base_url = "https://api.example.com"

    def __init__(self) -> None:
        self.token = "expired"
        self.calls: list[str] = []

    async def get(self, path: str) -> str:
        self.calls.append(path)
        if self.token == "expired":
            msg = f"unauthorized: {path}"
            raise PermissionError(msg)
        return f"GET {path}"


class Client(BaseClient):
    async def refresh(self) -> None:
        self.token = "fresh"

    def _sign(self, payload: str) -> str:
        return f"{self.token}:{payload}"

    def version(self) -> str:
        return "1.0"


#############################################
#     Tests for callables                   #
#############################################


@pytest.mark.asyncio
async def test_retryify_function(mock_asleep: Mock) -> None:  # noqa: ARG001
    operation = AsyncMock(side_effect=[ValueError(), "ok"])
    decorated = retryify(operation, max_retries=1)

    assert await decorated("x") == "ok"
    assert operation.call_args_list == [call("x"), call("x")]


def test_retryify_function_keeps_metadata() -> None:
    async def download(url: str, *, retries: int = 0) -> bytes:
        """Download a file."""
        return b""

    decorated = retryify(download)

    assert decorated.__name__ == "download"
    assert decorated.__doc__ == "Download a file."
    assert inspect.iscoroutinefunction(decorated)
    assert inspect.signature(decorated) == inspect.signature(download)


@pytest.mark.asyncio
async def test_retryify_as_decorator(mock_asleep: Mock) -> None:
    calls = []

    @retryify(max_retries=2, retry_delay=lambda attempt: attempt * 2.0)
    async def flaky() -> str:
        calls.append(1)
        if len(calls) < 3:
            raise ConnectionError
        return "ok"

    assert await flaky() == "ok"
    assert len(calls) == 3
    assert mock_asleep.call_args_list == [call(2.0), call(4.0)]


@pytest.mark.asyncio
async def test_retryify_policy_object(mock_asleep: Mock) -> None:  # noqa: ARG001
    operation = AsyncMock(side_effect=ValueError("down"))
    decorated = retryify(operation, RetryPolicy(max_retries=2))

    with pytest.raises(ValueError, match=r"down"):
        await decorated()
    assert operation.await_count == 3


@pytest.mark.asyncio
async def test_retryify_policy_mapping_with_override(mock_asleep: Mock) -> None:  # noqa: ARG001
    operation = AsyncMock(side_effect=ValueError("down"))
    decorated = retryify(operation, {"max_retries": 5}, max_retries=0)

    with pytest.raises(ValueError, match=r"down"):
        await decorated()
    operation.assert_awaited_once()


def test_retryify_unknown_option_does_not_raise() -> None:
    async def ping() -> str:
        return "pong"

    assert callable(retryify(ping, retries=3))


#############################################
#     Tests for mappings                    #
#############################################


@pytest.mark.asyncio
async def test_retryify_mapping(mock_asleep: Mock) -> None:  # noqa: ARG001
    first = AsyncMock(side_effect=[ValueError(), "a"])
    second = AsyncMock(side_effect=[ValueError(), "b"])
    surface = retryify({"first": first, "second": second, "limit": 10})

    assert isinstance(surface, dict)
    assert list(surface) == ["first", "second", "limit"]
    assert await surface["first"]() == "a"
    assert await surface["second"]() == "b"
    assert surface["limit"] == 10


def test_retryify_mapping_is_not_mutated() -> None:
    operation = AsyncMock()
    target = {"operation": operation}
    surface = retryify(target)

    assert target == {"operation": operation}
    assert surface["operation"] is not operation
    assert surface is not target


def test_retryify_member_selector_error_propagates() -> None:
    with pytest.raises(RuntimeError, match=r"selector"):
        retryify({"operation": AsyncMock()}, member_selector=Mock(side_effect=RuntimeError("selector")))


#############################################
#     Tests for objects                     #
#############################################


def test_retryify_object_returns_proxy() -> None:
    client = Client()
    surface = retryify(client)

    assert isinstance(surface, RetryingProxy)
    assert surface.__wrapped__ is client
    assert repr(surface).startswith("RetryingProxy(<")


def test_retryify_object_includes_inherited_members() -> None:
    client = Client()
    surface = retryify(client)

    assert surface.base_url == "https://api.example.com"
    assert surface.token == "expired"
    assert surface.calls is client.calls
    assert callable(surface.get)
    assert callable(surface.refresh)
    assert callable(surface._sign)


def test_retryify_object_same_public_shape() -> None:
    client = Client()
    surface = retryify(client)
    public = {name for name in dir(client) if not name.startswith("__")}

    assert public <= set(vars(surface))
    for name in public:
        assert callable(getattr(surface, name)) == callable(getattr(client, name))


@pytest.mark.asyncio
async def test_retryify_object_operations_bound_to_original(mock_asleep: Mock) -> None:  # noqa: ARG001
    client = Client()

    async def refresh_token(attempt: int, args: tuple, kwargs: dict) -> None:  # noqa: ARG001
        await client.refresh()

    surface = retryify(
        client,
        max_retries=1,
        should_retry=lambda error: isinstance(error, PermissionError),
        before_retry=refresh_token,
    )

    assert await surface.get("/me") == "GET /me"
    assert client.calls == ["/me", "/me"]
    assert client.token == "fresh"


def test_retryify_object_sync_method_unchanged_result() -> None:
    client = Client()
    surface = retryify(client)

    assert surface.version() == "1.0"
    assert surface._sign("data") == "expired:data"


def test_retryify_object_member_selector() -> None:
    client = Client()
    surface = retryify(client, member_selector=lambda name: not name.startswith("_"))

    assert surface._sign == client._sign
    assert surface._sign.__func__ is Client._sign
    assert surface.get != client.get
    assert surface.get.__wrapped__ == client.get


def test_retryify_object_is_not_mutated() -> None:
    client = Client()
    before = dict(vars(client))
    retryify(client)
    assert vars(client) == before
    assert Client.get.__name__ == "get"
    assert not hasattr(Client.get, "__wrapped__")


def test_retryify_object_skips_unreadable_attributes() -> None:
    class Lazy:
        @property
        def broken(self) -> str:
            raise AttributeError("not loaded")

        async def fetch(self) -> str:
            return "ok"

    surface = retryify(Lazy())

    assert not hasattr(surface, "broken")
    assert callable(surface.fetch)
