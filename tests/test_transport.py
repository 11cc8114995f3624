"""Unit tests for the HTTP chat transport."""
import json

import httpx
import pytest
from pytest_httpx import HTTPXMock

from heavengpt.chat import (
    ChatTransport,
    DecodeError,
    EmptyBodyError,
    HTTPStatusError,
    HttpChatTransport,
    InvalidEndpointError,
    RequestBuilder,
    ServerResponse,
    TransportError,
)
from heavengpt.chat.http import build_endpoint


@pytest.fixture
def request_body():
    return RequestBuilder(system_prompt="sys").build("Hi there")


class TestTransportInterface:
    def test_transport_is_abstract(self):
        with pytest.raises(TypeError):
            ChatTransport()  # type: ignore


class TestBuildEndpoint:
    @pytest.mark.parametrize(
        ("base_url", "expected"),
        [
            ("https://chat.example.com", "https://chat.example.com/chat/completions"),
            ("https://chat.example.com/", "https://chat.example.com/chat/completions"),
            ("http://localhost:8000/v1", "http://localhost:8000/v1/chat/completions"),
            ("http://localhost:8000/v1/", "http://localhost:8000/v1/chat/completions"),
            ("https://chat.example.com/v1?key=1", "https://chat.example.com/v1/chat/completions?key=1"),
        ],
    )
    def test_appends_completions_path(self, base_url, expected):
        assert build_endpoint(base_url) == expected

    @pytest.mark.parametrize("base_url", ["", "not a url", "ftp://example.com", "https://"])
    def test_rejects_unusable_urls(self, base_url):
        with pytest.raises(InvalidEndpointError):
            build_endpoint(base_url)

    def test_transport_validates_on_construction(self):
        with pytest.raises(InvalidEndpointError):
            HttpChatTransport("example.com")


class TestHttpChatTransport:
    @pytest.mark.asyncio
    async def test_success_decodes_choices(
        self, httpx_mock: HTTPXMock, base_url, endpoint, request_body, hello_payload
    ):
        httpx_mock.add_response(url=endpoint, method="POST", json=hello_payload)

        async with HttpChatTransport(base_url) as transport:
            response = await transport.complete(request_body)

        assert isinstance(response, ServerResponse)
        assert response.choices[0].message.content == "Hello"

    @pytest.mark.asyncio
    async def test_posts_json_with_content_type(
        self, httpx_mock: HTTPXMock, base_url, endpoint, request_body, hello_payload
    ):
        httpx_mock.add_response(url=endpoint, method="POST", json=hello_payload)

        async with HttpChatTransport(base_url) as transport:
            await transport.complete(request_body)

        sent = httpx_mock.get_request()
        assert sent.headers["Content-Type"] == "application/json"
        body = json.loads(sent.content)
        assert body["stream"] is False
        assert body["model"] == "gpt-3.5-turbo"
        assert body["messages"][-1] == {"role": "user", "content": "Hi there"}

    @pytest.mark.asyncio
    async def test_extra_response_keys_are_ignored(
        self, httpx_mock: HTTPXMock, base_url, endpoint, request_body
    ):
        httpx_mock.add_response(
            url=endpoint,
            json={
                "id": "chatcmpl-1",
                "usage": {"total_tokens": 12},
                "choices": [
                    {"index": 0, "finish_reason": "stop", "message": {"role": "assistant", "content": "A"}},
                    {"index": 1, "finish_reason": "stop", "message": {"role": "assistant", "content": "B"}},
                ],
            },
        )

        async with HttpChatTransport(base_url) as transport:
            response = await transport.complete(request_body)

        assert [c.message.content for c in response.choices] == ["A", "B"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [201, 400, 404, 500, 503])
    async def test_non_200_raises_status_error(
        self, httpx_mock: HTTPXMock, base_url, endpoint, request_body, status
    ):
        httpx_mock.add_response(url=endpoint, status_code=status, text="nope")

        async with HttpChatTransport(base_url) as transport:
            with pytest.raises(HTTPStatusError) as exc_info:
                await transport.complete(request_body)

        assert exc_info.value.status_code == status
        assert exc_info.value.response_body == "nope"

    @pytest.mark.asyncio
    async def test_empty_body_raises(self, httpx_mock: HTTPXMock, base_url, endpoint, request_body):
        httpx_mock.add_response(url=endpoint, status_code=200, content=b"")

        async with HttpChatTransport(base_url) as transport:
            with pytest.raises(EmptyBodyError):
                await transport.complete(request_body)

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "content",
        [
            b"not json",
            b'{"choices": "nope"}',
            b'{"choices": [{"message": {"role": "assistant"}}]}',
            b'{"result": "hello"}',
        ],
    )
    async def test_malformed_body_raises_decode_error(
        self, httpx_mock: HTTPXMock, base_url, endpoint, request_body, content
    ):
        httpx_mock.add_response(url=endpoint, content=content)

        async with HttpChatTransport(base_url) as transport:
            with pytest.raises(DecodeError):
                await transport.complete(request_body)

    @pytest.mark.asyncio
    async def test_connection_failure_raises_transport_error(
        self, httpx_mock: HTTPXMock, base_url, request_body
    ):
        httpx_mock.add_exception(httpx.ConnectError("connection refused"))

        async with HttpChatTransport(base_url) as transport:
            with pytest.raises(TransportError, match="connection refused"):
                await transport.complete(request_body)

    @pytest.mark.asyncio
    async def test_timeout_raises_transport_error(self, httpx_mock: HTTPXMock, base_url, request_body):
        httpx_mock.add_exception(httpx.ReadTimeout("too slow"))

        async with HttpChatTransport(base_url) as transport:
            with pytest.raises(TransportError, match="timed out"):
                await transport.complete(request_body)
