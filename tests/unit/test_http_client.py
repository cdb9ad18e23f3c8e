"""Tests for the HTTP client."""

import httpx
import pytest

from budget_comparator.core.errors import FetchConnectionError, HttpStatusError
from budget_comparator.core.http_client import HttpClient


URL = "https://portal.example.gob.pe/Navegar.aspx?y=2024"


def client_for(handler, **kwargs) -> HttpClient:
    return HttpClient(transport=httpx.MockTransport(handler), **kwargs)


class TestHttpClient:
    """Tests for HttpClient."""

    def test_verifies_tls_by_default(self):
        """Test certificate validation is opt-out."""
        assert HttpClient().verify_tls is True
        assert HttpClient(verify_tls=False).verify_tls is False

    def test_no_timeout_by_default(self):
        """Test requests wait indefinitely unless a timeout is configured."""
        assert HttpClient().timeout is None
        assert HttpClient(timeout=5.0).timeout == 5.0

    @pytest.mark.asyncio
    async def test_context_manager(self):
        """Test the underlying client lives inside the context."""
        client = HttpClient(verify_tls=False)

        async with client:
            assert client.is_open
        assert not client.is_open

    @pytest.mark.asyncio
    async def test_requires_context(self):
        """Test calls outside the context fail."""
        with pytest.raises(RuntimeError):
            await HttpClient().get_text(URL)

    @pytest.mark.asyncio
    async def test_get_text_decodes_utf8(self):
        """Test the body is decoded as UTF-8 regardless of headers."""
        def handler(request):
            return httpx.Response(
                200,
                content="Educación".encode("utf-8"),
                headers={"Content-Type": "text/html; charset=iso-8859-1"},
            )

        async with client_for(handler) as client:
            assert await client.get_text(URL) == "Educación"

    @pytest.mark.asyncio
    async def test_invalid_utf8_replaced(self):
        """Test invalid byte sequences do not raise."""
        def handler(request):
            return httpx.Response(200, content=b"ok \xff")

        async with client_for(handler) as client:
            assert await client.get_text(URL) == "ok \ufffd"

    @pytest.mark.asyncio
    async def test_get_bytes(self):
        """Test raw body access."""
        def handler(request):
            return httpx.Response(200, content=b"<html></html>")

        async with client_for(handler) as client:
            assert await client.get_bytes(URL) == b"<html></html>"

    @pytest.mark.asyncio
    async def test_sends_headers(self):
        """Test default headers."""
        seen = {}

        def handler(request):
            seen.update(request.headers)
            return httpx.Response(200, content=b"")

        async with client_for(handler, accept_language="es-PE") as client:
            await client.get_text(URL)

        assert seen["accept-language"] == "es-PE"
        assert "Mozilla" in seen["user-agent"]

    @pytest.mark.asyncio
    async def test_follows_redirects(self):
        """Test redirects are followed."""
        def handler(request):
            if request.url.path == "/old":
                return httpx.Response(302, headers={"Location": "https://portal.example.gob.pe/new"})
            return httpx.Response(200, content=b"moved")

        async with client_for(handler) as client:
            assert await client.get_text("https://portal.example.gob.pe/old") == "moved"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status_code", [404, 500, 503])
    async def test_status_error(self, status_code):
        """Test non-2xx responses raise HttpStatusError."""
        def handler(request):
            return httpx.Response(status_code, content=b"error")

        async with client_for(handler) as client:
            with pytest.raises(HttpStatusError) as exc_info:
                await client.get_text(URL)

        assert exc_info.value.status_code == status_code
        assert str(status_code) in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, httpx.HTTPStatusError)

    @pytest.mark.asyncio
    async def test_single_attempt(self):
        """Test failures are not retried."""
        calls = []

        def handler(request):
            calls.append(request.url)
            return httpx.Response(502)

        async with client_for(handler) as client:
            with pytest.raises(HttpStatusError):
                await client.get_text(URL)

        assert len(calls) == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "exc_class",
        [httpx.ConnectError, httpx.ReadTimeout, httpx.RemoteProtocolError],
    )
    async def test_connection_error(self, exc_class):
        """Test transport failures raise FetchConnectionError."""
        def handler(request):
            raise exc_class("unreachable", request=request)

        async with client_for(handler) as client:
            with pytest.raises(FetchConnectionError) as exc_info:
                await client.get_text(URL)

        assert exc_info.value.url == URL
        assert "No se pudo conectar" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_other_errors_propagate(self):
        """Test unrelated failures are not reclassified."""
        def handler(request):
            raise ValueError("boom")

        async with client_for(handler) as client:
            with pytest.raises(ValueError, match="boom"):
                await client.get_text(URL)
