import httpx
import pytest

from streetfinder.core import http
from streetfinder.core.errors import ParseError, TransportError


def _patch_transport(monkeypatch, handler):
    real_client = httpx.Client

    def client_factory(**kwargs):
        return real_client(transport=httpx.MockTransport(handler), **kwargs)

    monkeypatch.setattr(http.httpx, "Client", client_factory)


def test_get_xml_returns_root_element(monkeypatch):
    seen: dict[str, str] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["ua"] = request.headers["User-Agent"]
        return httpx.Response(200, content=b"<root><child/></root>")

    _patch_transport(monkeypatch, handler)

    root = http.get_xml("https://example.test/wfs")

    assert root.tag == "root"
    assert seen["ua"] == http.DEFAULT_USER_AGENT


def test_get_xml_maps_http_status_to_transport_error(monkeypatch):
    _patch_transport(monkeypatch, lambda request: httpx.Response(503, content=b"busy"))

    with pytest.raises(TransportError) as excinfo:
        http.get_xml("https://example.test/wfs")
    assert isinstance(excinfo.value.__cause__, httpx.HTTPStatusError)


def test_get_xml_maps_connection_failure_to_transport_error(monkeypatch):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    _patch_transport(monkeypatch, handler)

    with pytest.raises(TransportError):
        http.get_xml("https://example.test/wfs")


def test_get_xml_maps_malformed_body_to_parse_error(monkeypatch):
    _patch_transport(monkeypatch, lambda request: httpx.Response(200, content=b"<root><unclosed></root>"))

    with pytest.raises(ParseError):
        http.get_xml("https://example.test/wfs")
