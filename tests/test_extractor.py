import io
import socket

import pytest
from urllib3 import HTTPResponse
from urllib3 import exceptions as urllib3_exc

from metaget.config import ExtractorConfig
from metaget.errors import InvalidURL, ParseFailed, UnexpectedStatus
from metaget.extractor import Extractor
from metaget.net import HttpTransport
from metaget.types import MetaTag


PAGE = b"""<!doctype html>
<html><head>
  <meta charset="utf-8">
  <meta name="description" content="A test page">
  <meta property="og:title" content="Test">
  <meta name="robots">
</head><body><p>hi</p></body></html>
"""


class StubTransport:
    def __init__(self, pages: dict[str, tuple[int, bytes]]):
        self.pages = pages
        self.calls = 0

    def request(self, method, url, **kwargs):
        self.calls += 1
        status, body = self.pages.get(url, (404, b""))
        return HTTPResponse(body=io.BytesIO(body), status=status, preload_content=False)


class ReleaseTrackingResponse:
    status = 200

    def __init__(self):
        self.released = False

    def read(self, amt=None):
        raise urllib3_exc.ProtocolError("Connection broken")

    def release_conn(self):
        self.released = True


def test_extract_from_url():
    transport = StubTransport({"https://example.com/": (200, PAGE)})
    tags = Extractor(transport=transport).extract("https://example.com/")
    assert tags == [MetaTag("description", "A test page"), MetaTag("og:title", "Test")]
    assert transport.calls == 1


def test_invalid_scheme_never_touches_transport():
    transport = StubTransport({})
    with pytest.raises(InvalidURL):
        Extractor(transport=transport).extract("ftp://example.com")
    assert transport.calls == 0


def test_404_skips_extraction():
    transport = StubTransport({})
    ex = Extractor(transport=transport)

    class NoExtract:
        def extract(self, stream):
            pytest.fail("extraction must not run")

    ex.meta = NoExtract()
    with pytest.raises(UnexpectedStatus) as excinfo:
        ex.extract("http://example.com/missing")
    assert excinfo.value.status_code == 404


def test_broken_body_is_parse_failed_and_released():
    response = ReleaseTrackingResponse()

    class Transport:
        def request(self, method, url, **kwargs):
            return response

    with pytest.raises(ParseFailed):
        Extractor(transport=Transport()).extract("https://example.com")
    assert response.released


def test_extract_from_stream_without_io():
    ex = Extractor(transport=StubTransport({}))
    assert ex.extract_from(PAGE) == ex.extract_from(io.BytesIO(PAGE))
    assert len(ex.extract_from(PAGE)) == 2


def test_repeated_calls_are_independent():
    transport = StubTransport({"https://example.com/": (200, PAGE)})
    ex = Extractor(transport=transport)
    assert ex.extract("https://example.com/") == ex.extract("https://example.com/")
    assert transport.calls == 2


def test_default_transport_built_from_config():
    ex = Extractor(config=ExtractorConfig(request_timeout=2.5))
    assert isinstance(ex.transport, HttpTransport)
    assert ex.transport.timeout.read_timeout == 2.5
    assert ex.meta.parser == "html5lib"


class StallingBody:
    closed = False

    def read(self, amt=None):
        raise socket.timeout("timed out")


def test_body_read_timeout_is_parse_failed():
    class Transport:
        def request(self, method, url, **kwargs):
            return HTTPResponse(body=StallingBody(), status=200, preload_content=False)

    with pytest.raises(ParseFailed) as excinfo:
        Extractor(transport=Transport()).extract("https://example.com/slow")
    assert isinstance(excinfo.value.cause, urllib3_exc.ReadTimeoutError)
