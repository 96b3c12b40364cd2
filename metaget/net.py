import logging
from contextlib import contextmanager
from typing import Any, Iterator

import urllib3
from urllib3.util.retry import Retry
from urllib3 import exceptions as urllib3_exc

from .config import ExtractorConfig
from .errors import FetchFailed, InvalidURL, UnexpectedStatus
from .types import ResponseProtocol, TransportProtocol


ALLOWED_PREFIXES = ("http://", "https://")


class HttpTransport:
    """urllib3 pool that follows redirects and never retries a failed request."""

    def __init__(self, config: ExtractorConfig):
        self.timeout = urllib3.Timeout(connect=config.connect_timeout, read=config.request_timeout)
        # Redirects are followed; connection, read and status failures are final.
        self.retries = Retry(
            total=None,
            connect=0,
            read=0,
            status=0,
            other=0,
            redirect=config.max_redirects,
            raise_on_status=False,
        )
        self.http = urllib3.PoolManager(maxsize=config.max_connections)

    def request(self, method: str, url: str, **kwargs: Any) -> urllib3.BaseHTTPResponse:
        kwargs.setdefault("timeout", self.timeout)
        kwargs.setdefault("retries", self.retries)
        return self.http.request(method, url, **kwargs)


def build_transport(config: ExtractorConfig | None = None) -> HttpTransport:
    return HttpTransport(config or ExtractorConfig())


class Fetcher:
    def __init__(self, transport: TransportProtocol):
        self.transport = transport

    @contextmanager
    def fetch(self, url: str) -> Iterator[ResponseProtocol]:
        """Yield the body stream of a 200 response to a single GET of ``url``.

        The response is released when the ``with`` block exits, whether the
        body was consumed or an error interrupted it.
        """
        if not url.startswith(ALLOWED_PREFIXES):
            raise InvalidURL(url)
        logging.debug("GET %s", url)
        try:
            response = self.transport.request("GET", url, preload_content=False)
        except (urllib3_exc.HTTPError, OSError) as exc:
            raise FetchFailed(url, exc) from exc
        try:
            logging.debug("GET %s -> %d", url, response.status)
            if response.status != 200:
                raise UnexpectedStatus(url, response.status)
            yield response
        finally:
            response.release_conn()
