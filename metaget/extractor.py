import logging
from typing import BinaryIO, List, Optional, Union

from .config import ExtractorConfig
from .net import Fetcher, build_transport
from .parsing import MetaExtractor
from .types import MetaTag, TransportProtocol


class Extractor:
    """Fetches a page over HTTP(S) and returns its meta tags in document order.

    ``transport`` is anything with a urllib3-style ``request(method, url, **kw)``
    method; when omitted a pooled urllib3 transport is built from ``config``.
    Instances hold no per-call state, so one extractor can serve concurrent
    calls as long as its transport can.
    """

    def __init__(self, transport: Optional[TransportProtocol] = None, config: Optional[ExtractorConfig] = None):
        self.config = config or ExtractorConfig()
        self.transport = transport if transport is not None else build_transport(self.config)
        self.fetcher = Fetcher(self.transport)
        self.meta = MetaExtractor(self.config.parser)

    def extract(self, url: str) -> List[MetaTag]:
        with self.fetcher.fetch(url) as body:
            tags = self.meta.extract(body)
        logging.info("Extracted %d meta tags from %s", len(tags), url)
        return tags

    def extract_from(self, stream: Union[bytes, BinaryIO]) -> List[MetaTag]:
        return self.meta.extract(stream)
