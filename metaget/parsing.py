import logging
from typing import Any, BinaryIO, Dict, Iterator, List, Union

from bs4 import BeautifulSoup, ParserRejectedMarkup, Tag
from urllib3 import exceptions as urllib3_exc

from .config import DEFAULT_PARSER
from .errors import ParseFailed
from .types import MetaTag


NAME_KEYS = ("name", "property")
CONTENT_KEY = "content"


def iter_elements(root: Tag) -> Iterator[Tag]:
    """Depth-first pre-order walk over element nodes, children left to right."""
    stack: List[Tag] = [root]
    while stack:
        node = stack.pop()
        yield node
        children = [child for child in node.contents if isinstance(child, Tag)]
        stack.extend(reversed(children))


def meta_tag_from_element(element: Tag) -> MetaTag | None:
    # name and property share one slot: whichever comes last in the tag wins.
    name = ""
    content = ""
    for key, value in element.attrs.items():
        if key in NAME_KEYS:
            name = value
        elif key == CONTENT_KEY:
            content = value
    if not name or not content:
        return None
    return MetaTag(name=name, content=content)


def move_duplicate_to_end(attrs: Dict[str, str], key: str, value: str) -> None:
    """Keep a repeated attribute at the position where it last appeared."""
    attrs.pop(key)
    attrs[key] = value


class MetaExtractor:
    def __init__(self, parser: str = DEFAULT_PARSER):
        self.parser = parser

    def _soup_options(self) -> Dict[str, Any]:
        options: Dict[str, Any] = {"multi_valued_attributes": None}
        # Only html.parser reports repeated attributes; html5lib drops them while tokenizing.
        if self.parser == "html.parser":
            options["on_duplicate_attribute"] = move_duplicate_to_end
        return options

    def extract(self, stream: Union[bytes, BinaryIO]) -> List[MetaTag]:
        if isinstance(stream, (bytes, bytearray)):
            markup = bytes(stream)
        else:
            try:
                markup = stream.read()
            except (urllib3_exc.HTTPError, OSError) as exc:
                raise ParseFailed(exc) from exc
        return self._extract_markup(markup)

    def extract_html(self, html: str) -> List[MetaTag]:
        return self._extract_markup(html)

    def _extract_markup(self, markup: Union[bytes, str]) -> List[MetaTag]:
        try:
            soup = BeautifulSoup(markup, self.parser, **self._soup_options())
        except ParserRejectedMarkup as exc:
            raise ParseFailed(exc) from exc
        tags: List[MetaTag] = []
        for element in iter_elements(soup):
            if element.name != "meta":
                continue
            tag = meta_tag_from_element(element)
            if tag is None:
                logging.debug("Skipping meta tag without name/content: %s", element)
                continue
            tags.append(tag)
        return tags
