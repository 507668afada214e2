"""Downloaded responses and XPath/CSS/regex selection over their bodies."""

from __future__ import annotations

import codecs
import copy
import json as _json
import re
from dataclasses import dataclass, field
from email.message import Message
from typing import Any, BinaryIO, Mapping, Optional, Union

from bs4 import BeautifulSoup
from lxml import etree
from lxml import html as lxml_html

from .request import Request

_EMPTY_DOCUMENT = b"<html><head></head><body></body></html>"
_NODE_MARK = "data-duckspider-node"

Body = Union[bytes, bytearray, str, BinaryIO]


@dataclass
class Response:
    """The result of fetching a request."""

    url: str
    headers: dict[str, str]
    body: bytes
    request: Optional[Request]
    status: int
    meta: dict[str, Any] = field(default_factory=dict)


def _header(headers: Mapping[str, str], name: str) -> str | None:
    wanted = name.lower()
    for key, value in headers.items():
        if key.lower() == wanted:
            return value
    return None


def _decode(body: bytes, headers: Mapping[str, str]) -> str:
    encoding = "utf-8"
    content_type = _header(headers, "Content-Type")
    if content_type:
        message = Message()
        message["Content-Type"] = content_type
        charset = message.get_content_charset()
        if charset:
            try:
                encoding = codecs.lookup(charset).name
            except LookupError:
                encoding = "utf-8"
    return body.decode(encoding, errors="replace")


def _read_body(body: Body) -> bytes:
    if isinstance(body, str):
        return body.encode("utf-8")
    if isinstance(body, (bytes, bytearray)):
        return bytes(body)
    data = body.read()
    return data.encode("utf-8") if isinstance(data, str) else bytes(data)


def _parse_document(data: bytes):
    if not data.strip():
        data = _EMPTY_DOCUMENT
    try:
        return lxml_html.document_fromstring(data)
    except etree.ParserError:
        return lxml_html.document_fromstring(_EMPTY_DOCUMENT)


def _render(node: Any) -> str:
    if isinstance(node, str):
        return str(node)
    return lxml_html.tostring(node, encoding="unicode", with_tail=False)


def _css_select(node, selector: str, include_self: bool) -> list:
    originals = list(node.iter(etree.Element))
    clone = copy.deepcopy(node)
    for index, element in enumerate(clone.iter(etree.Element)):
        element.set(_NODE_MARK, str(index))
    markup = lxml_html.tostring(clone, encoding="unicode", with_tail=False)
    soup = BeautifulSoup(markup, "html.parser")
    matches = []
    for tag in soup.select(selector):
        mark = tag.get(_NODE_MARK)
        if mark is None:
            continue
        index = int(mark)
        if index == 0 and not include_self:
            continue
        matches.append(originals[index])
    return matches


class DataSelection:
    """A set of nodes in a parsed response, refined by chained queries."""

    def __init__(self, root, response: Response, nodes: list | None = None,
                 text: str | None = None) -> None:
        self.root = root
        self.response = response
        self.nodes = nodes
        self._text = text

    def _current(self) -> list:
        return [self.root] if self.nodes is None else self.nodes

    def _derive(self, nodes: list) -> "DataSelection":
        return DataSelection(self.root, self.response, nodes, self._text)

    def xpath(self, expr: str) -> "DataSelection":
        """Select with an XPath expression relative to each current node."""
        results: list = []
        for node in self._current():
            if isinstance(node, str):
                continue
            found = node.xpath(expr)
            if isinstance(found, list):
                results.extend(found)
        return self._derive(results)

    def css(self, selector: str) -> "DataSelection":
        """Select descendants of each current node matching a CSS selector."""
        try:
            BeautifulSoup("", "html.parser").select(selector)
        except Exception as exc:
            raise ValueError(f"invalid CSS selector {selector!r}: {exc}") from exc
        include_self = self.nodes is None
        results: list = []
        for node in self._current():
            if isinstance(node, str):
                continue
            results.extend(_css_select(node, selector, include_self))
        return self._derive(results)

    def text(self) -> str:
        """Return the whole response body as text."""
        if self._text is not None:
            return self._text
        return _decode(self.response.body, self.response.headers)

    def json(self) -> Any:
        """Decode the response body as JSON."""
        return _json.loads(self.text())

    def regex(self, pattern: str) -> list[str]:
        """Return every whole match of ``pattern`` in the body text."""
        return [match.group(0) for match in re.finditer(pattern, self.text())]

    def get(self) -> str:
        """Render the first selected node, or return an empty string."""
        if not self.nodes:
            return ""
        return _render(self.nodes[0])

    def get_all(self) -> list[str]:
        return [_render(node) for node in self.nodes or []]


def build_data_selection(url: str, headers: Mapping[str, str] | None, status: int,
                         request: Request | None, body: Body) -> DataSelection:
    """Read ``body`` fully and return a selection rooted at its parsed document."""
    data = _read_body(body)
    header_map = dict(headers or {})
    response = Response(
        url=url,
        headers=header_map,
        body=data,
        request=request,
        status=status,
        meta=request.meta if request is not None else {},
    )
    return DataSelection(_parse_document(data), response, text=_decode(data, header_map))