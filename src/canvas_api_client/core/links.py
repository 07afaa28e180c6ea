"""Link header parsing for page-numbered collections."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from urllib.parse import parse_qs, urlsplit

from .errors import MalformedPaginationMetadata, MissingPaginationRelation

_LINK_PATTERN = re.compile(r'<([^>]*)>\s*;\s*rel="([^"]*)"')


class LinkRelation(str, Enum):
    CURRENT = "current"
    FIRST = "first"
    PREV = "prev"
    NEXT = "next"
    LAST = "last"


_REQUIRED = (LinkRelation.CURRENT, LinkRelation.FIRST, LinkRelation.LAST)


@dataclass(slots=True, frozen=True)
class PageLink:
    relation: LinkRelation
    url: str
    page: int


@dataclass(slots=True, frozen=True)
class LinkSet:
    """Relations of one response. A missing ``next`` marks the last page."""

    current: PageLink
    first: PageLink
    last: PageLink
    next: PageLink | None = None
    prev: PageLink | None = None

    @property
    def total_pages(self) -> int:
        return self.last.page

    @property
    def has_next(self) -> bool:
        return self.next is not None


def parse_page_number(url: str) -> int:
    query = parse_qs(urlsplit(url).query, keep_blank_values=True)
    values = query.get("page")
    if not values:
        raise MalformedPaginationMetadata(f"page parameter missing in link {url!r}")
    text = values[0].strip()
    if not (text.isascii() and text.isdigit()):
        raise MalformedPaginationMetadata(f"could not parse page num {text!r} in link {url!r}")
    return int(text)


def parse_link_header(header: str | None) -> LinkSet:
    """Parse a ``Link`` header of ``<url>; rel="name"`` tokens into a LinkSet."""

    links: dict[LinkRelation, PageLink] = {}
    for url, rel in _LINK_PATTERN.findall(header or ""):
        try:
            relation = LinkRelation(rel.strip())
        except ValueError:
            continue
        links[relation] = PageLink(relation=relation, url=url, page=parse_page_number(url))

    for relation in _REQUIRED:
        if relation not in links:
            raise MissingPaginationRelation(relation.value)

    return LinkSet(
        current=links[LinkRelation.CURRENT],
        first=links[LinkRelation.FIRST],
        last=links[LinkRelation.LAST],
        next=links.get(LinkRelation.NEXT),
        prev=links.get(LinkRelation.PREV),
    )


def find_last_page(header: str | None) -> int:
    return parse_link_header(header).last.page


__all__ = [
    "LinkRelation",
    "PageLink",
    "LinkSet",
    "parse_page_number",
    "parse_link_header",
    "find_last_page",
]
