"""
Generic "follow the next link" pagination.

The control flow here knows nothing about the wire format: a `PageParser` turns one
fetched document into items plus an optional next link, and a `LinkRewriter` fixes
that link up before it is dereferenced. Pages are fetched strictly one after another
because every URL comes from the previous response.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Generic, Protocol, TypeVar

logger = logging.getLogger(__name__)

DocT = TypeVar("DocT")
ItemT = TypeVar("ItemT")


@dataclass(frozen=True)
class Page(Generic[ItemT]):
    """One parsed page: its raw items and the link to the following page (if any)."""

    items: list[ItemT]
    next_url: str | None = None


class PageParser(Protocol[DocT, ItemT]):
    def parse_page(self, document: DocT) -> Page[ItemT]: ...


class LinkRewriter(Protocol):
    def rewrite(self, url: str) -> str: ...


class IdentityRewriter:
    """Leave next links untouched."""

    def rewrite(self, url: str) -> str:
        return url


def fetch_all_features(
    initial_url: str,
    *,
    fetch: Callable[[str], Any],
    parser: PageParser[Any, ItemT],
    rewriter: LinkRewriter | None = None,
) -> list[ItemT]:
    """Fetch `initial_url` and every page linked after it; return all items in arrival order.

    Any error from `fetch` or `parser` aborts the whole retrieval (no partial result, no retry).
    """
    rewriter = rewriter or IdentityRewriter()
    results: list[ItemT] = []
    url: str | None = initial_url
    pages = 0

    while url is not None:
        document = fetch(url)
        page = parser.parse_page(document)
        pages += 1
        results.extend(page.items)
        logger.debug("Page %s: %s items (next=%s)", pages, len(page.items), bool(page.next_url))
        url = rewriter.rewrite(page.next_url) if page.next_url else None

    logger.debug("Fetched %s pages, %s items total.", pages, len(results))
    return results
