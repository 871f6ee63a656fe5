# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Lazy iteration over paginated list methods.

List methods return an :class:`ItemPager` instead of a list. Pages are fetched
on demand as iteration advances, following the ``nextPageToken`` returned by
the service until it is empty.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Generic, Iterator, List, Optional, TypeVar

_logger = logging.getLogger(__name__)

T = TypeVar("T")

# Fetches one page given a page token (None for the first page)
PageFetcher = Callable[[Optional[str]], Dict[str, Any]]


@dataclass
class Page(Generic[T]):
    """
    One page of results.

    :param items: Elements of the page, in server order.
    :type items: list
    :param next_page_token: Token of the following page; None on the last page.
    :type next_page_token: str | None
    :param page_number: One-based position of the page.
    :type page_number: int
    """

    items: List[T] = field(default_factory=list)
    next_page_token: Optional[str] = None
    page_number: int = 1

    def __iter__(self) -> Iterator[T]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)


class ItemPager(Generic[T]):
    """
    Iterable over every element of a paginated list method.

    Each call to ``iter()`` starts again from the first page. Elements are
    yielded in server order; nothing is reordered or de-duplicated. A page with
    no elements but a next page token does not end iteration.

    A failed page fetch raises its error from ``next()``. Elements yielded
    before the failure stay valid; the failed page is not retried.

    :param fetch_page: Returns the decoded response of one page request.
    :type fetch_page: Callable[[str | None], dict]
    :param items_field: Response field holding the page's elements,
        e.g. ``"datasets"`` or ``"model"``.
    :type items_field: str
    :param item_decoder: Converts one wire element, e.g. ``Dataset.from_api_response``.
    :type item_decoder: Callable[[dict], T] | None

    Example::

        for model in client.models.list(location):
            print(model.display_name)

        for page in client.models.list(location, page_size=50).by_page():
            print(page.page_number, len(page.items), page.next_page_token)
    """

    def __init__(
        self,
        fetch_page: PageFetcher,
        items_field: str,
        item_decoder: Optional[Callable[[Dict[str, Any]], T]] = None,
    ) -> None:
        self._fetch_page = fetch_page
        self._items_field = items_field
        self._decode = item_decoder

    def by_page(self, page_token: Optional[str] = None) -> Iterator[Page[T]]:
        """
        Iterate page by page.

        :param page_token: Token to resume from; None starts at the first page.
        :type page_token: str | None
        """
        token = page_token or None
        page_number = 0
        while True:
            response = self._fetch_page(token)
            page_number += 1
            raw_items = response.get(self._items_field) or []
            items = [self._decode(item) for item in raw_items] if self._decode else list(raw_items)
            token = response.get("nextPageToken") or None
            _logger.debug(
                "Fetched page %d of %s: %d item(s), more=%s", page_number, self._items_field, len(items), bool(token)
            )
            yield Page(items=items, next_page_token=token, page_number=page_number)
            if token is None:
                return

    def __iter__(self) -> Iterator[T]:
        for page in self.by_page():
            yield from page.items

    def to_list(self) -> List[T]:
        """Fetch every page and return all elements."""
        return list(self)

    def to_dataframe(self):
        """
        Fetch every page and return the elements as a :class:`pandas.DataFrame`.

        Columns are wire field names; ``createTime``/``updateTime`` are parsed
        into UTC timestamps.

        :rtype: pandas.DataFrame
        """
        from ..utils._pandas import records_to_dataframe

        return records_to_dataframe(self)


__all__ = ["ItemPager", "Page"]
