# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Tests for ItemPager."""

import pytest

from CloudML.AutoML.core._error_codes import UNAVAILABLE
from CloudML.AutoML.core.errors import ApiError
from CloudML.AutoML.core.pager import ItemPager, Page


class ScriptedPages:
    """Page fetcher replaying responses and recording requested tokens."""

    def __init__(self, *responses):
        self._responses = list(responses)
        self.tokens = []

    def __call__(self, page_token):
        self.tokens.append(page_token)
        response = self._responses[len(self.tokens) - 1]
        if isinstance(response, BaseException):
            raise response
        return response


class TestItemPager:
    def test_two_pages_yield_in_order_then_end(self):
        fetch = ScriptedPages(
            {"items": ["a", "b"], "nextPageToken": "t1"},
            {"items": ["c"], "nextPageToken": ""},
        )
        it = iter(ItemPager(fetch, "items"))

        assert next(it) == "a"
        assert next(it) == "b"
        assert next(it) == "c"
        with pytest.raises(StopIteration):
            next(it)
        assert fetch.tokens == [None, "t1"]

    def test_pages_fetched_lazily(self):
        fetch = ScriptedPages(
            {"items": ["a"], "nextPageToken": "t1"},
            {"items": ["b"]},
        )
        it = iter(ItemPager(fetch, "items"))

        assert fetch.tokens == []
        next(it)
        assert fetch.tokens == [None]
        next(it)
        assert fetch.tokens == [None, "t1"]

    def test_empty_intermediate_page_continues(self):
        fetch = ScriptedPages(
            {"items": ["a"], "nextPageToken": "t1"},
            {"items": [], "nextPageToken": "t2"},
            {"nextPageToken": "t3"},
            {"items": ["b"]},
        )
        assert list(ItemPager(fetch, "items")) == ["a", "b"]
        assert fetch.tokens == [None, "t1", "t2", "t3"]

    def test_empty_result(self):
        assert list(ItemPager(ScriptedPages({}), "items")) == []

    def test_failed_page_surfaces_error_after_yielded_items(self):
        failure = ApiError("unavailable", code=UNAVAILABLE, status_code=503)
        fetch = ScriptedPages(
            {"items": ["a", "b"], "nextPageToken": "t1"},
            failure,
        )
        seen = []
        with pytest.raises(ApiError) as ei:
            for item in ItemPager(fetch, "items"):
                seen.append(item)

        assert ei.value is failure
        assert seen == ["a", "b"]
        assert fetch.tokens == [None, "t1"]

    def test_each_iteration_restarts_from_first_page(self):
        fetch = ScriptedPages(
            {"items": ["a"], "nextPageToken": "t1"},
            {"items": ["b"]},
            {"items": ["a"], "nextPageToken": "t1"},
            {"items": ["b"]},
        )
        pager = ItemPager(fetch, "items")

        assert list(pager) == ["a", "b"]
        assert list(pager) == ["a", "b"]
        assert fetch.tokens == [None, "t1", None, "t1"]

    def test_item_decoder_applied(self):
        fetch = ScriptedPages({"model": [{"name": "m1"}, {"name": "m2"}]})
        pager = ItemPager(fetch, "model", lambda raw: raw["name"].upper())
        assert pager.to_list() == ["M1", "M2"]

    def test_no_dedup_or_reordering(self):
        fetch = ScriptedPages(
            {"items": ["b", "a"], "nextPageToken": "t1"},
            {"items": ["a", "b"]},
        )
        assert list(ItemPager(fetch, "items")) == ["b", "a", "a", "b"]


class TestByPage:
    def test_pages_carry_tokens_and_numbers(self):
        fetch = ScriptedPages(
            {"items": ["a", "b"], "nextPageToken": "t1"},
            {"items": ["c"]},
        )
        pages = list(ItemPager(fetch, "items").by_page())

        assert pages == [
            Page(items=["a", "b"], next_page_token="t1", page_number=1),
            Page(items=["c"], next_page_token=None, page_number=2),
        ]
        assert len(pages[0]) == 2
        assert list(pages[1]) == ["c"]

    def test_resume_from_token(self):
        fetch = ScriptedPages({"items": ["c"]})
        pages = list(ItemPager(fetch, "items").by_page("t1"))

        assert fetch.tokens == ["t1"]
        assert pages[0].items == ["c"]
