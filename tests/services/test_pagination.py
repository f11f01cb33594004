# tests/services/test_pagination.py
"""Tests for the listing pagination engine."""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import parse_qsl, urlsplit

import pytest

from inkpost.services.pagination import (
    LESS_THAN_KEY,
    MAX_SQL_INT,
    MORE_THAN_KEY,
    IdBound,
    OffsetPageResult,
    PaginationRequest,
    SortDirection,
    build_next_url,
    compute_skip,
    cursor_paginate,
    page_paginate,
    paginate,
    parse_pagination_query,
)

BASE_URL = "http://localhost:3000"


@dataclass
class Record:
    id: int
    created_at: int


class InMemoryStore:
    """Record store over a list, ordered by (created_at, id)."""

    def __init__(self, records: list[Record]) -> None:
        self.records = records
        self.calls: list[dict] = []

    def _sorted(self, order: SortDirection) -> list[Record]:
        return sorted(
            self.records,
            key=lambda r: (r.created_at, r.id),
            reverse=order is SortDirection.DESC,
        )

    def find(self, *, bound: IdBound | None, order: SortDirection, limit: int) -> list[Record]:
        self.calls.append({"bound": bound, "order": order, "limit": limit})
        rows = self._sorted(order)
        if bound is not None and bound.less_than is not None:
            rows = [r for r in rows if r.id < bound.less_than]
        elif bound is not None and bound.more_than is not None:
            rows = [r for r in rows if r.id > bound.more_than]
        return rows[:limit]

    def find_and_count(
        self, *, skip: int, limit: int, order: SortDirection
    ) -> tuple[list[Record], int]:
        self.calls.append({"skip": skip, "limit": limit, "order": order})
        rows = self._sorted(order)
        return rows[skip:skip + limit], len(rows)


def _store(n: int) -> InMemoryStore:
    return InMemoryStore([Record(id=i, created_at=i * 10) for i in range(1, n + 1)])


def _query_of(url: str) -> list[tuple[str, str]]:
    return parse_qsl(urlsplit(url).query, keep_blank_values=True)


def _walk(store: InMemoryStore, query: dict[str, str]) -> list[list[int]]:
    pages = []
    params: list[tuple[str, str]] = list(query.items())
    while True:
        result = cursor_paginate(
            parse_pagination_query(params), store, base_url=BASE_URL, path="posts"
        )
        pages.append([r.id for r in result.data])
        if result.next_url is None:
            return pages
        params = _query_of(result.next_url)


class TestParsePaginationQuery:
    """Normalization of raw query parameters."""

    def test_empty_query_uses_defaults(self):
        request = parse_pagination_query({}, default_take=20)
        assert request.take == 20
        assert request.order is SortDirection.ASC
        assert request.page is None
        assert request.bound is None
        assert not request.is_page_mode

    def test_default_take_comes_from_settings(self):
        from inkpost.core.settings import settings

        assert parse_pagination_query({}).take == settings.default_page_size

    def test_numeric_fields_are_parsed(self):
        request = parse_pagination_query(
            {"take": "5", "page": "3", "order__createdAt": "DESC"}
        )
        assert request.take == 5
        assert request.page == 3
        assert request.order is SortDirection.DESC
        assert request.is_page_mode

    @pytest.mark.parametrize("raw", ["abc", "", "-4", "0", "1.5"])
    def test_malformed_take_falls_back_to_default(self, raw):
        request = parse_pagination_query({"take": raw}, default_take=7)
        assert request.take == 7

    def test_unknown_order_falls_back_to_ascending(self):
        assert parse_pagination_query({"order__createdAt": "sideways"}).order is SortDirection.ASC

    def test_order_is_case_insensitive(self):
        assert parse_pagination_query({"order__createdAt": "desc"}).order is SortDirection.DESC

    def test_malformed_cursor_is_ignored(self):
        request = parse_pagination_query({MORE_THAN_KEY: "nope"})
        assert request.more_than is None
        assert request.bound is None

    @pytest.mark.parametrize("raw", ["99999999999999999999", str(MAX_SQL_INT + 1)])
    def test_out_of_range_numbers_are_malformed(self, raw):
        request = parse_pagination_query(
            {"take": raw, "page": raw, MORE_THAN_KEY: raw, LESS_THAN_KEY: raw}, default_take=7
        )
        assert request.take == 7
        assert request.page is None
        assert request.bound is None

    def test_largest_number_is_accepted(self):
        request = parse_pagination_query({"take": str(MAX_SQL_INT)})
        assert request.take == MAX_SQL_INT

    def test_negative_cursor_is_kept(self):
        request = parse_pagination_query({LESS_THAN_KEY: "-5"})
        assert request.bound == IdBound(less_than=-5)

    def test_zero_cursor_is_absent(self):
        request = parse_pagination_query({LESS_THAN_KEY: "0", MORE_THAN_KEY: "0"})
        assert request.bound is None

    @pytest.mark.parametrize("raw", ["-3", "0"])
    def test_non_positive_page_is_absent(self, raw):
        assert not parse_pagination_query({"page": raw}).is_page_mode

    def test_less_than_wins_over_more_than(self):
        request = parse_pagination_query({MORE_THAN_KEY: "2", LESS_THAN_KEY: "8"})
        assert request.bound == IdBound(less_than=8)

    def test_unknown_keys_are_kept_in_order(self):
        request = parse_pagination_query([("tag", "news"), ("take", "2"), ("author", "kim")])
        assert request.params == (("tag", "news"), ("take", "2"), ("author", "kim"))
        assert request.take == 2


class TestComputeSkip:
    """Offset arithmetic for page mode."""

    @pytest.mark.parametrize(
        ("take", "page", "expected"),
        [(20, 1, 0), (20, 2, 20), (3, 4, 9), (1, 10, 9)],
    )
    def test_skip(self, take, page, expected):
        assert compute_skip(take, page) == expected

    def test_skip_is_capped(self):
        assert compute_skip(MAX_SQL_INT, 3) == MAX_SQL_INT
        assert compute_skip(2**62, 2**62) == MAX_SQL_INT

    def test_request_skip_outside_page_mode_is_zero(self):
        assert PaginationRequest(take=5).skip == 0


class TestBuildNextUrl:
    """Next-link synthesis."""

    def test_ascending_appends_more_than(self):
        request = parse_pagination_query({"take": "3", "order__createdAt": "ASC"})
        url = build_next_url(request, 3, base_url=BASE_URL, path="posts")
        assert url == (
            "http://localhost:3000/posts?take=3&order__createdAt=ASC&where__id__more_than=3"
        )

    def test_descending_appends_less_than(self):
        request = parse_pagination_query({"order__createdAt": "DESC", "take": "2"})
        url = build_next_url(request, 9, base_url=BASE_URL, path="posts")
        assert _query_of(url) == [
            ("order__createdAt", "DESC"),
            ("take", "2"),
            (LESS_THAN_KEY, "9"),
        ]

    def test_old_cursor_keys_are_replaced(self):
        request = parse_pagination_query(
            [(MORE_THAN_KEY, "3"), ("take", "3"), (LESS_THAN_KEY, "99")]
        )
        url = build_next_url(request, 6, base_url=BASE_URL, path="posts")
        # less_than was honored for the page, but ascending order continues with more_than.
        assert _query_of(url) == [("take", "3"), (MORE_THAN_KEY, "6")]

    def test_unknown_params_are_echoed_and_empty_ones_dropped(self):
        request = parse_pagination_query([("tag", "a b"), ("empty", ""), ("take", "4")])
        url = build_next_url(request, 4, base_url=BASE_URL, path="posts")
        assert _query_of(url) == [("tag", "a b"), ("take", "4"), (MORE_THAN_KEY, "4")]

    def test_exactly_one_cursor_key(self):
        request = parse_pagination_query({"take": "1", MORE_THAN_KEY: "1"})
        url = build_next_url(request, 2, base_url=BASE_URL, path="posts")
        keys = [key for key, _ in _query_of(url)]
        assert keys.count(MORE_THAN_KEY) + keys.count(LESS_THAN_KEY) == 1

    def test_slashes_are_normalized(self):
        request = PaginationRequest(take=1)
        url = build_next_url(request, 1, base_url="https://blog.example/", path="/api/v1/posts")
        assert url == "https://blog.example/api/v1/posts?where__id__more_than=1"


class TestCursorPaginate:
    """Keyset pages over an in-memory store."""

    def test_first_page_ascending(self):
        store = _store(10)
        request = parse_pagination_query({"take": "3", "order__createdAt": "ASC"})

        result = cursor_paginate(request, store, base_url=BASE_URL, path="posts")

        assert [r.id for r in result.data] == [1, 2, 3]
        assert result.after == 3
        assert result.count == 3
        assert result.next_url is not None
        assert (MORE_THAN_KEY, "3") in _query_of(result.next_url)
        assert store.calls[0] == {"bound": None, "order": SortDirection.ASC, "limit": 3}

    def test_following_next_returns_the_next_page(self):
        store = _store(10)
        first = cursor_paginate(
            parse_pagination_query({"take": "3", "order__createdAt": "ASC"}),
            store,
            base_url=BASE_URL,
            path="posts",
        )

        second = cursor_paginate(
            parse_pagination_query(_query_of(first.next_url)),
            store,
            base_url=BASE_URL,
            path="posts",
        )

        assert [r.id for r in second.data] == [4, 5, 6]
        assert second.after == 6

    def test_short_page_has_no_next(self):
        store = _store(10)
        request = parse_pagination_query(
            {"take": "3", "order__createdAt": "ASC", MORE_THAN_KEY: "9"}
        )

        result = cursor_paginate(request, store, base_url=BASE_URL, path="posts")

        assert [r.id for r in result.data] == [10]
        assert result.count == 1
        assert result.after is None
        assert result.next_url is None

    def test_negative_less_than_yields_an_empty_page(self):
        store = _store(5)
        result = cursor_paginate(
            parse_pagination_query({LESS_THAN_KEY: "-5"}), store, base_url=BASE_URL, path="posts"
        )
        assert result.data == []
        assert result.next_url is None
        assert store.calls[0]["bound"] == IdBound(less_than=-5)

    def test_empty_store(self):
        result = cursor_paginate(
            parse_pagination_query({"take": "5"}), _store(0), base_url=BASE_URL, path="posts"
        )
        assert result.data == []
        assert result.after is None
        assert result.count == 0
        assert result.next_url is None

    def test_descending_first_page(self):
        result = cursor_paginate(
            parse_pagination_query({"take": "4", "order__createdAt": "DESC"}),
            _store(10),
            base_url=BASE_URL,
            path="posts",
        )
        assert [r.id for r in result.data] == [10, 9, 8, 7]
        assert (LESS_THAN_KEY, "7") in _query_of(result.next_url)

    def test_cursor_on_missing_id_is_just_a_boundary(self):
        store = InMemoryStore([Record(id=i, created_at=i) for i in (1, 2, 5, 6)])
        result = cursor_paginate(
            parse_pagination_query({"take": "2", MORE_THAN_KEY: "3"}),
            store,
            base_url=BASE_URL,
            path="posts",
        )
        assert [r.id for r in result.data] == [5, 6]

    @pytest.mark.parametrize("order", ["ASC", "DESC"])
    @pytest.mark.parametrize(("total", "take"), [(10, 3), (7, 1), (5, 10), (1, 1)])
    def test_traversal_visits_every_record_once(self, order, total, take):
        pages = _walk(_store(total), {"take": str(take), "order__createdAt": order})
        seen = [record_id for page in pages for record_id in page]

        expected = list(range(1, total + 1))
        if order == "DESC":
            expected.reverse()
        assert seen == expected
        assert all(len(page) <= take for page in pages)

    def test_exact_multiple_ends_with_an_empty_page(self):
        pages = _walk(_store(6), {"take": "3"})
        # A full last page still advertises a next link that turns out empty.
        assert pages == [[1, 2, 3], [4, 5, 6], []]


class TestPagePaginate:
    """Offset pages over an in-memory store."""

    def test_first_page_skips_nothing(self):
        store = _store(10)
        result = page_paginate(parse_pagination_query({"take": "4", "page": "1"}), store)
        assert [r.id for r in result.data] == [1, 2, 3, 4]
        assert result.total == 10
        assert store.calls[0]["skip"] == 0

    def test_later_page(self):
        store = _store(10)
        result = page_paginate(parse_pagination_query({"take": "4", "page": "3"}), store)
        assert [r.id for r in result.data] == [9, 10]
        assert result.skip == 8

    def test_page_beyond_data_is_empty_with_total(self):
        result = page_paginate(parse_pagination_query({"take": "4", "page": "9"}), _store(10))
        assert result.data == []
        assert result.total == 10

    def test_descending_order(self):
        result = page_paginate(
            parse_pagination_query({"take": "3", "page": "2", "order__createdAt": "DESC"}),
            _store(10),
        )
        assert [r.id for r in result.data] == [7, 6, 5]


class TestPaginateDispatch:
    """Mode selection."""

    def test_page_number_selects_page_mode(self):
        result = paginate(
            parse_pagination_query({"page": "1"}), _store(3), base_url=BASE_URL, path="posts"
        )
        assert isinstance(result, OffsetPageResult)

    def test_invalid_page_number_selects_cursor_mode(self):
        result = paginate(
            parse_pagination_query({"page": "zero", "take": "2"}),
            _store(3),
            base_url=BASE_URL,
            path="posts",
        )
        assert not isinstance(result, OffsetPageResult)
        assert result.after == 2
