"""Dual-mode pagination for collection listings.

Listings accept a flat query string and answer either with a numbered page
(``page`` given) or with a keyset page that continues from an id bound. Keyset
pages carry an absolute ``next`` link that repeats the caller's query with a
fresh id bound, so clients can walk the collection without building URLs.

Query keys understood here:

``take``
    Page size. Defaults to ``settings.default_page_size``.
``order__createdAt``
    ``ASC`` or ``DESC`` on the creation timestamp. Defaults to ``ASC``.
``page``
    1-based page number; selects page mode.
``where__id__less_than`` / ``where__id__more_than``
    Exclusive id bounds for keyset pages. ``less_than`` wins when both are set.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, Protocol, TypeVar
from urllib.parse import urlencode

from inkpost.core.settings import settings

logger = logging.getLogger(__name__)

TAKE_KEY = "take"
ORDER_KEY = "order__createdAt"
PAGE_KEY = "page"
LESS_THAN_KEY = "where__id__less_than"
MORE_THAN_KEY = "where__id__more_than"
CURSOR_KEYS = frozenset({LESS_THAN_KEY, MORE_THAN_KEY})

# Largest value accepted for ids, LIMIT and OFFSET.
MAX_SQL_INT = 2**63 - 1


class SortDirection(str, Enum):
    """Direction on the creation timestamp."""

    ASC = "ASC"
    DESC = "DESC"

    @property
    def cursor_key(self) -> str:
        """Return the id bound that continues a traversal in this direction."""
        return MORE_THAN_KEY if self is SortDirection.ASC else LESS_THAN_KEY


@dataclass(frozen=True)
class IdBound:
    """Exclusive bound on the primary key."""

    less_than: int | None = None
    more_than: int | None = None


@dataclass(frozen=True)
class PaginationRequest:
    """Typed view of a listing query plus the raw pairs it was parsed from."""

    take: int
    order: SortDirection = SortDirection.ASC
    page: int | None = None
    less_than: int | None = None
    more_than: int | None = None
    params: tuple[tuple[str, str], ...] = ()

    @property
    def is_page_mode(self) -> bool:
        return self.page is not None

    @property
    def bound(self) -> IdBound | None:
        """Return the single id bound honored for this request, if any."""
        if self.less_than is not None:
            return IdBound(less_than=self.less_than)
        if self.more_than is not None:
            return IdBound(more_than=self.more_than)
        return None

    @property
    def skip(self) -> int:
        """Offset for page mode; zero outside of it."""
        if self.page is None:
            return 0
        return compute_skip(self.take, self.page)


class HasId(Protocol):
    id: int


RecordT = TypeVar("RecordT", bound=HasId)


class RecordStore(Protocol[RecordT]):
    """Read side of a store that can serve listing pages."""

    def find(
        self,
        *,
        bound: IdBound | None,
        order: SortDirection,
        limit: int,
    ) -> Sequence[RecordT]: ...

    def find_and_count(
        self,
        *,
        skip: int,
        limit: int,
        order: SortDirection,
    ) -> tuple[Sequence[RecordT], int]: ...


@dataclass
class CursorPageResult(Generic[RecordT]):
    data: list[RecordT]
    after: int | None
    next_url: str | None

    @property
    def count(self) -> int:
        return len(self.data)


@dataclass
class OffsetPageResult(Generic[RecordT]):
    data: list[RecordT]
    total: int
    skip: int = field(default=0)


def _parse_int(raw: str | None) -> int | None:
    if raw is None:
        return None
    try:
        value = int(raw.strip())
    except (TypeError, ValueError):
        return None
    # Values a signed 64-bit column or LIMIT/OFFSET cannot hold count as malformed.
    if not -MAX_SQL_INT - 1 <= value <= MAX_SQL_INT:
        return None
    return value


def _parse_positive_int(raw: str | None) -> int | None:
    value = _parse_int(raw)
    return value if value is not None and value > 0 else None


def _parse_bound(raw: str | None) -> int | None:
    # 0 means "no bound"; negative ids are honored as given.
    value = _parse_int(raw)
    return value if value else None


def _parse_order(raw: str | None) -> SortDirection:
    if raw is None:
        return SortDirection.ASC
    try:
        return SortDirection(raw.strip().upper())
    except ValueError:
        return SortDirection.ASC


def parse_pagination_query(
    query: Mapping[str, str] | Iterable[tuple[str, str]],
    *,
    default_take: int | None = None,
) -> PaginationRequest:
    """Normalize raw query parameters into a :class:`PaginationRequest`.

    Malformed, out-of-range or non-positive values of ``take`` and ``page``
    fall back to their defaults instead of failing. Cursor bounds accept any
    in-range integer except 0, which means no bound. Every pair is kept, in
    input order, for next-link echoing.
    """
    pairs = list(query.items()) if isinstance(query, Mapping) else list(query)
    # Last occurrence wins for the typed fields.
    values = dict(pairs)

    take = _parse_positive_int(values.get(TAKE_KEY))
    if take is None:
        take = default_take if default_take is not None else settings.default_page_size

    return PaginationRequest(
        take=take,
        order=_parse_order(values.get(ORDER_KEY)),
        page=_parse_positive_int(values.get(PAGE_KEY)),
        less_than=_parse_bound(values.get(LESS_THAN_KEY)),
        more_than=_parse_bound(values.get(MORE_THAN_KEY)),
        params=tuple((str(key), str(value)) for key, value in pairs),
    )


def compute_skip(take: int, page: int) -> int:
    """Return the row offset of a 1-based ``page`` of ``take`` rows.

    The offset is capped at ``MAX_SQL_INT``; such a page is simply past the data.
    """
    return min(take * (page - 1), MAX_SQL_INT)


def build_next_url(
    request: PaginationRequest,
    last_id: int,
    *,
    base_url: str,
    path: str,
) -> str:
    """Build the absolute URL of the page that follows ``last_id``.

    Non-empty params are echoed in input order, cursor bounds excepted; a
    single bound matching the sort direction is appended last.
    """
    echoed = [
        (key, value)
        for key, value in request.params
        if value != "" and key not in CURSOR_KEYS
    ]
    echoed.append((request.order.cursor_key, str(last_id)))
    return f"{base_url.rstrip('/')}/{path.strip('/')}?{urlencode(echoed)}"


def cursor_paginate(
    request: PaginationRequest,
    store: RecordStore[RecordT],
    *,
    base_url: str,
    path: str,
) -> CursorPageResult[RecordT]:
    """Return the keyset page selected by ``request``.

    A next page is presumed only when the page came back full; a short page
    is the last one.
    """
    records = list(store.find(bound=request.bound, order=request.order, limit=request.take))

    last_item = records[-1] if records and len(records) == request.take else None
    next_url = None
    if last_item is not None:
        next_url = build_next_url(request, last_item.id, base_url=base_url, path=path)

    logger.debug(
        "Cursor page for /%s: bound=%s order=%s returned=%d next=%s",
        path.strip("/"),
        request.bound,
        request.order.value,
        len(records),
        next_url is not None,
    )
    return CursorPageResult(
        data=records,
        after=last_item.id if last_item is not None else None,
        next_url=next_url,
    )


def page_paginate(
    request: PaginationRequest,
    store: RecordStore[RecordT],
) -> OffsetPageResult[RecordT]:
    """Return the numbered page selected by ``request`` with the total count."""
    skip = request.skip
    records, total = store.find_and_count(skip=skip, limit=request.take, order=request.order)
    logger.debug(
        "Offset page %s (skip=%d, take=%d) returned %d of %d",
        request.page,
        skip,
        request.take,
        len(records),
        total,
    )
    return OffsetPageResult(data=list(records), total=total, skip=skip)


def paginate(
    request: PaginationRequest,
    store: RecordStore[RecordT],
    *,
    base_url: str,
    path: str,
) -> CursorPageResult[RecordT] | OffsetPageResult[RecordT]:
    """Dispatch to page mode when a page number was given, keyset mode otherwise."""
    if request.is_page_mode:
        return page_paginate(request, store)
    return cursor_paginate(request, store, base_url=base_url, path=path)
