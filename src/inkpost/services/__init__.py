"""Business logic services for the Inkpost application."""

from .files import FileStager, ImageNotFoundError
from .pagination import (
    PaginationRequest,
    SortDirection,
    build_next_url,
    cursor_paginate,
    page_paginate,
    paginate,
    parse_pagination_query,
)

__all__ = [
    "FileStager",
    "ImageNotFoundError",
    "PaginationRequest",
    "SortDirection",
    "build_next_url",
    "cursor_paginate",
    "page_paginate",
    "paginate",
    "parse_pagination_query",
]
