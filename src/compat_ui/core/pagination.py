"""
Pagination arithmetic shared by the grid renderer and query conversion.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from pydantic import BaseModel, Field

from compat_ui.core.errors import InvalidArgument


class PaginationResult(BaseModel):
    """Row window and page count for one page of a result set."""

    model_config = {"frozen": True}

    total_row_count: int = Field(ge=0)
    page: int = Field(ge=1)
    page_size: int = Field(ge=1)
    total_pages: int = Field(ge=0)
    start_row: int = Field(ge=1)
    end_row: int = Field(ge=0)

    @property
    def is_empty(self) -> bool:
        """True when the window holds no rows (empty source or page past the end)."""
        return self.end_row < self.start_row

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    def window(self, rows: Sequence[Any]) -> list[Any]:
        """Slice ``rows`` down to this page (1-based inclusive row range)."""
        if self.is_empty:
            return []
        return list(rows[self.start_row - 1 : self.end_row])


def paginate(total_row_count: int, page: int, page_size: int) -> PaginationResult:
    """Compute the row range and page count for one page.

    ``page`` is not clamped. A page past the end yields an empty window with
    ``end_row == start_row - 1``.

    Raises:
        InvalidArgument: if ``page < 1``, ``page_size < 1`` or the row count is negative.
    """
    if page_size < 1:
        raise InvalidArgument(f"pageSize must be at least 1, got {page_size}")
    if page < 1:
        raise InvalidArgument(f"page must be at least 1, got {page}")
    if total_row_count < 0:
        raise InvalidArgument(f"totalRowCount must not be negative, got {total_row_count}")

    # Integer ceiling division, exact for any row count.
    total_pages = -(-total_row_count // page_size)
    start_row = (page - 1) * page_size + 1
    end_row = min(start_row + page_size - 1, total_row_count)
    if end_row < start_row - 1:
        end_row = start_row - 1

    return PaginationResult(
        total_row_count=total_row_count,
        page=page,
        page_size=page_size,
        total_pages=total_pages,
        start_row=start_row,
        end_row=end_row,
    )
