"""
Limit/offset pagination for list endpoints.

The backend pages with limit/offset and returns a total; list endpoints answer
`{"items": [...], "pagination": pagination.to_dict(total=...)}`.
"""

from dataclasses import dataclass
from typing import Any

from fastapi import Query

from shared.config.constants import Limits


@dataclass
class Pagination:
    limit: int
    offset: int

    def __post_init__(self):
        self.limit = max(1, min(self.limit, Limits.MAX_PAGE_SIZE))
        self.offset = max(0, self.offset)

    @property
    def page(self) -> int:
        """1-based page number."""
        return self.offset // self.limit + 1

    def to_dict(self, total: int | None = None) -> dict[str, Any]:
        data: dict[str, Any] = {"limit": self.limit, "offset": self.offset, "page": self.page}
        if total is not None:
            data.update(
                total=total,
                pages=-(-total // self.limit),
                has_next=self.offset + self.limit < total,
                has_prev=self.offset > 0,
            )
        return data


def get_pagination(
    limit: int = Query(default=Limits.DEFAULT_PAGE_SIZE, ge=1, le=Limits.MAX_PAGE_SIZE),
    offset: int = Query(default=0, ge=0),
) -> Pagination:
    return Pagination(limit=limit, offset=offset)
