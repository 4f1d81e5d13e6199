"""Offset pagination shared by the feed, post, like, follow and activity listings."""

from dataclasses import dataclass
from typing import Any, Dict, List

from sqlalchemy.orm import Query


@dataclass
class Page:
    """One page of results plus the pre-paging total."""
    items: List[Any]
    total: int
    limit: int
    offset: int

    @property
    def meta(self) -> Dict[str, int]:
        return {"total": self.total, "limit": self.limit, "offset": self.offset}


def newest_first(model) -> tuple:
    """Creation time descending, id descending as the tie-break."""
    return (model.created_at.desc(), model.id.desc())


def paginate(query: Query, limit: int, offset: int, order_by: tuple) -> Page:
    """
    Count the full result set, then fetch a single ordered window of it.

    Args:
        query: Filtered query, without ordering or limits applied
        limit: Page size (already validated by the request layer)
        offset: Rows to skip (already validated by the request layer)
        order_by: Ordering clauses for the window

    Returns:
        Page whose total ignores limit/offset
    """
    total = query.order_by(None).count()
    items = query.order_by(*order_by).offset(offset).limit(limit).all()
    return Page(items=items, total=total, limit=limit, offset=offset)
