"""
Offset pagination over SQLAlchemy queries.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, List


@dataclass(frozen=True)
class PageResult:
    items: List[Any]
    total_items: int
    total_pages: int
    page: int
    per_page: int


def paginate(query, *, page: int, per_page: int) -> PageResult:
    total_items = query.order_by(None).count()
    rows = query.offset((page - 1) * per_page).limit(per_page).all()
    total_pages = math.ceil(total_items / per_page) if per_page > 0 else 0
    return PageResult(
        items=rows,
        total_items=total_items,
        total_pages=total_pages,
        page=page,
        per_page=per_page,
    )
