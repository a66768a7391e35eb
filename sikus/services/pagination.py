"""
services/pagination.py

Offset pagination shared by the report and user lists.

- page is 1-indexed, offset = (page - 1) * limit
- a page past the end returns an empty list, not an error

"""

from typing import Any

from sqlalchemy import Select, func, select
from sqlalchemy.orm import Session


def page_offset(page: int, limit: int) -> int:
    return (page - 1) * limit


def paginate(db: Session, stmt: Select, *, page: int, limit: int) -> tuple[list[Any], int]:
    total = db.scalar(
        select(func.count()).select_from(stmt.order_by(None).subquery())
    ) or 0
    items = db.scalars(stmt.limit(limit).offset(page_offset(page, limit))).unique().all()
    return list(items), int(total)
