"""
Page/per-page normalization and the count + slice round trip.

Bad input never raises here: page numbers fall back to 1 and page sizes to
the default, oversized pages are clamped.
"""
import logging
import math
from dataclasses import dataclass
from typing import Any, Generic, List, Optional, TypeVar

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import Select

from catalog.core.config import settings
from catalog.schemas.pagination import PaginationMeta

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _to_int(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        return None


def normalize_page(value: Any) -> int:
    page = _to_int(value)
    if page is None or page < 1:
        return 1
    return page


def normalize_per_page(
    value: Any,
    default: int = settings.DEFAULT_PER_PAGE,
    maximum: int = settings.MAX_PER_PAGE,
) -> int:
    per_page = _to_int(value)
    if per_page is None or per_page <= 0:
        return default
    return min(per_page, maximum)


def total_pages_for(total_count: int, per_page: int) -> int:
    if total_count <= 0:
        return 0
    return math.ceil(total_count / per_page)


@dataclass
class Page(Generic[T]):
    items: List[T]
    meta: PaginationMeta


async def paginate(db: AsyncSession, stmt: Select, page: int, per_page: int) -> Page:
    """
    Count the candidate statement, then fetch one slice of it in its own order.

    Issues at most two read queries. Pages past the end come back empty with
    the true totals; no query is retried.
    """
    count_stmt = select(func.count()).select_from(stmt.order_by(None).subquery())
    total_count = (await db.execute(count_stmt)).scalar_one()

    offset = (page - 1) * per_page
    items: List[Any] = []
    if offset < total_count:
        result = await db.execute(stmt.offset(offset).limit(per_page))
        items = list(result.scalars().unique().all())

    meta = PaginationMeta(
        current_page=page,
        total_pages=total_pages_for(total_count, per_page),
        total_count=total_count,
        per_page=per_page,
    )
    logger.debug(f"Paginated {total_count} rows: page {page}, {len(items)} items")
    return Page(items=items, meta=meta)
