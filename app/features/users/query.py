"""
Filtered, sorted and paginated listing of the user directory.
"""
from typing import Optional
from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import ColumnElement

from app.core import config
from app.features.users.models import User
from app.features.users.projections import to_user_list_item
from app.features.users.schemas import UserFilterRequest, UserFilterResponse
from app.utils import get_logger


log = get_logger(__name__)

SORT_COLUMNS = {
    "firstname": User.first_name,
    "first_name": User.first_name,
    "lastname": User.last_name,
    "last_name": User.last_name,
    "email": User.email,
}
DEFAULT_SORT_COLUMN = User.first_name
DESCENDING = "desc"


def resolve_sort(order_by: Optional[str], order_direction: Optional[str]) -> list[ColumnElement]:
    """
    ORDER BY clauses for the requested sort.

    Unknown or missing fields sort by first name; anything other than "desc"
    sorts ascending. Ties are broken by user id, i.e. creation order.
    """
    column = SORT_COLUMNS.get((order_by or "").lower(), DEFAULT_SORT_COLUMN)
    descending = (order_direction or "").lower() == DESCENDING
    return [column.desc() if descending else column.asc(), User.id.asc()]


def resolve_page(page_number: Optional[int], page_size: Optional[int]) -> tuple[int, int]:
    """
    Page number and size with defaults applied.

    Both are clamped to at least 1 and the size to at most MAX_PAGE_SIZE.
    """
    page = page_number if page_number is not None else 1
    size = page_size if page_size is not None else config.DEFAULT_PAGE_SIZE
    return max(page, 1), min(max(size, 1), config.MAX_PAGE_SIZE)


def search_filter(search: Optional[str]) -> Optional[ColumnElement]:
    """
    Substring match on first name, last name, email or username.

    Uses LIKE, so case sensitivity follows the database collation
    (case-insensitive for ASCII on SQLite, case-sensitive on PostgreSQL).
    """
    if not search:
        return None
    return or_(
        User.first_name.contains(search, autoescape=True),
        User.last_name.contains(search, autoescape=True),
        User.email.contains(search, autoescape=True),
        User.username.contains(search, autoescape=True),
    )


class UserQueryEngine:
    """Builds directory pages over the users table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def count(self, criteria: Optional[ColumnElement] = None) -> int:
        stmt = select(func.count()).select_from(User)
        if criteria is not None:
            stmt = stmt.where(criteria)
        result = await self.db.execute(stmt)
        return result.scalar() or 0

    async def search(self, request: UserFilterRequest) -> UserFilterResponse:
        page, page_size = resolve_page(request.page_number, request.page_size)
        criteria = search_filter(request.search)

        total_count = await self.count(criteria)
        offset = (page - 1) * page_size
        if offset >= total_count:
            # past the end; also keeps huge offsets away from the driver
            return UserFilterResponse(data_source=[], page=page, page_size=page_size, total_count=total_count)

        stmt = select(User)
        if criteria is not None:
            stmt = stmt.where(criteria)
        stmt = (
            stmt.order_by(*resolve_sort(request.order_by, request.order_direction))
            .offset(offset)
            .limit(page_size)
        )
        result = await self.db.execute(stmt)
        users = result.scalars().all()

        log.debug("User search %r matched %d, returning page %d (%d rows)",
                  request.search, total_count, page, len(users))
        return UserFilterResponse(
            data_source=[to_user_list_item(user) for user in users],
            page=page,
            page_size=page_size,
            total_count=total_count,
        )
