"""Base repository with common CRUD operations."""

from collections.abc import Mapping, Sequence
from typing import Any, Generic, TypeVar
from uuid import UUID

from sqlalchemy import func, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel, select

from src.taskhub.models.base import utc_now

MAX_PAGE_SIZE = 100


def clamp_pagination(page: int, limit: int) -> tuple[int, int]:
    """Normalize page/limit: page >= 1, 1 <= limit <= MAX_PAGE_SIZE."""
    return max(page, 1), min(max(limit, 1), MAX_PAGE_SIZE)


ModelType = TypeVar("ModelType", bound=SQLModel)


class BaseRepository(Generic[ModelType]):
    """Base repository providing common database operations.

    Repositories handle data access only. Transaction control (commit)
    is done in the service layer.
    """

    model: type[ModelType]

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, id: UUID, for_update: bool = False) -> ModelType | None:
        """Get a record by its primary key, optionally locking the row."""
        query = select(self.model).where(self.model.id == id)  # type: ignore[attr-defined]
        if for_update:
            query = query.with_for_update()
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    def add(self, entity: ModelType) -> None:
        """Add entity to session (no flush/commit)."""
        self.session.add(entity)

    async def delete(self, entity: ModelType) -> None:
        await self.session.delete(entity)

    async def count(self, *conditions: Any) -> int:
        query = select(func.count()).select_from(self.model).where(*conditions)
        result = await self.session.execute(query)
        return int(result.scalar_one())

    async def apply_update(self, id: UUID, changes: Mapping[str, Any]) -> ModelType | None:
        """Persist a partial update as a single parameterized UPDATE.

        Only the keys present in ``changes`` are written; ``updated_at`` is
        always refreshed. Returns the refreshed row, or None if it vanished.
        """
        values = {**changes, "updated_at": utc_now()}
        stmt = (
            update(self.model)
            .where(self.model.id == id)  # type: ignore[attr-defined]
            .values(**values)
            .execution_options(synchronize_session="fetch")
        )
        await self.session.execute(stmt)
        result = await self.session.execute(
            select(self.model)
            .where(self.model.id == id)  # type: ignore[attr-defined]
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def paginate(
        self,
        query: Any,  # SelectOfScalar or Select - SQLModel/SQLAlchemy query
        page: int,
        limit: int,
        order_by: Sequence[Any],
    ) -> tuple[Sequence[Any], int]:
        """Execute offset pagination on a query.

        Args:
            query: The filtered base query (no ordering/limit applied yet)
            page: 1-based page number
            limit: Page size, already clamped by the caller
            order_by: Ordering clauses applied to the page query

        Returns:
            Tuple of (rows, total) where total counts every row matching the
            filters, ignoring pagination.
        """
        count_query = select(func.count()).select_from(query.order_by(None).subquery())
        total = int((await self.session.execute(count_query)).scalar_one())

        page_query = query.order_by(*order_by).limit(limit).offset((page - 1) * limit)
        result = await self.session.execute(page_query)
        return result.all(), total
