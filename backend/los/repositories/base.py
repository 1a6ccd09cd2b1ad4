from typing import Any, Generic, Optional, Type, TypeVar
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from los.db.base import BaseModel

# Type variable for the model class
ModelType = TypeVar("ModelType", bound=BaseModel)


class BaseRepository(Generic[ModelType]):
    """
    Generic base repository for entities keyed by a UUID surrogate.

    Repositories flush but never commit: the service that owns the session
    decides when a unit of work ends. Rows are never deleted through it.

    Type Parameters:
        ModelType: The SQLAlchemy model class this repository manages
    """

    def __init__(self, model: Type[ModelType], db: AsyncSession):
        """
        Initialize the repository.

        Args:
            model: The SQLAlchemy model class
            db: Async database session
        """
        self.model = model
        self.db = db

    async def save(self, instance: ModelType) -> ModelType:
        """
        Stage a new or tracked entity and flush it so generated values are set.

        Args:
            instance: Entity to persist

        Returns:
            The same entity
        """
        self.db.add(instance)
        await self.db.flush()
        return instance

    async def get_by_id(self, id: UUID) -> Optional[ModelType]:
        """
        Retrieve an entity by its surrogate ID.

        Args:
            id: The UUID of the entity

        Returns:
            The entity if found, None otherwise
        """
        stmt = select(self.model).where(self.model.id == id)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def exists(self, id: UUID) -> bool:
        stmt = select(self.model.id).where(self.model.id == id)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def count(self, **filters: Any) -> int:
        """
        Count entities whose columns equal the given values.

        Args:
            **filters: Column equality filters (e.g., status=LoanStatus.APPLIED)

        Returns:
            Number of matching rows
        """
        stmt = select(func.count(self.model.id))
        for field, value in filters.items():
            stmt = stmt.where(getattr(self.model, field) == value)

        result = await self.db.execute(stmt)
        return result.scalar_one()
