"""
Base repository class with common CRUD operations using async SQLAlchemy.
Provides generic database operations that can be extended by specific repositories.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete, func, and_, asc, desc
from cityhom.database import Base
from typing import TypeVar, Generic, Optional, List, Dict, Any, Type, Tuple, Sequence
from datetime import datetime
import uuid
import logging

logger = logging.getLogger(__name__)

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Base repository class providing common CRUD operations.
    Uses async SQLAlchemy for all database operations with proper error handling.
    """

    def __init__(self, model: Type[ModelType], db: AsyncSession):
        """
        Initialize repository with model class and database session.

        Args:
            model: SQLAlchemy model class
            db: Async database session
        """
        self.model = model
        self.db = db

    async def create(self, obj_in: Dict[str, Any]) -> ModelType:
        """
        Create a new record in the database.

        Args:
            obj_in: Dictionary of field values for the new record

        Returns:
            Created model instance
        """
        try:
            db_obj = self.model(**obj_in)
            self.db.add(db_obj)
            await self.db.commit()
            await self.db.refresh(db_obj)
            logger.debug(f"Created {self.model.__name__} with id: {db_obj.id}")
            return db_obj
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Failed to create {self.model.__name__}: {e}")
            raise

    async def get_by_id(self, id: uuid.UUID) -> Optional[ModelType]:
        """
        Get a record by its ID.

        Returns:
            Model instance if found, None otherwise
        """
        try:
            result = await self.db.execute(select(self.model).where(self.model.id == id))
            obj = result.scalar_one_or_none()

            if not obj:
                logger.debug(f"{self.model.__name__} with id {id} not found")

            return obj
        except Exception as e:
            logger.error(f"Failed to get {self.model.__name__} by id {id}: {e}")
            raise

    async def get_by_field(self, field: str, value: Any) -> Optional[ModelType]:
        """
        Get a record by a specific field value.

        Args:
            field: Field name to search by
            value: Value to search for

        Returns:
            Model instance if found, None otherwise
        """
        if not hasattr(self.model, field):
            raise ValueError(f"Field '{field}' does not exist on {self.model.__name__}")

        try:
            query = select(self.model).where(getattr(self.model, field) == value)
            result = await self.db.execute(query)
            return result.scalars().first()
        except Exception as e:
            logger.error(f"Failed to get {self.model.__name__} by {field}={value}: {e}")
            raise

    async def get_multi(
        self,
        skip: int = 0,
        limit: int = 100,
        filters: Optional[Dict[str, Any]] = None,
        order_by: Optional[str] = None
    ) -> List[ModelType]:
        """
        Get multiple records with optional equality filters, pagination, and ordering.

        Args:
            skip: Number of records to skip
            limit: Maximum number of records to return
            filters: Dictionary of field filters
            order_by: Field name to order by (prefix with '-' for descending)

        Returns:
            List of model instances
        """
        try:
            query = select(self.model)
            conditions = self._equality_conditions(filters)
            if conditions:
                query = query.where(and_(*conditions))

            query = query.order_by(*self._ordering(order_by)).offset(skip).limit(limit)

            result = await self.db.execute(query)
            return list(result.scalars().all())
        except Exception as e:
            logger.error(f"Failed to get multiple {self.model.__name__} records: {e}")
            raise

    async def paginate(
        self,
        conditions: Sequence[Any] = (),
        skip: int = 0,
        limit: int = 10,
        order_by: Optional[str] = None
    ) -> Tuple[List[ModelType], int]:
        """
        Fetch one window of records matching `conditions` along with the total match count.

        Returns:
            Tuple of (records, total count)
        """
        try:
            query = select(self.model)
            count_query = select(func.count(self.model.id))
            if conditions:
                query = query.where(and_(*conditions))
                count_query = count_query.where(and_(*conditions))

            total = (await self.db.execute(count_query)).scalar() or 0

            query = query.order_by(*self._ordering(order_by)).offset(skip).limit(limit)
            result = await self.db.execute(query)
            return list(result.scalars().all()), total
        except Exception as e:
            logger.error(f"Failed to paginate {self.model.__name__} records: {e}")
            raise

    async def update(self, id: uuid.UUID, obj_in: Dict[str, Any]) -> Optional[ModelType]:
        """
        Update a record by its ID.

        Args:
            id: UUID of the record to update
            obj_in: Dictionary of field values to update

        Returns:
            Updated model instance if found, None otherwise
        """
        try:
            db_obj = await self.get_by_id(id)
            if not db_obj:
                return None

            if not obj_in:
                logger.warning(f"No valid data provided for updating {self.model.__name__} {id}")
                return db_obj

            for field, value in obj_in.items():
                setattr(db_obj, field, value)

            await self.db.commit()
            await self.db.refresh(db_obj)
            logger.debug(f"Updated {self.model.__name__} with id: {id}")
            return db_obj
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Failed to update {self.model.__name__} {id}: {e}")
            raise

    async def delete(self, id: uuid.UUID) -> bool:
        """
        Delete a record by its ID.

        Returns:
            True if record was deleted, False if not found
        """
        try:
            result = await self.db.execute(delete(self.model).where(self.model.id == id))
            await self.db.commit()
            return result.rowcount > 0
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Failed to delete {self.model.__name__} {id}: {e}")
            raise

    async def delete_by_field(self, field: str, value: Any) -> int:
        """Delete every record whose `field` equals `value`. Returns the number removed."""
        try:
            stmt = delete(self.model).where(getattr(self.model, field) == value)
            result = await self.db.execute(stmt)
            await self.db.commit()
            logger.debug(f"Deleted {result.rowcount} {self.model.__name__} records by {field}")
            return result.rowcount
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Failed to delete {self.model.__name__} records by {field}: {e}")
            raise

    async def count(self, filters: Optional[Dict[str, Any]] = None) -> int:
        """Count records with optional equality filters."""
        try:
            query = select(func.count(self.model.id))
            conditions = self._equality_conditions(filters)
            if conditions:
                query = query.where(and_(*conditions))

            result = await self.db.execute(query)
            return result.scalar() or 0
        except Exception as e:
            logger.error(f"Failed to count {self.model.__name__} records: {e}")
            raise

    async def count_since(self, since: Optional[datetime] = None) -> int:
        """Count all records, or only those created at or after `since`."""
        query = select(func.count(self.model.id))
        if since is not None:
            query = query.where(self.model.created_at >= since)
        result = await self.db.execute(query)
        return result.scalar() or 0

    async def latest(self, limit: int) -> List[ModelType]:
        """Most recently created records."""
        return await self.get_multi(limit=limit)

    async def exists(self, id: uuid.UUID) -> bool:
        """Check if a record exists by its ID."""
        query = select(func.count(self.model.id)).where(self.model.id == id)
        result = await self.db.execute(query)
        return (result.scalar() or 0) > 0

    def _equality_conditions(self, filters: Optional[Dict[str, Any]]) -> List[Any]:
        conditions = []
        for field, value in (filters or {}).items():
            if hasattr(self.model, field):
                column = getattr(self.model, field)
                conditions.append(column.in_(value) if isinstance(value, list) else column == value)
        return conditions

    def _ordering(self, order_by: Optional[str]) -> List[Any]:
        """Resolve the ordering; newest first unless a known field is given."""
        if order_by:
            field_name = order_by.lstrip("-")
            if hasattr(self.model, field_name):
                column = getattr(self.model, field_name)
                primary = desc(column) if order_by.startswith("-") else asc(column)
                return [primary, desc(self.model.created_at)]
        return [desc(self.model.created_at)]
