"""
Base repository interfaces and utilities.

This module provides the repository pattern shared by every table. CRUD
methods commit their own work; the narrower methods used by the lifecycle
engine only flush, so that a transition and its bookkeeping commit together.
"""

from __future__ import annotations

from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel

# Generic type for SQLModel entities
EntityType = TypeVar("EntityType", bound=SQLModel)


class QueryBuilder:
    """Utility class for building SQLModel-based database queries."""

    @staticmethod
    def apply_filters(stmt, model: Type[EntityType], filters: Dict[str, Any]):
        """Apply equality filters to a select statement.

        ``None`` values and unknown fields are ignored.

        Args:
            stmt: SQLAlchemy select statement
            model: SQLModel entity class
            filters: Dictionary of field filters

        Returns:
            Modified select statement with filters applied
        """
        for key, value in filters.items():
            if value is not None and hasattr(model, key):
                stmt = stmt.where(getattr(model, key) == value)
        return stmt

    @staticmethod
    def apply_pagination(stmt, limit: Optional[int], offset: Optional[int]):
        """Apply pagination to a select statement.

        Args:
            stmt: SQLAlchemy select statement
            limit: Maximum number of records
            offset: Number of records to skip

        Returns:
            Modified select statement with pagination applied
        """
        if limit is not None:
            stmt = stmt.limit(limit)
        if offset is not None:
            stmt = stmt.offset(offset)
        return stmt


class AsyncBaseRepository(Generic[EntityType]):
    """Base async repository with common CRUD operations using SQLModel."""

    def __init__(self, session: AsyncSession, model: Type[EntityType]) -> None:
        """Initialize repository with async database session and SQLModel entity class.

        Args:
            session: Async SQLAlchemy session for database operations
            model: SQLModel entity class for this repository
        """
        self.session = session
        self.model = model

    async def create(self, entity: EntityType) -> EntityType:
        """Persist a new entity and commit.

        Args:
            entity: SQLModel instance to persist

        Returns:
            Persisted entity with generated fields populated
        """
        self.session.add(entity)
        await self.session.commit()
        await self.session.refresh(entity)
        return entity

    async def get_by_id(self, entity_id: int) -> Optional[EntityType]:
        """Get entity by its primary key, or None."""
        return await self.session.get(self.model, entity_id)

    async def update(self, entity: EntityType) -> EntityType:
        """Commit changes made to an entity and return the refreshed row."""
        self.session.add(entity)
        await self.session.commit()
        await self.session.refresh(entity)
        return entity

    async def delete(self, entity_id: int) -> bool:
        """Delete entity by its primary key.

        Returns:
            True if deleted, False if not found
        """
        entity = await self.get_by_id(entity_id)
        if entity is None:
            return False
        await self.session.delete(entity)
        await self.session.commit()
        return True

    async def list(
        self, limit: Optional[int] = None, offset: Optional[int] = None, filters: Optional[Dict[str, Any]] = None
    ) -> List[EntityType]:
        """List entities with optional pagination and equality filtering.

        Args:
            limit: Maximum number of records to return
            offset: Number of records to skip
            filters: Dictionary of field filters

        Returns:
            List of entity instances ordered by primary key
        """
        stmt = select(self.model).order_by(self.model.id)  # type: ignore[attr-defined]
        if filters:
            stmt = QueryBuilder.apply_filters(stmt, self.model, filters)
        stmt = QueryBuilder.apply_pagination(stmt, limit, offset)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
