"""
Base repository class with common data access operations.

Provides a foundation for all repository classes with:
- Common query methods (get, get_all, filter_by)
- Whole-collection replace, the only write path the auction needs
- Ordering by the stored ``position`` column
"""

from typing import Generic, List, Optional, Sequence, Type, TypeVar

from sqlalchemy import delete, func, select

from app import db

T = TypeVar('T')


class BaseRepository(Generic[T]):
    """Base repository providing common data access operations.

    Attributes:
        model: The SQLAlchemy model class this repository manages.
    """

    def __init__(self, model: Type[T]):
        """Initialize repository with a model class.

        Args:
            model: SQLAlchemy model class.
        """
        self.model = model

    def get(self, id: str) -> Optional[T]:
        """Get a single entity by ID.

        Args:
            id: Primary key value.

        Returns:
            Entity instance or None if not found.
        """
        return db.session.get(self.model, id)

    def get_all(self) -> List[T]:
        """Get all entities in stored order.

        Returns:
            List of all entity instances.
        """
        query = select(self.model)
        if hasattr(self.model, 'position'):
            query = query.order_by(self.model.position)
        return list(db.session.execute(query).scalars().all())

    def filter_by(self, **kwargs) -> List[T]:
        """Get entities matching filter criteria, in stored order.

        Args:
            **kwargs: Filter conditions as keyword arguments.

        Returns:
            List of matching entity instances.
        """
        query = select(self.model).filter_by(**kwargs)
        if hasattr(self.model, 'position'):
            query = query.order_by(self.model.position)
        return list(db.session.execute(query).scalars().all())

    def replace_all(self, instances: Sequence[T]) -> None:
        """Replace the whole collection with ``instances``.

        Rows whose id is absent from ``instances`` are deleted; the rest are
        merged by primary key. Nothing is committed here.

        Args:
            instances: New entity instances, in the order to store them.
        """
        keep = {instance.id for instance in instances}
        for existing in self.get_all():
            if existing.id not in keep:
                db.session.delete(existing)
        for position, instance in enumerate(instances):
            if hasattr(instance, 'position'):
                instance.position = position
            db.session.merge(instance)

    def delete_all(self) -> None:
        """Delete every row of the collection. Nothing is committed here."""
        db.session.execute(delete(self.model))

    def count(self, **kwargs) -> int:
        """Count entities matching filter criteria.

        Args:
            **kwargs: Filter conditions as keyword arguments.

        Returns:
            Count of matching entities.
        """
        query = select(func.count()).select_from(self.model).filter_by(**kwargs)
        return db.session.execute(query).scalar_one()
