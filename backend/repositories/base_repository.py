"""
Base repository providing common CRUD operations and query-descriptor
execution.
"""

from typing import Any, Generic, List, Optional, Tuple, Type, TypeVar
import logging

from sqlalchemy.orm import Session, Query
from sqlalchemy.exc import MultipleResultsFound

from constants import Defaults
from exceptions import IncorrectResultSizeError
from .query import QueryDescriptor
from .specifications import Specification

T = TypeVar('T')

logger = logging.getLogger(__name__)


class BaseRepository(Generic[T]):
    """
    Generic base repository providing common CRUD operations.
    All specific repositories should inherit from this class.
    """

    def __init__(self, db: Session, model: Type[T], max_page_size: int = Defaults.MAX_PAGE_SIZE):
        """
        Initialize the repository.

        Args:
            db: SQLAlchemy database session
            model: SQLAlchemy model class
            max_page_size: Upper bound applied to every page size
        """
        self.db = db
        self.model = model
        self.max_page_size = max_page_size

    # Plain CRUD

    def get(self, model: Type[Any], id: Any) -> Optional[Any]:
        """
        Retrieve a record of any mapped type by primary key.

        Returns:
            Model instance or None if not found
        """
        return self.db.get(model, id)

    def get_by_id(self, id: Any) -> Optional[T]:
        return self.get(self.model, id)

    def save(self, obj: Any) -> Any:
        """
        Insert or update a record.

        The session is flushed so a new record has its id assigned on return.
        """
        self.db.add(obj)
        self.db.flush()
        return obj

    def delete(self, obj: Any) -> None:
        """
        Delete a record and flush, so later reads in the same unit of work
        no longer see it.
        """
        self.db.delete(obj)
        self.db.flush()

    # Query descriptors

    def descriptor(self, spec: Optional[Specification[T]] = None) -> QueryDescriptor[T]:
        """Start a descriptor for this repository's model."""
        if spec is None:
            return QueryDescriptor(self.model)
        return QueryDescriptor(self.model, spec)

    def _filtered(self, descriptor: QueryDescriptor) -> Query:
        return self.db.query(descriptor.model).filter(descriptor.spec.to_sql_filter())

    def fetch(self, descriptor: QueryDescriptor) -> List[Any]:
        """
        Run a descriptor: filter, order, then apply its page window.

        Args:
            descriptor: Query descriptor to execute

        Returns:
            List of matching model instances
        """
        query = self._filtered(descriptor)
        if descriptor.order_by:
            query = query.order_by(*(o.to_sql(descriptor.model) for o in descriptor.order_by))
        if descriptor.page is not None:
            page = descriptor.page.bounded(self.max_page_size)
            if page.max != descriptor.page.max:
                logger.debug(f"Clamped page size {descriptor.page.max} to {page.max}")
            query = query.offset(page.start).limit(page.max)
        return query.all()

    def count(self, descriptor: Optional[QueryDescriptor] = None) -> int:
        """
        Count rows matching a descriptor's filter.

        Ordering and paging are ignored so the total is independent of the
        page that was fetched.
        """
        if descriptor is None:
            descriptor = self.descriptor()
        return self._filtered(descriptor).order_by(None).count()

    def fetch_with_count(self, descriptor: QueryDescriptor) -> Tuple[List[Any], int]:
        return self.fetch(descriptor), self.count(descriptor)

    def find(self, spec: Specification, model: Optional[Type[Any]] = None) -> List[Any]:
        return self.fetch(QueryDescriptor(model or self.model, spec))

    def find_unique(self, spec: Specification, model: Optional[Type[Any]] = None) -> Optional[Any]:
        """
        Find the single row matching a specification.

        Returns:
            The matching row, or None when nothing matches

        Raises:
            IncorrectResultSizeError: If more than one row matches
        """
        descriptor = QueryDescriptor(model or self.model, spec)
        query = self._filtered(descriptor)
        try:
            return query.one_or_none()
        except MultipleResultsFound:
            actual = query.order_by(None).count()
            logger.error(f"Unique lookup on {descriptor.model.__name__} matched {actual} rows")
            raise IncorrectResultSizeError(descriptor.model.__name__, 1, actual)

