"""
Query descriptors.

A QueryDescriptor bundles everything needed to run a list query: the model,
a filter Specification, an ordering and an optional page window. Repositories
interpret descriptors; the row count for a descriptor reuses its filter
unchanged and ignores ordering and paging.
"""

from dataclasses import dataclass, field, replace
from typing import Generic, Optional, Tuple, Type, TypeVar

from exceptions import ValidationError
from .specifications import AllSpecification, Specification

T = TypeVar('T')


def _is_count(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


@dataclass(frozen=True)
class Ordering:
    """Sort on one attribute of the queried model."""

    field: str
    descending: bool = False

    @classmethod
    def asc(cls, field: str) -> "Ordering":
        return cls(field, False)

    @classmethod
    def desc(cls, field: str) -> "Ordering":
        return cls(field, True)

    def to_sql(self, model):
        column = getattr(model, self.field)
        return column.desc() if self.descending else column.asc()


@dataclass(frozen=True)
class Page:
    """
    A window of rows: skip ``start``, return at most ``max``.

    Negative values are rejected; callers clamp ``max`` with ``bounded``.
    """

    start: int = 0
    max: int = 20

    def __post_init__(self):
        invalid = {}
        if not _is_count(self.start):
            invalid['start'] = self.start
        if not _is_count(self.max):
            invalid['max'] = self.max
        if invalid:
            raise ValidationError("Pagination values must be non-negative integers",
                                  invalid_fields=invalid)

    def bounded(self, limit: int) -> "Page":
        if self.max <= limit:
            return self
        return replace(self, max=limit)


@dataclass(frozen=True)
class QueryDescriptor(Generic[T]):
    """Filter + sort + pagination for one model."""

    model: Type[T]
    spec: Specification[T] = field(default_factory=AllSpecification)
    order_by: Tuple[Ordering, ...] = ()
    page: Optional[Page] = None

    def with_page(self, start: int, max: int) -> "QueryDescriptor[T]":
        return replace(self, page=Page(start, max))

    def ordered_by(self, *orderings: Ordering) -> "QueryDescriptor[T]":
        return replace(self, order_by=tuple(orderings))

    def where(self, spec: Specification[T]) -> "QueryDescriptor[T]":
        return replace(self, spec=spec)
