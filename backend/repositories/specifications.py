"""
Specification Pattern Implementation

A specification is the filter half of a query descriptor: it renders to a
SQLAlchemy filter expression for the database and can also test an object
in memory. Specifications compose with ``&``, ``|`` and ``~``.

The generic field specifications at the bottom address columns by attribute
name, so callers can build filters without touching mapped columns.
"""

from abc import ABC, abstractmethod
from typing import Any, Generic, Type, TypeVar

from sqlalchemy import and_, or_, not_, true

from constants import MatchMode


T = TypeVar('T')

LIKE_ESCAPE = '\\'


def escape_like(value: str) -> str:
    """Escape LIKE wildcards so user input is matched literally."""
    return (
        value.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace('%', LIKE_ESCAPE + '%')
        .replace('_', LIKE_ESCAPE + '_')
    )


class Specification(ABC, Generic[T]):
    """
    Abstract base class for specifications.

    A specification encapsulates a single business rule or query criterion.
    """

    @abstractmethod
    def is_satisfied_by(self, candidate: T) -> bool:
        """
        Check if a candidate object satisfies this specification.

        Args:
            candidate: Object to check

        Returns:
            True if candidate satisfies specification
        """

    @abstractmethod
    def to_sql_filter(self):
        """
        Convert specification to SQLAlchemy filter expression.

        Returns:
            SQLAlchemy filter expression
        """

    def __and__(self, other: "Specification[T]") -> "AndSpecification[T]":
        return AndSpecification(self, other)

    def __or__(self, other: "Specification[T]") -> "OrSpecification[T]":
        return OrSpecification(self, other)

    def __invert__(self) -> "NotSpecification[T]":
        return NotSpecification(self)


class AndSpecification(Specification[T]):
    """Both specifications must hold."""

    def __init__(self, left: Specification[T], right: Specification[T]):
        self.left = left
        self.right = right

    def is_satisfied_by(self, candidate: T) -> bool:
        return self.left.is_satisfied_by(candidate) and self.right.is_satisfied_by(candidate)

    def to_sql_filter(self):
        return and_(self.left.to_sql_filter(), self.right.to_sql_filter())


class OrSpecification(Specification[T]):
    """Either specification may hold."""

    def __init__(self, left: Specification[T], right: Specification[T]):
        self.left = left
        self.right = right

    def is_satisfied_by(self, candidate: T) -> bool:
        return self.left.is_satisfied_by(candidate) or self.right.is_satisfied_by(candidate)

    def to_sql_filter(self):
        return or_(self.left.to_sql_filter(), self.right.to_sql_filter())


class NotSpecification(Specification[T]):
    """Negates another specification."""

    def __init__(self, spec: Specification[T]):
        self.spec = spec

    def is_satisfied_by(self, candidate: T) -> bool:
        return not self.spec.is_satisfied_by(candidate)

    def to_sql_filter(self):
        return not_(self.spec.to_sql_filter())


class AllSpecification(Specification[T]):
    """Matches every row; used when a query has no filter."""

    def is_satisfied_by(self, candidate: T) -> bool:
        return True

    def to_sql_filter(self):
        return true()


class FieldSpecification(Specification[T]):
    """Base for specifications on a single named attribute of a model."""

    def __init__(self, model: Type[T], field: str):
        if not hasattr(model, field):
            raise AttributeError(f"{model.__name__} has no attribute {field!r}")
        self.model = model
        self.field = field

    @property
    def column(self):
        return getattr(self.model, self.field)

    def value_of(self, candidate: T) -> Any:
        return getattr(candidate, self.field)


class FieldEqualsSpec(FieldSpecification[T]):
    """Attribute equals a value."""

    def __init__(self, model: Type[T], field: str, value: Any):
        super().__init__(model, field)
        self.value = value

    def is_satisfied_by(self, candidate: T) -> bool:
        return self.value_of(candidate) == self.value

    def to_sql_filter(self):
        return self.column == self.value


class FieldIsNullSpec(FieldSpecification[T]):
    """Attribute is NULL."""

    def is_satisfied_by(self, candidate: T) -> bool:
        return self.value_of(candidate) is None

    def to_sql_filter(self):
        return self.column.is_(None)


class FieldMatchesSpec(FieldSpecification[T]):
    """Case-insensitive LIKE on a text attribute, positioned by a MatchMode."""

    def __init__(self, model: Type[T], field: str, pattern: str,
                 match_mode: MatchMode = MatchMode.ANYWHERE):
        super().__init__(model, field)
        self.pattern = pattern
        self.match_mode = MatchMode(match_mode)

    def is_satisfied_by(self, candidate: T) -> bool:
        value = self.value_of(candidate)
        return value is not None and self.match_mode.matches(value, self.pattern)

    def to_sql_filter(self):
        like = self.match_mode.to_like_pattern(escape_like(self.pattern))
        return self.column.ilike(like, escape=LIKE_ESCAPE)
