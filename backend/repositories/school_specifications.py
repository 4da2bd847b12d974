"""
School-specific Specifications

Concrete specifications for querying schools, their applications and the
lookup tables (process and rating types).
"""

from typing import Type

from constants import MatchMode
from models import Application, School
from .specifications import FieldEqualsSpec, FieldMatchesSpec


class SchoolNameMatchesSpec(FieldMatchesSpec[School]):
    """Schools whose name contains (or starts with) a pattern, ignoring case."""

    def __init__(self, pattern: str, match_mode: MatchMode = MatchMode.ANYWHERE):
        super().__init__(School, 'name', pattern, match_mode)


class SchoolNamedSpec(FieldEqualsSpec[School]):
    """Schools with exactly this name."""

    def __init__(self, name: str):
        super().__init__(School, 'name', name)


class NameEqualsSpec(FieldEqualsSpec):
    """Rows of any model with a ``name`` attribute equal to a value."""

    def __init__(self, model: Type, name: str):
        super().__init__(model, 'name', name)


class UsedByDefaultSpec(FieldEqualsSpec):
    """Process or rating types flagged for use by default."""

    def __init__(self, model: Type):
        super().__init__(model, 'use_by_default', True)


class ApplicationsForSchoolSpec(FieldEqualsSpec[Application]):
    """Applications made to one school."""

    def __init__(self, school_id: str):
        super().__init__(Application, 'school_id', school_id)
