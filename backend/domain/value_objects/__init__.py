"""
Domain Value Objects

Value objects are immutable types that represent descriptive aspects of the domain.
They have no conceptual identity and are compared by their values, not by ID.

Examples:
- PostsList: One page of forum posts plus the total row count for the filter
- FieldError / ValidationErrors: Rejected fields collected by a validator
"""

from .posts_list import PostsList
from .validation_errors import FieldError, ValidationErrors

__all__ = [
    "PostsList",
    "FieldError",
    "ValidationErrors",
]
