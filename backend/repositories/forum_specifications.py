"""
Forum-specific Specifications

Thread roots, scope filters and thread membership for forum posts.
"""

from typing import Any, Type

from models import ForumPost
from .specifications import FieldEqualsSpec, FieldIsNullSpec, Specification


class ThreadRootSpec(FieldIsNullSpec):
    """Posts that start a thread (no parent thread reference)."""

    def __init__(self, model: Type[ForumPost] = ForumPost):
        super().__init__(model, 'thread_id')


class ScopedToSpec(FieldEqualsSpec):
    """
    Posts belonging to a scope entity.

    ``scope_field`` names the foreign key column on the post class, for
    example ``school_id`` on SchoolForumPost or ``topic_user_id`` on
    UserForumPost.
    """

    def __init__(self, model: Type[ForumPost], scope_field: str, scope_id: Any):
        super().__init__(model, scope_field, scope_id)


class InThreadSpec(Specification[ForumPost]):
    """The thread root itself plus every post replying to it."""

    def __init__(self, root_id: str, model: Type[ForumPost] = ForumPost):
        self.root_id = root_id
        self.spec = (
            FieldEqualsSpec(model, 'thread_id', root_id)
            | FieldEqualsSpec(model, 'id', root_id)
        )

    def is_satisfied_by(self, candidate: ForumPost) -> bool:
        return self.spec.is_satisfied_by(candidate)

    def to_sql_filter(self):
        return self.spec.to_sql_filter()
