"""
Forum repository for thread listings and thread pages.

Every listing returns a PostsList: the requested page plus the number of
posts matching the same filter.
"""

from typing import Any, Dict, List, Type
import logging

from sqlalchemy import func
from sqlalchemy.orm import Session

from constants import Defaults
from domain.value_objects import PostsList
from models import ForumPost, SchoolForumPost, UserForumPost
from .base_repository import BaseRepository
from .forum_specifications import InThreadSpec, ScopedToSpec, ThreadRootSpec
from .query import Ordering, QueryDescriptor

logger = logging.getLogger(__name__)

NEWEST_FIRST = (Ordering.desc('date'), Ordering.desc('id'))
OLDEST_FIRST = (Ordering.asc('date'), Ordering.asc('id'))


class ForumRepository(BaseRepository[ForumPost]):
    """Repository for ForumPost model operations."""

    def __init__(self, db: Session, max_page_size: int = Defaults.MAX_PAGE_SIZE):
        super().__init__(db, ForumPost, max_page_size=max_page_size)

    def get_threads(
        self,
        post_class: Type[ForumPost],
        scope_field: str,
        scope_id: Any,
        start: int,
        max: int
    ) -> PostsList:
        """
        Thread roots posted in one scope, newest first.

        Args:
            post_class: ForumPost subclass for the scope (SchoolForumPost, UserForumPost)
            scope_field: Foreign key attribute on post_class naming the scope
            scope_id: Id of the school or user the threads belong to
            start: Number of threads to skip
            max: Maximum number of threads to return

        Returns:
            PostsList of thread roots, each with reply_count set
        """
        spec = ScopedToSpec(post_class, scope_field, scope_id) & ThreadRootSpec(post_class)
        descriptor = QueryDescriptor(post_class, spec).ordered_by(*NEWEST_FIRST).with_page(start, max)
        return self._threads_page(descriptor)

    def get_school_threads(self, school_id: str, start: int, max: int) -> PostsList:
        return self.get_threads(SchoolForumPost, 'school_id', school_id, start, max)

    def get_user_threads(self, user_id: str, start: int, max: int) -> PostsList:
        return self.get_threads(UserForumPost, 'topic_user_id', user_id, start, max)

    def get_recent_forum_posts(self, start: int, max: int) -> PostsList:
        """Newest thread roots across every scope."""
        descriptor = QueryDescriptor(ForumPost, ThreadRootSpec()).ordered_by(*NEWEST_FIRST).with_page(start, max)
        return self._threads_page(descriptor)

    def get_posts_for_thread(self, post: ForumPost, start: int, max: int) -> PostsList:
        """
        A thread page: the root post and its replies, oldest first.

        Args:
            post: Thread root
            start: Number of posts to skip
            max: Maximum number of posts to return
        """
        descriptor = QueryDescriptor(ForumPost, InThreadSpec(post.id)).ordered_by(*OLDEST_FIRST).with_page(start, max)
        posts, total = self.fetch_with_count(descriptor)
        return PostsList(posts, total)

    def count_replies(self, thread_ids: List[str]) -> Dict[str, int]:
        """
        Number of replies per thread root, from one grouped COUNT query.

        Threads without replies are absent from the result.
        """
        if not thread_ids:
            return {}
        rows = self.db.query(ForumPost.thread_id, func.count(ForumPost.id)).filter(
            ForumPost.thread_id.in_(thread_ids)
        ).group_by(ForumPost.thread_id).all()
        return {thread_id: count for thread_id, count in rows}

    def _threads_page(self, descriptor: QueryDescriptor) -> PostsList:
        posts, total = self.fetch_with_count(descriptor)
        reply_counts = self.count_replies([p.id for p in posts])
        for post in posts:
            post.reply_count = reply_counts.get(post.id, 0)
        logger.debug(f"Loaded {len(posts)} of {total} threads")
        return PostsList(posts, total)
