"""
Repository layer for data access abstraction.

This package contains repository classes that encapsulate database queries
and provide a clean interface for data access operations. List queries are
expressed as QueryDescriptors (filter Specification + ordering + Page).
"""

from .base_repository import BaseRepository
from .query import Ordering, Page, QueryDescriptor
from .school_repository import SchoolRepository
from .forum_repository import ForumRepository
from .user_repository import UserRepository
from .mailing_list_repository import MailingListRepository

__all__ = [
    "BaseRepository",
    "Ordering",
    "Page",
    "QueryDescriptor",
    "SchoolRepository",
    "ForumRepository",
    "UserRepository",
    "MailingListRepository",
]
