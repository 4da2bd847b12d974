"""
User repository for account lookups.
"""

from typing import Optional

from sqlalchemy.orm import Session

from models import User
from .base_repository import BaseRepository
from .specifications import FieldEqualsSpec


class UserRepository(BaseRepository[User]):
    """Repository for User model operations."""

    def __init__(self, db: Session):
        super().__init__(db, User)

    def get_by_username(self, username: str) -> Optional[User]:
        """
        Get a user by username. Usernames are stored lower-cased, so the
        lookup is case-insensitive.
        """
        return self.find_unique(FieldEqualsSpec(User, 'username', username.lower()))

    def get_by_nickname(self, nickname: str) -> Optional[User]:
        return self.find_unique(FieldEqualsSpec(User, 'nickname', nickname))

    def username_exists(self, username: str) -> bool:
        return self.count(self.descriptor(FieldEqualsSpec(User, 'username', username.lower()))) > 0

    def nickname_exists(self, nickname: str) -> bool:
        return self.count(self.descriptor(FieldEqualsSpec(User, 'nickname', nickname))) > 0
