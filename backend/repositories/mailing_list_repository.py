"""
Mailing list repository for invitation entries.
"""

from typing import Optional

from sqlalchemy.orm import Session

from models import MailingListEntry
from .base_repository import BaseRepository
from .specifications import FieldEqualsSpec


class MailingListRepository(BaseRepository[MailingListEntry]):
    """Repository for MailingListEntry model operations."""

    def __init__(self, db: Session):
        super().__init__(db, MailingListEntry)

    def get_by_key(self, random_key: str) -> Optional[MailingListEntry]:
        """
        Get the invitation entry holding a random key.

        Args:
            random_key: Invitation key

        Returns:
            The entry, or None if no invitation uses that key
        """
        return self.find_unique(FieldEqualsSpec(MailingListEntry, 'random_key', random_key))
