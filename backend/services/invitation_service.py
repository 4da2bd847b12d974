"""
Invitation Service

Issues invitation keys to mailing-list entries and answers whether a key
can be used for signup.
"""

from typing import Optional
import logging
import uuid

from sqlalchemy.orm import Session

from models import MailingListEntry, User
from repositories.mailing_list_repository import MailingListRepository
from services.interfaces import IInvitationService

logger = logging.getLogger(__name__)


class InvitationService(IInvitationService):
    """Database-backed invitation checks."""

    def __init__(self, db: Session, master_key: Optional[str] = None):
        """
        Initialize InvitationService.

        Args:
            db: Database session
            master_key: Key accepted regardless of the mailing list (optional)
        """
        self.db = db
        self.master_key = master_key
        self.mailing_list_repo = MailingListRepository(db)

    def is_key_valid(self, random_key: str) -> bool:
        if not random_key or not random_key.strip():
            return False
        if self.master_key and random_key == self.master_key:
            return True
        return self.mailing_list_repo.get_by_key(random_key) is not None

    def get_entry_for_key(self, random_key: str) -> Optional[MailingListEntry]:
        if not random_key:
            return None
        return self.mailing_list_repo.get_by_key(random_key)

    def create_entry(self, email: str) -> MailingListEntry:
        """
        Add an address to the mailing list with a fresh invitation key.

        Args:
            email: Address the invitation is sent to

        Returns:
            The new entry
        """
        entry = MailingListEntry(email=email, random_key=uuid.uuid4().hex)
        self.mailing_list_repo.save(entry)
        logger.info(f"Issued invitation key for {email}")
        return entry

    def mark_signed_up(self, entry: MailingListEntry, user: User) -> MailingListEntry:
        """Attach the user who consumed the entry's key."""
        entry.signed_up_user = user
        return self.mailing_list_repo.save(entry)
