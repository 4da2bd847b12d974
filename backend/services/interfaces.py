"""
Service Interfaces

Abstract base classes for the collaborators the signup validator consults.
Implementations are passed in by the caller, so the validator can run
against in-memory fakes as well as the database-backed services.
"""

from abc import ABC, abstractmethod
from typing import Optional

from models import MailingListEntry


class IInvitationService(ABC):
    """
    Interface for invitation key checks.

    A key is issued per mailing-list entry and may be used for one signup.
    """

    @abstractmethod
    def is_key_valid(self, random_key: str) -> bool:
        """
        Check whether an invitation key may be used to sign up.

        Args:
            random_key: Key submitted with the signup form

        Returns:
            True if the key is recognized
        """
        pass

    @abstractmethod
    def get_entry_for_key(self, random_key: str) -> Optional[MailingListEntry]:
        """
        Get the mailing-list entry a key was issued for.

        Args:
            random_key: Invitation key

        Returns:
            The entry, or None if the key was not issued to an entry
        """
        pass


class IUserService(ABC):
    """
    Interface for user-existence checks.

    Focused on the lookups signup validation needs, following the Interface
    Segregation Principle.
    """

    @abstractmethod
    def exists(self, username: str) -> bool:
        """
        Check whether a username (or normalized OpenID) is registered.

        Raises:
            ApplicationError: If the lookup itself cannot be performed
        """
        pass

    @abstractmethod
    def exists_nickname(self, nickname: str) -> bool:
        """Check whether an OpenID member already uses this nickname."""
        pass

    @abstractmethod
    def could_be_openid(self, identifier: str) -> bool:
        """Check whether a string has the shape of an OpenID identifier."""
        pass
