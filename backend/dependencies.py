"""
Dependency providers.

Factory functions that build repositories and services for one database
session, taking limits and keys from the application configuration. Callers
(request handlers, scripts, tests) use these instead of constructing the
objects by hand, so collaborators can be swapped in one place.
"""

from typing import Optional

from sqlalchemy.orm import Session

from config.app_config import AppConfig, get_config
from repositories.forum_repository import ForumRepository
from repositories.school_repository import SchoolRepository
from services.create_user_validator import CreateUserRequestValidator
from services.interfaces import IInvitationService, IUserService
from services.invitation_service import InvitationService
from services.signup_service import SignupService
from services.user_service import UserService


def get_school_repository(db: Session, config: Optional[AppConfig] = None) -> SchoolRepository:
    """
    Factory function for creating SchoolRepository instances.

    Args:
        db: Database session
        config: Application configuration (defaults to the process config)

    Returns:
        SchoolRepository instance
    """
    config = config or get_config()
    return SchoolRepository(
        db,
        autocomplete_max=config.autocomplete_max,
        max_page_size=config.max_page_size,
        interested_users_max=config.interested_users_max,
    )


def get_forum_repository(db: Session, config: Optional[AppConfig] = None) -> ForumRepository:
    config = config or get_config()
    return ForumRepository(db, max_page_size=config.max_page_size)


def get_user_service(db: Session) -> UserService:
    return UserService(db)


def get_invitation_service(db: Session, config: Optional[AppConfig] = None) -> InvitationService:
    config = config or get_config()
    return InvitationService(db, master_key=config.invitation_master_key)


def get_signup_validator(
    invitation_service: IInvitationService,
    user_service: IUserService
) -> CreateUserRequestValidator:
    """
    Factory function for the signup validator.

    Note: any IInvitationService / IUserService implementation works here,
    including in-memory fakes for testing.
    """
    return CreateUserRequestValidator(invitation_service, user_service)


def get_signup_service(db: Session, config: Optional[AppConfig] = None) -> SignupService:
    user_service = get_user_service(db)
    invitation_service = get_invitation_service(db, config)
    return SignupService(
        db,
        user_service=user_service,
        invitation_service=invitation_service,
        validator=get_signup_validator(invitation_service, user_service),
    )
