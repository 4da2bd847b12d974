"""
User Service

Account lookups and account creation. Usernames are lower-cased before they
are stored or looked up; OpenID members are stored under their normalized
identifier.
"""

import logging

from sqlalchemy.orm import Session

from dtos.request.user_request import CreateUserRequestCommand
from models import User
from repositories.user_repository import UserRepository
from services.interfaces import IUserService
from utils.openid_helper import looks_like_openid, normalize_openid

logger = logging.getLogger(__name__)


class UserService(IUserService):
    """Service for user lookups and account creation."""

    def __init__(self, db: Session):
        """
        Initialize UserService.

        Args:
            db: Database session
        """
        self.db = db
        self.user_repo = UserRepository(db)

    def exists(self, username: str) -> bool:
        if not username:
            return False
        return self.user_repo.username_exists(username)

    def exists_nickname(self, nickname: str) -> bool:
        if not nickname or not nickname.strip():
            return False
        return self.user_repo.nickname_exists(nickname.strip())

    def could_be_openid(self, identifier: str) -> bool:
        return looks_like_openid(identifier)

    def normalize_openid(self, identifier: str) -> str:
        return normalize_openid(identifier)

    def create_user(self, command: CreateUserRequestCommand) -> User:
        """
        Create the account described by a validated signup command.

        Args:
            command: Signup command that passed validation

        Returns:
            The new, flushed User
        """
        if command.is_openid:
            user = User(
                username=self.normalize_openid(command.openid_username).lower(),
                nickname=command.openid_nickname.strip() or None,
                email=command.email or None,
                is_openid=True,
            )
        else:
            user = User(
                username=command.username.lower(),
                email=command.email or None,
                is_openid=False,
            )
            user.set_password(command.password)
        self.user_repo.save(user)
        logger.info(f"Created {'OpenID' if user.is_openid else 'standard'} user {user.username}")
        return user
