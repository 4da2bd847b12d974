"""
Signup Service

Turns a signup command into an account: validate, then create the user and
consume the invitation key, all inside the caller's unit of work.
"""

from sqlalchemy.orm import Session

from dtos.request.user_request import CreateUserRequestCommand
from exceptions import ValidationError
from models import User
from services.create_user_validator import CreateUserRequestValidator
from services.invitation_service import InvitationService
from services.user_service import UserService
from utils.logging_utils import StructuredLogger, log_operation, logging_context

logger = StructuredLogger(__name__)


class SignupService:
    """Service for invitation-gated user signup."""

    def __init__(
        self,
        db: Session,
        user_service: UserService,
        invitation_service: InvitationService,
        validator: CreateUserRequestValidator | None = None,
    ):
        """
        Initialize SignupService.

        Args:
            db: Database session of the current unit of work
            user_service: Creates accounts and answers existence checks
            invitation_service: Answers key checks and consumes keys
            validator: Defaults to a validator over the two services
        """
        self.db = db
        self.user_service = user_service
        self.invitation_service = invitation_service
        self.validator = validator or CreateUserRequestValidator(invitation_service, user_service)

    @log_operation("signup")
    def register(self, command: CreateUserRequestCommand) -> User:
        """
        Validate a signup and create the account.

        Args:
            command: Submitted signup

        Returns:
            The new user, flushed but not committed

        Raises:
            ValidationError: With invalid_fields mapping field -> message codes
        """
        with logging_context(randomkey=command.randomkey):
            errors = self.validator.validate(command)
            if errors:
                raise ValidationError("Signup request is invalid", invalid_fields=errors.as_dict())

            user = self.user_service.create_user(command)

            entry = self.invitation_service.get_entry_for_key(command.randomkey)
            if entry is not None:
                self.invitation_service.mark_signed_up(entry, user)

            logger.info("Signed up new user", extra={"user_id": user.id, "username": user.username})
            return user
