"""
Signup Request Validator

Checks a CreateUserRequestCommand and collects every problem found. Checks
never stop at the first failure: each one that fails appends its own
(field, code) pair, so the form can show everything at once.
"""
import re

from constants import MessageCodes, SignupFields, SignupRules
from domain.value_objects import ValidationErrors
from dtos.request.user_request import CreateUserRequestCommand
from exceptions import ApplicationError
from services.interfaces import IInvitationService, IUserService
from utils.logging_utils import StructuredLogger

logger = StructuredLogger(__name__)

USERNAME_RE = re.compile(SignupRules.USERNAME_PATTERN)


class CreateUserRequestValidator:
    """Validator for signup commands"""

    def __init__(self, invitation_service: IInvitationService, user_service: IUserService):
        """
        Initialize the validator.

        Args:
            invitation_service: Answers invitation key questions
            user_service: Answers username/nickname existence questions
        """
        self.invitation_service = invitation_service
        self.user_service = user_service

    def validate(self, command: CreateUserRequestCommand) -> ValidationErrors:
        """
        Validate a signup command.

        Args:
            command: The submitted signup

        Returns:
            ValidationErrors; empty when the command is acceptable
        """
        errors = ValidationErrors()

        errors.reject_if_empty_or_whitespace(SignupFields.RANDOMKEY, command.randomkey)

        logger.info("Validating signup", extra={
            "openid_username": command.openid_username,
            "username": command.username,
            "randomkey": command.randomkey,
        })

        standard = command.is_standard
        openid = command.is_openid

        if standard and openid:
            errors.reject(SignupFields.USERNAME, MessageCodes.USERNAME_BOTH)
            errors.reject(SignupFields.OPENID_USERNAME, MessageCodes.USERNAME_BOTH)
        if not standard and not openid:
            errors.reject(SignupFields.USERNAME, MessageCodes.USERNAME_ONE_OR_OTHER)
            errors.reject(SignupFields.OPENID_USERNAME, MessageCodes.USERNAME_ONE_OR_OTHER)

        if standard:
            self._validate_standard(command, errors)
        elif openid:
            self._validate_openid(command, errors)

        self._validate_invitation(command, errors)

        if errors:
            logger.info("Signup rejected", extra={"invalid_fields": errors.as_dict()})
        return errors

    def _validate_standard(self, command: CreateUserRequestCommand, errors: ValidationErrors) -> None:
        username = command.username or ''
        password = command.password or ''

        errors.reject_if_empty_or_whitespace(SignupFields.USERNAME, username)
        errors.reject_if_empty_or_whitespace(SignupFields.PASSWORD, password)
        errors.reject_if_empty_or_whitespace(SignupFields.PASSWORD2, command.password2)

        # Dots are reserved for OpenID identifiers
        if self.user_service.could_be_openid(username):
            errors.reject(SignupFields.USERNAME, MessageCodes.USERNAME_INVALID)

        # Usernames double as mail local parts
        if ' ' in username:
            errors.reject(SignupFields.USERNAME, MessageCodes.USERNAME_NO_SPACES)

        if not USERNAME_RE.fullmatch(username):
            errors.reject(SignupFields.USERNAME, MessageCodes.USERNAME_INVALID)

        if len(username) < SignupRules.MIN_LENGTH:
            errors.reject(SignupFields.USERNAME, MessageCodes.USERNAME_LENGTH)

        if len(password) < SignupRules.MIN_LENGTH:
            errors.reject(SignupFields.PASSWORD, MessageCodes.PASSWORD_LENGTH)

        if username == SignupRules.ANONYMOUS_USERNAME:
            errors.reject(SignupFields.USERNAME, MessageCodes.USERNAME_INVALID)

        if password == username:
            errors.reject(SignupFields.USERNAME, MessageCodes.PASSWORD_EQUALS_USER)

        if password != command.password2:
            errors.reject(SignupFields.PASSWORD2, MessageCodes.PASSWORD2_MISMATCH)

        if self.user_service.exists(username):
            errors.reject(SignupFields.USERNAME, MessageCodes.USERNAME_EXISTS)
        if username == SignupRules.ANONYMOUS_USERNAME:
            errors.reject(SignupFields.USERNAME, MessageCodes.USERNAME_EXISTS)

    def _validate_openid(self, command: CreateUserRequestCommand, errors: ValidationErrors) -> None:
        identifier = command.openid_username or ''

        if not self.user_service.could_be_openid(identifier):
            errors.reject(SignupFields.OPENID_USERNAME, MessageCodes.OPENID_NO_DOTS)

        try:
            if self.user_service.exists(command.normalized_openid_username()):
                errors.reject(SignupFields.OPENID_USERNAME, MessageCodes.OPENID_EXISTS)
        except ApplicationError as e:
            logger.warning("OpenID existence check failed", extra={
                "openid_username": identifier,
                "error": e.message,
            })
            errors.reject(SignupFields.OPENID_USERNAME, MessageCodes.OPENID_INVALID)

        if '=' in identifier:
            errors.reject(SignupFields.OPENID_USERNAME, MessageCodes.OPENID_NO_INAMES)

        if self.user_service.exists_nickname(command.openid_nickname):
            errors.reject(SignupFields.OPENID_NICKNAME, MessageCodes.OPENID_NICKNAME_EXISTS)

    def _validate_invitation(self, command: CreateUserRequestCommand, errors: ValidationErrors) -> None:
        if not self.invitation_service.is_key_valid(command.randomkey):
            errors.reject(SignupFields.RANDOMKEY, MessageCodes.INVALID)

        entry = self.invitation_service.get_entry_for_key(command.randomkey)
        if entry is not None and entry.signed_up_user is not None:
            errors.reject(SignupFields.RANDOMKEY, MessageCodes.RANDOMKEY_EXISTS)
