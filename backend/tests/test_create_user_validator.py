"""Tests for the signup request validator using in-memory collaborators."""

import logging

import pytest

from constants import MessageCodes
from dtos.request.user_request import CreateUserRequestCommand
from services.create_user_validator import CreateUserRequestValidator

from conftest import FakeUserService


def standard_command(**overrides):
    values = dict(
        username='valid_user-1',
        password='secret',
        password2='secret',
        randomkey='fresh-key',
        standard=True,
    )
    values.update(overrides)
    return CreateUserRequestCommand(**values)


def openid_command(**overrides):
    values = dict(
        openid_username='someone.example.org',
        openid_nickname='someone',
        randomkey='fresh-key',
        openid=True,
    )
    values.update(overrides)
    return CreateUserRequestCommand(**values)


@pytest.fixture
def validator(invitation_service, user_service):
    return CreateUserRequestValidator(invitation_service, user_service)


class TestModeSelection:

    def test_valid_standard_signup_has_no_errors(self, validator):
        errors = validator.validate(standard_command())
        assert not errors
        assert errors.as_dict() == {}

    def test_both_modes_rejected_on_both_fields(self, validator):
        errors = validator.validate(standard_command(openid=True))
        assert MessageCodes.USERNAME_BOTH in errors.field_errors('username')
        assert MessageCodes.USERNAME_BOTH in errors.field_errors('openIDusername')

    def test_neither_mode_rejected_on_both_fields(self, validator):
        errors = validator.validate(standard_command(standard=False))
        assert errors.field_errors('username') == [MessageCodes.USERNAME_ONE_OR_OTHER]
        assert errors.field_errors('openIDusername') == [MessageCodes.USERNAME_ONE_OR_OTHER]

    def test_aliases_accepted_from_form_data(self, validator):
        command = CreateUserRequestCommand.model_validate({
            'openIDusername': 'someone.example.org',
            'openIDnickname': 'someone',
            'randomkey': 'fresh-key',
            'openID': True,
        })
        assert command.is_openid
        assert not validator.validate(command)


class TestStandardSignup:

    def test_short_username(self, validator):
        errors = validator.validate(standard_command(username='ab'))
        assert MessageCodes.USERNAME_LENGTH in errors.field_errors('username')

    def test_short_password(self, validator):
        errors = validator.validate(standard_command(password='ab', password2='ab'))
        assert errors.field_errors('password') == [MessageCodes.PASSWORD_LENGTH]

    def test_username_equal_to_password(self, validator):
        errors = validator.validate(standard_command(
            username='samevalue', password='samevalue', password2='samevalue'
        ))
        assert errors.as_dict() == {'username': [MessageCodes.PASSWORD_EQUALS_USER]}

    def test_password_confirmation_mismatch(self, validator):
        errors = validator.validate(standard_command(password2='secreT'))
        assert errors.as_dict() == {'password2': [MessageCodes.PASSWORD2_MISMATCH]}

    def test_dotted_username_looks_like_openid(self, validator):
        errors = validator.validate(standard_command(username='bob.smith'))
        # Rejected once as a possible OpenID and once by the character rule
        assert errors.field_errors('username') == [
            MessageCodes.USERNAME_INVALID,
            MessageCodes.USERNAME_INVALID,
        ]

    def test_username_with_space(self, validator):
        errors = validator.validate(standard_command(username='bad name'))
        assert MessageCodes.USERNAME_NO_SPACES in errors.field_errors('username')
        assert MessageCodes.USERNAME_INVALID in errors.field_errors('username')

    @pytest.mark.parametrize("username", ["alice\n", "alice\nbob", "\nalice", "jos\u00e9", "\u00fcser", "alice\u0660"])
    def test_character_rule_covers_whole_username(self, validator, username):
        errors = validator.validate(standard_command(username=username))
        assert MessageCodes.USERNAME_INVALID in errors.field_errors('username')

    def test_existing_username(self, validator):
        errors = validator.validate(standard_command(username='Taken'))
        assert errors.field_errors('username') == [MessageCodes.USERNAME_EXISTS]

    def test_anonymous_username_reserved(self, validator):
        errors = validator.validate(standard_command(username='anonymousUser'))
        codes = errors.field_errors('username')
        assert MessageCodes.USERNAME_INVALID in codes
        assert MessageCodes.USERNAME_EXISTS in codes

    def test_blank_fields_accumulate_every_failure(self, validator):
        errors = validator.validate(standard_command(username='  ', password='', password2=''))
        username_codes = errors.field_errors('username')
        assert username_codes[0] == MessageCodes.REQUIRED
        assert MessageCodes.USERNAME_NO_SPACES in username_codes
        assert MessageCodes.USERNAME_INVALID in username_codes
        assert MessageCodes.USERNAME_LENGTH in username_codes
        assert errors.field_errors('password') == [MessageCodes.REQUIRED, MessageCodes.PASSWORD_LENGTH]
        assert errors.field_errors('password2') == [MessageCodes.REQUIRED]

    def test_standard_signup_skips_openid_checks(self, validator):
        errors = validator.validate(standard_command())
        assert errors.field_errors('openIDusername') == []
        assert errors.field_errors('openIDnickname') == []


class TestOpenIDSignup:

    def test_valid_openid_signup(self, validator):
        assert not validator.validate(openid_command())

    def test_identifier_without_dots(self, validator):
        errors = validator.validate(openid_command(openid_username='someone'))
        assert errors.field_errors('openIDusername') == [MessageCodes.OPENID_NO_DOTS]

    def test_registered_identifier_is_normalized_before_lookup(self, validator, user_service):
        errors = validator.validate(openid_command(openid_username='Jeff.MyOpenID.com'))
        assert errors.field_errors('openIDusername') == [MessageCodes.OPENID_EXISTS]
        assert user_service.exists_calls == ['http://jeff.myopenid.com/']

    def test_i_name_identifier(self, validator):
        errors = validator.validate(openid_command(openid_username='=someone.example.org'))
        assert MessageCodes.OPENID_NO_INAMES in errors.field_errors('openIDusername')

    def test_nickname_taken(self, validator):
        errors = validator.validate(openid_command(openid_nickname='jeffrey'))
        assert errors.as_dict() == {'openIDnickname': [MessageCodes.OPENID_NICKNAME_EXISTS]}

    def test_failed_lookup_reported_as_invalid(self, invitation_service):
        validator = CreateUserRequestValidator(invitation_service, FakeUserService(fail_lookups=True))
        errors = validator.validate(openid_command())
        assert errors.field_errors('openIDusername') == [MessageCodes.OPENID_INVALID]

    def test_empty_identifier(self, validator):
        errors = validator.validate(openid_command(openid_username=''))
        assert errors.field_errors('openIDusername') == [
            MessageCodes.OPENID_NO_DOTS,
            MessageCodes.OPENID_INVALID,
        ]

    def test_openid_signup_skips_standard_checks(self, validator):
        errors = validator.validate(openid_command())
        assert errors.field_errors('username') == []
        assert errors.field_errors('password') == []


class TestInvitationKey:

    def test_missing_key(self, validator):
        errors = validator.validate(standard_command(randomkey=''))
        assert errors.as_dict() == {'randomkey': [MessageCodes.REQUIRED, MessageCodes.INVALID]}

    def test_unknown_key(self, validator):
        errors = validator.validate(standard_command(randomkey='nope'))
        assert errors.as_dict() == {'randomkey': [MessageCodes.INVALID]}

    def test_used_key_rejected_even_when_everything_else_is_valid(self, validator):
        errors = validator.validate(standard_command(randomkey='used-key'))
        assert errors.as_dict() == {'randomkey': [MessageCodes.RANDOMKEY_EXISTS]}

    def test_key_checked_in_every_mode(self, validator):
        errors = validator.validate(standard_command(standard=False, randomkey='used-key'))
        assert MessageCodes.RANDOMKEY_EXISTS in errors.field_errors('randomkey')


class TestLogging:

    def test_submission_logged_as_context_fields(self, validator, caplog):
        with caplog.at_level(logging.INFO, logger='services.create_user_validator'):
            validator.validate(standard_command(randomkey='nope'))

        validating, rejected = caplog.records
        assert validating.getMessage() == 'Validating signup'
        assert validating.username == 'valid_user-1'
        assert validating.randomkey == 'nope'
        assert 'secret' not in validating.getMessage()
        assert rejected.getMessage() == 'Signup rejected'
        assert rejected.invalid_fields == {'randomkey': [MessageCodes.INVALID]}
