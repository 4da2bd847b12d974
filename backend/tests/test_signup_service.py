"""
Tests for SignupService against a real session.
"""

import pytest

from config.app_config import AppConfig
from constants import MessageCodes
from dependencies import get_signup_service
from dtos.request.user_request import CreateUserRequestCommand
from exceptions import ValidationError
from models import User
from repositories.user_repository import UserRepository
from services.invitation_service import InvitationService
from services.user_service import UserService


@pytest.fixture
def config():
    return AppConfig(database_url='sqlite:///:memory:', invitation_master_key='open-sesame')


@pytest.fixture
def signup(db_session, config):
    return get_signup_service(db_session, config)


@pytest.fixture
def invitation(db_session):
    return InvitationService(db_session).create_entry('new@example.com')


def command(randomkey, **overrides):
    values = dict(username='NewMember', password='secret', password2='secret',
                  randomkey=randomkey, standard=True)
    values.update(overrides)
    return CreateUserRequestCommand(**values)


class TestRegister:

    def test_creates_user_and_consumes_key(self, signup, invitation, db_session):
        user = signup.register(command(invitation.random_key))

        assert user.username == 'newmember'
        assert 'secret' not in user.password_hash
        assert user.check_password('secret')
        assert not user.check_password('Secret')
        assert invitation.signed_up_user is user
        assert invitation.is_used()
        assert db_session.query(User).count() == 1

    def test_reused_key_rejected(self, signup, invitation, db_session):
        signup.register(command(invitation.random_key))

        with pytest.raises(ValidationError) as exc_info:
            signup.register(command(invitation.random_key, username='another'))
        assert exc_info.value.invalid_fields == {'randomkey': [MessageCodes.RANDOMKEY_EXISTS]}
        assert db_session.query(User).count() == 1

    def test_invalid_request_creates_nothing(self, signup, invitation, db_session):
        with pytest.raises(ValidationError) as exc_info:
            signup.register(command(invitation.random_key, password2='different'))
        assert exc_info.value.invalid_fields == {'password2': [MessageCodes.PASSWORD2_MISMATCH]}
        assert db_session.query(User).count() == 0
        assert not invitation.is_used()

    def test_taken_username_is_case_insensitive(self, signup, invitation, make_user):
        make_user('newmember')
        with pytest.raises(ValidationError) as exc_info:
            signup.register(command(invitation.random_key))
        assert MessageCodes.USERNAME_EXISTS in exc_info.value.invalid_fields['username']

    def test_master_key(self, signup):
        user = signup.register(command('open-sesame'))
        assert user.username == 'newmember'

    def test_openid_signup(self, signup, invitation):
        user = signup.register(CreateUserRequestCommand(
            openid_username='Jeff.MyOpenID.com',
            openid_nickname='jeffrey',
            randomkey=invitation.random_key,
            openid=True,
        ))
        assert user.username == 'http://jeff.myopenid.com/'
        assert user.nickname == 'jeffrey'
        assert user.is_openid
        assert user.password_hash is None
        assert not user.check_password('')


class TestCollaborators:

    def test_user_service_lookups(self, db_session, make_user):
        make_user('existing', nickname='Nick')
        service = UserService(db_session)
        assert service.exists('EXISTING')
        assert not service.exists('')
        assert service.exists_nickname('Nick')
        assert not service.exists_nickname('  ')

    def test_invitation_key_checks(self, db_session, invitation):
        service = InvitationService(db_session, master_key='open-sesame')
        assert service.is_key_valid(invitation.random_key)
        assert service.is_key_valid('open-sesame')
        assert not service.is_key_valid('unknown')
        assert not service.is_key_valid('   ')
        assert service.get_entry_for_key('open-sesame') is None
        assert service.get_entry_for_key(invitation.random_key) is invitation

    def test_user_repository_lookups(self, signup, invitation, db_session):
        user = signup.register(command(invitation.random_key, username='MixedCase'))
        repo = UserRepository(db_session)
        assert repo.get_by_username('MIXEDCASE') is user
        assert repo.get_by_username('someone-else') is None

    def test_user_repository_nickname_lookup(self, db_session, make_user):
        member = make_user('http://jeff.myopenid.com/', nickname='jeffrey', is_openid=True)
        repo = UserRepository(db_session)
        assert repo.get_by_nickname('jeffrey') is member
        assert repo.get_by_nickname('Jeffrey') is None
