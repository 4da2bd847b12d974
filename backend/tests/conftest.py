import os
import sys
from datetime import datetime
from pathlib import Path

# Keep the module-level engine off the developer's real database
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

# Add backend directory to Python path FIRST
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))

# Now import after path is set
import pytest
from sqlalchemy.orm import sessionmaker
from database import create_db_engine
from exceptions import ApplicationError
from models import Base, Application, MailingListEntry, School, SchoolForumPost, User
from services.interfaces import IInvitationService, IUserService
from utils.openid_helper import looks_like_openid


@pytest.fixture
def engine():
    """In-memory database with the full schema"""
    db_engine = create_db_engine('sqlite:///:memory:')
    Base.metadata.create_all(db_engine)
    yield db_engine
    db_engine.dispose()


@pytest.fixture
def db_session(engine):
    """Create in-memory database session for testing"""
    SessionLocal = sessionmaker(bind=engine)
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture
def make_school(db_session):
    def _make(name, popularity=0, **kwargs):
        school = School(name=name, popularity_counter=popularity, **kwargs)
        db_session.add(school)
        db_session.flush()
        return school
    return _make


@pytest.fixture
def make_user(db_session):
    def _make(username, **kwargs):
        user = User(username=username.lower(), **kwargs)
        db_session.add(user)
        db_session.flush()
        return user
    return _make


@pytest.fixture
def make_post(db_session):
    def _make(post_class=SchoolForumPost, date=None, thread=None, **kwargs):
        post = post_class(
            date=date or datetime(2024, 1, 1),
            thread_post=thread,
            text=kwargs.pop('text', 'hello'),
            **kwargs
        )
        db_session.add(post)
        db_session.flush()
        return post
    return _make


@pytest.fixture
def apply_to(db_session):
    def _apply(user, school, created_at=None):
        application = Application(user=user, school=school, created_at=created_at or datetime.utcnow())
        db_session.add(application)
        db_session.flush()
        return application
    return _apply


class FakeUserService(IUserService):
    """In-memory user lookups for validator tests"""

    def __init__(self, usernames=(), nicknames=(), fail_lookups=False):
        self.usernames = {u.lower() for u in usernames}
        self.nicknames = set(nicknames)
        self.fail_lookups = fail_lookups
        self.exists_calls = []

    def exists(self, username):
        self.exists_calls.append(username)
        if self.fail_lookups:
            raise ApplicationError("user store unavailable")
        return (username or '').lower() in self.usernames

    def exists_nickname(self, nickname):
        return nickname in self.nicknames

    def could_be_openid(self, identifier):
        return looks_like_openid(identifier)


class FakeInvitationService(IInvitationService):
    """In-memory invitation keys for validator tests"""

    def __init__(self, entries=None):
        self.entries = dict(entries or {})

    def is_key_valid(self, random_key):
        return random_key in self.entries

    def get_entry_for_key(self, random_key):
        return self.entries.get(random_key)


@pytest.fixture
def user_service():
    return FakeUserService(
        usernames=['taken', 'http://jeff.myopenid.com/'],
        nicknames=['jeffrey'],
    )


@pytest.fixture
def invitation_service():
    used = MailingListEntry(email='used@example.com', random_key='used-key')
    used.signed_up_user = User(username='earlybird')
    return FakeInvitationService({
        'fresh-key': MailingListEntry(email='new@example.com', random_key='fresh-key'),
        'used-key': used,
    })
