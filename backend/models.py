from sqlalchemy import Column, String, Integer, Boolean, Text, DateTime, ForeignKey, CheckConstraint, UniqueConstraint, Index
from sqlalchemy.orm import relationship
from werkzeug.security import check_password_hash, generate_password_hash
from datetime import datetime
import uuid
from database import Base
from constants import PostType


def generate_uuid():
    return str(uuid.uuid4())


class School(Base):
    __tablename__ = 'schools'

    id = Column(String, primary_key=True, default=generate_uuid)
    name = Column(String, nullable=False)
    city = Column(String, nullable=True)
    url = Column(String, nullable=True)
    popularity_counter = Column(Integer, nullable=False, default=0)

    applications = relationship("Application", back_populates="school", cascade="all, delete-orphan")
    forum_posts = relationship("SchoolForumPost", back_populates="school")

    __table_args__ = (
        CheckConstraint("name != ''"),
        Index('idx_schools_name', 'name'),
        Index('idx_schools_popularity', 'popularity_counter'),
    )

    def __repr__(self):
        return f"<School {self.name!r} popularity={self.popularity_counter}>"


class User(Base):
    """
    A registered member.

    Usernames are stored lower-cased. OpenID members use their normalized
    identifier as username and pick a separate nickname.
    """
    __tablename__ = 'users'

    id = Column(String, primary_key=True, default=generate_uuid)
    username = Column(String, nullable=False, unique=True)
    password_hash = Column(String, nullable=True)  # NULL for OpenID accounts
    nickname = Column(String, nullable=True, unique=True)
    email = Column(String, nullable=True)
    is_openid = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    applications = relationship("Application", back_populates="user")

    def set_password(self, password: str):
        """Set password hash using werkzeug."""
        self.password_hash = generate_password_hash(password)

    def check_password(self, password: str) -> bool:
        """Check password using werkzeug. OpenID accounts never match."""
        if not self.password_hash:
            return False
        return check_password_hash(self.password_hash, password)

    def __repr__(self):
        return f"<User {self.username!r}>"


class Application(Base):
    """A user's interest in (or application to) a school"""
    __tablename__ = 'applications'

    id = Column(String, primary_key=True, default=generate_uuid)
    user_id = Column(String, ForeignKey('users.id'), nullable=False)
    school_id = Column(String, ForeignKey('schools.id'), nullable=False)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    user = relationship("User", back_populates="applications")
    school = relationship("School", back_populates="applications")

    __table_args__ = (
        UniqueConstraint('user_id', 'school_id', name='uq_application_user_school'),
        Index('idx_applications_school', 'school_id'),
    )


class ProcessType(Base):
    __tablename__ = 'process_types'

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String, nullable=False)
    use_by_default = Column(Boolean, nullable=False, default=False)
    status_order = Column(Integer, nullable=False, default=0)
    percentage = Column(Boolean, nullable=False, default=False)  # Progress reported as a percentage rather than done/not done


class RatingType(Base):
    __tablename__ = 'rating_types'

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String, nullable=False)
    use_by_default = Column(Boolean, nullable=False, default=False)


class ForumPost(Base):
    """
    A forum message.

    Posts with thread_id NULL are thread roots; every reply points at its
    root through thread_id. Scope (school or user page) is carried by the
    subclasses, stored in the same table and told apart by post_type.
    """
    __tablename__ = 'forumposts'

    id = Column(String, primary_key=True, default=generate_uuid)
    post_type = Column(String, nullable=False)
    author_id = Column(String, ForeignKey('users.id'), nullable=True)
    thread_id = Column(String, ForeignKey('forumposts.id'), nullable=True)
    title = Column(String, nullable=True)
    text = Column(Text, nullable=False, default='')
    date = Column(DateTime, nullable=False, default=datetime.utcnow)

    author = relationship("User", foreign_keys=[author_id])
    thread_post = relationship("ForumPost", remote_side=[id], back_populates="replies")
    replies = relationship("ForumPost", back_populates="thread_post")

    # Filled in by the repository from an aggregate query; never persisted
    reply_count = 0

    __mapper_args__ = {
        'polymorphic_on': post_type,
        'polymorphic_identity': 'post',
    }

    __table_args__ = (
        Index('idx_forumposts_thread', 'thread_id'),
        Index('idx_forumposts_date', 'date'),
    )

    def __repr__(self):
        return f"<{type(self).__name__} {self.id} thread={self.thread_id}>"


class SchoolForumPost(ForumPost):
    school_id = Column(String, ForeignKey('schools.id'), nullable=True)

    school = relationship("School", back_populates="forum_posts")

    __mapper_args__ = {'polymorphic_identity': PostType.SCHOOL.value}


class UserForumPost(ForumPost):
    topic_user_id = Column(String, ForeignKey('users.id'), nullable=True)

    topic_user = relationship("User", foreign_keys=[topic_user_id])

    __mapper_args__ = {'polymorphic_identity': PostType.USER.value}


class MailingListEntry(Base):
    """
    An invitation sent to an email address.

    The random key may be used for exactly one signup; signed_up_user_id is
    set when that happens.
    """
    __tablename__ = 'mailing_list'

    id = Column(String, primary_key=True, default=generate_uuid)
    email = Column(String, nullable=False)
    random_key = Column(String, nullable=False, unique=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    signed_up_user_id = Column(String, ForeignKey('users.id'), nullable=True)

    signed_up_user = relationship("User")

    def is_used(self) -> bool:
        return self.signed_up_user_id is not None or self.signed_up_user is not None
