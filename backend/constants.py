"""
Application-wide constants and message codes.

This module centralizes the magic strings and numbers shared by the
repositories and the signup validator.
"""
from enum import Enum


class MatchMode(str, Enum):
    """
    Where a search pattern has to occur inside the matched column.

    ANYWHERE is used by general search, START by typeahead lookups.
    """

    ANYWHERE = 'ANYWHERE'
    START = 'START'
    END = 'END'
    EXACT = 'EXACT'

    def to_like_pattern(self, escaped: str) -> str:
        """Wrap an already escaped value in LIKE wildcards for this mode."""
        if self is MatchMode.START:
            return f"{escaped}%"
        if self is MatchMode.END:
            return f"%{escaped}"
        if self is MatchMode.EXACT:
            return escaped
        return f"%{escaped}%"

    def matches(self, value: str, pattern: str) -> bool:
        """Case-insensitive in-memory equivalent of the LIKE filter."""
        value = value.lower()
        pattern = pattern.lower()
        if self is MatchMode.START:
            return value.startswith(pattern)
        if self is MatchMode.END:
            return value.endswith(pattern)
        if self is MatchMode.EXACT:
            return value == pattern
        return pattern in value


class PostType(str, Enum):
    """Discriminator values stored in forumposts.post_type"""
    SCHOOL = 'school'
    USER = 'user'


class Defaults:
    """Fallback values used when configuration does not override them"""
    AUTOCOMPLETE_MAX = 7
    MAX_PAGE_SIZE = 1000
    INTERESTED_USERS_MAX = 10
    LOG_LEVEL = 'INFO'


class SignupRules:
    """Limits applied to standard (username/password) signups"""
    MIN_LENGTH = 3
    USERNAME_PATTERN = r'[A-Za-z0-9_-]+'
    ANONYMOUS_USERNAME = 'anonymousUser'


class SignupFields:
    """Field names used as keys in the validation error map"""
    USERNAME = 'username'
    PASSWORD = 'password'
    PASSWORD2 = 'password2'
    OPENID_USERNAME = 'openIDusername'
    OPENID_NICKNAME = 'openIDnickname'
    RANDOMKEY = 'randomkey'


class MessageCodes:
    """
    Message codes attached to rejected fields.

    These are lookup keys for the presentation layer, never user-facing text.
    """

    REQUIRED = 'required'
    INVALID = 'invalid'

    USERNAME_BOTH = 'invalid.username.both'
    USERNAME_ONE_OR_OTHER = 'invalid.username.oneorother'
    USERNAME_INVALID = 'invalid.username'
    USERNAME_NO_SPACES = 'invalid.username.nospaces'
    USERNAME_LENGTH = 'invalid.username.length'
    USERNAME_EXISTS = 'invalid.username.exists'
    PASSWORD_LENGTH = 'invalid.password.length'
    PASSWORD_EQUALS_USER = 'invalid.password.equalsuser'
    PASSWORD2_MISMATCH = 'invalid.password2'

    OPENID_INVALID = 'invalid.openIDusername'
    OPENID_NO_DOTS = 'invalid.openIDusername.nodots'
    OPENID_EXISTS = 'invalid.openIDusername.exists'
    OPENID_NO_INAMES = 'invalid.openIDusername.noinames'
    OPENID_NICKNAME_EXISTS = 'invalid.openIDnickname.exists'

    RANDOMKEY_EXISTS = 'invalid.randomkey.exists'
