"""
OpenID identifier helpers.

Normalization follows the usual URL-identifier rules: add an http scheme
when none is given, lower-case scheme and host, and give a bare host a
trailing slash. XRI identifiers are left untouched apart from trimming.
"""
from urllib.parse import urlsplit, urlunsplit

from exceptions import ValidationError

XRI_PREFIX = 'xri://'


def normalize_openid(identifier: str) -> str:
    """
    Normalize a user-supplied OpenID identifier.

    Args:
        identifier: Raw identifier such as "Jeff.MyOpenID.com"

    Returns:
        Normalized identifier, e.g. "http://jeff.myopenid.com/"

    Raises:
        ValidationError: If the identifier is empty or has no host
    """
    value = (identifier or '').strip()
    if not value:
        raise ValidationError("OpenID identifier is empty",
                              invalid_fields={'openIDusername': identifier})

    if value.lower().startswith(XRI_PREFIX):
        return value

    if '://' not in value:
        value = 'http://' + value

    parts = urlsplit(value)
    if not parts.netloc:
        raise ValidationError("OpenID identifier has no host",
                              invalid_fields={'openIDusername': identifier})

    path = parts.path or '/'
    return urlunsplit((parts.scheme.lower(), parts.netloc.lower(), path, parts.query, ''))


def looks_like_openid(identifier: str) -> bool:
    """
    Heuristic used to keep standard usernames and OpenIDs apart: an OpenID
    has a dot in it and no whitespace.
    """
    value = (identifier or '').strip()
    if not value or any(ch.isspace() for ch in value):
        return False
    if value.lower().startswith(XRI_PREFIX):
        return True
    host_and_path = value.split('://', 1)[-1]
    return '.' in host_and_path
