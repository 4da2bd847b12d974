"""
Request DTOs

DTOs for incoming submissions. These decouple callers from database models
and provide a clear contract for what data a use case expects.
"""

from .user_request import CreateUserRequestCommand

__all__ = ["CreateUserRequestCommand"]
