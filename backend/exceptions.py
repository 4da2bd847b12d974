"""
Custom exception classes for the application.

Validation failures are normally accumulated and returned, not raised; the
classes below cover the cases where a caller has to be interrupted: an
invalid signup handed to the service layer, a broken unique-result lookup,
or a storage failure.
"""


class ApplicationError(Exception):
    """Base exception for all application errors"""

    def __init__(self, message: str, details: dict | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ConfigurationError(ApplicationError):
    """Raised when there's a configuration issue"""

    def __init__(self, message: str, missing_keys: list[str] | None = None):
        details = {"missing_keys": missing_keys} if missing_keys else {}
        super().__init__(message, details)


class ValidationError(ApplicationError):
    """Raised when user input is rejected.

    ``invalid_fields`` maps a field name to the list of message codes
    raised against it.
    """

    def __init__(self, message: str, invalid_fields: dict | None = None):
        details = {"invalid_fields": invalid_fields} if invalid_fields else {}
        super().__init__(message, details)

    @property
    def invalid_fields(self) -> dict:
        return self.details.get("invalid_fields", {})


class DataIntegrityError(ApplicationError):
    """Raised when stored data breaks an assumption the code relies on"""


class IncorrectResultSizeError(DataIntegrityError):
    """Raised when a unique-result lookup matches more than one row"""

    def __init__(self, entity: str, expected: int, actual: int):
        details = {"entity": entity, "expected": expected, "actual": actual}
        msg = f"Expected at most {expected} {entity} row(s), found {actual}"
        super().__init__(msg, details)
        self.expected = expected
        self.actual = actual


class DatabaseError(ApplicationError):
    """Raised when database operations fail"""

    def __init__(self, operation: str, message: str):
        details = {"operation": operation}
        super().__init__(message, details)
        self.operation = operation
