"""
Validation result value objects.

A validator appends one FieldError per failed check instead of raising, so
every problem with a submission is reported at once. Codes are message keys
for the presentation layer, not display text.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from constants import MessageCodes


@dataclass(frozen=True)
class FieldError:
    """One rejected field and the message code explaining why."""

    field: str
    code: str


@dataclass
class ValidationErrors:
    """
    Ordered collection of FieldErrors for one validated object.

    Errors are kept in the order they were recorded; a field may carry
    several codes, and the same code may appear more than once.
    """

    errors: List[FieldError] = field(default_factory=list)

    def reject(self, field_name: str, code: str) -> None:
        self.errors.append(FieldError(field_name, code))

    def reject_if_empty_or_whitespace(self, field_name: str, value: Optional[str],
                                      code: str = MessageCodes.REQUIRED) -> None:
        if value is None or value.strip() == '':
            self.reject(field_name, code)

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    def field_errors(self, field_name: str) -> List[str]:
        """Codes recorded against one field, in order."""
        return [e.code for e in self.errors if e.field == field_name]

    def as_dict(self) -> Dict[str, List[str]]:
        """Field name -> list of codes, the shape handed to callers."""
        result: Dict[str, List[str]] = {}
        for error in self.errors:
            result.setdefault(error.field, []).append(error.code)
        return result

    def __bool__(self) -> bool:
        return self.has_errors

    def __len__(self) -> int:
        return len(self.errors)
