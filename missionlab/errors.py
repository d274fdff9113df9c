"""Error taxonomy for MissionLab.

Every failure raised by the library derives from :class:`MissionLabError`
and carries a stable ``kind`` string so callers can report it without
matching on class names.
"""

from typing import List, Optional

from pydantic import BaseModel


class MissionLabError(Exception):
    """Base exception for MissionLab operations."""

    kind = "MissionLabError"


class InvalidCredential(MissionLabError):
    """The supplied admin key was rejected by the credential verifier."""

    kind = "InvalidCredential"


class MissingInput(MissionLabError):
    """No content pack was supplied."""

    kind = "MissingInput"


class ParseFailure(MissionLabError):
    """The content pack could not be decoded as JSON."""

    kind = "ParseFailure"


class PackTooLarge(ParseFailure):
    """The content pack exceeds the configured upload limit."""

    def __init__(self, size_bytes: int, limit_bytes: int):
        self.size_bytes = size_bytes
        self.limit_bytes = limit_bytes
        super().__init__(
            f"Content pack is {size_bytes} bytes; the limit is {limit_bytes} bytes."
        )


class SchemaIssue(BaseModel):
    """A single offending field inside a content pack."""

    topic: Optional[str] = None
    field: Optional[str] = None
    message: str

    def __str__(self) -> str:
        location = self.topic if self.topic is not None else "<pack>"
        if self.field:
            location = f"{location}.{self.field}"
        return f"{location}: {self.message}"


class SchemaViolation(MissionLabError):
    """Well-formed JSON that does not satisfy the mission schema.

    Attributes:
        issues: Every offending topic/field found in the pack
    """

    kind = "SchemaViolation"

    def __init__(self, issues: List[SchemaIssue], message: Optional[str] = None):
        self.issues = list(issues)
        if message is None:
            message = (
                "Invalid schema. Each topic must include a mission string and "
                "non-empty challenge array."
            )
        super().__init__(message)

    def describe(self) -> List[str]:
        """One human-readable line per issue."""
        return [str(issue) for issue in self.issues]


class InvalidParameter(MissionLabError):
    """Non-physical or unusable simulation input."""

    kind = "InvalidParameter"
