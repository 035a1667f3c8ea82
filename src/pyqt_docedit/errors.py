"""Error and rejection types for the document editing engine."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


@dataclass(frozen=True)
class ValidationError:
    """A field whose edited text cannot be coerced back to its original kind."""
    field: Optional[str]
    reason: str
    detail: Optional[str] = None

    def __str__(self) -> str:
        message = f"Field '{self.field}': {self.reason}" if self.field else self.reason
        if self.detail:
            message = f"{message} ({self.detail})"
        return message


class ImportErrorKind(Enum):
    """Why a clipboard import was rejected."""
    MALFORMED_INPUT = "malformed_input"
    IDENTITY_MISMATCH = "identity_mismatch"


@dataclass(frozen=True)
class ImportRejection:
    """An import that was refused. The edit buffer is left untouched."""
    kind: ImportErrorKind
    message: str
    imported_id: Optional[str] = None
    current_id: Optional[str] = None

    def __str__(self) -> str:
        if self.kind is ImportErrorKind.IDENTITY_MISMATCH:
            return (
                f"{self.message}\n"
                f"Imported ID: {self.imported_id}\n"
                f"Current ID: {self.current_id}"
            )
        return self.message


class StoreError(Exception):
    """Raised when the document store cannot be reached or used."""


class EditSessionError(Exception):
    """Raised on misuse of an edit session (a programming error, not user input)."""
