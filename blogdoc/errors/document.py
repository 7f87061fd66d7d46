"""
Document-model error classes.

Every error here is recoverable by the caller: the document it was
raised for is left unchanged, and an editor can show the problem and
let the user retry.
"""

from collections.abc import Iterable

from blogdoc.errors.base import BaseAppError
from blogdoc.schemas.validation import Violation


class DocumentError(BaseAppError):
    """Base exception for document composition errors."""

    def __init__(self, detail: str = "The document could not be updated.") -> None:
        super().__init__(detail=detail)


class ValidationError(DocumentError):
    """Exception raised when a document or block violates the content model."""

    def __init__(
        self,
        violations: Iterable[Violation],
        detail: str = "Validation failed",
    ) -> None:
        self.violations = list(violations)
        if self.violations:
            summary = "; ".join(v.describe() for v in self.violations)
            detail = f"{detail}: {summary}"
        super().__init__(detail=detail)


class NotFoundError(DocumentError):
    """Exception raised when an operation references a block id absent from the document."""

    def __init__(self, block_id: str) -> None:
        super().__init__(detail=f"No block with id {block_id!r} in this document.")
        self.block_id = block_id


class BoundsError(DocumentError):
    """Exception raised when a position falls outside the valid insertion/move range."""

    def __init__(self, position: int, upper: int) -> None:
        super().__init__(
            detail=f"Position {position} is out of range; expected 0..{upper} inclusive.",
        )
        self.position = position
        self.upper = upper
