"""Storage collaborator error classes."""

from blogdoc.errors.base import BaseAppError


class StorageError(BaseAppError):
    """Exception raised when a storage operation fails."""

    def __init__(
        self,
        path: str,
        detail: str = "The storage operation failed.",
    ) -> None:
        super().__init__(detail=f"{detail} (path: {path})")
        self.path = path
