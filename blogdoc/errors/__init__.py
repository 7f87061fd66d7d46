from blogdoc.errors.base import BaseAppError
from blogdoc.errors.document import BoundsError, DocumentError, NotFoundError, ValidationError
from blogdoc.errors.storage import StorageError

__all__ = [
    "BaseAppError",
    "BoundsError",
    "DocumentError",
    "NotFoundError",
    "StorageError",
    "ValidationError",
]
