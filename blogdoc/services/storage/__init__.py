"""
Media storage backends for blog blocks.

Blocks only record a storage path; the backend chosen here deletes and
relocates the files behind those paths, either on the local filesystem
or in Cloudinary.
"""

from blogdoc.configs.settings import settings
from blogdoc.services.storage.base import MediaStorage
from blogdoc.services.storage.cloudinary_storage import CloudinaryStorage
from blogdoc.services.storage.local import LocalStorage


def get_storage_service() -> MediaStorage:
    """
    Build the media storage backend named by ``STORAGE_PROVIDER``.

    Returns:
        MediaStorage: Configured storage service instance
    """
    if settings.STORAGE_PROVIDER == "cloudinary":
        return CloudinaryStorage()
    return LocalStorage()


__all__ = [
    "CloudinaryStorage",
    "LocalStorage",
    "MediaStorage",
    "get_storage_service",
]
