"""
Cloudinary storage implementation.

This module provides a Cloudinary-based storage backend for production
use. Storage paths map to Cloudinary public IDs.
"""

from pathlib import PurePosixPath

import cloudinary
import cloudinary.exceptions
import cloudinary.uploader

from blogdoc.configs.settings import settings
from blogdoc.errors.storage import StorageError

RESOURCE_TYPES = ("image", "video")


class CloudinaryStorage:
    """
    Cloudinary storage implementation.

    The resource type of a stored file is not recorded in its path, so
    operations try ``image`` first, then ``video``.
    """

    def __init__(self) -> None:
        """Initialize Cloudinary with configured credentials."""
        cloudinary.config(
            cloud_name=settings.CLOUDINARY_CLOUD_NAME,
            api_key=settings.CLOUDINARY_API_KEY,
            api_secret=settings.CLOUDINARY_API_SECRET.get_secret_value(),
            secure=True,
        )

    def _get_public_id(self, path: str) -> str:
        """
        Get the Cloudinary public ID for a storage path.

        Args:
            path: Storage path recorded on a block

        Returns:
            str: Cloudinary public ID (the path without its extension)
        """
        return str(PurePosixPath(path).with_suffix(""))

    def delete(self, path: str) -> bool:
        """
        Delete a media file from Cloudinary.

        Args:
            path: Storage path of the media file

        Returns:
            bool: True if deletion was successful, False otherwise
        """
        public_id = self._get_public_id(path)
        for resource_type in RESOURCE_TYPES:
            result = cloudinary.uploader.destroy(public_id, resource_type=resource_type)
            if result.get("result") == "ok":
                return True
        return False

    def relocate(self, old_path: str, new_path: str) -> str:
        """
        Rename a media file in Cloudinary.

        Args:
            old_path: Current storage path
            new_path: Destination storage path

        Returns:
            str: Cloudinary URL of the renamed media

        Raises:
            StorageError: If the file is missing or Cloudinary rejects the rename
        """
        from_id = self._get_public_id(old_path)
        to_id = self._get_public_id(new_path)
        for resource_type in RESOURCE_TYPES:
            try:
                result = cloudinary.uploader.rename(
                    from_id,
                    to_id,
                    resource_type=resource_type,
                    overwrite=True,
                )
            except cloudinary.exceptions.NotFound:
                continue
            except cloudinary.exceptions.Error as e:
                raise StorageError(old_path, f"Cloudinary rename failed: {e!s}") from e
            return result["secure_url"]
        raise StorageError(old_path, "Media file not found in Cloudinary.")
