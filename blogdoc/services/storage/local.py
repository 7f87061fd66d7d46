"""
Local filesystem storage implementation.

This module provides a local storage backend for development
and testing purposes. Files are stored in the local filesystem.
"""

from pathlib import Path

from blogdoc.configs.settings import settings
from blogdoc.errors.storage import StorageError


class LocalStorage:
    """
    Local filesystem storage implementation.

    Stores files under the configured uploads directory and serves
    them from ``MEDIA_BASE_URL``.
    """

    def __init__(self, uploads_dir: Path | None = None, base_url: str | None = None) -> None:
        """Initialize local storage with configured paths."""
        self.uploads_dir = Path(uploads_dir or settings.UPLOADS_DIR)
        self.base_url = (base_url or settings.MEDIA_BASE_URL).rstrip("/")

    def _get_file_path(self, path: str) -> Path:
        """
        Resolve a storage path inside the uploads directory.

        Args:
            path: Storage path recorded on a block

        Returns:
            Path: Filesystem path of the media file
        """
        root = self.uploads_dir.resolve()
        file_path = (root / path).resolve()
        if not file_path.is_relative_to(root):
            raise StorageError(path, "Storage path escapes the uploads directory.")
        return file_path

    def url_for(self, path: str) -> str:
        """Return the public URL of a storage path."""
        return f"{self.base_url}/{path.lstrip('/')}"

    def delete(self, path: str) -> bool:
        """
        Delete a media file from the local filesystem.

        Args:
            path: Storage path of the media file

        Returns:
            bool: True if deletion was successful, False otherwise
        """
        file_path = self._get_file_path(path)
        if not file_path.exists():
            return False
        file_path.unlink()
        return True

    def relocate(self, old_path: str, new_path: str) -> str:
        """
        Move a media file to a new storage path.

        Args:
            old_path: Current storage path
            new_path: Destination storage path

        Returns:
            str: URL of the moved file
        """
        source = self._get_file_path(old_path)
        if not source.exists():
            raise StorageError(old_path, "Media file not found.")
        target = self._get_file_path(new_path)
        target.parent.mkdir(parents=True, exist_ok=True)
        source.replace(target)
        return self.url_for(new_path)
