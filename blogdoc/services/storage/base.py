"""
Base storage protocol for blog media.

This module defines the interface the composer uses to reach the storage
backend, allowing for different implementations (local, cloudinary, etc.).
"""

from abc import abstractmethod
from typing import Protocol


class MediaStorage(Protocol):
    """
    Protocol defining the interface for media storage services.

    Paths are the storage paths recorded on image/video blocks.
    """

    @abstractmethod
    def delete(self, path: str) -> bool:
        """
        Delete the object stored at ``path``.

        Args:
            path: Storage path of the media file

        Returns:
            bool: True if deletion was successful, False otherwise
        """
        ...

    @abstractmethod
    def relocate(self, old_path: str, new_path: str) -> str:
        """
        Move a stored object to a new path.

        Args:
            old_path: Current storage path
            new_path: Destination storage path

        Returns:
            str: Public URL of the object at its new path
        """
        ...
