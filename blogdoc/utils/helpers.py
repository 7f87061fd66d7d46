from collections.abc import Callable, Container
from uuid import uuid4

from blogdoc.configs.settings import BLOG_MEDIA_ROOT, TEMP_POST_SEGMENT

IdFactory = Callable[[], str]

MAX_ID_ATTEMPTS = 32


def new_block_id() -> str:
    """Return a random block identifier."""
    return str(uuid4())


def unique_block_id(taken: Container[str], id_factory: IdFactory = new_block_id) -> str:
    """
    Draw identifiers from ``id_factory`` until one is not in ``taken``.

    Args:
        taken: Identifiers already used in the document (or retired in the session).
        id_factory: Source of random identifiers.

    Returns:
        str: An identifier absent from ``taken``.
    """
    for _ in range(MAX_ID_ATTEMPTS):
        candidate = id_factory()
        if candidate and candidate not in taken:
            return candidate
    mssg = f"Identifier generator produced no unused id in {MAX_ID_ATTEMPTS} attempts"
    raise RuntimeError(mssg)


def media_storage_path(
    site_key: str,
    post_id: str | None,
    file_id: str,
    ext: str,
) -> str:
    """
    Build the storage path of an uploaded blog media file.

    Media uploaded before the post has an id goes under the ``temp`` segment
    and is moved once the post is first saved.

    Args:
        site_key: Site namespace (from configuration).
        post_id: Persisted post id, or None for an unsaved post.
        file_id: Unique file identifier.
        ext: File extension without the dot.

    Returns:
        str: e.g. ``siteBlogs/<site_key>/posts/<post_id>/<file_id>.jpg``
    """
    if not site_key:
        mssg = "site_key is required to build a media path"
        raise ValueError(mssg)
    folder = post_id or TEMP_POST_SEGMENT
    return f"{BLOG_MEDIA_ROOT}/{site_key}/posts/{folder}/{file_id}.{ext.lstrip('.')}"


def is_temp_media_path(path: str | None) -> bool:
    """Return True if ``path`` points into an unsaved post's temp folder."""
    return bool(path) and f"/posts/{TEMP_POST_SEGMENT}/" in path


def promoted_media_path(path: str, post_id: str) -> str:
    """Rewrite a temp media path to live under ``post_id``."""
    return path.replace(f"/posts/{TEMP_POST_SEGMENT}/", f"/posts/{post_id}/", 1)
