"""
Document composer service.

This module provides the façade editors use to change a post's blocks.
Each operation returns a new post and leaves its input untouched; an
operation that would break an invariant raises before anything changes.
"""

from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from blogdoc.errors.document import BoundsError, NotFoundError, ValidationError
from blogdoc.errors.storage import StorageError
from blogdoc.monitoring import bind_post, get_logger
from blogdoc.schemas.blog import (
    BLOCK_ADAPTER,
    BlogBlock,
    BlogPost,
    ImageBlock,
    ParagraphBlock,
    VideoBlock,
)
from blogdoc.schemas.validation import Violation
from blogdoc.services.legacy import legacy_media_paths, to_blocks, to_legacy
from blogdoc.services.storage import MediaStorage, get_storage_service
from blogdoc.services.validator import ensure_valid
from blogdoc.utils.helpers import (
    IdFactory,
    is_temp_media_path,
    new_block_id,
    promoted_media_path,
    unique_block_id,
)

logger = get_logger(__name__)


def media_path(block: BlogBlock) -> str | None:
    """Return the storage path held by a block, if any."""
    match block:
        case ImageBlock() | VideoBlock():
            return block.path
        case ParagraphBlock():
            return None
    mssg = f"Unhandled block kind: {type(block).__name__}"
    raise TypeError(mssg)


class DocumentComposer:
    """
    Edit session over blog posts.

    Holds the storage and identifier collaborators and the ids removed
    during the session, which may not be reused.
    """

    def __init__(
        self,
        storage: MediaStorage | None = None,
        id_factory: IdFactory = new_block_id,
    ) -> None:
        """
        Initialize the composer.

        Args:
            storage: Optional storage service instance. If not provided,
                    the configured storage service will be used.
            id_factory: Source of random block identifiers.
        """
        self.storage = storage or get_storage_service()
        self.id_factory = id_factory
        self.removed_ids: set[str] = set()

    def start_session(self, post_id: str | None = None) -> None:
        """Forget ids removed in a previous session and tag logs with ``post_id``."""
        self.removed_ids.clear()
        bind_post(post_id)

    # --- helpers ---

    def _new_id(self, post: BlogPost | None = None) -> str:
        taken = self.removed_ids | set(post.block_ids() if post else ())
        return unique_block_id(taken, self.id_factory)

    def _commit(self, post: BlogPost, blocks: list[BlogBlock]) -> BlogPost:
        updated = post.model_copy(update={"blocks": blocks})
        ensure_valid(updated, self.removed_ids)
        return updated

    def _current(self, post: BlogPost) -> BlogPost:
        return post if post.is_current_shape else self.migrate(post)

    def _require(self, post: BlogPost, block_id: str) -> int:
        index = post.find_block(block_id)
        if index is None:
            raise NotFoundError(block_id)
        return index

    def _build_block(
        self,
        post: BlogPost,
        block: BlogBlock | Mapping[str, Any],
        position: int,
    ) -> BlogBlock:
        if not isinstance(block, Mapping):
            return block
        data = dict(block)
        if not data.get("id"):
            data["id"] = self._new_id(post)
        try:
            return BLOCK_ADAPTER.validate_python(data)
        except PydanticValidationError as e:
            raise ValidationError(
                Violation.from_pydantic(error, position=position) for error in e.errors()
            ) from e

    def _signal_delete(self, path: str) -> None:
        """Ask storage to delete ``path``; failures are logged, never raised."""
        try:
            deleted = self.storage.delete(path)
        except Exception:
            logger.exception("Media deletion failed, storage object orphaned", path=path)
            return
        if not deleted:
            logger.warning("Media deletion found nothing to delete", path=path)
            return
        logger.debug("Media deleted", path=path)

    # --- block factories ---

    def paragraph(self, text: str = "") -> ParagraphBlock:
        return ParagraphBlock(id=self._new_id(), text=text)

    def image(self, url: str, path: str | None = None, title: str | None = None) -> ImageBlock:
        return ImageBlock(id=self._new_id(), url=url, path=path, title=title)

    def video(self, url: str, path: str | None = None, title: str | None = None) -> VideoBlock:
        return VideoBlock(id=self._new_id(), url=url, path=path, title=title)

    # --- operations ---

    def create(self, title: str) -> BlogPost:
        """
        Create a new, unsaved post with no content.

        Args:
            title: Post title (must not be blank)

        Returns:
            BlogPost: Post with an empty block sequence and no id or timestamps
        """
        post = BlogPost(title=title, blocks=[])
        ensure_valid(post)
        return post

    def migrate(self, post: BlogPost) -> BlogPost:
        """
        Normalize a legacy post into block form.

        Already-migrated posts are returned unchanged. Legacy ``body`` and
        ``media`` are left on the result for audit but are no longer read.

        Raises:
            ValidationError: If the stored legacy content is malformed
        """
        if post.is_current_shape:
            return post
        blocks = to_blocks(post, lambda: unique_block_id(self.removed_ids, self.id_factory))
        migrated = post.model_copy(update={"blocks": blocks})
        ensure_valid(migrated, self.removed_ids)
        logger.info("Post migrated to blocks", post_id=post.id, block_count=len(blocks))
        return migrated

    def insert_block(
        self,
        post: BlogPost,
        block: BlogBlock | Mapping[str, Any],
        position: int,
    ) -> BlogPost:
        """
        Insert a block, shifting later blocks down.

        Args:
            post: Post to edit
            block: Block model, or raw block mapping (an id is generated if absent)
            position: Target index, 0..len(blocks) inclusive

        Returns:
            BlogPost: The updated post
        """
        current = self._current(post)
        blocks = list(current.blocks or [])
        if not 0 <= position <= len(blocks):
            raise BoundsError(position, len(blocks))

        new_block = self._build_block(current, block, position)
        blocks.insert(position, new_block)
        updated = self._commit(current, blocks)
        logger.debug("Block inserted", block_id=new_block.id, position=position)
        return updated

    def remove_block(self, post: BlogPost, block_id: str) -> BlogPost:
        """
        Remove a block and signal deletion of its stored media.

        The storage deletion is fire-and-forget: a failure is logged and the
        removal stands.

        Args:
            post: Post to edit
            block_id: Id of the block to remove

        Returns:
            BlogPost: The updated post
        """
        current = self._current(post)
        index = self._require(current, block_id)
        blocks = list(current.blocks or [])
        removed = blocks.pop(index)
        updated = self._commit(current, blocks)

        self.removed_ids.add(block_id)
        logger.debug("Block removed", block_id=block_id, position=index)
        if path := media_path(removed):
            self._signal_delete(path)
        return updated

    def move_block(self, post: BlogPost, block_id: str, new_position: int) -> BlogPost:
        """
        Move a block to a new index; ids and content are untouched.

        Args:
            post: Post to edit
            block_id: Id of the block to move
            new_position: Target index, 0..len(blocks) inclusive (len(blocks) means last)

        Returns:
            BlogPost: The updated post
        """
        current = self._current(post)
        blocks = list(current.blocks or [])
        if not 0 <= new_position <= len(blocks):
            raise BoundsError(new_position, len(blocks))
        index = self._require(current, block_id)

        block = blocks.pop(index)
        blocks.insert(new_position, block)
        updated = self._commit(current, blocks)
        logger.debug("Block moved", block_id=block_id, old=index, new=new_position)
        return updated

    def update_block_content(
        self,
        post: BlogPost,
        block_id: str,
        patch: Mapping[str, Any],
    ) -> BlogPost:
        """
        Replace a block's fields in place, keeping its id and position.

        A patch may switch an image to a video and back. If it replaces the
        block's stored media path, the old path is signalled for deletion.

        Args:
            post: Post to edit
            block_id: Id of the block to update
            patch: Fields to overwrite

        Returns:
            BlogPost: The updated post
        """
        current = self._current(post)
        index = self._require(current, block_id)
        blocks = list(current.blocks or [])
        old = blocks[index]

        if "id" in patch and patch["id"] != old.id:
            raise ValidationError(
                [
                    Violation(
                        position=index,
                        field="id",
                        message="Block id cannot be changed",
                        type="immutable",
                    ),
                ],
            )

        blocks[index] = self._build_block(
            current,
            {**old.model_dump(), **patch, "id": old.id},
            index,
        )
        updated = self._commit(current, blocks)
        logger.debug("Block updated", block_id=block_id, fields=sorted(patch))

        old_path = media_path(old)
        if old_path and old_path != media_path(blocks[index]):
            self._signal_delete(old_path)
        return updated

    def discard(self, post: BlogPost) -> list[str]:
        """
        Signal deletion of every stored media file a post references.

        Used when the whole post is deleted.

        Returns:
            list[str]: The paths signalled
        """
        if post.is_current_shape:
            paths = [path for block in post.blocks or [] if (path := media_path(block))]
        else:
            paths = legacy_media_paths(post)
        for path in paths:
            self._signal_delete(path)
        logger.info("Post media discarded", post_id=post.id, count=len(paths))
        return paths

    def promote_temp_media(self, post: BlogPost, post_id: str) -> BlogPost:
        """
        Move media uploaded before the post was saved under its new id.

        Args:
            post: Post whose blocks may reference ``.../posts/temp/...`` paths
            post_id: Id assigned by the persistence layer

        Returns:
            BlogPost: Post with relocated ``path`` and ``url`` on moved blocks

        Raises:
            StorageError: If a file cannot be relocated. Files moved earlier
                in the same call are moved back first.
        """
        if not post_id:
            mssg = "post_id is required to promote temp media"
            raise ValueError(mssg)

        current = self._current(post)
        blocks: list[BlogBlock] = []
        moved: list[tuple[str, str]] = []
        for block in current.blocks or []:
            path = media_path(block)
            if path is None or not is_temp_media_path(path):
                blocks.append(block)
                continue
            new_path = promoted_media_path(path, post_id)
            try:
                url = self.storage.relocate(path, new_path)
            except StorageError:
                self._undo_relocations(moved)
                raise
            except OSError as e:
                self._undo_relocations(moved)
                raise StorageError(path, f"Could not move media: {e!s}") from e
            moved.append((path, new_path))
            blocks.append(block.model_copy(update={"path": new_path, "url": url}))

        try:
            updated = self._commit(current, blocks)
        except ValidationError:
            self._undo_relocations(moved)
            raise
        logger.info("Temp media promoted", post_id=post_id, moved=len(moved))
        return updated

    def _undo_relocations(self, moved: list[tuple[str, str]]) -> None:
        """Move already-promoted files back to their temp paths, newest first."""
        for old_path, new_path in reversed(moved):
            try:
                self.storage.relocate(new_path, old_path)
            except Exception:
                logger.exception(
                    "Media rollback failed, file left at promoted path",
                    path=new_path,
                    temp_path=old_path,
                )

    def to_record(self, post: BlogPost, *, legacy_projection: bool = True) -> dict[str, Any]:
        """
        Produce the canonical persisted form of a post.

        Args:
            post: Post to persist (legacy posts are migrated first)
            legacy_projection: Refresh ``body`` from the paragraphs for readers
                of the old format. Stored ``media`` is kept as it was.

        Returns:
            dict[str, Any]: camelCase document with absent fields omitted
        """
        current = self._current(post)
        ensure_valid(current)
        record = current.to_record()
        if legacy_projection:
            record["body"] = to_legacy(current.blocks or []).body
        return record
