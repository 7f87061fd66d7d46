"""
Conversion between legacy flat posts and block sequences.

Legacy posts keep all text in ``body`` and their media in an unordered
``media`` list. ``to_blocks`` normalizes them into blocks for reading and
migration; ``to_legacy`` projects blocks back for readers of the old
format. Both directions are pure.
"""

from collections.abc import Sequence

from blogdoc.schemas.blog import (
    BlogBlock,
    BlogMedia,
    BlogPost,
    ImageBlock,
    LegacyContent,
    ParagraphBlock,
    VideoBlock,
)
from blogdoc.utils.helpers import IdFactory, new_block_id, unique_block_id

PARAGRAPH_SEPARATOR = "\n"


def _media_to_block(media: BlogMedia, block_id: str) -> BlogBlock:
    fields = media.model_dump(exclude={"type"})
    match media.type:
        case "image":
            return ImageBlock(id=block_id, **fields)
        case "video":
            return VideoBlock(id=block_id, **fields)
    mssg = f"Unhandled media type: {media.type}"
    raise TypeError(mssg)


def to_blocks(post: BlogPost, id_factory: IdFactory = new_block_id) -> list[BlogBlock]:
    """
    Normalize a post's content into an ordered block sequence.

    A current-shape post returns its blocks unchanged. A legacy post yields
    one paragraph for a non-blank ``body`` followed by one block per media
    entry, in stored order, each with a freshly generated id.

    Args:
        post: The post to read.
        id_factory: Source of identifiers for synthesized blocks.

    Returns:
        list[BlogBlock]: A new list; the post itself is not modified.
    """
    if post.blocks is not None:
        return list(post.blocks)

    taken: set[str] = set()

    def next_id() -> str:
        block_id = unique_block_id(taken, id_factory)
        taken.add(block_id)
        return block_id

    blocks: list[BlogBlock] = []
    if post.body and post.body.strip():
        blocks.append(ParagraphBlock(id=next_id(), text=post.body))
    for media in post.media or []:
        blocks.append(_media_to_block(media, next_id()))
    return blocks


def to_legacy(blocks: Sequence[BlogBlock]) -> LegacyContent:
    """
    Project a block sequence onto the legacy ``body``/``media`` fields.

    Paragraph texts are joined with a newline; image and video blocks keep
    their relative order but lose their id and their position among the
    paragraphs. The projection is lossy and never the persisted source of
    truth for a migrated post.

    Args:
        blocks: Ordered content blocks.

    Returns:
        LegacyContent: The flat projection.
    """
    texts: list[str] = []
    media: list[BlogMedia] = []
    for block in blocks:
        match block:
            case ParagraphBlock():
                texts.append(block.text)
            case ImageBlock() | VideoBlock():
                media.append(
                    BlogMedia(type=block.type, url=block.url, path=block.path, title=block.title),
                )
            case _:
                mssg = f"Unhandled block kind: {type(block).__name__}"
                raise TypeError(mssg)
    return LegacyContent(body=PARAGRAPH_SEPARATOR.join(texts), media=media)


def legacy_media_paths(post: BlogPost) -> list[str]:
    """Return the storage paths referenced by a post's legacy media list."""
    return [media.path for media in post.media or [] if media.path]
