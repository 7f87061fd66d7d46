from blogdoc.schemas.blog import (
    BLOCK_ADAPTER,
    BlogBlock,
    BlogMedia,
    BlogPost,
    ImageBlock,
    LegacyContent,
    MediaBlock,
    MediaType,
    OpaqueInstant,
    ParagraphBlock,
    VideoBlock,
)
from blogdoc.schemas.validation import Violation

__all__ = [
    "BLOCK_ADAPTER",
    "BlogBlock",
    "BlogMedia",
    "BlogPost",
    "ImageBlock",
    "LegacyContent",
    "MediaBlock",
    "MediaType",
    "OpaqueInstant",
    "ParagraphBlock",
    "VideoBlock",
    "Violation",
]
