from blogdoc.services.composer import DocumentComposer, media_path
from blogdoc.services.legacy import to_blocks, to_legacy
from blogdoc.services.validator import ensure_valid, parse_post, validate_document

__all__ = [
    "DocumentComposer",
    "ensure_valid",
    "media_path",
    "parse_post",
    "to_blocks",
    "to_legacy",
    "validate_document",
]
