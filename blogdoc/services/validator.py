"""
Structural validation of blog documents and blocks.

Checks run in a fixed order: document structure (short-circuits), title,
each block's tag and fields, then block identity. Everything after the
structural check accumulates so an editor can show all problems at once.
"""

from collections.abc import Collection, Mapping
from typing import Any

from pydantic import HttpUrl, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from blogdoc.configs.settings import MAX_TITLE_LENGTH
from blogdoc.errors.document import ValidationError
from blogdoc.schemas.blog import (
    BLOCK_ADAPTER,
    BlogBlock,
    BlogMedia,
    BlogPost,
    ImageBlock,
    ParagraphBlock,
    VideoBlock,
)
from blogdoc.schemas.validation import Violation

_URL_ADAPTER: TypeAdapter[HttpUrl] = TypeAdapter(HttpUrl)


def _structural(field: str, message: str) -> list[Violation]:
    return [Violation(field=field, message=message, type="structure")]


def _check_title(title: Any) -> list[Violation]:
    if title is None:
        return [Violation(field="title", message="Title is required", type="missing")]
    if not isinstance(title, str):
        return [Violation(field="title", message="Title must be a string", type="string_type")]
    if not title.strip():
        return [Violation(field="title", message="Title must not be empty", type="empty")]
    if len(title) > MAX_TITLE_LENGTH:
        return [
            Violation(
                field="title",
                message=f"Title must be at most {MAX_TITLE_LENGTH} characters",
                type="string_too_long",
            ),
        ]
    return []


def _check_url(url: str, position: int) -> list[Violation]:
    if not url.strip():
        return [
            Violation(position=position, field="url", message="URL is required", type="missing"),
        ]
    try:
        _URL_ADAPTER.validate_python(url)
    except PydanticValidationError:
        return [
            Violation(
                position=position,
                field="url",
                message=f"{url!r} is not a valid URL",
                type="url_parsing",
            ),
        ]
    return []


def check_block(block: BlogBlock, position: int) -> list[Violation]:
    """
    Check the required fields of one parsed block.

    Args:
        block: Parsed block.
        position: Index of the block in its document.

    Returns:
        list[Violation]: Empty when the block is well formed.
    """
    violations: list[Violation] = []
    if not block.id.strip():
        violations.append(
            Violation(
                position=position,
                field="id",
                message="Block id is required",
                type="missing",
            ),
        )

    match block:
        case ParagraphBlock():
            pass
        case ImageBlock() | VideoBlock():
            violations.extend(_check_url(block.url, position))
        case _:
            mssg = f"Unhandled block kind: {type(block).__name__}"
            raise TypeError(mssg)

    return violations


def _parse_block(raw: Any, position: int) -> tuple[BlogBlock | None, list[Violation]]:
    try:
        return BLOCK_ADAPTER.validate_python(raw), []
    except PydanticValidationError as e:
        return None, [Violation.from_pydantic(error, position=position) for error in e.errors()]


def _check_identity(raw_blocks: list[Any], removed_ids: Collection[str]) -> list[Violation]:
    violations: list[Violation] = []
    first_seen: dict[str, int] = {}
    for position, raw in enumerate(raw_blocks):
        block_id = raw.get("id") if isinstance(raw, Mapping) else getattr(raw, "id", None)
        if not isinstance(block_id, str) or not block_id:
            continue
        if block_id in first_seen:
            violations.append(
                Violation(
                    position=position,
                    field="id",
                    message=(
                        f"Duplicate block id {block_id!r} "
                        f"(first used by block {first_seen[block_id]})"
                    ),
                    type="duplicate_id",
                ),
            )
        else:
            first_seen[block_id] = position
        if block_id in removed_ids:
            violations.append(
                Violation(
                    position=position,
                    field="id",
                    message=f"Block id {block_id!r} was removed earlier in this edit session",
                    type="stale_id",
                ),
            )
    return violations


def _check_legacy_media(raw_media: list[Any]) -> list[Violation]:
    violations: list[Violation] = []
    for index, raw in enumerate(raw_media):
        try:
            BlogMedia.model_validate(raw)
        except PydanticValidationError as e:
            violations.extend(
                Violation.from_pydantic(error, prefix=f"media.{index}") for error in e.errors()
            )
    return violations


def validate_document(
    document: BlogPost | Mapping[str, Any],
    removed_ids: Collection[str] = (),
) -> list[Violation]:
    """
    Validate a document in either model or persisted (raw mapping) form.

    Args:
        document: The post to check.
        removed_ids: Block ids removed earlier in the current edit session.

    Returns:
        list[Violation]: Every violated invariant; empty means the document is valid.
    """
    data = document.to_record() if isinstance(document, BlogPost) else document
    if not isinstance(data, Mapping):
        return _structural("document", "Document must be a mapping")

    raw_blocks = data.get("blocks")
    raw_media = data.get("media")
    if raw_blocks is not None and not isinstance(raw_blocks, list):
        return _structural("blocks", "Blocks must be a list")
    if raw_media is not None and not isinstance(raw_media, list):
        return _structural("media", "Media must be a list")

    violations = _check_title(data.get("title"))

    if raw_blocks is None:
        violations.extend(_check_legacy_media(raw_media or []))
        return violations

    for position, raw in enumerate(raw_blocks):
        block, errors = _parse_block(raw, position)
        violations.extend(errors)
        if block is not None:
            violations.extend(check_block(block, position))

    violations.extend(_check_identity(raw_blocks, removed_ids))
    return violations


def ensure_valid(
    document: BlogPost | Mapping[str, Any],
    removed_ids: Collection[str] = (),
) -> None:
    """Raise ValidationError if the document violates any invariant."""
    if violations := validate_document(document, removed_ids):
        raise ValidationError(violations)


def parse_post(raw: BlogPost | Mapping[str, Any]) -> BlogPost:
    """
    Validate a stored document and build its model.

    Args:
        raw: Document as supplied by the persistence layer.

    Returns:
        BlogPost: The parsed post.

    Raises:
        ValidationError: If the document is malformed.
    """
    ensure_valid(raw)
    if isinstance(raw, BlogPost):
        return raw
    try:
        return BlogPost.model_validate(raw)
    except PydanticValidationError as e:
        raise ValidationError(Violation.from_pydantic(error) for error in e.errors()) from e
