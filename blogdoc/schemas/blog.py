"""
Blog post content models.

A post's content is either the current ordered ``blocks`` sequence or,
for posts written before blocks existed, a flat ``body`` string plus an
unordered ``media`` list. The block kinds form a closed set tagged by
``type``; adding a kind means changing this module, the validator, and
the legacy adapter together.
"""

from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

# Timestamps are assigned by the persistence layer and passed through untouched.
OpaqueInstant = Any

MediaType = Literal["image", "video"]


class BlogMedia(BaseModel):
    """Legacy media element: a media block without identity or position."""

    model_config = ConfigDict(extra="ignore")

    type: MediaType
    url: str
    path: str | None = Field(default=None, description="Storage path, used for deletion only")
    title: str | None = None


class ParagraphBlock(BaseModel):
    """A text paragraph. Empty text is a valid placeholder."""

    model_config = ConfigDict(extra="ignore")

    id: str
    type: Literal["p"] = "p"
    text: str


class ImageBlock(BaseModel):
    """An image reference."""

    model_config = ConfigDict(extra="ignore")

    id: str
    type: Literal["image"] = "image"
    url: str
    path: str | None = Field(default=None, description="Storage path, used for deletion only")
    title: str | None = None


class VideoBlock(BaseModel):
    """A video reference."""

    model_config = ConfigDict(extra="ignore")

    id: str
    type: Literal["video"] = "video"
    url: str
    path: str | None = Field(default=None, description="Storage path, used for deletion only")
    title: str | None = None


BlogBlock = Annotated[ParagraphBlock | ImageBlock | VideoBlock, Field(discriminator="type")]
MediaBlock = ImageBlock | VideoBlock

BLOCK_ADAPTER: TypeAdapter[BlogBlock] = TypeAdapter(BlogBlock)


class BlogPost(BaseModel):
    """A single article as stored by the persistence layer."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str | None = Field(default=None, description="Assigned on first persist")
    title: str
    body: str | None = Field(default=None, description="Legacy full text")
    media: list[BlogMedia] | None = Field(default=None, description="Legacy media list")
    blocks: list[BlogBlock] | None = Field(
        default=None,
        description="Ordered content; array position is the only ordering",
    )
    created_at: OpaqueInstant = Field(default=None, alias="createdAt")
    updated_at: OpaqueInstant = Field(default=None, alias="updatedAt")

    @property
    def is_current_shape(self) -> bool:
        """True once ``blocks`` is set, even to an empty list."""
        return self.blocks is not None

    def block_ids(self) -> list[str]:
        return [block.id for block in self.blocks or []]

    def find_block(self, block_id: str) -> int | None:
        """Return the position of the block with ``block_id``, or None."""
        for index, block in enumerate(self.blocks or []):
            if block.id == block_id:
                return index
        return None

    def to_record(self) -> dict[str, Any]:
        """Dump to the persisted (camelCase) shape, omitting absent fields."""
        return self.model_dump(by_alias=True, exclude_none=True)


class LegacyContent(BaseModel):
    """Flat projection of a block sequence for readers of the old format."""

    body: str = ""
    media: list[BlogMedia] = Field(default_factory=list)
