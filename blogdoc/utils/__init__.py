from blogdoc.utils.helpers import (
    IdFactory,
    is_temp_media_path,
    media_storage_path,
    new_block_id,
    promoted_media_path,
    unique_block_id,
)

__all__ = [
    "IdFactory",
    "is_temp_media_path",
    "media_storage_path",
    "new_block_id",
    "promoted_media_path",
    "unique_block_id",
]
