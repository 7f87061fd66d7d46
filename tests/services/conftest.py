# tests/services/conftest.py
"""Pytest fixtures for services tests."""

from collections.abc import Callable
from itertools import count
from unittest.mock import MagicMock

import pytest

from blogdoc.schemas.blog import BlogPost
from blogdoc.services.composer import DocumentComposer
from blogdoc.services.storage.base import MediaStorage


@pytest.fixture
def id_factory() -> Callable[[], str]:
    """Deterministic block id source: b1, b2, ..."""
    counter = count(1)
    return lambda: f"b{next(counter)}"


@pytest.fixture
def storage() -> MagicMock:
    """Storage collaborator mock."""
    mock = MagicMock(spec=MediaStorage)
    mock.delete.return_value = True
    mock.relocate.side_effect = lambda old, new: f"https://cdn.example.com/{new}"
    return mock


@pytest.fixture
def composer(storage: MagicMock, id_factory: Callable[[], str]) -> DocumentComposer:
    """Composer wired to the storage mock and deterministic ids."""
    return DocumentComposer(storage=storage, id_factory=id_factory)


@pytest.fixture
def legacy_post() -> BlogPost:
    """Post stored before blocks existed."""
    return BlogPost.model_validate(
        {
            "id": "post-1",
            "title": "T",
            "body": "Hello",
            "media": [
                {"type": "image", "url": "https://x/y.png"},
                {
                    "type": "video",
                    "url": "https://x/clip.mp4",
                    "path": "siteBlogs/demo/posts/post-1/clip.mp4",
                    "title": "Clip",
                },
            ],
            "createdAt": "2024-01-01T00:00:00Z",
        },
    )


@pytest.fixture
def current_post() -> BlogPost:
    """Post in block form with one stored image."""
    return BlogPost.model_validate(
        {
            "id": "post-2",
            "title": "Trip notes",
            "blocks": [
                {"id": "p1", "type": "p", "text": "Intro"},
                {
                    "id": "img1",
                    "type": "image",
                    "url": "https://cdn.example.com/uploads/v1.png",
                    "path": "uploads/v1.png",
                },
                {"id": "p2", "type": "p", "text": ""},
            ],
        },
    )
