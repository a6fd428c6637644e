"""Shared fixtures for the livescroll test suite."""

from typing import Any, Dict

import pytest
from PIL import Image

from livescroll.schemas.captions import ScreenRect
from livescroll.tree.snapshot import SnapshotTree, tree_from_dict


REGION = ScreenRect(left=10, top=20, width=40, height=10)

# A small article: two paragraphs mention "quick", only one also says "brown".
ARTICLE: Dict[str, Any] = {
    "text": None,
    "label": "Article",
    "children": [
        {"text": "Chapter one"},
        {
            "children": [
                {"text": "The quick red fox naps"},
                {"text": "A QUICK Brown fox jumps"},
            ]
        },
        {"label": "Photo of a fox"},
    ],
}


@pytest.fixture
def article_tree() -> SnapshotTree:
    return tree_from_dict(ARTICLE)


@pytest.fixture
def blank_screen():
    return Image.new("RGB", (100, 60), "white")


@pytest.fixture
def region() -> ScreenRect:
    return REGION
