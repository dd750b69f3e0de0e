"""Page catalog built from the navigation tree."""

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Sequence

from pydantic import TypeAdapter

from hotel_console.config import settings
from hotel_console.models.page import Page
from hotel_console.navigation import NAV_ITEMS
from hotel_console.schemas.catalog_schemas import MenuNode

logger = logging.getLogger(__name__)

_menu_adapter = TypeAdapter(list[MenuNode])


def flatten(
    tree: Sequence[MenuNode], depth: int = 0, parent_id: str | None = None
) -> list[Page]:
    """
    Flatten a menu tree into pages in pre-order.

    Each node is emitted before all of its descendants, and a whole subtree
    is emitted before the next sibling. Rendering relies on this order.

    Args:
        tree: Menu nodes at the current level
        depth: Nesting depth of `tree` (0 for the top level)
        parent_id: Path of the node owning `tree`

    Returns:
        Pages tagged with depth and parent path
    """
    pages: list[Page] = []
    for node in tree:
        pages.append(Page(id=node.path, label=node.label, depth=depth, parent_id=parent_id))
        if node.children:
            pages.extend(flatten(node.children, depth + 1, node.path))
    return pages


def load_menu(menu_file: str | None = None) -> list[MenuNode]:
    """Read the menu tree from a JSON file, or use the built-in navigation."""
    if menu_file:
        raw = json.loads(Path(menu_file).read_text(encoding="utf-8"))
        logger.info("Loaded navigation menu from %s", menu_file)
    else:
        raw = NAV_ITEMS
    return _menu_adapter.validate_python(raw)


@lru_cache(maxsize=1)
def get_catalog() -> tuple[Page, ...]:
    """
    Catalog for this process, computed once from the configured menu.

    A tuple so callers cannot mutate the shared catalog.
    """
    catalog = tuple(flatten(load_menu(settings.MENU_FILE)))
    logger.info("Page catalog built: %d pages", len(catalog))
    return catalog
