"""Flattened navigation catalog entry."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Page:
    """
    One addressable page of the admin console navigation.

    Attributes:
        id: Route path from the menu definition, unique across the catalog
        label: Display name
        depth: 0 for top-level modules, >0 for sub-pages
        parent_id: Path of the enclosing menu node, None at the top level

    Only pages with depth > 0 carry privileges; depth-0 pages are headers.
    """

    id: str
    label: str
    depth: int
    parent_id: str | None = None

    @property
    def is_leaf(self) -> bool:
        return self.depth > 0
