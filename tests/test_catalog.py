import json

import pytest
from pydantic import TypeAdapter

from hotel_console.core.catalog import flatten, load_menu
from hotel_console.models.page import Page
from hotel_console.schemas.catalog_schemas import MenuNode


def build_menu(raw: list[dict]) -> list[MenuNode]:
    return TypeAdapter(list[MenuNode]).validate_python(raw)


MENU = [
    {"path": "/dashboard", "label": "Welcome"},
    {
        "path": "/rooms",
        "label": "Rooms",
        "children": [
            {"path": "/rooms/all", "label": "All Rooms"},
            {
                "path": "/rooms/types",
                "label": "Room Types",
                "children": [{"path": "/rooms/types/suites", "label": "Suites"}],
            },
        ],
    },
    {"path": "/tax", "label": "Tax", "children": []},
    {
        "path": "/invoicing",
        "label": "Invoicing",
        "children": [{"path": "/invoicing/bill", "label": "Bill"}],
    },
]



def chain(depth: int, prefix: str = "") -> dict:
    path = f"{prefix}/level{depth}"
    node = {"path": path, "label": f"Level {depth}"}
    if depth < 6:
        node["children"] = [chain(depth + 1, path)]
    return node


DEEP_CHAIN = [chain(0)]

WIDE_TREE = [
    {
        "path": f"/module{m}",
        "label": f"Module {m}",
        "children": [{"path": f"/module{m}/page{p}", "label": f"Page {p}"} for p in range(12)],
    }
    for m in range(5)
]

EMPTY_CHILDREN_MID_TREE = [
    {
        "path": "/front-desk",
        "label": "Front Desk",
        "children": [
            {"path": "/front-desk/arrivals", "label": "Arrivals"},
            {"path": "/front-desk/groups", "label": "Groups", "children": []},
            {
                "path": "/front-desk/folios",
                "label": "Folios",
                "children": [{"path": "/front-desk/folios/open", "label": "Open"}],
            },
        ],
    },
    {"path": "/tax", "label": "Tax", "children": []},
    {"path": "/reports", "label": "Reports", "children": [{"path": "/reports/daily", "label": "Daily"}]},
]


class TestFlatten:
    """Tests for flattening the navigation tree"""

    def test_preorder_with_depth_and_parent(self):
        """Each node is followed by its whole subtree before the next sibling"""
        pages = flatten(build_menu(MENU))

        assert pages == [
            Page("/dashboard", "Welcome", 0, None),
            Page("/rooms", "Rooms", 0, None),
            Page("/rooms/all", "All Rooms", 1, "/rooms"),
            Page("/rooms/types", "Room Types", 1, "/rooms"),
            Page("/rooms/types/suites", "Suites", 2, "/rooms/types"),
            Page("/tax", "Tax", 0, None),
            Page("/invoicing", "Invoicing", 0, None),
            Page("/invoicing/bill", "Bill", 1, "/invoicing"),
        ]

    @pytest.mark.parametrize(
        "menu",
        [
            MENU,
            DEEP_CHAIN,
            WIDE_TREE,
            EMPTY_CHILDREN_MID_TREE,
        ],
        ids=["mixed", "deep-chain", "wide", "empty-children-mid-tree"],
    )
    def test_parent_always_precedes_child(self, menu):
        pages = flatten(build_menu(menu))
        position = {page.id: index for index, page in enumerate(pages)}

        assert len(position) == len(pages)
        for page in pages:
            if page.parent_id is not None:
                assert position[page.parent_id] < position[page.id]
                assert pages[position[page.parent_id]].depth == page.depth - 1

    def test_empty_tree(self):
        assert flatten([]) == []

    def test_empty_children_is_a_leaf(self):
        pages = flatten(build_menu([{"path": "/tax", "label": "Tax", "children": []}]))
        assert pages == [Page("/tax", "Tax", 0, None)]

    def test_only_nested_pages_are_leaves(self):
        pages = flatten(build_menu(MENU))
        assert [page.id for page in pages if page.is_leaf] == [
            "/rooms/all",
            "/rooms/types",
            "/rooms/types/suites",
            "/invoicing/bill",
        ]

    def test_menu_is_not_mutated(self):
        menu = build_menu(MENU)
        before = [node.model_dump() for node in menu]
        flatten(menu)
        assert [node.model_dump() for node in menu] == before


class TestLoadMenu:
    """Tests for the navigation source"""

    def test_default_navigation(self):
        pages = flatten(load_menu())
        ids = [page.id for page in pages]

        assert ids[0] == "/dashboard"
        assert "/settings/user-privileges" in ids
        assert len(ids) == len(set(ids))
        settings_index = ids.index("/settings")
        assert ids[settings_index + 1] == "/settings/hotels"

    def test_menu_file(self, tmp_path):
        menu_file = tmp_path / "menu.json"
        menu_file.write_text(json.dumps(MENU), encoding="utf-8")

        pages = flatten(load_menu(str(menu_file)))

        assert len(pages) == 8
        assert pages[-1].parent_id == "/invoicing"

    def test_menu_file_rejects_node_without_path(self, tmp_path):
        menu_file = tmp_path / "menu.json"
        menu_file.write_text(json.dumps([{"label": "Nowhere"}]), encoding="utf-8")

        with pytest.raises(ValueError):
            load_menu(str(menu_file))
