import pytest

from hotel_console.core.exceptions import InvalidSelectionException
from hotel_console.core.privilege_stores import (
    EntitlementStore,
    RoleGrantStore,
    UserOverrideStore,
)
from hotel_console.models.page import Page
from hotel_console.models.privilege import NO_PRIVILEGE, PagePrivilege, PrivilegeFlag

CATALOG = (
    Page("operations", "Operations", 0),
    Page("rooms", "Rooms", 1, "operations"),
    Page("invoicing", "Invoicing", 1, "operations"),
    Page("reports", "Reports", 1, "operations"),
)


class TestPagePrivilege:
    def test_toggle_flips_only_one_flag(self):
        privilege = PagePrivilege(read=True, write=False, maintain=True)
        assert privilege.toggled(PrivilegeFlag.WRITE) == PagePrivilege(True, True, True)
        assert privilege.toggled(PrivilegeFlag.READ) == PagePrivilege(False, False, True)

    def test_flags_are_not_normalized(self):
        privilege = NO_PRIVILEGE.toggled(PrivilegeFlag.WRITE)
        assert privilege == PagePrivilege(read=False, write=True, maintain=False)

    def test_or_combines_each_flag(self):
        assert PagePrivilege(True, False, False) | PagePrivilege(False, False, True) == PagePrivilege(
            True, False, True
        )

    def test_from_dict_defaults_missing_flags(self):
        assert PagePrivilege.from_dict({"write": True}) == PagePrivilege(False, True, False)


class TestEntitlementStore:
    def test_set_and_list(self):
        store = EntitlementStore()
        store.set_entitled("H1", "rooms", True)
        store.set_entitled("H1", "invoicing", True)
        store.set_entitled("H2", "reports", True)

        assert store.list_entitled("H1") == {"rooms", "invoicing"}
        assert store.is_entitled("H2", "reports")
        assert not store.is_entitled("H2", "rooms")

    def test_toggle_is_idempotent(self):
        store = EntitlementStore()
        assert store.set_entitled("H1", "rooms", True) is True
        assert store.set_entitled("H1", "rooms", True) is True
        assert store.list_entitled("H1") == {"rooms"}

        assert store.set_entitled("H1", "rooms", False) is False
        assert store.set_entitled("H1", "rooms", False) is False
        assert store.list_entitled("H1") == set()

    def test_store_accepts_any_page_id(self):
        """Leaf-only assignment is enforced by callers, not by the store"""
        store = EntitlementStore()
        store.set_entitled("H1", "operations", True)
        assert store.is_entitled("H1", "operations")

    def test_resource_round_trip_keeps_order_and_emptied_hotels(self):
        store = EntitlementStore.from_resource({"H1": ["rooms", "invoicing"], "H2": ["reports"]})
        store.set_entitled("H2", "reports", False)

        assert store.to_resource() == {"H1": ["rooms", "invoicing"], "H2": []}

    def test_unknown_hotel_has_nothing(self):
        assert EntitlementStore().list_entitled("H9") == set()

    @pytest.mark.parametrize("hotel_id", [None, "", "   "])
    def test_missing_hotel_is_invalid_selection(self, hotel_id):
        with pytest.raises(InvalidSelectionException) as exc_info:
            EntitlementStore().list_entitled(hotel_id)
        assert exc_info.value.missing == "hotel_id"


class TestRoleGrantStore:
    def test_absent_grant_is_zero(self):
        store = RoleGrantStore()
        assert store.get_grant("H1", "Manager", "rooms") == NO_PRIVILEGE
        assert store.find_grant("H1", "Manager", "rooms") is None

    def test_toggle_creates_entry_with_other_flags_off(self):
        store = RoleGrantStore()
        result = store.toggle_grant("H1", "Manager", "rooms", PrivilegeFlag.MAINTAIN)

        assert result == PagePrivilege(read=False, write=False, maintain=True)
        assert store.get_grant("H1", "Manager", "rooms") == result

    def test_toggle_twice_restores_flag(self):
        store = RoleGrantStore()
        store.toggle_grant("H1", "Manager", "rooms", PrivilegeFlag.READ)
        store.toggle_grant("H1", "Manager", "rooms", PrivilegeFlag.WRITE)
        store.toggle_grant("H1", "Manager", "rooms", PrivilegeFlag.READ)

        assert store.get_grant("H1", "Manager", "rooms") == PagePrivilege(False, True, False)

    def test_same_role_name_in_two_hotels_is_independent(self):
        store = RoleGrantStore()
        store.toggle_grant("H1", "Manager", "rooms", PrivilegeFlag.READ)

        assert store.get_grant("H2", "Manager", "rooms") == NO_PRIVILEGE

    def test_grantable_pages_are_entitled_leaves_in_catalog_order(self):
        entitlements = EntitlementStore.from_resource({"H1": ["reports", "rooms", "operations"]})
        store = RoleGrantStore()

        pages = store.list_grantable_pages("H1", "Manager", CATALOG, entitlements)

        assert [page.id for page in pages] == ["rooms", "reports"]

    def test_dormant_grant_not_listed_for_editing(self):
        entitlements = EntitlementStore.from_resource({"H1": ["rooms"]})
        store = RoleGrantStore()
        store.set_grant("H1", "Manager", "invoicing", PagePrivilege(read=True))

        pages = store.list_grantable_pages("H1", "Manager", CATALOG, entitlements)

        assert [page.id for page in pages] == ["rooms"]
        assert store.get_grant("H1", "Manager", "invoicing") == PagePrivilege(read=True)

    def test_resource_round_trip(self):
        resource = {
            "H1": {
                "Manager": {"rooms": {"read": True, "write": True, "maintain": False}},
                "Clerk": {"invoicing": {"read": True, "write": False, "maintain": False}},
            }
        }
        store = RoleGrantStore.from_resource(resource)

        assert store.get_grant("H1", "Manager", "rooms") == PagePrivilege(True, True, False)
        assert store.to_resource() == resource

    def test_copy_is_independent(self):
        store = RoleGrantStore()
        store.toggle_grant("H1", "Manager", "rooms", PrivilegeFlag.READ)
        clone = store.copy()
        clone.toggle_grant("H1", "Manager", "rooms", PrivilegeFlag.READ)

        assert store.get_grant("H1", "Manager", "rooms").read is True
        assert clone.get_grant("H1", "Manager", "rooms").read is False

    def test_missing_role_is_invalid_selection(self):
        with pytest.raises(InvalidSelectionException) as exc_info:
            RoleGrantStore().toggle_grant("H1", "", "rooms", PrivilegeFlag.READ)
        assert exc_info.value.missing == "role_name"


class TestUserOverrideStore:
    def test_override_scoped_to_role(self):
        store = UserOverrideStore()
        store.toggle_override("H1", "Clerk", "u1", "rooms", PrivilegeFlag.READ)

        assert store.get_override("H1", "Clerk", "u1", "rooms") == PagePrivilege(read=True)
        assert store.find_override("H1", "Manager", "u1", "rooms") is None

    def test_overrides_for_user(self):
        store = UserOverrideStore()
        store.toggle_override("H1", "Clerk", "u1", "rooms", PrivilegeFlag.READ)
        store.toggle_override("H1", "Clerk", "u1", "invoicing", PrivilegeFlag.WRITE)
        store.toggle_override("H1", "Clerk", "u2", "rooms", PrivilegeFlag.MAINTAIN)

        assert store.overrides_for_user("H1", "Clerk", "u1") == {
            "rooms": PagePrivilege(read=True),
            "invoicing": PagePrivilege(write=True),
        }

    def test_resource_round_trip(self):
        resource = {
            "H1": {"Clerk": {"u1": {"invoicing": {"read": True, "write": False, "maintain": False}}}}
        }
        assert UserOverrideStore.from_resource(resource).to_resource() == resource

    @pytest.mark.parametrize(
        "hotel_id, role_name, user_id, missing",
        [
            ("", "Clerk", "u1", "hotel_id"),
            ("H1", None, "u1", "role_name"),
            ("H1", "Clerk", "", "user_id"),
        ],
    )
    def test_incomplete_selection_has_no_matrix(self, hotel_id, role_name, user_id, missing):
        with pytest.raises(InvalidSelectionException) as exc_info:
            UserOverrideStore().overrides_for_user(hotel_id, role_name, user_id)
        assert exc_info.value.missing == missing
