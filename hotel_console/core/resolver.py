"""Effective privilege resolution over entitlement, grant and override stores."""

from functools import reduce
from operator import or_
from typing import TYPE_CHECKING, Sequence

from hotel_console.core.privilege_stores import (
    EntitlementStore,
    RoleGrantStore,
    UserOverrideStore,
    grantable_pages,
    require_selection,
)
from hotel_console.models.page import Page
from hotel_console.models.privilege import NO_PRIVILEGE, PagePrivilege, PrivilegeFlag

if TYPE_CHECKING:
    from hotel_console.models.user import User


class PrivilegeResolver:
    """
    Answers privilege questions from one snapshot of the three stores.

    Every answer is gated on entitlement first: a page the hotel does not
    have resolves to the zero privilege whatever is stored for it.
    """

    def __init__(
        self,
        catalog: Sequence[Page],
        entitlements: EntitlementStore,
        grants: RoleGrantStore,
        overrides: UserOverrideStore,
    ):
        self.catalog = catalog
        self.entitlements = entitlements
        self.grants = grants
        self.overrides = overrides

    def grantable_pages(self, hotel_id: str) -> list[Page]:
        return grantable_pages(self.catalog, self.entitlements, hotel_id)

    def held_role_names(self, hotel_id: str, user: "User") -> set[str]:
        """Names of the user's roles that belong to this hotel."""
        return {role.name for role in user.roles if str(role.hotel_id) == str(hotel_id)}

    def merged_role_view(self, hotel_id: str, user: "User") -> dict[str, PagePrivilege]:
        """
        OR of the user's role grants for every leaf page, ignoring overrides.

        Pages the hotel is not entitled to are present with the zero
        privilege. Order-independent and monotonic in the role set. A user
        without roles in the hotel gets all-false for every page.
        """
        require_selection(hotel_id=hotel_id)
        hotel_id = str(hotel_id)
        entitled = self.entitlements.list_entitled(hotel_id)
        role_names = self.held_role_names(hotel_id, user)
        return {
            page.id: reduce(
                or_,
                (self.grants.get_grant(hotel_id, name, page.id) for name in role_names),
                NO_PRIVILEGE,
            )
            if page.id in entitled
            else NO_PRIVILEGE
            for page in self.catalog
            if page.is_leaf
        }

    def is_overridden(self, hotel_id: str, role_name: str, user_id: str, page_id: str) -> bool:
        return self.overrides.find_override(hotel_id, role_name, user_id, page_id) is not None

    def effective_privilege(
        self, hotel_id: str, role_name: str, user_id: str, page_id: str
    ) -> PagePrivilege:
        """
        Privilege of one user in one role context.

        An override entry replaces the role grant as a whole; it is not
        OR-ed with it. Without an override the single role's grant applies.
        """
        require_selection(hotel_id=hotel_id, role_name=role_name, user_id=user_id, page_id=page_id)
        if not self.entitlements.is_entitled(hotel_id, page_id):
            return NO_PRIVILEGE

        override = self.overrides.find_override(hotel_id, role_name, user_id, page_id)
        if override is not None:
            return override
        return self.grants.get_grant(hotel_id, role_name, page_id)

    def can_access(
        self, hotel_id: str, user: "User", page_id: str, flag: PrivilegeFlag
    ) -> bool:
        """
        Whether the user may perform `flag` on the page.

        Each held role contributes its effective privilege (override over
        grant); the user is allowed if any role context allows it.
        """
        require_selection(hotel_id=hotel_id, page_id=page_id, flag=flag)
        flag = PrivilegeFlag(flag)
        if not self.entitlements.is_entitled(hotel_id, page_id):
            return False
        return any(
            self.effective_privilege(hotel_id, name, str(user.id), page_id).allows(flag)
            for name in self.held_role_names(hotel_id, user)
        )
