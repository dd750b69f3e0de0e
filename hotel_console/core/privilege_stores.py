"""
In-memory privilege stores.

Each store is a flat dict keyed by a composite tuple, so "no entry" is a
plain miss that reads as the zero privilege. Stores convert to and from
the nested JSON documents exchanged with persistence:

    hotel_privileges       {hotel: [page, ...]}
    hotel_role_privileges  {hotel: {role: {page: {read, write, maintain}}}}
    user_privileges        {hotel: {role: {user: {page: {read, write, maintain}}}}}

All ids are strings because they are JSON object keys on the wire.
"""

from typing import Any, Iterable, Iterator

from hotel_console.core.exceptions import InvalidSelectionException
from hotel_console.models.page import Page
from hotel_console.models.privilege import NO_PRIVILEGE, PagePrivilege, PrivilegeFlag


def require_selection(**keys: Any) -> None:
    """Raise InvalidSelectionException for the first missing key, in argument order."""
    for name, value in keys.items():
        if value is None or (isinstance(value, str) and not value.strip()):
            raise InvalidSelectionException(name)


def _walk(node: dict, depth: int, prefix: tuple[str, ...] = ()) -> Iterator[tuple[tuple[str, ...], Any]]:
    if depth == 0:
        yield prefix, node
        return
    for key, child in node.items():
        yield from _walk(child, depth - 1, prefix + (str(key),))


class EntitlementStore:
    """Which catalog pages are switched on for each hotel."""

    def __init__(self) -> None:
        # Insertion-ordered so saved documents keep the order pages were enabled
        self._entries: dict[tuple[str, str], None] = {}
        self._hotels: dict[str, None] = {}

    @classmethod
    def from_resource(cls, resource: dict[str, Iterable[str]]) -> "EntitlementStore":
        store = cls()
        for hotel_id, page_ids in resource.items():
            store._hotels[str(hotel_id)] = None
            for page_id in page_ids:
                store._entries[(str(hotel_id), str(page_id))] = None
        return store

    def to_resource(self) -> dict[str, list[str]]:
        resource: dict[str, list[str]] = {hotel_id: [] for hotel_id in self._hotels}
        for hotel_id, page_id in self._entries:
            resource[hotel_id].append(page_id)
        return resource

    def copy(self) -> "EntitlementStore":
        clone = EntitlementStore()
        clone._entries = dict(self._entries)
        clone._hotels = dict(self._hotels)
        return clone

    def is_entitled(self, hotel_id: str, page_id: str) -> bool:
        require_selection(hotel_id=hotel_id, page_id=page_id)
        return (str(hotel_id), str(page_id)) in self._entries

    def set_entitled(self, hotel_id: str, page_id: str, enabled: bool) -> bool:
        """
        Switch a page on or off for a hotel.

        Idempotent. Grants and overrides for the page are left alone, so
        switching it back on restores them.

        Returns:
            The resulting entitlement state
        """
        require_selection(hotel_id=hotel_id, page_id=page_id)
        key = (str(hotel_id), str(page_id))
        self._hotels.setdefault(key[0], None)
        if enabled:
            self._entries.setdefault(key, None)
        else:
            self._entries.pop(key, None)
        return enabled

    def list_entitled(self, hotel_id: str) -> set[str]:
        require_selection(hotel_id=hotel_id)
        hotel_id = str(hotel_id)
        return {page_id for owner, page_id in self._entries if owner == hotel_id}


def grantable_pages(
    catalog: Iterable[Page], entitlements: EntitlementStore, hotel_id: str
) -> list[Page]:
    """Leaf catalog pages entitled for the hotel, in catalog order."""
    entitled = entitlements.list_entitled(hotel_id)
    return [page for page in catalog if page.is_leaf and page.id in entitled]


class _PrivilegeMatrix:
    """Privilege triples keyed by a fixed-length tuple of ids."""

    key_depth: int = 0

    def __init__(self) -> None:
        self._privileges: dict[tuple[str, ...], PagePrivilege] = {}

    @classmethod
    def from_resource(cls, resource: dict):
        store = cls()
        for key, flags in _walk(resource, cls.key_depth):
            store._privileges[key] = PagePrivilege.from_dict(flags)
        return store

    def to_resource(self) -> dict:
        resource: dict = {}
        for key, privilege in self._privileges.items():
            node = resource
            for part in key[:-1]:
                node = node.setdefault(part, {})
            node[key[-1]] = privilege.to_dict()
        return resource

    def copy(self):
        clone = type(self)()
        clone._privileges = dict(self._privileges)
        return clone

    def _find(self, key: tuple[str, ...]) -> PagePrivilege | None:
        return self._privileges.get(tuple(str(part) for part in key))

    def _set(self, key: tuple[str, ...], privilege: PagePrivilege) -> None:
        self._privileges[tuple(str(part) for part in key)] = privilege

    def _toggle(self, key: tuple[str, ...], flag: PrivilegeFlag) -> PagePrivilege:
        privilege = (self._find(key) or NO_PRIVILEGE).toggled(PrivilegeFlag(flag))
        self._set(key, privilege)
        return privilege

    def _under(self, prefix: tuple[str, ...]) -> dict[str, PagePrivilege]:
        prefix = tuple(str(part) for part in prefix)
        size = len(prefix)
        return {
            key[-1]: privilege
            for key, privilege in self._privileges.items()
            if key[:size] == prefix
        }


class RoleGrantStore(_PrivilegeMatrix):
    """Page grants per (hotel, role name)."""

    key_depth = 3

    def find_grant(self, hotel_id: str, role_name: str, page_id: str) -> PagePrivilege | None:
        require_selection(hotel_id=hotel_id, role_name=role_name, page_id=page_id)
        return self._find((hotel_id, role_name, page_id))

    def get_grant(self, hotel_id: str, role_name: str, page_id: str) -> PagePrivilege:
        """Stored grant, or the zero privilege when there is none."""
        return self.find_grant(hotel_id, role_name, page_id) or NO_PRIVILEGE

    def set_grant(
        self, hotel_id: str, role_name: str, page_id: str, privilege: PagePrivilege
    ) -> None:
        require_selection(hotel_id=hotel_id, role_name=role_name, page_id=page_id)
        self._set((hotel_id, role_name, page_id), privilege)

    def toggle_grant(
        self, hotel_id: str, role_name: str, page_id: str, flag: PrivilegeFlag
    ) -> PagePrivilege:
        """Flip one flag, creating the entry with the other flags off if needed."""
        require_selection(hotel_id=hotel_id, role_name=role_name, page_id=page_id, flag=flag)
        return self._toggle((hotel_id, role_name, page_id), flag)

    def grants_for_role(self, hotel_id: str, role_name: str) -> dict[str, PagePrivilege]:
        require_selection(hotel_id=hotel_id, role_name=role_name)
        return self._under((hotel_id, role_name))

    def list_grantable_pages(
        self,
        hotel_id: str,
        role_name: str,
        catalog: Iterable[Page],
        entitlements: EntitlementStore,
    ) -> list[Page]:
        """
        Pages offered for grant editing.

        Dormant grants on disentitled pages stay stored but are not listed.
        """
        require_selection(hotel_id=hotel_id, role_name=role_name)
        return grantable_pages(catalog, entitlements, hotel_id)


class UserOverrideStore(_PrivilegeMatrix):
    """Per-user privileges layered over one role's grants."""

    key_depth = 4

    def find_override(
        self, hotel_id: str, role_name: str, user_id: str, page_id: str
    ) -> PagePrivilege | None:
        require_selection(hotel_id=hotel_id, role_name=role_name, user_id=user_id, page_id=page_id)
        return self._find((hotel_id, role_name, user_id, page_id))

    def get_override(self, hotel_id: str, role_name: str, user_id: str, page_id: str) -> PagePrivilege:
        return self.find_override(hotel_id, role_name, user_id, page_id) or NO_PRIVILEGE

    def set_override(
        self,
        hotel_id: str,
        role_name: str,
        user_id: str,
        page_id: str,
        privilege: PagePrivilege,
    ) -> None:
        require_selection(hotel_id=hotel_id, role_name=role_name, user_id=user_id, page_id=page_id)
        self._set((hotel_id, role_name, user_id, page_id), privilege)

    def toggle_override(
        self, hotel_id: str, role_name: str, user_id: str, page_id: str, flag: PrivilegeFlag
    ) -> PagePrivilege:
        require_selection(
            hotel_id=hotel_id, role_name=role_name, user_id=user_id, page_id=page_id, flag=flag
        )
        return self._toggle((hotel_id, role_name, user_id, page_id), flag)

    def overrides_for_user(
        self, hotel_id: str, role_name: str, user_id: str
    ) -> dict[str, PagePrivilege]:
        require_selection(hotel_id=hotel_id, role_name=role_name, user_id=user_id)
        return self._under((hotel_id, role_name, user_id))
