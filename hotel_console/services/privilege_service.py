import logging
from typing import Sequence

from sqlalchemy.orm import Session

from hotel_console.core.catalog import get_catalog
from hotel_console.core.exceptions import ConflictException, ValidationException
from hotel_console.core.privilege_stores import (
    EntitlementStore,
    RoleGrantStore,
    UserOverrideStore,
    require_selection,
)
from hotel_console.core.resolver import PrivilegeResolver
from hotel_console.models.page import Page
from hotel_console.models.privilege import PrivilegeFlag
from hotel_console.models.privilege_document import PrivilegeDocument, PrivilegeResource
from hotel_console.repositories.privilege_document_repository import PrivilegeDocumentRepository
from hotel_console.services.hotel_service import HotelService
from hotel_console.services.role_service import RoleService
from hotel_console.services.user_service import UserService

logger = logging.getLogger(__name__)

_STORE_TYPES = {
    PrivilegeResource.HOTEL_PRIVILEGES: EntitlementStore,
    PrivilegeResource.HOTEL_ROLE_PRIVILEGES: RoleGrantStore,
    PrivilegeResource.USER_PRIVILEGES: UserOverrideStore,
}


def _matches(page: Page, search: str | None) -> bool:
    if not search:
        return True
    needle = search.strip().lower()
    return needle in page.label.lower() or needle in page.id.lower()


def _paginate(rows: list, page: int, page_size: int) -> list:
    start = (page - 1) * page_size
    return rows[start:start + page_size]


class PrivilegeService:
    """
    Service layer for hotel entitlements, role grants and user overrides.

    Each request loads the documents it needs, works on in-memory stores,
    and writes a whole document back. A changed store is only kept once
    the save has committed.
    """

    def __init__(self, db: Session, catalog: Sequence[Page] | None = None):
        self.db = db
        self.catalog = catalog if catalog is not None else get_catalog()
        self.documents = PrivilegeDocumentRepository(db)
        self.hotels = HotelService(db)
        self.roles = RoleService(db)
        self.users = UserService(db)

    # Whole documents

    def load(self, resource: PrivilegeResource):
        """
        Load a document into its store.

        Returns:
            Tuple of (store, version); version is 0 for a never-saved document
        """
        document = self.documents.get(resource)
        store_type = _STORE_TYPES[resource]
        if document is None:
            return store_type(), 0
        return store_type.from_resource(document.payload or {}), document.version

    def get_document(self, resource: PrivilegeResource) -> dict:
        store, version = self.load(resource)
        return {"version": version, "data": store.to_resource()}

    def replace_document(
        self, resource: PrivilegeResource, data: dict, expected_version: int | None = None
    ) -> dict:
        """Bulk-replace a document (the PUT contract of the settings screens)"""
        store = _STORE_TYPES[resource].from_resource(data)
        saved = self._save(resource, store, expected_version)
        return {"version": saved.version, "data": store.to_resource()}

    def _save(
        self, resource: PrivilegeResource, store, expected_version: int | None
    ) -> PrivilegeDocument:
        """
        Persist a store, enforcing the version when the caller sent one.

        Raises:
            ConflictException: If `expected_version` is stale
            PersistenceFailureException: If the database write failed
        """
        document = self.documents.get(resource)
        current = document.version if document else 0
        if expected_version is not None and expected_version != current:
            logger.warning(
                "Rejected save of %s: based on version %s, stored version is %s",
                resource.value,
                expected_version,
                current,
            )
            raise ConflictException(
                f"{resource.value} was changed by someone else (version {current}); reload and retry"
            )

        saved = self.documents.save(resource, store.to_resource(), document)
        logger.info("Saved %s at version %s", resource.value, saved.version)
        return saved

    def resolver(self) -> PrivilegeResolver:
        entitlements, _ = self.load(PrivilegeResource.HOTEL_PRIVILEGES)
        grants, _ = self.load(PrivilegeResource.HOTEL_ROLE_PRIVILEGES)
        overrides, _ = self.load(PrivilegeResource.USER_PRIVILEGES)
        return PrivilegeResolver(self.catalog, entitlements, grants, overrides)

    # Hotel entitlements

    def entitlement_matrix(self, hotel_id: int) -> dict:
        """Every leaf catalog page with whether the hotel has it"""
        self.hotels.get_hotel(hotel_id)
        entitlements, version = self.load(PrivilegeResource.HOTEL_PRIVILEGES)
        enabled = entitlements.list_entitled(str(hotel_id))
        rows = [
            {**self._page_fields(page), "enabled": page.id in enabled}
            for page in self.catalog
            if page.is_leaf
        ]
        return {"hotel_id": str(hotel_id), "version": version, "pages": rows, "total": len(rows)}

    def set_entitlement(
        self, hotel_id: int, page_id: str, enabled: bool, expected_version: int | None = None
    ) -> dict:
        """
        Switch a page on or off for a hotel.

        Raises:
            ValidationException: If the page is not a sub-page of the catalog
        """
        self.hotels.get_hotel(hotel_id)
        self._leaf_page(page_id)

        entitlements, _ = self.load(PrivilegeResource.HOTEL_PRIVILEGES)
        updated = entitlements.copy()
        updated.set_entitled(str(hotel_id), page_id, enabled)
        saved = self._save(PrivilegeResource.HOTEL_PRIVILEGES, updated, expected_version)

        logger.info("Hotel %s page %s entitlement set to %s", hotel_id, page_id, enabled)
        return {
            "hotel_id": str(hotel_id),
            "page_id": page_id,
            "enabled": enabled,
            "version": saved.version,
        }

    # Role grants

    def role_matrix(
        self,
        hotel_id: int,
        role_name: str,
        search: str | None = None,
        page: int = 1,
        page_size: int = 10,
    ) -> dict:
        """Grantable pages of the hotel with the role's grants"""
        require_selection(hotel_id=hotel_id, role_name=role_name)
        self.hotels.get_hotel(hotel_id)
        self.roles.get_by_name(hotel_id, role_name)

        resolver = self.resolver()
        grants_version = self._version(PrivilegeResource.HOTEL_ROLE_PRIVILEGES)
        pages = [
            p
            for p in resolver.grants.list_grantable_pages(
                str(hotel_id), role_name, self.catalog, resolver.entitlements
            )
            if _matches(p, search)
        ]
        rows = [
            {
                **self._page_fields(p),
                "privilege": resolver.grants.get_grant(str(hotel_id), role_name, p.id).to_dict(),
            }
            for p in _paginate(pages, page, page_size)
        ]
        return {
            "hotel_id": str(hotel_id),
            "role_name": role_name,
            "version": grants_version,
            "pages": rows,
            "total": len(pages),
            "page": page,
            "page_size": page_size,
        }

    def toggle_role_grant(
        self,
        hotel_id: int,
        role_name: str,
        page_id: str,
        flag: PrivilegeFlag,
        expected_version: int | None = None,
    ) -> dict:
        """Flip one flag of a role grant and save the grants document"""
        require_selection(hotel_id=hotel_id, role_name=role_name, page_id=page_id, flag=flag)
        self.hotels.get_hotel(hotel_id)
        self.roles.get_by_name(hotel_id, role_name)
        self._ensure_grantable(hotel_id, page_id)

        grants, _ = self.load(PrivilegeResource.HOTEL_ROLE_PRIVILEGES)
        updated = grants.copy()
        privilege = updated.toggle_grant(str(hotel_id), role_name, page_id, flag)
        saved = self._save(PrivilegeResource.HOTEL_ROLE_PRIVILEGES, updated, expected_version)

        logger.info(
            "Hotel %s role '%s' page %s: %s toggled", hotel_id, role_name, page_id, flag.value
        )
        return {
            "hotel_id": str(hotel_id),
            "page_id": page_id,
            "privilege": privilege.to_dict(),
            "version": saved.version,
        }

    # User overrides

    def user_matrix(
        self,
        hotel_id: int,
        role_name: str,
        user_id: int,
        search: str | None = None,
        page: int = 1,
        page_size: int = 10,
    ) -> dict:
        """
        Grantable pages with the user's effective privilege in one role.

        Only available once hotel, role and user are all selected.
        """
        require_selection(hotel_id=hotel_id, role_name=role_name, user_id=user_id)
        self.hotels.get_hotel(hotel_id)
        self.roles.get_by_name(hotel_id, role_name)
        self.users.get_user(hotel_id, user_id)

        resolver = self.resolver()
        overrides_version = self._version(PrivilegeResource.USER_PRIVILEGES)
        hotel_key, user_key = str(hotel_id), str(user_id)
        pages = [p for p in resolver.grantable_pages(hotel_key) if _matches(p, search)]
        rows = []
        for p in _paginate(pages, page, page_size):
            override = resolver.overrides.find_override(hotel_key, role_name, user_key, p.id)
            rows.append(
                {
                    **self._page_fields(p),
                    "privilege": resolver.effective_privilege(
                        hotel_key, role_name, user_key, p.id
                    ).to_dict(),
                    "role_grant": resolver.grants.get_grant(hotel_key, role_name, p.id).to_dict(),
                    "override": override.to_dict() if override is not None else None,
                }
            )
        return {
            "hotel_id": hotel_key,
            "role_name": role_name,
            "user_id": user_key,
            "version": overrides_version,
            "pages": rows,
            "total": len(pages),
            "page": page,
            "page_size": page_size,
        }

    def toggle_user_override(
        self,
        hotel_id: int,
        role_name: str,
        user_id: int,
        page_id: str,
        flag: PrivilegeFlag,
        expected_version: int | None = None,
    ) -> dict:
        """Flip one flag of a user override and save the overrides document"""
        require_selection(
            hotel_id=hotel_id, role_name=role_name, user_id=user_id, page_id=page_id, flag=flag
        )
        self.hotels.get_hotel(hotel_id)
        self.roles.get_by_name(hotel_id, role_name)
        self.users.get_user(hotel_id, user_id)
        self._ensure_grantable(hotel_id, page_id)

        overrides, _ = self.load(PrivilegeResource.USER_PRIVILEGES)
        updated = overrides.copy()
        privilege = updated.toggle_override(str(hotel_id), role_name, str(user_id), page_id, flag)
        saved = self._save(PrivilegeResource.USER_PRIVILEGES, updated, expected_version)

        logger.info(
            "Hotel %s role '%s' user %s page %s: override %s toggled",
            hotel_id,
            role_name,
            user_id,
            page_id,
            flag.value,
        )
        return {
            "hotel_id": str(hotel_id),
            "page_id": page_id,
            "privilege": privilege.to_dict(),
            "version": saved.version,
        }

    # Resolution

    def merged_view(self, hotel_id: int, user_id: int) -> dict:
        """OR of the user's role grants per leaf page, all-false where not entitled"""
        self.hotels.get_hotel(hotel_id)
        user = self.users.get_user(hotel_id, user_id)
        resolver = self.resolver()
        merged = resolver.merged_role_view(str(hotel_id), user)
        return {
            "hotel_id": str(hotel_id),
            "user_id": str(user_id),
            "role_names": sorted(resolver.held_role_names(str(hotel_id), user)),
            "pages": {page_id: privilege.to_dict() for page_id, privilege in merged.items()},
        }

    def check_access(
        self, hotel_id: int, user_id: int, page_id: str | None, flag: PrivilegeFlag | None
    ) -> dict:
        """Whether the user may perform `flag` on the page in this hotel"""
        require_selection(hotel_id=hotel_id, user_id=user_id, page_id=page_id, flag=flag)
        self.hotels.get_hotel(hotel_id)
        user = self.users.get_user(hotel_id, user_id)
        allowed = self.resolver().can_access(str(hotel_id), user, page_id, flag)
        return {
            "hotel_id": str(hotel_id),
            "user_id": str(user_id),
            "page_id": page_id,
            "flag": flag,
            "allowed": allowed,
        }

    # Helpers

    def _version(self, resource: PrivilegeResource) -> int:
        document = self.documents.get(resource)
        return document.version if document else 0

    def _leaf_page(self, page_id: str) -> Page:
        for page in self.catalog:
            if page.id == page_id:
                if not page.is_leaf:
                    raise ValidationException(f"Page {page_id} is a module header and cannot be assigned")
                return page
        raise ValidationException(f"Unknown page {page_id}")

    def _ensure_grantable(self, hotel_id: int, page_id: str) -> None:
        self._leaf_page(page_id)
        entitlements, _ = self.load(PrivilegeResource.HOTEL_PRIVILEGES)
        if not entitlements.is_entitled(str(hotel_id), page_id):
            raise ValidationException(f"Page {page_id} is not enabled for this hotel")

    @staticmethod
    def _page_fields(page: Page) -> dict:
        return {"id": page.id, "label": page.label, "depth": page.depth, "parent_id": page.parent_id}
