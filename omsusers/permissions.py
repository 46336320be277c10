"""Repositories for roles, permissions and the mappings that grant them to
roles and users."""

from __future__ import annotations

from datetime import datetime

from .access import (
    GrantedPermission,
    Permission,
    Role,
    RolePermission,
    RolePermissionView,
    UserPermission,
    UserRole,
)
from .database import Database, FetchError, Page, StoreError, TableGateway

_LIVE_BY_ID = "deleted_at IS NULL AND id = ?"
_BY_USER_AND_PERMISSION = "user_id = ? AND permission_id = ?"

_PERMISSIONS_BY_ROLE_SQL = (
    "SELECT mrp.role_id, p.id AS permission_id, p.name, mrp.is_enabled "
    "FROM map_role_permission AS mrp "
    "JOIN permissions AS p ON mrp.permission_id = p.id "
    "WHERE mrp.role_id = ? "
    "ORDER BY mrp.id"
)

_USER_PERMISSIONS_SQL = (
    "SELECT name, permission_id FROM ("
    "SELECT name, permission_id FROM ("
    "SELECT p.name, p.id AS permission_id FROM permissions AS p "
    "JOIN map_role_permission AS rp ON p.id = rp.permission_id "
    "JOIN map_user_role AS ur ON rp.role_id = ur.role_id "
    "WHERE ur.user_id = ?"
    ") AS combined_permissions "
    "UNION ALL "
    "SELECT name, permission_id FROM ("
    "SELECT p.name, p.id AS permission_id FROM permissions AS p "
    "JOIN map_user_permission AS up ON p.id = up.permission_id "
    "WHERE up.deleted_at IS NULL AND up.user_id = ?"
    ") AS user_perms"
    ") AS permissions_union "
    "WHERE permission_id NOT IN ("
    "SELECT permission_id FROM map_user_permission "
    "WHERE user_id = ? AND is_revoked = 1)"
)


class RoleRepository:
    """Access to the ``roles`` table."""

    def __init__(self, db: Database) -> None:
        self.db = db
        self._roles: TableGateway[Role] = TableGateway(db, Role)

    def create_role(self, role: Role) -> None:
        """Insert a role row, filling in its id."""
        self._roles.insert(role)

    def update_role(self, role: Role) -> None:
        """Write every column but ``created_at`` to the row with ``role.id``."""
        role.updated_at = datetime.now()
        self._roles.update_where(role, "id = ?", (role.id,))

    def get_roles(self, page: Page) -> tuple[list[Role], int]:
        """Return one page of live roles, newest first, and their total count."""
        return self._roles.list_page(page)

    def get_role_by_id(self, role_id: int) -> Role:
        """Return the live role with the given id."""
        try:
            return self._roles.fetch_one(_LIVE_BY_ID, (role_id,))
        except StoreError as exc:
            raise FetchError("Failed to fetch Role") from exc

    def delete_role(self, role: Role) -> None:
        """Mark the role with ``role.id`` as deleted."""
        self._roles.soft_delete_where(role, "id = ?", (role.id,))


class PermissionRepository:
    """Access to the ``permissions`` table."""

    def __init__(self, db: Database) -> None:
        self.db = db
        self._permissions: TableGateway[Permission] = TableGateway(db, Permission)

    def create_permission(self, permission: Permission) -> None:
        """Insert a permission row, filling in its id."""
        self._permissions.insert(permission)

    def update_permission(self, permission: Permission) -> None:
        """Write every column but ``created_at`` to the row with ``permission.id``."""
        permission.updated_at = datetime.now()
        self._permissions.update_where(permission, "id = ?", (permission.id,))

    def get_permissions(self, page: Page) -> tuple[list[Permission], int]:
        """Return one page of live permissions, newest first, and their total count."""
        return self._permissions.list_page(page)

    def get_permission_by_id(self, permission_id: int) -> Permission:
        """Return the live permission with the given id."""
        try:
            return self._permissions.fetch_one(_LIVE_BY_ID, (permission_id,))
        except StoreError as exc:
            raise FetchError("Failed to fetch Permission") from exc

    def delete_permission(self, permission: Permission) -> None:
        """Mark the permission with ``permission.id`` as deleted."""
        self._permissions.soft_delete_where(permission, "id = ?", (permission.id,))


class RolePermissionRepository:
    """Access to ``map_role_permission``."""

    def __init__(self, db: Database) -> None:
        self.db = db
        self._grants: TableGateway[RolePermission] = TableGateway(db, RolePermission)

    def create_role_permission(self, role_permission: RolePermission) -> None:
        """Grant a permission to a role, filling in the mapping's id."""
        self._grants.insert(role_permission)

    def update_role_permission(self, role_permission: RolePermission) -> None:
        """Write every column but ``created_at`` to the mapping with its id."""
        role_permission.updated_at = datetime.now()
        self._grants.update_where(role_permission, "id = ?", (role_permission.id,))

    def get_role_permissions(self, page: Page) -> tuple[list[RolePermission], int]:
        """Return one page of live mappings, newest first, and their total count."""
        return self._grants.list_page(page)

    def get_permissions_by_role(self, role_id: int) -> list[RolePermissionView]:
        """Return every permission mapped to the role, with its name."""
        rows = self.db.query(_PERMISSIONS_BY_ROLE_SQL, (role_id,))
        return [
            RolePermissionView(
                permission_id=row["permission_id"],
                name=row["name"],
                role_id=row["role_id"],
                is_enabled=bool(row["is_enabled"]),
            )
            for row in rows
        ]

    def delete_role_permission(self, role_permission: RolePermission) -> None:
        """Mark the mapping with ``role_permission.id`` as deleted."""
        self._grants.soft_delete_where(role_permission, "id = ?", (role_permission.id,))


class UserRoleRepository:
    """Access to ``map_user_role``."""

    def __init__(self, db: Database) -> None:
        self.db = db
        self._user_roles: TableGateway[UserRole] = TableGateway(db, UserRole)

    def create_user_role(self, user_role: UserRole) -> None:
        """Give a role to a user, filling in the mapping's id."""
        self._user_roles.insert(user_role)

    def update_user_role(self, user_role: UserRole) -> None:
        """Write every column but ``created_at`` to the mapping with its id."""
        user_role.updated_at = datetime.now()
        self._user_roles.update_where(user_role, "id = ?", (user_role.id,))

    def get_user_roles(self, page: Page) -> tuple[list[UserRole], int]:
        """Return one page of live mappings, newest first, and their total count."""
        return self._user_roles.list_page(page)

    def get_user_role_by_id(self, user_role_id: int) -> UserRole:
        """Return the live mapping with the given id."""
        try:
            return self._user_roles.fetch_one(_LIVE_BY_ID, (user_role_id,))
        except StoreError as exc:
            raise FetchError("Failed to fetch mapUserRole") from exc

    def delete_user_role(self, user_role: UserRole) -> None:
        """Mark the mapping with ``user_role.id`` as deleted."""
        self._user_roles.soft_delete_where(user_role, "id = ?", (user_role.id,))


class UserPermissionRepository:
    """Access to ``map_user_permission`` and the permissions a user holds."""

    def __init__(self, db: Database) -> None:
        self.db = db
        self._grants: TableGateway[UserPermission] = TableGateway(db, UserPermission)

    def create_user_permission(self, user_permission: UserPermission) -> None:
        """Grant or revoke a permission for a user, filling in the mapping's id."""
        self._grants.insert(user_permission)

    def update_user_permission(self, user_permission: UserPermission) -> None:
        """Write every column but ``created_at`` to the user's mapping for the permission."""
        user_permission.updated_at = datetime.now()
        self._grants.update_where(
            user_permission,
            _BY_USER_AND_PERMISSION,
            (user_permission.user_id, user_permission.permission_id),
        )

    def get_user_permissions(self, user_id: int) -> list[GrantedPermission]:
        """Return the permissions the user holds through roles or directly,
        leaving out every permission revoked from the user."""
        rows = self.db.query(_USER_PERMISSIONS_SQL, (user_id, user_id, user_id))
        return [
            GrantedPermission(permission_id=row["permission_id"], name=row["name"])
            for row in rows
        ]

    def delete_user_permission(self, user_permission: UserPermission) -> None:
        """Mark the user's mapping for the permission as deleted."""
        self._grants.soft_delete_where(
            user_permission,
            _BY_USER_AND_PERMISSION,
            (user_permission.user_id, user_permission.permission_id),
        )