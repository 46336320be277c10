"""Records for roles, permissions and the mappings that grant them."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import ClassVar


@dataclass(kw_only=True)
class Role:
    """A row of the ``roles`` table."""

    table: ClassVar[str] = "roles"

    id: int = 0
    role_name: str = ""
    description: str = ""
    is_enabled: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None
    deleted_at: datetime | None = None


@dataclass(kw_only=True)
class Permission:
    """A row of the ``permissions`` table."""

    table: ClassVar[str] = "permissions"

    id: int = 0
    name: str = ""
    description: str = ""
    is_enabled: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None
    deleted_at: datetime | None = None


@dataclass(kw_only=True)
class RolePermission:
    """A row of ``map_role_permission``: a permission granted to a role."""

    table: ClassVar[str] = "map_role_permission"

    id: int = 0
    permission_id: int = 0
    role_id: int = 0
    is_enabled: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None
    deleted_at: datetime | None = None


@dataclass(kw_only=True)
class RolePermissionView:
    """A permission of a role, joined with the permission's name."""

    permission_id: int = 0
    name: str = ""
    role_id: int = 0
    is_enabled: bool = False


@dataclass(kw_only=True)
class UserPermission:
    """A row of ``map_user_permission``: a permission granted to or revoked from a user."""

    table: ClassVar[str] = "map_user_permission"

    id: int = 0
    permission_id: int = 0
    user_id: int = 0
    is_enabled: bool = False
    is_revoked: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None
    deleted_at: datetime | None = None


@dataclass(kw_only=True)
class GrantedPermission:
    """A permission a user holds, directly or through a role."""

    permission_id: int = 0
    name: str = ""


@dataclass(kw_only=True)
class UserRole:
    """A row of ``map_user_role``: a role held by a user."""

    table: ClassVar[str] = "map_user_role"

    id: int = 0
    user_id: int = 0
    role_id: int = 0
    is_enabled: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None
    deleted_at: datetime | None = None