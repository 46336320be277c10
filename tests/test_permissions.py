import pytest

from omsusers.access import (
    Permission,
    Role,
    RolePermission,
    UserPermission,
    UserRole,
)
from omsusers.database import Database, FetchError, Page
from omsusers.permissions import (
    PermissionRepository,
    RolePermissionRepository,
    RoleRepository,
    UserPermissionRepository,
    UserRoleRepository,
)


@pytest.fixture
def db():
    database = Database(":memory:")
    database.create_schema()
    yield database
    database.close()


def _permission(db, name):
    perm = Permission(name=name, description=name, is_enabled=True)
    PermissionRepository(db).create_permission(perm)
    return perm


def _role(db, name):
    role = Role(role_name=name, is_enabled=True)
    RoleRepository(db).create_role(role)
    return role


def test_role_create_and_fetch(db):
    repo = RoleRepository(db)
    role = Role(role_name="admin", description="all access", is_enabled=True)
    repo.create_role(role)
    assert role.id > 0
    fetched = repo.get_role_by_id(role.id)
    assert fetched.role_name == "admin"
    assert fetched.description == "all access"
    assert fetched.is_enabled is True


def test_role_missing_raises_fetch_error(db):
    with pytest.raises(FetchError, match="Failed to fetch Role"):
        RoleRepository(db).get_role_by_id(42)


def test_role_update_changes_fields(db):
    repo = RoleRepository(db)
    role = _role(db, "viewer")
    role.role_name = "reader"
    repo.update_role(role)
    assert role.updated_at is not None
    fetched = repo.get_role_by_id(role.id)
    assert fetched.role_name == "reader"
    assert fetched.updated_at == role.updated_at


def test_role_delete_hides_role(db):
    repo = RoleRepository(db)
    role = _role(db, "temp")
    repo.delete_role(role)
    assert role.deleted_at is not None
    with pytest.raises(FetchError):
        repo.get_role_by_id(role.id)
    roles, total = repo.get_roles(Page(page_token=1, page_size=10))
    assert roles == []
    assert total == 0


def test_roles_paging(db):
    repo = RoleRepository(db)
    created = [_role(db, f"role{n}") for n in range(5)]
    first, total = repo.get_roles(Page(page_token=1, page_size=2))
    second, _ = repo.get_roles(Page(page_token=2, page_size=2))
    third, _ = repo.get_roles(Page(page_token=3, page_size=2))
    assert total == 5
    assert [len(first), len(second), len(third)] == [2, 2, 1]
    names = [r.role_name for r in first + second + third]
    assert sorted(names) == sorted(r.role_name for r in created)
    assert first[0].id == created[-1].id


def test_permission_crud(db):
    repo = PermissionRepository(db)
    perm = _permission(db, "trade")
    assert repo.get_permission_by_id(perm.id).name == "trade"
    perm.name = "trade.buy"
    repo.update_permission(perm)
    assert repo.get_permission_by_id(perm.id).name == "trade.buy"
    items, total = repo.get_permissions(Page(page_token=1, page_size=10))
    assert total == 1
    assert items[0].id == perm.id
    repo.delete_permission(perm)
    with pytest.raises(FetchError, match="Failed to fetch Permission"):
        repo.get_permission_by_id(perm.id)


def test_permissions_by_role(db):
    role = _role(db, "ops")
    other = _role(db, "other")
    read = _permission(db, "read")
    write = _permission(db, "write")
    repo = RolePermissionRepository(db)
    repo.create_role_permission(
        RolePermission(role_id=role.id, permission_id=read.id, is_enabled=True)
    )
    repo.create_role_permission(
        RolePermission(role_id=role.id, permission_id=write.id, is_enabled=False)
    )
    repo.create_role_permission(
        RolePermission(role_id=other.id, permission_id=read.id, is_enabled=True)
    )
    views = repo.get_permissions_by_role(role.id)
    assert [(v.permission_id, v.name, v.role_id, v.is_enabled) for v in views] == [
        (read.id, "read", role.id, True),
        (write.id, "write", role.id, False),
    ]
    assert repo.get_permissions_by_role(999) == []


def test_role_permission_update_and_delete(db):
    role = _role(db, "ops")
    perm = _permission(db, "read")
    repo = RolePermissionRepository(db)
    mapping = RolePermission(role_id=role.id, permission_id=perm.id, is_enabled=False)
    repo.create_role_permission(mapping)
    mapping.is_enabled = True
    repo.update_role_permission(mapping)
    items, total = repo.get_role_permissions(Page(page_token=1, page_size=5))
    assert total == 1
    assert items[0].is_enabled is True
    repo.delete_role_permission(mapping)
    items, total = repo.get_role_permissions(Page(page_token=1, page_size=5))
    assert (items, total) == ([], 0)


def test_user_role_crud(db):
    repo = UserRoleRepository(db)
    role = _role(db, "ops")
    mapping = UserRole(user_id=7, role_id=role.id, is_enabled=True)
    repo.create_user_role(mapping)
    fetched = repo.get_user_role_by_id(mapping.id)
    assert (fetched.user_id, fetched.role_id) == (7, role.id)
    mapping.user_id = 8
    repo.update_user_role(mapping)
    assert repo.get_user_role_by_id(mapping.id).user_id == 8
    roles, total = repo.get_user_roles(Page(page_token=1, page_size=10))
    assert total == 1
    assert roles[0].id == mapping.id
    repo.delete_user_role(mapping)
    with pytest.raises(FetchError, match="Failed to fetch mapUserRole"):
        repo.get_user_role_by_id(mapping.id)


def test_user_permissions_combine_roles_and_direct_grants(db):
    role = _role(db, "ops")
    read = _permission(db, "read")
    write = _permission(db, "write")
    RolePermissionRepository(db).create_role_permission(
        RolePermission(role_id=role.id, permission_id=read.id, is_enabled=True)
    )
    UserRoleRepository(db).create_user_role(UserRole(user_id=1, role_id=role.id))
    repo = UserPermissionRepository(db)
    repo.create_user_permission(UserPermission(user_id=1, permission_id=write.id))
    granted = repo.get_user_permissions(1)
    assert sorted((g.permission_id, g.name) for g in granted) == [
        (read.id, "read"),
        (write.id, "write"),
    ]
    assert repo.get_user_permissions(2) == []


def test_revoked_permission_is_excluded_even_from_roles(db):
    role = _role(db, "ops")
    read = _permission(db, "read")
    RolePermissionRepository(db).create_role_permission(
        RolePermission(role_id=role.id, permission_id=read.id)
    )
    UserRoleRepository(db).create_user_role(UserRole(user_id=1, role_id=role.id))
    repo = UserPermissionRepository(db)
    repo.create_user_permission(
        UserPermission(user_id=1, permission_id=read.id, is_revoked=True)
    )
    assert repo.get_user_permissions(1) == []


def test_revoke_by_update_and_delete_direct_grant(db):
    read = _permission(db, "read")
    write = _permission(db, "write")
    repo = UserPermissionRepository(db)
    read_grant = UserPermission(user_id=3, permission_id=read.id, is_enabled=True)
    write_grant = UserPermission(user_id=3, permission_id=write.id, is_enabled=True)
    repo.create_user_permission(read_grant)
    repo.create_user_permission(write_grant)
    assert len(repo.get_user_permissions(3)) == 2

    read_grant.is_revoked = True
    repo.update_user_permission(read_grant)
    assert [g.permission_id for g in repo.get_user_permissions(3)] == [write.id]

    repo.delete_user_permission(write_grant)
    assert write_grant.deleted_at is not None
    assert repo.get_user_permissions(3) == []


def test_same_permission_through_role_and_directly_is_listed_twice(db):
    role = _role(db, "ops")
    read = _permission(db, "read")
    RolePermissionRepository(db).create_role_permission(
        RolePermission(role_id=role.id, permission_id=read.id)
    )
    UserRoleRepository(db).create_user_role(UserRole(user_id=5, role_id=role.id))
    repo = UserPermissionRepository(db)
    repo.create_user_permission(UserPermission(user_id=5, permission_id=read.id))
    granted = repo.get_user_permissions(5)
    assert [g.permission_id for g in granted] == [read.id, read.id]
    assert {g.name for g in granted} == {"read"}