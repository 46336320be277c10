"""One entry point to every repository, with transactions."""

from __future__ import annotations

from collections.abc import Callable
from typing import TypeVar

from .branches import AuditLogRepository, BranchRepository, BrokerHouseRepository
from .database import Database, HealthRepository
from .people import (
    BrokerAdminRepository,
    EmployeeRepository,
    InvestorRepository,
    TraderRepository,
    UserRepository,
)
from .permissions import (
    PermissionRepository,
    RolePermissionRepository,
    RoleRepository,
    UserPermissionRepository,
    UserRoleRepository,
)
from .workstations import (
    TraderTeamMemberRepository,
    TraderTeamRepository,
    TraderTwsRepository,
    TwsRepository,
)

T = TypeVar("T")


class Repository:
    """Gives access to every repository over one database."""

    def __init__(self, db: Database) -> None:
        self.db = db

    def health(self) -> HealthRepository:
        return HealthRepository(self.db)

    def trader(self) -> TraderRepository:
        return TraderRepository(self.db)

    def investor(self) -> InvestorRepository:
        return InvestorRepository(self.db)

    def user(self) -> UserRepository:
        return UserRepository(self.db)

    def trader_tws(self) -> TraderTwsRepository:
        return TraderTwsRepository(self.db)

    def trader_team(self) -> TraderTeamRepository:
        return TraderTeamRepository(self.db)

    def map_trader_team(self) -> TraderTeamMemberRepository:
        return TraderTeamMemberRepository(self.db)

    def role(self) -> RoleRepository:
        return RoleRepository(self.db)

    def tws(self) -> TwsRepository:
        return TwsRepository(self.db)

    def employee(self) -> EmployeeRepository:
        return EmployeeRepository(self.db)

    def broker_admin(self) -> BrokerAdminRepository:
        return BrokerAdminRepository(self.db)

    def broker_house(self) -> BrokerHouseRepository:
        return BrokerHouseRepository(self.db)

    def branch(self) -> BranchRepository:
        return BranchRepository(self.db)

    def audit_log(self) -> AuditLogRepository:
        return AuditLogRepository(self.db)

    def permission(self) -> PermissionRepository:
        return PermissionRepository(self.db)

    def map_user_role(self) -> UserRoleRepository:
        return UserRoleRepository(self.db)

    def map_role_permission(self) -> RolePermissionRepository:
        return RolePermissionRepository(self.db)

    def map_user_permission(self) -> UserPermissionRepository:
        return UserPermissionRepository(self.db)

    def in_tx(self, func: Callable[[Repository], T]) -> T:
        """Run ``func`` with a repository inside one transaction.

        The transaction commits when ``func`` returns and rolls back when it
        raises; its result is returned and its exception propagates.
        """
        with self.db.transaction() as db:
            return func(Repository(db))