"""Repositories for users and the trader, investor, employee and broker
administrator rows attached to them."""

from __future__ import annotations

from datetime import datetime
from typing import Any, TypeVar

from .database import Database, RecordNotFoundError, StoreError, TableGateway
from .entities import (
    BrokerAdmin,
    BrokerAdminProfile,
    Employee,
    EmployeeProfile,
    Investor,
    InvestorProfile,
    Trader,
    TraderProfile,
    User,
)

P = TypeVar("P")

_TRADER_PROFILE_SQL = (
    "SELECT u.id AS trader_user_id, u.user_name, u.email_address, "
    "u.phone_number, u.country_code, "
    "t.branch_id, t.read_only, t.can_trade, t.is_active, t.licence_number "
    "FROM users AS u JOIN traders AS t ON t.user_id = u.id "
    "WHERE t.user_id = ? LIMIT 1"
)

_INVESTOR_PROFILE_SQL = (
    "SELECT u.id AS investor_user_id, u.user_name, u.email_address, "
    "u.phone_number, u.country_code, "
    "i.primary_tws_id, i.client_code, i.bo_account_number "
    "FROM users AS u JOIN investors AS i ON i.user_id = u.id "
    "WHERE i.user_id = ? LIMIT 1"
)

_INVESTOR_PAGE_SQL = (
    "SELECT u.id AS investor_user_id, u.user_name, u.email_address, "
    "u.phone_number, u.country_code, "
    "i.primary_tws_id, i.client_code, i.bo_account_number "
    "FROM users AS u INNER JOIN investors AS i ON i.user_id = u.id "
    "ORDER BY u.created_at DESC, u.id DESC LIMIT ? OFFSET ?"
)

_INVESTOR_COUNT_SQL = (
    "SELECT COUNT(*) AS total "
    "FROM users AS u INNER JOIN investors AS i ON i.user_id = u.id"
)

_EMPLOYEE_PROFILE_SQL = (
    "SELECT u.id AS employee_user_id, u.user_name, u.email_address, "
    "u.phone_number, u.country_code, e.branch_id, e.designation "
    "FROM users AS u JOIN employees AS e ON e.user_id = u.id "
    "WHERE e.user_id = ? LIMIT 1"
)

_BROKER_ADMIN_PROFILE_SQL = (
    "SELECT u.id AS broker_user_id, u.user_name, u.email_address, "
    "u.phone_number, u.country_code, "
    "ba.branch_id, ba.can_trade, ba.read_only, ba.is_isolated_user, ba.is_deleted "
    "FROM users AS u JOIN broker_admin AS ba ON ba.user_id = u.id "
    "WHERE ba.user_id = ? LIMIT 1"
)


def _fetch_profile(db: Database, sql: str, user_id: int, profile_type: type[P]) -> P:
    rows = db.query(sql, (user_id,))
    if not rows:
        raise RecordNotFoundError(f"no {profile_type.__name__} for user {user_id}")
    return profile_type(**rows[0])


def _update_by_user_id(gateway: TableGateway[Any], record: Any) -> int:
    """Update the row owned by ``record.user_id`` and return that user id."""
    record.updated_at = datetime.now()
    if gateway.update_where(record, "user_id = ?", (record.user_id,)) == 0:
        raise RecordNotFoundError(f"no {gateway.table} record for user {record.user_id}")
    return record.user_id


class UserRepository:
    """Creates and updates rows of the ``users`` table."""

    def __init__(self, db: Database) -> None:
        self.db = db
        self._users: TableGateway[User] = TableGateway(db, User)

    def _create(self, user: User) -> int:
        return self._users.insert_returning_id(user)

    def _update(self, user: User) -> None:
        user.updated_at = datetime.now()
        self._users.update_where(user, "id = ?", (user.id,))

    def create_investor(self, user: User) -> int:
        """Insert the user behind an investor and return its id."""
        return self._create(user)

    def update_investor(self, user: User) -> None:
        """Update the user behind an investor."""
        self._update(user)

    def create_trader(self, user: User) -> int:
        """Insert the user behind a trader and return its id."""
        return self._create(user)

    def update_trader(self, user: User) -> None:
        """Update the user behind a trader."""
        self._update(user)

    def create_broker_admin(self, user: User) -> int:
        """Insert the user behind a broker administrator and return its id."""
        return self._create(user)

    def update_broker_admin(self, user: User) -> None:
        """Update the user behind a broker administrator."""
        self._update(user)

    def create_employee(self, user: User) -> int:
        """Insert the user behind an employee and return its id."""
        return self._create(user)

    def update_employee(self, user: User) -> None:
        """Update the user behind an employee."""
        self._update(user)


class TraderRepository:
    """Access to the ``traders`` table."""

    def __init__(self, db: Database) -> None:
        self.db = db
        self._traders: TableGateway[Trader] = TableGateway(db, Trader)

    def create_trader(self, trader: Trader) -> None:
        """Insert a trader row."""
        self._traders.insert(trader)

    def update_trader(self, trader: Trader) -> int:
        """Update the trader row of ``trader.user_id`` and return that user id."""
        return _update_by_user_id(self._traders, trader)

    def get_trader_by_id(self, user_id: int) -> TraderProfile:
        """Return the user with the trader details of ``user_id``."""
        return _fetch_profile(self.db, _TRADER_PROFILE_SQL, user_id, TraderProfile)


class InvestorRepository:
    """Access to the ``investors`` table."""

    def __init__(self, db: Database) -> None:
        self.db = db
        self._investors: TableGateway[Investor] = TableGateway(db, Investor)

    def create_investor(self, investor: Investor) -> None:
        """Insert an investor row."""
        self._investors.insert(investor)

    def update_investor(self, investor: Investor) -> int:
        """Update the investor row of ``investor.user_id`` and return that user id."""
        return _update_by_user_id(self._investors, investor)

    def get_investor_by_id(self, user_id: int) -> InvestorProfile:
        """Return the user with the investor details of ``user_id``."""
        return _fetch_profile(self.db, _INVESTOR_PROFILE_SQL, user_id, InvestorProfile)

    def get_investors(self, page: int, limit: int) -> tuple[list[InvestorProfile], int]:
        """Return one page of investors, newest users first, and the total count."""
        if limit < 0:
            raise StoreError("LIMIT must not be negative")
        offset = (page - 1) * limit
        if offset < 0:
            raise StoreError("OFFSET must not be negative")
        rows = self.db.query(_INVESTOR_PAGE_SQL, (limit or -1, offset))
        total = self.db.query(_INVESTOR_COUNT_SQL)[0]["total"]
        return [InvestorProfile(**row) for row in rows], total


class EmployeeRepository:
    """Access to the ``employees`` table."""

    def __init__(self, db: Database) -> None:
        self.db = db
        self._employees: TableGateway[Employee] = TableGateway(db, Employee)

    def create_employee(self, employee: Employee) -> None:
        """Insert an employee row."""
        self._employees.insert(employee)

    def update_employee(self, employee: Employee) -> int:
        """Update the employee row of ``employee.user_id`` and return that user id."""
        return _update_by_user_id(self._employees, employee)

    def get_employee_by_id(self, user_id: int) -> EmployeeProfile:
        """Return the user with the employee details of ``user_id``."""
        return _fetch_profile(self.db, _EMPLOYEE_PROFILE_SQL, user_id, EmployeeProfile)


class BrokerAdminRepository:
    """Access to the ``broker_admin`` table."""

    def __init__(self, db: Database) -> None:
        self.db = db
        self._admins: TableGateway[BrokerAdmin] = TableGateway(db, BrokerAdmin)

    def create_broker_admin(self, broker_admin: BrokerAdmin) -> None:
        """Insert a broker administrator row."""
        self._admins.insert(broker_admin)

    def update_broker_admin(self, broker_admin: BrokerAdmin) -> int:
        """Update the row of ``broker_admin.user_id`` and return that user id."""
        return _update_by_user_id(self._admins, broker_admin)

    def get_broker_admin_by_id(self, user_id: int) -> BrokerAdminProfile:
        """Return the user with the broker administrator details of ``user_id``."""
        return _fetch_profile(
            self.db, _BROKER_ADMIN_PROFILE_SQL, user_id, BrokerAdminProfile
        )