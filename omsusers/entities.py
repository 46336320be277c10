"""Records for users and the people attached to them: traders, investors,
employees and broker administrators, plus the health-check row."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import ClassVar


@dataclass(kw_only=True)
class User:
    """A row of the ``users`` table."""

    table: ClassVar[str] = "users"

    id: int = 0
    auth_id: int = 0
    user_name: str = ""
    user_type: str = ""
    email_address: str = ""
    phone_number: str = ""
    country_code: str = ""
    can_login: bool = False
    nid: str = ""
    is_verified: bool = False
    is_enabled: bool = False
    last_login: datetime | None = None
    expire_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    deleted_at: datetime | None = None


@dataclass(kw_only=True)
class Trader:
    """A row of the ``traders`` table."""

    table: ClassVar[str] = "traders"

    id: int = 0
    user_id: int = 0
    status: str = ""
    branch_id: int = 0
    is_active: bool = False
    read_only: bool = False
    licence_number: str = ""
    can_trade: bool = False
    is_deleted: bool = False
    expire_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    deleted_at: datetime | None = None


@dataclass(kw_only=True)
class TraderProfile:
    """A user joined with the trader row that belongs to it."""

    trader_user_id: int = 0
    user_name: str = ""
    email_address: str = ""
    phone_number: str = ""
    country_code: str = ""
    read_only: bool = False
    branch_id: int = 0
    is_active: bool = False
    can_trade: bool = False
    licence_number: str = ""


@dataclass(kw_only=True)
class Investor:
    """A row of the ``investors`` table."""

    table: ClassVar[str] = "investors"

    id: int = 0
    user_id: int = 0
    primary_tws_id: int = 0
    secondary_tws_id: int = 0
    bo_account_number: str = ""
    status: str = ""
    can_trade: bool = False
    read_only: bool = False
    is_deleted: bool = False
    client_code: str = ""
    expire_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    deleted_at: datetime | None = None


@dataclass(kw_only=True)
class InvestorProfile:
    """A user joined with the investor row that belongs to it."""

    investor_user_id: int = 0
    user_name: str = ""
    email_address: str = ""
    phone_number: str = ""
    country_code: str = ""
    primary_tws_id: int = 0
    client_code: str = ""
    bo_account_number: str = ""


@dataclass(kw_only=True)
class Employee:
    """A row of the ``employees`` table."""

    table: ClassVar[str] = "employees"

    id: int = 0
    user_id: int = 0
    branch_id: int = 0
    designation: str = ""
    description: str = ""
    expire_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    deleted_at: datetime | None = None


@dataclass(kw_only=True)
class EmployeeProfile:
    """A user joined with the employee row that belongs to it."""

    employee_user_id: int = 0
    user_name: str = ""
    email_address: str = ""
    phone_number: str = ""
    country_code: str = ""
    branch_id: int = 0
    designation: str = ""


@dataclass(kw_only=True)
class BrokerAdmin:
    """A row of the ``broker_admin`` table."""

    table: ClassVar[str] = "broker_admin"

    id: int = 0
    user_id: int = 0
    branch_id: int = 0
    can_trade: bool = False
    read_only: bool = False
    is_isolated_user: bool = False
    status: str = ""
    is_deleted: bool = False
    expire_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    deleted_at: datetime | None = None


@dataclass(kw_only=True)
class BrokerAdminProfile:
    """A user joined with the broker administrator row that belongs to it."""

    broker_user_id: int = 0
    user_name: str = ""
    email_address: str = ""
    phone_number: str = ""
    country_code: str = ""
    branch_id: int = 0
    can_trade: bool = False
    read_only: bool = False
    is_isolated_user: bool = False
    is_deleted: bool = False


@dataclass(kw_only=True)
class Health:
    """A row of the ``health`` table."""

    table: ClassVar[str] = "health"

    id: int = 0
    status: str = "HEALTHY"
    created_at: datetime | None = None
    updated_at: datetime | None = None
    deleted_at: datetime | None = None