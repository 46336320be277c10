"""Records for the broker organisation: broker houses, branches, trader
workstations, trader teams and their mappings, and the audit log."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import ClassVar


@dataclass(kw_only=True)
class Branch:
    """A row of the ``branches`` table."""

    table: ClassVar[str] = "branches"

    id: int = 0
    broker_house_id: int = 0
    branch_name: str = ""
    short_name: str = ""
    branch_type: str = ""
    description: str = ""
    address: str = ""
    phone_number: str = ""
    country_code: str = ""
    telephone_number: str = ""
    email_address: str = ""
    valid_currency: str = ""
    status: str = ""
    is_active: bool = False
    is_enabled: bool = False
    expire_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    deleted_at: datetime | None = None


@dataclass(kw_only=True)
class BrokerHouse:
    """A row of the ``broker_houses`` table."""

    table: ClassVar[str] = "broker_houses"

    id: int = 0
    broker_house_name: str = ""
    short_name: str = ""
    description: str = ""
    address: str = ""
    phone_number: str = ""
    country_code: str = ""
    telephone_number: str = ""
    email_address: str = ""
    valid_currency: str = ""
    status: str = ""
    is_enabled: bool = False
    expire_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    deleted_at: datetime | None = None


@dataclass(kw_only=True)
class TraderTeam:
    """A row of the ``trader_team`` table."""

    table: ClassVar[str] = "trader_team"

    id: int = 0
    name: str = ""
    description: str = ""
    status: str = ""
    is_enabled: bool = False
    is_deleted: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None
    deleted_at: datetime | None = None


@dataclass(kw_only=True)
class TraderTws:
    """A row of ``map_trader_tws``: a workstation assigned to a trader."""

    table: ClassVar[str] = "map_trader_tws"

    id: int = 0
    tws_id: int = 0
    trader_id: int = 0
    is_enabled: bool = False
    status: str = ""
    is_deleted: bool = False
    expire_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    deleted_at: datetime | None = None


@dataclass(kw_only=True)
class Tws:
    """A row of the ``tws`` table: a trader workstation."""

    table: ClassVar[str] = "tws"

    id: int = 0
    tws_code: str = ""
    is_enabled: bool = False
    status: str = ""
    is_active: bool = False
    is_deleted: bool = False
    expire_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    deleted_at: datetime | None = None


@dataclass(kw_only=True)
class TraderTeamMember:
    """A row of ``map_trader_team``: a trader placed in a team."""

    table: ClassVar[str] = "map_trader_team"

    id: int = 0
    team_id: int = 0
    trader_id: int = 0
    status: str = ""
    is_enabled: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None
    deleted_at: datetime | None = None


@dataclass(kw_only=True)
class AuditLog:
    """A row of the ``audit_log`` table."""

    table: ClassVar[str] = "audit_log"

    id: int = 0
    type: str = ""
    attempt_by_id: int = 0
    attempt_by_type: str = ""
    ip_address: str = ""
    action_type: str = ""
    http_method: str = ""
    endpoint: str = ""
    is_success: bool = False
    platform: str = ""
    device_name: str = ""
    device_type: str = ""
    description: str = ""
    request_body: str = ""
    response_body: str = ""
    created_at: datetime | None = None
    updated_at: datetime | None = None