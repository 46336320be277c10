from dataclasses import fields, replace
from datetime import datetime

import pytest

from omsusers.database import Database, Page, TableGateway
from omsusers.organisation import (
    AuditLog,
    Branch,
    BrokerHouse,
    TraderTeam,
    TraderTeamMember,
    TraderTws,
    Tws,
)


@pytest.fixture
def db():
    database = Database()
    database.create_schema()
    yield database
    database.close()


RECORDS = [
    Branch(
        broker_house_id=4,
        branch_name="Motijheel",
        short_name="MTJ",
        branch_type="head",
        email_address="branch@example.com",
        is_active=True,
        is_enabled=True,
        expire_at=datetime(2031, 1, 1, 9, 0),
    ),
    BrokerHouse(
        broker_house_name="Example Securities",
        short_name="EXS",
        email_address="house@example.com",
        valid_currency="BDT",
        is_enabled=True,
    ),
    TraderTeam(name="Desk A", description="equities", status="active", is_enabled=True),
    TraderTws(tws_id=7, trader_id=9, is_enabled=True, expire_at=datetime(2030, 6, 1, 12, 30)),
    Tws(tws_code="TWS-EXAMPLE", is_active=True, status="ready"),
    TraderTeamMember(team_id=2, trader_id=5, status="active", is_enabled=True),
    AuditLog(
        type="login",
        attempt_by_id=11,
        attempt_by_type="trader",
        http_method="POST",
        endpoint="/login",
        is_success=True,
        description='{"note": "ok"}',
    ),
]


@pytest.mark.parametrize("record", RECORDS, ids=lambda r: type(r).__name__)
def test_record_round_trips_through_its_table(db, record):
    record = replace(record)
    gateway = TableGateway(db, type(record))
    new_id = gateway.insert_returning_id(record)
    assert gateway.fetch_one("id = ?", (new_id,)) == record


def test_records_are_keyword_only():
    with pytest.raises(TypeError):
        Tws(1, "code")


def test_audit_log_has_no_deleted_at_but_lists(db):
    assert "deleted_at" not in {f.name for f in fields(AuditLog)}
    gateway = TableGateway(db, AuditLog)
    gateway.insert(AuditLog(type="login", created_at=datetime(2024, 1, 1)))
    gateway.insert(AuditLog(type="logout", created_at=datetime(2024, 1, 2)))
    logs, count = gateway.list_page(Page(page_token=1, page_size=10))
    assert count == 2
    assert [entry.type for entry in logs] == ["logout", "login"]


def test_booleans_come_back_as_bools(db):
    gateway = TableGateway(db, TraderTeam)
    team = TraderTeam(name="Desk B", is_enabled=True, is_deleted=False)
    gateway.insert(team)
    fetched = gateway.fetch_one("id = ?", (team.id,))
    assert fetched.is_enabled is True
    assert fetched.is_deleted is False