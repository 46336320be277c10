"""Repositories for branches, broker houses and the audit log."""

from __future__ import annotations

from datetime import datetime

from .database import Database, FetchError, Page, StoreError, TableGateway
from .organisation import AuditLog, Branch, BrokerHouse

_LIVE_BY_ID = "deleted_at IS NULL AND id = ?"


class BranchRepository:
    """Access to the ``branches`` table."""

    def __init__(self, db: Database) -> None:
        self.db = db
        self._branches: TableGateway[Branch] = TableGateway(db, Branch)

    def create_branch(self, branch: Branch) -> None:
        """Insert a branch row, filling in its id."""
        self._branches.insert(branch)

    def update_branch(self, branch: Branch) -> None:
        """Write every column but ``created_at`` to the row with ``branch.id``."""
        branch.updated_at = datetime.now()
        self._branches.update_where(branch, "id = ?", (branch.id,))

    def get_branches(self, page: Page) -> tuple[list[Branch], int]:
        """Return one page of live branches, newest first, and their total count."""
        return self._branches.list_page(page)

    def get_branch_by_id(self, branch_id: int) -> Branch:
        """Return the live branch with the given id."""
        try:
            return self._branches.fetch_one(_LIVE_BY_ID, (branch_id,))
        except StoreError as exc:
            raise FetchError("Failed to fetch Broker House") from exc

    def delete_branch(self, branch: Branch) -> None:
        """Mark the branch with ``branch.id`` as deleted."""
        self._branches.soft_delete_where(branch, "id = ?", (branch.id,))


class BrokerHouseRepository:
    """Access to the ``broker_houses`` table."""

    def __init__(self, db: Database) -> None:
        self.db = db
        self._houses: TableGateway[BrokerHouse] = TableGateway(db, BrokerHouse)

    def create_broker_house(self, broker_house: BrokerHouse) -> None:
        """Insert a broker house row, filling in its id."""
        self._houses.insert(broker_house)

    def update_broker_house(self, broker_house: BrokerHouse) -> None:
        """Write every column but ``created_at`` to the row with ``broker_house.id``."""
        broker_house.updated_at = datetime.now()
        self._houses.update_where(broker_house, "id = ?", (broker_house.id,))

    def get_broker_houses(self, page: Page) -> tuple[list[BrokerHouse], int]:
        """Return one page of live broker houses, newest first, and their total count."""
        return self._houses.list_page(page)

    def get_broker_house_by_id(self, broker_house_id: int) -> BrokerHouse:
        """Return the live broker house with the given id."""
        try:
            return self._houses.fetch_one(_LIVE_BY_ID, (broker_house_id,))
        except StoreError as exc:
            raise FetchError("Failed to fetch Broker House") from exc

    def delete_broker_house(self, broker_house: BrokerHouse) -> None:
        """Mark the broker house with ``broker_house.id`` as deleted."""
        self._houses.soft_delete_where(broker_house, "id = ?", (broker_house.id,))


class AuditLogRepository:
    """Access to the ``audit_log`` table."""

    def __init__(self, db: Database) -> None:
        self.db = db
        self._logs: TableGateway[AuditLog] = TableGateway(db, AuditLog)

    def create_audit_log(self, audit_log: AuditLog) -> None:
        """Insert an audit log entry, filling in its id."""
        self._logs.insert(audit_log)

    def get_audit_logs(self, page: Page) -> tuple[list[AuditLog], int]:
        """Return one page of audit log entries, newest first, and their total count."""
        return self._logs.list_page(page)

    def get_audit_log_by_id(self, audit_log_id: int) -> AuditLog:
        """Return the audit log entry with the given id."""
        try:
            return self._logs.fetch_one(_LIVE_BY_ID, (audit_log_id,))
        except StoreError as exc:
            raise FetchError("Failed to fetch audit log") from exc