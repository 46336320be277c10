"""Repositories for trader workstations, their assignment to traders, trader
teams and team membership."""

from __future__ import annotations

from datetime import datetime

from .database import Database, Page, RecordNotFoundError, TableGateway
from .organisation import TraderTeam, TraderTeamMember, TraderTws, Tws


class TwsRepository:
    """Access to the ``tws`` table."""

    def __init__(self, db: Database) -> None:
        self.db = db
        self._workstations: TableGateway[Tws] = TableGateway(db, Tws)

    def create_tws(self, tws: Tws) -> None:
        """Insert a workstation row, filling in its id."""
        self._workstations.insert(tws)

    def update_tws(self, tws: Tws) -> None:
        """Write every column but ``created_at`` to the row with ``tws.id``.

        Raises RecordNotFoundError when no row has that id.
        """
        tws.updated_at = datetime.now()
        if self._workstations.update_where(tws, "id = ?", (tws.id,)) == 0:
            raise RecordNotFoundError(f"Tws with ID {tws.id} does not exist")

    def get_tws(self, page: Page) -> tuple[list[Tws], int]:
        """Return one page of live workstations, newest first, and their total count."""
        return self._workstations.list_page(page)

    def delete_tws(self, tws: Tws) -> None:
        """Mark the workstation with ``tws.id`` as deleted."""
        self._workstations.soft_delete_where(tws, "id = ?", (tws.id,))


class TraderTwsRepository:
    """Access to ``map_trader_tws``."""

    def __init__(self, db: Database) -> None:
        self.db = db
        self._assignments: TableGateway[TraderTws] = TableGateway(db, TraderTws)

    def create_trader_tws(self, trader_tws: TraderTws) -> None:
        """Assign a workstation to a trader, filling in the mapping's id."""
        self._assignments.insert(trader_tws)

    def update_trader_tws(self, trader_tws: TraderTws) -> None:
        """Write every column but ``created_at`` to the mapping with its id.

        Raises RecordNotFoundError when no mapping has that id.
        """
        trader_tws.updated_at = datetime.now()
        if not self._assignments.exists("id = ?", (trader_tws.id,)):
            raise RecordNotFoundError("No trader TWS record found with the given TWS ID")
        self._assignments.update_where(trader_tws, "id = ?", (trader_tws.id,))

    def get_traders_tws(self, page: Page) -> tuple[list[TraderTws], int]:
        """Return one page of live mappings, newest first, and their total count."""
        return self._assignments.list_page(page)

    def delete_trader_tws(self, trader_tws: TraderTws) -> None:
        """Mark every mapping of workstation ``trader_tws.tws_id`` as deleted."""
        self._assignments.soft_delete_where(
            trader_tws, "tws_id = ?", (trader_tws.tws_id,)
        )


class TraderTeamRepository:
    """Access to the ``trader_team`` table."""

    def __init__(self, db: Database) -> None:
        self.db = db
        self._teams: TableGateway[TraderTeam] = TableGateway(db, TraderTeam)

    def create_team(self, trader_team: TraderTeam) -> None:
        """Insert a team row, filling in its id."""
        self._teams.insert(trader_team)

    def update_team(self, trader_team: TraderTeam) -> None:
        """Write every column but ``created_at`` to the team with its id.

        Raises RecordNotFoundError when no team has that id.
        """
        trader_team.updated_at = datetime.now()
        if not self._teams.exists("id = ?", (trader_team.id,)):
            raise RecordNotFoundError("No trader TWS record found with the given TWS ID")
        self._teams.update_where(trader_team, "id = ?", (trader_team.id,))

    def get_teams(self, page: Page) -> tuple[list[TraderTeam], int]:
        """Return one page of live teams, newest first, and their total count."""
        return self._teams.list_page(page)

    def delete_team(self, trader_team: TraderTeam) -> None:
        """Mark the team with ``trader_team.id`` as deleted."""
        self._teams.soft_delete_where(trader_team, "id = ?", (trader_team.id,))


class TraderTeamMemberRepository:
    """Access to ``map_trader_team``."""

    def __init__(self, db: Database) -> None:
        self.db = db
        self._members: TableGateway[TraderTeamMember] = TableGateway(db, TraderTeamMember)

    def create_map_team(self, member: TraderTeamMember) -> None:
        """Place a trader in a team, filling in the mapping's id."""
        self._members.insert(member)

    def update_map_team(self, member: TraderTeamMember) -> None:
        """Write every column but ``created_at`` to the mapping with its id.

        Raises RecordNotFoundError when no mapping has that id.
        """
        member.updated_at = datetime.now()
        if not self._members.exists("id = ?", (member.id,)):
            raise RecordNotFoundError("No trader TWS record found with the given ID")
        self._members.update_where(member, "id = ?", (member.id,))

    def get_mapped_teams(self, page: Page) -> tuple[list[TraderTeamMember], int]:
        """Return one page of live mappings, newest first, and their total count."""
        return self._members.list_page(page)

    def delete_mapped_team(self, member: TraderTeamMember) -> None:
        """Mark the mapping with ``member.id`` as deleted."""
        self._members.soft_delete_where(member, "id = ?", (member.id,))