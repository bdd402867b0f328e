"""
repositories/agent_cnss_repo.py
-------------------------------
Data access object for CNSS agents.
Translates the row mappings of the `agents_cnss` table into AgentCNSS objects.
"""

import re
from datetime import date, datetime
from typing import Optional

from models.agent_cnss import AgentCNSS
from models.user import Gender
from repositories.base import Model
from repositories.errors import MalformedRow
from utils.logger import get_logger

logger = get_logger(__name__)

TABLE = "agents_cnss"
PRIMARY_KEY = "agent_id"
SEARCHABLE_COLUMNS = ("cnie", "first_name", "last_name", "email", "phone")
_ISO_DATE = re.compile(r"^[0-9]{4}-[0-9]{2}-[0-9]{2}$")


class AgentCNSSDao:
    """
    DAO for the agents_cnss table.

    Holds a current agent (`agent_cnss`) that `read()` and `save()` work on;
    every other operation takes its entity or key explicitly.
    """

    def __init__(self, conn, agent: Optional[AgentCNSS] = None):
        self.model = Model(conn, TABLE, (PRIMARY_KEY,))
        self.agent_cnss = agent if agent is not None else AgentCNSS()

    # ── CURRENT AGENT ─────────────────────────────────────

    def read(self) -> Optional[AgentCNSS]:
        """
        Load the agent identified by the held agent's id.

        Returns:
            The loaded agent (also kept as the held agent), or None if the
            held agent has no id or no row matches.
        """
        if self.agent_cnss.agent_cns_id is None:
            return None
        row = self.model.read([self.agent_cnss.agent_cns_id])
        if row is None:
            return None
        self.agent_cnss = self._row_to_agent(row)
        return self.agent_cnss

    def save(self) -> Optional[AgentCNSS]:
        """
        Insert the held agent and reload it from storage.

        Returns:
            The stored agent, or None if nothing was inserted.

        Raises:
            psycopg2.Error: If the INSERT fails.
        """
        agent_id = self.model.create(self.agent_cnss.to_row())
        if agent_id is None:
            return None
        self.agent_cnss.agent_cns_id = agent_id
        return self.read()

    # ── READ ──────────────────────────────────────────────

    def get(self, email: str) -> Optional[AgentCNSS]:
        """Fetch an agent by email. Returns None if absent."""
        row = self.model.read_by("email", email)
        return self._row_to_agent(row) if row else None

    def get_all(self) -> list[AgentCNSS]:
        """Every agent, in storage order."""
        return [self._row_to_agent(r) for r in self.model.retrieve_all()]

    def find(self, criteria: str) -> list[AgentCNSS]:
        """Agents whose CNIE, name, email or phone contains `criteria`."""
        rows = self.model.search(criteria, SEARCHABLE_COLUMNS)
        return [self._row_to_agent(r) for r in rows]

    # ── CREATE / UPDATE / DELETE ──────────────────────────

    def create(self, entity: AgentCNSS) -> Optional[AgentCNSS]:
        """
        Insert `entity`.

        Returns:
            The same agent with `agent_cns_id` populated, or None if nothing
            was inserted.

        Raises:
            psycopg2.Error: If the INSERT fails.
        """
        agent_id = self.model.create(entity.to_row())
        if agent_id is None:
            return None
        entity.agent_cns_id = agent_id
        return entity

    def update(self, agent: AgentCNSS) -> Optional[AgentCNSS]:
        """
        Update an existing agent by primary key.

        Returns:
            The agent if a row was updated, None otherwise.
        """
        if agent.agent_cns_id is None:
            return None
        if self.model.update(agent.to_row(), [agent.agent_cns_id]):
            return agent
        return None

    def delete(self, agent: AgentCNSS) -> bool:
        """
        Delete an agent by primary key.

        Returns:
            True if a row was deleted, False otherwise.
        """
        if agent.agent_cns_id is None:
            return False
        return self.model.delete([agent.agent_cns_id])

    # ── HELPERS ───────────────────────────────────────────

    @staticmethod
    def _row_to_agent(row: dict) -> AgentCNSS:
        """
        Convert a row mapping to an AgentCNSS.

        The password hash is read from `pwd_hash`, falling back to a legacy
        `password` column.

        Raises:
            MalformedRow: On a missing column, an unknown gender, an invalid
                birthday or a non-integer id.
        """
        def column(name: str):
            if name not in row:
                raise MalformedRow(TABLE, name, None, "column missing")
            return row[name]

        raw_id = column(PRIMARY_KEY)
        if isinstance(raw_id, bool) or not isinstance(raw_id, (int, str)):
            raise MalformedRow(TABLE, PRIMARY_KEY, raw_id, "not an integer")
        try:
            agent_id = int(raw_id)
        except (TypeError, ValueError) as e:
            raise MalformedRow(TABLE, PRIMARY_KEY, raw_id, str(e)) from e

        raw_gender = column("gender")
        try:
            gender = Gender(raw_gender)
        except ValueError as e:
            raise MalformedRow(TABLE, "gender", raw_gender, "unknown gender") from e

        raw_birthday = column("birthday")
        if isinstance(raw_birthday, datetime):
            birthday = raw_birthday.date()
        elif isinstance(raw_birthday, date):
            birthday = raw_birthday
        elif isinstance(raw_birthday, str) and _ISO_DATE.match(raw_birthday):
            try:
                birthday = datetime.strptime(raw_birthday, "%Y-%m-%d").date()
            except ValueError as e:
                raise MalformedRow(TABLE, "birthday", raw_birthday, str(e)) from e
        else:
            raise MalformedRow(TABLE, "birthday", raw_birthday, "expected YYYY-MM-DD")

        if "pwd_hash" in row:
            password = row["pwd_hash"]
        else:
            password = column("password")

        return AgentCNSS(
            cnie=column("cnie"),
            first_name=column("first_name"),
            last_name=column("last_name"),
            birthday=birthday,
            gender=gender,
            email=column("email"),
            phone=column("phone"),
            password=password,
            agent_cns_id=agent_id,
        )
