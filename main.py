"""
main.py
-------
Entry point for the MACNSS admin console.

Responsibilities:
    - Open the database connection and initialize the schema.
    - Run the sign-in screen, then the agent menu for the signed-in agent.
    - Close the connection on shutdown, however the screen exits.
"""

from config import DATABASE_URL
from db.connection import close_connection, open_connection
from db.init_db import create_tables
from handlers.agents_handler import AgentsMenu
from handlers.signing_handler import Signing
from services.agent_service import AgentService
from utils.logger import get_logger

logger = get_logger(__name__)


class Admin:
    """Owns the one database connection for the lifetime of a UI session."""

    def __init__(self, dsn: str = DATABASE_URL):
        self.dsn = dsn
        self.connection = None

    def __enter__(self) -> "Admin":
        self.connection = open_connection(self.dsn)
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        close_connection(self.connection)
        self.connection = None
        return False


def main() -> None:
    """Initialize the database, sign an agent in and run the agent menu."""
    logger.info("Starting MACNSS admin...")
    with Admin() as admin:
        create_tables(admin.connection)
        service = AgentService(admin.connection)
        agent = Signing(service).run()
        if agent is not None:
            AgentsMenu(service, agent).run()
    logger.info("MACNSS admin stopped.")


if __name__ == "__main__":
    main()
