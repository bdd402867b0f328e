"""
handlers/register_handler.py
----------------------------
Console form that registers a new agent.
Run this module directly to create the first agent of a fresh database:
    python -m handlers.register_handler
"""

import getpass
from datetime import datetime
from typing import Callable, Optional

import psycopg2

from models.agent_cnss import AgentCNSS
from models.user import Gender
from services.agent_service import AgentService
from utils.logger import get_logger

logger = get_logger(__name__)


class RegisterForm:
    """Prompts for every agent field, then registers through AgentService."""

    def __init__(
        self,
        service: AgentService,
        input_func: Callable[[str], str] = input,
        password_func: Callable[[str], str] = getpass.getpass,
        output: Callable[[str], None] = print,
    ):
        self.service = service
        self.input_func = input_func
        self.password_func = password_func
        self.output = output

    def run(self) -> Optional[AgentCNSS]:
        """
        Fill in and submit the form.

        Returns:
            The registered agent, or None if the input was invalid, the
            email or CNIE is taken, or the user cancelled.
        """
        try:
            cnie = self.input_func("CNIE: ").strip()
            first_name = self.input_func("First name: ").strip()
            last_name = self.input_func("Last name: ").strip()
            raw_birthday = self.input_func("Birthday (YYYY-MM-DD): ").strip()
            raw_gender = self.input_func("Gender (MALE/FEMALE): ").strip().upper()
            email = self.input_func("Email: ").strip()
            phone = self.input_func("Phone: ").strip()
            password = self.password_func("Password: ")
            confirm = self.password_func("Confirm password: ")
        except (EOFError, KeyboardInterrupt):
            self.output("\nRegistration cancelled.")
            return None

        if not all((cnie, first_name, last_name, email)):
            self.output("CNIE, names and email are required.")
            return None
        try:
            birthday = datetime.strptime(raw_birthday, "%Y-%m-%d").date()
        except ValueError:
            self.output(f"Invalid birthday: {raw_birthday!r}")
            return None
        try:
            gender = Gender(raw_gender)
        except ValueError:
            self.output(f"Invalid gender: {raw_gender!r}")
            return None
        if password != confirm:
            self.output("Passwords do not match.")
            return None

        try:
            agent = self.service.register(
                cnie, first_name, last_name, birthday, gender, email, phone, password
            )
        except psycopg2.IntegrityError as e:
            logger.error(f"Registration of {email} rejected by the database: {e}")
            self.output("An agent with this CNIE already exists.")
            return None

        if agent is None:
            self.output("Registration refused: email already used, or password empty or over 72 bytes.")
            return None
        self.output(f"Registered {agent}")
        return agent


def main() -> None:
    """Create the schema if needed and register one agent."""
    from db.connection import connection
    from db.init_db import create_tables

    with connection() as conn:
        create_tables(conn)
        RegisterForm(AgentService(conn)).run()


if __name__ == "__main__":
    main()
