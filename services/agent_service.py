"""
services/agent_service.py
-------------------------
Business logic for CNSS agents: registration, sign-in and the directory.
"""

from datetime import date
from typing import Optional

from models.agent_cnss import AgentCNSS
from models.user import Gender
from repositories.agent_cnss_repo import AgentCNSSDao
from security.passwords import hash_password, is_valid_password, verify_password
from security.rate_limiter import SignInLimiter
from utils.logger import get_logger

logger = get_logger(__name__)


class AgentService:
    """
    Handles all business logic for agents.

    Responsibilities:
        - Register agents with a unique email and a hashed password.
        - Check credentials, with per-email failure limiting.
        - List, search, update and remove agents.
    """

    def __init__(self, conn, limiter: Optional[SignInLimiter] = None):
        self.conn = conn
        self.dao = AgentCNSSDao(conn)
        self.limiter = limiter if limiter is not None else SignInLimiter()

    def register(
        self,
        cnie: str,
        first_name: str,
        last_name: str,
        birthday: date,
        gender: Gender,
        email: str,
        phone: str,
        password: str,
    ) -> Optional[AgentCNSS]:
        """
        Create a new agent.

        Returns:
            The stored agent, or None if the email is already registered or
            the password is empty or longer than 72 bytes.

        Raises:
            psycopg2.Error: If the INSERT fails (e.g. duplicate CNIE).
        """
        if not is_valid_password(password):
            logger.warning(f"Registration refused for {email}: unusable password length")
            return None
        if self.dao.get(email) is not None:
            logger.warning(f"Registration refused: {email} already exists")
            return None

        self.dao.agent_cnss = AgentCNSS(
            cnie=cnie,
            first_name=first_name,
            last_name=last_name,
            birthday=birthday,
            gender=Gender(gender),
            email=email,
            phone=phone,
            password=hash_password(password),
        )
        agent = self.dao.save()
        if agent:
            logger.info(f"Registered agent #{agent.agent_cns_id} ({email})")
        return agent

    def sign_in(self, email: str, password: str) -> Optional[AgentCNSS]:
        """
        Check credentials.

        Returns:
            The agent on success; None for an unknown email, a wrong
            password, or an email blocked after too many failures.
        """
        if self.limiter.is_blocked(email):
            logger.warning(f"Sign-in refused for {email}: too many failures")
            return None

        agent = self.dao.get(email)
        if agent is None or not verify_password(password, agent.password):
            self.limiter.record_failure(email)
            logger.warning(f"Failed sign-in for {email}")
            return None

        self.limiter.reset(email)
        logger.info(f"Agent #{agent.agent_cns_id} signed in")
        return agent

    def get_agent(self, agent_id: int) -> Optional[AgentCNSS]:
        """Load one agent by id. Returns None if absent."""
        return AgentCNSSDao(self.conn, AgentCNSS(agent_cns_id=agent_id)).read()

    def list_agents(self) -> list[AgentCNSS]:
        return self.dao.get_all()

    def search(self, criteria: str) -> list[AgentCNSS]:
        return self.dao.find(criteria)

    def update_agent(self, agent: AgentCNSS) -> Optional[AgentCNSS]:
        return self.dao.update(agent)

    def remove_agent(self, agent: AgentCNSS) -> bool:
        return self.dao.delete(agent)
