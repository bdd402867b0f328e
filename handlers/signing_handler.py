"""
handlers/signing_handler.py
---------------------------
Console sign-in screen. Asks for credentials, then shows the agent directory.
"""

import getpass
from typing import Callable, Optional

from config import SIGNIN_MAX_PROMPTS
from models.agent_cnss import AgentCNSS
from services.agent_service import AgentService
from utils.logger import get_logger

logger = get_logger(__name__)

BANNER = """
==============================================
  MACNSS - Administration
  Sign in with your agent email and password.
  Leave the email empty to quit.
  No account yet? Run `macnss-register`.
==============================================
"""


class Signing:
    """
    Sign-in screen launched by the admin bootstrap.

    Input and output callables are injectable so the screen can be driven
    without a terminal.
    """

    def __init__(
        self,
        service: AgentService,
        input_func: Callable[[str], str] = input,
        password_func: Callable[[str], str] = getpass.getpass,
        output: Callable[[str], None] = print,
        max_prompts: int = SIGNIN_MAX_PROMPTS,
    ):
        self.service = service
        self.input_func = input_func
        self.password_func = password_func
        self.output = output
        self.max_prompts = max_prompts

    def run(self) -> Optional[AgentCNSS]:
        """
        Prompt until a sign-in succeeds, the user quits, or prompts run out.

        Returns:
            The signed-in agent, or None.
        """
        self.output(BANNER)
        for _ in range(self.max_prompts):
            try:
                email = self.input_func("Email: ").strip()
                if not email:
                    self.output("Goodbye.")
                    return None
                password = self.password_func("Password: ")
            except (EOFError, KeyboardInterrupt):
                self.output("\nSign-in cancelled.")
                return None

            agent = self.service.sign_in(email, password)
            if agent is not None:
                self.output(f"Welcome, {agent.full_name}!")
                self.show_agents()
                return agent
            self.output("Invalid email or password.")

        self.output("Too many attempts. Please try again later.")
        logger.info("Sign-in screen closed after too many attempts.")
        return None

    def show_agents(self) -> None:
        """Print the agent directory, one line per agent."""
        agents = self.service.list_agents()
        if not agents:
            self.output("No agents registered.")
            return
        self.output(f"Agents ({len(agents)}):")
        for agent in agents:
            self.output(f"  {agent}")
