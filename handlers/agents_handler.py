"""
handlers/agents_handler.py
--------------------------
Agent directory menu shown after a successful sign-in:
list, search, add, change phone, remove.
"""

import getpass
from typing import Callable, Optional

from handlers.register_handler import RegisterForm
from models.agent_cnss import AgentCNSS
from services.agent_service import AgentService
from utils.logger import get_logger

logger = get_logger(__name__)

MENU = """
1) List agents
2) Search agents
3) Add an agent
4) Change an agent's phone
5) Remove an agent
0) Sign out
"""


class AgentsMenu:
    """Main menu of a signed-in agent. Each choice maps to one service call."""

    def __init__(
        self,
        service: AgentService,
        signed_in: AgentCNSS,
        input_func: Callable[[str], str] = input,
        password_func: Callable[[str], str] = getpass.getpass,
        output: Callable[[str], None] = print,
    ):
        self.service = service
        self.signed_in = signed_in
        self.input_func = input_func
        self.password_func = password_func
        self.output = output
        self.actions = {
            "1": self.list_agents,
            "2": self.search,
            "3": self.add,
            "4": self.change_phone,
            "5": self.remove,
        }

    def run(self) -> None:
        """Loop on the menu until the agent signs out or input ends."""
        while True:
            self.output(MENU)
            try:
                choice = self.input_func("Choice: ").strip()
                if choice == "0":
                    break
                action = self.actions.get(choice)
                if action is None:
                    self.output(f"Unknown choice: {choice!r}")
                    continue
                action()
            except (EOFError, KeyboardInterrupt):
                break
        self.output(f"Goodbye, {self.signed_in.full_name}.")
        logger.info(f"Agent #{self.signed_in.agent_cns_id} signed out")

    # ── ACTIONS ───────────────────────────────────────────

    def list_agents(self) -> None:
        self._print_agents(self.service.list_agents())

    def search(self) -> None:
        criteria = self.input_func("Search: ").strip()
        if not criteria:
            return
        self._print_agents(self.service.search(criteria))

    def add(self) -> None:
        RegisterForm(self.service, self.input_func, self.password_func, self.output).run()

    def change_phone(self) -> None:
        agent = self._pick_agent()
        if agent is None:
            return
        agent.phone = self.input_func("New phone: ").strip()
        if self.service.update_agent(agent) is not None:
            self.output(f"Updated {agent}")
        else:
            self.output("Update failed.")

    def remove(self) -> None:
        agent = self._pick_agent()
        if agent is None:
            return
        if agent.agent_cns_id == self.signed_in.agent_cns_id:
            self.output("You cannot remove your own account.")
            return
        answer = self.input_func(f"Remove {agent}? [y/N] ").strip().lower()
        if answer != "y":
            return
        if self.service.remove_agent(agent):
            self.output(f"Removed agent #{agent.agent_cns_id}.")
        else:
            self.output("Remove failed.")

    # ── HELPERS ───────────────────────────────────────────

    def _pick_agent(self) -> Optional[AgentCNSS]:
        raw = self.input_func("Agent id: ").strip()
        if not raw.isdigit():
            self.output(f"Invalid id: {raw!r}")
            return None
        agent = self.service.get_agent(int(raw))
        if agent is None:
            self.output(f"No agent #{raw}.")
        return agent

    def _print_agents(self, agents: list[AgentCNSS]) -> None:
        if not agents:
            self.output("No agents found.")
            return
        for agent in agents:
            self.output(f"  {agent}")
