"""
models/agent_cnss.py
--------------------
Domain model for CNSS agents (staff of the insurance agency).
"""

from dataclasses import dataclass
from typing import Any, Optional

from models.user import User


@dataclass
class AgentCNSS(User):
    """
    A CNSS agent: a User with a database-assigned identifier.

    Attributes:
        agent_cns_id: Primary key in `agents_cnss` (None for new records).
    """
    agent_cns_id: Optional[int] = None

    def to_row(self) -> dict[str, Any]:
        """Column mapping written on insert/update. Never includes `agent_id`."""
        return {
            "cnie": self.cnie,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "birthday": self.birthday,
            "gender": self.gender.value if self.gender is not None else None,
            "email": self.email,
            "phone": self.phone,
            "pwd_hash": self.password,
        }

    def __str__(self) -> str:
        return f"#{self.agent_cns_id} {self.full_name} <{self.email}>"
