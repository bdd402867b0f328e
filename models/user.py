"""
models/user.py
--------------
Base-user attributes shared by every kind of account.
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional


class Gender(str, Enum):
    """Fixed set of gender values stored in the `gender` column."""
    MALE = "MALE"
    FEMALE = "FEMALE"


@dataclass
class User:
    """
    Identity and credentials of a person who can use the console.

    Attributes:
        cnie: National identity card number.
        first_name: Given name.
        last_name: Family name.
        birthday: Date of birth.
        gender: One of the Gender values.
        email: Unique sign-in address.
        phone: Contact phone number.
        password: bcrypt hash of the password (never the plain text).
    """
    cnie: str = ""
    first_name: str = ""
    last_name: str = ""
    birthday: Optional[date] = None
    gender: Optional[Gender] = None
    email: str = ""
    phone: str = ""
    password: str = ""

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()
