"""
repositories/errors.py
----------------------
Errors raised while turning storage rows into domain objects.
"""


class MalformedRow(ValueError):
    """A stored row could not be decoded into a domain object."""

    def __init__(self, table: str, column: str, value, reason: str = ""):
        self.table = table
        self.column = column
        self.value = value
        message = f"{table}.{column} has invalid value {value!r}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
