"""
repositories/base.py
--------------------
Generic record mapper: CRUD on one table identified by its name and
primary-key column(s). Rows come back as plain dicts keyed by column name.
"""

import re
from typing import Any, Mapping, Optional, Sequence

import psycopg2

from utils.logger import get_logger

logger = get_logger(__name__)

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def _check_identifier(name: str) -> str:
    """Reject anything that is not a plain SQL identifier."""
    if not isinstance(name, str) or not _IDENTIFIER.match(name):
        raise ValueError(f"Invalid SQL identifier: {name!r}")
    return name


def _escape_like(term: str) -> str:
    """Escape LIKE wildcards so `term` matches literally (escape char: backslash)."""
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class Model:
    """
    Table-level CRUD primitives.

    `create` re-raises driver errors after a rollback. Every other operation
    logs the error, rolls back and reports failure as None, False or [].

    Example:
        model = Model(conn, "agents_cnss", ("agent_id",))
        agent_id = model.create({"email": "a@cnss.ma", ...})
        row = model.read([agent_id])
    """

    def __init__(self, conn, table: str, primary_keys: Sequence[str]):
        if not primary_keys:
            raise ValueError("At least one primary-key column is required.")
        self.conn = conn
        self.table = _check_identifier(table)
        self.primary_keys = tuple(_check_identifier(pk) for pk in primary_keys)

    # ── CREATE ────────────────────────────────────────────

    def create(self, fields: Mapping[str, Any]) -> Optional[Any]:
        """
        Insert a row.

        Args:
            fields: Column -> value mapping.

        Returns:
            The generated key (a tuple for composite keys), or None if
            nothing was inserted.

        Raises:
            psycopg2.Error: If the INSERT fails.
        """
        if not fields:
            logger.warning(f"Refusing to insert an empty row into {self.table}")
            return None
        columns = [_check_identifier(c) for c in fields]
        sql = (
            f"INSERT INTO {self.table} ({', '.join(columns)}) "
            f"VALUES ({', '.join(['%s'] * len(columns))}) "
            f"RETURNING {', '.join(self.primary_keys)};"
        )
        try:
            with self.conn.cursor() as cur:
                cur.execute(sql, list(fields.values()))
                row = cur.fetchone()
            self.conn.commit()
        except psycopg2.Error as e:
            self.conn.rollback()
            logger.error(f"Failed to insert into {self.table}: {e}")
            raise

        if not row:
            return None
        key = tuple(row[pk] for pk in self.primary_keys)
        logger.info(f"Inserted {self.table} {key}")
        return key[0] if len(key) == 1 else key

    # ── READ ──────────────────────────────────────────────

    def read(self, key_values: Sequence[Any]) -> Optional[dict]:
        """Fetch one row by primary key. Returns None if absent."""
        where, params = self._key_clause(key_values)
        return self._fetch_one(f"SELECT * FROM {self.table} WHERE {where};", params)

    def read_by(self, column: str, value: Any) -> Optional[dict]:
        """Fetch one row whose `column` equals `value`. Returns None if absent."""
        sql = f"SELECT * FROM {self.table} WHERE {_check_identifier(column)} = %s LIMIT 1;"
        return self._fetch_one(sql, [value])

    def read_all(self, filters: Optional[Mapping[str, Any]] = None) -> list[dict]:
        """
        Fetch every row whose columns equal all the given values.

        Args:
            filters: Column -> value mapping, combined with AND. Empty or
                None matches every row.

        Returns:
            Rows ordered by primary key; [] if none match.
        """
        sql = f"SELECT * FROM {self.table}"
        params: list = []
        if filters:
            sql += " WHERE " + " AND ".join(f"{_check_identifier(c)} = %s" for c in filters)
            params = list(filters.values())
        sql += f" ORDER BY {', '.join(self.primary_keys)};"
        return self._fetch_all(sql, params)

    def retrieve_all(self) -> list[dict]:
        """Fetch every row of the table in primary-key order."""
        return self.read_all()

    def search(self, term: str, columns: Sequence[str]) -> list[dict]:
        """
        Fetch rows where any of `columns` contains `term` (case-insensitive).
        `%` and `_` in `term` match literally.

        Returns:
            Rows ordered by primary key; [] if none match.
        """
        if not columns:
            return []
        where = " OR ".join(
            f"{_check_identifier(c)} ILIKE %s ESCAPE '\\'" for c in columns
        )
        sql = (
            f"SELECT * FROM {self.table} WHERE {where} "
            f"ORDER BY {', '.join(self.primary_keys)};"
        )
        pattern = f"%{_escape_like(term)}%"
        return self._fetch_all(sql, [pattern] * len(columns))

    # ── UPDATE ────────────────────────────────────────────

    def update(self, fields: Mapping[str, Any], key_values: Sequence[Any]) -> bool:
        """
        Update the row(s) matching the primary key.

        Returns:
            True if at least one row was updated, False otherwise.
        """
        if not fields:
            return False
        where, key_params = self._key_clause(key_values)
        assignments = ", ".join(f"{_check_identifier(c)} = %s" for c in fields)
        sql = f"UPDATE {self.table} SET {assignments} WHERE {where};"
        updated = self._execute(sql, list(fields.values()) + key_params)
        if updated:
            logger.info(f"Updated {self.table} {tuple(key_values)}")
        return updated

    # ── DELETE ────────────────────────────────────────────

    def delete(self, key_values: Sequence[Any]) -> bool:
        """
        Delete the row(s) matching the primary key.

        Returns:
            True if at least one row was deleted, False otherwise.
        """
        where, params = self._key_clause(key_values)
        deleted = self._execute(f"DELETE FROM {self.table} WHERE {where};", params)
        if deleted:
            logger.info(f"Deleted {self.table} {tuple(key_values)}")
        return deleted

    # ── HELPERS ───────────────────────────────────────────

    def _key_clause(self, key_values: Sequence[Any]) -> tuple[str, list]:
        key_values = list(key_values)
        if len(key_values) != len(self.primary_keys):
            raise ValueError(
                f"{self.table} expects {len(self.primary_keys)} key value(s), "
                f"got {len(key_values)}"
            )
        where = " AND ".join(f"{pk} = %s" for pk in self.primary_keys)
        return where, key_values

    def _fetch_one(self, sql: str, params: list) -> Optional[dict]:
        try:
            with self.conn.cursor() as cur:
                cur.execute(sql, params)
                row = cur.fetchone()
            return dict(row) if row else None
        except psycopg2.Error as e:
            self.conn.rollback()
            logger.error(f"Failed to read from {self.table}: {e}")
            return None

    def _fetch_all(self, sql: str, params: list) -> list[dict]:
        try:
            with self.conn.cursor() as cur:
                cur.execute(sql, params)
                return [dict(r) for r in cur.fetchall()]
        except psycopg2.Error as e:
            self.conn.rollback()
            logger.error(f"Failed to read from {self.table}: {e}")
            return []

    def _execute(self, sql: str, params: list) -> bool:
        """Run a mutation and commit. Returns True if any row was affected."""
        try:
            with self.conn.cursor() as cur:
                cur.execute(sql, params)
                affected = cur.rowcount > 0
            self.conn.commit()
            return affected
        except psycopg2.Error as e:
            self.conn.rollback()
            logger.error(f"Failed to modify {self.table}: {e}")
            return False
