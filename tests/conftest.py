import re
import sqlite3
import sys
from datetime import date
from pathlib import Path

import psycopg2
import pytest

# Ensure project root on sys.path
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))

from models.agent_cnss import AgentCNSS  # noqa: E402
from models.user import Gender  # noqa: E402

SQLITE_SCHEMA = """
CREATE TABLE agents_cnss (
    agent_id    INTEGER PRIMARY KEY AUTOINCREMENT,
    cnie        TEXT UNIQUE NOT NULL,
    first_name  TEXT NOT NULL,
    last_name   TEXT NOT NULL,
    birthday    TEXT NOT NULL,
    gender      TEXT NOT NULL,
    email       TEXT UNIQUE NOT NULL,
    phone       TEXT,
    pwd_hash    TEXT NOT NULL
);
"""

_RETURNING = re.compile(r"\s+RETURNING\s+(?P<cols>[\w\s,]+?);?\s*$", re.IGNORECASE)


def _adapt(value):
    if isinstance(value, date):
        return value.isoformat()
    return value


class SQLiteCursor:
    """psycopg2-style cursor over sqlite3: %s params, dict rows, RETURNING."""

    def __init__(self, db: sqlite3.Connection, drop_returned: bool = False):
        self._cur = db.cursor()
        self._drop_returned = drop_returned
        self._returned = None
        self.rowcount = -1

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self._cur.close()
        return False

    def execute(self, sql, params=()):
        sql = sql.replace("%s", "?").replace("ILIKE", "LIKE")
        returning = _RETURNING.search(sql)
        if returning:
            sql = sql[: returning.start()] + ";"
        try:
            self._cur.execute(sql, [_adapt(p) for p in params])
        except sqlite3.IntegrityError as e:
            raise psycopg2.IntegrityError(str(e)) from e
        except sqlite3.Error as e:
            raise psycopg2.DatabaseError(str(e)) from e
        self.rowcount = self._cur.rowcount
        if returning:
            cols = [c.strip() for c in returning.group("cols").split(",")]
            self._returned = [] if self._drop_returned else [{c: self._cur.lastrowid for c in cols}]
        else:
            self._returned = None

    def fetchone(self):
        if self._returned is not None:
            return self._returned.pop(0) if self._returned else None
        row = self._cur.fetchone()
        return dict(row) if row is not None else None

    def fetchall(self):
        if self._returned is not None:
            rows, self._returned = self._returned, []
            return rows
        return [dict(r) for r in self._cur.fetchall()]


class SQLiteConnection:
    """Stands in for a psycopg2 connection opened with RealDictCursor."""

    def __init__(self):
        self.db = sqlite3.connect(":memory:")
        self.db.row_factory = sqlite3.Row
        self.db.executescript(SQLITE_SCHEMA)
        self.closed = 0
        # When set, INSERT ... RETURNING hands back no row
        self.drop_returned = False
        self.commits = 0
        self.rollbacks = 0

    def cursor(self, cursor_factory=None):
        return SQLiteCursor(self.db, self.drop_returned)

    def commit(self):
        self.db.commit()
        self.commits += 1

    def rollback(self):
        self.db.rollback()
        self.rollbacks += 1

    def close(self):
        self.db.close()
        self.closed = 1

    def count(self, table: str = "agents_cnss") -> int:
        return self.db.execute(f"SELECT COUNT(*) FROM {table}").fetchone()[0]

    def insert_raw(self, **columns) -> int:
        names = ", ".join(columns)
        marks = ", ".join("?" for _ in columns)
        cur = self.db.execute(
            f"INSERT INTO agents_cnss ({names}) VALUES ({marks})", list(columns.values())
        )
        self.db.commit()
        return cur.lastrowid


@pytest.fixture()
def conn():
    connection = SQLiteConnection()
    yield connection
    if not connection.closed:
        connection.close()


@pytest.fixture()
def make_agent():
    counter = {"n": 0}

    def _make(**overrides) -> AgentCNSS:
        counter["n"] += 1
        n = counter["n"]
        fields = dict(
            cnie=f"AB{100000 + n}",
            first_name="Salma",
            last_name=f"Bennani{n}",
            birthday=date(1990, 5, n % 28 + 1),
            gender=Gender.FEMALE,
            email=f"agent{n}@cnss.ma",
            phone=f"06000000{n:02d}",
            password=f"$2b$04$hash{n}",
        )
        fields.update(overrides)
        return AgentCNSS(**fields)

    return _make
