"""
db/init_db.py
-------------
Creates the database schema (tables) if they do not already exist.
Run this module directly to initialize a fresh database:
    python -m db.init_db
"""

from utils.logger import get_logger

logger = get_logger(__name__)

SCHEMA_SQL = """
-- CNSS agents: personnel allowed to sign in to the admin console
CREATE TABLE IF NOT EXISTS agents_cnss (
    agent_id        SERIAL PRIMARY KEY,
    cnie            VARCHAR(20) UNIQUE NOT NULL,
    first_name      VARCHAR(100) NOT NULL,
    last_name       VARCHAR(100) NOT NULL,
    birthday        DATE NOT NULL,
    gender          VARCHAR(10) NOT NULL CHECK (gender IN ('MALE', 'FEMALE')),
    email           VARCHAR(255) UNIQUE NOT NULL,
    phone           VARCHAR(30),
    pwd_hash        VARCHAR(255) NOT NULL,
    created_at      TIMESTAMPTZ DEFAULT NOW()
);

-- Case-insensitive name lookups from the agent directory
CREATE INDEX IF NOT EXISTS idx_agents_cnss_name ON agents_cnss(lower(last_name), lower(first_name));
"""


def create_tables(conn) -> None:
    """
    Execute the schema SQL to create all tables.
    Safe to call multiple times (uses IF NOT EXISTS).

    Args:
        conn: An open psycopg2 connection.
    """
    try:
        with conn.cursor() as cur:
            cur.execute(SCHEMA_SQL)
        conn.commit()
        logger.info("Database schema initialized successfully.")
    except Exception as e:
        conn.rollback()
        logger.error(f"Failed to initialize schema: {e}")
        raise


if __name__ == "__main__":
    from db.connection import connection
    with connection() as conn:
        create_tables(conn)
    print("Database schema created successfully.")
