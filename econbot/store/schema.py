"""Database schema definitions."""

USERS_TABLE_SQL = (
    "CREATE TABLE IF NOT EXISTS users ("
    "id TEXT NOT NULL, "
    "server TEXT NOT NULL, "
    "balance INTEGER NOT NULL DEFAULT 0, "
    "lastSignon INTEGER NOT NULL DEFAULT 0, "
    "lastStretch INTEGER NOT NULL, "
    "PRIMARY KEY (id, server) "
    ")"
)

BANS_TABLE_SQL = (
    "CREATE TABLE IF NOT EXISTS bans ("
    "id TEXT PRIMARY KEY UNIQUE NOT NULL, "
    "banned INTEGER NOT NULL DEFAULT 1"
    ")"
)

SCHEMA_SQL = [USERS_TABLE_SQL, BANS_TABLE_SQL]
