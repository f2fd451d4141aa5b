"""SQLite-backed economy store on aiosqlite read and write connections."""

import asyncio
import logging
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Any, Dict, List, Optional

import aiosqlite

from ..config import config
from ..utils import entity_id, from_unix
from .base import DataSource
from .schema import SCHEMA_SQL

logger = logging.getLogger(__name__)

NOW_SQL = "CAST(STRFTIME('%s', 'now') AS INTEGER)"


class AlreadyInitialized(RuntimeError):
    """Raised when initialize() is called a second time on the same store."""


class EconomyStore(DataSource):
    """Per-server balances, signon/prison timestamps and a global ban list.

    Reads go through a query-only connection and writes through a second
    one (WAL mode), so a reader only ever sees committed state. Every
    committing write holds ``_write_lock``; transfer_balance() holds it
    across BEGIN..COMMIT so no other commit can land inside the transfer.
    """

    def __init__(self) -> None:
        self.path: Optional[str] = None
        self._read_conn: Optional[aiosqlite.Connection] = None
        self._write_conn: Optional[aiosqlite.Connection] = None
        self._initialized = False
        self._write_lock = asyncio.Lock()

    async def initialize(self, path: Optional[str] = None) -> None:
        """Open both connections and create tables if they are missing."""
        if self._initialized:
            raise AlreadyInitialized("EconomyStore.initialize() was already called")
        path = path or config.data_file

        try:
            self._write_conn = await aiosqlite.connect(path)
            self._write_conn.row_factory = aiosqlite.Row
            await self._write_conn.execute("PRAGMA journal_mode=WAL;")
            await asyncio.gather(
                *(self._write_conn.execute(sql) for sql in SCHEMA_SQL)
            )
            await self._write_conn.commit()

            self._read_conn = await aiosqlite.connect(path)
            self._read_conn.row_factory = aiosqlite.Row
            await self._read_conn.execute("PRAGMA query_only=ON;")
        except Exception:
            await self.close()
            raise

        self.path = path
        self._initialized = True
        logger.debug("%s opened, tables created", path)

    async def close(self) -> None:
        """Close all database connections."""
        if self._write_conn:
            await self._write_conn.close()
            self._write_conn = None
        if self._read_conn:
            await self._read_conn.close()
            self._read_conn = None

    # ---- helpers ----

    @property
    def write_conn(self) -> aiosqlite.Connection:
        """The connection every write and transaction runs on."""
        if self._write_conn is None:
            raise RuntimeError("Store not open. Call initialize() first.")
        return self._write_conn

    @property
    def read_conn(self) -> aiosqlite.Connection:
        """Query-only connection; sees committed data only."""
        if self._read_conn is None:
            raise RuntimeError("Store not open. Call initialize() first.")
        return self._read_conn

    async def _fetchone(self, sql: str, params=()) -> Optional[aiosqlite.Row]:
        async with self.read_conn.execute(sql, params) as cur:
            return await cur.fetchone()

    async def _fetchall(self, sql: str, params=()) -> List[aiosqlite.Row]:
        async with self.read_conn.execute(sql, params) as cur:
            return list(await cur.fetchall())

    async def _write(self, sql: str, params=()) -> int:
        """Run one statement and commit it. Returns the affected row count."""
        async with self._write_lock:
            cur = await self.write_conn.execute(sql, params)
            await self.write_conn.commit()
            return cur.rowcount

    @asynccontextmanager
    async def transaction(self):
        """BEGIN on enter, COMMIT on success, ROLLBACK on exception."""
        async with self._write_lock:
            conn = self.write_conn
            await conn.execute("BEGIN")
            try:
                yield conn
                await conn.commit()
            except BaseException:
                await conn.rollback()
                raise

    # ---- Stats ----

    async def get_stats(self) -> Dict[str, int]:
        """Row counts across all servers."""
        accounts = await self._fetchone("SELECT COUNT(*) AS n FROM users")
        bans = await self._fetchone("SELECT COUNT(*) AS n FROM bans")
        return {"accounts": accounts["n"], "bans": bans["n"]}

    # ---- Users ----

    async def exists(self, user: Any, server: Any = None) -> bool:
        if server is None:
            row = await self._fetchone(
                "SELECT 1 FROM users WHERE id = ?", (entity_id(user),)
            )
        else:
            row = await self._fetchone(
                "SELECT 1 FROM users WHERE id = ? AND server = ?",
                (entity_id(user), entity_id(server)),
            )
        return row is not None

    async def record_interaction(self, user: Any, server: Any) -> None:
        # lastStretch has no column default, so it is supplied here
        await self._write(
            "INSERT OR IGNORE INTO users (id, server, lastStretch) VALUES (?, ?, 0)",
            (entity_id(user), entity_id(server)),
        )
        logger.debug("%s record updated in %s", entity_id(user), entity_id(server))

    # ---- Ban Management ----

    async def is_banned(self, user: Any) -> bool:
        row = await self._fetchone(
            "SELECT banned FROM bans WHERE id = ?", (entity_id(user),)
        )
        return bool(row and row["banned"] == 1)

    async def ban(self, user: Any) -> None:
        await self._write(
            "INSERT OR REPLACE INTO bans (id) VALUES (?)", (entity_id(user),)
        )
        logger.info("User %s banned", entity_id(user))

    async def unban(self, user: Any) -> None:
        removed = await self._write(
            "DELETE FROM bans WHERE id = ?", (entity_id(user),)
        )
        if removed:
            logger.info("User %s unbanned", entity_id(user))

    # ---- Balances ----

    async def get_balance(self, user: Any, server: Any) -> int:
        row = await self._fetchone(
            "SELECT balance FROM users WHERE id = ? AND server = ?",
            (entity_id(user), entity_id(server)),
        )
        if row and row["balance"]:
            return row["balance"]
        return 0

    async def adjust_balance(self, user: Any, server: Any, delta: int) -> None:
        await self._write(
            "UPDATE users SET balance = balance + ? WHERE id = ? AND server = ?",
            (delta, entity_id(user), entity_id(server)),
        )
        logger.debug("%s's balance incremented by %s", entity_id(user), delta)

    async def transfer_balance(
        self, source: Any, target: Any, server: Any, amount: int
    ) -> None:
        # No existence or sufficiency check: a missing row makes its UPDATE a no-op.
        params = {
            "amount": amount,
            "server": entity_id(server),
            "source": entity_id(source),
            "target": entity_id(target),
        }
        async with self.transaction() as conn:
            await conn.execute(
                "UPDATE users SET balance = balance - :amount "
                "WHERE id = :source AND server = :server",
                params,
            )
            await conn.execute(
                "UPDATE users SET balance = balance + :amount "
                "WHERE id = :target AND server = :server",
                params,
            )
        logger.debug(
            "%s moved from %s to %s", amount, params["source"], params["target"]
        )

    async def get_total_balance(self, server: Any) -> int:
        row = await self._fetchone(
            "SELECT SUM(balance) AS total FROM users WHERE server = ?",
            (entity_id(server),),
        )
        if row and row["total"]:
            return row["total"]
        return 0

    # ---- Timestamps ----

    async def get_last_signon(self, user: Any, server: Any) -> datetime:
        row = await self._fetchone(
            "SELECT lastSignon FROM users WHERE id = ? AND server = ?",
            (entity_id(user), entity_id(server)),
        )
        return from_unix(row["lastSignon"] if row else None)

    async def touch_signon(self, user: Any, server: Any) -> None:
        await self._write(
            f"UPDATE users SET lastSignon = {NOW_SQL} WHERE id = ? AND server = ?",
            (entity_id(user), entity_id(server)),
        )
        logger.debug("%s's signon time updated", entity_id(user))

    async def get_last_imprisonment(self, user: Any, server: Any) -> datetime:
        row = await self._fetchone(
            "SELECT lastStretch FROM users WHERE id = ? AND server = ?",
            (entity_id(user), entity_id(server)),
        )
        return from_unix(row["lastStretch"] if row else None)

    async def touch_imprisonment(self, user: Any, server: Any) -> None:
        await self._write(
            f"UPDATE users SET lastStretch = {NOW_SQL} WHERE id = ? AND server = ?",
            (entity_id(user), entity_id(server)),
        )
        logger.debug("%s's prison time updated", entity_id(user))

    # ---- Players ----

    async def list_players(self, server: Any) -> List[Dict[str, Any]]:
        rows = await self._fetchall(
            "SELECT id, balance FROM users WHERE server = ?", (entity_id(server),)
        )
        return [dict(row) for row in rows]
