"""Abstract data source interface shared by store backends."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, List, Optional


class DataSource(ABC):
    """Economy state and ban list, keyed by (user, server).

    User and server arguments are opaque: a string or int id, or any object
    with an ``id`` attribute.
    """

    @abstractmethod
    async def initialize(self, path: Optional[str] = None) -> None:
        """Open the backend and create missing tables. Only once per instance."""

    @abstractmethod
    async def close(self) -> None:
        ...

    @abstractmethod
    async def exists(self, user: Any, server: Any = None) -> bool:
        """True if the user has a row (in ``server``, or anywhere when omitted)."""

    @abstractmethod
    async def record_interaction(self, user: Any, server: Any) -> None:
        """Create the user's default row in ``server`` if it is missing."""

    # ---- Bans ----

    @abstractmethod
    async def is_banned(self, user: Any) -> bool:
        ...

    @abstractmethod
    async def ban(self, user: Any) -> None:
        ...

    @abstractmethod
    async def unban(self, user: Any) -> None:
        ...

    # ---- Balances ----

    @abstractmethod
    async def get_balance(self, user: Any, server: Any) -> int:
        ...

    @abstractmethod
    async def adjust_balance(self, user: Any, server: Any, delta: int) -> None:
        ...

    @abstractmethod
    async def transfer_balance(
        self, source: Any, target: Any, server: Any, amount: int
    ) -> None:
        """Move ``amount`` from ``source`` to ``target``, all or nothing."""

    @abstractmethod
    async def get_total_balance(self, server: Any) -> int:
        ...

    # ---- Timestamps ----

    @abstractmethod
    async def get_last_signon(self, user: Any, server: Any) -> datetime:
        ...

    @abstractmethod
    async def touch_signon(self, user: Any, server: Any) -> None:
        ...

    @abstractmethod
    async def get_last_imprisonment(self, user: Any, server: Any) -> datetime:
        ...

    @abstractmethod
    async def touch_imprisonment(self, user: Any, server: Any) -> None:
        ...

    # ---- Players ----

    @abstractmethod
    async def list_players(self, server: Any) -> List[Dict[str, Any]]:
        """Every user in ``server`` as ``{"id": ..., "balance": ...}``."""
