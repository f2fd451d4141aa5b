"""Schema bootstrap entry point."""

import asyncio
import logging

from .config import config
from .store import init_store, close_store

# Configure logging
logging.basicConfig(
    level=config.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

# Suppress aiosqlite per-statement debug logs
logging.getLogger("aiosqlite").setLevel(logging.WARNING)


async def bootstrap() -> None:
    """Create the schema at the configured path and report what it holds."""
    store = await init_store(config.data_file)
    try:
        stats = await store.get_stats()
        logger.info(
            f"Economy database ready at {store.path}: "
            f"{stats['accounts']} accounts, {stats['bans']} bans"
        )
    finally:
        await close_store()


def main() -> None:
    """Main entry point."""
    try:
        asyncio.run(bootstrap())
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
