from __future__ import annotations

import asyncio
import logging
import os

from src.adapters.config import MapRuntimeConfig
from src.adapters.runtime import bootstrap_map

logger = logging.getLogger("src.worker")


async def run() -> None:
    runtime = bootstrap_map(MapRuntimeConfig.from_env())
    runtime.scheduler.start()
    try:
        # Runs until cancelled (Ctrl+C).
        await asyncio.Event().wait()
    finally:
        await runtime.scheduler.stop()
        outcome = runtime.scheduler.last_outcome
        if outcome is not None:
            logger.info("Last refresh: %s", outcome.status.value)


def main() -> None:
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    try:
        asyncio.run(run())
    except KeyboardInterrupt:
        logger.info("Shutting down")


if __name__ == "__main__":
    main()
