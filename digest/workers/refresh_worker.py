"""
Background worker that refreshes the feed on a fixed interval.

This worker runs inside the API process (the feed lives in memory) and:
- Calls FetcherManager.refresh() every interval
- Handles errors gracefully without crashing
- Stops promptly when the shutdown event is set
- Loads configuration from environment and config files
"""

import asyncio
import logging
import os
import random
from dataclasses import dataclass

from digest.core.config.loader import get_worker_config
from digest.core.primitives.fetchers.manager import FetcherManager

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL_SECONDS = 30 * 60


@dataclass
class WorkerConfig:
    """Configuration for the refresh worker."""

    interval_seconds: int
    jitter_seconds: int
    run_on_startup: bool
    log_level: str


def _as_bool(value: object) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


def load_worker_config() -> WorkerConfig:
    """
    Load worker configuration from environment variables and config files.

    Environment variables take precedence over config files.

    Returns:
        Worker configuration.
    """
    worker_config = get_worker_config("refresh_worker")

    return WorkerConfig(
        interval_seconds=int(
            os.environ.get(
                "REFRESH_INTERVAL_SECONDS",
                worker_config.get("interval_seconds", DEFAULT_INTERVAL_SECONDS),
            )
        ),
        jitter_seconds=int(
            os.environ.get(
                "REFRESH_JITTER_SECONDS",
                worker_config.get("jitter_seconds", 0),
            )
        ),
        run_on_startup=_as_bool(
            os.environ.get(
                "REFRESH_ON_STARTUP",
                worker_config.get("run_on_startup", True),
            )
        ),
        log_level=os.environ.get(
            "REFRESH_LOG_LEVEL",
            worker_config.get("log_level", "INFO"),
        ),
    )


def setup_logging(log_level: str) -> None:
    """
    Configure logging for the service.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    """
    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


async def _sleep_until_shutdown(seconds: float, shutdown_event: asyncio.Event) -> None:
    """Sleep for `seconds`, returning early if shutdown is requested."""
    try:
        await asyncio.wait_for(shutdown_event.wait(), timeout=seconds)
    except asyncio.TimeoutError:
        pass


async def run_worker(
    config: WorkerConfig,
    manager: FetcherManager,
    shutdown_event: asyncio.Event,
) -> None:
    """
    Main worker loop.

    Refreshes the feed, then sleeps for the configured interval (plus
    optional jitter), until the shutdown event is set.

    Args:
        config: Worker configuration.
        manager: Manager whose refresh() is called each cycle.
        shutdown_event: Set to stop the loop.
    """
    logger.info(
        f"Starting refresh worker with interval={config.interval_seconds}s, "
        f"jitter={config.jitter_seconds}s, run_on_startup={config.run_on_startup}"
    )

    first_cycle = True
    while not shutdown_event.is_set():
        if config.run_on_startup or not first_cycle:
            try:
                logger.info("Scheduled feed refresh triggered")
                snapshot = await manager.refresh()

                if snapshot.errors:
                    for error in snapshot.errors:
                        logger.warning(f"Refresh error: {error}")

            except Exception as e:
                # Log error but don't crash - the next cycle may succeed
                logger.error(f"Error in refresh cycle: {e}", exc_info=True)

        first_cycle = False

        jitter = random.uniform(0, config.jitter_seconds) if config.jitter_seconds else 0.0
        sleep_time = config.interval_seconds + jitter

        logger.info(
            f"Next refresh in {sleep_time:.1f}s "
            f"(base={config.interval_seconds}s + jitter={jitter:.1f}s)"
        )
        await _sleep_until_shutdown(sleep_time, shutdown_event)

    logger.info("Refresh worker stopped")
