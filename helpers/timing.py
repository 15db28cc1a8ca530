"""Stage timing for batch jobs."""

import time
from collections.abc import Iterator
from contextlib import contextmanager

from loguru import logger


@contextmanager
def timed(label: str) -> Iterator[None]:
    """Log how long the block took, or how long it ran before failing."""
    start = time.perf_counter()
    try:
        yield
    except Exception:
        logger.error("{} failed after {:.0f}ms", label, (time.perf_counter() - start) * 1000)
        raise
    logger.info("{} completed in {:.0f}ms", label, (time.perf_counter() - start) * 1000)
