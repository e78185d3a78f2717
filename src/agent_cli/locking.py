"""Advisory file locks for the shared source cache."""

import fcntl
import logging
from collections.abc import Generator
from contextlib import contextmanager
from pathlib import Path

logger = logging.getLogger(__name__)


def lock_path_for(path: Path) -> Path:
    """Sibling lock file guarding `path`."""
    return path.with_name(f"{path.name}.lock")


@contextmanager
def cache_lock(path: Path) -> Generator[Path, None, None]:
    """Hold an exclusive advisory lock on `path` for the duration of the block.

    The lock lives in a sibling ``<name>.lock`` file so `path` itself may be
    created, replaced or deleted while the lock is held. Concurrent
    invocations touching the same cache entry are serialized; the lock is
    released when the block exits, including on error.
    """
    lock_file = lock_path_for(path)
    lock_file.parent.mkdir(parents=True, exist_ok=True)
    with lock_file.open("a+b") as handle:
        logger.debug("Waiting for lock %s", lock_file)
        fcntl.flock(handle.fileno(), fcntl.LOCK_EX)
        try:
            yield path
        finally:
            fcntl.flock(handle.fileno(), fcntl.LOCK_UN)
            logger.debug("Released lock %s", lock_file)
