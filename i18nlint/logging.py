"""Logging configuration for i18nlint.

Logs go to stderr so stdout stays reserved for lint output.
Directory scans show a tqdm progress bar.
"""

import logging
import os
import sys
import time
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from typing import Any, TypeVar

from tqdm import tqdm

# Progress bars are disabled with I18NLINT_DISABLE_PROGRESS=1 or when
# stderr is not a TTY (CI logs, editor integrations).
_DISABLE_PROGRESS = (
    os.getenv("I18NLINT_DISABLE_PROGRESS", "").lower() in ("1", "true", "yes")
    or not sys.stderr.isatty()
)

logger = logging.getLogger("i18nlint")
logger.setLevel(logging.INFO)

# Only add handler if not already configured
if not logger.handlers:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(logging.DEBUG)
    formatter = logging.Formatter(
        "[i18nlint] %(asctime)s %(levelname)s: %(message)s",
        datefmt="%H:%M:%S",
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def set_verbose(verbose: bool) -> None:
    """Switch the package logger between INFO and DEBUG."""
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)


@contextmanager
def log_operation(operation: str, details: dict[str, Any] | None = None) -> Iterator[None]:
    """Log the start, end and duration of an operation.

    Failures are logged with their elapsed time and re-raised.
    """
    details_str = "".join(f" {k}={v}" for k, v in (details or {}).items())
    logger.info("▶ Starting %s%s", operation, details_str)
    start = time.perf_counter()
    try:
        yield
    except Exception as e:
        logger.error("✗ %s failed after %.2fs: %s", operation, time.perf_counter() - start, e)
        raise
    logger.info("✓ Completed %s in %.2fs", operation, time.perf_counter() - start)


T = TypeVar("T")


def progress_bar(
    iterable: Iterable[T],
    desc: str | None = None,
    total: int | None = None,
    unit: str = "it",
    disable: bool = False,
) -> Iterable[T]:
    """Wrap an iterable with a tqdm bar on stderr, unless progress is disabled."""
    if disable or _DISABLE_PROGRESS:
        return iterable

    return tqdm(
        iterable,
        desc=f"  {desc}" if desc else None,
        total=total,
        unit=unit,
        file=sys.stderr,
        ncols=80,
        leave=False,
    )
