"""
Targeting context logger.

Optimizer and pipeline messages carry a [target] prefix.
"""

from pathlib import Path
from typing import Optional

from loguru import logger

from tailor.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[target]"


def setup_targeting_logger(log_dir: Path, extra_provenance: Optional[dict] = None) -> Path:
    """Configure a tailoring session logging to log_dir/target.log."""
    return _setup_logger(context_name="target", log_dir=log_dir, extra_provenance=extra_provenance)


def _log_success(message: str) -> None:
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level tailoring helpers


def log_tailoring_result(job_title: str, keyword_count: int, elapsed_time: float) -> None:
    """Log the outcome of one tailoring run."""
    if keyword_count == 0:
        _log_warning("No job description keywords matched the vocabulary; resume left in original order")
    _log_success(
        f"Tailored resume for '{job_title or 'unknown role'}' "
        f"({keyword_count} keywords, {elapsed_time:.3f}s)"
    )
