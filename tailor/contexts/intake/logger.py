"""
Intake context logger.

Job description analysis logs under an [intake] prefix.
"""

from pathlib import Path
from typing import Optional

from loguru import logger

from tailor.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[intake]"


def setup_intake_logger(log_dir: Path, extra_provenance: Optional[dict] = None) -> Path:
    """
    Setup logger for the intake context.

    Args:
        log_dir: Directory for this logging session
        extra_provenance: Additional key-value pairs for the provenance header

    Returns:
        Path to log file
    """
    return _setup_logger(context_name="intake", log_dir=log_dir, extra_provenance=extra_provenance)


def _log_info(message: str) -> None:
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_keyword_profile(analysis, top_n: int = 5) -> None:
    """
    Log the detected title and the heaviest keywords of each non-empty category.

    Args:
        analysis: JDAnalysis returned by the analyzer
        top_n: Keywords listed per category; the rest are counted
    """
    _log_info(f"Job title: {analysis.job_title or '(not detected)'}")
    for category, keywords in analysis.keywords_by_category.items():
        if not keywords:
            continue
        shown = ", ".join(f"{kw.term} ({kw.weight:g})" for kw in keywords[:top_n])
        extra = f" +{len(keywords) - top_n} more" if len(keywords) > top_n else ""
        _log_debug(f"  {category}: {shown}{extra}")
