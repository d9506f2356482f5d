"""
Templating context logger.

Messages from résumé parsing carry a [parse] prefix. Templating modules import
their log functions from here rather than calling loguru directly.
"""

from pathlib import Path
from typing import Optional, Sequence

from loguru import logger

from tailor.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[parse]"


def setup_templating_logger(log_dir: Path, extra_provenance: Optional[dict] = None) -> Path:
    """Configure a parsing session logging to log_dir/parse.log."""
    return _setup_logger(context_name="parse", log_dir=log_dir, extra_provenance=extra_provenance)


def _log_error(message: str) -> None:
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_parse_summary(resume, section_kinds: Sequence[str]) -> None:
    """
    Log what the parser recovered from one résumé.

    Args:
        resume: StructuredResume just built
        section_kinds: Canonical section kinds in document order
    """
    _log_debug(f"Sections: {', '.join(section_kinds)}")
    _log_debug(
        f"  {len(resume.experience)} experience, {len(resume.education)} education, "
        f"{len(resume.projects)} projects"
    )
    if not resume.name:
        _log_warning("No candidate name detected in the opening lines")
    if not resume.contact.present():
        _log_debug("  No contact details found")
