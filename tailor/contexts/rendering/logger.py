"""
Rendering context logger.

Provides logging for the rendering context with an automatic [render] prefix.
The formatter itself stays silent; callers that render to disk or stdout use
log_render_summary.
"""

from pathlib import Path
from typing import Optional

from loguru import logger

from tailor.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[render]"


def setup_rendering_logger(log_dir: Path, extra_provenance: Optional[dict] = None) -> Path:
    """
    Setup logger for the rendering context.

    Returns:
        Path to log file
    """
    return _setup_logger(context_name="render", log_dir=log_dir, extra_provenance=extra_provenance)


def _log_info(message: str) -> None:
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def log_render_summary(resume_name: str, rendered: str) -> None:
    """
    Log the size of a rendered résumé.

    Args:
        resume_name: Candidate name or file stem
        rendered: Output of format_resume()
    """
    if not rendered:
        _log_warning(f"{resume_name}: record is empty, nothing rendered")
        return
    lines = rendered.split("\n")
    _log_info(f"Rendered {resume_name}: {len(lines)} lines, widest {max(map(len, lines))} chars")
