"""
Session logging for tailoring runs.

Each CLI run gets a session directory (LOGS_PATH/<command>_<timestamp>) holding
one DEBUG-level log file, while the console shows INFO and above on stderr so
rendered résumés and records written to stdout stay clean. The first lines of
every log file record what was run and with which vocabulary.

Context-specific wrappers live in contexts/{context}/logger.py; library code
never configures sinks itself.
"""

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

from tailor import __version__
from tailor.utils.vocabulary import VOCABULARY_PATH

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {message}"
CONSOLE_FORMAT = "{time:HH:mm:ss} | <level>{level: <7}</level> | <level>{message}</level>"

LEVEL_COLORS = {
    "WARNING": "<yellow>",
    "ERROR": "<red>",
    "CRITICAL": "<bold><red>",
}


def setup_logger(
    context_name: str,
    log_dir: Path,
    extra_provenance: Optional[dict] = None,
    console_level: str = "INFO",
) -> Path:
    """
    Replace loguru's sinks with a session log file and a stderr console sink.

    Args:
        context_name: Log file stem (e.g., "parse", "intake", "target", "render")
        log_dir: Session directory, created if missing
        extra_provenance: Additional key-value pairs for the provenance header
            (input files, options)
        console_level: Minimum level shown on the console

    Returns:
        Path to the session log file

    Example:
        log_file = setup_logger(
            context_name="target",
            log_dir=Path("outs/logs/transform_20251114_123456"),
            extra_provenance={"Job description": "jobs/backend.txt"},
        )
    """
    log_dir.mkdir(exist_ok=True, parents=True)
    log_file = log_dir / f"{context_name}.log"

    logger.remove()
    for level_name, color in LEVEL_COLORS.items():
        logger.level(level_name, color=color)

    logger.add(log_file, format=FILE_FORMAT, level="DEBUG", encoding="utf-8")
    logger.add(sys.stderr, format=CONSOLE_FORMAT, level=console_level, colorize=True)

    log_provenance(extra_provenance)
    return log_file


def log_provenance(extra_context: Optional[dict] = None) -> None:
    """
    Log what produced this session: command line, interpreter, package
    version and the vocabulary file in use, followed by extra_context.
    """
    rule = "=" * 80
    logger.info(rule)
    logger.info(f"Command: {' '.join(sys.argv)}")
    logger.info(f"Working directory: {Path.cwd()}")
    logger.info(f"Python: {sys.version.split()[0]} | resume-tailor {__version__}")
    logger.info(f"Vocabulary: {VOCABULARY_PATH}")

    for key, value in (extra_context or {}).items():
        logger.info(f"{key}: {value}")

    logger.info(rule)
