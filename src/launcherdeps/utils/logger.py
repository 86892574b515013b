"""
Logger utility module for consistent logging across the application
Supports rotating file logs next to the console output
"""
import logging
import sys
import os
from pathlib import Path
from datetime import datetime
from typing import List, Optional
from logging.handlers import RotatingFileHandler

from launcherdeps.utils.paths import get_logs_dir

DETAILED_FORMAT = '%(asctime)s.%(msecs)03d [%(levelname)8s] %(name)s:%(lineno)d - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

LOG_FILE_PREFIX = "launcherdeps_"
MAX_LOG_FILES = 10

# Overrides the level passed to setup_comprehensive_logging, e.g. LAUNCHERDEPS_LOG_LEVEL=DEBUG
LOG_LEVEL_ENV = "LAUNCHERDEPS_LOG_LEVEL"

# Variables that change how Wine/Proton runs inside a prefix
RUNTIME_ENV_PREFIXES = ("WINE", "PROTON", "STEAM_COMPAT", "DXVK", "VKD3D")

SENSITIVE_MARKERS = ('TOKEN', 'PASSWORD', 'SECRET', 'KEY')


def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """Get a logger with consistent configuration

    If the root logger has handlers (from setup_comprehensive_logging),
    just return a logger that propagates to the root logger.
    Otherwise, configure it independently.
    """
    logger = logging.getLogger(name)

    root_logger = logging.getLogger()
    if root_logger.handlers:
        if level is not None:
            logger.setLevel(level)
        else:
            logger.setLevel(logging.NOTSET)  # Inherit from root
        logger.propagate = True
        return logger

    # Library use without setup_comprehensive_logging: console only
    if not logger.handlers:
        if level is None:
            level = logging.INFO
        logger.setLevel(level)

        formatter = logging.Formatter(DETAILED_FORMAT, datefmt=DATE_FORMAT)

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

        logger.propagate = False

    return logger


def get_log_file_path() -> Path:
    """Get a fresh timestamped log file path in the logs directory"""
    logs_dir = get_logs_dir()
    logs_dir.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    return logs_dir / f"{LOG_FILE_PREFIX}{timestamp}.log"


def prune_old_logs(logs_dir: Path, keep: int = MAX_LOG_FILES) -> List[Path]:
    """
    Delete all but the newest `keep` session logs

    Returns:
        The removed log files
    """
    if not logs_dir.exists():
        return []

    logs = sorted(logs_dir.glob(f"{LOG_FILE_PREFIX}*.log*"), key=lambda p: p.stat().st_mtime, reverse=True)
    removed = []
    for old_log in logs[keep:]:
        try:
            old_log.unlink()
            removed.append(old_log)
        except OSError:
            pass  # still open in another session
    return removed


def resolve_log_level(level: int) -> int:
    """Apply the LAUNCHERDEPS_LOG_LEVEL override, ignoring unknown names"""
    override = os.environ.get(LOG_LEVEL_ENV, "").strip().upper()
    if not override:
        return level
    resolved = logging.getLevelName(override)
    return resolved if isinstance(resolved, int) else level


def _is_sensitive(key: str) -> bool:
    return any(marker in key.upper() for marker in SENSITIVE_MARKERS)


def setup_comprehensive_logging(level: int = logging.INFO) -> Path:
    """Setup logging to a rotating file plus the console"""
    level = resolve_log_level(level)
    log_file_path = get_log_file_path()
    removed = prune_old_logs(log_file_path.parent)

    detailed_formatter = logging.Formatter(DETAILED_FORMAT, datefmt=DATE_FORMAT)
    console_formatter = logging.Formatter('[%(levelname)s] %(message)s')

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    # File always gets the detailed format, console stays short
    file_handler = RotatingFileHandler(log_file_path, maxBytes=1024*1024, backupCount=5, mode='w', encoding='utf-8')
    file_handler.setLevel(level)
    file_handler.setFormatter(detailed_formatter)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(console_formatter)

    root_logger.setLevel(level)
    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    logger = logging.getLogger(__name__)
    logger.info("LauncherDeps - Starting")
    logger.debug(f"Log file: {log_file_path}")
    if removed:
        logger.debug(f"Pruned {len(removed)} old log file(s)")
    logger.debug(f"Working directory: {Path.cwd()}")
    logger.debug(f"Python: {sys.executable} ({sys.version.split()[0]})")

    runtime_env = {k: v for k, v in os.environ.items() if k.upper().startswith(RUNTIME_ENV_PREFIXES)}
    if runtime_env:
        logger.info("Wine/Proton environment overrides:")
        for key, value in sorted(runtime_env.items()):
            logger.info(f"  {key}={'<REDACTED>' if _is_sensitive(key) else value}")

    logger.debug("Environment variables:")
    for key, value in sorted(os.environ.items()):
        logger.debug(f"  {key}={'<REDACTED>' if _is_sensitive(key) else value}")

    return log_file_path
