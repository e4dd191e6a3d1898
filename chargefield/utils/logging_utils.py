"""
Logging setup for scripts and the interactive editor.

Library modules only create ``logging.getLogger(__name__)`` loggers; this
helper attaches handlers from the ``logging`` configuration section.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional


LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(config: Optional[Dict[str, Any]] = None) -> logging.Logger:
    """
    Configure root logging from a ``logging`` config section.

    Args:
        config: Section with optional ``level`` (e.g. 'INFO') and
            ``log_file`` (path, or None for console only)

    Returns:
        The ``chargefield`` package logger

    Raises:
        ValueError: If the level name is unknown
    """
    config = config or {}
    level_name = str(config.get('level', 'INFO')).upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        raise ValueError(f"Unknown logging level: {level_name}")

    handlers = [logging.StreamHandler()]
    log_file = config.get('log_file')
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding='utf-8'))

    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers, force=True)
    return logging.getLogger('chargefield')
