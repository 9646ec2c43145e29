# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.03.02
# License: (c) HRDAG, 2026, GPL-2 or newer
#
# ------
# src/themesync/system/logging_setup.py

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

from themesync.config.manager import SyncConfig, load_config


def setup_logging(config: Optional[SyncConfig] = None, debug: bool = False) -> None:
    """Setup loguru logging for the entire application.

    Configures:
    - Console output: WARNING+ only (DEBUG+ with debug=True)
    - File output: DEBUG+ if local_log is configured
    """
    logger.remove()

    logger.add(
        sys.stderr,
        level="DEBUG" if debug else "WARNING",
        format="<level>{level}</level>: {message}",
        colorize=True
    )

    try:
        if config is None:
            config = load_config()
        if config.local_log:
            log_dir = Path(config.local_log)
            log_dir.mkdir(parents=True, exist_ok=True)
            log_file = log_dir / "themesync.log"

            logger.add(
                log_file,
                level="DEBUG",
                format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} - {message}",
                rotation="10 MB",
                retention="30 days",
                compression="gz"
            )
            logger.debug(f"File logging enabled: {log_file}")

    except Exception as e:
        # Don't fail the entire application if logging setup fails
        logger.warning(f"Failed to setup file logging: {e}")
