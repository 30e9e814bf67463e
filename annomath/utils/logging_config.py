# annomath/utils/logging_config.py

"""
Configures the logging system for annomath based on loaded settings.
Uses Rich for enhanced console logging.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from annomath.config import AnnomathConfig
from annomath.version import __version__

# --- Constants ---
# Map verbosity levels (from CLI flags) to logging levels
VERBOSITY_MAP = {
    0: logging.WARNING,  # Default (normal)
    1: logging.INFO,     # -v (verbose)
    2: logging.DEBUG,    # -vv (debug)
    -1: logging.CRITICAL + 10 # -q (quiet/silent)
}

PACKAGE_LOGGER = "annomath"

# --- Setup Function ---

def setup_logging(config: AnnomathConfig, verbosity: int = 0) -> Optional[Path]:
    """
    Configures the package logger based on the provided configuration and verbosity level.

    Args:
        config: The loaded AnnomathConfig object.
        verbosity: Console verbosity level (0 normal, 1 verbose, 2 debug, -1 quiet).

    Returns:
        The path of the log file, or None if file logging is disabled.
    """
    log_cfg = config.logging
    paths_cfg = config.paths

    console_level = VERBOSITY_MAP.get(verbosity, logging.DEBUG if verbosity > 2 else logging.INFO)

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(logging.DEBUG) # Handlers filter by their own level
    package_logger.handlers.clear() # Allow re-configuration

    # --- Console Handler (Rich) ---
    if console_level <= logging.CRITICAL:
        console_handler = RichHandler(
            level=console_level,
            console=Console(stderr=True), # Keep stdout for command results
            show_time=False,
            show_level=True,
            show_path=False,
            rich_tracebacks=True,
            markup=False, # Annotations may contain square brackets
        )
        console_handler.setFormatter(logging.Formatter("%(message)s"))
        package_logger.addHandler(console_handler)

    # --- File Handler ---
    log_filepath: Optional[Path] = None
    if log_cfg.log_file_enabled:
        try:
            log_dir = paths_cfg.log_directory
            log_dir.mkdir(parents=True, exist_ok=True)
            log_filepath = log_dir / log_cfg.log_filename_template.format(timestamp=datetime.now())

            file_handler = logging.FileHandler(log_filepath, encoding='utf-8')
            file_handler.setLevel(log_cfg.log_level_file)
            file_handler.setFormatter(logging.Formatter(log_cfg.log_format))
            package_logger.addHandler(file_handler)

            file_logger = logging.getLogger(f"{PACKAGE_LOGGER}.init")
            file_logger.info(f"--- annomath v{__version__} Log Start ---")
            file_logger.info(f"File logging level set to: {log_cfg.log_level_file}")
            file_logger.info(f"Console logging level set to: {logging.getLevelName(console_level)}")
            file_logger.debug(f"Full configuration loaded: {config.model_dump()}")
        except (OSError, ValueError, KeyError) as e:
            logging.getLogger(f"{PACKAGE_LOGGER}.error").error(f"Failed to configure file logging: {e}", exc_info=True)
            log_filepath = None

    init_logger = logging.getLogger(f"{PACKAGE_LOGGER}.init")
    init_logger.info(f"annomath v{__version__} initialized.")
    if log_filepath is not None:
        init_logger.info(f"Logging to file: {log_filepath}")
    else:
        init_logger.info("File logging is disabled.")
    return log_filepath
