"""Logger setup: rich console handler plus a debug log file."""

import logging
import os
from pathlib import Path
from typing import List, Optional, Tuple, Union

from rich.console import Console
from rich.logging import RichHandler

from server_setup.ui import console as default_console

LOGGER_NAME = "server_setup"


def _missing_parents(path: Path) -> List[Path]:
    """Directories above ``path`` that do not exist yet, outermost first."""
    missing = []
    for parent in path.parents:
        if parent.exists():
            break
        missing.append(parent)
    return list(reversed(missing))


def setup_logger(
    log_file: Optional[Union[str, Path]],
    verbose: bool = False,
    out: Optional[Console] = None,
    owner: Optional[Tuple[int, int]] = None,
) -> logging.Logger:
    """
    Set up and configure the package logger.

    Args:
        log_file: Debug log destination, or None for console logging only
        verbose: Show DEBUG records on the console instead of WARNING and above
        out: Console for the rich handler (the shared console by default)
        owner: (uid, gid) that directories created for the log file, and the
            file itself, are handed to when running as root for another user

    Returns:
        The configured ``server_setup`` logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False

    # Remove any existing handlers
    for h in logger.handlers[:]:
        logger.removeHandler(h)
        h.close()

    console_handler = RichHandler(
        console=out or default_console, rich_tracebacks=True, show_path=False
    )
    console_handler.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.addHandler(console_handler)

    if log_file is None:
        return logger

    log_file = Path(log_file)
    created = _missing_parents(log_file)
    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
    except OSError as e:
        logger.warning(f"Could not open log file {log_file}: {e}")
        return logger

    file_handler.setLevel(logging.DEBUG)
    formatter = logging.Formatter(
        "[%(asctime)s] [%(levelname)s] %(message)s", "%Y-%m-%d %H:%M:%S"
    )
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    try:
        # Secure the log file
        os.chmod(str(log_file), 0o600)
    except OSError as e:
        logger.warning(f"Could not set permissions on log file {log_file}: {e}")

    if owner is not None:
        try:
            for path in created + [log_file]:
                os.chown(str(path), *owner)
        except OSError as e:
            logger.warning(f"Could not hand {log_file} to uid {owner[0]}: {e}")

    return logger
