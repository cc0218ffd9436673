"""
Custom logging handlers for Tubely
"""

import logging
from pathlib import Path

DEFAULT_LOG_DIR = 'logs'
DEFAULT_LOG_FILE = 'tubely.log'


def resolve_log_path(filename, log_dir=None):
    """Resolve a relative log filename against ``log_dir``"""
    path = Path(filename)
    if not path.is_absolute():
        path = Path(log_dir or DEFAULT_LOG_DIR) / path
    return path


class LogDirFileHandler(logging.FileHandler):
    """
    File handler that writes under the configured log directory.

    ``LOGGING`` passes ``LOG_DIR`` in as ``log_dir`` so deployments only need
    to point one setting at a writable volume. The directory is created when
    the handler is built.
    """

    def __init__(self, filename=DEFAULT_LOG_FILE, log_dir=None, mode='a', encoding=None,
                 delay=False, errors=None):
        path = resolve_log_path(filename, log_dir)
        path.parent.mkdir(parents=True, exist_ok=True)
        super().__init__(path, mode, encoding, delay, errors)
