"""
Logging setup and build failure tracking.

Library modules log through logging.getLogger(__name__) under the
``cssresolver`` namespace. Entry points call initialize_logging() to attach
a console handler and, optionally, rotating log files.
"""

import logging
import logging.handlers
import os
import sys
import threading
import traceback
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional


APP_NAME = "cssresolver"

DETAILED_FORMAT = '%(asctime)s | %(name)s | %(levelname)s | %(funcName)s:%(lineno)d | %(message)s'
CONSOLE_FORMAT = '%(asctime)s | %(levelname)s | %(message)s'


def _console_handler(logger: logging.Logger) -> Optional[logging.Handler]:
    for handler in logger.handlers:
        if type(handler) is logging.StreamHandler:
            return handler
    return None


def _attach_file(logger: logging.Logger, path: Path, level: int, max_bytes: int, backups: int):
    """Add a rotating file handler unless one already writes to ``path``."""
    target = os.path.abspath(path)
    for handler in logger.handlers:
        if isinstance(handler, logging.FileHandler) and handler.baseFilename == target:
            return
    handler = logging.handlers.RotatingFileHandler(target, maxBytes=max_bytes, backupCount=backups,
                                                   encoding='utf-8')
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(DETAILED_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
    logger.addHandler(handler)


def initialize_logging(log_dir: Optional[str] = None, level: int = logging.INFO,
                       app_name: str = APP_NAME) -> logging.Logger:
    """
    Configure the application logger. Safe to call more than once.

    Args:
        log_dir: Directory for ``<app>.log`` and ``<app>_errors.log``; console only when None
        level: Console logging level

    Returns:
        The configured application logger
    """
    logger = logging.getLogger(app_name)
    logger.setLevel(logging.DEBUG)

    console = _console_handler(logger)
    if console is None:
        console = logging.StreamHandler(sys.stdout)
        console.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt='%H:%M:%S'))
        logger.addHandler(console)
    console.setLevel(level)

    if log_dir:
        directory = Path(log_dir)
        directory.mkdir(parents=True, exist_ok=True)
        _attach_file(logger, directory / f"{app_name}.log", logging.DEBUG, 10*1024*1024, 5)
        _attach_file(logger, directory / f"{app_name}_errors.log", logging.ERROR, 5*1024*1024, 3)

    logger.debug(f"Python {sys.version.split()[0]} on {sys.platform}, cwd {os.getcwd()}")
    return logger


@dataclass
class BuildIssue:
    id: str
    document: str
    message: str
    error_type: str = ''          # Exception class name; empty for warnings
    asset: Optional[str] = None   # File that could not be read or written, when known
    traceback: str = ''


class ErrorTracker:
    """
    Collects per-document failures and warnings during a build.

    Thread-safe; documents built in parallel report into the same tracker.
    """

    def __init__(self, logger: logging.Logger):
        self.logger = logger
        self.errors: List[BuildIssue] = []
        self.warnings: List[BuildIssue] = []
        self._lock = threading.Lock()

    def record_failure(self, document: str, error: BaseException) -> BuildIssue:
        # OSError carries the offending file; only report it when it is an asset
        asset = getattr(error, 'filename', None)
        if asset is not None and os.path.abspath(str(asset)) == os.path.abspath(document):
            asset = None

        with self._lock:
            issue = BuildIssue(
                id=f"ERR_{len(self.errors) + 1:03d}",
                document=document,
                message=str(error),
                error_type=type(error).__name__,
                asset=str(asset) if asset is not None else None,
                traceback=''.join(traceback.format_exception(type(error), error, error.__traceback__)),
            )
            self.errors.append(issue)

        where = f" while handling {issue.asset}" if issue.asset else ""
        self.logger.error(f"[{issue.id}] {document} failed{where}: {issue.error_type}: {issue.message}")
        self.logger.debug(issue.traceback)
        return issue

    def record_warning(self, document: str, message: str) -> BuildIssue:
        with self._lock:
            issue = BuildIssue(id=f"WARN_{len(self.warnings) + 1:03d}", document=document, message=message)
            self.warnings.append(issue)
        self.logger.warning(f"[{issue.id}] {document}: {message}")
        return issue

    def count_by_type(self) -> Dict[str, int]:
        counts: Dict[str, int] = {}
        for issue in self.errors:
            counts[issue.error_type] = counts.get(issue.error_type, 0) + 1
        return counts

    def write_report(self, output_path: str):
        """Write every recorded failure and warning to a plain-text file."""
        lines = [
            "CSS URL RESOLVER BUILD REPORT",
            f"Generated: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}",
            f"Failed documents: {len(self.errors)}",
            f"Warnings: {len(self.warnings)}",
            "",
        ]
        for issue in self.errors:
            lines.append(f"[{issue.id}] {issue.document}")
            lines.append(f"  {issue.error_type}: {issue.message}")
            if issue.asset:
                lines.append(f"  Asset: {issue.asset}")
            lines.extend("  " + line for line in issue.traceback.rstrip().splitlines())
            lines.append("")
        for issue in self.warnings:
            lines.append(f"[{issue.id}] {issue.document}: {issue.message}")

        with open(output_path, 'w', encoding='utf-8') as f:
            f.write("\n".join(lines) + "\n")
        self.logger.info(f"Build report saved to: {output_path}")
