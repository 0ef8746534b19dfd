"""
Action Log

Append-only record of every change made to the task store.
Each entry is one line: [YYYY-MM-DD HH:MM:SS] message
"""

import logging
from pathlib import Path
from datetime import datetime
from typing import Optional, Union


TIMESTAMP_FORMAT = '%Y-%m-%d %H:%M:%S'


def current_timestamp(now: Optional[datetime] = None) -> str:
    """Local time formatted as YYYY-MM-DD HH:MM:SS"""
    return (now or datetime.now()).strftime(TIMESTAMP_FORMAT)


class ActionLog:
    """Best-effort action log; write failures never reach the caller"""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path).expanduser()
        self.logger = logging.getLogger("TodoApp.ActionLog")

    def record(self, message: str) -> bool:
        """
        Append one entry to the log file

        The file is opened and closed on every call.

        Returns:
            True if the entry was written, False otherwise
        """
        line = f"[{current_timestamp()}] {message}\n"

        try:
            with open(self.path, 'a', encoding='utf-8', errors='backslashreplace') as f:
                f.write(line)
        except OSError as e:
            self.logger.debug(f"Could not write action log {self.path}: {e}")
            return False

        return True
