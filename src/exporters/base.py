"""
Shared file handling for exporters

Subclasses only build the document text; opening, writing and failure
reporting happen here so every format behaves the same way on I/O errors.
"""

import logging
from pathlib import Path
from typing import List, Dict, Any, Optional, Union

from action_log import current_timestamp


class Exporter:
    """Base class for a single export format"""

    name = 'base'

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize exporter

        Args:
            config: The 'export' section of the app config
        """
        self.config = config or {}
        self.logger = logging.getLogger("TodoApp.Export")
        self.escape_fields = self.config.get('escape_fields') is True

    def render(self, tasks: List[Any], exported_at: str) -> str:
        raise NotImplementedError

    def export(self, tasks: List[Any], path: Union[str, Path]) -> bool:
        """
        Write tasks to path, replacing any existing file

        Args:
            tasks: Tasks in the order they should appear
            path: Destination file

        Returns:
            True on success, False if the file could not be opened or written
        """
        document = self.render(tasks, current_timestamp())

        try:
            with open(path, 'w', encoding='utf-8', errors='backslashreplace', newline='') as f:
                f.write(document)
        except OSError as e:
            self.logger.error(f"Could not write {self.name} export to {path}: {e}")
            return False

        self.logger.info(f"Exported {len(tasks)} tasks to {path} ({self.name})")
        return True
