"""
TodoApp

Single-user command-line task tracker that:
1. Keeps an ordered collection of tasks with sequential IDs
2. Marks tasks complete and clears completed ones
3. Filters tasks by urgency or status
4. Sorts tasks by urgency, oldest first within a tier
5. Exports tasks to plain text, CSV or JSON
6. Records every change in an append-only action log
"""

import yaml
import logging
import threading
from enum import Enum
from pathlib import Path
from typing import Dict, List, Any, Optional, Union
from datetime import datetime
from dataclasses import dataclass

from action_log import ActionLog, TIMESTAMP_FORMAT


DEFAULT_CONFIG: Dict[str, Any] = {
    'log_file': 'todo_log.txt',
    'log_level': 'WARNING',
    'export': {
        'directory': '.',
        'default_filename': 'todo_export',
        # Off by default: descriptions are written verbatim, so embedded
        # quotes can break CSV/JSON output. Set true for escaped output.
        'escape_fields': False,
    },
}


class Urgency(Enum):
    """Task urgency tier, ordered LOW < MEDIUM < HIGH < CRITICAL"""
    LOW = 1
    MEDIUM = 2
    HIGH = 3
    CRITICAL = 4

    @classmethod
    def lookup(cls, value: Any) -> Optional['Urgency']:
        """
        Resolve a name, digit or int to an Urgency

        Returns:
            Matching Urgency, or None if the value is not recognized
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, bool):
            return None
        if isinstance(value, int):
            value = str(value)
        if not isinstance(value, str):
            return None
        return _URGENCY_ALIASES.get(value.strip().upper())

    @classmethod
    def parse(cls, value: Any) -> 'Urgency':
        """Like lookup(), but unrecognized input falls back to MEDIUM"""
        urgency = cls.lookup(value)
        return urgency if urgency is not None else cls.MEDIUM

    def __str__(self) -> str:
        return self.name


# name -> Urgency and digit -> Urgency
_URGENCY_ALIASES: Dict[str, Urgency] = {}
for _urgency in Urgency:
    _URGENCY_ALIASES[_urgency.name] = _urgency
    _URGENCY_ALIASES[str(_urgency.value)] = _urgency


@dataclass
class Task:
    """A single tracked task"""
    id: int
    description: str
    urgency: Urgency
    created_at: datetime = None
    completed: bool = False

    def __post_init__(self):
        if self.created_at is None:
            self.created_at = datetime.now()

    @property
    def status(self) -> str:
        return 'COMPLETED' if self.completed else 'PENDING'

    def created_str(self) -> str:
        """Creation time as YYYY-MM-DD HH:MM:SS (local time)"""
        return self.created_at.strftime(TIMESTAMP_FORMAT)


class TodoApp:
    """
    In-memory task store with an action log

    IDs are assigned from a counter owned by the instance. The counter only
    grows, so IDs are never reused after a removal.
    """

    def __init__(self, config_path: Optional[str] = None, log_file: Optional[str] = None):
        """
        Initialize TodoApp with configuration

        Args:
            config_path: YAML config file (default: config/config.yaml under the project root)
            log_file: Action log path, overrides the config's log_file
        """
        self.logger = self._setup_logging()
        self.project_root = self._detect_project_root()
        self.config = self._load_config(config_path)
        self.logger.setLevel(self._resolve_level(self.config.get('log_level')))

        self._tasks: List[Task] = []
        self._next_id = 1
        self._lock = threading.RLock()

        self.action_log = ActionLog(log_file or self.config['log_file'])

        from exporters import TextExporter, CSVExporter, JSONExporter

        export_config = self.config['export']
        self._exporters = {
            'text': TextExporter(export_config),
            'csv': CSVExporter(export_config),
            'json': JSONExporter(export_config),
        }

        self.action_log.record("TodoApp initialized")
        self.logger.info("✅ TodoApp initialized successfully")

    def _setup_logging(self) -> logging.Logger:
        """Setup logging for the app"""
        logger = logging.getLogger("TodoApp")

        if not logger.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter(
                '%(asctime)s - TodoApp - %(levelname)s - %(message)s'
            )
            handler.setFormatter(formatter)
            logger.addHandler(handler)
            logger.setLevel(logging.INFO)

        return logger

    @staticmethod
    def _resolve_level(level: Any) -> int:
        if isinstance(level, int):
            return level
        return getattr(logging, str(level or 'WARNING').upper(), logging.WARNING)

    def _detect_project_root(self) -> Path:
        """Detect project root directory"""
        current_path = Path(__file__).resolve()

        # Look for project markers
        for parent in current_path.parents:
            if (parent / 'pyproject.toml').exists():
                return parent

        # Fallback
        return Path.cwd()

    def _load_config(self, config_path: Optional[str] = None) -> Dict[str, Any]:
        """
        Load configuration from YAML file, merged over DEFAULT_CONFIG

        An explicit config_path must exist. When no path is given and the
        default config/config.yaml is absent, built-in defaults are used.
        """
        if config_path is None:
            config_path = self.project_root / 'config' / 'config.yaml'
            if not config_path.exists():
                self.logger.debug(f"No config at {config_path}, using defaults")
                return _merge_config(DEFAULT_CONFIG, {})
        else:
            config_path = Path(config_path)
            if not config_path.exists():
                raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_path, 'r') as f:
            loaded = yaml.safe_load(f) or {}

        if not isinstance(loaded, dict):
            raise ValueError(f"Config file must contain a mapping: {config_path}")

        config = _merge_config(DEFAULT_CONFIG, loaded)

        if not isinstance(config['export'], dict):
            raise ValueError(f"'export' must be a mapping: {config_path}")
        if not isinstance(config['export']['escape_fields'], bool):
            raise ValueError(
                f"export.escape_fields must be true or false, "
                f"got {config['export']['escape_fields']!r}: {config_path}"
            )

        return config

    # ==================== Core Methods ====================

    def add(self, description: str, urgency: Union[Urgency, str, int]) -> int:
        """
        Add a new task

        Args:
            description: Free-text description, stored verbatim
            urgency: Urgency, name or digit (unrecognized values become MEDIUM)

        Returns:
            ID assigned to the new task
        """
        urgency = Urgency.parse(urgency)

        with self._lock:
            task = Task(id=self._next_id, description=description, urgency=urgency)
            self._next_id += 1
            self._tasks.append(task)
            self.action_log.record(
                f'Added task [ID: {task.id}] "{description}" [{urgency}]'
            )

        self.logger.info(f"Added task {task.id} [{urgency}]")
        return task.id

    def remove(self, task_id: int) -> bool:
        """
        Remove the task with the given ID

        Returns:
            True if a task was removed, False if no task has that ID
        """
        with self._lock:
            for index, task in enumerate(self._tasks):
                if task.id == task_id:
                    del self._tasks[index]
                    self.action_log.record(
                        f'Removed task [ID: {task_id}] "{task.description}"'
                    )
                    self.logger.info(f"Removed task {task_id}")
                    return True

        self.logger.debug(f"Task not found: {task_id}")
        return False

    def complete(self, task_id: int) -> bool:
        """
        Mark the task with the given ID complete

        Completion is one-way; completing an already completed task is a no-op
        that still reports success.

        Returns:
            True if the task exists, False otherwise
        """
        with self._lock:
            task = self.find_by_id(task_id)
            if task is None:
                self.logger.debug(f"Task not found: {task_id}")
                return False

            task.completed = True
            self.action_log.record(
                f'Completed task [ID: {task_id}] "{task.description}"'
            )

        self.logger.info(f"Completed task {task_id}")
        return True

    def clear_completed(self) -> int:
        """
        Remove every completed task

        Returns:
            Number of tasks removed
        """
        with self._lock:
            before = len(self._tasks)
            self._tasks = [t for t in self._tasks if not t.completed]
            removed = before - len(self._tasks)

            if removed > 0:
                self.action_log.record(f"Cleared {removed} completed tasks")

        self.logger.info(f"Cleared {removed} completed tasks")
        return removed

    def find_by_id(self, task_id: int) -> Optional[Task]:
        for task in self._tasks:
            if task.id == task_id:
                return task
        return None

    # ==================== Views ====================

    def all_tasks(self) -> List[Task]:
        """All tasks in insertion order"""
        return list(self._tasks)

    def sorted_by_urgency(self) -> List[Task]:
        """
        Tasks ordered by urgency (CRITICAL first), oldest first within a tier

        The stored order is left untouched. Python's sort is stable, so tasks
        with equal urgency and timestamp keep insertion order.
        """
        return sorted(self._tasks, key=lambda t: (-t.urgency.value, t.created_at))

    def filter_by_urgency(self, urgency: Union[Urgency, str, int]) -> List[Task]:
        urgency = Urgency.parse(urgency)
        return [t for t in self._tasks if t.urgency == urgency]

    def completed_tasks(self) -> List[Task]:
        return [t for t in self._tasks if t.completed]

    def pending_tasks(self) -> List[Task]:
        return [t for t in self._tasks if not t.completed]

    def counts(self) -> Dict[str, int]:
        """Total, pending and completed task counts"""
        completed = len(self.completed_tasks())
        return {
            'total': len(self._tasks),
            'pending': len(self._tasks) - completed,
            'completed': completed,
        }

    def pending_by_urgency(self) -> Dict[Urgency, int]:
        """Pending task count per urgency, every level present"""
        breakdown = {urgency: 0 for urgency in Urgency}
        for task in self.pending_tasks():
            breakdown[task.urgency] += 1
        return breakdown

    # ==================== Export ====================

    def export(self, fmt: str, filename: str) -> bool:
        """
        Export all tasks in the given format

        Args:
            fmt: 'text' (or 'txt'), 'csv' or 'json'
            filename: Destination file, overwritten if present

        Returns:
            True on success, False if the file could not be written
        """
        key = 'text' if fmt == 'txt' else fmt
        if key not in self._exporters:
            raise ValueError(f"Unknown export format: {fmt}")

        labels = {'text': 'file', 'csv': 'CSV', 'json': 'JSON'}

        with self._lock:
            success = self._exporters[key].export(self.all_tasks(), filename)
            if success:
                self.action_log.record(f"Exported tasks to {labels[key]}: {filename}")

        return success

    def export_to_text(self, filename: str) -> bool:
        return self.export('text', filename)

    def export_to_csv(self, filename: str) -> bool:
        return self.export('csv', filename)

    def export_to_json(self, filename: str) -> bool:
        return self.export('json', filename)

    def export_path(self, filename: str, extension: str) -> Path:
        """Resolve a bare filename into the configured export directory"""
        directory = Path(self.config['export']['directory']).expanduser()
        return directory / f"{filename}.{extension}"

    def close(self) -> None:
        """Record shutdown in the action log"""
        self.action_log.record("TodoApp terminated")
        self.logger.info("TodoApp closed")


def _merge_config(defaults: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Merge overrides over defaults, one level deep for nested mappings"""
    merged = {}
    for key, value in defaults.items():
        merged[key] = dict(value) if isinstance(value, dict) else value

    for key, value in overrides.items():
        # null in YAML keeps the default
        if value is None:
            continue
        if isinstance(merged.get(key), dict) and isinstance(value, dict):
            merged[key].update({k: v for k, v in value.items() if v is not None})
        else:
            merged[key] = value

    return merged


# ==================== CLI Interface ====================

def main(argv: Optional[List[str]] = None):
    """CLI entry point"""
    import argparse

    parser = argparse.ArgumentParser(
        description="TodoApp: interactive task tracker"
    )
    parser.add_argument(
        '--config',
        help='Path to config file'
    )
    parser.add_argument(
        '--log-file',
        help='Path to the action log (default from config: todo_log.txt)'
    )

    args = parser.parse_args(argv)

    try:
        app = TodoApp(config_path=args.config, log_file=args.log_file)
    except Exception as e:
        print(f"❌ Failed to initialize TodoApp: {e}")
        return 1

    from menu import TodoMenu

    print("=== Welcome to Interactive TODO App ===")
    print(f"Your tasks will be logged to '{app.action_log.path}'")

    TodoMenu(app).run()
    return 0

