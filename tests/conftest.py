"""
Shared fixtures for TodoApp tests
"""

import pytest

from todo_app import TodoApp


@pytest.fixture()
def log_path(tmp_path):
    return tmp_path / "todo_log.txt"


@pytest.fixture()
def app(log_path):
    """TodoApp with default config and an action log in tmp_path"""
    return TodoApp(log_file=str(log_path))


@pytest.fixture()
def write_config(tmp_path):
    """Write a YAML config file and return its path"""
    def _write(text: str):
        path = tmp_path / "config.yaml"
        path.write_text(text)
        return path
    return _write
