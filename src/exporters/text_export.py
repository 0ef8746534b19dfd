"""
Plain text export
"""

from typing import List, Any

from .base import Exporter


class TextExporter(Exporter):
    """Human-readable report, one block of fields per task"""

    name = 'text'

    def render(self, tasks: List[Any], exported_at: str) -> str:
        lines = [
            f"TODO APP EXPORT - {exported_at}",
            '=' * 50,
        ]

        for task in tasks:
            lines.append(f"ID: {task.id}")
            lines.append(f"Description: {task.description}")
            lines.append(f"Urgency: {task.urgency.name}")
            lines.append(f"Created: {task.created_str()}")
            lines.append(f"Status: {task.status}")
            lines.append('-' * 30)

        return '\n'.join(lines) + '\n'
