"""
CSV export

Columns: ID,Description,Urgency,Created,Status

The description is always wrapped in double quotes. Embedded quotes are
left as-is unless escape_fields is enabled, in which case they are doubled.
"""

from typing import List, Any

from .base import Exporter


HEADER = 'ID,Description,Urgency,Created,Status'


class CSVExporter(Exporter):
    """One row per task"""

    name = 'csv'

    def _quote(self, value: str) -> str:
        if self.escape_fields:
            value = value.replace('"', '""')
        return f'"{value}"'

    def render(self, tasks: List[Any], exported_at: str) -> str:
        rows = [HEADER]

        for task in tasks:
            rows.append(','.join([
                str(task.id),
                self._quote(task.description),
                task.urgency.name,
                task.created_str(),
                task.status,
            ]))

        return '\n'.join(rows) + '\n'
