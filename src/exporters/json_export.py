"""
JSON export

Document shape:
    {"tasks": [{"id", "description", "urgency", "created", "completed"}],
     "exported_at": "YYYY-MM-DD HH:MM:SS"}

With escape_fields off the document is assembled by hand and the description
is inserted verbatim; quotes or control characters in it produce invalid
JSON. With escape_fields on, json.dumps builds the same layout with proper
escaping.
"""

import json
from typing import List, Dict, Any

from .base import Exporter


class JSONExporter(Exporter):
    """Tasks array plus export timestamp"""

    name = 'json'

    def _task_dict(self, task: Any) -> Dict[str, Any]:
        return {
            'id': task.id,
            'description': task.description,
            'urgency': task.urgency.name,
            'created': task.created_str(),
            'completed': task.completed,
        }

    def render(self, tasks: List[Any], exported_at: str) -> str:
        if self.escape_fields:
            document = {
                'tasks': [self._task_dict(task) for task in tasks],
                'exported_at': exported_at,
            }
            return json.dumps(document, indent=2, ensure_ascii=False) + '\n'

        parts = ['{\n  "tasks": [\n']
        for i, task in enumerate(tasks):
            parts.append('    {\n')
            parts.append(f'      "id": {task.id},\n')
            parts.append(f'      "description": "{task.description}",\n')
            parts.append(f'      "urgency": "{task.urgency.name}",\n')
            parts.append(f'      "created": "{task.created_str()}",\n')
            parts.append(f'      "completed": {"true" if task.completed else "false"}\n')
            parts.append('    }')
            if i < len(tasks) - 1:
                parts.append(',')
            parts.append('\n')
        parts.append('  ],\n')
        parts.append(f'  "exported_at": "{exported_at}"\n')
        parts.append('}\n')

        return ''.join(parts)
