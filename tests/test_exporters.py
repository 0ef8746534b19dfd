"""
Tests for the text, CSV and JSON exporters
"""

import csv
import io
import json
import pytest
from datetime import datetime

from todo_app import Task, Urgency
from exporters import TextExporter, CSVExporter, JSONExporter


EXPORTED_AT = "2026-01-02 03:04:05"


@pytest.fixture()
def tasks():
    created = datetime(2026, 1, 1, 9, 30, 0)
    done = Task(id=1, description="Buy milk", urgency=Urgency.MEDIUM, created_at=created)
    done.completed = True
    return [
        done,
        Task(id=3, description="File taxes", urgency=Urgency.CRITICAL, created_at=created),
    ]


@pytest.fixture()
def quoted_task():
    return [Task(id=1, description='Say "hi"', urgency=Urgency.LOW,
                 created_at=datetime(2026, 1, 1, 9, 30, 0))]


class TestTextExporter:
    """Test suite for plain text export"""

    def test_render(self, tasks):
        text = TextExporter().render(tasks, EXPORTED_AT)
        lines = text.splitlines()

        assert lines[0] == f"TODO APP EXPORT - {EXPORTED_AT}"
        assert lines[1] == "=" * 50
        assert lines[2:8] == [
            "ID: 1",
            "Description: Buy milk",
            "Urgency: MEDIUM",
            "Created: 2026-01-01 09:30:00",
            "Status: COMPLETED",
            "-" * 30,
        ]
        assert lines[12] == "Status: PENDING"
        assert text.endswith("-" * 30 + "\n")

    def test_render_empty(self):
        assert TextExporter().render([], EXPORTED_AT).splitlines() == [
            f"TODO APP EXPORT - {EXPORTED_AT}",
            "=" * 50,
        ]


class TestCSVExporter:
    """Test suite for CSV export"""

    def test_render(self, tasks):
        lines = CSVExporter().render(tasks, EXPORTED_AT).splitlines()
        assert lines == [
            "ID,Description,Urgency,Created,Status",
            '1,"Buy milk",MEDIUM,2026-01-01 09:30:00,COMPLETED',
            '3,"File taxes",CRITICAL,2026-01-01 09:30:00,PENDING',
        ]

    def test_quotes_written_verbatim_by_default(self, quoted_task):
        lines = CSVExporter().render(quoted_task, EXPORTED_AT).splitlines()
        assert lines[1] == '1,"Say "hi"",LOW,2026-01-01 09:30:00,PENDING'

    def test_escape_fields_doubles_quotes(self, quoted_task):
        text = CSVExporter({'escape_fields': True}).render(quoted_task, EXPORTED_AT)
        rows = list(csv.reader(io.StringIO(text)))
        assert rows[1][1] == 'Say "hi"'


class TestJSONExporter:
    """Test suite for JSON export"""

    def test_render_is_valid_json(self, tasks):
        document = json.loads(JSONExporter().render(tasks, EXPORTED_AT))

        assert document['exported_at'] == EXPORTED_AT
        assert document['tasks'][0] == {
            'id': 1,
            'description': 'Buy milk',
            'urgency': 'MEDIUM',
            'created': '2026-01-01 09:30:00',
            'completed': True,
        }
        assert document['tasks'][1]['completed'] is False

    def test_render_layout(self, tasks):
        text = JSONExporter().render(tasks[:1], EXPORTED_AT)
        assert text == (
            '{\n'
            '  "tasks": [\n'
            '    {\n'
            '      "id": 1,\n'
            '      "description": "Buy milk",\n'
            '      "urgency": "MEDIUM",\n'
            '      "created": "2026-01-01 09:30:00",\n'
            '      "completed": true\n'
            '    }\n'
            '  ],\n'
            f'  "exported_at": "{EXPORTED_AT}"\n'
            '}\n'
        )

    def test_escaped_and_verbatim_layouts_match(self, tasks):
        verbatim = JSONExporter().render(tasks, EXPORTED_AT)
        escaped = JSONExporter({'escape_fields': True}).render(tasks, EXPORTED_AT)
        assert verbatim == escaped

    def test_quotes_break_json_by_default(self, quoted_task):
        with pytest.raises(json.JSONDecodeError):
            json.loads(JSONExporter().render(quoted_task, EXPORTED_AT))

    def test_escape_fields_produces_valid_json(self, quoted_task):
        text = JSONExporter({'escape_fields': True}).render(quoted_task, EXPORTED_AT)
        assert json.loads(text)['tasks'][0]['description'] == 'Say "hi"'


class TestExporterFiles:
    """Test suite for file handling shared by all exporters"""

    @pytest.mark.parametrize("exporter_cls", [TextExporter, CSVExporter, JSONExporter])
    def test_export_writes_file(self, exporter_cls, tasks, tmp_path):
        path = tmp_path / "out"
        assert exporter_cls().export(tasks, path) is True
        assert "Buy milk" in path.read_text()

    def test_export_overwrites_existing_file(self, tasks, tmp_path):
        path = tmp_path / "out.csv"
        path.write_text("stale\n" * 10)
        CSVExporter().export(tasks, path)
        assert "stale" not in path.read_text()

    def test_export_to_directory_fails(self, tasks, tmp_path):
        assert TextExporter().export(tasks, tmp_path) is False

    @pytest.mark.parametrize("exporter_cls", [TextExporter, CSVExporter, JSONExporter])
    @pytest.mark.parametrize("escape_fields", [False, True])
    def test_unencodable_description_is_escaped(self, exporter_cls, escape_fields, tmp_path):
        # input() yields lone surrogates for undecodable bytes
        tasks = [Task(id=1, description="bad \udcff byte", urgency=Urgency.LOW)]
        path = tmp_path / "out"

        assert exporter_cls({'escape_fields': escape_fields}).export(tasks, path) is True
        assert "bad \\udcff byte" in path.read_text(encoding='utf-8')

    def test_escape_fields_requires_real_bool(self, quoted_task):
        text = CSVExporter({'escape_fields': 'false'}).render(quoted_task, EXPORTED_AT)
        assert text.splitlines()[1] == '1,"Say "hi"",LOW,2026-01-01 09:30:00,PENDING'
