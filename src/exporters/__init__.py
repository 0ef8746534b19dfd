"""
Exporters writing the task list to flat files
"""

from .base import Exporter
from .text_export import TextExporter
from .csv_export import CSVExporter
from .json_export import JSONExporter

__all__ = ['Exporter', 'TextExporter', 'CSVExporter', 'JSONExporter']
