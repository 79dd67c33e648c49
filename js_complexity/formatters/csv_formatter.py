"""
Formatter CSV pour les rapports d'analyse.
"""

import csv
import io
from collections.abc import Iterator
from pathlib import Path

from ..results import AnalysisRun


HEADER = ['file', 'kind', 'class', 'name', 'complexity']


class CSVFormatter:
    """Une ligne par fonction ou méthode, classes vides comprises"""

    def rows(self, run: AnalysisRun) -> Iterator[list[str]]:
        """
        Génère les lignes CSV pour export.

        Yields:
            Lignes CSV, la première étant l'en-tête
        """
        yield HEADER

        for filepath, result in run.files.items():
            for name, record in result.functions.items():
                yield [filepath, 'function', '', name, str(record.complexity)]
            for class_name, record in result.classes.items():
                if not record.methods:
                    yield [filepath, 'class', class_name, '', '']
                for method, value in record.methods.items():
                    yield [filepath, 'method', class_name, method, str(value)]

    def format(self, run: AnalysisRun) -> str:
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator='\n')
        writer.writerows(self.rows(run))
        return buffer.getvalue()

    def save(self, run: AnalysisRun, output_path: str) -> None:
        output = Path(output_path)
        output.parent.mkdir(parents=True, exist_ok=True)
        with open(output, 'w', newline='', encoding='utf-8') as f:
            writer = csv.writer(f)
            writer.writerows(self.rows(run))
