"""
Formatter JSON pour les rapports d'analyse.
"""

import json
from datetime import datetime
from pathlib import Path

from .. import __version__
from ..results import AnalysisRun


METRIC_ID = 'cyclomatic-complexity'


class JSONFormatter:
    """
    Formatter pour générer des rapports au format JSON.

    Supporte deux modes :
    - Compact : pas d'indentation
    - Pretty : indentation pour lisibilité
    """

    def __init__(self, pretty: bool = True, indent: int = 2):
        """
        Initialise le formatter JSON.

        Args:
            pretty: Si True, utilise l'indentation pour un JSON lisible
            indent: Nombre d'espaces pour l'indentation (si pretty=True)
        """
        self.pretty = pretty
        self.indent = indent if pretty else None

    def to_data(self, run: AnalysisRun) -> dict:
        return {
            'metadata': {
                'tool': 'JS Complexity Analyzer',
                'version': __version__,
                'metric': METRIC_ID,
                'generated_at': datetime.now().isoformat(),
            },
            'summary': run.summary(),
            'result': run.to_dict(),
            'errors': [error.to_dict() for error in run.errors],
        }

    def format(self, run: AnalysisRun) -> str:
        """
        Formate une analyse en JSON.

        Args:
            run: Analyse à formater

        Returns:
            Chaîne JSON formatée
        """
        return json.dumps(self.to_data(run), indent=self.indent, ensure_ascii=False)

    def save(self, run: AnalysisRun, output_path: str) -> None:
        """
        Sauvegarde une analyse JSON dans un fichier.

        Args:
            run: Analyse à sauvegarder
            output_path: Chemin du fichier de sortie
        """
        output = Path(output_path)
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(self.format(run), encoding='utf-8')
