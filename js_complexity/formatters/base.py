"""
Interface de base pour les formatters de rapports.
"""

from typing import Protocol

from ..results import AnalysisRun


class BaseFormatter(Protocol):
    """
    Interface pour les formatters de rapports d'analyse.

    Tous les formatters doivent implémenter ces méthodes pour générer
    les rapports dans différents formats.
    """

    def format(self, run: AnalysisRun) -> str:
        """
        Formate une analyse complète en chaîne de caractères.

        Args:
            run: Analyse à formater

        Returns:
            Chaîne formatée du rapport
        """
        ...

    def save(self, run: AnalysisRun, output_path: str) -> None:
        """
        Sauvegarde une analyse formatée dans un fichier.

        Args:
            run: Analyse à sauvegarder
            output_path: Chemin du fichier de sortie
        """
        ...
