"""
Formatters pour les rapports d'analyse de complexité.

Ce module fournit différents formats de sortie pour une analyse :
- JSON (simple et pretty)
- CSV (une ligne par fonction ou méthode)
"""

from .base import BaseFormatter
from .csv_formatter import CSVFormatter
from .json_formatter import JSONFormatter

__all__ = [
    'BaseFormatter',
    'CSVFormatter',
    'JSONFormatter',
]
