"""
JS Complexity Analyzer
Complexité cyclomatique (McCabe) des fonctions et méthodes JavaScript
"""

__version__ = "0.1.0"

from .analyzer import JSAnalyzer
from .cyclomatic import CyclomaticCalculator, NestedPolicy, count_decision_points, is_decision_point
from .estree import EstreeNode, load_estree
from .parser import JSParser, TreeSitterNode
from .results import AnalysisRun, ClassRecord, FileResult, FunctionRecord, create_run
from .syntax import NodeKind, SyntaxNode
from .visitors import ComplexityVisitor

__all__ = [
    "JSAnalyzer",
    "JSParser",
    "TreeSitterNode",
    "EstreeNode",
    "load_estree",
    "NodeKind",
    "SyntaxNode",
    "CyclomaticCalculator",
    "NestedPolicy",
    "count_decision_points",
    "is_decision_point",
    "ComplexityVisitor",
    "AnalysisRun",
    "FileResult",
    "FunctionRecord",
    "ClassRecord",
    "create_run",
]
