"""
Dispatch des constructions d'un fichier vers le calculateur

Un callback par genre de construction: chaque construction nommable
produit un enregistrement dans l'AnalysisRun fourni.
"""

from typing import Callable, Optional

from .attribution import resolve_class_name, resolve_function_name, resolve_method_name
from .cyclomatic import CyclomaticCalculator
from .results import AnalysisRun
from .syntax import TRANSPARENT_KINDS, NodeKind, SyntaxNode, walk_with_parents


class ComplexityVisitor:
    """
    Enregistre la complexité des fonctions et méthodes d'un fichier.

    Attributes:
        run: Analyse en cours, seule destination des écritures
        filepath: Clé du fichier dans run
        calculator: Calculateur de complexité cyclomatique
    """

    def __init__(
        self,
        run: AnalysisRun,
        filepath: str,
        calculator: Optional[CyclomaticCalculator] = None,
    ) -> None:
        self.run = run
        self.filepath = filepath
        self.calculator = calculator or CyclomaticCalculator()
        self._handlers: dict[NodeKind, Callable[[SyntaxNode, Optional[SyntaxNode]], None]] = {
            NodeKind.FUNCTION_DECLARATION: self.function_declaration,
            NodeKind.FUNCTION_EXPRESSION: self.function_expression,
            NodeKind.ARROW_FUNCTION: self.arrow_function,
            NodeKind.CLASS_DECLARATION: self.class_declaration,
            NodeKind.CLASS_EXPRESSION: self.class_expression,
        }

    def visit(self, root: SyntaxNode) -> None:
        """
        Parcourt l'arbre d'un fichier et appelle le callback de chaque construction.

        Les parenthèses sont traversées: dans const f = (() => 1), le
        parent retenu pour la fonction fléchée est le déclarateur.

        Args:
            root: Racine du programme
        """
        for node, parent in walk_with_parents(root, TRANSPARENT_KINDS):
            handler = self._handlers.get(node.kind)
            if handler:
                handler(node, parent)

    def _record_function(self, node: SyntaxNode, parent: Optional[SyntaxNode]) -> None:
        name = resolve_function_name(node, parent)
        if name is None:
            return
        complexity = self.calculator.calculate(node)
        self.run.record_function(self.filepath, name, complexity)

    def function_declaration(self, node: SyntaxNode, parent: Optional[SyntaxNode]) -> None:
        self._record_function(node, parent)

    def function_expression(self, node: SyntaxNode, parent: Optional[SyntaxNode]) -> None:
        self._record_function(node, parent)

    def arrow_function(self, node: SyntaxNode, parent: Optional[SyntaxNode]) -> None:
        self._record_function(node, parent)

    def _record_class(self, node: SyntaxNode, parent: Optional[SyntaxNode]) -> None:
        class_name = resolve_class_name(node, parent)
        if class_name is None:
            return

        # La classe apparaît même sans méthode
        self.run.record_class(self.filepath, class_name)

        for member in node.class_members():
            if member.kind is not NodeKind.METHOD:
                continue
            complexity = self.calculator.calculate(member)
            self.run.record_method(
                self.filepath, class_name, resolve_method_name(member), complexity
            )

    def class_declaration(self, node: SyntaxNode, parent: Optional[SyntaxNode]) -> None:
        self._record_class(node, parent)

    def class_expression(self, node: SyntaxNode, parent: Optional[SyntaxNode]) -> None:
        self._record_class(node, parent)
