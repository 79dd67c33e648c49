"""
Calculateur de complexité cyclomatique (McCabe)
M = E - N + 2P où:
- E = nombre d'arêtes dans le graphe de flot de contrôle
- N = nombre de nœuds
- P = nombre de composants connexes (généralement 1 pour une fonction)

En pratique, on compte: 1 + nombre de points de décision
"""

from collections.abc import Iterator
from enum import Enum
from typing import Any

from .syntax import FUNCTION_KINDS, NodeKind, SyntaxNode, iter_children


# Nœuds qui créent toujours un branchement (+1 chacun)
BRANCHING_KINDS = frozenset({
    NodeKind.IF,           # if
    NodeKind.CONDITIONAL,  # opérateur ternaire ?:
    NodeKind.FOR,          # for (;;)
    NodeKind.FOR_IN,       # for...in
    NodeKind.FOR_OF,       # for...of
    NodeKind.WHILE,        # while
    NodeKind.DO_WHILE,     # do...while
    NodeKind.CATCH,        # catch
})

# Seuls les opérateurs de court-circuit comptent (pas ??, ni & ou |)
SHORT_CIRCUIT_OPERATORS = {'&&', '||'}

LOOP_KINDS = {NodeKind.FOR, NodeKind.FOR_IN, NodeKind.FOR_OF, NodeKind.WHILE, NodeKind.DO_WHILE}


class NestedPolicy(Enum):
    """
    Traitement des fonctions imbriquées dans le corps mesuré.

    ISOLATED: le parcours s'arrête aux frontières de fonction, chaque point
    de décision est attribué à une seule construction.
    INCLUSIVE: le sous-arbre entier est compté, les corps imbriqués sont
    donc comptés une seconde fois dans la fonction englobante.
    """

    ISOLATED = "isolated"
    INCLUSIVE = "inclusive"


def is_decision_point(node: SyntaxNode) -> bool:
    """
    Indique si un nœud ajoute un chemin d'exécution.

    Aucun parcours n'est effectué: seul le nœud lui-même est examiné.
    """
    kind = node.kind
    if kind in BRANCHING_KINDS:
        return True
    if kind is NodeKind.SWITCH_CASE:
        # default n'a pas de test
        return node.has_test
    if kind is NodeKind.LOGICAL:
        return node.operator in SHORT_CIRCUIT_OPERATORS
    return False


def iter_subtree(root: SyntaxNode, stop_at_functions: bool = True) -> Iterator[SyntaxNode]:
    """
    Parcourt le sous-arbre avec une pile explicite (pas de récursion).

    Args:
        root: Nœud de départ, toujours visité
        stop_at_functions: Ne pas descendre dans les fonctions imbriquées

    Yields:
        Chaque nœud atteint
    """
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        for child in iter_children(node):
            if stop_at_functions and child.kind in FUNCTION_KINDS:
                continue
            stack.append(child)


def count_decision_points(root: SyntaxNode, stop_at_functions: bool = True) -> int:
    """Nombre de points de décision dans le sous-arbre de root"""
    return sum(1 for node in iter_subtree(root, stop_at_functions) if is_decision_point(node))


class CyclomaticCalculator:
    """
    Calcule la complexité cyclomatique selon McCabe.

    La complexité cyclomatique mesure le nombre de chemins linéairement
    indépendants à travers le code source.
    """

    def __init__(self, policy: NestedPolicy = NestedPolicy.ISOLATED) -> None:
        self.policy = policy

    @property
    def stop_at_functions(self) -> bool:
        return self.policy is NestedPolicy.ISOLATED

    def calculate(self, node: SyntaxNode) -> int:
        """
        Calcule la complexité cyclomatique d'une construction.

        Args:
            node: Fonction, fonction fléchée ou méthode à mesurer

        Returns:
            Complexité cyclomatique (minimum 1)
        """
        return 1 + count_decision_points(node.function_node(), self.stop_at_functions)

    def get_details(self, node: SyntaxNode) -> dict[str, Any]:
        """
        Retourne le détail des contributeurs à la complexité.

        Args:
            node: Construction à analyser

        Returns:
            Dictionnaire avec le détail par type de structure
        """
        details = {
            'if_count': 0,
            'ternary_count': 0,
            'loop_count': 0,
            'case_count': 0,
            'catch_count': 0,
            'logical_and_count': 0,
            'logical_or_count': 0,
        }

        for child in iter_subtree(node.function_node(), self.stop_at_functions):
            if not is_decision_point(child):
                continue
            if child.kind is NodeKind.IF:
                details['if_count'] += 1
            elif child.kind is NodeKind.CONDITIONAL:
                details['ternary_count'] += 1
            elif child.kind in LOOP_KINDS:
                details['loop_count'] += 1
            elif child.kind is NodeKind.SWITCH_CASE:
                details['case_count'] += 1
            elif child.kind is NodeKind.CATCH:
                details['catch_count'] += 1
            elif child.operator == '&&':
                details['logical_and_count'] += 1
            else:
                details['logical_or_count'] += 1

        details['total'] = 1 + sum(details.values())
        return details


def calculate_cyclomatic(node: SyntaxNode, policy: NestedPolicy = NestedPolicy.ISOLATED) -> int:
    """
    Fonction utilitaire pour calculer la complexité cyclomatique.

    Args:
        node: Construction à analyser
        policy: Traitement des fonctions imbriquées

    Returns:
        Complexité cyclomatique
    """
    return CyclomaticCalculator(policy).calculate(node)
