"""
Résolution du nom auquel rattacher une complexité calculée

Une construction sans nom résolvable (callback inline, classe anonyme)
retourne None et n'est pas enregistrée.
"""

from typing import Optional

from .syntax import NodeKind, SyntaxNode


CONSTRUCTOR_NAME = '_constructor'
ANONYMOUS_METHOD_NAME = 'anonymous'


def _assigned_name(parent: Optional[SyntaxNode]) -> Optional[str]:
    """Identifiant du déclarateur de variable parent immédiat, s'il existe"""
    if parent is None or parent.kind is not NodeKind.VARIABLE_DECLARATOR:
        return None
    return parent.identifier


def resolve_function_name(node: SyntaxNode, parent: Optional[SyntaxNode]) -> Optional[str]:
    """
    Nom d'une fonction déclarée, d'une expression de fonction ou d'une fonction fléchée.

    Args:
        node: Nœud de la fonction
        parent: Parent syntaxique immédiat

    Returns:
        Nom de la fonction, ou None si elle n'est pas attribuable
    """
    if node.kind is NodeKind.FUNCTION_DECLARATION:
        return node.identifier
    if node.kind in (NodeKind.FUNCTION_EXPRESSION, NodeKind.ARROW_FUNCTION):
        return _assigned_name(parent)
    return None


def resolve_method_name(node: SyntaxNode) -> str:
    """Nom d'une méthode de classe (toujours attribuable)"""
    if node.is_constructor:
        return CONSTRUCTOR_NAME
    return node.method_name or ANONYMOUS_METHOD_NAME


def resolve_class_name(node: SyntaxNode, parent: Optional[SyntaxNode]) -> Optional[str]:
    """
    Nom d'une classe déclarée ou d'une expression de classe assignée.

    Une expression de classe porte parfois son propre nom (const A = class B {}):
    c'est la variable qui est retenue, comme pour les expressions de fonction.
    """
    if node.kind is NodeKind.CLASS_DECLARATION:
        return node.identifier
    if node.kind is NodeKind.CLASS_EXPRESSION:
        return _assigned_name(parent)
    return None
