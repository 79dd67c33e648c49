"""
Modèle de nœuds syntaxiques indépendant du parseur

Chaque fournisseur d'arbre (tree-sitter, ESTree/Babel) présente ses nœuds
via un adaptateur SyntaxNode dont le type est ramené à un NodeKind fermé.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterator
from enum import Enum
from typing import Any, Optional


class NodeKind(Enum):
    """Genres de nœuds reconnus par le calculateur"""

    PROGRAM = "program"

    # Points de décision
    IF = "if"
    CONDITIONAL = "conditional"
    FOR = "for"
    FOR_IN = "for_in"
    FOR_OF = "for_of"
    WHILE = "while"
    DO_WHILE = "do_while"
    SWITCH_CASE = "switch_case"
    LOGICAL = "logical"
    CATCH = "catch"

    # Constructions attribuables
    FUNCTION_DECLARATION = "function_declaration"
    FUNCTION_EXPRESSION = "function_expression"
    ARROW_FUNCTION = "arrow_function"
    CLASS_DECLARATION = "class_declaration"
    CLASS_EXPRESSION = "class_expression"
    METHOD = "method"

    # Contexte syntaxique
    VARIABLE_DECLARATOR = "variable_declarator"
    IDENTIFIER = "identifier"
    BINARY = "binary"
    PARENTHESIZED = "parenthesized"

    OTHER = "other"


# Frontières de fonction: le corps appartient à sa propre construction
FUNCTION_KINDS = frozenset({
    NodeKind.FUNCTION_DECLARATION,
    NodeKind.FUNCTION_EXPRESSION,
    NodeKind.ARROW_FUNCTION,
    NodeKind.METHOD,
})

# Rétro-références vers le parent et métadonnées de position
IGNORED_KEYS = frozenset({'parent', 'parentPath', 'loc', 'range', 'start', 'end'})

# Nœuds sans effet sur le parent syntaxique retenu pour le nommage
TRANSPARENT_KINDS = frozenset({NodeKind.PARENTHESIZED})


class SyntaxNode(ABC):
    """
    Vue en lecture seule sur un nœud fourni par un parseur.

    Les sous-classes traduisent le type brut du parseur en NodeKind et
    exposent les quelques accesseurs dont le calculateur a besoin.
    """

    kind: NodeKind = NodeKind.OTHER

    @property
    @abstractmethod
    def type(self) -> str:
        """Type brut du nœud tel que nommé par le parseur"""

    @abstractmethod
    def items(self) -> Iterator[tuple[str, Any]]:
        """
        Itère sur les enfants indexés par clé.

        Les valeurs sont soit des SyntaxNode, soit des séquences de SyntaxNode,
        soit des valeurs scalaires qui seront ignorées par le parcours.
        """

    @property
    def operator(self) -> Optional[str]:
        return None

    @property
    def has_test(self) -> bool:
        """Vrai pour un case de switch portant une expression (pas default)"""
        return False

    @property
    def identifier(self) -> Optional[str]:
        """Identifiant déclaré (fonction, classe, déclarateur de variable)"""
        return None

    @property
    def method_name(self) -> Optional[str]:
        """Nom simple de la clé d'une méthode, None si non résolvable"""
        return None

    @property
    def is_constructor(self) -> bool:
        return False

    def class_members(self) -> list["SyntaxNode"]:
        """Membres directs du corps d'une classe"""
        return []

    def function_node(self) -> "SyntaxNode":
        """Nœud dont on mesure la complexité (la fonction portée par une méthode ESTree)"""
        return self

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.type}>"


def iter_children(node: SyntaxNode) -> Iterator[SyntaxNode]:
    """
    Énumère les enfants directs d'un nœud.

    Les clés de IGNORED_KEYS ne sont jamais suivies: un lien parent
    créerait un cycle et les positions ne sont pas des nœuds.
    """
    for key, value in node.items():
        if key in IGNORED_KEYS:
            continue
        if isinstance(value, SyntaxNode):
            yield value
        elif isinstance(value, (list, tuple)):
            for item in value:
                if isinstance(item, SyntaxNode):
                    yield item


def walk_with_parents(
    root: SyntaxNode,
    transparent: frozenset[NodeKind] = frozenset(),
) -> Iterator[tuple[SyntaxNode, Optional[SyntaxNode]]]:
    """
    Parcours en profondeur avec pile explicite.

    Args:
        root: Racine du parcours
        transparent: Genres de nœuds ignorés comme parents: leurs enfants
            reçoivent le parent du nœud transparent (ex: parenthèses)

    Yields:
        Couples (nœud, parent), le parent de la racine étant None
    """
    stack: list[tuple[SyntaxNode, Optional[SyntaxNode]]] = [(root, None)]
    while stack:
        node, parent = stack.pop()
        yield node, parent
        child_parent = parent if node.kind in transparent else node
        children = list(iter_children(node))
        stack.extend((child, child_parent) for child in reversed(children))
