"""
Parser JavaScript utilisant tree-sitter
Construit l'AST et l'expose sous forme de SyntaxNode
"""

from collections.abc import Iterator
from typing import Any, Optional

import tree_sitter_javascript as tsjs
from tree_sitter import Language, Node, Parser

from .syntax import NodeKind, SyntaxNode


TREE_SITTER_KINDS = {
    'program': NodeKind.PROGRAM,
    'if_statement': NodeKind.IF,
    'ternary_expression': NodeKind.CONDITIONAL,
    'for_statement': NodeKind.FOR,
    'while_statement': NodeKind.WHILE,
    'do_statement': NodeKind.DO_WHILE,
    'switch_case': NodeKind.SWITCH_CASE,
    'switch_default': NodeKind.SWITCH_CASE,
    'catch_clause': NodeKind.CATCH,
    'function_declaration': NodeKind.FUNCTION_DECLARATION,
    'generator_function_declaration': NodeKind.FUNCTION_DECLARATION,
    # 'function' avant tree-sitter-javascript 0.21
    'function': NodeKind.FUNCTION_EXPRESSION,
    'function_expression': NodeKind.FUNCTION_EXPRESSION,
    'generator_function': NodeKind.FUNCTION_EXPRESSION,
    'arrow_function': NodeKind.ARROW_FUNCTION,
    'class_declaration': NodeKind.CLASS_DECLARATION,
    'class': NodeKind.CLASS_EXPRESSION,
    'method_definition': NodeKind.METHOD,
    'variable_declarator': NodeKind.VARIABLE_DECLARATOR,
    'identifier': NodeKind.IDENTIFIER,
    'parenthesized_expression': NodeKind.PARENTHESIZED,
}

# tree-sitter regroupe opérateurs logiques et binaires sous binary_expression
LOGICAL_OPERATORS = {'&&', '||', '??'}

SIMPLE_KEY_TYPES = {'property_identifier', 'private_property_identifier', 'identifier'}


class TreeSitterNode(SyntaxNode):
    """Adaptateur SyntaxNode pour un nœud tree-sitter"""

    def __init__(self, node: Node, source: bytes) -> None:
        self._node = node
        self._source = source
        self.kind = self._resolve_kind()

    def _resolve_kind(self) -> NodeKind:
        node_type = self._node.type
        if node_type == 'binary_expression':
            if self.operator in LOGICAL_OPERATORS:
                return NodeKind.LOGICAL
            return NodeKind.BINARY
        if node_type == 'for_in_statement':
            # for (x in o) et for (x of o) partagent le même nœud
            return NodeKind.FOR_OF if self.operator == 'of' else NodeKind.FOR_IN
        return TREE_SITTER_KINDS.get(node_type, NodeKind.OTHER)

    @property
    def node(self) -> Node:
        return self._node

    @property
    def type(self) -> str:
        return self._node.type

    def text(self, node: Optional[Node] = None) -> str:
        target = node if node is not None else self._node
        return self._source[target.start_byte:target.end_byte].decode('utf-8')

    def _wrap(self, node: Node) -> "TreeSitterNode":
        return TreeSitterNode(node, self._source)

    def items(self) -> Iterator[tuple[str, Any]]:
        yield 'children', [self._wrap(child) for child in self._node.named_children]

    @property
    def operator(self) -> Optional[str]:
        operator = self._node.child_by_field_name('operator')
        return operator.type if operator is not None else None

    @property
    def has_test(self) -> bool:
        if self._node.type != 'switch_case':
            return False
        return self._node.child_by_field_name('value') is not None

    @property
    def identifier(self) -> Optional[str]:
        name = self._node.child_by_field_name('name')
        if name is None or name.type != 'identifier':
            return None
        return self.text(name)

    @property
    def method_name(self) -> Optional[str]:
        name = self._node.child_by_field_name('name')
        if name is None or name.type not in SIMPLE_KEY_TYPES:
            return None
        return self.text(name)

    @property
    def is_constructor(self) -> bool:
        if self.kind is not NodeKind.METHOD:
            return False
        # static constructor() {} est une méthode ordinaire
        if any(child.type == 'static' for child in self._node.children):
            return False
        name = self._node.child_by_field_name('name')
        return (
            name is not None
            and name.type == 'property_identifier'
            and self.text(name) == 'constructor'
        )

    def class_members(self) -> list[SyntaxNode]:
        body = self._node.child_by_field_name('body')
        if body is None:
            return []
        return [self._wrap(child) for child in body.named_children]


class JSParser:
    """
    Parser JavaScript utilisant tree-sitter.
    Fournit la racine de l'AST sous forme de SyntaxNode.
    """

    def __init__(self) -> None:
        self._parser = Parser(Language(tsjs.language()))
        self._tree = None
        self._source_bytes = b''

    def parse(self, source: str) -> None:
        """
        Parse le code source JavaScript.

        Args:
            source: Code JavaScript
        """
        self._source_bytes = source.encode('utf-8')
        self._tree = self._parser.parse(self._source_bytes)

    @property
    def root_node(self) -> Optional[TreeSitterNode]:
        """Retourne la racine de l'AST"""
        if self._tree is None:
            return None
        return TreeSitterNode(self._tree.root_node, self._source_bytes)

    @property
    def has_errors(self) -> bool:
        """Vérifie si le parsing a généré des nœuds d'erreur"""
        if self._tree is None:
            return True
        return self._tree.root_node.has_error


def parse_source(source: str) -> JSParser:
    """
    Fonction utilitaire pour parser du code source.

    Args:
        source: Code JavaScript à parser

    Returns:
        Instance de JSParser avec l'AST chargé
    """
    parser = JSParser()
    parser.parse(source)
    return parser
