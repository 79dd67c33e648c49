"""
Adaptateur pour les arbres ESTree / Babel déjà parsés (documents JSON)
"""

import json
from collections.abc import Iterator, Mapping
from pathlib import Path
from typing import Any, Optional

from .syntax import NodeKind, SyntaxNode


ESTREE_KINDS = {
    'Program': NodeKind.PROGRAM,
    'IfStatement': NodeKind.IF,
    'ConditionalExpression': NodeKind.CONDITIONAL,
    'ForStatement': NodeKind.FOR,
    'ForInStatement': NodeKind.FOR_IN,
    'ForOfStatement': NodeKind.FOR_OF,
    'WhileStatement': NodeKind.WHILE,
    'DoWhileStatement': NodeKind.DO_WHILE,
    'SwitchCase': NodeKind.SWITCH_CASE,
    'LogicalExpression': NodeKind.LOGICAL,
    'CatchClause': NodeKind.CATCH,
    'FunctionDeclaration': NodeKind.FUNCTION_DECLARATION,
    'FunctionExpression': NodeKind.FUNCTION_EXPRESSION,
    'ArrowFunctionExpression': NodeKind.ARROW_FUNCTION,
    'ClassDeclaration': NodeKind.CLASS_DECLARATION,
    'ClassExpression': NodeKind.CLASS_EXPRESSION,
    'ClassMethod': NodeKind.METHOD,            # Babel
    'ClassPrivateMethod': NodeKind.METHOD,     # Babel
    'ObjectMethod': NodeKind.METHOD,           # Babel
    'MethodDefinition': NodeKind.METHOD,       # ESTree (acorn, espree)
    'VariableDeclarator': NodeKind.VARIABLE_DECLARATOR,
    'Identifier': NodeKind.IDENTIFIER,
    'BinaryExpression': NodeKind.BINARY,
    'ParenthesizedExpression': NodeKind.PARENTHESIZED,  # Babel createParenthesizedExpressions
}


def is_estree_node(value: Any) -> bool:
    return isinstance(value, Mapping) and isinstance(value.get('type'), str)


class EstreeNode(SyntaxNode):
    """Adaptateur SyntaxNode pour un dictionnaire ESTree"""

    def __init__(self, data: Mapping[str, Any]) -> None:
        if not is_estree_node(data):
            raise ValueError(f"Nœud ESTree invalide: {type(data).__name__} sans champ 'type'")
        self._data = data
        self.kind = ESTREE_KINDS.get(data['type'], NodeKind.OTHER)

    @property
    def data(self) -> Mapping[str, Any]:
        return self._data

    @property
    def type(self) -> str:
        return self._data['type']

    def items(self) -> Iterator[tuple[str, Any]]:
        for key, value in self._data.items():
            if is_estree_node(value):
                yield key, EstreeNode(value)
            elif isinstance(value, list):
                yield key, [EstreeNode(item) for item in value if is_estree_node(item)]
            else:
                yield key, value

    def _child(self, key: str) -> Optional[Mapping[str, Any]]:
        value = self._data.get(key)
        return value if is_estree_node(value) else None

    @property
    def operator(self) -> Optional[str]:
        return self._data.get('operator')

    @property
    def has_test(self) -> bool:
        return self.kind is NodeKind.SWITCH_CASE and self._data.get('test') is not None

    @property
    def identifier(self) -> Optional[str]:
        node_id = self._child('id')
        if node_id is None or node_id['type'] != 'Identifier':
            return None
        return node_id.get('name') or None

    @property
    def method_name(self) -> Optional[str]:
        if self._data.get('computed'):
            return None
        key = self._child('key')
        if key is None:
            return None
        if key['type'] == 'Identifier':
            return key.get('name') or None
        if key['type'] == 'PrivateIdentifier' and key.get('name'):
            return f"#{key['name']}"
        if key['type'] == 'PrivateName':
            inner = key.get('id') or {}
            return f"#{inner['name']}" if inner.get('name') else None
        return None

    @property
    def is_constructor(self) -> bool:
        return self.kind is NodeKind.METHOD and self._data.get('kind') == 'constructor'

    def class_members(self) -> list[SyntaxNode]:
        body = self._child('body')
        if body is None:
            return []
        return [EstreeNode(item) for item in body.get('body', []) if is_estree_node(item)]

    def function_node(self) -> SyntaxNode:
        # MethodDefinition porte sa fonction dans 'value', ClassMethod est la fonction
        value = self._child('value')
        if self.kind is NodeKind.METHOD and value is not None:
            return EstreeNode(value)
        return self


def estree_root(document: Mapping[str, Any]) -> EstreeNode:
    """
    Retourne la racine Program d'un document ESTree.

    Babel enveloppe le Program dans un nœud File, qui est déroulé ici.
    """
    if is_estree_node(document) and document['type'] == 'File':
        program = document.get('program')
        if is_estree_node(program):
            return EstreeNode(program)
    return EstreeNode(document)


def load_estree(path: str) -> EstreeNode:
    """
    Charge un document ESTree depuis un fichier JSON.

    Args:
        path: Chemin du fichier JSON

    Returns:
        Racine du programme
    """
    with open(path, encoding='utf-8') as f:
        return estree_root(json.load(f))
