"""
Tests pour le module cyclomatic.
"""

from js_complexity.cyclomatic import (
    CyclomaticCalculator,
    NestedPolicy,
    calculate_cyclomatic,
    count_decision_points,
    is_decision_point,
)
from js_complexity.estree import EstreeNode
from js_complexity.parser import parse_source
from js_complexity.syntax import NodeKind


def first_function(source):
    """Premier nœud fonction de la source parsée."""
    parser = parse_source(source)
    root = parser.root_node
    stack = [root]
    while stack:
        node = stack.pop()
        if node.kind is NodeKind.FUNCTION_DECLARATION:
            return node
        for _, children in node.items():
            stack.extend(reversed(children))
    raise AssertionError("aucune fonction trouvée")


def complexity_of(source, policy=NestedPolicy.ISOLATED):
    return CyclomaticCalculator(policy).calculate(first_function(source))


class TestIsDecisionPoint:
    """Tests du classifieur, sur des nœuds ESTree construits à la main."""

    def test_branching_nodes(self):
        for node_type in (
            'IfStatement',
            'ConditionalExpression',
            'ForStatement',
            'ForInStatement',
            'ForOfStatement',
            'WhileStatement',
            'DoWhileStatement',
            'CatchClause',
        ):
            assert is_decision_point(EstreeNode({'type': node_type})), node_type

    def test_switch_case_with_test(self):
        node = EstreeNode({'type': 'SwitchCase', 'test': {'type': 'NumericLiteral', 'value': 1}})
        assert is_decision_point(node)

    def test_switch_default_is_not_decision_point(self):
        assert not is_decision_point(EstreeNode({'type': 'SwitchCase', 'test': None}))

    def test_short_circuit_operators(self):
        assert is_decision_point(EstreeNode({'type': 'LogicalExpression', 'operator': '&&'}))
        assert is_decision_point(EstreeNode({'type': 'LogicalExpression', 'operator': '||'}))

    def test_nullish_coalescing_is_not_decision_point(self):
        assert not is_decision_point(EstreeNode({'type': 'LogicalExpression', 'operator': '??'}))

    def test_bitwise_operators_are_not_decision_points(self):
        assert not is_decision_point(EstreeNode({'type': 'BinaryExpression', 'operator': '&'}))
        assert not is_decision_point(EstreeNode({'type': 'BinaryExpression', 'operator': '|'}))

    def test_other_nodes(self):
        for node_type in ('SwitchStatement', 'TryStatement', 'BlockStatement', 'ReturnStatement'):
            assert not is_decision_point(EstreeNode({'type': node_type})), node_type


class TestCyclomaticCalculator:
    """Tests pour la classe CyclomaticCalculator."""

    def test_calculate_empty_function(self):
        """Fonction vide -> complexité 1."""
        assert complexity_of("function empty() {}") == 1

    def test_calculate_without_decision_points(self, simple_js_source):
        assert complexity_of(simple_js_source) == 1

    def test_calculate_single_if(self):
        """Un if -> complexité 2."""
        source = """
function check(x) {
    if (x > 0) {
        return 1;
    }
    return 0;
}
"""
        assert complexity_of(source) == 2

    def test_calculate_if_else(self):
        """if/else -> complexité 2 (else ne compte pas)."""
        source = """
function check(x) {
    if (x > 0) {
        return 1;
    } else {
        return 0;
    }
}
"""
        assert complexity_of(source) == 2

    def test_calculate_else_if_chain(self):
        """else if est un if imbriqué -> complexité 3."""
        source = """
function sign(x) {
    if (x > 0) {
        return 1;
    } else if (x < 0) {
        return -1;
    } else {
        return 0;
    }
}
"""
        assert complexity_of(source) == 3

    def test_calculate_loops(self):
        """Chaque forme de boucle -> complexité 2."""
        loops = [
            "for (let i = 0; i < n; i++) { total += i; }",
            "for (const key in obj) { total += 1; }",
            "for (const item of items) { total += item; }",
            "while (n > 0) { n--; }",
            "do { n--; } while (n > 0);",
        ]
        for loop in loops:
            source = f"function loop(n, obj, items) {{ let total = 0; {loop} return total; }}"
            assert complexity_of(source) == 2, loop

    def test_calculate_switch_excludes_default(self):
        """Switch avec 3 cases et un default -> 1 + 3."""
        source = """
function process(x) {
    switch (x) {
        case 1:
            return 10;
        case 2:
            return 20;
        case 3:
            return 30;
        default:
            return 0;
    }
}
"""
        assert complexity_of(source) == 4

    def test_calculate_ternary(self):
        """Opérateur ternaire -> complexité 2."""
        assert complexity_of("function max(a, b) { return a > b ? a : b; }") == 2

    def test_calculate_nesting_does_not_matter(self):
        """Ternaire dans un if dans un while -> 1 + 3."""
        source = """
function nested(x) {
    while (x) {
        if (x > 1) {
            x = x > 5 ? x - 2 : x - 1;
        }
    }
}
"""
        assert complexity_of(source) == 4

    def test_calculate_short_circuit_operators(self):
        """a && b || c -> 2 points de décision."""
        assert complexity_of("function check(a, b, c) { return a && b || c; }") == 3

    def test_calculate_bitwise_operators(self):
        """a & b | c -> aucun point de décision."""
        assert complexity_of("function mask(a, b, c) { return a & b | c; }") == 1

    def test_calculate_nullish_coalescing(self):
        assert complexity_of("function fallback(a, b) { return a ?? b; }") == 1

    def test_calculate_catch(self):
        """catch -> +1, finally seul ne compte pas."""
        with_catch = "function load() { try { run(); } catch (e) { fail(e); } }"
        with_finally = "function load() { try { run(); } finally { done(); } }"
        assert complexity_of(with_catch) == 2
        assert complexity_of(with_finally) == 1

    def test_calculate_if_ternary_for(self):
        """if + ternaire + for: else n'ajoute rien."""
        source = "function f(x){ if (x) { return x>0?1:-1 } else { for(;;){} } }"
        function = first_function(source)
        assert count_decision_points(function) == 3
        assert CyclomaticCalculator().calculate(function) == 4

    def test_calculate_complex_function(self, complex_function_source):
        # if, &&, else if, while, for-of, 2 cases, catch, ternaire
        assert complexity_of(complex_function_source) == 10

    def test_get_details(self, complex_function_source):
        """Test get_details pour décomposition."""
        details = CyclomaticCalculator().get_details(first_function(complex_function_source))

        assert details['if_count'] == 2
        assert details['loop_count'] == 2
        assert details['case_count'] == 2
        assert details['ternary_count'] == 1
        assert details['catch_count'] == 1
        assert details['logical_and_count'] == 1
        assert details['logical_or_count'] == 0
        assert details['total'] == 10


class TestNestedPolicy:
    """Tests des deux politiques pour les fonctions imbriquées."""

    NESTED_SOURCE = """
function outer(a, b, c) {
    if (a) {
        a = 0;
    }
    function inner() {
        if (b) {
            b = 0;
        }
        while (c) {
            c--;
        }
    }
    return inner;
}
"""

    CALLBACK_SOURCE = """
function outer(items) {
    items.forEach(function (item) {
        if (item) {
            use(item);
        }
    });
    return items.filter((item) => item && item.ok);
}
"""

    def test_isolated_excludes_nested_function(self):
        assert complexity_of(self.NESTED_SOURCE, NestedPolicy.ISOLATED) == 2

    def test_inclusive_counts_nested_function_again(self):
        assert complexity_of(self.NESTED_SOURCE, NestedPolicy.INCLUSIVE) == 4

    def test_isolated_excludes_callbacks(self):
        assert complexity_of(self.CALLBACK_SOURCE, NestedPolicy.ISOLATED) == 1

    def test_inclusive_counts_callbacks(self):
        assert complexity_of(self.CALLBACK_SOURCE, NestedPolicy.INCLUSIVE) == 3

    def test_default_policy_is_isolated(self):
        assert CyclomaticCalculator().policy is NestedPolicy.ISOLATED


class TestCalculateCyclomatic:
    """Tests pour la fonction utilitaire calculate_cyclomatic."""

    def test_calculate_cyclomatic(self):
        function = first_function("function check(x) { if (x) { return 1; } return 0; }")
        assert calculate_cyclomatic(function) == 2

    def test_calculate_cyclomatic_on_estree(self):
        function = EstreeNode({
            'type': 'FunctionDeclaration',
            'id': {'type': 'Identifier', 'name': 'f'},
            'body': {
                'type': 'BlockStatement',
                'body': [
                    {
                        'type': 'IfStatement',
                        'test': {'type': 'Identifier', 'name': 'x'},
                        'consequent': {'type': 'BlockStatement', 'body': []},
                        'alternate': None,
                    }
                ],
            },
        })
        assert calculate_cyclomatic(function) == 2
