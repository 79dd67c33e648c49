"""
Fixtures partagées pour les tests pytest.
"""

import pytest

from js_complexity.analyzer import JSAnalyzer
from js_complexity.cyclomatic import NestedPolicy


@pytest.fixture
def simple_js_source():
    """Code JavaScript simple sans point de décision."""
    return """
function add(a, b) {
    return a + b;
}
"""


@pytest.fixture
def complex_function_source():
    """Code JavaScript avec structures de contrôle variées."""
    return """
function complexFunction(a, b, items) {
    let result = 0;

    if (a > 0 && b > 0) {
        result = a + b;
    } else if (a < 0) {
        while (b > 0) {
            b--;
        }
    }

    for (const item of items) {
        result += item;
    }

    switch (a) {
        case 1:
            result *= 2;
            break;
        case 2:
            result *= 3;
            break;
        default:
            result *= 4;
    }

    try {
        result = JSON.parse(result);
    } catch (e) {
        result = 0;
    }

    return result > 0 ? result : -result;
}
"""


@pytest.fixture
def module_source():
    """Module mêlant déclarations, expressions, fonctions fléchées et classes."""
    return """
function declared(x) {
    if (x) {
        return 1;
    }
    return 0;
}

const expressed = function (y) {
    return y || 0;
};

const arrow = (z) => z ? 1 : 2;

items.map(function (item) {
    if (item) {
        return item;
    }
});

class Service {
    constructor(client) {
        this.client = client;
    }

    fetch(id) {
        if (!id) {
            throw new Error('missing id');
        }
        return this.client.get(id);
    }

    close() {
        this.client = null;
    }
}

const Model = class {
    save() {
        for (let i = 0; i < 3; i++) {
            retry();
        }
    }
};

class Empty {}
"""


@pytest.fixture
def analyzer():
    """Analyseur avec la politique par défaut (fonctions imbriquées isolées)."""
    return JSAnalyzer()


@pytest.fixture
def inclusive_analyzer():
    """Analyseur qui compte aussi les fonctions imbriquées dans la fonction englobante."""
    return JSAnalyzer(nested_policy=NestedPolicy.INCLUSIVE)


@pytest.fixture
def analyze_js(analyzer):
    """Retourne une fonction source -> résultat du fichier sous forme de dictionnaire."""

    def _analyze(source, filepath="test.js"):
        run = analyzer.analyze_source(source, filepath)
        return run.to_dict()[filepath]

    return _analyze


@pytest.fixture
def tmp_js_file(tmp_path, module_source):
    """Fichier JavaScript temporaire."""
    file_path = tmp_path / "module.js"
    file_path.write_text(module_source)
    return file_path
