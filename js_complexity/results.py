"""
Stockage des résultats d'une analyse

Un AnalysisRun appartient à une seule invocation: il est créé vide par
create_run() et n'est jamais partagé avec une autre analyse.
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class FunctionRecord:
    """Complexité d'une fonction nommée"""

    name: str
    complexity: int

    def to_dict(self) -> dict:
        return {"complexity": self.complexity}


@dataclass
class ClassRecord:
    """
    Complexités des méthodes d'une classe.

    Une classe sans méthode reste présente avec un dictionnaire vide.
    """

    name: str
    methods: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {method: {"complexity": value} for method, value in self.methods.items()}


@dataclass
class FileResult:
    """Résultats pour un fichier source"""

    functions: dict[str, FunctionRecord] = field(default_factory=dict)
    classes: dict[str, ClassRecord] = field(default_factory=dict)

    def add_function(self, name: str, complexity: int) -> FunctionRecord:
        record = FunctionRecord(name=name, complexity=complexity)
        self.functions[name] = record
        return record

    def add_class(self, name: str) -> ClassRecord:
        if name not in self.classes:
            self.classes[name] = ClassRecord(name=name)
        return self.classes[name]

    def complexities(self) -> list[tuple[str, int]]:
        """Liste (nom qualifié, complexité) des fonctions puis des méthodes"""
        values = [(name, record.complexity) for name, record in self.functions.items()]
        for class_name, record in self.classes.items():
            values.extend(
                (f"{class_name}.{method}", value) for method, value in record.methods.items()
            )
        return values

    def to_dict(self) -> dict:
        return {
            "functions": {name: record.to_dict() for name, record in self.functions.items()},
            "classes": {name: record.to_dict() for name, record in self.classes.items()},
        }


@dataclass(frozen=True)
class FileError:
    """Erreur rencontrée sur un fichier pendant une analyse"""

    filepath: str
    message: str

    def to_dict(self) -> dict:
        return {"filepath": self.filepath, "message": self.message}


@dataclass
class AnalysisRun:
    """
    Résultats d'une analyse complète, indexés par chemin de fichier.

    Attributes:
        files: Résultat par fichier
        errors: Erreurs de lecture ou de parsing propres à cette analyse
    """

    files: dict[str, FileResult] = field(default_factory=dict)
    errors: list[FileError] = field(default_factory=list)

    def file(self, filepath: str) -> FileResult:
        """Résultat du fichier, créé à la première écriture"""
        if filepath not in self.files:
            self.files[filepath] = FileResult()
        return self.files[filepath]

    def record_function(self, filepath: str, name: str, complexity: int) -> FunctionRecord:
        return self.file(filepath).add_function(name, complexity)

    def record_class(self, filepath: str, name: str) -> ClassRecord:
        return self.file(filepath).add_class(name)

    def record_method(self, filepath: str, class_name: str, method: str, complexity: int) -> None:
        self.record_class(filepath, class_name).methods[method] = complexity

    def record_error(self, filepath: str, message: str) -> FileError:
        error = FileError(filepath=filepath, message=message)
        self.errors.append(error)
        return error

    def merge(self, other: "AnalysisRun") -> None:
        """
        Intègre les résultats d'une autre analyse (ex: celle d'un worker).

        Les fichiers de other remplacent ceux de même chemin.
        """
        self.files.update(other.files)
        self.errors.extend(other.errors)

    @property
    def total_files(self) -> int:
        return len(self.files)

    @property
    def total_functions(self) -> int:
        return sum(len(result.functions) for result in self.files.values())

    @property
    def total_classes(self) -> int:
        return sum(len(result.classes) for result in self.files.values())

    @property
    def total_methods(self) -> int:
        return sum(
            len(record.methods)
            for result in self.files.values()
            for record in result.classes.values()
        )

    def _all_complexities(self) -> list[int]:
        return [value for result in self.files.values() for _, value in result.complexities()]

    @property
    def avg_complexity(self) -> float:
        values = self._all_complexities()
        if not values:
            return 0.0
        return sum(values) / len(values)

    @property
    def max_complexity(self) -> int:
        values = self._all_complexities()
        return max(values) if values else 0

    def get_high_complexity(self, threshold: int = 10) -> list[tuple[str, str, int]]:
        """
        Retourne les fonctions et méthodes dépassant le seuil.

        Args:
            threshold: Seuil de complexité cyclomatique

        Returns:
            Liste de tuples (filepath, nom qualifié, complexité), du plus complexe au moins complexe
        """
        results = [
            (filepath, name, value)
            for filepath, result in self.files.items()
            for name, value in result.complexities()
            if value > threshold
        ]
        return sorted(results, key=lambda item: -item[2])

    def summary(self) -> dict[str, Any]:
        return {
            "total_files": self.total_files,
            "total_functions": self.total_functions,
            "total_classes": self.total_classes,
            "total_methods": self.total_methods,
            "avg_complexity": round(self.avg_complexity, 2),
            "max_complexity": self.max_complexity,
            "total_errors": len(self.errors),
        }

    def to_dict(self) -> dict:
        return {filepath: result.to_dict() for filepath, result in self.files.items()}


def create_run() -> AnalysisRun:
    """Crée un AnalysisRun vide, propre à une invocation"""
    return AnalysisRun()
