"""
Analyseur JavaScript principal
Orchestre la lecture, le parsing et le calcul de complexité
"""

import fnmatch
import json
import logging
from collections.abc import Mapping
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Any, Callable, Optional

from .cyclomatic import CyclomaticCalculator, NestedPolicy
from .estree import estree_root
from .parser import JSParser
from .results import AnalysisRun, create_run
from .syntax import SyntaxNode
from .visitors import ComplexityVisitor

logger = logging.getLogger(__name__)

DEFAULT_PATTERNS = ["*.js", "*.mjs", "*.cjs", "*.jsx"]

EXCLUDED_DIRECTORIES = {"node_modules", ".git"}


class JSAnalyzer:
    """
    Analyseur de complexité cyclomatique pour du code JavaScript.

    Chaque appel à analyze_files / analyze_directory produit un nouvel
    AnalysisRun: aucun résultat n'est conservé entre deux analyses.

    Attributes:
        nested_policy: Traitement des fonctions imbriquées
        max_workers: Nombre de threads pour l'analyse des fichiers

    Example:
        >>> analyzer = JSAnalyzer()
        >>> run = analyzer.analyze_directory('./src')
        >>> run.to_dict()['src/app.js']['functions']
    """

    def __init__(
        self,
        nested_policy: NestedPolicy = NestedPolicy.ISOLATED,
        max_workers: int = 1,
    ) -> None:
        self.nested_policy = nested_policy
        self.max_workers = max(1, max_workers)

    def _visit(
        self, load_root: Callable[[], SyntaxNode], filepath: str, run: AnalysisRun
    ) -> None:
        """
        Parse puis parcourt un fichier, en isolant ses erreurs.

        Un fichier en erreur n'a aucun résultat partiel dans run: seule
        l'erreur est enregistrée et l'analyse des autres fichiers continue.
        """
        file_run = create_run()
        try:
            root = load_root()
            # Un fichier analysé apparaît dans le rapport même sans fonction
            file_run.file(filepath)
            visitor = ComplexityVisitor(
                file_run, filepath, CyclomaticCalculator(self.nested_policy)
            )
            visitor.visit(root)
        except (ValueError, TypeError, AttributeError, KeyError) as e:
            run.record_error(filepath, f"Erreur d'analyse: {type(e).__name__}: {e}")
            logger.warning("Analyse impossible pour %s: %s", filepath, e)
            return
        except Exception as e:
            run.record_error(
                filepath, f"Erreur inattendue lors de l'analyse: {type(e).__name__}: {e}"
            )
            logger.exception("Erreur inattendue pour %s", filepath)
            return

        run.merge(file_run)

    def analyze_source(
        self, source: str, filepath: str = "<string>", run: Optional[AnalysisRun] = None
    ) -> AnalysisRun:
        """
        Analyse du code source JavaScript directement.

        Args:
            source: Code source JavaScript
            filepath: Nom de fichier pour le rapport
            run: Analyse à compléter (nouvelle analyse si None)

        Returns:
            L'analyse contenant le résultat du fichier
        """
        run = run if run is not None else create_run()

        def load_root() -> SyntaxNode:
            parser = JSParser()
            parser.parse(source)
            if parser.has_errors:
                logger.debug("Parsing partiel de %s (nœuds ERROR)", filepath)
            return parser.root_node

        self._visit(load_root, filepath, run)
        return run

    def analyze_estree(
        self,
        tree: Mapping[str, Any],
        filepath: str = "<estree>",
        run: Optional[AnalysisRun] = None,
    ) -> AnalysisRun:
        """
        Analyse d'un arbre ESTree / Babel déjà parsé.

        Args:
            tree: Document ESTree (racine File ou Program)
            filepath: Nom de fichier pour le rapport
            run: Analyse à compléter (nouvelle analyse si None)

        Returns:
            L'analyse contenant le résultat du fichier
        """
        run = run if run is not None else create_run()
        self._visit(lambda: estree_root(tree), filepath, run)
        return run

    def analyze_file(self, filepath: str, run: Optional[AnalysisRun] = None) -> AnalysisRun:
        """
        Analyse un fichier JavaScript, ou un document ESTree s'il est en .json.

        Args:
            filepath: Chemin du fichier
            run: Analyse à compléter (nouvelle analyse si None)

        Returns:
            L'analyse contenant le résultat du fichier
        """
        run = run if run is not None else create_run()
        path = Path(filepath)

        if not path.exists():
            run.record_error(str(path), f"File not found: {filepath}")
            logger.warning("Fichier introuvable: %s", filepath)
            return run

        try:
            source = path.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            run.record_error(
                str(path), f"Erreur de lecture du fichier: {type(e).__name__}: {e}"
            )
            logger.warning("Lecture impossible de %s: %s", filepath, e)
            return run

        if path.suffix.lower() == ".json":
            try:
                document = json.loads(source)
            except (json.JSONDecodeError, RecursionError) as e:
                # Un document trop profond dépasse la pile du décodeur json
                run.record_error(str(path), f"JSON invalide: {type(e).__name__}: {e}")
                logger.warning("JSON invalide dans %s: %s", filepath, e)
                return run
            return self.analyze_estree(document, str(path), run)

        return self.analyze_source(source, str(path), run)

    def find_files(
        self,
        directory: str,
        patterns: Optional[list[str]] = None,
        recursive: bool = True,
    ) -> list[Path]:
        """
        Liste les fichiers à analyser, triés pour un ordre déterministe.

        Les répertoires node_modules et .git sont ignorés.
        """
        path = Path(directory)
        if not path.exists():
            return []

        patterns_list = patterns or DEFAULT_PATTERNS
        candidates = path.rglob("*") if recursive else path.glob("*")

        files_set: set[Path] = set()
        for candidate in candidates:
            if not candidate.is_file():
                continue
            relative_parts = candidate.relative_to(path).parts[:-1]
            if EXCLUDED_DIRECTORIES.intersection(relative_parts):
                continue
            if any(fnmatch.fnmatch(candidate.name, pat) for pat in patterns_list):
                files_set.add(candidate)

        return sorted(files_set)

    def analyze_files(
        self,
        filepaths: list[str],
        progress_callback: Optional[Callable[[str, int, int], None]] = None,
    ) -> AnalysisRun:
        """
        Analyse une liste de fichiers.

        Avec max_workers > 1, chaque fichier est analysé dans son propre
        AnalysisRun sur un thread, puis fusionné dans l'ordre de la liste.

        Args:
            filepaths: Liste des chemins de fichiers
            progress_callback: Callback optionnel appelé pour chaque fichier analysé.
                              Signature: callback(filepath: str, current: int, total: int)

        Returns:
            Nouvelle analyse contenant tous les fichiers
        """
        run = create_run()
        total = len(filepaths)

        if self.max_workers > 1 and total > 1:
            with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                worker_runs = executor.map(self.analyze_file, filepaths)
                for index, (filepath, worker_run) in enumerate(zip(filepaths, worker_runs), 1):
                    run.merge(worker_run)
                    if progress_callback:
                        progress_callback(filepath, index, total)
        else:
            for index, filepath in enumerate(filepaths, 1):
                if progress_callback:
                    progress_callback(filepath, index, total)
                self.analyze_file(filepath, run)

        logger.debug("%d fichier(s) analysé(s), %d erreur(s)", total, len(run.errors))
        return run

    def analyze_directory(
        self,
        directory: str,
        patterns: Optional[list[str]] = None,
        recursive: bool = True,
        progress_callback: Optional[Callable[[str, int, int], None]] = None,
    ) -> AnalysisRun:
        """
        Analyse tous les fichiers JavaScript d'un répertoire.

        Args:
            directory: Chemin du répertoire
            patterns: Liste de patterns glob (défaut: *.js, *.mjs, *.cjs, *.jsx)
            recursive: Recherche récursive (défaut: True)
            progress_callback: Callback optionnel appelé pour chaque fichier analysé

        Returns:
            Nouvelle analyse contenant tous les fichiers trouvés
        """
        files = self.find_files(directory, patterns, recursive)
        return self.analyze_files([str(f) for f in files], progress_callback)
