"""
Interface ligne de commande pour l'analyseur de complexité JavaScript
"""

from pathlib import Path
from typing import Optional

import click
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn, TimeRemainingColumn
from rich.table import Table

from . import __version__
from .analyzer import DEFAULT_PATTERNS, JSAnalyzer
from .cyclomatic import NestedPolicy
from .formatters import BaseFormatter, CSVFormatter, JSONFormatter
from .logging_config import setup_logging
from .results import AnalysisRun, FileResult, create_run

console = Console()


def parse_patterns(pattern_str: Optional[str]) -> list[str]:
    """
    Parse un pattern qui peut contenir plusieurs patterns séparés par des points-virgules.

    Args:
        pattern_str: Pattern(s) glob, séparés par des points-virgules (ex: "*.js;*.mjs")

    Returns:
        Liste des patterns individuels
    """
    if not pattern_str:
        return list(DEFAULT_PATTERNS)

    patterns = [p.strip() for p in pattern_str.split(";") if p.strip()]
    return patterns if patterns else list(DEFAULT_PATTERNS)


def analyze_with_progress(
    analyzer: JSAnalyzer,
    path: str,
    pattern: Optional[str] = None,
    recursive: bool = True,
) -> AnalysisRun:
    """
    Analyse un fichier ou répertoire avec affichage de la progression.

    Args:
        analyzer: Instance de JSAnalyzer
        path: Chemin du fichier ou répertoire à analyser
        pattern: Pattern(s) glob séparés par des points-virgules (ignoré si path est un fichier)
        recursive: Recherche récursive (ignoré si path est un fichier)

    Returns:
        Nouvelle analyse
    """
    path_obj = Path(path)

    if path_obj.is_file():
        console.print(f"[dim]Analyse du fichier {path_obj.name}...[/dim]")
        run = analyzer.analyze_file(path)
        console.print("[green]✓ Analyse terminée[/green]")
        return run

    files = analyzer.find_files(path, parse_patterns(pattern), recursive)
    total_files = len(files)

    if total_files == 0:
        return create_run()

    console.print(f"[dim]Fichiers trouvés: {total_files}[/dim]")

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TextColumn("[progress.percentage]{task.percentage:>3.0f}%"),
        TextColumn("({task.completed}/{task.total})"),
        TimeRemainingColumn(),
        console=console,
        transient=False,
    ) as progress:
        task = progress.add_task("[cyan]Analyse en cours...", total=total_files)

        def update_progress(filepath: str, current: int, total: int):
            progress.update(
                task, completed=current, description=f"[cyan]Analyse: {Path(filepath).name}"
            )

        run = analyzer.analyze_files([str(f) for f in files], progress_callback=update_progress)

    console.print(f"[green]✓ Analyse terminée: {run.total_files} fichier(s) analysé(s)[/green]")
    return run


def severity_color(value: int, low: int, medium: int) -> str:
    """
    Retourne une couleur selon la sévérité d'une valeur.

    Args:
        value: Valeur à évaluer
        low: Seuil bas (vert si <= low)
        medium: Seuil moyen (jaune si <= medium, rouge sinon)

    Returns:
        Nom de couleur Rich (green, yellow, ou red)
    """
    if value <= low:
        return "green"
    elif value <= medium:
        return "yellow"
    else:
        return "red"


def print_file_report(filepath: str, result: FileResult, threshold: int) -> None:
    """
    Affiche le rapport d'analyse pour un fichier.

    Args:
        filepath: Chemin du fichier
        result: Résultat du fichier
        threshold: Seuil de complexité (rouge au-delà)
    """
    console.print(f"\n[bold blue]📄 {escape(filepath)}[/bold blue]")
    console.print(f"  Fonctions: {len(result.functions)}  Classes: {len(result.classes)}")

    complexities = result.complexities()
    if not complexities and not result.classes:
        console.print("  [dim]Aucune fonction trouvée[/dim]")
        return

    table = Table(box=box.SIMPLE, show_header=True, header_style="bold")
    table.add_column("Fonction", style="cyan")
    table.add_column("Cyclo", justify="right")

    for name, value in complexities:
        color = severity_color(value, threshold // 2, threshold)
        table.add_row(name, f"[{color}]{value}[/{color}]")

    for class_name, record in result.classes.items():
        if not record.methods:
            table.add_row(f"{class_name} [dim](aucune méthode)[/dim]", "")

    console.print(table)


def print_summary(run: AnalysisRun, threshold: int) -> None:
    """Affiche le résumé de l'analyse"""
    console.print("\n" + "=" * 60)
    console.print("[bold]📊 RÉSUMÉ[/bold]")
    console.print("=" * 60)

    summary_table = Table(box=box.SIMPLE, show_header=False)
    summary_table.add_column("Métrique", style="bold")
    summary_table.add_column("Valeur", justify="right")

    summary_table.add_row("Fichiers analysés", str(run.total_files))
    summary_table.add_row("Fonctions", str(run.total_functions))
    summary_table.add_row("Classes", str(run.total_classes))
    summary_table.add_row("Méthodes", str(run.total_methods))
    summary_table.add_row("", "")
    summary_table.add_row("Complexité cyclomatique moyenne", f"{run.avg_complexity:.2f}")
    summary_table.add_row("Complexité cyclomatique max", str(run.max_complexity))

    console.print(summary_table)

    high_risk = run.get_high_complexity(threshold)

    if high_risk:
        console.print(f"\n[bold red]⚠ Fonctions à risque ({len(high_risk)})[/bold red]")
        console.print(f"  (cyclomatic > {threshold})")

        risk_table = Table(box=box.SIMPLE, show_header=True, header_style="bold")
        risk_table.add_column("Fichier")
        risk_table.add_column("Fonction")
        risk_table.add_column("Cyclo", justify="right")

        for filepath, name, value in high_risk[:20]:
            risk_table.add_row(Path(filepath).name, name, f"[red]{value}[/red]")

        if len(high_risk) > 20:
            console.print(f"  [dim]... et {len(high_risk) - 20} autres fonctions[/dim]")

        console.print(risk_table)
    else:
        console.print("\n[green]✓ Aucune fonction ne dépasse le seuil de complexité[/green]")


def print_errors(run: AnalysisRun) -> None:
    """Affiche les erreurs de lecture et de parsing de l'analyse"""
    if not run.errors:
        return

    console.print(f"\n[bold red]⚠ Erreurs ({len(run.errors)})[/bold red]")
    for error in run.errors:
        console.print(f"  [red]{escape(error.filepath)}[/red]: {escape(error.message)}")


@click.group()
@click.version_option(version=__version__)
def cli():
    """
    JS Complexity Analyzer - Complexité cyclomatique pour JavaScript

    Calcule la complexité de McCabe de chaque fonction, fonction fléchée
    et méthode de classe.
    """
    pass


@cli.command()
@click.argument("path", type=click.Path(exists=True))
@click.option(
    "--pattern",
    "-p",
    default=None,
    help='Pattern(s) glob séparés par des points-virgules (défaut: "*.js;*.mjs;*.cjs;*.jsx")',
)
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["text", "json", "json-pretty", "csv"]),
    default="text",
    help="Format de sortie",
)
@click.option("--output", "-o", type=click.Path(), help="Fichier de sortie (json/csv)")
@click.option("--threshold", "-t", default=10, help="Seuil complexité cyclomatique (défaut: 10)")
@click.option(
    "--nested",
    type=click.Choice([policy.value for policy in NestedPolicy]),
    default=NestedPolicy.ISOLATED.value,
    help="Fonctions imbriquées: comptées à part (isolated) ou aussi dans la fonction englobante (inclusive)",
)
@click.option("--jobs", "-j", default=1, type=click.IntRange(min=1), help="Nombre de threads")
@click.option(
    "--recursive/--no-recursive", "-r/-R", default=True, help="Recherche récursive (défaut: oui)"
)
@click.option("--verbose", "-v", is_flag=True, help="Logs détaillés")
@click.option("--quiet", "-q", is_flag=True, help="N'affiche que les erreurs dans les logs")
@click.option(
    "--fail-over", is_flag=True, help="Code retour 1 si une fonction dépasse le seuil"
)
@click.pass_context
def analyze(
    ctx: click.Context,
    path: str,
    pattern: Optional[str],
    output_format: str,
    output: Optional[str],
    threshold: int,
    nested: str,
    jobs: int,
    recursive: bool,
    verbose: bool,
    quiet: bool,
    fail_over: bool,
):
    """
    Analyse les fichiers JavaScript.

    PATH peut être un fichier (.js, ou .json pour un arbre ESTree) ou un répertoire.

    Exemples:

        js-complexity analyze app.js

        js-complexity analyze ./src --pattern "*.js;*.mjs"

        js-complexity analyze ./src -f json -o cyclomatic-complexity.json

        js-complexity analyze ./src --nested inclusive
    """
    setup_logging(verbose=verbose, quiet=quiet)
    analyzer = JSAnalyzer(nested_policy=NestedPolicy(nested), max_workers=jobs)

    if output_format == "text":
        console.print(
            Panel.fit(
                f"[bold]JS Complexity Analyzer v{__version__}[/bold]\n"
                "Complexité cyclomatique (McCabe)",
                border_style="blue",
            )
        )
        run = analyze_with_progress(analyzer, path, pattern, recursive)
    else:
        # Sortie machine: pas de barre de progression sur stdout
        if Path(path).is_file():
            run = analyzer.analyze_file(path)
        else:
            run = analyzer.analyze_directory(path, parse_patterns(pattern), recursive)

    # En sortie machine, un rapport vide est tout de même émis
    if output_format == "text" and not run.files and not run.errors:
        console.print("[yellow]Aucun fichier trouvé.[/yellow]")
        return

    formatter: Optional[BaseFormatter] = None
    if output_format in ("json", "json-pretty"):
        formatter = JSONFormatter(pretty=(output_format == "json-pretty"))
    elif output_format == "csv":
        formatter = CSVFormatter()

    if formatter is not None:
        if output:
            formatter.save(run, output)
            console.print(f"[green]✓ Rapport sauvegardé: {output}[/green]")
        else:
            click.echo(formatter.format(run))
    else:
        for filepath, result in run.files.items():
            print_file_report(filepath, result, threshold)

        print_errors(run)

        if run.total_files > 1 or run.total_functions > 0 or run.total_methods > 0:
            print_summary(run, threshold)

        if output:
            JSONFormatter(pretty=True).save(run, output)
            console.print(f"[green]✓ Rapport JSON sauvegardé: {output}[/green]")

    if fail_over and run.get_high_complexity(threshold):
        ctx.exit(1)


def main() -> None:
    """
    Point d'entrée principal de l'application CLI.

    Démarre l'interface en ligne de commande avec Click.
    """
    cli()


if __name__ == "__main__":
    main()
