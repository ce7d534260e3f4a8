"""leakgate CLI — Typer application with scan, patterns, init, and hook commands."""

from __future__ import annotations

import os
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape

from leakgate import __version__

app = typer.Typer(
    name="leakgate",
    help="Stop leaked credentials before they are committed.",
    add_completion=False,
    no_args_is_help=True,
)

console = Console(stderr=True)


def _detect_ci() -> bool:
    """Auto-detect CI environment."""
    return os.environ.get("CI", "").lower() in ("true", "1", "yes")


def _resolve_repo_root() -> Path:
    """Find the git repo root, exit 2 on failure."""
    from leakgate.sources.git import GitError, get_repo_root

    try:
        return get_repo_root()
    except GitError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc


def _repo_relative(paths: List[str], root: Path) -> List[str]:
    """Rewrite user-supplied paths relative to *root*.

    Exclusion rules are unanchored, so they must see the same repo-relative
    identifiers git reports for staged files, never the parent directories
    of an absolute path. Paths outside *root* are passed through as typed.
    """
    base = root.resolve()
    cwd = Path.cwd()
    relative: List[str] = []
    for raw in paths:
        resolved = (cwd / raw).resolve()
        try:
            relative.append(resolved.relative_to(base).as_posix())
        except ValueError:
            relative.append(raw)
    return relative


def _load_catalog(repo_root: Path, config_path: Optional[str]):
    """Load config and catalog, exit 2 on any configuration error."""
    from leakgate.catalog.registry import build_catalog
    from leakgate.config.loader import ConfigError, load_config

    try:
        cfg = load_config(repo_root, config_path)
        catalog = build_catalog(cfg, repo_root)
    except ConfigError as exc:
        console.print(f"[bold red]Config error:[/bold red] {escape(str(exc))}", highlight=False)
        raise typer.Exit(code=2) from exc
    return cfg, catalog


# ── scan ──────────────────────────────────────────────────────────────────────


@app.command()
def scan(
    paths: Optional[List[str]] = typer.Argument(
        None, help="Files to scan instead of the staged changes"
    ),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .leakgate.toml"),
    format: Optional[str] = typer.Option(None, "--format", "-f", help="Output format: terminal | json"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Also write a JSON report to this file"),
    ci: bool = typer.Option(False, "--ci", help="Enable CI mode (full redaction, JSON by default)"),
    workers: Optional[int] = typer.Option(None, "--workers", min=1, help="Scan files on N threads"),
    timeout: Optional[float] = typer.Option(None, "--timeout", min=0, help="Wall-clock budget in seconds"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
    debug: bool = typer.Option(False, "--debug", help="Debug output with timing"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Show what would be scanned without scanning"),
) -> None:
    """Scan staged files (or the given PATHS) for leaked secrets."""
    from leakgate.config.schema import OUTPUT_FORMATS
    from leakgate.findings.models import ScanResult
    from leakgate.log import configure_logging
    from leakgate.output import json_report, terminal
    from leakgate.scanner.engine import ScanCoordinator, ScanError, ScanTimeout
    from leakgate.scanner.file_filter import FileFilter
    from leakgate.sources.git import GitError, get_repo_root, get_staged_files
    from leakgate.sources.supplier import WorkingTreeSupplier

    configure_logging(verbose=verbose, debug=debug)

    # --- Locate repo ---
    if paths:
        try:
            repo_root = get_repo_root()
        except GitError:
            repo_root = Path.cwd()
    else:
        repo_root = _resolve_repo_root()

    cfg, catalog = _load_catalog(repo_root, config)

    # --- CI auto-detection ---
    ci_mode = ci or _detect_ci()
    if ci_mode and cfg.output.format == "terminal" and format is None:
        cfg.output.format = "json"

    # --- CLI overrides ---
    if format:
        if format not in OUTPUT_FORMATS:
            console.print(f"[bold red]Invalid format:[/bold red] {format}")
            raise typer.Exit(code=2)
        cfg.output.format = format  # type: ignore[assignment]
    if workers is not None:
        cfg.scan.workers = workers
    if timeout is not None:
        cfg.scan.timeout_seconds = timeout

    if verbose or debug:
        console.print(f"[dim]Secret patterns loaded: {len(catalog.secret_patterns)}[/dim]")
        console.print(f"[dim]Repo root: {repo_root}[/dim]")
        console.print(f"[dim]CI mode: {ci_mode}[/dim]")

    # --- Collect files ---
    if paths:
        files = _repo_relative(paths, repo_root)
        supplier_root = repo_root
    else:
        try:
            files = get_staged_files(repo_root)
        except GitError as exc:
            console.print(f"[bold red]Git error:[/bold red] {exc}")
            raise typer.Exit(code=2) from exc
        supplier_root = repo_root

    if not files:
        if cfg.output.format == "terminal":
            console.print("[green]✓ No staged files to check[/green]")
        else:
            print(json_report.render(ScanResult(), ci_mode=ci_mode))
        raise typer.Exit(code=0)

    supplier = WorkingTreeSupplier(supplier_root, files)

    if dry_run:
        file_filter = FileFilter(catalog, supplier)
        eligible = [f for f in files if file_filter.is_eligible(f)]
        console.print(f"[bold]Dry run: {len(eligible)} of {len(files)} file(s) would be scanned:[/bold]")
        for f in files:
            reason = file_filter.skip_reason(f)
            console.print(f"  {escape(f)}" + (f" [dim]({reason})[/dim]" if reason else ""), highlight=False)
        raise typer.Exit(code=0)

    # --- Run scan ---
    coordinator = ScanCoordinator.from_config(catalog, supplier, cfg)
    try:
        result = coordinator.scan()
    except ScanTimeout as exc:
        # Fail closed: an unfinished scan must not let the commit through.
        console.print(f"[bold red]Scan aborted:[/bold red] {exc}")
        raise typer.Exit(code=1) from exc
    except ScanError as exc:
        console.print(f"[bold red]Scanner error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc

    if debug:
        console.print(f"[dim]Scan duration: {result.scan_duration_ms:.0f}ms[/dim]")

    # --- Output ---
    if cfg.output.format == "terminal":
        terminal.render(result, ci_mode=ci_mode, show_summary=cfg.output.show_summary)
    else:
        print(json_report.render(result, ci_mode=ci_mode))

    if output:
        Path(output).write_text(json_report.render(result, ci_mode=ci_mode), encoding="utf-8")
        if verbose:
            console.print(f"[dim]Report written to {output}[/dim]")

    raise typer.Exit(code=result.exit_code)


# ── patterns ──────────────────────────────────────────────────────────────────


@app.command()
def patterns(
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .leakgate.toml"),
) -> None:
    """List the effective secret patterns, allowlist, and exclusions."""
    from rich.table import Table
    from rich.text import Text

    from leakgate.sources.git import GitError, get_repo_root

    try:
        repo_root = get_repo_root()
    except GitError:
        repo_root = Path.cwd()
    _, catalog = _load_catalog(repo_root, config)

    out = Console()
    table = Table(title="Secret patterns (evaluated in order)", border_style="dim")
    table.add_column("#", justify="right")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Category")
    table.add_column("Confidence")
    table.add_column("Regex", overflow="fold")
    for idx, p in enumerate(catalog.secret_patterns, 1):
        table.add_row(str(idx), p.id, Text(p.category), p.confidence.value, Text(p.pattern))
    out.print(table)

    out.print(f"\n[bold]Allowlist ({len(catalog.allowlist)})[/bold]")
    for a in catalog.allowlist:
        out.print(Text(f"  {a.pattern}"))
    out.print(f"\n[bold]Excluded paths ({len(catalog.exclude_paths)})[/bold]")
    for e in catalog.exclude_paths:
        out.print(Text(f"  {e.pattern}"))


# ── install / uninstall ───────────────────────────────────────────────────────


def _report_hook(result) -> None:
    mark = "[green]✓[/green]" if result.ok else "[red]✗[/red]"
    console.print(f"{mark} {escape(result.message)}", highlight=False)
    if not result.ok:
        raise typer.Exit(code=1)


@app.command()
def install(
    force: bool = typer.Option(
        False, "--force", help="Move an existing pre-commit hook aside and install anyway"
    ),
) -> None:
    """Install leakgate as a git pre-commit hook."""
    from leakgate.hooks.installer import install_hook

    _report_hook(install_hook(_resolve_repo_root(), force=force))


@app.command()
def uninstall() -> None:
    """Remove the leakgate pre-commit hook, restoring any hook it replaced."""
    from leakgate.hooks.installer import uninstall_hook

    _report_hook(uninstall_hook(_resolve_repo_root()))


# ── init ──────────────────────────────────────────────────────────────────────


@app.command()
def init() -> None:
    """Generate a starter .leakgate.toml in the repo root."""
    from leakgate.config.defaults import DEFAULT_TOML
    from leakgate.config.loader import CONFIG_FILENAME

    repo_root = _resolve_repo_root()
    config_path = repo_root / CONFIG_FILENAME

    if config_path.exists():
        console.print(f"[yellow]⚠[/yellow]  {CONFIG_FILENAME} already exists at {config_path}")
        raise typer.Exit(code=1)

    config_path.write_text(DEFAULT_TOML, encoding="utf-8")
    console.print(f"[green]✓[/green] Created {config_path}")


# ── version ───────────────────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        print(f"leakgate {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-V", callback=_version_callback,
        is_eager=True, help="Show version and exit",
    ),
) -> None:
    """leakgate — stop leaked credentials before they are committed."""
