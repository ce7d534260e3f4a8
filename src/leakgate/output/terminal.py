"""Rich terminal reporter — findings table, summary, remediation hints."""

from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from leakgate.config.loader import CONFIG_FILENAME
from leakgate.findings.models import ScanResult
from leakgate.findings.redactor import REDACTED, redact

REMEDIATION_HINTS = (
    f"If these are false positives, add an allowlist regex under [patterns] in {CONFIG_FILENAME}",
    "or append a '# leakgate-ignore' comment to the line.",
    "Use example placeholders like: YOUR_API_KEY_HERE",
)


def render(
    result: ScanResult,
    *,
    ci_mode: bool = False,
    show_summary: bool = True,
    console: Optional[Console] = None,
) -> None:
    """Print scan results to the terminal using Rich."""
    console = console or Console(stderr=True)

    if not result.findings:
        console.print()
        if result.scanned_files:
            console.print(
                f"[bold green]✓ Checked {result.scanned_files} file(s) - "
                "no secrets detected[/bold green]"
            )
        else:
            console.print("[bold green]✓ No eligible files to check[/bold green]")
        if show_summary:
            _print_summary(console, result)
        return

    console.print()
    table = Table(
        title="leakgate findings",
        show_lines=True,
        title_style="bold",
        border_style="dim",
    )
    table.add_column("File", style="magenta")
    table.add_column("Line", justify="right", style="green")
    table.add_column("Category", style="cyan", min_width=16)
    table.add_column("Match", min_width=12)
    table.add_column("Context", overflow="fold")

    # Cells hold file content, so wrap in Text to keep Rich markup out of it.
    for finding in result.findings:
        table.add_row(
            Text(finding.file),
            str(finding.line_no),
            Text(finding.category),
            Text(redact(finding.matched_value, ci_mode=ci_mode)),
            Text(REDACTED if ci_mode else finding.snippet),
        )

    console.print(table)

    if show_summary:
        _print_summary(console, result)

    console.print()
    console.print(
        f"[bold red]✗ Found {result.total_findings} potential secret(s). "
        "Commit will be rejected.[/bold red]"
    )
    for hint in REMEDIATION_HINTS:
        console.print(f"[yellow]{escape(hint)}[/yellow]", highlight=False)


def _print_summary(console: Console, result: ScanResult) -> None:
    console.print()
    console.print(f"[dim]Files scanned:[/dim]  {result.scanned_files}")
    console.print(f"[dim]Findings:[/dim]       {result.total_findings}")
    console.print(f"[dim]Skipped:[/dim]        {len(result.skipped_files)}")
    console.print(f"[dim]Verdict:[/dim]        {result.verdict.value.upper()}")
    console.print(f"[dim]Duration:[/dim]       {result.scan_duration_ms:.0f}ms")
