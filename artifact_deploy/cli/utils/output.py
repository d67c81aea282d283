# artifact_deploy/cli/utils/output.py
"""Output formatting utilities"""

from typing import List, Optional

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ...api.exceptions import ArtifactDeployError
from ...constants import EMOJI_ERROR, EMOJI_SUCCESS, EMOJI_WARNING
from ...models import DeployResult, StatusResult, VerifyResult

console = Console()


def format_deploy_result(result: DeployResult) -> None:
    """Format and display deploy operation result"""
    if result.deployed:
        headline = f"[green]{EMOJI_SUCCESS}[/green] Deployment completed successfully!"
        border = "green"
    else:
        headline = f"[green]{EMOJI_SUCCESS}[/green] Release is up to date, nothing extracted"
        border = "blue"

    lines = [
        headline,
        "",
        f"[bold]Name:[/bold] {result.name}",
        f"[bold]Version:[/bold] {result.version}",
        f"[bold]Release:[/bold] {result.release_path}",
        f"[bold]Decision:[/bold] {result.decision}",
    ]

    if result.previous_version and result.previous_version != result.version:
        lines.append(f"[bold]Previous:[/bold] {result.previous_version}")

    if result.changed_files:
        lines.append(f"[bold]Changed files:[/bold] {len(result.changed_files)}")

    if result.hooks_run:
        lines.append(f"[bold]Hooks:[/bold] {', '.join(result.hooks_run)}")

    if result.pruned_versions:
        lines.append(f"[bold]Pruned:[/bold] {', '.join(result.pruned_versions)}")

    if result.duration is not None:
        lines.append("")
        lines.append(f"[dim]Duration: {result.duration:.2f}s[/dim]")

    panel = Panel(
        "\n".join(lines),
        title="Deploy Result",
        border_style=border
    )
    console.print(panel)


def format_status(result: StatusResult) -> None:
    """Format and display the installed releases"""
    lines = [
        f"[bold]Name:[/bold] {result.name}",
        f"[bold]Current:[/bold] {result.current_version or '[yellow]none[/yellow]'}",
        f"[bold]Link:[/bold] {result.current_path}",
    ]

    if result.current_version:
        if result.drifted:
            lines.append(f"[bold]Drift:[/bold] [red]{len(result.changed_files)} changed file(s)[/red]")
        elif not result.warnings:
            lines.append("[bold]Drift:[/bold] [green]none[/green]")

    panel = Panel(
        "\n".join(lines),
        title="Release Status",
        border_style="red" if result.drifted else "blue"
    )
    console.print(panel)

    if result.previous_versions:
        table = Table(title="Retained Releases", box=box.SIMPLE)
        table.add_column("#", justify="right", style="dim")
        table.add_column("Version", style="cyan")

        for index, version in enumerate(result.previous_versions, 1):
            table.add_row(str(index), version)

        console.print(table)

    _print_changed_files(result.changed_files)

    for warning in result.warnings:
        print_warning(warning)


def format_verification_result(result: VerifyResult) -> None:
    """Format and display verification result"""
    if result.drifted:
        console.print(f"[red]{EMOJI_ERROR} Release {result.version} differs from its manifest[/red]")
        _print_changed_files(result.changed_files)
    else:
        console.print(f"[green]{EMOJI_SUCCESS} Release {result.version} matches its manifest[/green]")


def format_prune_result(removed: List[str], keep: int) -> None:
    """Format and display removed releases"""
    if not removed:
        console.print(f"[green]{EMOJI_SUCCESS}[/green] Nothing to prune (keeping: {keep})")
        return

    console.print(f"[green]{EMOJI_SUCCESS}[/green] Deleted {len(removed)} release(s) (keeping: {keep})")
    for version in removed:
        console.print(f"  • {version}")


def _print_changed_files(changed_files: List[str]) -> None:
    if not changed_files:
        return
    console.print("\n[bold red]Changed files:[/bold red]")
    for path in changed_files:
        console.print(f"  • {path}")


def print_error(message: str, error: Optional[Exception] = None) -> None:
    """Print error panel"""
    body = f"[red]{EMOJI_ERROR} {message}[/red]"
    if isinstance(error, ArtifactDeployError) and error.error_code:
        body += f"\n\n[dim]Error code: {error.error_code}[/dim]"

    console.print(Panel(body, title="Error", border_style="red"))


def print_warning(message: str) -> None:
    """Print warning message"""
    console.print(f"[yellow]{EMOJI_WARNING} Warning:[/yellow] {message}")


def print_success(message: str) -> None:
    """Print success message"""
    console.print(f"[green]{EMOJI_SUCCESS}[/green] {message}")
