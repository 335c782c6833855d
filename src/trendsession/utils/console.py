"""Rich-based console output."""

from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich import box

# Global console instance
console = Console()

# Headless mode flag
_headless = False


def set_headless(headless: bool):
    """Set headless mode (disables rich output)."""
    global _headless
    _headless = headless


def print_header(title: str, subtitle: Optional[str] = None):
    """Print a styled header."""
    if _headless:
        console.print(f"\n=== {title} ===")
        if subtitle:
            console.print(f"    {subtitle}")
        return

    content = f"[bold magenta]{title}[/bold magenta]"
    if subtitle:
        content += f"\n[dim]{subtitle}[/dim]"

    console.print(Panel(content, box=box.DOUBLE_EDGE, padding=(1, 2)))


def print_stats_table(title: str, stats: dict):
    """Print a two-column key/value table."""
    table = Table(title=title, box=box.ROUNDED if not _headless else None)
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    for key, value in stats.items():
        table.add_row(key, str(value))

    console.print(table)


def print_cookie_table(cookies):
    """Print the cookies of a jar."""
    table = Table(title="Session Cookies", box=box.ROUNDED if not _headless else None)
    table.add_column("Name", style="cyan")
    table.add_column("Domain", style="green")
    table.add_column("Path")
    table.add_column("Secure", justify="center")

    for cookie in cookies:
        table.add_row(cookie.name, cookie.domain, cookie.path, "✓" if cookie.secure else "")

    console.print(table)


def print_success(message: str):
    """Print a success message."""
    console.print(f"[bold green]✓[/bold green] {message}")


def print_error(message: str):
    """Print an error message."""
    console.print(f"[bold red]✗[/bold red] {message}")


def print_warning(message: str):
    """Print a warning message."""
    console.print(f"[bold yellow]⚠[/bold yellow] {message}")


def print_info(message: str):
    """Print an info message."""
    console.print(f"[bold blue]ℹ[/bold blue] {message}")
