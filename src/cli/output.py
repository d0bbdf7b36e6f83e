"""Terminal output handling using Rich library.

This module provides the OutputHandler class for all CLI terminal output:
colored status lines, spinners, and plain listings of labels and pages.
"""

from contextlib import contextmanager
from typing import Iterable, Iterator

from rich.console import Console
from rich.live import Live
from rich.markup import escape
from rich.spinner import Spinner

from src.label_operations.models import ContentReference, LabelUsage, MutationResult


class OutputHandler:
    """Handles all terminal output using Rich library.

    Attributes:
        verbosity: Output verbosity level (0=summary, 1=info, 2=debug)
        console: Rich Console instance for output

    Example:
        >>> handler = OutputHandler(verbosity=1, no_color=False)
        >>> with handler.spinner("Fetching labels..."):
        ...     pass
        >>> handler.success("Done")
    """

    def __init__(self, verbosity: int = 0, no_color: bool = False):
        self.verbosity = verbosity
        self.console = Console(
            force_terminal=not no_color,
            no_color=no_color,
            highlight=False,
        )

    def success(self, message: str) -> None:
        self.console.print(f"[green]✓[/green] {escape(message)}")

    def error(self, message: str) -> None:
        self.console.print(f"[red]✗[/red] {escape(message)}", style="red")

    def warning(self, message: str) -> None:
        self.console.print(f"[yellow]⚠[/yellow] {escape(message)}", style="yellow")

    def info(self, message: str) -> None:
        """Display info message (only if verbosity >= 1)."""
        if self.verbosity >= 1:
            self.console.print(escape(message))

    def debug(self, message: str) -> None:
        """Display debug message (only if verbosity >= 2)."""
        if self.verbosity >= 2:
            self.console.print(f"[dim]{escape(message)}[/dim]")

    def print(self, message: str) -> None:
        self.console.print(escape(message))

    @contextmanager
    def spinner(self, message: str) -> Iterator[None]:
        """Display spinner for a single long-running operation.

        Example:
            >>> with handler.spinner("Fetching pages..."):
            ...     pages = procedures.get_pages()
        """
        spinner = Spinner("dots", text=message)
        with Live(spinner, console=self.console, refresh_per_second=10, transient=True):
            yield

    def print_labels(self, labels: Iterable[LabelUsage]) -> None:
        """One line per label, in the order given."""
        count = 0
        for label in labels:
            self.print(
                f"{label.name}  pages={label.page_count}  "
                f"blogposts={label.blog_post_count}  total={label.total_count}"
            )
            count += 1
        if count == 0:
            self.console.print("[yellow]No labels found[/yellow]")

    def print_pages(self, pages: Iterable[ContentReference]) -> None:
        count = 0
        for page in pages:
            self.print(f"{page.id}  {page.title}")
            count += 1
        if count == 0:
            self.console.print("[yellow]No pages found[/yellow]")

    def print_mutation_summary(self, result: MutationResult) -> None:
        """Display applied, skipped and failed steps of a bulk mutation."""
        self.console.print("\n[bold]Label Changes:[/bold]")

        attached = sum(1 for _, step in result.succeeded if step.startswith("+"))
        detached = len(result.succeeded) - attached
        if attached:
            self.console.print(f"  [green]+[/green] Attached: {attached}")
        if detached:
            self.console.print(f"  [red]-[/red] Detached: {detached}")
        for label in result.skipped:
            self.console.print(f"  [yellow]⊘[/yellow] Skipped: {escape(label)}")
        for content_id, reason in result.failed:
            self.console.print(f"  [red]✗[/red] Failed: {escape(content_id)} ({escape(reason)})")

        if not result.succeeded and not result.failed:
            self.console.print("\n[yellow]No content carried the given label(s)[/yellow]")
