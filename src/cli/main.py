"""Main CLI entry point for the label-organizer command.

This module provides the Typer application that lists label usage and
pages in a Confluence space and adds, deletes or merges labels.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import typer

from src.cli.config import ConfigLoader
from src.cli.errors import CLIError
from src.cli.models import ExitCode
from src.cli.output import OutputHandler
from src.confluence_client.api_wrapper import APIWrapper
from src.confluence_client.auth import Authenticator
from src.confluence_client.errors import APIError
from src.label_operations.errors import BulkMutationError, ValidationError
from src.label_operations.procedures import LabelProcedures

app = typer.Typer(
    name="label-organizer",
    help="""List, add, delete and merge labels in a Confluence space.

EXAMPLES:
  label-organizer labels --space TEAM           # Label usage counts
  label-organizer pages                         # Pages (id and title)
  label-organizer add howto 123456 234567       # Attach a label to pages
  label-organizer delete obsolete draft         # Remove labels everywhere
  label-organizer merge how-to howto --into howto-guide""",
    add_completion=False,
    rich_markup_mode=None,
    no_args_is_help=False,
    invoke_without_command=True,
)

logger = logging.getLogger(__name__)

VERSION = "0.1.0"

SPACE_OPTION_HELP = "Space key to operate on (default: first listed space, then the configured fallback)"


def _configure_logging(verbosity: int, logdir: Optional[str] = None) -> None:
    """Configure logging based on verbosity level.

    Configures only the 'src' namespace logger to avoid affecting third-party
    libraries. The root logger is left unchanged.

    Args:
        verbosity: Verbosity level (0=WARNING, 1=INFO, 2=DEBUG)
        logdir: Optional directory for log files (creates timestamped log file)
    """
    if verbosity == 0:
        level = logging.WARNING
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG

    app_logger = logging.getLogger("src")
    app_logger.setLevel(level)
    app_logger.handlers.clear()

    date_format = "%Y-%m-%d %H:%M:%S"
    formatter = logging.Formatter("%(asctime)s [%(levelname)8s] %(message)s", datefmt=date_format)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    app_logger.addHandler(console_handler)

    if logdir:
        log_path = Path(logdir)
        log_path.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = log_path / f"label-organizer_{timestamp}.log"

        file_formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt=date_format
        )
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(file_formatter)
        app_logger.addHandler(file_handler)

        logger.info(f"Logging to file: {log_file}")


def _context(space: Optional[str]) -> Optional[Dict[str, Any]]:
    return {"spaceKey": space} if space else None


def _run(ctx: typer.Context, action: Callable[[LabelProcedures, OutputHandler], None]) -> None:
    """Build the procedures from config and run one command.

    Every failure is reported on the console and turned into an exit code.
    """
    settings = ctx.obj
    output = OutputHandler(verbosity=settings["verbosity"], no_color=settings["no_color"])

    try:
        config = ConfigLoader.load(settings["config_path"])
        api = APIWrapper(Authenticator(), timeout=config.request_timeout)
        procedures = LabelProcedures(api, config)
        action(procedures, output)

    except BulkMutationError as e:
        logger.error(f"Bulk mutation stopped: {e}")
        output.print_mutation_summary(e.result)
        output.error(f"Stopped after {len(e.result.succeeded)} applied step(s): {e.error}")
        raise typer.Exit(ExitCode.PARTIAL_FAILURE)

    except (ValidationError, CLIError, APIError) as e:
        logger.error(f"Command failed: {e}")
        output.error(str(e))
        raise typer.Exit(ExitCode.for_error(e))

    except typer.Exit:
        raise

    except Exception as e:
        logger.exception("Unexpected error")
        output.error(f"Unexpected error: {e}")
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    raise typer.Exit(ExitCode.SUCCESS)


@app.callback()
def main_callback(
    ctx: typer.Context,
    config_path: str = typer.Option(
        ConfigLoader.DEFAULT_CONFIG_PATH,
        "--config",
        help="Path to the YAML configuration file",
        metavar="PATH",
    ),
    logdir: Optional[str] = typer.Option(
        None,
        "--logdir",
        help="Directory for log files (creates timestamped log file)",
    ),
    verbosity: int = typer.Option(
        0,
        "--verbosity",
        "-v",
        help="Verbosity level: 0=summary, 1=info, 2=debug",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit",
    ),
) -> None:
    """List, add, delete and merge labels in a Confluence space."""
    if version:
        typer.echo(f"label-organizer version {VERSION}")
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()

    _configure_logging(verbosity, logdir)
    ctx.obj = {
        "config_path": config_path,
        "verbosity": verbosity,
        "no_color": no_color,
    }


@app.command("labels")
def labels_command(
    ctx: typer.Context,
    space: Optional[str] = typer.Option(None, "--space", "-s", help=SPACE_OPTION_HELP),
) -> None:
    """Show every label with its page, blog post and total counts."""
    def action(procedures: LabelProcedures, output: OutputHandler) -> None:
        with output.spinner("Fetching labels..."):
            labels = procedures.get_labels(_context(space))
        output.print_labels(labels)

    _run(ctx, action)


@app.command("pages")
def pages_command(
    ctx: typer.Context,
    space: Optional[str] = typer.Option(None, "--space", "-s", help=SPACE_OPTION_HELP),
) -> None:
    """Show id and title of every current page."""
    def action(procedures: LabelProcedures, output: OutputHandler) -> None:
        with output.spinner("Fetching pages..."):
            pages = procedures.get_pages(_context(space))
        output.print_pages(pages)

    _run(ctx, action)


@app.command("add")
def add_command(
    ctx: typer.Context,
    label: str = typer.Argument(..., help="Label to attach"),
    page_ids: List[str] = typer.Argument(..., help="IDs of the pages to label"),
) -> None:
    """Attach a label to the given pages."""
    def action(procedures: LabelProcedures, output: OutputHandler) -> None:
        with output.spinner(f"Adding label '{label}'..."):
            result = procedures.add_label(label, page_ids)
        output.print_mutation_summary(result)
        output.success(f"Label '{label}' added to {len(result.succeeded_ids)} page(s)")

    _run(ctx, action)


@app.command("delete")
def delete_command(
    ctx: typer.Context,
    labels: List[str] = typer.Argument(..., help="Labels to remove from all content"),
    space: Optional[str] = typer.Option(None, "--space", "-s", help=SPACE_OPTION_HELP),
) -> None:
    """Remove labels from every page and blog post carrying them."""
    def action(procedures: LabelProcedures, output: OutputHandler) -> None:
        with output.spinner("Deleting labels..."):
            result = procedures.delete_labels(labels, _context(space))
        output.print_mutation_summary(result)
        output.success(f"Deleted {len(labels)} label(s)")

    _run(ctx, action)


@app.command("merge")
def merge_command(
    ctx: typer.Context,
    sources: List[str] = typer.Argument(..., help="Labels to merge away"),
    into: str = typer.Option(..., "--into", help="Label that replaces the sources"),
    space: Optional[str] = typer.Option(None, "--space", "-s", help=SPACE_OPTION_HELP),
) -> None:
    """Replace source labels with a single target label on all their content."""
    def action(procedures: LabelProcedures, output: OutputHandler) -> None:
        with output.spinner(f"Merging into '{into}'..."):
            result = procedures.merge_labels(sources, into, _context(space))
        output.print_mutation_summary(result)
        output.success(f"Merged {len(sources) - len(result.skipped)} label(s) into '{into}'")

    _run(ctx, action)


def main() -> None:
    """Main entry point for the CLI application."""
    app()


# Allow running as: python -m src.cli.main
if __name__ == "__main__":
    main()
