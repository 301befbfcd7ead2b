"""Root Typer application for wafctl."""

from __future__ import annotations

import logging
import sys

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from wafctl.commands import cron, proxy, site
from wafctl.errors import WafError

err_console = Console(stderr=True)

app = typer.Typer(
    name="wafctl",
    help="Manage reverse-proxy sites served by the WAF container.",
    no_args_is_help=True,
)


def _configure_logging(verbose: bool) -> None:
    logger = logging.getLogger("wafctl")
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        logger.addHandler(RichHandler(console=err_console, show_path=False))


@app.callback()
def callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging."),
) -> None:
    _configure_logging(verbose)


app.command(name="add")(site.add)
app.command(name="remove")(site.remove)
app.command(name="list")(site.list_sites)
app.command(name="show")(site.show)
app.command(name="test-config")(proxy.check_config)
app.command(name="reload")(proxy.reload)
app.command(name="setup-cron")(cron.setup_cron)


@app.command(name="help")
def help_command(ctx: typer.Context) -> None:
    """Show this help."""
    # rich-formatted help is printed while rendering and comes back empty
    help_text = ctx.parent.get_help()
    if help_text:
        typer.echo(help_text)


def run(argv: list[str] | None = None) -> int:
    """Invoke the CLI and map every failure to an exit code."""
    try:
        rv = app(args=argv, prog_name="wafctl", standalone_mode=False)
    except typer.Abort:
        err_console.print("Aborted.")
        return 1
    except WafError as exc:
        err_console.print(f"[red]Error:[/red] {escape(str(exc))}")
        return exc.exit_code
    except typer.TyperException as exc:
        # bare `wafctl` prints help and succeeds
        if type(exc).__name__ == "NoArgsIsHelpError":
            if exc.format_message():
                typer.echo(exc.format_message())
            return 0
        show = getattr(exc, "show", None)
        if show is not None:
            show()
        else:
            err_console.print(f"Error: {exc}", markup=False)
        return 1
    return rv if isinstance(rv, int) else 0


def main() -> None:
    sys.exit(run())


if __name__ == "__main__":
    main()
