"""Pass-through commands for the NGINX container."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.markup import escape

from wafctl.config import get_config
from wafctl.services import nginx
from wafctl.services.docker import CommandResult

console = Console()


def _echo_output(result: CommandResult) -> None:
    if result.output:
        console.print(escape(result.output), style="dim")


def check_config() -> None:
    """Run 'nginx -t' inside the WAF container."""
    cfg = get_config()
    console.print(f"Testing NGINX configuration inside {escape(cfg.proxy_service)} container...")
    result = nginx.test_config(cfg)
    _echo_output(result)
    if not result.ok:
        console.print("[red]NGINX config test failed.[/red]")
        raise typer.Exit(result.returncode)
    console.print("[green]NGINX config OK.[/green]")


def reload() -> None:
    """Reload NGINX (after testing config)."""
    cfg = get_config()

    console.print("[bold][1/2][/bold] Testing NGINX configuration")
    result = nginx.test_config(cfg)
    if not result.ok:
        _echo_output(result)
        console.print("[red]NGINX config test failed, not reloading.[/red]")
        raise typer.Exit(result.returncode)

    console.print(f"[bold][2/2][/bold] Reloading NGINX inside {escape(cfg.proxy_service)} container")
    result = nginx.signal_reload(cfg)
    _echo_output(result)
    if not result.ok:
        console.print("[red]NGINX reload failed.[/red]")
        raise typer.Exit(result.returncode)
    console.print("[green]NGINX reloaded.[/green]")
