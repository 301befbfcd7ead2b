"""Scheduled reload installation."""

from __future__ import annotations

from rich.console import Console

from wafctl.audit import audit
from wafctl.config import get_config
from wafctl.services import cron

console = Console()


def setup_cron() -> None:
    """Install a daily 3AM NGINX reload cron job."""
    cfg = get_config()
    job = cron.reload_job(cfg)

    with audit("cron.setup", target=job):
        if cron.install_job(job):
            console.print("[green]Cron job added successfully.[/green]")
        else:
            console.print("Cron job already exists. Skipping.")
        console.print(f"  {job}", style="dim", markup=False)
