"""Crontab management for the scheduled NGINX reload."""

from __future__ import annotations

import logging
import subprocess

from wafctl.config import WafConfig
from wafctl.errors import CronError

log = logging.getLogger(__name__)


def reload_job(cfg: WafConfig) -> str:
    """The cron line that reloads NGINX so renewed certificates are picked up."""
    compose_dir = cfg.compose_file.resolve().parent
    return (
        f"{cfg.cron_schedule} cd {compose_dir} && "
        f"{cfg.cron_compose_command} exec -T {cfg.proxy_service} nginx -s reload"
    )


def read_crontab() -> str:
    """Current user's crontab; empty when none is installed."""
    try:
        result = subprocess.run(
            ["crontab", "-l"],
            capture_output=True, text=True, check=False,
        )
    except FileNotFoundError as exc:
        raise CronError("crontab is not installed") from exc
    return result.stdout if result.returncode == 0 else ""


def install_job(job: str) -> bool:
    """Append ``job`` unless an identical line exists. Returns True if added."""
    existing = read_crontab()
    if job in existing.splitlines():
        log.debug("Cron job already present: %s", job)
        return False

    lines = existing.splitlines() + [job]
    new_crontab = "\n".join(lines) + "\n"
    result = subprocess.run(
        ["crontab", "-"],
        input=new_crontab, capture_output=True, text=True, check=False,
    )
    if result.returncode != 0:
        raise CronError(f"Failed to install crontab:\n{result.stderr}")
    return True
