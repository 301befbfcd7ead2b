"""Docker Compose subprocess wrappers."""

from __future__ import annotations

import logging
import shlex
import subprocess
from dataclasses import dataclass

from wafctl.config import WafConfig
from wafctl.errors import DockerError

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandResult:
    """Outcome of one external command."""

    args: tuple[str, ...]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def output(self) -> str:
        return "\n".join(s.strip() for s in (self.stdout, self.stderr) if s.strip())


def _run(cmd: list[str], *, check: bool = True) -> CommandResult:
    log.debug("Running: %s", shlex.join(cmd))
    try:
        completed = subprocess.run(
            cmd,
            check=False,
            capture_output=True,
            text=True,
        )
    except FileNotFoundError as exc:
        raise DockerError(f"Command not found: {cmd[0]}", exit_code=127) from exc

    result = CommandResult(
        args=tuple(cmd),
        returncode=completed.returncode,
        stdout=completed.stdout or "",
        stderr=completed.stderr or "",
    )
    log.debug("Exit %d: %s", result.returncode, shlex.join(cmd))
    if check and not result.ok:
        raise DockerError(
            f"Command failed: {shlex.join(cmd)}\nstderr: {result.stderr}",
            exit_code=result.returncode,
        )
    return result


def compose_base(cfg: WafConfig) -> list[str]:
    return [*shlex.split(cfg.compose_command), "-f", str(cfg.compose_file)]


def compose_exec(cfg: WafConfig, service: str, *cmd: str, check: bool = True) -> CommandResult:
    return _run([*compose_base(cfg), "exec", "-T", service, *cmd], check=check)


def compose_run(cfg: WafConfig, service: str, entrypoint: str, *cmd: str, check: bool = True) -> CommandResult:
    """One-off ``run --rm`` of a compose service with an explicit entrypoint."""
    return _run(
        [*compose_base(cfg), "run", "--rm", "--entrypoint", entrypoint, service, *cmd],
        check=check,
    )
