"""NGINX config validation and reload inside the WAF container."""

from __future__ import annotations

from wafctl.config import WafConfig
from wafctl.errors import NginxConfigError, NginxReloadError
from wafctl.services import docker
from wafctl.services.docker import CommandResult


def test_config(cfg: WafConfig) -> CommandResult:
    """Run ``nginx -t`` and return the raw outcome."""
    return docker.compose_exec(cfg, cfg.proxy_service, "nginx", "-t", check=False)


def validate_config(cfg: WafConfig) -> None:
    """Run nginx -t inside the container. Raises NginxConfigError on failure."""
    result = test_config(cfg)
    if not result.ok:
        raise NginxConfigError(
            f"NGINX config test failed:\n{result.output}",
            exit_code=result.returncode,
        )


def signal_reload(cfg: WafConfig) -> CommandResult:
    """Send ``nginx -s reload`` without validating first."""
    return docker.compose_exec(cfg, cfg.proxy_service, "nginx", "-s", "reload", check=False)


def reload(cfg: WafConfig, *, validate: bool = True) -> None:
    """Validate config (unless the caller just did), then reload NGINX."""
    if validate:
        validate_config(cfg)
    result = signal_reload(cfg)
    if not result.ok:
        raise NginxReloadError(
            f"NGINX reload failed:\n{result.output}",
            exit_code=result.returncode,
        )
