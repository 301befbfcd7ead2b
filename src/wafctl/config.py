"""Runtime configuration — WafConfig resolved once at startup."""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, Field

from wafctl.constants import (
    AUDIT_JSONL_NAME,
    CERTBOT_SERVICE,
    CERTS_DIR,
    COMPOSE_COMMAND,
    COMPOSE_FILE,
    CRON_COMPOSE_COMMAND,
    CRON_SCHEDULE,
    LOG_DIR,
    PROXY_SERVICE,
    RSA_KEY_SIZE,
    SITES_DIR,
)


def _default_root() -> Path:
    env = os.environ.get("WAF_ROOT")
    if env:
        return Path(env)
    # Walk up from the cwd to find the directory holding the compose file
    cwd = Path.cwd()
    for parent in [cwd, *cwd.parents]:
        if (parent / COMPOSE_FILE).is_file():
            return parent
    return cwd


def _env(name: str, default: str) -> str:
    return os.environ.get(name) or default


class WafConfig(BaseModel):
    """Runtime configuration resolved once at startup."""

    root: Path = Field(default_factory=_default_root)
    compose_command: str = Field(default_factory=lambda: _env("WAF_COMPOSE_COMMAND", COMPOSE_COMMAND))
    cron_compose_command: str = Field(
        default_factory=lambda: _env("WAF_CRON_COMPOSE_COMMAND", CRON_COMPOSE_COMMAND)
    )
    proxy_service: str = Field(default_factory=lambda: _env("WAF_PROXY_SERVICE", PROXY_SERVICE))
    certbot_service: str = Field(default_factory=lambda: _env("WAF_CERTBOT_SERVICE", CERTBOT_SERVICE))
    acme_email: str | None = Field(default_factory=lambda: os.environ.get("WAF_ACME_EMAIL") or None)
    rsa_key_size: int = Field(default_factory=lambda: int(_env("WAF_RSA_KEY_SIZE", str(RSA_KEY_SIZE))))
    cron_schedule: str = Field(default_factory=lambda: _env("WAF_CRON_SCHEDULE", CRON_SCHEDULE))
    audit_enabled: bool = Field(default_factory=lambda: os.environ.get("WAF_AUDIT", "1") != "0")

    @property
    def sites_dir(self) -> Path:
        return self.root / SITES_DIR

    @property
    def certs_dir(self) -> Path:
        return self.root / CERTS_DIR

    @property
    def compose_file(self) -> Path:
        return self.root / COMPOSE_FILE

    @property
    def log_dir(self) -> Path:
        return self.root / LOG_DIR

    @property
    def audit_jsonl_path(self) -> Path:
        return self.log_dir / AUDIT_JSONL_NAME

    def contact_email(self, domain: str) -> str:
        """ACME registration address: WAF_ACME_EMAIL or admin@<domain>."""
        return self.acme_email or f"admin@{domain}"


@lru_cache(maxsize=1)
def get_config() -> WafConfig:
    """Return the global WafConfig (resolved once, cached)."""
    return WafConfig()
