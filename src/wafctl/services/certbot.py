"""Certbot certificate issuance."""

from __future__ import annotations

from wafctl.config import WafConfig
from wafctl.constants import ACME_WEBROOT
from wafctl.errors import CertbotError
from wafctl.services import docker


def issue_cert(cfg: WafConfig, domain: str) -> None:
    """Issue a Let's Encrypt certificate via HTTP-01 webroot challenge."""
    result = docker.compose_run(
        cfg,
        cfg.certbot_service,
        "certbot",
        "certonly", "--webroot", "--webroot-path", ACME_WEBROOT,
        "-d", domain,
        "--email", cfg.contact_email(domain),
        "--rsa-key-size", str(cfg.rsa_key_size),
        "--agree-tos", "--no-eff-email", "--non-interactive",
        check=False,
    )
    if not result.ok:
        raise CertbotError(f"Certbot failed for {domain}. Check logs/DNS.\n{result.output}")
