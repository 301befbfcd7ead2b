"""Custom exceptions for wafctl."""

from __future__ import annotations


class WafError(Exception):
    """Base exception for all wafctl operations."""

    def __init__(self, message: str, *, exit_code: int = 1):
        super().__init__(message)
        self.exit_code = exit_code


class UsageError(WafError):
    """Missing or malformed command-line arguments."""


class InvalidSiteError(UsageError):
    """Domain or backend rejected by site validation."""


class InvalidModeError(WafError):
    """Mode is not one of http, auto, custom."""


class MissingCredentialError(WafError):
    """Custom-mode certificate or key file is absent."""


class CertbotError(WafError):
    """Certbot operation failed."""


class NginxConfigError(WafError):
    """NGINX configuration validation failed."""


class NginxReloadError(WafError):
    """NGINX accepted the config but the reload signal failed."""


class SiteNotFoundError(WafError):
    """Requested site config does not exist."""


class DockerError(WafError):
    """Docker/Compose operation failed."""


class CronError(WafError):
    """Crontab could not be read or written."""
