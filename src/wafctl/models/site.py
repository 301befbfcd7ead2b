"""Site model.

Domain and backend values end up verbatim inside NGINX server blocks and the
domain also names the file under ``sites/``, so both are checked against a
fixed schema before they reach a template.
"""

from __future__ import annotations

import re
from enum import Enum

from pydantic import BaseModel, field_validator

_LABEL = r"(?!-)[a-z0-9-]{1,63}(?<!-)"
_DOMAIN_RE = re.compile(rf"^{_LABEL}(?:\.{_LABEL})*$")
_BACKEND_RE = re.compile(r"^https?://[^\s;{}'\"\\$#]+$")


class SiteMode(str, Enum):
    """How TLS is configured for a site."""

    HTTP = "http"
    AUTO = "auto"
    CUSTOM = "custom"


def normalize_domain(value: str) -> str:
    """Lower-case and validate a hostname. Raises ValueError if malformed."""
    domain = value.strip().lower()
    if len(domain) > 253 or not _DOMAIN_RE.match(domain):
        raise ValueError(f"invalid domain name: {value!r}")
    return domain


def normalize_backend(value: str) -> str:
    """Validate an upstream URL for ``proxy_pass``. Raises ValueError if unsafe."""
    backend = value.strip()
    if not _BACKEND_RE.match(backend):
        raise ValueError(
            f"invalid backend URL: {value!r} (expected http(s)://host[:port][/path])"
        )
    return backend


class Site(BaseModel):
    """A domain's reverse-proxy configuration and its backend target."""

    domain: str
    backend: str
    mode: SiteMode = SiteMode.HTTP

    @field_validator("domain")
    @classmethod
    def _check_domain(cls, value: str) -> str:
        return normalize_domain(value)

    @field_validator("backend")
    @classmethod
    def _check_backend(cls, value: str) -> str:
        return normalize_backend(value)
