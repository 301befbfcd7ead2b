"""Jinja2-based NGINX server-block renderer."""

from __future__ import annotations

from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

from wafctl.constants import LETSENCRYPT_LIVE_DIR, NGINX_CERTS_DIR, NGINX_SNIPPETS_DIR
from wafctl.errors import MissingCredentialError
from wafctl.models import Site, SiteMode

_TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"


def _get_env() -> Environment:
    return Environment(
        loader=FileSystemLoader(str(_TEMPLATE_DIR)),
        autoescape=select_autoescape([]),
        undefined=StrictUndefined,
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )


def local_credentials(certs_dir: Path, domain: str) -> tuple[Path, Path]:
    """Host paths of the custom certificate and key for ``domain``."""
    return certs_dir / f"{domain}.crt", certs_dir / f"{domain}.key"


def render_http_vhost(site: Site) -> str:
    """Render the plaintext server block (also the ACME pre-issuance form)."""
    template = _get_env().get_template("site_http.conf.j2")
    return template.render(site=site, snippets_dir=NGINX_SNIPPETS_DIR)


def render_custom_vhost(site: Site) -> str:
    """Render HTTP redirect + SSL block using operator-supplied credentials."""
    template = _get_env().get_template("site_https.conf.j2")
    return template.render(
        site=site,
        snippets_dir=NGINX_SNIPPETS_DIR,
        acme_challenge=False,
        ssl_certificate=NGINX_CERTS_DIR / f"{site.domain}.crt",
        ssl_certificate_key=NGINX_CERTS_DIR / f"{site.domain}.key",
    )


def render_auto_vhost(site: Site) -> str:
    """Render HTTP redirect + SSL block using the Let's Encrypt live paths."""
    live = LETSENCRYPT_LIVE_DIR / site.domain
    template = _get_env().get_template("site_https.conf.j2")
    return template.render(
        site=site,
        snippets_dir=NGINX_SNIPPETS_DIR,
        acme_challenge=True,
        ssl_certificate=live / "fullchain.pem",
        ssl_certificate_key=live / "privkey.pem",
    )


def render(site: Site, certs_dir: Path, *, certificate_ready: bool = False) -> str:
    """Render the config text for ``site`` according to its mode.

    Auto-mode sites render the plaintext form until ``certificate_ready`` is
    set, which happens only after Certbot has succeeded. Custom-mode sites
    raise MissingCredentialError when the certificate or key is not present
    under ``certs_dir``.
    """
    if site.mode is SiteMode.HTTP:
        return render_http_vhost(site)

    if site.mode is SiteMode.CUSTOM:
        missing = [p for p in local_credentials(certs_dir, site.domain) if not p.is_file()]
        if missing:
            names = " or ".join(p.name for p in missing)
            raise MissingCredentialError(f"{names} not found in {certs_dir}/")
        return render_custom_vhost(site)

    if certificate_ready:
        return render_auto_vhost(site)
    return render_http_vhost(site)
