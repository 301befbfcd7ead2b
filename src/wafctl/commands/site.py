"""Site add / remove / list / show commands."""

from __future__ import annotations

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.syntax import Syntax
from rich.table import Table

from wafctl.audit import audit
from wafctl.config import WafConfig, get_config
from wafctl.errors import InvalidModeError, InvalidSiteError, SiteNotFoundError
from wafctl.models import Site, SiteMode, normalize_domain
from wafctl.services import certbot, nginx, site_store, vhost_renderer

console = Console()

_MODE_LABELS = {
    SiteMode.HTTP: "HTTP only",
    SiteMode.CUSTOM: "Custom SSL",
    SiteMode.AUTO: "Auto SSL (Let's Encrypt)",
}


def _build_site(domain: str, backend: str, mode: str) -> Site:
    try:
        site_mode = SiteMode(mode)
    except ValueError as exc:
        raise InvalidModeError(f"Unknown mode: {mode} (use http | auto | custom)") from exc
    try:
        return Site(domain=domain, backend=backend, mode=site_mode)
    except ValidationError as exc:
        raise InvalidSiteError("; ".join(err["msg"] for err in exc.errors())) from exc


def _domain_arg(domain: str) -> str:
    try:
        return normalize_domain(domain)
    except ValueError as exc:
        raise InvalidSiteError(str(exc)) from exc


def _publish(cfg: WafConfig, domain: str, content: str) -> None:
    """Write the config, keep it only if nginx -t accepts it, then reload."""
    with site_store.staged_site(cfg.sites_dir, domain, content):
        nginx.validate_config(cfg)
    nginx.reload(cfg, validate=False)


def add(
    domain: str = typer.Argument(help="Domain name (e.g. example.com)"),
    backend: str = typer.Argument(help="Upstream URL (e.g. http://10.0.0.5:3000)"),
    mode: str = typer.Argument(help="TLS mode: http | auto | custom"),
) -> None:
    """Add or update a site."""
    cfg = get_config()
    site = _build_site(domain, backend, mode)
    total = 4 if site.mode is SiteMode.AUTO else 2

    with audit("site.add", target=site.domain, backend=site.backend, mode=site.mode.value):
        console.print(f"Setting up {_MODE_LABELS[site.mode]} for [cyan]{site.domain}[/cyan]")

        console.print(f"[bold][1/{total}][/bold] Rendering site config")
        content = vhost_renderer.render(site, cfg.certs_dir)

        console.print(f"[bold][2/{total}][/bold] Validating and reloading NGINX")
        _publish(cfg, site.domain, content)

        if site.mode is SiteMode.AUTO:
            console.print(f"[bold][3/{total}][/bold] Requesting certificate")
            certbot.issue_cert(cfg, site.domain)

            console.print(f"[bold][4/{total}][/bold] Certificate obtained, switching to HTTPS")
            secure = vhost_renderer.render(site, cfg.certs_dir, certificate_ready=True)
            _publish(cfg, site.domain, secure)

    console.print(f"\n[green bold]Done![/green bold] {site.domain} → {escape(site.backend)}")


def remove(
    domain: str = typer.Argument(help="Domain to remove"),
) -> None:
    """Remove a site config and reload NGINX."""
    cfg = get_config()
    domain = _domain_arg(domain)
    target = site_store.site_path(cfg.sites_dir, domain)
    if not target.is_file():
        raise SiteNotFoundError(f"Site config not found: {target}")

    with audit("site.remove", target=domain):
        console.print("[bold][1/2][/bold] Removing site config")
        path = site_store.delete_site(cfg.sites_dir, domain)
        console.print(f"  Removed: {escape(str(path))}")

        console.print("[bold][2/2][/bold] Validating and reloading NGINX")
        nginx.reload(cfg)

    console.print(f"\n[green bold]Done![/green bold] {domain} removed.")


def list_sites() -> None:
    """List configured sites."""
    cfg = get_config()
    domains = site_store.list_sites(cfg.sites_dir)

    if not domains:
        console.print("No sites configured yet.")
        return

    # One name per line when piped
    if not console.is_terminal:
        for domain in domains:
            console.print(domain, markup=False, highlight=False, soft_wrap=True)
        return

    table = Table(title="Configured Sites")
    table.add_column("Domain", style="cyan", overflow="fold")
    table.add_column("TLS", style="yellow")

    for domain in domains:
        content = site_store.read_site(cfg.sites_dir, domain)
        table.add_row(domain, "yes" if "listen 443" in content else "no")

    console.print(table)


def show(
    domain: str = typer.Argument(help="Domain name to show config for"),
) -> None:
    """Display the NGINX config for a site."""
    cfg = get_config()
    content = site_store.read_site(cfg.sites_dir, _domain_arg(domain))
    console.print(Syntax(content, "nginx", theme="monokai"))
