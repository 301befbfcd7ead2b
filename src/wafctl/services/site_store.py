"""Flat-file site store: one ``<domain>.conf`` per site."""

from __future__ import annotations

import logging
import os
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from wafctl.errors import SiteNotFoundError

log = logging.getLogger(__name__)


def site_path(sites_dir: Path, domain: str) -> Path:
    return sites_dir / f"{domain}.conf"


def _atomic_write(path: Path, data: bytes) -> None:
    # Temp name does not end in .conf so NGINX never includes a partial file
    fd, tmp = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        os.replace(tmp, path)
    except BaseException:
        Path(tmp).unlink(missing_ok=True)
        raise


def write_site(sites_dir: Path, domain: str, content: str) -> Path:
    """Write (or overwrite) a site config. Last write wins."""
    sites_dir.mkdir(parents=True, exist_ok=True)
    path = site_path(sites_dir, domain)
    _atomic_write(path, content.encode())
    log.debug("Wrote %s (%d bytes)", path, len(content))
    return path


def read_site(sites_dir: Path, domain: str) -> str:
    path = site_path(sites_dir, domain)
    if not path.is_file():
        raise SiteNotFoundError(f"Site config not found: {path}")
    # Operator-edited files are not guaranteed to be UTF-8
    return path.read_text(encoding="utf-8", errors="replace")


def delete_site(sites_dir: Path, domain: str) -> Path:
    """Remove a site config. Raises SiteNotFoundError if absent."""
    path = site_path(sites_dir, domain)
    if not path.is_file():
        raise SiteNotFoundError(f"Site config not found: {path}")
    path.unlink()
    log.debug("Removed %s", path)
    return path


def list_sites(sites_dir: Path) -> list[str]:
    """Return configured domain names, sorted."""
    if not sites_dir.is_dir():
        return []
    return sorted(conf.stem for conf in sites_dir.glob("*.conf") if conf.is_file())


@contextmanager
def staged_site(sites_dir: Path, domain: str, content: str) -> Iterator[Path]:
    """Publish ``content`` for the duration of the block.

    If the block raises (typically a failed ``nginx -t``), the previous file
    is put back, or the new file removed if there was none, so a rejected
    render never stays in the store.
    """
    path = site_path(sites_dir, domain)
    previous = path.read_bytes() if path.is_file() else None
    write_site(sites_dir, domain, content)
    try:
        yield path
    except Exception:
        if previous is None:
            path.unlink(missing_ok=True)
            log.debug("Discarded rejected config %s", path)
        else:
            _atomic_write(path, previous)
            log.debug("Restored previous config %s", path)
        raise
