"""Append-only JSONL audit log for mutating commands."""

from __future__ import annotations

import getpass
import os
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Generator

from wafctl.config import get_config
from wafctl.models import AuditEvent


def _get_actor() -> str:
    return os.environ.get("WAF_ACTOR") or getpass.getuser()


def _write_jsonl(path: Path, event: AuditEvent) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "a") as f:
        f.write(event.to_jsonl() + "\n")


def log_event(event: AuditEvent) -> None:
    """Append an audit event to the JSONL log (no-op when auditing is disabled)."""
    cfg = get_config()
    if not cfg.audit_enabled:
        return
    _write_jsonl(cfg.audit_jsonl_path, event)


@contextmanager
def audit(action: str, target: str = "", **params: Any) -> Generator[AuditEvent, None, None]:
    """Context manager that records timing and success/failure."""
    event = AuditEvent(
        actor=_get_actor(),
        action=action,
        target=target,
        params=params,
    )
    start = time.monotonic()
    try:
        yield event
        event.result = "success"
    except Exception as exc:
        event.result = "failure"
        event.error = str(exc)
        raise
    finally:
        event.duration_ms = int((time.monotonic() - start) * 1000)
        log_event(event)
