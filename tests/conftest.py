"""Shared test fixtures."""

from __future__ import annotations

import subprocess
from pathlib import Path

import pytest

from wafctl.config import WafConfig, get_config

_ENV_VARS = [
    "WAF_ROOT",
    "WAF_COMPOSE_COMMAND",
    "WAF_CRON_COMPOSE_COMMAND",
    "WAF_PROXY_SERVICE",
    "WAF_CERTBOT_SERVICE",
    "WAF_ACME_EMAIL",
    "WAF_RSA_KEY_SIZE",
    "WAF_CRON_SCHEDULE",
    "WAF_AUDIT",
    "FORCE_COLOR",
    "TTY_COMPATIBLE",
]


@pytest.fixture
def tmp_config(tmp_path: Path, monkeypatch) -> WafConfig:
    """Point the cached WafConfig at a temp project root."""
    for var in _ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("WAF_ROOT", str(tmp_path))
    monkeypatch.setenv("WAF_ACTOR", "tester")
    (tmp_path / "docker-compose.yml").write_text("services: {}\n")
    get_config.cache_clear()
    yield get_config()
    get_config.cache_clear()


class FakeRun:
    """Stand-in for subprocess.run that records commands.

    Commands containing a token registered with ``fail`` exit with the given
    code; everything else succeeds.
    """

    def __init__(self) -> None:
        self.calls: list[list[str]] = []
        self.exit_codes: dict[str, int] = {}

    def fail(self, token: str, code: int = 1) -> None:
        self.exit_codes[token] = code

    def __call__(self, cmd, **kwargs):
        cmd = list(cmd)
        self.calls.append(cmd)
        code = next((c for token, c in self.exit_codes.items() if token in cmd), 0)
        return subprocess.CompletedProcess(
            cmd, code, stdout="", stderr="simulated failure" if code else ""
        )

    def matching(self, *tokens: str) -> list[list[str]]:
        return [c for c in self.calls if all(t in c for t in tokens)]


@pytest.fixture
def fake_run(monkeypatch) -> FakeRun:
    runner = FakeRun()
    monkeypatch.setattr("wafctl.services.docker.subprocess.run", runner)
    return runner


class FakeCrontab:
    """Stand-in for the crontab binary backed by an in-memory string."""

    def __init__(self, content: str | None = None) -> None:
        self.content = content
        self.writes = 0

    def __call__(self, cmd, input=None, **kwargs):
        if cmd == ["crontab", "-l"]:
            if self.content is None:
                return subprocess.CompletedProcess(cmd, 1, "", "no crontab for tester\n")
            return subprocess.CompletedProcess(cmd, 0, self.content, "")
        if cmd == ["crontab", "-"]:
            self.content = input
            self.writes += 1
            return subprocess.CompletedProcess(cmd, 0, "", "")
        raise AssertionError(f"unexpected command: {cmd}")


@pytest.fixture
def fake_crontab(monkeypatch) -> FakeCrontab:
    crontab = FakeCrontab()
    monkeypatch.setattr("wafctl.services.cron.subprocess.run", crontab)
    return crontab
