"""Tests for the flat-file site store."""

from __future__ import annotations

from pathlib import Path

import pytest

from wafctl.errors import NginxConfigError, SiteNotFoundError
from wafctl.services import site_store


class TestSiteStore:
    def test_write_creates_dir_and_file(self, tmp_path: Path):
        sites = tmp_path / "sites"
        path = site_store.write_site(sites, "example.com", "server {}\n")
        assert path == sites / "example.com.conf"
        assert path.read_text() == "server {}\n"

    def test_overwrite_last_write_wins(self, tmp_path: Path):
        site_store.write_site(tmp_path, "example.com", "first")
        site_store.write_site(tmp_path, "example.com", "second")
        assert site_store.read_site(tmp_path, "example.com") == "second"
        assert list(tmp_path.iterdir()) == [tmp_path / "example.com.conf"]

    def test_list_sorted(self, tmp_path: Path):
        for domain in ["b.example.com", "a.example.com", "c.example.com"]:
            site_store.write_site(tmp_path, domain, "x")
        (tmp_path / "notes.txt").write_text("ignored")
        assert site_store.list_sites(tmp_path) == ["a.example.com", "b.example.com", "c.example.com"]

    def test_list_missing_dir(self, tmp_path: Path):
        assert site_store.list_sites(tmp_path / "nope") == []

    def test_delete(self, tmp_path: Path):
        site_store.write_site(tmp_path, "example.com", "x")
        site_store.delete_site(tmp_path, "example.com")
        assert site_store.list_sites(tmp_path) == []

    def test_delete_missing(self, tmp_path: Path):
        with pytest.raises(SiteNotFoundError):
            site_store.delete_site(tmp_path, "nonexistent.com")

    def test_read_missing(self, tmp_path: Path):
        with pytest.raises(SiteNotFoundError):
            site_store.read_site(tmp_path, "nonexistent.com")

    def test_read_non_utf8(self, tmp_path: Path):
        (tmp_path / "legacy.com.conf").write_bytes(b"# caf\xe9\nlisten 443 ssl;\n")
        content = site_store.read_site(tmp_path, "legacy.com")
        assert "listen 443 ssl;" in content
        assert "\ufffd" in content


class TestStagedSite:
    def test_keeps_content_on_success(self, tmp_path: Path):
        with site_store.staged_site(tmp_path, "example.com", "new") as path:
            assert path.read_text() == "new"
        assert site_store.read_site(tmp_path, "example.com") == "new"

    def test_removes_new_file_on_failure(self, tmp_path: Path):
        with pytest.raises(NginxConfigError):
            with site_store.staged_site(tmp_path, "example.com", "broken"):
                raise NginxConfigError("nginx -t failed")
        assert not (tmp_path / "example.com.conf").exists()

    def test_restores_previous_on_failure(self, tmp_path: Path):
        site_store.write_site(tmp_path, "example.com", "good")
        with pytest.raises(NginxConfigError):
            with site_store.staged_site(tmp_path, "example.com", "broken"):
                raise NginxConfigError("nginx -t failed")
        assert site_store.read_site(tmp_path, "example.com") == "good"

    def test_restores_non_utf8_bytes_on_failure(self, tmp_path: Path):
        original = b"# caf\xe9\nserver {}\n"
        (tmp_path / "legacy.com.conf").write_bytes(original)
        with pytest.raises(NginxConfigError):
            with site_store.staged_site(tmp_path, "legacy.com", "broken"):
                raise NginxConfigError("nginx -t failed")
        assert (tmp_path / "legacy.com.conf").read_bytes() == original

    def test_no_temp_files_left(self, tmp_path: Path):
        site_store.write_site(tmp_path, "example.com", "good")
        with pytest.raises(NginxConfigError):
            with site_store.staged_site(tmp_path, "example.com", "broken"):
                raise NginxConfigError("nginx -t failed")
        assert sorted(p.name for p in tmp_path.iterdir()) == ["example.com.conf"]
