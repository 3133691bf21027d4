# tests/unit/build/test_assets.py — v1
"""Tests for build/assets.py — public directory copier."""

from __future__ import annotations

from pathlib import Path

import pytest

from ssxbuild.build.assets import PublicDirCopier
from ssxbuild.build.models import BuildOptions


class TestPublicDirCopier:
    @pytest.mark.asyncio
    async def test_copies_tree(self, site_dir: Path, tmp_path: Path):
        (site_dir / "public" / "img").mkdir()
        (site_dir / "public" / "img" / "logo.svg").write_text("<svg/>", encoding="utf-8")
        out = tmp_path / "dist"

        await PublicDirCopier().copy(BuildOptions(root_dir=site_dir, out_dir=out))

        assert (out / "robots.txt").read_text(encoding="utf-8") == "User-agent: *\n"
        assert (out / "img" / "logo.svg").exists()

    @pytest.mark.asyncio
    async def test_merges_into_existing_output(self, site_dir: Path, tmp_path: Path):
        out = tmp_path / "dist"
        (out / "about").mkdir(parents=True)
        (out / "about" / "index.html").write_text("kept", encoding="utf-8")
        (out / "robots.txt").write_text("old", encoding="utf-8")

        await PublicDirCopier().copy(BuildOptions(root_dir=site_dir, out_dir=out))

        assert (out / "about" / "index.html").read_text(encoding="utf-8") == "kept"
        assert (out / "robots.txt").read_text(encoding="utf-8") == "User-agent: *\n"

    @pytest.mark.asyncio
    async def test_missing_public_dir_is_noop(self, tmp_path: Path):
        out = tmp_path / "dist"
        await PublicDirCopier().copy(BuildOptions(root_dir=tmp_path, out_dir=out))
        assert not out.exists()
