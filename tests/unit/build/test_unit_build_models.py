# tests/unit/build/test_unit_build_models.py — v1
"""Tests for build/models.py — option resolution and summaries."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from ssxbuild.build.models import BuildOptions, BuildSummary, GeneratedPage
from ssxbuild.config.settings import Settings


class TestBuildOptions:
    def test_from_default_settings(self):
        opts = BuildOptions.from_settings(Settings(_env_file=None))
        assert opts.out_dir == Path("dist")
        assert opts.incremental is True
        assert opts.force is False
        assert opts.sitemap is None
        assert opts.rss is None

    def test_overrides_win(self):
        s = Settings(_env_file=None, out_dir=Path("public_html"))
        opts = BuildOptions.from_settings(s, out_dir=Path("other"), force=True)
        assert opts.out_dir == Path("other")
        assert opts.force is True

    def test_none_overrides_ignored(self):
        s = Settings(_env_file=None, force=True)
        assert BuildOptions.from_settings(s, force=None).force is True

    def test_feed_options_from_settings(self):
        s = Settings(
            _env_file=None,
            sitemap_hostname="https://example.com",
            rss_link="https://example.com/feed",
            rss_title="Blog",
        )
        opts = BuildOptions.from_settings(s)
        assert opts.sitemap == {"hostname": "https://example.com"}
        assert opts.rss == {"link": "https://example.com/feed", "title": "Blog"}

    def test_paths_resolved_against_root(self):
        opts = BuildOptions(root_dir=Path("/site"))
        assert opts.pages_path == Path("/site/src/pages")
        assert opts.public_path == Path("/site/public")

    @pytest.mark.parametrize("incremental,force,expected", [
        (True, False, True),
        (True, True, False),
        (False, False, False),
        (False, True, False),
    ])
    def test_uses_manifest(self, incremental, force, expected):
        assert BuildOptions(incremental=incremental, force=force).uses_manifest is expected

    def test_concurrency_must_be_positive(self):
        with pytest.raises(ValidationError):
            BuildOptions(render_concurrency=0)


class TestBuildSummary:
    def test_defaults(self):
        s = BuildSummary()
        assert s.changed == 0
        assert s.skipped == 0
        assert s.reason is None


class TestGeneratedPage:
    def test_skipped_page(self, make_page):
        g = GeneratedPage(page=make_page("/"), metadata={"title": "Home"}, skipped=True)
        assert g.html is None
        assert g.metadata["title"] == "Home"
