# tests/unit/cache/test_unit_cache_models.py — v1
"""Tests for cache/models.py — page descriptors, manifest and plan models."""

from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from ssxbuild.cache.models import Manifest, PageDescriptor, PageRecord, RebuildPlan


class TestPageDescriptor:
    def test_create(self):
        page = PageDescriptor(
            path="/blog/post-1",
            file_path="src/pages/blog/_slug.py",
            module_name="post",
            locale="it",
            pattern="/blog/:slug",
            params={"slug": "post-1"},
        )
        assert page.locale == "it"
        assert page.params["slug"] == "post-1"

    def test_frozen(self, make_page):
        page = make_page("/about")
        with pytest.raises(ValidationError):
            page.path = "/other"  # type: ignore[misc]

    def test_defaults(self, make_page):
        page = make_page("/about")
        assert page.locale is None
        assert page.params == {}


class TestPageRecord:
    def test_accepts_alias_and_field_name(self):
        assert PageRecord(hash="h", filePath="a.py").file_path == "a.py"
        assert PageRecord(hash="h", file_path="a.py").file_path == "a.py"

    def test_null_hash_allowed(self):
        assert PageRecord(hash=None, file_path="a.py").hash is None


class TestManifest:
    def test_empty_sentinel(self):
        m = Manifest.empty()
        assert m.pages == {}
        assert m.entities is None
        assert m.runtime is None
        assert m.build_time is None
        assert m.is_empty is True

    def test_not_empty_with_entities(self):
        assert Manifest(entities="e1").is_empty is False

    def test_previous_hash(self):
        m = Manifest(pages={"/a": PageRecord(hash="h1", file_path="a.py")}, entities="e")
        assert m.previous_hash("/a") == "h1"
        assert m.previous_hash("/missing") is None

    def test_json_uses_camel_case(self):
        m = Manifest(
            pages={"/": PageRecord(hash="h", file_path="index.py")},
            entities="e", runtime="r", build_time="2026-01-01T00:00:00+00:00",
        )
        data = json.loads(m.to_json())
        assert data["buildTime"] == "2026-01-01T00:00:00+00:00"
        assert data["pages"]["/"] == {"hash": "h", "filePath": "index.py"}
        assert set(data) == {"pages", "entities", "runtime", "buildTime"}

    def test_parse_camel_case_document(self):
        m = Manifest.model_validate({
            "pages": {"/": {"hash": "h", "filePath": "index.py"}},
            "entities": "e", "runtime": None, "buildTime": None,
        })
        assert m.pages["/"].file_path == "index.py"
        assert m.runtime is None


class TestRebuildPlan:
    def test_defaults(self):
        plan = RebuildPlan()
        assert plan.to_build == []
        assert plan.to_skip == []
        assert plan.reason == "per_page"
