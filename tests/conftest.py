# tests/conftest.py — v1
"""Shared test fixtures: a small site on disk and in-memory collaborators.

The fake collaborators read page sources straight from disk so that
editing a source file between two builds changes the rendered HTML, the
same way a real renderer would.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import pytest

from ssxbuild.build.base_collaborators import (
    BaseBundler,
    BaseContextBuilder,
    BaseMetadataExtractor,
    BasePageDiscoverer,
    BaseRenderer,
    BaseRuntimeScriptGenerator,
    Collaborators,
)
from ssxbuild.build.models import BuildOptions
from ssxbuild.cache.models import PageDescriptor
from ssxbuild.logging.context import clear_context


# === FAKE COLLABORATORS ===


class FakeDiscoverer(BasePageDiscoverer):
    """Each ``<name>.py`` under the pages dir is a page; ``index.py`` is ``/``."""

    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.calls = 0

    async def discover(self, pages_dir: Path) -> list[PageDescriptor]:
        self.calls += 1
        if self.fail:
            raise SyntaxError("invalid syntax in about.py")
        pages = []
        for path in sorted(pages_dir.glob("*.py")):
            route = "/" if path.stem == "index" else f"/{path.stem}"
            pages.append(
                PageDescriptor(path=route, file_path=str(path), module_name=path.stem)
            )
        return pages


class FakeContextBuilder(BaseContextBuilder):
    def __init__(self) -> None:
        self.calls = 0

    async def build_context(self, pages: list[PageDescriptor]) -> dict[str, Any]:
        self.calls += 1
        return {page.module_name: {"title": page.module_name.title()} for page in pages}

    def get_entity(self, context: Any, page: PageDescriptor) -> Any:
        return context[page.module_name]


class FakeRenderer(BaseRenderer):
    def __init__(self, fail_on: str | None = None) -> None:
        self.fail_on = fail_on
        self.rendered: list[str] = []

    async def render(self, context: Any, page: PageDescriptor, entity: Any) -> str:
        if page.path == self.fail_on:
            raise RuntimeError("template blew up")
        self.rendered.append(page.path)
        body = Path(page.file_path).read_text(encoding="utf-8")
        return f"<html><title>{entity['title']}</title><body>{body}</body></html>"


class FakeMetadataExtractor(BaseMetadataExtractor):
    def __init__(self) -> None:
        self.extracted: list[str] = []

    async def extract(self, context: Any, page: PageDescriptor, entity: Any) -> Any:
        self.extracted.append(page.path)
        return {"title": entity["title"], "path": page.path}


class FakeRuntimeScript(BaseRuntimeScriptGenerator):
    def __init__(self) -> None:
        self.calls = 0

    async def generate(self, context: Any, pages: list[PageDescriptor]) -> str:
        self.calls += 1
        routes = ", ".join(f'"{p.path}"' for p in pages)
        return f"const routes = [{routes}];\n"


class RecordingBundler(BaseBundler):
    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.calls: list[BuildOptions] = []

    async def bundle(self, options: BuildOptions) -> None:
        self.calls.append(options)
        if self.fail:
            raise RuntimeError("bundler crashed")


# === FIXTURES ===


@pytest.fixture
def make_page():
    """Factory for PageDescriptor with sensible defaults."""

    def _make(path: str = "/", file_path: str | None = None, **kwargs: Any) -> PageDescriptor:
        name = path.strip("/") or "index"
        return PageDescriptor(
            path=path,
            file_path=file_path or f"src/pages/{name}.py",
            module_name=kwargs.pop("module_name", name),
            **kwargs,
        )

    return _make


@pytest.fixture
def site_dir(tmp_path: Path) -> Path:
    """Minimal site: three pages, a shared data file and one public asset."""
    root = tmp_path / "site"
    pages = root / "src" / "pages"
    pages.mkdir(parents=True)
    (pages / "index.py").write_text("home page\n", encoding="utf-8")
    (pages / "about.py").write_text("about page\n", encoding="utf-8")
    (pages / "blog.py").write_text("blog page\n", encoding="utf-8")

    store = root / "src" / "store"
    store.mkdir(parents=True)
    (store / "entities.py").write_text("ENTITIES = {'site': 'demo'}\n", encoding="utf-8")

    public = root / "public"
    public.mkdir()
    (public / "robots.txt").write_text("User-agent: *\n", encoding="utf-8")
    return root


@pytest.fixture
def collaborators() -> Collaborators:
    return Collaborators(
        discoverer=FakeDiscoverer(),
        context_builder=FakeContextBuilder(),
        renderer=FakeRenderer(),
        runtime_script=FakeRuntimeScript(),
        bundler=RecordingBundler(),
        metadata_extractor=FakeMetadataExtractor(),
    )


@pytest.fixture(autouse=True)
def _reset_ssxbuild_logging():
    """Drop handlers installed by setup_logging() during a test."""
    yield
    root = logging.getLogger("ssxbuild")
    for handler in root.handlers:
        handler.close()
    root.handlers.clear()
    root.setLevel(logging.NOTSET)
    clear_context()
