# src/build/base_collaborators.py — v1
"""Abstract interfaces for the collaborators a build drives.

Route discovery, rendering, bundling and feed writing live outside the
cache; the orchestrator only sees these interfaces.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any

from ssxbuild.cache.models import PageDescriptor

if TYPE_CHECKING:
    from ssxbuild.build.models import BuildOptions, GeneratedPage


class BasePageDiscoverer(ABC):
    @abstractmethod
    async def discover(self, pages_dir: Path) -> list[PageDescriptor]:
        """Return every page to build. Raising aborts the build."""


class BaseContextBuilder(ABC):
    """Builds the shared data/store context once per build."""

    @abstractmethod
    async def build_context(self, pages: list[PageDescriptor]) -> Any:
        """Build the context shared by every page."""

    @abstractmethod
    def get_entity(self, context: Any, page: PageDescriptor) -> Any:
        """Look up the data entity of a page (by its module name)."""


class BaseRenderer(ABC):
    @abstractmethod
    async def render(self, context: Any, page: PageDescriptor, entity: Any) -> str:
        """Render one page to a full HTML document."""


class BaseMetadataExtractor(ABC):
    @abstractmethod
    async def extract(self, context: Any, page: PageDescriptor, entity: Any) -> Any:
        """Extract sitemap/RSS metadata for a page."""


class BaseAssetCopier(ABC):
    @abstractmethod
    async def copy(self, options: BuildOptions) -> None:
        """Copy static assets into the output directory."""


class BaseRuntimeScriptGenerator(ABC):
    @abstractmethod
    async def generate(self, context: Any, pages: list[PageDescriptor]) -> str:
        """Return the client runtime script source for the full route table."""


class BaseBundler(ABC):
    @abstractmethod
    async def bundle(self, options: BuildOptions) -> None:
        """Optimize the whole output directory. All-or-nothing."""


class BaseFeedWriter(ABC):
    """Sitemap or RSS writer."""

    @abstractmethod
    async def write(
        self,
        pages: list[GeneratedPage],
        options: BuildOptions,
        feed_options: dict[str, Any],
    ) -> None:
        """Write the feed for all generated pages into the output directory."""


@dataclass
class Collaborators:
    """Everything a build needs besides the cache itself."""

    discoverer: BasePageDiscoverer
    context_builder: BaseContextBuilder
    renderer: BaseRenderer
    runtime_script: BaseRuntimeScriptGenerator
    asset_copier: BaseAssetCopier | None = None
    bundler: BaseBundler | None = None
    metadata_extractor: BaseMetadataExtractor | None = None
    sitemap_writer: BaseFeedWriter | None = None
    rss_writer: BaseFeedWriter | None = None
