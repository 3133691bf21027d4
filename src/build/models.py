# src/build/models.py — v1
"""Build-level models: resolved options, generated pages, build summary."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from ssxbuild.cache.models import PageDescriptor, RebuildReason
from ssxbuild.config.settings import Settings


class BuildOptions(BaseModel):
    """Options for one build, resolved from settings plus explicit overrides."""

    root_dir: Path = Path(".")
    out_dir: Path = Path("dist")
    pages_dir: Path = Path("src/pages")
    public_dir: Path = Path("public")
    entities_file: Path | None = Path("src/store/entities.py")
    incremental: bool = True
    force: bool = False
    prune_stale_output: bool = False
    render_concurrency: int = Field(default=4, ge=1)
    runtime_script_name: str = "main.js"
    sitemap: dict[str, Any] | None = None
    rss: dict[str, Any] | None = None

    @classmethod
    def from_settings(cls, settings: Settings, **overrides: Any) -> BuildOptions:
        """Merge settings with per-call overrides (overrides win)."""
        values: dict[str, Any] = {
            "root_dir": settings.root_dir,
            "out_dir": settings.out_dir,
            "pages_dir": settings.pages_dir,
            "public_dir": settings.public_dir,
            "entities_file": settings.entities_file,
            "incremental": settings.incremental,
            "force": settings.force,
            "prune_stale_output": settings.prune_stale_output,
            "render_concurrency": settings.render_concurrency,
            "runtime_script_name": settings.runtime_script_name,
            "sitemap": settings.sitemap_options,
            "rss": settings.rss_options,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

    @property
    def pages_path(self) -> Path:
        return self.root_dir / self.pages_dir

    @property
    def public_path(self) -> Path:
        return self.root_dir / self.public_dir

    @property
    def uses_manifest(self) -> bool:
        return self.incremental and not self.force


class GeneratedPage(BaseModel):
    """A page after generation: HTML for rendered pages, metadata for all."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    page: PageDescriptor
    html: str | None = None
    metadata: Any = None
    skipped: bool = False


class BuildSummary(BaseModel):
    """Result of a build: pages actually rendered vs reused."""

    changed: int = 0
    skipped: int = 0
    reason: RebuildReason | None = None
    duration_seconds: float = 0.0
    out_dir: str = ""
