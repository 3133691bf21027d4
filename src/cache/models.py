# src/cache/models.py — v1
"""Cache domain models: PageDescriptor, PageRecord, Manifest, RebuildPlan.

The manifest is persisted with camelCase keys (``filePath``, ``buildTime``);
validation accepts either the camelCase alias or the Python field name.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

# Hex digest, or None when the input could not be read.
ContentHash = str | None

RebuildReason = Literal[
    "no_manifest", "entities_changed", "runtime_changed", "per_page"
]


class PageDescriptor(BaseModel):
    """One routable output unit produced by page discovery."""

    model_config = ConfigDict(frozen=True)

    path: str
    file_path: str
    module_name: str
    locale: str | None = None
    pattern: str | None = None
    params: dict[str, str] = Field(default_factory=dict)


class PageRecord(BaseModel):
    """Persisted per-page cache entry."""

    model_config = ConfigDict(populate_by_name=True)

    hash: ContentHash
    file_path: str = Field(alias="filePath")


class Manifest(BaseModel):
    """Full persisted cache state of one output directory."""

    model_config = ConfigDict(populate_by_name=True)

    pages: dict[str, PageRecord] = Field(default_factory=dict)
    entities: ContentHash = None
    runtime: ContentHash = None
    build_time: str | None = Field(default=None, alias="buildTime")

    @classmethod
    def empty(cls) -> Manifest:
        """Sentinel for "no usable prior manifest"."""
        return cls(pages={}, entities=None, runtime=None, build_time=None)

    @property
    def is_empty(self) -> bool:
        return self.entities is None

    def previous_hash(self, route: str) -> ContentHash:
        record = self.pages.get(route)
        return record.hash if record is not None else None

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, indent=2)


class RebuildPlan(BaseModel):
    """Partition of the discovered pages into rebuild / reuse sets."""

    to_build: list[PageDescriptor] = Field(default_factory=list)
    to_skip: list[PageDescriptor] = Field(default_factory=list)
    reason: RebuildReason = "per_page"
