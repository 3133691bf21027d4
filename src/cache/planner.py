# src/cache/planner.py — v1
"""Rebuild planner: decide which pages must be rendered again.

Pure decision logic. The only I/O is the injected ``hash_fn`` used for
per-page source hashes, so the rules can be exercised without a filesystem.

Rules, first match wins:
  1. No usable manifest                -> rebuild everything
  2. Shared data file hash differs     -> rebuild everything
  3. Runtime internals hash differs    -> rebuild everything
  4. Per page: source hash differs, is unknown, or has no previous
     record                            -> rebuild; exact match -> skip
"""

from __future__ import annotations

from collections.abc import Callable, Sequence

from ssxbuild.cache.hasher import hash_file
from ssxbuild.cache.models import (
    ContentHash,
    Manifest,
    PageDescriptor,
    RebuildPlan,
    RebuildReason,
)


def plan_rebuild(
    pages: Sequence[PageDescriptor],
    manifest: Manifest | None,
    entities_hash: ContentHash,
    runtime_hash: ContentHash,
    hash_fn: Callable[[str], ContentHash] = hash_file,
) -> RebuildPlan:
    """Partition pages into ``to_build`` and ``to_skip``.

    Args:
        pages: All pages of the current discovery pass.
        manifest: Manifest of the previous build (None = none loaded).
        entities_hash: Current hash of the shared data file.
        runtime_hash: Current hash of the runtime internals.
        hash_fn: Source file hasher.

    Returns:
        RebuildPlan preserving the input order in both partitions.
    """
    if manifest is None or manifest.is_empty:
        return _rebuild_all(pages, "no_manifest")

    if not _same_hash(manifest.entities, entities_hash):
        return _rebuild_all(pages, "entities_changed")

    if not _same_hash(manifest.runtime, runtime_hash):
        return _rebuild_all(pages, "runtime_changed")

    to_build: list[PageDescriptor] = []
    to_skip: list[PageDescriptor] = []
    for page in pages:
        current = hash_fn(page.file_path)
        if _same_hash(manifest.previous_hash(page.path), current):
            to_skip.append(page)
        else:
            to_build.append(page)

    return RebuildPlan(to_build=to_build, to_skip=to_skip, reason="per_page")


def _rebuild_all(pages: Sequence[PageDescriptor], reason: RebuildReason) -> RebuildPlan:
    return RebuildPlan(to_build=list(pages), to_skip=[], reason=reason)


def _same_hash(previous: ContentHash, current: ContentHash) -> bool:
    """Equality where an unknown hash never matches, not even another None."""
    return previous is not None and current is not None and previous == current
