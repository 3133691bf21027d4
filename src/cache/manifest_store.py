# src/cache/manifest_store.py — v1
"""JSON manifest store: one hidden manifest file per output directory.

A missing or unreadable manifest is a normal first-build condition and
degrades to Manifest.empty(). The file is replaced atomically so a crash
mid-save leaves the previous manifest intact.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from collections.abc import Callable, Iterable
from datetime import datetime, timezone
from pathlib import Path

from pydantic import ValidationError

from ssxbuild.cache.hasher import hash_file
from ssxbuild.cache.models import ContentHash, Manifest, PageDescriptor, PageRecord

logger = logging.getLogger(__name__)

MANIFEST_FILE = ".ssx-manifest.json"


class JsonManifestStore:
    """Load and persist the build manifest of one output directory."""

    def __init__(self, out_dir: str | Path) -> None:
        self._out_dir = Path(out_dir)

    @property
    def path(self) -> Path:
        return self._out_dir / MANIFEST_FILE

    async def load(self) -> Manifest:
        """Read the manifest, or return the empty sentinel on any failure."""
        path = self.path
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
            return Manifest.model_validate(data)
        except FileNotFoundError:
            logger.debug("No manifest at %s (first or clean build)", path)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError, ValidationError) as e:
            logger.warning("Ignoring unreadable manifest %s: %s", path, e)
        return Manifest.empty()

    async def save(self, manifest: Manifest) -> None:
        """Write the manifest, overwriting any previous one."""
        self._out_dir.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f"{MANIFEST_FILE}.", suffix=".tmp", dir=self._out_dir
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(manifest.to_json())
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        logger.debug("Saved manifest with %d pages to %s", len(manifest.pages), self.path)


def create_manifest(
    pages: Iterable[PageDescriptor],
    entities_hash: ContentHash,
    runtime_hash: ContentHash,
    hash_fn: Callable[[str], ContentHash] = hash_file,
) -> Manifest:
    """Build a fresh manifest from the pages of a completed build.

    Each record pairs the hash of the page's *source* file with its path,
    independent of what the renderer produced.
    """
    records = {
        page.path: PageRecord(hash=hash_fn(page.file_path), file_path=page.file_path)
        for page in pages
    }
    return Manifest(
        pages=records,
        entities=entities_hash,
        runtime=runtime_hash,
        build_time=datetime.now(timezone.utc).isoformat(),
    )
