# src/cache/hasher.py — v1
"""Content fingerprints for page sources, shared data and runtime internals.

A ``None`` hash means the file could not be read. Callers must treat it as
"changed" and never as an error.
"""

from __future__ import annotations

import hashlib
import logging
from collections.abc import Sequence
from pathlib import Path

from ssxbuild.cache.models import ContentHash

logger = logging.getLogger(__name__)

PACKAGE_ROOT = Path(__file__).resolve().parent.parent

# Modules whose behaviour shapes every rendered page. Order is part of the
# fingerprint and must stay fixed.
RUNTIME_FILES: tuple[str, ...] = (
    "build/pages.py",
    "build/writer.py",
    "build/base_collaborators.py",
    "cache/models.py",
)


def hash_text(text: str) -> str:
    """SHA-256 hex digest of UTF-8 text."""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def hash_file(file_path: str | Path) -> ContentHash:
    """Hash a file's full text content, or return None if it is unreadable."""
    try:
        content = _read_source(Path(file_path))
    except (OSError, UnicodeDecodeError) as exc:
        logger.debug("Cannot hash %s: %s", file_path, exc)
        return None
    return hash_text(content)


def hash_many(
    paths: Sequence[str | Path],
    base: str | Path | None = None,
) -> ContentHash:
    """Hash several files as one fingerprint.

    Each file contributes ``"<label>:<content>"`` where label is the path
    relative to ``base`` (or the path as given). Parts are joined with
    newlines in caller order.

    Returns:
        Hex digest, or None if any file is unreadable.
    """
    parts: list[str] = []
    for raw in paths:
        label = Path(raw).as_posix()
        path = Path(base) / raw if base is not None else Path(raw)
        try:
            content = _read_source(path)
        except (OSError, UnicodeDecodeError) as exc:
            logger.debug("Cannot hash %s: %s", path, exc)
            return None
        parts.append(f"{label}:{content}")
    return hash_text("\n".join(parts))


def hash_entities(root_dir: str | Path, entities_file: str | Path | None) -> ContentHash:
    """Fingerprint the shared global data file.

    A site configured without a data file gets the digest of empty input,
    so it still compares equal across builds.
    """
    if entities_file is None:
        return hash_many([])
    return hash_file(Path(root_dir) / entities_file)


def hash_runtime(
    files: Sequence[str] = RUNTIME_FILES,
    base: str | Path = PACKAGE_ROOT,
) -> ContentHash:
    """Fingerprint the generator internals that affect every page."""
    return hash_many(files, base=base)


def _read_source(path: Path) -> str:
    # Decoded from raw bytes so line endings are hashed as written
    return path.read_bytes().decode("utf-8")
