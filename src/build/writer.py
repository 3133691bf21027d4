# src/build/writer.py — v1
"""Write rendered pages and the runtime script into the output directory.

Routes map to directory indexes:
    /              -> <out>/index.html
    /about         -> <out>/about/index.html
    /blog/post-1   -> <out>/blog/post-1/index.html
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

logger = logging.getLogger(__name__)

INDEX_FILE = "index.html"


def page_output_path(out_dir: str | Path, route: str) -> Path:
    """Return the file a route is written to."""
    clean = route.strip("/")
    if ".." in Path(clean).parts:
        raise ValueError(f"Route escapes the output directory: {route!r}")
    return Path(out_dir) / clean / INDEX_FILE


async def write_page(out_dir: str | Path, route: str, html: str) -> Path:
    """Write one page's HTML, creating parent directories."""
    path = page_output_path(out_dir, route)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(html, encoding="utf-8")
    return path


async def write_runtime_script(out_dir: str | Path, name: str, source: str) -> Path:
    path = Path(out_dir) / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(source, encoding="utf-8")
    return path


def prune_stale_pages(
    out_dir: str | Path,
    previous_routes: Iterable[str],
    current_routes: Iterable[str],
) -> list[Path]:
    """Delete the HTML of routes that are no longer discovered.

    Removes the index file and any directories left empty up to out_dir.
    Other files next to a stale page (assets, nested routes) are kept.

    Returns:
        The removed index files.
    """
    out = Path(out_dir)
    current = set(current_routes)
    removed: list[Path] = []

    for route in sorted(set(previous_routes) - current):
        try:
            path = page_output_path(out, route)
        except ValueError:
            logger.warning("Not pruning suspicious route %r", route)
            continue
        if not path.is_file():
            continue
        path.unlink()
        removed.append(path)
        _remove_empty_parents(path.parent, out)
        logger.info("Pruned stale page %s", route)

    return removed


def _remove_empty_parents(directory: Path, stop: Path) -> None:
    stop = stop.resolve()
    current = directory.resolve()
    while current != stop and stop in current.parents:
        if any(current.iterdir()):
            return
        current.rmdir()
        current = current.parent
