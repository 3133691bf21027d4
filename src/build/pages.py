# src/build/pages.py — v1
"""Page generation: render HTML and/or extract metadata for a list of pages.

Pages are independent of each other (no page reads another page's output),
so rendering runs concurrently, bounded by a semaphore.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any

from ssxbuild.build.base_collaborators import Collaborators
from ssxbuild.build.errors import RenderError
from ssxbuild.build.models import GeneratedPage
from ssxbuild.build.writer import write_page
from ssxbuild.cache.models import PageDescriptor
from ssxbuild.logging.context import set_route_context

logger = logging.getLogger(__name__)


async def generate_pages(
    context: Any,
    pages: list[PageDescriptor],
    collaborators: Collaborators,
    out_dir: str | Path,
    generate_html: bool = True,
    generate_metadata: bool = True,
    concurrency: int = 4,
) -> list[GeneratedPage]:
    """Generate every page, returning results in input order.

    Args:
        context: Shared context from the context builder.
        pages: Pages to process.
        collaborators: Renderer, metadata extractor and context builder.
        out_dir: Output directory; HTML is written only if generate_html.
        generate_html: Render and write HTML. False for reused pages.
        generate_metadata: Run the metadata extractor, if one is configured.
        concurrency: Maximum pages processed at once.

    Raises:
        RenderError: For the first page (in input order) that failed.
    """
    if not pages:
        return []

    semaphore = asyncio.Semaphore(max(1, concurrency))

    async def _one(page: PageDescriptor) -> GeneratedPage:
        async with semaphore:
            return await _generate_page(
                context, page, collaborators, Path(out_dir),
                generate_html, generate_metadata,
            )

    results = await asyncio.gather(
        *(_one(page) for page in pages), return_exceptions=True
    )

    generated: list[GeneratedPage] = []
    failures: list[BaseException] = []
    for result in results:
        if isinstance(result, BaseException):
            failures.append(result)
        else:
            generated.append(result)

    if failures:
        if len(failures) > 1:
            logger.error("%d pages failed to generate", len(failures))
        raise failures[0]

    return generated


async def _generate_page(
    context: Any,
    page: PageDescriptor,
    collaborators: Collaborators,
    out_dir: Path,
    generate_html: bool,
    generate_metadata: bool,
) -> GeneratedPage:
    set_route_context(page.path)
    what = " and ".join(
        label for label, on in (("HTML", generate_html), ("metadata", generate_metadata)) if on
    )
    logger.debug("Generating %s for %s", what or "nothing", page.path)

    try:
        entity = collaborators.context_builder.get_entity(context, page)

        html: str | None = None
        if generate_html:
            html = await collaborators.renderer.render(context, page, entity)
            written = await write_page(out_dir, page.path, html)
            logger.info("Wrote %s", written)

        metadata: Any = None
        if generate_metadata and collaborators.metadata_extractor is not None:
            metadata = await collaborators.metadata_extractor.extract(context, page, entity)
    except RenderError:
        raise
    except Exception as exc:
        logger.error("Failed to generate page %s (%s)", page.path, page.file_path)
        raise RenderError(page.path, page.file_path, exc) from exc

    return GeneratedPage(
        page=page, html=html, metadata=metadata, skipped=not generate_html
    )
