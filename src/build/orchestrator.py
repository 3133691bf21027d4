# src/build/orchestrator.py — v1
"""Build orchestrator: discovery -> planning -> rendering -> bundling -> manifest.

Steps run strictly in order:
  1. Resolve options
  2. Discover pages (fails before any output mutation)
  3. Load the previous manifest (incremental and not forced only)
  4. Clean or keep the output directory
  5. Copy static assets (always)
  6. Hash shared data + runtime, plan the rebuild
  7. Build the shared context
  8. Render changed pages; metadata only for reused pages; prune stale
     pages when enabled
  9. Regenerate the runtime script (always) and write feeds
 10. Bundle the whole output directory (always)
 11. Save a fresh manifest (incremental only)

Any fatal error stops the run before step 11, so an on-disk manifest always
describes a build that completed.
"""

from __future__ import annotations

import logging
import shutil
import time
import uuid
from collections.abc import Callable
from pathlib import Path
from typing import Any

from ssxbuild.build.base_collaborators import Collaborators
from ssxbuild.build.errors import (
    AssetCopyError,
    BuildError,
    BundleError,
    DiscoveryError,
)
from ssxbuild.build.models import BuildOptions, BuildSummary, GeneratedPage
from ssxbuild.build.pages import generate_pages
from ssxbuild.build.writer import prune_stale_pages, write_runtime_script
from ssxbuild.cache.hasher import hash_entities, hash_runtime
from ssxbuild.cache.manifest_store import JsonManifestStore, create_manifest
from ssxbuild.cache.models import ContentHash, Manifest, PageDescriptor, RebuildPlan
from ssxbuild.cache.planner import plan_rebuild
from ssxbuild.config.settings import Settings
from ssxbuild.logging.context import set_build_context, set_step_context

logger = logging.getLogger(__name__)


class BuildOrchestrator:
    """Runs one incremental build of a site.

    Args:
        settings: Build settings (defaults for every option).
        collaborators: Discovery, context, rendering, runtime script, assets,
            bundler and feeds.
        manifest_store_factory: Creates the manifest store for an output dir.
        runtime_hasher: Computes the runtime fingerprint.
    """

    def __init__(
        self,
        settings: Settings,
        collaborators: Collaborators,
        manifest_store_factory: Callable[[Path], JsonManifestStore] = JsonManifestStore,
        runtime_hasher: Callable[[], ContentHash] = hash_runtime,
    ) -> None:
        self._settings = settings
        self._collaborators = collaborators
        self._manifest_store_factory = manifest_store_factory
        self._runtime_hasher = runtime_hasher

    async def run(self, options: BuildOptions | None = None) -> BuildSummary:
        """Execute the build.

        Returns:
            BuildSummary with the number of rendered and reused pages.

        Raises:
            BuildError: On discovery, asset, render or bundle failure. The
                manifest is left untouched.
        """
        start_time = time.monotonic()

        # 1. Options
        options = options or BuildOptions.from_settings(self._settings)
        set_build_context(uuid.uuid4().hex[:8])
        logger.info("Starting build of %s into %s", options.root_dir, options.out_dir)

        try:
            summary = await self._run_steps(options)
        except BuildError:
            logger.exception("Build failed")
            raise
        finally:
            set_step_context(None)

        summary.duration_seconds = time.monotonic() - start_time
        logger.info(
            "Build complete: %d changed, %d skipped in %.2fs",
            summary.changed, summary.skipped, summary.duration_seconds,
        )
        return summary

    async def _run_steps(self, options: BuildOptions) -> BuildSummary:
        collab = self._collaborators
        out_dir = options.out_dir

        # 2. Discovery
        set_step_context("discover")
        all_pages = await self._discover(options)
        logger.info("Found %d pages", len(all_pages))

        # 3. Previous manifest
        store = self._manifest_store_factory(out_dir)
        manifest: Manifest | None = None
        if options.uses_manifest:
            manifest = await store.load()

        # 4. Output directory
        set_step_context("prepare")
        if options.force or manifest is None or manifest.is_empty:
            _clean_dir(out_dir)
        else:
            out_dir.mkdir(parents=True, exist_ok=True)

        # 5. Static assets
        set_step_context("assets")
        if collab.asset_copier is not None:
            try:
                await collab.asset_copier.copy(options)
            except Exception as exc:
                raise AssetCopyError(
                    f"Failed to copy static assets: {exc}", resource=str(options.public_path)
                ) from exc

        # 6. Plan
        set_step_context("plan")
        entities_hash = hash_entities(options.root_dir, options.entities_file)
        runtime_hash = self._runtime_hasher()
        plan = plan_rebuild(all_pages, manifest, entities_hash, runtime_hash)
        _log_plan(plan)

        # 7. Shared context
        set_step_context("context")
        try:
            context = await collab.context_builder.build_context(all_pages)
        except Exception as exc:
            raise BuildError(
                f"Failed to build shared context: {exc}", resource="context"
            ) from exc

        # 8. Pages
        set_step_context("render")
        changed_pages = await generate_pages(
            context, plan.to_build, collab, out_dir,
            generate_html=True,
            concurrency=options.render_concurrency,
        )
        skipped_pages = await generate_pages(
            context, plan.to_skip, collab, out_dir,
            generate_html=False,
            concurrency=options.render_concurrency,
        )
        generated = changed_pages + skipped_pages

        # 8b. Stale pages
        set_step_context("prune")
        if options.prune_stale_output and manifest is not None and not manifest.is_empty:
            prune_stale_pages(out_dir, manifest.pages.keys(), [p.path for p in all_pages])

        # 9. Runtime script + feeds
        set_step_context("runtime")
        try:
            source = await collab.runtime_script.generate(context, all_pages)
            script = await write_runtime_script(out_dir, options.runtime_script_name, source)
        except Exception as exc:
            raise BuildError(
                f"Failed to generate runtime script: {exc}",
                resource=options.runtime_script_name,
            ) from exc
        logger.info("Wrote %s", script)
        await self._write_feeds(generated, options)

        # 10. Bundle
        set_step_context("bundle")
        if collab.bundler is not None:
            try:
                await collab.bundler.bundle(options)
            except BundleError:
                raise
            except Exception as exc:
                raise BundleError(f"Bundler failed: {exc}") from exc

        # 11. Manifest
        set_step_context("manifest")
        if options.incremental:
            new_manifest = create_manifest(
                plan.to_build + plan.to_skip, entities_hash, runtime_hash
            )
            await store.save(new_manifest)

        return BuildSummary(
            changed=len(changed_pages),
            skipped=len(skipped_pages),
            reason=plan.reason,
            out_dir=str(out_dir),
        )

    async def _discover(self, options: BuildOptions) -> list[PageDescriptor]:
        try:
            return await self._collaborators.discoverer.discover(options.pages_path)
        except Exception as exc:
            raise DiscoveryError(
                f"Page discovery failed in {options.pages_path}: {exc}",
                resource=str(options.pages_path),
            ) from exc

    async def _write_feeds(
        self, generated: list[GeneratedPage], options: BuildOptions
    ) -> None:
        collab = self._collaborators
        feeds = (
            ("sitemap", collab.sitemap_writer, options.sitemap, "hostname"),
            ("rss", collab.rss_writer, options.rss, "link"),
        )
        for name, writer, feed_options, required in feeds:
            if writer is None or not feed_options or not feed_options.get(required):
                continue
            logger.info("Generating %s", name)
            try:
                await writer.write(generated, options, feed_options)
            except Exception as exc:
                raise BuildError(f"Failed to write {name}: {exc}", resource=name) from exc


async def build(
    settings: Settings | None = None,
    collaborators: Collaborators | None = None,
    **overrides: Any,
) -> BuildSummary:
    """Build a site with settings from .env plus per-call overrides.

    Usage:
        summary = await build(collaborators=my_site, out_dir=Path("dist"))

    Args:
        settings: Settings; loaded from .env if None.
        collaborators: Site collaborators; loaded from ``settings.collaborators``
            if None.
        **overrides: BuildOptions field overrides (force, incremental, ...).
    """
    from ssxbuild.build.collaborator_factory import load_collaborators, with_defaults

    settings = settings or Settings()
    if collaborators is None:
        if not settings.collaborators:
            raise BuildError(
                "No collaborators configured (set SSX_COLLABORATORS=module:attr)",
                resource="collaborators",
            )
        collaborators = load_collaborators(settings.collaborators, settings)
    collaborators = with_defaults(collaborators, settings)

    options = BuildOptions.from_settings(settings, **overrides)
    return await BuildOrchestrator(settings, collaborators).run(options)


# ------------------------------------------------------------------
# Helpers
# ------------------------------------------------------------------


def _clean_dir(path: Path) -> None:
    if path.exists():
        shutil.rmtree(path)
    path.mkdir(parents=True, exist_ok=True)


def _log_plan(plan: RebuildPlan) -> None:
    if plan.reason == "entities_changed":
        logger.info("Entities changed, rebuilding all pages")
    elif plan.reason == "runtime_changed":
        logger.info("Runtime changed, rebuilding all pages")
    elif plan.reason == "no_manifest":
        logger.info("No previous manifest, building all %d pages", len(plan.to_build))
    else:
        logger.info(
            "Incremental build: %d to change, %d to skip",
            len(plan.to_build), len(plan.to_skip),
        )
