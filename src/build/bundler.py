# src/build/bundler.py — v1
"""Bundler adapters: run an external bundler command over the output directory."""

from __future__ import annotations

import asyncio
import logging
import os
import shlex

from ssxbuild.build.base_collaborators import BaseBundler
from ssxbuild.build.errors import BundleError
from ssxbuild.build.models import BuildOptions
from ssxbuild.config.settings import Settings

logger = logging.getLogger(__name__)


class CommandBundler(BaseBundler):
    """Run a bundler command (e.g. ``npx vite build``) from the site root.

    The output directory is exported as ``SSX_OUT_DIR``. A non-zero exit
    status fails the build.
    """

    def __init__(self, command: str) -> None:
        self._argv = shlex.split(command)
        if not self._argv:
            raise ValueError("Bundler command must not be empty")

    async def bundle(self, options: BuildOptions) -> None:
        env = {**os.environ, "SSX_OUT_DIR": str(options.out_dir.resolve())}
        logger.info("Bundling with %s", self._argv[0])
        try:
            proc = await asyncio.create_subprocess_exec(
                *self._argv,
                cwd=str(options.root_dir),
                env=env,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as exc:
            raise BundleError(f"Cannot start bundler {self._argv[0]!r}: {exc}") from exc

        stdout, stderr = await proc.communicate()
        if stdout:
            logger.debug("Bundler output:\n%s", stdout.decode("utf-8", "replace"))
        if proc.returncode != 0:
            err = stderr.decode("utf-8", "replace")
            raise BundleError(
                f"Bundler exited with status {proc.returncode}",
                returncode=proc.returncode,
                stderr=err,
            )


class NullBundler(BaseBundler):
    """Used when no bundler command is configured."""

    async def bundle(self, options: BuildOptions) -> None:
        logger.info("No bundler configured, leaving %s as written", options.out_dir)


def create_bundler(settings: Settings) -> BaseBundler:
    if settings.bundler_command.strip():
        return CommandBundler(settings.bundler_command)
    return NullBundler()
