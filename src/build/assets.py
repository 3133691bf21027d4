# src/build/assets.py — v1
"""Default static asset copier: merge the public directory into the output."""

from __future__ import annotations

import asyncio
import logging
import shutil

from ssxbuild.build.base_collaborators import BaseAssetCopier
from ssxbuild.build.models import BuildOptions

logger = logging.getLogger(__name__)


class PublicDirCopier(BaseAssetCopier):
    """Copy ``root_dir/public_dir`` into ``out_dir`` on every build."""

    async def copy(self, options: BuildOptions) -> None:
        src = options.public_path
        if not src.is_dir():
            logger.debug("No public directory at %s", src)
            return

        options.out_dir.mkdir(parents=True, exist_ok=True)
        await asyncio.to_thread(
            shutil.copytree, str(src), str(options.out_dir), dirs_exist_ok=True
        )
        logger.info("Copied public assets from %s", src)
