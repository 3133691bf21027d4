# src/build/collaborator_factory.py — v1
"""Factory: load the site's collaborators and fill in the shipped defaults.

A site exposes its collaborators as ``"package.module:attribute"`` where the
attribute is a Collaborators instance or a callable taking Settings and
returning one.
"""

from __future__ import annotations

import dataclasses
import importlib
import logging

from ssxbuild.build.base_collaborators import Collaborators
from ssxbuild.build.errors import CollaboratorLoadError
from ssxbuild.config.settings import Settings

logger = logging.getLogger(__name__)


def load_collaborators(path: str, settings: Settings | None = None) -> Collaborators:
    """Import collaborators from a ``module:attribute`` path.

    Raises:
        CollaboratorLoadError: If the path is malformed, the module cannot be
            imported, or the attribute does not yield Collaborators.
    """
    module_path, sep, attr = path.partition(":")
    if not sep or not module_path or not attr:
        raise CollaboratorLoadError(
            f"Invalid collaborators path: {path!r} (expected 'module:attribute')",
            resource=path,
        )

    try:
        module = importlib.import_module(module_path)
    except ImportError as exc:
        raise CollaboratorLoadError(
            f"Cannot import module {module_path}: {exc}", resource=path
        ) from exc

    target = getattr(module, attr, None)
    if target is None:
        raise CollaboratorLoadError(
            f"Attribute {attr} not found in {module_path}", resource=path
        )

    if callable(target) and not isinstance(target, Collaborators):
        target = target(settings or Settings())

    if not isinstance(target, Collaborators):
        raise CollaboratorLoadError(
            f"{path} did not provide a Collaborators instance", resource=path
        )

    logger.debug("Loaded collaborators from %s", path)
    return target


def with_defaults(collaborators: Collaborators, settings: Settings) -> Collaborators:
    """Return a copy with the default asset copier and bundler filled in."""
    from ssxbuild.build.assets import PublicDirCopier
    from ssxbuild.build.bundler import create_bundler

    updates = {}
    if collaborators.asset_copier is None:
        updates["asset_copier"] = PublicDirCopier()
    if collaborators.bundler is None:
        updates["bundler"] = create_bundler(settings)
    if not updates:
        return collaborators
    return dataclasses.replace(collaborators, **updates)
