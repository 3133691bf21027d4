# src/build/errors.py — v1
"""Fatal build errors.

Every error that aborts a build names the resource that failed so the CLI
can report it. Cache misses (unreadable manifest, unreadable source hash)
are not errors and never raise.
"""

from __future__ import annotations


class BuildError(Exception):
    """Base class for errors that abort a build before the manifest is saved."""

    def __init__(self, message: str, resource: str | None = None) -> None:
        super().__init__(message)
        self.resource = resource


class CollaboratorLoadError(BuildError):
    """Raised when the configured collaborators cannot be imported."""


class DiscoveryError(BuildError):
    """Raised when page discovery fails (broken source tree)."""


class AssetCopyError(BuildError):
    """Raised when static assets cannot be copied to the output directory."""


class RenderError(BuildError):
    """Raised when a single page fails to render or write."""

    def __init__(self, route: str, source: str, cause: BaseException) -> None:
        super().__init__(
            f"Failed to render page {route} ({source}): {cause}", resource=source
        )
        self.route = route
        self.source = source


class BundleError(BuildError):
    """Raised when the bundler step fails."""

    def __init__(
        self,
        message: str,
        returncode: int | None = None,
        stderr: str = "",
    ) -> None:
        super().__init__(message, resource="bundler")
        self.returncode = returncode
        self.stderr = stderr
