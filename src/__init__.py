"""ssxbuild: incremental build cache and orchestrator for static sites."""

from ssxbuild.version import __version__

__all__ = ["__version__"]
