# src/main.py — v1
"""CLI entry point: build and manifest commands.

Usage:
    ssx build [-r ROOT] [-o OUT] [--no-incremental] [--force] [options]
    ssx manifest <out_dir>
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from ssxbuild.logging.logger import get_logger, setup_logging
from ssxbuild.version import __version__

if TYPE_CHECKING:
    from ssxbuild.config.settings import Settings

logger = get_logger("cli")


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    try:
        return asyncio.run(args.func(args))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except Exception as exc:
        logger.error("Build failed: %s", exc, exc_info=args.verbose)
        return 1


def _build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="ssx",
        description=f"ssx v{__version__}, incremental static site builds",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command")

    # --- build ---
    p_build = subparsers.add_parser(
        "build", help="Build site from pages directory",
    )
    p_build.add_argument(
        "-r", "--root", type=Path, default=None,
        help="Root directory (default: SSX_ROOT_DIR or .)",
    )
    p_build.add_argument(
        "-o", "--out", type=Path, default=None,
        help="Output directory (default: SSX_OUT_DIR or dist)",
    )
    p_build.add_argument(
        "--no-incremental", dest="incremental", action="store_false", default=None,
        help="Disable incremental builds (no manifest is read or written)",
    )
    p_build.add_argument(
        "-f", "--force", action="store_true", default=None,
        help="Force clean build (ignore cache)",
    )
    p_build.add_argument(
        "--collaborators", default=None,
        help="Site collaborators as module:attribute",
    )
    p_build.add_argument(
        "--bundler", dest="bundler_command", default=None,
        help="Bundler command run over the output directory",
    )
    p_build.add_argument(
        "--log-format", choices=["json", "text"], default=None,
        help="Log output format",
    )
    p_build.set_defaults(func=_cmd_build)

    # --- manifest ---
    p_manifest = subparsers.add_parser(
        "manifest", help="Show the build manifest of an output directory",
    )
    p_manifest.add_argument(
        "out_dir", type=Path, help="Output directory to inspect",
    )
    p_manifest.set_defaults(func=_cmd_manifest)

    return parser


async def _cmd_build(args: argparse.Namespace) -> int:
    """Run a build with settings from .env overridden by CLI flags."""
    from ssxbuild.build.orchestrator import build
    from ssxbuild.config.settings import load_settings

    overrides = {
        "root_dir": args.root,
        "out_dir": args.out,
        "incremental": args.incremental,
        "force": args.force,
        "collaborators": args.collaborators,
        "bundler_command": args.bundler_command,
        "log_format": args.log_format,
    }
    settings = load_settings(**{k: v for k, v in overrides.items() if v is not None})
    _setup_logging(settings, args.verbose)

    summary = await build(settings)
    print(f"\nBuild complete: {summary.changed} changed, {summary.skipped} skipped")
    return 0


async def _cmd_manifest(args: argparse.Namespace) -> int:
    """Print a summary of the manifest in an output directory."""
    from ssxbuild.cache.manifest_store import JsonManifestStore

    out_dir: Path = args.out_dir
    if not out_dir.is_dir():
        print(f"Not a directory: {out_dir}", file=sys.stderr)
        return 1

    store = JsonManifestStore(out_dir)
    manifest = await store.load()
    if manifest.is_empty:
        print(f"No usable manifest in {out_dir}")
        return 1

    print(f"\nManifest {store.path}:")
    print(f"  Built:     {manifest.build_time}")
    print(f"  Pages:     {len(manifest.pages)}")
    print(f"  Entities:  {_short(manifest.entities)}")
    print(f"  Runtime:   {_short(manifest.runtime)}")
    for route in sorted(manifest.pages):
        record = manifest.pages[route]
        print(f"    {route:40s} {_short(record.hash)}  {record.file_path}")
    return 0


def _short(digest: str | None) -> str:
    return digest[:12] if digest else "-"


def _setup_logging(settings: Settings, verbose: bool) -> None:
    """Configure logging for CLI usage."""
    setup_logging(
        level="DEBUG" if verbose else settings.log_level,
        log_format=settings.log_format,
        log_file=str(settings.log_file) if settings.log_file else None,
        rotation=settings.log_rotation,
        retention=settings.log_retention,
    )


if __name__ == "__main__":
    sys.exit(main())
