# src/config/settings.py — v1
"""Typed build configuration loaded from .env via pydantic-settings.

Every field can be set with an ``SSX_`` prefixed environment variable
(``SSX_OUT_DIR=public_html``) or passed as an override to load_settings().
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigurationError(Exception):
    """Raised when configuration is internally inconsistent."""


class Settings(BaseSettings):
    """Build settings loaded from .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="SSX_",
        extra="ignore",
    )

    # === Project layout ===
    root_dir: Path = Path(".")
    out_dir: Path = Path("dist")
    pages_dir: Path = Path("src/pages")
    public_dir: Path = Path("public")
    entities_file: Path | None = Path("src/store/entities.py")

    # === Incremental cache ===
    incremental: bool = True
    force: bool = False
    prune_stale_output: bool = False

    # === Rendering ===
    render_concurrency: int = 4
    runtime_script_name: str = "main.js"

    # === Collaborators ===
    collaborators: str = ""
    bundler_command: str = ""

    # === Feeds (pass-through) ===
    sitemap_hostname: str = ""
    rss_link: str = ""
    rss_title: str = ""

    # === Logging ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "text"] = "text"
    log_file: Path | None = None
    log_rotation: str = "10MB"
    log_retention: int = 30

    # --- Validators ---

    @field_validator("render_concurrency")
    @classmethod
    def validate_render_concurrency(cls, v: int) -> int:  # noqa: N805
        if v < 1:
            raise ValueError("render_concurrency must be >= 1")
        return v

    @model_validator(mode="after")
    def validate_config_consistency(self) -> Settings:
        """Validate cross-field consistency rules."""
        errors: list[str] = []

        if self.prune_stale_output and not self.incremental:
            errors.append("PRUNE_STALE_OUTPUT requires INCREMENTAL builds")

        if self.rss_link and not self.rss_title:
            errors.append("RSS_LINK requires RSS_TITLE")

        if Path(self.runtime_script_name).name != self.runtime_script_name:
            errors.append("RUNTIME_SCRIPT_NAME must be a bare file name")

        if errors:
            raise ConfigurationError("; ".join(errors))

        return self

    # --- Helpers ---

    @property
    def pages_path(self) -> Path:
        """Absolute-or-relative pages directory resolved against root_dir."""
        return self.root_dir / self.pages_dir

    @property
    def public_path(self) -> Path:
        return self.root_dir / self.public_dir

    @property
    def sitemap_options(self) -> dict[str, str] | None:
        if not self.sitemap_hostname:
            return None
        return {"hostname": self.sitemap_hostname}

    @property
    def rss_options(self) -> dict[str, str] | None:
        if not self.rss_link:
            return None
        return {"link": self.rss_link, "title": self.rss_title}


def load_settings(**overrides: object) -> Settings:
    """Load settings from .env with optional overrides.

    Args:
        **overrides: Field-level overrides (CLI flags, tests).

    Returns:
        Validated Settings instance.

    Raises:
        ConfigurationError: If configuration is internally inconsistent.
    """
    return Settings(**overrides)  # type: ignore[arg-type]
