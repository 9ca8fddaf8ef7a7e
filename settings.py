"""
settings.py

Persistent settings management for the pedigree chart.

Handles cross-platform settings storage using TOML format with platformdirs
for proper user config directory detection.

Settings file location:
    - Windows: %APPDATA%/pedigree-chart/settings.toml
    - macOS: ~/Library/Application Support/pedigree-chart/settings.toml
    - Linux: ~/.config/pedigree-chart/settings.toml

Default values are documented in comments throughout this file.
If settings.toml is corrupted, these defaults will be used.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Union

import platformdirs

# TOML reading - use tomllib for Python 3.11+, tomli for earlier versions
if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

import tomli_w

APP_NAME = "pedigree-chart"

# Global settings manager instance (singleton)
_settings_manager: Optional["SettingsManager"] = None


def get_settings() -> "SettingsManager":
    """Get the global settings manager instance.

    Returns:
        The singleton SettingsManager instance.
    """
    global _settings_manager
    if _settings_manager is None:
        _settings_manager = SettingsManager()
    return _settings_manager


# =============================================================================
# Canvas Settings
# =============================================================================

@dataclass
class CanvasZoomSettings:
    """Zoom and pan behavior settings.

    Defaults:
        wheel_factor: 1.15
        min_scale: 0.1
        max_scale: 20.0
        drag_threshold: 3.0
    """
    wheel_factor: float = 1.15    # Default: 1.15 (15% per scroll step)
    min_scale: float = 0.1        # Default: 0.1 (10%)
    max_scale: float = 20.0       # Default: 20.0 (2000%)
    drag_threshold: float = 3.0   # Default: 3.0 pixels before a press becomes a pan


@dataclass
class CanvasOverlaySettings:
    """Hint overlay timings, all in milliseconds.

    Defaults:
        show_duration: 300
        hide_delay: 700
        hide_duration: 800
    """
    show_duration: int = 300   # Default: 300 ms fade-in
    hide_delay: int = 700      # Default: 700 ms before fading out
    hide_duration: int = 800   # Default: 800 ms fade-out


@dataclass
class CanvasExportSettings:
    """Chart export settings.

    Defaults:
        margin: 20.0
        png_scale: 1.0
        background: "#FFFFFF"
        svg_title: "Pedigree chart"
    """
    margin: float = 20.0                 # Default: 20.0 pixels around the chart
    png_scale: float = 1.0               # Default: 1.0 (one image pixel per scene unit)
    background: str = "#FFFFFF"          # Default: white
    svg_title: str = "Pedigree chart"    # Default: "Pedigree chart"


@dataclass
class CanvasSettings:
    """All canvas-related settings."""
    zoom: CanvasZoomSettings = field(default_factory=CanvasZoomSettings)
    overlay: CanvasOverlaySettings = field(default_factory=CanvasOverlaySettings)
    export: CanvasExportSettings = field(default_factory=CanvasExportSettings)


# =============================================================================
# Thumbnail Settings
# =============================================================================

@dataclass
class ThumbnailSettings:
    """Highlight image settings for person boxes.

    Defaults:
        width: 250
        height: 250
        fit: "contain"
        asset_base_url: ""
    """
    width: int = 250            # Default: 250 pixels
    height: int = 250           # Default: 250 pixels
    fit: str = "contain"        # Default: "contain"
    asset_base_url: str = ""    # Default: "" (asset paths are used as-is)


# =============================================================================
# Main App Settings
# =============================================================================

@dataclass
class AppSettings:
    """Application settings with default values.

    Attributes:
        canvas: Canvas-related settings.
        thumbnail: Highlight image settings.
    """
    canvas: CanvasSettings = field(default_factory=CanvasSettings)
    thumbnail: ThumbnailSettings = field(default_factory=ThumbnailSettings)


# =============================================================================
# Settings Manager
# =============================================================================

class SettingsManager:
    """Manages loading, saving, and accessing application settings.

    Settings are stored in a TOML file at the platform-appropriate location.
    If the settings file doesn't exist, defaults are used and the file is
    created on first save.

    Args:
        app_name: Application name used for the config directory.
        config_dir: Optional directory overriding the platform location.
    """

    def __init__(self, app_name: str = APP_NAME, config_dir: Optional[Union[str, Path]] = None):
        if config_dir is not None:
            self.settings_dir = Path(config_dir)
        else:
            self.settings_dir = Path(platformdirs.user_config_dir(app_name))
        self.settings_file = self.settings_dir / "settings.toml"
        self.settings = self.load()
        self._needs_save = not self.settings_file.exists()  # Save if file didn't exist

    def ensure_file_complete(self) -> None:
        """Ensure settings file exists with all sections. Call once at startup."""
        if self._needs_save or not self.settings_file.exists():
            self.save()
            self._needs_save = False

    def load(self) -> AppSettings:
        """Load settings from the TOML file.

        Returns:
            AppSettings instance with values from file or defaults if file
            doesn't exist or is invalid.
        """
        if not self.settings_file.exists():
            return AppSettings()

        try:
            with open(self.settings_file, "rb") as f:
                data = tomllib.load(f)

            return self._parse_toml(data)
        except (OSError, tomllib.TOMLDecodeError, AttributeError, TypeError):
            # If file is corrupted or invalid, return defaults
            return AppSettings()

    def _parse_toml(self, data: Dict[str, Any]) -> AppSettings:
        """Parse TOML data into AppSettings.

        Args:
            data: Parsed TOML dictionary.

        Returns:
            AppSettings instance populated from TOML data.
        """
        settings = AppSettings()

        # Canvas section
        canvas = data.get("canvas", {})
        if "zoom" in canvas:
            zm = canvas["zoom"]
            settings.canvas.zoom.wheel_factor = zm.get("wheel_factor", settings.canvas.zoom.wheel_factor)
            settings.canvas.zoom.min_scale = zm.get("min_scale", settings.canvas.zoom.min_scale)
            settings.canvas.zoom.max_scale = zm.get("max_scale", settings.canvas.zoom.max_scale)
            settings.canvas.zoom.drag_threshold = zm.get("drag_threshold", settings.canvas.zoom.drag_threshold)
        if "overlay" in canvas:
            ov = canvas["overlay"]
            settings.canvas.overlay.show_duration = ov.get("show_duration", settings.canvas.overlay.show_duration)
            settings.canvas.overlay.hide_delay = ov.get("hide_delay", settings.canvas.overlay.hide_delay)
            settings.canvas.overlay.hide_duration = ov.get("hide_duration", settings.canvas.overlay.hide_duration)
        if "export" in canvas:
            ex = canvas["export"]
            settings.canvas.export.margin = ex.get("margin", settings.canvas.export.margin)
            settings.canvas.export.png_scale = ex.get("png_scale", settings.canvas.export.png_scale)
            settings.canvas.export.background = ex.get("background", settings.canvas.export.background)
            settings.canvas.export.svg_title = ex.get("svg_title", settings.canvas.export.svg_title)

        # Thumbnail section
        thumb = data.get("thumbnail", {})
        settings.thumbnail.width = thumb.get("width", settings.thumbnail.width)
        settings.thumbnail.height = thumb.get("height", settings.thumbnail.height)
        settings.thumbnail.fit = thumb.get("fit", settings.thumbnail.fit)
        settings.thumbnail.asset_base_url = thumb.get("asset_base_url", settings.thumbnail.asset_base_url)

        return settings

    def save(self) -> None:
        """Save current settings to the TOML file.

        Creates the settings directory if it doesn't exist.
        """
        # Ensure directory exists
        self.settings_dir.mkdir(parents=True, exist_ok=True)

        # Convert settings to TOML structure
        data = self._to_toml_dict()

        with open(self.settings_file, "wb") as f:
            tomli_w.dump(data, f)

    def _to_toml_dict(self) -> Dict[str, Any]:
        """Convert settings to a TOML-compatible dictionary structure.

        Returns:
            Dictionary organized by TOML sections.
        """
        s = self.settings
        return {
            "canvas": {
                "zoom": {
                    "wheel_factor": s.canvas.zoom.wheel_factor,
                    "min_scale": s.canvas.zoom.min_scale,
                    "max_scale": s.canvas.zoom.max_scale,
                    "drag_threshold": s.canvas.zoom.drag_threshold,
                },
                "overlay": {
                    "show_duration": s.canvas.overlay.show_duration,
                    "hide_delay": s.canvas.overlay.hide_delay,
                    "hide_duration": s.canvas.overlay.hide_duration,
                },
                "export": {
                    "margin": s.canvas.export.margin,
                    "png_scale": s.canvas.export.png_scale,
                    "background": s.canvas.export.background,
                    "svg_title": s.canvas.export.svg_title,
                },
            },
            "thumbnail": {
                "width": s.thumbnail.width,
                "height": s.thumbnail.height,
                "fit": s.thumbnail.fit,
                "asset_base_url": s.thumbnail.asset_base_url,
            },
        }

    def to_toml(self) -> str:
        """Convert current settings to a TOML-formatted string.

        Returns:
            TOML representation of the current settings.
        """
        data = self._to_toml_dict()
        return tomli_w.dumps(data)

    def get_settings_path(self) -> Path:
        """Get the path to the settings file.

        Returns:
            Path object pointing to the settings file location.
        """
        return self.settings_file
