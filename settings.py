"""
settings.py

Persistent settings management for SVG Annotator.

Handles cross-platform settings storage using TOML format with platformdirs
for proper user config directory detection.

Settings file location:
    - Windows: %APPDATA%/svg-annotator/settings.toml
    - macOS: ~/Library/Application Support/svg-annotator/settings.toml
    - Linux: ~/.config/svg-annotator/settings.toml

Default values are documented in comments throughout this file.
If settings.toml is corrupted, these defaults will be used.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import platformdirs

# TOML reading - use tomllib for Python 3.11+, tomli for earlier versions
if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

import tomli_w

from models import AnnotationConfig, COLLISION_POLICIES, RASTER_BACKENDS

APP_NAME = "svg-annotator"

# =============================================================================
# Font Settings
# =============================================================================

@dataclass
class FontSettings:
    """Font used for injected labels.

    Defaults:
        family: "cmmi10"
        size: 14.0
        scale: 0.92
    """
    family: str = "cmmi10"  # Default: "cmmi10" (must be known to the renderer)
    size: float = 14.0      # Default: 14 pixels
    scale: float = 0.92     # Default: 0.92 (average glyph width / font size)


# =============================================================================
# Label Settings
# =============================================================================

@dataclass
class LabelSettings:
    """Label placement and style settings.

    Defaults:
        id_prefix: "text"
        baseline_y: 214.18192
        baseline_ratio: 0.0
        fill: "#000000"
        letter_spacing: "0px"
        word_spacing: "4px"
        stroke_width: "0.75094575"
    """
    id_prefix: str = "text"            # Default: "text"
    baseline_y: float = 214.18192      # Default: 214.18192 user units
    baseline_ratio: float = 0.0        # Default: 0.0 (disabled, use baseline_y)
    fill: str = "#000000"              # Default: black
    letter_spacing: str = "0px"        # Default: "0px"
    word_spacing: str = "4px"          # Default: "4px"
    stroke_width: str = "0.75094575"   # Default: "0.75094575"


# =============================================================================
# Output Settings
# =============================================================================

@dataclass
class OutputSettings:
    """Output location settings.

    Defaults:
        directory: "out"
        on_collision: "suffix"
    """
    directory: str = "out"          # Default: "out" (relative to cwd)
    on_collision: str = "suffix"    # Default: "suffix" | "error" | "overwrite"


# =============================================================================
# Raster Settings
# =============================================================================

@dataclass
class RasterSettings:
    """Rasterizer settings.

    Defaults:
        backend: "inkscape"
        inkscape_path: ""
        timeout: 60.0
        align_label: True
        png_scale: 1.0
    """
    backend: str = "inkscape"   # Default: "inkscape" | "qt" | "none"
    inkscape_path: str = ""     # Default: "" (auto-detect)
    timeout: float = 60.0       # Default: 60 seconds per external call
    align_label: bool = True    # Default: True (center label via Inkscape actions)
    png_scale: float = 1.0      # Default: 1.0 (Qt backend only)


# =============================================================================
# Main App Settings
# =============================================================================

@dataclass
class AppSettings:
    """Application settings with default values.

    Attributes:
        template: Default template SVG path.
        names: Default name or name-file path.
        font: Label font settings.
        label: Label placement and style settings.
        output: Output location settings.
        raster: Rasterizer settings.
    """
    template: str = "template.svg"  # Default: "template.svg"
    names: str = "names.txt"        # Default: "names.txt"

    # Nested settings categories
    font: FontSettings = field(default_factory=FontSettings)
    label: LabelSettings = field(default_factory=LabelSettings)
    output: OutputSettings = field(default_factory=OutputSettings)
    raster: RasterSettings = field(default_factory=RasterSettings)


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
        settings_file: Optional explicit settings file, overriding the
            platform location.
    """

    def __init__(self, app_name: str = APP_NAME, settings_file: Optional[Path] = None):
        if settings_file is not None:
            self.settings_file = Path(settings_file)
            self.settings_dir = self.settings_file.parent
        else:
            self.settings_dir = Path(platformdirs.user_config_dir(app_name))
            self.settings_file = self.settings_dir / "settings.toml"
        self.settings = self.load()

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
        except (OSError, ValueError, TypeError, AttributeError):
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

        general = data.get("general", {})
        settings.template = general.get("template", settings.template)
        settings.names = general.get("names", settings.names)

        font = data.get("font", {})
        settings.font.family = font.get("family", settings.font.family)
        settings.font.size = float(font.get("size", settings.font.size))
        settings.font.scale = float(font.get("scale", settings.font.scale))

        label = data.get("label", {})
        settings.label.id_prefix = label.get("id_prefix", settings.label.id_prefix)
        settings.label.baseline_y = float(label.get("baseline_y", settings.label.baseline_y))
        settings.label.baseline_ratio = float(label.get("baseline_ratio", settings.label.baseline_ratio))
        settings.label.fill = label.get("fill", settings.label.fill)
        settings.label.letter_spacing = label.get("letter_spacing", settings.label.letter_spacing)
        settings.label.word_spacing = label.get("word_spacing", settings.label.word_spacing)
        settings.label.stroke_width = label.get("stroke_width", settings.label.stroke_width)

        output = data.get("output", {})
        settings.output.directory = output.get("directory", settings.output.directory)
        on_collision = output.get("on_collision", settings.output.on_collision)
        if on_collision in COLLISION_POLICIES:
            settings.output.on_collision = on_collision

        raster = data.get("raster", {})
        backend = raster.get("backend", settings.raster.backend)
        if backend in RASTER_BACKENDS:
            settings.raster.backend = backend
        settings.raster.inkscape_path = raster.get("inkscape_path", settings.raster.inkscape_path)
        settings.raster.timeout = float(raster.get("timeout", settings.raster.timeout))
        settings.raster.align_label = bool(raster.get("align_label", settings.raster.align_label))
        settings.raster.png_scale = float(raster.get("png_scale", settings.raster.png_scale))

        return settings

    def save(self) -> None:
        """Save current settings to the TOML file.

        Creates the settings directory if it doesn't exist.
        """
        self.settings_dir.mkdir(parents=True, exist_ok=True)

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
            "general": {
                "template": s.template,
                "names": s.names,
            },
            "font": {
                "family": s.font.family,
                "size": s.font.size,
                "scale": s.font.scale,
            },
            "label": {
                "id_prefix": s.label.id_prefix,
                "baseline_y": s.label.baseline_y,
                "baseline_ratio": s.label.baseline_ratio,
                "fill": s.label.fill,
                "letter_spacing": s.label.letter_spacing,
                "word_spacing": s.label.word_spacing,
                "stroke_width": s.label.stroke_width,
            },
            "output": {
                "directory": s.output.directory,
                "on_collision": s.output.on_collision,
            },
            "raster": {
                "backend": s.raster.backend,
                "inkscape_path": s.raster.inkscape_path,
                "timeout": s.raster.timeout,
                "align_label": s.raster.align_label,
                "png_scale": s.raster.png_scale,
            },
        }

    def to_toml(self) -> str:
        """Convert current settings to a TOML-formatted string.

        Returns:
            TOML representation of the current settings.
        """
        data = self._to_toml_dict()
        return tomli_w.dumps(data)

    def to_config(self, **overrides: Any) -> AnnotationConfig:
        """Build the immutable configuration passed to the pipeline.

        A ``baseline_ratio`` or ``timeout`` of ``0`` means "off" whether it
        comes from the settings file or from an override: the ratio is
        disabled and Inkscape calls wait without a limit.

        Args:
            **overrides: ``AnnotationConfig`` field values that take
                precedence over the stored settings. ``None`` values are
                ignored so unset CLI options fall through.

        Returns:
            An ``AnnotationConfig`` for one run.
        """
        s = self.settings
        merged = dict(
            template=s.template,
            names=s.names,
            font_family=s.font.family,
            font_size=s.font.size,
            font_scale=s.font.scale,
            id_prefix=s.label.id_prefix,
            baseline_y=s.label.baseline_y,
            baseline_ratio=s.label.baseline_ratio,
            fill=s.label.fill,
            letter_spacing=s.label.letter_spacing,
            word_spacing=s.label.word_spacing,
            stroke_width=s.label.stroke_width,
            output_dir=s.output.directory,
            on_collision=s.output.on_collision,
            rasterizer=s.raster.backend,
            inkscape_path=s.raster.inkscape_path,
            timeout=s.raster.timeout,
            align_label=s.raster.align_label,
            png_scale=s.raster.png_scale,
        )
        merged.update({k: v for k, v in overrides.items() if v is not None})
        merged["baseline_ratio"] = merged["baseline_ratio"] or None
        merged["timeout"] = merged["timeout"] or None
        return AnnotationConfig(**merged)

    def update_from_config(self, config: AnnotationConfig) -> None:
        """Copy the values of *config* into the stored settings.

        Used by ``--save-config`` so command line choices become the new
        defaults. ``None`` for ``baseline_ratio`` and ``timeout`` is stored
        as ``0``.
        """
        s = self.settings
        s.template = config.template
        s.names = config.names
        s.font.family = config.font_family
        s.font.size = config.font_size
        s.font.scale = config.font_scale
        s.label.id_prefix = config.id_prefix
        s.label.baseline_y = config.baseline_y
        s.label.baseline_ratio = config.baseline_ratio or 0.0
        s.label.fill = config.fill
        s.label.letter_spacing = config.letter_spacing
        s.label.word_spacing = config.word_spacing
        s.label.stroke_width = config.stroke_width
        s.output.directory = config.output_dir
        s.output.on_collision = config.on_collision
        s.raster.backend = config.rasterizer
        s.raster.inkscape_path = config.inkscape_path
        s.raster.timeout = config.timeout or 0.0
        s.raster.align_label = config.align_label
        s.raster.png_scale = config.png_scale

    def get_settings_path(self) -> Path:
        """Get the path to the settings file.

        Returns:
            Path object pointing to the settings file location.
        """
        return self.settings_file
