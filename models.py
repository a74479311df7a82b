"""
models.py

Data models, constants and exceptions for SVG Annotator.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


# ----------------------------
# Constants
# ----------------------------

COLLISION_POLICIES = ("suffix", "error", "overwrite")
RASTER_BACKENDS = ("inkscape", "qt", "none")

SVG_NS = "http://www.w3.org/2000/svg"
XLINK_NS = "http://www.w3.org/1999/xlink"
XML_NS = "http://www.w3.org/XML/1998/namespace"
SODIPODI_NS = "http://sodipodi.sourceforge.net/DTD/sodipodi-0.dtd"
INKSCAPE_NS = "http://www.inkscape.org/namespaces/inkscape"


# ----------------------------
# Exceptions
# ----------------------------

class AnnotationError(RuntimeError):
    """Base class for all annotation failures."""


class NameSourceError(AnnotationError):
    """The configured name source is neither a readable file nor a usable name."""


class TemplateError(AnnotationError):
    """The template SVG is missing or cannot be parsed."""


class CanvasError(AnnotationError):
    """The canvas element is missing or has unusable dimensions."""


class FilenameError(AnnotationError):
    """A label cannot be turned into a valid output filename."""


class FilenameCollisionError(FilenameError):
    """Two labels in one run derive the same output filename."""


class RasterError(AnnotationError):
    """The rasterizer failed to produce a PNG."""


# ----------------------------
# Run configuration
# ----------------------------

@dataclass(frozen=True)
class AnnotationConfig:
    """Immutable configuration for one annotation run.

    Built from settings plus command line overrides and passed explicitly
    to every component.
    """
    template: str = "template.svg"
    names: str = "names.txt"
    # Font
    font_family: str = "cmmi10"
    font_size: float = 14.0
    font_scale: float = 0.92
    # Label placement and style
    id_prefix: str = "text"
    baseline_y: float = 214.18192
    baseline_ratio: Optional[float] = None  # fraction of canvas height; overrides baseline_y
    fill: str = "#000000"
    letter_spacing: str = "0px"
    word_spacing: str = "4px"
    stroke_width: str = "0.75094575"
    # Output
    output_dir: str = "out"
    on_collision: str = "suffix"
    # Rasterizer
    rasterizer: str = "inkscape"
    inkscape_path: str = ""
    timeout: Optional[float] = 60.0
    align_label: bool = True
    png_scale: float = 1.0

    def __post_init__(self):
        if self.on_collision not in COLLISION_POLICIES:
            raise ValueError(
                f"on_collision must be one of {', '.join(COLLISION_POLICIES)}, "
                f"got {self.on_collision!r}"
            )
        if self.rasterizer not in RASTER_BACKENDS:
            raise ValueError(
                f"rasterizer must be one of {', '.join(RASTER_BACKENDS)}, "
                f"got {self.rasterizer!r}"
            )


# ----------------------------
# Results
# ----------------------------

@dataclass
class AnnotationResult:
    """Outcome of annotating one name."""
    name: str
    label_id: str = ""
    x: float = 0.0
    y: float = 0.0
    svg_path: Optional[Path] = None
    png_path: Optional[Path] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None
