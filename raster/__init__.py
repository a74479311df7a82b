"""
raster package

Optional PNG export for annotated SVGs. The backend is probed once per
run; a missing backend degrades the run to SVG-only output.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Protocol

from models import AnnotationConfig
from raster.inkscape import InkscapeRasterizer, find_inkscape

log = logging.getLogger(__name__)


class Rasterizer(Protocol):
    """Converts an annotated SVG into a PNG."""

    name: str

    def rasterize(self, svg_path: Path, png_path: Path, label_id: Optional[str] = None) -> Path:
        ...


def probe_rasterizer(config: AnnotationConfig) -> Optional[Rasterizer]:
    """Return the configured rasterizer, or None if it is unavailable.

    Logs a single warning when the requested backend cannot be used.
    """
    if config.rasterizer == "none":
        return None

    if config.rasterizer == "qt":
        try:
            from raster.qt import QtRasterizer
        except ImportError as e:
            log.warning("Qt SVG renderer is not available (%s)!", e)
            log.warning("Output will only be in SVG...")
            return None
        return QtRasterizer(scale=config.png_scale)

    executable = find_inkscape(config)
    if executable is None:
        log.warning('"inkscape" is not installed!')
        log.warning("Output will only be in SVG...")
        return None
    return InkscapeRasterizer(executable, timeout=config.timeout, align_label=config.align_label)


__all__ = ["InkscapeRasterizer", "Rasterizer", "find_inkscape", "probe_rasterizer"]
