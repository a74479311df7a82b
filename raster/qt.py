"""
raster/qt.py

Rasterize annotated SVGs in-process with Qt's SVG renderer.

Qt does not support every SVG feature Inkscape does, and it cannot run
Inkscape's align action, so labels stay at the computed x position.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from PyQt6.QtCore import QSize, Qt
from PyQt6.QtGui import QGuiApplication, QImage, QPainter
from PyQt6.QtSvg import QSvgRenderer

from debug_trace import trace
from models import RasterError

_app: Optional[QGuiApplication] = None


def _ensure_app() -> None:
    """Create a headless QGuiApplication; text rendering needs one."""
    global _app
    if QGuiApplication.instance() is None:
        os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
        _app = QGuiApplication([])


class QtRasterizer:
    """Rasterize SVG files with ``QSvgRenderer``.

    Args:
        scale: Scale factor applied to the SVG's default size.
    """

    name = "qt"

    def __init__(self, scale: float = 1.0):
        self.scale = scale

    def rasterize(self, svg_path: Path, png_path: Path, label_id: Optional[str] = None) -> Path:
        """Render *svg_path* to *png_path* on a white background.

        Returns:
            *png_path*.

        Raises:
            RasterError: If the SVG cannot be loaded, has no size, or the
                PNG cannot be saved.
        """
        _ensure_app()

        renderer = QSvgRenderer(str(svg_path))
        if not renderer.isValid():
            raise RasterError(f"QSvgRenderer could not load SVG: {svg_path}")

        default_size = renderer.defaultSize()
        if default_size.isEmpty():
            raise RasterError(f"SVG has no intrinsic size: {svg_path}")

        target_w = max(1, int(default_size.width() * self.scale))
        target_h = max(1, int(default_size.height() * self.scale))
        trace(f"Rendering {svg_path} at {target_w}x{target_h}", "QT")

        image = QImage(
            QSize(target_w, target_h),
            QImage.Format.Format_ARGB32_Premultiplied,
        )
        image.fill(Qt.GlobalColor.white)

        painter = QPainter(image)
        renderer.render(painter)
        painter.end()

        if not image.save(str(png_path), "PNG"):
            raise RasterError(f"Failed to save rendered PNG: {png_path}")
        return Path(png_path)
