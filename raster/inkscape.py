"""
raster/inkscape.py

Center the injected label and export PNGs with the Inkscape CLI.
"""

from __future__ import annotations

import os
import shutil
import subprocess
from pathlib import Path
from typing import List, Optional

from debug_trace import trace
from models import AnnotationConfig, RasterError

INKSCAPE = "inkscape"


def find_inkscape(config: AnnotationConfig) -> str | None:
    """Find the Inkscape executable.

    Search order:
        1. ``inkscape_path`` from the configuration
        2. INKSCAPE_PATH environment variable
        3. inkscape on system PATH (``inkscape.com`` / ``.exe`` on Windows)

    Returns:
        Path to the executable if found, None otherwise.
    """
    # 1. Configuration
    if config.inkscape_path and os.path.isfile(config.inkscape_path):
        return config.inkscape_path

    # 2. Environment variable
    env_path = os.environ.get("INKSCAPE_PATH")
    if env_path and os.path.isfile(env_path):
        return env_path

    # 3. System PATH
    return shutil.which(INKSCAPE)


class InkscapeRasterizer:
    """Rasterize annotated SVGs with Inkscape 1.x.

    Args:
        executable: Path to the Inkscape executable.
        timeout: Seconds to wait for each Inkscape call (None waits forever).
        align_label: Run the centering action on the label before export.
    """

    name = "inkscape"

    def __init__(self, executable: str, timeout: Optional[float] = 60.0, align_label: bool = True):
        self.executable = executable
        self.timeout = timeout
        self.align_label = align_label

    def align_command(self, svg_path: Path, label_id: str) -> List[str]:
        """Command that centers *label_id* on the page and rewrites the SVG."""
        actions = (
            f"select-by-id:{label_id};"
            "object-align:hcenter page;"
            f"export-filename:{svg_path};"
            "export-do"
        )
        return [self.executable, f"--actions={actions}", str(svg_path)]

    def export_command(self, svg_path: Path, png_path: Path) -> List[str]:
        """Command that exports *svg_path* to *png_path*."""
        return [
            self.executable,
            str(svg_path),
            "--export-type=png",
            f"--export-filename={png_path}",
        ]

    def _run(self, cmd: List[str]) -> None:
        trace(f"> {' '.join(cmd)}", "INKSCAPE")
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired as e:
            raise RasterError(f"Inkscape timed out after {e.timeout} s") from e
        except OSError as e:
            raise RasterError(f"Cannot run Inkscape: {e}") from e

        if result.returncode != 0:
            raise RasterError(
                f"Inkscape failed (exit {result.returncode}):\n"
                f"{result.stderr.strip()}"
            )

    def rasterize(self, svg_path: Path, png_path: Path, label_id: Optional[str] = None) -> Path:
        """Center the label (when *label_id* is given) and export a PNG.

        Returns:
            *png_path*.

        Raises:
            RasterError: If Inkscape fails, times out, or writes no PNG.
        """
        svg_path = Path(svg_path)
        png_path = Path(png_path)

        if self.align_label and label_id:
            self._run(self.align_command(svg_path, label_id))

        self._run(self.export_command(svg_path, png_path))

        if not png_path.is_file():
            raise RasterError(f"Inkscape ran successfully but produced no PNG: {png_path}")
        return png_path
