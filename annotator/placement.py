"""
annotator/placement.py

Label placement heuristics.

Text is never measured: every glyph is assumed to be
``font_size * font_scale`` user units wide, which is close enough to
center short names in a known font.
"""

from __future__ import annotations

from typing import Optional

from models import AnnotationConfig, CanvasError


def compute_x(canvas_width: float, label_length: int, font_size: float, font_scale: float) -> float:
    """Approximate the x coordinate that horizontally centers a label.

    Args:
        canvas_width: Canvas width in user units.
        label_length: Number of characters in the label.
        font_size: Font size in user units.
        font_scale: Average glyph width as a fraction of the font size.

    Returns:
        ``(canvas_width - label_length * font_size * font_scale) / 2``.
        Inputs are not range-checked; a zero or negative width yields a
        valid but off-canvas coordinate.
    """
    return (canvas_width - label_length * font_size * font_scale) / 2


def baseline_y(config: AnnotationConfig, canvas_height: Optional[float] = None) -> float:
    """Return the label baseline.

    The fixed ``config.baseline_y`` matches the stock template. When
    ``config.baseline_ratio`` is set the baseline follows the canvas
    height instead.

    Raises:
        CanvasError: If a ratio is configured but the canvas has no height.
    """
    if config.baseline_ratio is None:
        return config.baseline_y
    if canvas_height is None:
        raise CanvasError("baseline_ratio requires a canvas height attribute")
    return canvas_height * config.baseline_ratio


def format_number(value: float) -> str:
    """Format a coordinate for an SVG attribute (``25.0`` -> ``"25"``)."""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))
