"""
annotator/injector.py

Build the ``<text>`` label for a name and append it to the canvas.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET

from annotator.placement import format_number
from models import AnnotationConfig, SODIPODI_NS, XML_NS


def build_style(config: AnnotationConfig) -> str:
    """Synthesize the inline CSS style for a label from *config*."""
    props = [
        ("font-style", "normal"),
        ("font-weight", "normal"),
        ("font-size", f"{format_number(config.font_size)}px"),
        ("line-height", "1.25"),
        ("font-family", config.font_family),
        ("letter-spacing", config.letter_spacing),
        ("word-spacing", config.word_spacing),
        ("fill", config.fill),
        ("fill-opacity", "1"),
        ("stroke", "none"),
        ("stroke-width", config.stroke_width),
    ]
    return ";".join(f"{name}:{value}" for name, value in props)


def _label_tag(canvas: ET.Element) -> str:
    # Keep the label in the canvas's namespace so it is not serialized
    # with an empty xmlns.
    if canvas.tag.startswith("{"):
        return canvas.tag.split("}", 1)[0] + "}text"
    return "text"


def inject_label(
    canvas: ET.Element,
    text: str,
    label_id: str,
    style: str,
    x: float,
    y: float,
) -> ET.Element:
    """Append a text label to *canvas* and return it.

    Args:
        canvas: The canvas ``<svg>`` element; mutated in place.
        text: Label content, stored verbatim. Markup characters are
            escaped by the serializer.
        label_id: Id allocated for the label.
        style: Inline style string from :func:`build_style`.
        x: Horizontal start coordinate.
        y: Baseline coordinate.

    Returns:
        The new label element (last child of *canvas*).
    """
    label = ET.Element(_label_tag(canvas))
    label.set("id", label_id)
    label.set(f"{{{XML_NS}}}space", "preserve")
    label.set("style", style)
    label.set("y", format_number(y))
    label.set("x", format_number(x))
    label.text = text
    canvas.append(label)
    return label


def set_docname(canvas: ET.Element, filename: str) -> None:
    """Record the output filename on the canvas as ``sodipodi:docname``."""
    canvas.set(f"{{{SODIPODI_NS}}}docname", filename)
