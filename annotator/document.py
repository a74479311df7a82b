"""
annotator/document.py

Template SVG handling: parse the template into a fresh ElementTree,
locate the canvas element, read its dimensions, allocate element ids
and serialize the annotated result.
"""

from __future__ import annotations

import io
import math
import re
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Optional, Set

from debug_trace import trace
from models import (
    CanvasError,
    INKSCAPE_NS,
    SODIPODI_NS,
    SVG_NS,
    TemplateError,
    XLINK_NS,
    XML_NS,
)

# Register namespaces so ET.write() doesn't mangle them with ns0/ns1 prefixes
ET.register_namespace("", SVG_NS)
ET.register_namespace("xlink", XLINK_NS)
ET.register_namespace("sodipodi", SODIPODI_NS)
ET.register_namespace("inkscape", INKSCAPE_NS)

_FIXED_NAMESPACES = {SVG_NS, XLINK_NS, SODIPODI_NS, INKSCAPE_NS, XML_NS}
_GENERATED_PREFIX = re.compile(r"ns\d+$")


def local_name(tag) -> str:
    """Return *tag* without its ``{namespace}`` part."""
    if not isinstance(tag, str):
        return ""
    return tag.split("}", 1)[1] if tag.startswith("{") else tag


def read_template(path) -> bytes:
    """Read the template file once for the whole run.

    Raises:
        TemplateError: If the file cannot be read.
    """
    try:
        return Path(path).read_bytes()
    except OSError as e:
        raise TemplateError(f"Cannot read template {path}: {e.strerror or e}") from e


def _register_template_namespaces(data: bytes) -> None:
    """Register the prefixes declared in *data* for serialization.

    Keeps prefixes such as ``sodipodi:`` or ``cc:`` readable in the output
    instead of ElementTree's generated ``ns0:`` names.
    """
    for _event, (prefix, uri) in ET.iterparse(io.BytesIO(data), events=("start-ns",)):
        # Fixed prefixes stay fixed; a stray xmlns:svg must not rename every element.
        if not prefix or uri in _FIXED_NAMESPACES or _GENERATED_PREFIX.match(prefix):
            continue
        try:
            ET.register_namespace(prefix, uri)
        except ValueError:
            trace(f"Skipping namespace prefix {prefix!r} -> {uri}", "SVG")


def parse_template(data: bytes) -> ET.ElementTree:
    """Parse template bytes into a new, independent document.

    Comments and processing instructions inside the root element are
    kept so the template's existing content survives untouched. Anything
    outside the root is not: a DOCTYPE or comments before ``<svg>`` are
    dropped, and the XML declaration is rewritten by ``serialize`` without
    ``standalone="no"``.

    Raises:
        TemplateError: If *data* is not well-formed XML.
    """
    try:
        _register_template_namespaces(data)
        parser = ET.XMLParser(target=ET.TreeBuilder(insert_comments=True, insert_pis=True))
        parser.feed(data)
        root = parser.close()
    except ET.ParseError as e:
        raise TemplateError(f"Template is not valid XML: {e}") from e
    return ET.ElementTree(root)


def find_canvas(document: ET.ElementTree) -> ET.Element:
    """Return the canvas (first ``<svg>``) element of *document*.

    Raises:
        CanvasError: If the document has no ``<svg>`` element.
    """
    for el in document.getroot().iter():
        if local_name(el.tag) == "svg":
            return el
    raise CanvasError("Template has no <svg> canvas element")


def parse_dimension(canvas: ET.Element, attr: str, required: bool = True) -> Optional[float]:
    """Parse a numeric canvas attribute (``width`` or ``height``).

    Args:
        canvas: The canvas element.
        attr: Attribute name.
        required: Raise when the attribute is missing instead of
            returning None.

    Raises:
        CanvasError: If the value is missing (when required), not a
            plain decimal number, or not finite.
    """
    raw = canvas.get(attr)
    if raw is None:
        if required:
            raise CanvasError(f"Canvas element has no {attr} attribute")
        return None
    try:
        value = float(raw.strip())
    except ValueError:
        raise CanvasError(f"Canvas {attr} is not a number: {raw!r}") from None
    if not math.isfinite(value):
        raise CanvasError(f"Canvas {attr} is not finite: {raw!r}")
    return value


def existing_ids(document: ET.ElementTree) -> Set[str]:
    """Collect every ``id`` attribute in *document*."""
    return {el.get("id") for el in document.getroot().iter() if el.get("id") is not None}


def allocate_id(document: ET.ElementTree, prefix: str = "text") -> str:
    """Return the first ``<prefix><n>`` id (n >= 1) not used in *document*."""
    taken = existing_ids(document)
    counter = 1
    while f"{prefix}{counter}" in taken:
        counter += 1
    return f"{prefix}{counter}"


def serialize(document: ET.ElementTree) -> bytes:
    """Serialize *document* to UTF-8 bytes with an XML declaration."""
    buf = io.BytesIO()
    document.write(buf, xml_declaration=True, encoding="utf-8")
    return buf.getvalue()


def write_document(document: ET.ElementTree, path: Path) -> None:
    """Write *document* to *path*, replacing any existing file."""
    Path(path).write_bytes(serialize(document))
