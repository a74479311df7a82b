"""
annotator package

Label placement, injection and the per-name annotation pipeline.
"""

from annotator.document import allocate_id, find_canvas, parse_template, serialize
from annotator.filenames import OutputNamer, derive_base_name
from annotator.injector import build_style, inject_label, set_docname
from annotator.names import load_names
from annotator.pipeline import AnnotationPipeline
from annotator.placement import baseline_y, compute_x

__all__ = [
    "AnnotationPipeline",
    "OutputNamer",
    "allocate_id",
    "baseline_y",
    "build_style",
    "compute_x",
    "derive_base_name",
    "find_canvas",
    "inject_label",
    "load_names",
    "parse_template",
    "serialize",
    "set_docname",
]
