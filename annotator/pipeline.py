"""
annotator/pipeline.py

Annotate a template once per name.

For every name the template bytes are parsed into a fresh document, a
label is injected, and the result is written to the output directory
and optionally rasterized. One name is finished before the next starts.
"""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Iterable, List, Optional

from annotator.document import (
    allocate_id,
    find_canvas,
    parse_dimension,
    parse_template,
    read_template,
    write_document,
)
from annotator.filenames import OutputNamer
from annotator.injector import build_style, inject_label, set_docname
from annotator.names import is_comment
from annotator.placement import baseline_y, compute_x
from debug_trace import trace, trace_exception
from models import AnnotationConfig, AnnotationError, AnnotationResult, RasterError
from raster import Rasterizer

log = logging.getLogger(__name__)


class AnnotationPipeline:
    """Annotates one template with a sequence of names.

    Args:
        config: Run configuration.
        rasterizer: Optional PNG backend from :func:`raster.probe_rasterizer`.
        template_data: Template bytes; read from ``config.template`` when
            omitted.
    """

    def __init__(
        self,
        config: AnnotationConfig,
        rasterizer: Optional[Rasterizer] = None,
        template_data: Optional[bytes] = None,
    ):
        self.config = config
        self.rasterizer = rasterizer
        self.template_data = template_data if template_data is not None else read_template(config.template)
        self.output_dir = Path(config.output_dir)
        self.style = build_style(config)
        self.namer = OutputNamer(config.on_collision)

    @staticmethod
    def should_skip(name: str) -> bool:
        """Comments and empty names produce no output."""
        return not name or is_comment(name)

    def annotate(self, name: str) -> AnnotationResult:
        """Annotate the template with *name* and write the artifacts.

        A rasterizer failure does not raise: the SVG stays on disk and the
        error is recorded on the returned result.

        Raises:
            AnnotationError: If the document cannot be annotated or written.
        """
        result = AnnotationResult(name=name)

        document = parse_template(self.template_data)
        canvas = find_canvas(document)
        width = parse_dimension(canvas, "width")
        height = parse_dimension(canvas, "height", required=False)

        result.label_id = allocate_id(document, self.config.id_prefix)
        result.x = compute_x(width, len(name), self.config.font_size, self.config.font_scale)
        result.y = baseline_y(self.config, height)

        stem = self.namer.claim(name)
        svg_file = f"{stem}.svg"

        inject_label(canvas, name, result.label_id, self.style, result.x, result.y)
        set_docname(canvas, svg_file)
        trace(f"{name!r}: id={result.label_id} x={result.x} y={result.y} file={svg_file}", "INJECT")

        log.info('Annotating "%s" to %s', name, self.config.template)
        svg_path = self.output_dir / svg_file
        try:
            write_document(document, svg_path)
        except OSError as e:
            raise AnnotationError(f"Cannot write {svg_path}: {e.strerror or e}") from e
        result.svg_path = svg_path

        if self.rasterizer is not None:
            png_path = self.output_dir / f"{stem}.png"
            try:
                result.png_path = self.rasterizer.rasterize(svg_path, png_path, label_id=result.label_id)
            except RasterError as e:
                log.error('Failed to rasterize "%s": %s', name, e)
                result.error = str(e)

        return result

    def run(self, names: Iterable[str]) -> List[AnnotationResult]:
        """Annotate every non-skipped name, continuing past per-name errors.

        Returns:
            One result per processed name, in input order.
        """
        started = time.perf_counter()
        self.output_dir.mkdir(parents=True, exist_ok=True)

        results: List[AnnotationResult] = []
        for name in names:
            if self.should_skip(name):
                trace(f"Skipping record {name!r}", "NAMES")
                continue
            try:
                results.append(self.annotate(name))
            except AnnotationError as e:
                log.error('Failed to annotate "%s": %s', name, e)
                trace_exception(f"annotate({name!r})")
                results.append(AnnotationResult(name=name, error=str(e)))

        failed = sum(1 for r in results if not r.ok)
        log.info(
            "Annotated %d name(s), %d failed, in %.3f s",
            len(results) - failed,
            failed,
            time.perf_counter() - started,
        )
        return results
