"""
main.py

SVG Annotator - command line entry point

Annotates a template SVG with one or more names, writing one SVG (and,
when Inkscape or Qt is available, one PNG) per name.

Usage:
    python main.py -n "Misaka Mikoto"
    python main.py -n names.txt -t template.svg

Exit status:
    0  all names annotated (rasterizer absence is not an error)
    1  one or more names failed
    2  unusable name source, template, or configuration
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from dataclasses import asdict
from typing import List, Optional

from annotator import AnnotationPipeline, load_names
from debug_trace import close_log, configure_logging, trace
from models import AnnotationError, COLLISION_POLICIES, RASTER_BACKENDS
from raster import probe_rasterizer
from settings import SettingsManager

__version__ = "1.0.0"

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_USAGE = 2

log = logging.getLogger("svg_annotator")


def build_parser() -> argparse.ArgumentParser:
    """Create the command line parser.

    Options left unset fall back to the settings file, then to defaults.
    """
    parser = argparse.ArgumentParser(
        prog="svg-annotator",
        description="Annotate a template SVG with one or more names.",
        epilog='Example:\n  %(prog)s -n "Misaka Mikoto"    Annotates template.svg with "Misaka Mikoto"',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-v", "--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-n", "--name",
                        help="Load a name or a file of names, one per line (default: names.txt)")
    parser.add_argument("-t", "--template",
                        help="Template SVG file to be annotated (default: template.svg)")
    parser.add_argument("-o", "--output-dir",
                        help="Directory for annotated files (default: out)")
    parser.add_argument("--font-style", dest="font_family",
                        help="Font family for the name(s); the renderer must know it (default: cmmi10)")
    parser.add_argument("--font-size", type=float,
                        help="Font size for the name(s) in pixels (default: 14)")
    parser.add_argument("--font-scale", type=float, help=argparse.SUPPRESS)
    parser.add_argument("--baseline-y", type=float,
                        help="Fixed label baseline in user units (default: 214.18192)")
    parser.add_argument("--baseline-ratio", type=float,
                        help="Place the baseline at this fraction of the canvas height")
    parser.add_argument("--rasterizer", choices=RASTER_BACKENDS,
                        help="PNG backend (default: inkscape)")
    parser.add_argument("--timeout", type=float,
                        help="Seconds to wait for each Inkscape call (default: 60)")
    parser.add_argument("--on-collision", choices=COLLISION_POLICIES,
                        help="What to do when two names map to the same file (default: suffix)")
    parser.add_argument("--config", help="Settings TOML file (default: user config directory)")
    parser.add_argument("--show-config", action="store_true",
                        help="Print the settings in TOML form and exit")
    parser.add_argument("--save-config", action="store_true",
                        help="Store the given options as the new defaults and exit")
    parser.add_argument("--log-file", help="Also write the log to this file")
    parser.add_argument("-d", "--debug", action="store_true", help="Verbose diagnostic logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Run the annotator and return the process exit status."""
    args = build_parser().parse_args(argv)
    configure_logging(args.debug, args.log_file)
    started = time.perf_counter()

    try:
        manager = SettingsManager(settings_file=args.config)
        if args.show_config:
            print(manager.to_toml(), end="")
            return EXIT_OK

        try:
            config = manager.to_config(
                template=args.template,
                names=args.name,
                output_dir=args.output_dir,
                font_family=args.font_family,
                font_size=args.font_size,
                font_scale=args.font_scale,
                baseline_y=args.baseline_y,
                baseline_ratio=args.baseline_ratio,
                rasterizer=args.rasterizer,
                timeout=args.timeout,
                on_collision=args.on_collision,
            )
        except ValueError as e:
            log.error("Invalid configuration: %s", e)
            return EXIT_USAGE

        if args.save_config:
            manager.update_from_config(config)
            try:
                manager.save()
            except OSError as e:
                log.error("Cannot save settings to %s: %s", manager.get_settings_path(), e)
                return EXIT_USAGE
            log.info("Settings saved to %s", manager.get_settings_path())
            return EXIT_OK

        trace(f"Settings file: {manager.get_settings_path()}", "CONFIG")
        trace(f"Config: {asdict(config)}", "CONFIG")

        rasterizer = probe_rasterizer(config)
        trace(f"Rasterizer: {rasterizer.name if rasterizer else 'none'}", "CONFIG")

        try:
            names = load_names(config.names)
            pipeline = AnnotationPipeline(config, rasterizer)
        except AnnotationError as e:
            log.error("%s", e)
            return EXIT_USAGE

        results = pipeline.run(names)
        return EXIT_FAILED if any(not r.ok for r in results) else EXIT_OK
    finally:
        trace(f"Total time: {time.perf_counter() - started:.3f} s", "TIME")
        close_log()


if __name__ == "__main__":
    # Set up global exception handler to catch crashes
    def excepthook(exc_type, exc_value, exc_tb):
        import traceback
        trace("UNCAUGHT EXCEPTION:", "CRASH")
        trace("".join(traceback.format_exception(exc_type, exc_value, exc_tb)), "CRASH")
        close_log()
        sys.__excepthook__(exc_type, exc_value, exc_tb)

    sys.excepthook = excepthook
    sys.exit(main())
