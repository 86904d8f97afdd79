"""
Module: cli

Purpose:
    Command-line trigger for album generation. Collects input images,
    merges settings file values with command-line overrides (clamped once,
    at this boundary), runs the export pipeline and writes the artifact.

Key Functions:
    - main(): Entry point for the album-builder console script
    - collect_inputs(): Expand files and directories into image paths

Dependencies:
    - argparse (std)
    - album_builder.builder: Export pipeline
    - album_builder.settings: Settings file

Used By:
    - run_album_builder.py launcher
    - album-builder console script
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, TextIO

from album_builder import __version__
from album_builder.builder import (
    AlbumError,
    Phase,
    StatusEvent,
    build_album,
    format_progress,
)
from album_builder.builder.images import load_image_assets
from album_builder.common.templates import UnsupportedTemplateError, supported_template_keys
from album_builder.core.models import NumberCorner
from album_builder.logging_utils import configure_logging
from album_builder.settings import AlbumSettings, SettingsStore

logger = logging.getLogger(__name__)

# CLI flag destination -> LayoutOptions field
OPTION_FLAGS = (
    "columns",
    "row_gap",
    "column_gap",
    "padding_y",
    "padding_x",
    "background_color",
    "start_number",
    "number_corner",
    "number_size",
    "number_color",
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="album-builder",
        description="Lay images out on printable pages and export them as page_1.png or album.zip",
    )
    parser.add_argument("inputs", nargs="+", type=Path, help="Image files or directories of images")
    parser.add_argument("-o", "--output-dir", type=Path, default=Path("."), help="Where to write the artifact")
    parser.add_argument("--template", choices=list(supported_template_keys()), help="Page size preset")
    parser.add_argument("--settings", type=Path, help="JSON settings file to start from")
    parser.add_argument("--save-settings", action="store_true", help="Write the effective settings back to --settings")
    parser.add_argument("--single", action="store_true", help="Generate only the first page as a test print")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="More logging (-vv for debug)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    layout = parser.add_argument_group("layout")
    # Numbers are taken as text and clamped by LayoutOptions.from_raw()
    layout.add_argument("--columns", metavar="N", help="Images per row (min 1)")
    layout.add_argument("--row-gap", metavar="PX", help="Vertical gap between rows (min 0)")
    layout.add_argument("--column-gap", metavar="PX", help="Horizontal gap between columns (min 0)")
    layout.add_argument("--padding-y", metavar="PX", help="Top/bottom padding inside the safe area (min 0)")
    layout.add_argument("--padding-x", metavar="PX", help="Left/right padding inside the safe area (min 0)")
    layout.add_argument("--background", dest="background_color", metavar="COLOR", help="Page background colour")

    numbering = parser.add_argument_group("page numbers")
    numbering.add_argument("--start-number", metavar="N", help="Number of the first page (min 1)")
    numbering.add_argument(
        "--number-corner",
        choices=[corner.value for corner in NumberCorner],
        help="Corner of the first page number; later pages alternate",
    )
    numbering.add_argument("--number-size", metavar="PX", help="Page number size (min 1)")
    numbering.add_argument("--number-color", metavar="COLOR", help="Page number colour")
    return parser


def collect_inputs(paths: Iterable[Path]) -> List[Path]:
    """
    Expand inputs into a flat list of files.

    Files are kept in the given order; a directory contributes its
    immediate files sorted by name.

    Raises:
        FileNotFoundError: If an input does not exist
    """
    collected: List[Path] = []
    for path in paths:
        if path.is_dir():
            collected.extend(sorted(p for p in path.iterdir() if p.is_file()))
        elif path.is_file():
            collected.append(path)
        else:
            raise FileNotFoundError(f"Input not found: {path}")
    return collected


def _progress_printer(out: TextIO):
    def _print(event: StatusEvent) -> None:
        if event.phase is Phase.STARTED:
            print(f"Generating {event.page_count} page(s)...", file=out)
        elif event.phase in (Phase.PAGE_COMPLETE, Phase.COMPLETE):
            print(format_progress(event), file=out)
        out.flush()
    return _print


def main(argv: Optional[Sequence[str]] = None, stdout: Optional[TextIO] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    out = stdout or sys.stdout
    configure_logging(args.verbose)

    if args.save_settings and args.settings is None:
        parser.error("--save-settings requires --settings")

    try:
        files = collect_inputs(args.inputs)
    except FileNotFoundError as e:
        parser.error(str(e))

    store = SettingsStore(args.settings) if args.settings else None
    settings = store.load() if store else AlbumSettings()

    overrides = {name: getattr(args, name) for name in OPTION_FLAGS}
    try:
        options = settings.options.merged(overrides)
    except ValueError as e:
        parser.error(str(e))
    template_key = args.template or settings.template

    try:
        assets = load_image_assets(files)
    except OSError as e:
        parser.error(f"cannot read input: {e}")
    if not assets:
        parser.error("no jpg, jpeg, png or gif images among the inputs")

    try:
        artifact, geometry = build_album(
            assets,
            options,
            template_key,
            single_page_only=args.single,
            on_event=_progress_printer(out),
        )
    except (AlbumError, UnsupportedTemplateError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    path = artifact.write_to(args.output_dir)
    print(
        f"{artifact.page_count} page(s), {geometry.max_per_page} image(s) per page -> {path}",
        file=out,
    )

    if store is not None and args.save_settings:
        store.save(AlbumSettings(template=template_key, options=options))
        logger.info(f"Saved settings to {store.path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
