"""
LED-Wall Mapping Pipeline
Command-line entry for creating, checking, laying out and scheduling mappings.
"""

import argparse
import asyncio
import logging
import random
import sys
from pathlib import Path
from typing import Optional

from .core.config import ConfigLoader, ConfigValidationError, EditorConfig
from .core.document import MappingCodec, MappingDecodeError
from .editor import MappingEditor
from shared.media import MediaCatalog

DEFAULT_CONFIG = Path(__file__).parent / "config.yaml"


def setup_logging(logs_dir: Path) -> logging.Logger:
    """Configure logging with file and console handlers."""
    logs_dir.mkdir(parents=True, exist_ok=True)
    log_file = logs_dir / "mapping_pipeline.log"

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[
            logging.FileHandler(log_file, mode='a', encoding='utf-8'),
            logging.StreamHandler()
        ]
    )
    return logging.getLogger(__name__)


def load_configuration(config_path: Path) -> EditorConfig:
    """Load the editor configuration; the defaults apply when the file is absent."""
    if not config_path.exists():
        return EditorConfig()
    return ConfigLoader(config_path).load()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="LED-wall mapping pipeline")
    parser.add_argument("--config", type=Path, default=DEFAULT_CONFIG, help="Path to config.yaml")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("new", help="Write a default mapping document")
    p.add_argument("output", type=Path)

    p = sub.add_parser("validate", help="Check a mapping document")
    p.add_argument("mapping", type=Path)

    p = sub.add_parser("autoplace", help="Regenerate all zones without scaling")
    p.add_argument("mapping", type=Path)
    p.add_argument("--output", type=Path, help="Output path (default: overwrite input)")

    p = sub.add_parser("shuffle", help="Spread out repeated clips in one source's playlist")
    p.add_argument("mapping", type=Path)
    p.add_argument("--source", type=int, required=True)
    p.add_argument("--profile", type=str)
    p.add_argument("--seed", type=int, help="Seed for the random fallback")
    p.add_argument("--output", type=Path)

    p = sub.add_parser("adjust", help="Add or remove copies of a clip")
    p.add_argument("mapping", type=Path)
    p.add_argument("--source", type=int, required=True)
    p.add_argument("--clip", type=str, required=True)
    p.add_argument("--delta", type=int, required=True)
    p.add_argument("--profile", type=str)
    p.add_argument("--output", type=Path)

    p = sub.add_parser("list-media", help="List media files for every source's media_root")
    p.add_argument("mapping", type=Path)

    p = sub.add_parser("report", help="Print zone, coverage and playlist tables")
    p.add_argument("mapping", type=Path)
    p.add_argument("--csv-dir", type=Path)
    p.add_argument("--profile", type=str)

    return parser


async def list_media(mapping, logger: logging.Logger) -> None:
    catalog = MediaCatalog()
    await catalog.ensure_for_mapping(mapping)
    for si, source in enumerate(mapping.sources):
        root = source.media_root
        if not root:
            logger.info(f"Source {si}: no media_root")
            continue
        if catalog.error(root):
            logger.error(f"Source {si}: {root} -> {catalog.error(root)}")
            continue
        files = catalog.files(root)
        logger.info(f"Source {si}: {root} -> {len(files)} files")
        for name in files:
            print(f"  {name}")
        playlist = (source.playlists or {}).get(mapping.playlist_profile(), [])
        for name in catalog.missing_files(root, playlist):
            logger.warning(f"Source {si}: playlist clip not found in media root: {name}")


def main(argv: Optional[list] = None) -> int:
    """Main execution entry for the Mapping Pipeline."""
    args = build_parser().parse_args(argv)

    try:
        config = load_configuration(args.config)
    except ConfigValidationError as e:
        print(f"Configuration validation failed: {e}", file=sys.stderr)
        return 1

    logger = setup_logging(Path(config.logs_dir))
    codec = MappingCodec(indent=config.export_indent)
    editor = MappingEditor(config, rng=random.Random(getattr(args, "seed", None)))

    if args.command == "new":
        codec.save(editor.new_mapping(), args.output)
        return 0

    try:
        mapping = codec.load(args.mapping)
    except FileNotFoundError as e:
        logger.error(str(e))
        return 1
    except MappingDecodeError as e:
        logger.error(f"Invalid mapping document: {e}")
        return 1

    output = getattr(args, "output", None) or args.mapping

    if args.command == "validate":
        problems = editor.check(mapping)
        for problem in problems:
            logger.warning(problem)
        logger.info(f"{len(problems)} problem(s) found in {args.mapping}")
        return 0 if not problems else 2

    if args.command == "autoplace":
        result = editor.auto_place(mapping)
        if result.skipped or result.partial:
            logger.warning(f"Sources without full placement: partial={result.partial} skipped={result.skipped}")
        codec.save(result.mapping, output)
        return 0

    if args.command == "shuffle":
        codec.save(editor.shuffle_source(mapping, args.source, args.profile), output)
        return 0

    if args.command == "adjust":
        codec.save(editor.adjust_count(mapping, args.source, args.clip, args.delta, args.profile), output)
        return 0

    if args.command == "list-media":
        asyncio.run(list_media(mapping, logger))
        return 0

    if args.command == "report":
        from mapping_report import generate_report
        generate_report(args.mapping, args.csv_dir, args.profile)
        return 0

    return 1


if __name__ == "__main__":
    sys.exit(main())
