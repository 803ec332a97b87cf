"""Command line entry point.

Usage:
    # Ingest the spreadsheet with settings from config/ingest.yaml
    python -m catalog_ingest ingest

    # Override inputs
    python -m catalog_ingest ingest --csv data/episodes.csv --assets-root ./vids

    # Count stored episodes instead of spreadsheet rows
    python -m catalog_ingest ingest --video-count-policy catalog

    # Replace a channel's cover image
    python -m catalog_ingest update-cover --channel basketball-fundamentals --image new.png
"""

import argparse
import asyncio
import sys
from pathlib import Path

from dotenv import load_dotenv

from catalog_ingest.core.config_loader import load_ingest_config
from catalog_ingest.core.container import create_container, shutdown_container
from catalog_ingest.core.exceptions import CatalogIngestError
from catalog_ingest.core.logging import get_logger, setup_logging

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="catalog_ingest",
        description="Bulk media catalog ingestion",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m catalog_ingest ingest
  python -m catalog_ingest ingest --csv data/episodes.csv --assets-root ./vids
  python -m catalog_ingest update-cover --channel my-channel --image cover.png
        """,
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Ingest settings YAML (default: config/ingest.yaml)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    ingest = subparsers.add_parser("ingest", help="Ingest channels, sections and episodes")
    ingest.add_argument("--csv", type=Path, dest="csv_path", help="Spreadsheet path")
    ingest.add_argument("--assets-root", type=Path, dest="assets_root", help="Asset root directory")
    ingest.add_argument(
        "--video-count-policy",
        choices=["declared", "catalog"],
        dest="video_count_policy",
        help="declared: spreadsheet rows; catalog: stored episodes",
    )

    cover = subparsers.add_parser("update-cover", help="Replace a channel's cover image")
    cover.add_argument("--channel", required=True, help="Channel slug")
    cover.add_argument("--image", required=True, type=Path, help="New cover image")

    return parser


async def run_ingest(args: argparse.Namespace) -> int:
    """Run the ingest command.

    Returns:
        Process exit code
    """
    config = load_ingest_config(
        args.config,
        overrides={
            "csv_path": args.csv_path,
            "assets_root": args.assets_root,
            "video_count_policy": args.video_count_policy,
        },
    )
    container = create_container(ingest_config=config)
    try:
        await container.ingest_pipeline().run()
    finally:
        await shutdown_container(container)

    return 0


async def run_update_cover(args: argparse.Namespace) -> int:
    """Run the update-cover command.

    Returns:
        Process exit code
    """
    config = load_ingest_config(args.config)
    container = create_container(ingest_config=config)
    try:
        url = await container.catalog_writer().replace_channel_cover(args.channel, args.image)
    finally:
        await shutdown_container(container)

    logger.info("Cover updated", channel=args.channel, url=url)
    return 0


COMMANDS = {
    "ingest": run_ingest,
    "update-cover": run_update_cover,
}


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    load_dotenv()
    setup_logging()

    args = build_parser().parse_args(argv)
    try:
        return asyncio.run(COMMANDS[args.command](args))
    except CatalogIngestError as e:
        logger.error("Run aborted", error=str(e), error_type=type(e).__name__, context=e.context)
        return 1


if __name__ == "__main__":
    sys.exit(main())
