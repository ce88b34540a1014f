"""Command line interface for converting and migrating rich-text blog content."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path

from richtext2md.assets import collect_embedded_assets
from richtext2md.config import RICHTEXT2MD_DATA_PATH, STRAPI_URL
from richtext2md.csv_import import read_blog_csv
from richtext2md.exceptions import FetchError, RichText2mdError, SourceNotAvailableError
from richtext2md.file_utils import write_json
from richtext2md.markdown import convert_rich_text_to_markdown
from richtext2md.migration import (
    MIGRATION_FILENAME,
    MigrationOptions,
    load_migration_file,
    migrate_from_contentful,
)
from richtext2md.rich_text import load_rich_text
from richtext2md.schemas import BlogEntry, ImportReport
from richtext2md.strapi import StrapiClient, format_blog_details, format_blog_table, import_entries
from richtext2md.utils.logging_config import configure_logging, get_logger

logger = get_logger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging("DEBUG" if args.verbose else None)

    try:
        return args.handler(args)
    except RichText2mdError as exc:
        logger.error("%s", exc)
        return 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="richtext2md",
        description="Convert Contentful rich text to Markdown and migrate blogs into Strapi.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    commands = parser.add_subparsers(dest="command", required=True)

    convert = commands.add_parser("convert", help="Print Markdown for a rich-text JSON file")
    convert.add_argument("file", type=Path, help="Rich-text document JSON file")
    convert.add_argument("--assets", action="store_true", help="Also print the embedded asset manifest")
    convert.set_defaults(handler=_run_convert)

    migrate = commands.add_parser("migrate", help="Fetch Contentful entries and save them as JSON")
    migrate.add_argument("--space-id", help="Contentful space (default: CONTENTFUL_SPACE_ID)")
    migrate.add_argument("--access-token", help="Delivery API token (default: CONTENTFUL_ACCESS_TOKEN)")
    migrate.add_argument("--content-type", help="Content type id (default: CONTENTFUL_CONTENT_TYPE)")
    migrate.add_argument("--environment", help="Space environment (default: CONTENTFUL_ENVIRONMENT)")
    migrate.add_argument("--rich-text-field", default="blogText", help="Field holding the rich-text body")
    migrate.add_argument(
        "--output", type=Path, default=RICHTEXT2MD_DATA_PATH / MIGRATION_FILENAME, help="Output JSON file"
    )
    migrate.set_defaults(handler=_run_migrate)

    import_json = commands.add_parser("import", help="Import migrated JSON entries into Strapi")
    import_json.add_argument(
        "--file", type=Path, default=RICHTEXT2MD_DATA_PATH / MIGRATION_FILENAME, help="Migration JSON file"
    )
    import_json.set_defaults(handler=_run_import)

    import_csv = commands.add_parser("import-csv", help="Import a blog CSV export into Strapi")
    import_csv.add_argument("--file", type=Path, default=RICHTEXT2MD_DATA_PATH / "blogs.csv", help="CSV file")
    import_csv.set_defaults(handler=_run_import_csv)

    check = commands.add_parser("check", help="Show blogs stored in Strapi")
    target = check.add_mutually_exclusive_group()
    target.add_argument("--id", help="Show a specific blog by id")
    target.add_argument("--slug", help="Show a specific blog by slug")
    check.add_argument("--export", action="store_true", help="Export all blogs to JSON")
    check.add_argument("--count", action="store_true", help="Show only the count")
    check.set_defaults(handler=_run_check)

    return parser


def _run_convert(args: argparse.Namespace) -> int:
    path: Path = args.file
    if not path.is_file():
        raise SourceNotAvailableError(f"Rich-text file not found: {path}")
    document = load_rich_text(path.read_text(encoding="utf-8"))
    print(convert_rich_text_to_markdown(document))
    if args.assets:
        assets = collect_embedded_assets(document)
        print(json.dumps([asset.model_dump(mode="json", by_alias=True) for asset in assets], indent=2))
    return 0


def _run_migrate(args: argparse.Namespace) -> int:
    options = MigrationOptions(
        space_id=args.space_id,
        access_token=args.access_token,
        content_type=args.content_type,
        environment=args.environment,
        rich_text_field=args.rich_text_field,
        output_path=args.output,
    )
    migrated = asyncio.run(migrate_from_contentful(options))
    print(f"Migrated {len(migrated)} entries to {options.output_path}")
    print("Next: review the file, then run `richtext2md import` to load it into Strapi.")
    return 0


def _run_import(args: argparse.Namespace) -> int:
    entries = load_migration_file(args.file)
    logger.info("Found %d entries to import", len(entries))
    report = asyncio.run(_import(entries, check_first=False))
    return _print_report(report)


def _run_import_csv(args: argparse.Namespace) -> int:
    entries = read_blog_csv(args.file)
    parsed_path = write_json(
        args.file.with_name("csv-parsed.json"),
        [entry.model_dump(mode="json", by_alias=True) for entry in entries],
    )
    logger.info("Parsed data saved to %s", parsed_path)
    report = asyncio.run(_import(entries, check_first=True))
    return _print_report(report)


async def _import(entries: list[BlogEntry], *, check_first: bool) -> ImportReport:
    async with StrapiClient() as client:
        if check_first:
            try:
                await client.check_connection()
            except FetchError as exc:
                raise FetchError(
                    f"Cannot connect to Strapi at {STRAPI_URL}. Make sure Strapi is running: {exc}"
                ) from exc
            logger.info("Connection to Strapi successful")
        return await import_entries(client, entries)


def _print_report(report: ImportReport) -> int:
    print("Import completed:")
    print(f"  Success: {report.success_count}")
    print(f"  Errors: {report.error_count}")
    for failure in report.failures:
        label = f"{failure.name} ({failure.slug})" if failure.slug else failure.name
        print(f"    {label}: {failure.message}")
    return 0 if report.error_count == 0 else 1


def _run_check(args: argparse.Namespace) -> int:
    return asyncio.run(_check(args))


async def _check(args: argparse.Namespace) -> int:
    async with StrapiClient() as client:
        if args.id or args.slug:
            blog = await client.get_blog(args.id) if args.id else await client.find_blog_by_slug(args.slug)
            if args.count:
                print(f"Total blogs: {1 if blog else 0}")
                return 0
            if not blog:
                print("Blog not found")
                return 1
            print(format_blog_details(blog))
            return 0

        blogs = await client.list_blogs()

    if args.count:
        print(f"Total blogs: {len(blogs)}")
        return 0
    if not blogs:
        print("No blogs found")
        return 0

    print(f"Found {len(blogs)} blogs:\n")
    print(format_blog_table(blogs))
    print(f"\nTotal: {len(blogs)} blogs")
    if args.export:
        export_path = write_json(RICHTEXT2MD_DATA_PATH / "blogs-export.json", blogs)
        print(f"\nExported to: {export_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
