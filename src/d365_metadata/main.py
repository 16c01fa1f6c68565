"""
D365 Metadata CLI

Main entry point: fetch, list, show, search, export and serve commands.
"""

import argparse
import asyncio
import logging
import sys
from typing import Any, Dict, List, Optional
import structlog

from . import __version__
from .auth import AuthenticationError
from .client import MetadataFetchError
from .config import get_settings, load_dotenv_if_exists
from .factories import AuthProviderFactory, ServiceFactory
from .parsing import MetadataFormatError
from .repositories import MetadataFileError
from .services.metadata import EntityNotFoundError

logger = structlog.get_logger(__name__)


def configure_logging(log_level: str = "info") -> None:
    """Configure structured logging on stderr so stdout carries command output"""
    level = getattr(logging, log_level.upper())
    logging.basicConfig(level=level, stream=sys.stderr, format="%(message)s", force=True)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def print_error(message: str) -> None:
    print(message, file=sys.stderr)


def print_numbered(names: List[str]) -> None:
    for index, name in enumerate(names, 1):
        print(f"{index}. {name}")


def print_entity(entity: Dict[str, Any]) -> None:
    print(f"\nEntity: {entity.get('name')}\n")

    print("Keys:")
    for key in entity.get("keys", []):
        print(f" - {key}")

    print("\nProperties:")
    for prop in entity.get("properties", []):
        tag = "[Nullable]" if prop.get("nullable") else "[Not Nullable]"
        print(f" - {prop.get('name')} ({prop.get('type')}) {tag}")

    navigation = entity.get("navigationProperties", [])
    if navigation:
        print("\nNavigation Properties:")
        for nav in navigation:
            print(f" - {nav.get('name')} -> {nav.get('type')}")
    else:
        print("\nNavigation Properties: None")


async def run_fetch(args: argparse.Namespace) -> int:
    settings = get_settings()
    metadata_url = args.url or settings.metadata_url
    if not metadata_url:
        print_error("Error fetching metadata: no metadata URL given (use --url or METADATA_URL)")
        return 1

    try:
        auth_provider = AuthProviderFactory.create(settings, metadata_url, token=args.token)
        sync_service = ServiceFactory.create_sync_service(
            auth_provider, args.output, timeout=settings.request_timeout
        )
        print("Fetching metadata...")
        stats = await sync_service.fetch_and_store(metadata_url)
    except MetadataFetchError as e:
        if e.is_unauthorized:
            print_error("Unauthorized: Please check your Bearer Token.")
        else:
            print_error(f"Error fetching metadata: {e}")
            if e.status_code is not None:
                print_error(f"Status Code: {e.status_code}")
        return 1
    except (AuthenticationError, MetadataFormatError, OSError) as e:
        print_error(f"Error fetching metadata: {e}")
        return 1

    print("Metadata fetched and parsed successfully.")
    print(f"Raw metadata saved to {stats['raw_path']}")
    print(f"{stats['entity_count']} entities written to {stats['output_path']}")
    return 0


async def run_list(args: argparse.Namespace) -> int:
    service = ServiceFactory.create_metadata_service(args.input)
    try:
        names = await service.list_entities()
    except MetadataFileError as e:
        print_error(f"Error listing entities: {e}")
        return 1

    print("Available Entities:")
    print_numbered(names)
    return 0


async def run_show(args: argparse.Namespace) -> int:
    service = ServiceFactory.create_metadata_service(args.input)
    try:
        entity = await service.show_entity(args.entity)
    except MetadataFileError as e:
        print_error(f"Error showing entity details: {e}")
        return 1

    if entity is None:
        print(f'Entity "{args.entity}" not found.')
        return 1

    print_entity(entity)
    return 0


async def run_search(args: argparse.Namespace) -> int:
    service = ServiceFactory.create_metadata_service(args.input)
    try:
        names = await service.search_entities(args.query)
    except MetadataFileError as e:
        print_error(f"Error searching entities: {e}")
        return 1

    if not names:
        print("No entities found matching the query.")
        return 0

    print("Search Results:")
    print_numbered(names)
    return 0


async def run_export(args: argparse.Namespace) -> int:
    service = ServiceFactory.create_metadata_service(args.input)
    try:
        path = await service.export_entity_to_markdown(args.entity, args.output)
    except (MetadataFileError, EntityNotFoundError, OSError) as e:
        print_error(f"Error exporting entity: {e}")
        return 1

    print(f'Entity "{args.entity}" exported to {path}')
    return 0


def run_serve(args: argparse.Namespace) -> int:
    from .server_factory import ServerFactory

    mcp = ServerFactory.create_configured_server(args.input)

    # Keep stdio clean for the MCP protocol
    logging.disable(logging.CRITICAL)
    mcp.run(transport="stdio")
    return 0


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()

    parser = argparse.ArgumentParser(
        prog="d365-metadata",
        description="Fetch, parse, and query Dynamics 365 OData metadata",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--log-level",
        default=settings.log_level,
        choices=["debug", "info", "warning", "error"],
        help="Log level (default: info)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    def add_input(sub: argparse.ArgumentParser) -> None:
        sub.add_argument(
            "-i", "--input",
            default=settings.metadata_path,
            help=f"Path to parsed metadata JSON (default: {settings.metadata_path})",
        )

    fetch = subparsers.add_parser("fetch", help="Fetch and parse the OData $metadata XML")
    fetch.add_argument("-u", "--url", default=None, help="OData metadata URL")
    fetch.add_argument(
        "-t", "--token", default=None,
        help="Bearer Token for authentication (default: $DYNAMICS_BEARER_TOKEN)",
    )
    fetch.add_argument(
        "-o", "--output",
        default=settings.metadata_path,
        help=f"Output path for parsed metadata JSON (default: {settings.metadata_path})",
    )
    fetch.set_defaults(handler=run_fetch)

    list_cmd = subparsers.add_parser("list", help="List all available entities/tables")
    add_input(list_cmd)
    list_cmd.set_defaults(handler=run_list)

    show = subparsers.add_parser("show", help="Show detailed mapping of a specific entity/table")
    show.add_argument("entity")
    add_input(show)
    show.set_defaults(handler=run_show)

    search = subparsers.add_parser("search", help="Search for entities by partial name")
    search.add_argument("query")
    add_input(search)
    search.set_defaults(handler=run_search)

    export = subparsers.add_parser(
        "export", help="Export detailed mapping of a specific entity/table to Markdown"
    )
    export.add_argument("entity")
    add_input(export)
    export.add_argument(
        "-o", "--output",
        default=settings.markdown_path,
        help=f"Output path for the Markdown file (default: {settings.markdown_path})",
    )
    export.set_defaults(handler=run_export)

    serve = subparsers.add_parser("serve", help="Serve the query commands as MCP tools over stdio")
    add_input(serve)
    serve.set_defaults(handler=run_serve, is_async=False)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point with command line argument parsing"""
    load_dotenv_if_exists()
    configure_logging()

    try:
        parser = build_parser()
    except ValueError as e:
        print_error(str(e))
        return 1

    args = parser.parse_args(argv)
    configure_logging(args.log_level)
    logger.debug("Running command", command=args.command)

    if not getattr(args, "is_async", True):
        return args.handler(args)
    return asyncio.run(args.handler(args))


if __name__ == "__main__":
    sys.exit(main())
