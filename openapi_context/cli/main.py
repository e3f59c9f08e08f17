"""Main CLI entry point for the OpenAPI context server."""

import argparse

from ..utils.logging_config import setup_logging
from .commands.ask import ask_command
from .commands.schema import schema_command
from .commands.search import search_command
from .commands.serve import serve_command
from .config import Config


def _add_common_arguments(parser: argparse.ArgumentParser, verbose_help: str):
    parser.add_argument("--config", help="Path to .env configuration file", default=None)
    parser.add_argument("-v", "--verbose", action="store_true", help=verbose_help)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="openapi-context",
        description="OpenAPI Context Server - MCP server answering questions about an OpenAPI description",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Index the API description and start the MCP server")
    _add_common_arguments(serve_parser, "Show startup messages (default: silent for MCP compatibility)")

    # Ask command
    ask_parser = subparsers.add_parser("ask", help="Ask a question about the API (test the ask tool)")
    ask_parser.add_argument("query", help="Question to ask about the API")
    ask_parser.add_argument("--no-schemas", action="store_true", help="Do not attach related schemas")
    ask_parser.add_argument("--limit", type=int, default=None, help="Maximum entities per list (default: 5)")
    _add_common_arguments(ask_parser, "Show detailed processing information")

    # Search command
    search_parser = subparsers.add_parser("search", help="Search endpoints and schemas (test the search tool)")
    search_parser.add_argument("query", help="Free-text search query")
    search_parser.add_argument(
        "--type", choices=["endpoint", "schema", "all"], default="all", help="What to search (default: all)"
    )
    search_parser.add_argument(
        "--tag", dest="tags", action="append", default=None, help="Only endpoints with this tag (repeatable)"
    )
    search_parser.add_argument("--method", default=None, help="Only endpoints with this HTTP method")
    search_parser.add_argument("--max-results", type=int, default=None, help="Maximum results per list (1-20)")
    _add_common_arguments(search_parser, "Show detailed processing information")

    # Schema command
    schema_parser = subparsers.add_parser("schema", help="Look up schemas (test the schema tool)")
    schema_parser.add_argument("--name", default=None, help="Schema name")
    schema_parser.add_argument("--operation-id", default=None, help="Return the schemas used by this operation")
    schema_parser.add_argument(
        "--part", choices=["overview", "properties", "full"], default="full", help="Schema part (default: full)"
    )
    _add_common_arguments(schema_parser, "Show detailed processing information")

    return parser


def main(argv=None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return

    # Logs go to stderr so stdout stays clean for MCP and JSON output
    verbose = getattr(args, "verbose", False)
    setup_logging(verbose=verbose)

    config = Config(args.config)

    if args.command == "serve":
        serve_command(config, verbose=verbose)
    elif args.command == "ask":
        ask_command(config=config, query=args.query, include_schemas=not args.no_schemas, limit=args.limit)
    elif args.command == "search":
        search_command(
            config=config,
            query=args.query,
            type=args.type,
            tags=args.tags,
            method=args.method,
            max_results=args.max_results,
        )
    elif args.command == "schema":
        schema_command(config=config, name=args.name, operation_id=args.operation_id, part=args.part)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
