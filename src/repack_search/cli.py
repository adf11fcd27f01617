"""
Command-line interface for Repack Search.

Provides commands for index setup, sync, search, and stats.
"""

import argparse
import asyncio
import logging

from .config import LOG_LEVEL
from .models import IndexedListing, LiveListing, ServiceResponse
from .search import HybridSearchService


def _print_status(response: ServiceResponse) -> None:
    marker = "OK" if response.success else "FAILED"
    print(f"[{marker} {response.status_code}] {response.message}")


def _print_listing(i: int, listing) -> None:
    print(f"[{i}] {listing.title}")
    print(f"    Source: {listing.source}")
    if isinstance(listing, IndexedListing):
        print(f"    Size: {listing.size or 'unknown'} | Uploaded: {listing.published_at or 'unknown'}")
    elif isinstance(listing, LiveListing) and listing.snippet:
        print(f"    {listing.snippet[:200]}")
    print(f"    {listing.access_url}")
    print()


def cmd_setup_index(service: HybridSearchService, args) -> int:
    """Configure the Meilisearch index."""
    response = asyncio.run(service.setup_index())
    _print_status(response)
    return 0 if response.success else 1


def cmd_sync(service: HybridSearchService, args) -> int:
    """Sync the index with every repack provider."""
    print("Fetching releases from providers...")
    response = asyncio.run(service.refresh())
    _print_status(response)
    return 0 if response.success else 1


def cmd_search(service: HybridSearchService, args) -> int:
    """Search the index, or the web with --live."""
    if args.live:
        response = asyncio.run(service.search_live(args.query))
    else:
        response = asyncio.run(service.search_indexed(args.query))

    print(f"\nSearching for: {args.query}\n")
    print("-" * 60)
    _print_status(response)
    print()

    for i, listing in enumerate((response.data or [])[:args.limit], 1):
        _print_listing(i, listing)

    return 0 if response.success else 1


def cmd_stats(service: HybridSearchService, args) -> int:
    """Show statistics about the index."""
    response = asyncio.run(service.stats())
    if not response.success:
        _print_status(response)
        return 1

    print("\nINDEX STATS\n")
    print("-" * 40)
    print(f"Total listings: {response.data['documents']}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Repack Search CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    setup_parser = subparsers.add_parser("setup-index", help="Configure the search index")
    setup_parser.set_defaults(func=cmd_setup_index)

    sync_parser = subparsers.add_parser("sync", help="Sync the index with FitGirl and DODI")
    sync_parser.set_defaults(func=cmd_sync)

    search_parser = subparsers.add_parser("search", help="Search for a game")
    search_parser.add_argument("query", help="Search query")
    search_parser.add_argument("--live", action="store_true", help="Search Google instead of the index")
    search_parser.add_argument("--limit", type=int, default=10, help="Results to print")
    search_parser.set_defaults(func=cmd_search)

    stats_parser = subparsers.add_parser("stats", help="Show index stats")
    stats_parser.set_defaults(func=cmd_stats)

    return parser


def main(argv=None, service: HybridSearchService = None) -> int:
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    logging.basicConfig(level=LOG_LEVEL)
    return args.func(service or HybridSearchService(), args)


if __name__ == "__main__":
    raise SystemExit(main())
