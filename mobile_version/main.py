"""Entry point for Mobile Version Lookup."""

import argparse
import json
import logging
import os
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.table import Table

from .cache import FileCache
from .constants import CACHE_FILE_ENV_VAR, DEFAULT_CACHE_PERIOD, DEFAULT_COUNTRY, DEFAULT_HTTP_TIMEOUT, __version__
from .exceptions import VersionLookupError
from .logging_config import get_logger, setup_logging
from .models import LookupConfig, Platform
from .service import AppMobileVersion

logger = get_logger(__name__)

console = Console()
error_console = Console(stderr=True)


def _default_cache_file() -> Optional[Path]:
    value = os.environ.get(CACHE_FILE_ENV_VAR)
    return Path(value) if value else None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mobile-version",
        description="Look up the latest published version of a mobile app",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--verbose", "-V",
        action="store_true",
        help="Enable verbose logging",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        help="Log file path",
    )

    lookup_options = argparse.ArgumentParser(add_help=False)
    lookup_options.add_argument("bundle_id", help="Bundle id (iOS) or package name (Android)")
    lookup_options.add_argument(
        "--cache-file",
        type=Path,
        default=_default_cache_file(),
        help=f"Cache versions in this JSON file (default: ${CACHE_FILE_ENV_VAR})",
    )
    lookup_options.add_argument(
        "--cache-period",
        type=int,
        default=DEFAULT_CACHE_PERIOD,
        help="Seconds a cached version stays valid",
    )
    lookup_options.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_HTTP_TIMEOUT,
        help="HTTP timeout in seconds",
    )
    lookup_options.add_argument(
        "--no-verify-ssl",
        action="store_true",
        help="Disable TLS certificate verification",
    )
    lookup_options.add_argument("--json", action="store_true", help="Output as JSON")

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    ios_parser = subparsers.add_parser("ios", parents=[lookup_options], help="Latest App Store version")
    ios_parser.add_argument("--country", "-c", default=DEFAULT_COUNTRY, help="App Store country code")
    ios_parser.set_defaults(func=run_lookup, platforms=[Platform.IOS])

    android_parser = subparsers.add_parser("android", parents=[lookup_options], help="Latest Google Play version")
    android_parser.set_defaults(func=run_lookup, platforms=[Platform.ANDROID], country=None)

    all_parser = subparsers.add_parser("all", parents=[lookup_options], help="Latest version on both stores")
    all_parser.add_argument("--country", "-c", default=DEFAULT_COUNTRY, help="App Store country code")
    all_parser.set_defaults(func=run_lookup, platforms=[Platform.IOS, Platform.ANDROID])

    cache_parser = subparsers.add_parser("cache", help="Inspect or clear the version cache")
    cache_subparsers = cache_parser.add_subparsers(dest="cache_command", required=True)

    cache_options = argparse.ArgumentParser(add_help=False)
    cache_options.add_argument(
        "--cache-file",
        type=Path,
        default=_default_cache_file(),
        help=f"Cache file (default: ${CACHE_FILE_ENV_VAR})",
    )

    show_parser = cache_subparsers.add_parser("show", parents=[cache_options], help="List cached versions")
    show_parser.add_argument("--json", action="store_true", help="Output as JSON")
    show_parser.set_defaults(func=run_cache_show)

    clear_parser = cache_subparsers.add_parser("clear", parents=[cache_options], help="Remove cached versions")
    clear_parser.add_argument("--bundle-id", help="Only clear entries of this app")
    clear_parser.set_defaults(func=run_cache_clear)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    log_level = logging.DEBUG if args.verbose else logging.WARNING
    setup_logging(level=log_level, log_file=args.log_file)

    if not hasattr(args, "func"):
        parser.print_help()
        return 2

    try:
        return args.func(args)
    except VersionLookupError as e:
        error_console.print(f"[red]Error:[/red] {e}")
        return 1


def run_lookup(args: argparse.Namespace) -> int:
    """Look up versions for one or both platforms."""
    config = LookupConfig(
        bundle_id=args.bundle_id,
        use_cache=args.cache_file is not None,
        cache_file_path=args.cache_file,
        cache_period=args.cache_period,
        timeout=args.timeout,
        verify_ssl=not args.no_verify_ssl,
    )

    results: dict[str, dict[str, Optional[str]]] = {}
    failed = False

    with AppMobileVersion(config) as lookup:
        for platform in args.platforms:
            try:
                version = lookup.get_version(platform, args.country)
                results[platform.value] = {"version": version, "error": None}
            except VersionLookupError as e:
                logger.debug("Lookup failed for %s: %s", platform.value, e)
                results[platform.value] = {"version": None, "error": str(e)}
                failed = True

    if args.json:
        print(json.dumps({"bundle_id": args.bundle_id, "results": results}, indent=2))
    elif len(results) == 1:
        (result,) = results.values()
        if result["error"]:
            error_console.print(f"[red]Error:[/red] {result['error']}")
        else:
            print(result["version"])
    else:
        for platform_name, result in results.items():
            if result["error"]:
                console.print(f"{platform_name:<8} [red]{result['error']}[/red]")
            else:
                console.print(f"{platform_name:<8} {result['version']}")

    return 1 if failed else 0


def _require_cache_file(args: argparse.Namespace) -> Optional[FileCache]:
    if args.cache_file is None:
        error_console.print(f"[red]Error:[/red] --cache-file or ${CACHE_FILE_ENV_VAR} is required")
        return None
    return FileCache(args.cache_file)


def run_cache_show(args: argparse.Namespace) -> int:
    """List cached versions."""
    cache = _require_cache_file(args)
    if cache is None:
        return 2

    entries = cache.entries()
    now = datetime.now()

    if args.json:
        output = {
            "entries": [
                {
                    "bundle_id": entry.application_id,
                    "platform": entry.platform.value,
                    "version": entry.version,
                    "expired_at": entry.to_dict()["expired_at"],
                    "fresh": entry.is_fresh(now),
                }
                for entry in entries
            ],
            "count": len(entries),
        }
        print(json.dumps(output, indent=2))
        return 0

    if not entries:
        console.print(f"No cached versions in {cache.path}")
        return 0

    table = Table(title=str(cache.path))
    table.add_column("Bundle ID")
    table.add_column("Platform")
    table.add_column("Version")
    table.add_column("Expires at")
    table.add_column("Status")

    for entry in entries:
        status = "[green]fresh[/green]" if entry.is_fresh(now) else "[yellow]expired[/yellow]"
        table.add_row(
            entry.application_id,
            entry.platform.value,
            entry.version,
            entry.to_dict()["expired_at"],
            status,
        )

    console.print(table)
    return 0


def run_cache_clear(args: argparse.Namespace) -> int:
    """Remove cached versions."""
    cache = _require_cache_file(args)
    if cache is None:
        return 2

    removed = cache.clear(args.bundle_id)
    console.print(f"Removed {removed} cached version(s)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
