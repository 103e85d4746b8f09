import argparse
import sys
from pathlib import Path

"""
Itau Fetch - Main Entry Point

This script serves as the command-line interface (CLI) for the Itau Fetch application.
It downloads the statements of the configured deposit accounts and credit cards
and saves them as CSV files.

Usage:
    python main.py --year 2024 --month 1       # Export January 2024
    python main.py                             # Export the last days / current card month
    python main.py --ynab                      # Export the YNAB Outflow/Inflow dialect
    python main.py --cookie "JSESSIONID=..."   # Use an existing browser session

Dependencies:
- playwright: For the HTTP request context.
- itau_fetch.*: Internal modules for parsing and exporting.
"""
from itau_fetch.config import Config, settings
from itau_fetch.downloader import ItauDownloader
from itau_fetch.errors import ItauFetchError
from itau_fetch.logging_setup import configure_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Itau Fetch - Statement to CSV exporter")
    parser.add_argument("--year", type=int, help="Statement year (default: recent movements)")
    parser.add_argument("--month", type=int, help="Statement month, 1-12")
    parser.add_argument(
        "--ynab",
        action="store_true",
        help="Export YNAB CSV (Date,Payee,Category,Memo,Outflow,Inflow)"
    )
    parser.add_argument("--config", type=Path, help="Path to a YAML configuration file")
    parser.add_argument("--cookie", help="Session cookie of a logged in browser (overrides config)")
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable verbose logging"
    )
    parser.add_argument("--accounts-only", action="store_true", help="Skip credit cards")
    parser.add_argument("--cards-only", action="store_true", help="Skip deposit accounts")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    config: Config = Config.load(args.config) if args.config else settings

    # Update config from args
    if args.cookie:
        config.cookie = args.cookie
    if args.debug:
        config.debug = True
    if args.ynab:
        config.ynab = True

    configure_logging("DEBUG" if config.debug else None)

    if (args.year is None) != (args.month is None):
        print("Both --year and --month are required to select a statement month.")
        return 1

    if not config.cookie:
        print("No session cookie configured. Log in with a browser and pass --cookie.")
        return 1

    print("Starting Itau Fetch...")
    print(f"Output directory: {config.transactions_path.resolve()}")

    from playwright.sync_api import sync_playwright

    with sync_playwright() as p:
        request_context = p.request.new_context(
            extra_http_headers=config.request_headers(),
            timeout=config.timeout,
        )
        try:
            downloader = ItauDownloader(config, request_context)
            paths = downloader.run(
                args.year,
                args.month,
                accounts=not args.cards_only,
                cards=not args.accounts_only,
            )
        except ItauFetchError as e:
            print(f"Error: {e}")
            return 1
        finally:
            request_context.dispose()

    for path in paths:
        print(f"{path.name} exported")
    print("\nAll tasks completed.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
