#!/usr/bin/env python3
"""
Command-line interface for the vote tally tools.

Usage:
    python cli.py --help
    python cli.py tally <votes.csv> <tokens.csv> [options]
    python cli.py tokens <roster.csv> <tokens.csv> [options]
    python cli.py --version
"""

import argparse
import sys
from typing import Optional

from config import get_config
from logging_config import LogContext, get_logger, setup_logging
from roster_io import (
    append_election_report,
    load_ballots,
    read_organization_roster,
    read_token_mapping,
    write_tokens_to_csv,
)
from tally_types import OutputFormat, ResolutionPolicy
from token_generator import RosterFormatError, parse_organizations, token_count_report
from token_pdf import generate_token_pdfs
from version import __version__
from vote_reporting import render_report
from vote_tally import tally

logger = get_logger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser."""
    parser = argparse.ArgumentParser(
        prog="vote-tally",
        description="""
Delegate vote tally - issue secret voting tokens and count token ballots.

Examples:
  %(prog)s tokens delegates.csv tokens.csv           # Issue tokens and PDFs
  %(prog)s tally votes.csv tokens.csv                # Print election report
  %(prog)s tally votes.csv tokens.csv -o report.txt  # Also append to a file
  %(prog)s tally votes.csv tokens.csv --json         # Raw counts as JSON
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--version", "-V",
        action="version",
        version=f"%(prog)s {__version__}"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Tally command
    tally_parser = subparsers.add_parser(
        "tally",
        help="Count ballots",
        description="Validate ballot tokens and print per-position results."
    )
    tally_parser.add_argument(
        "votes",
        help="Ballot CSV; column one must be the token (password)"
    )
    tally_parser.add_argument(
        "tokens",
        help="Token roster CSV with Organization and Token columns"
    )
    tally_parser.add_argument(
        "--output", "-o",
        help="Append the report to this text file"
    )
    tally_parser.add_argument(
        "--first-wins",
        action="store_true",
        help="Count the first ballot per token instead of the latest"
    )
    tally_parser.add_argument(
        "--json",
        action="store_true",
        help="Print raw counts as JSON instead of tables"
    )
    tally_parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging"
    )

    # Tokens command
    tokens_parser = subparsers.add_parser(
        "tokens",
        help="Issue voting tokens",
        description=(
            "Issue tokens for each organization. One header must contain "
            '"School", "Organization", "Chapter" or "Name"; another must '
            'contain "Delegates" or "Voters".'
        )
    )
    tokens_parser.add_argument(
        "roster",
        help="Organization roster CSV"
    )
    tokens_parser.add_argument(
        "output",
        help="Token roster CSV to write"
    )
    tokens_parser.add_argument(
        "--length",
        type=int,
        default=None,
        help="Token length (default: VOTE_TALLY_TOKEN_LENGTH or 7)"
    )
    tokens_parser.add_argument(
        "--no-pdf",
        action="store_true",
        help="Skip generating token sheet PDFs"
    )
    tokens_parser.add_argument(
        "--pdf-dir",
        default=None,
        help="Directory for token sheet PDFs (default: VOTE_TALLY_PDF_DIR or pdfs)"
    )
    tokens_parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging"
    )

    return parser


def run_tally(args: argparse.Namespace) -> int:
    config = get_config()
    resolution_policy = ResolutionPolicy.FIRST_WINS if args.first_wins else config.resolution_policy
    output_format = OutputFormat.JSON if args.json else config.report_format

    try:
        column_titles, ballots = load_ballots(args.votes)
        token_map = read_token_mapping(args.tokens)
    except FileNotFoundError as e:
        print(f"Sorry, {e.filename} does not exist", file=sys.stderr)
        return 1

    with LogContext(logger, "Tallying ballots"):
        report = tally(ballots, token_map, resolution_policy)

    for warning in report.warnings:
        logger.warning(warning.message)

    election_report = render_report(
        report.total_valid_voters,
        column_titles,
        report.per_position_counts,
        report.warning_messages,
        output_format,
    )
    if args.output:
        append_election_report(args.output, election_report)

    print(election_report)
    return 0


def run_tokens(args: argparse.Namespace) -> int:
    config = get_config()
    length = args.length if args.length is not None else config.token_length
    if length < 1:
        print(f"Token length must be at least 1, got {length}", file=sys.stderr)
        return 1

    try:
        rows = read_organization_roster(args.roster)
    except FileNotFoundError as e:
        print(f"Sorry, {e.filename} does not exist", file=sys.stderr)
        return 1

    try:
        with LogContext(logger, "Generating tokens"):
            all_tokens = parse_organizations(rows, set(), length)
    except RosterFormatError as e:
        print(f"Invalid CSV: {e}", file=sys.stderr)
        return 1

    write_tokens_to_csv(all_tokens, args.output)
    for organization in all_tokens:
        print(f"Tokens generated for {organization}")
    print(token_count_report(all_tokens))

    if config.generate_pdfs and not args.no_pdf:
        pdf_dir = args.pdf_dir or config.pdf_dir
        print(generate_token_pdfs(all_tokens, pdf_dir))

    return 0


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    config = get_config()
    setup_logging(level="DEBUG" if args.verbose else config.log_level)

    issues = config.validate()
    if issues:
        for issue in issues:
            print(f"Configuration error: {issue}", file=sys.stderr)
        return 1

    if args.command == "tally":
        return run_tally(args)
    if args.command == "tokens":
        return run_tokens(args)
    return 1


if __name__ == "__main__":
    sys.exit(main())
