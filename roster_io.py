#!/usr/bin/env python3
"""
CSV input/output for ballots, token rosters and reports.

Contains: read_csv_rows, strip_blank_rows, strip_timestamp_columns,
split_ballot_rows, load_ballots, token_mapping_from_rows,
read_token_mapping, read_organization_roster, write_tokens_to_csv,
append_election_report.
"""

import csv
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

from logging_config import get_logger
from vote_reporting import election_report_banner

logger = get_logger(__name__)

PathLike = Union[str, Path]

TOKEN_ROSTER_HEADER = ["Organization", "Token"]
TIMESTAMP_COLUMN = "timestamp"


def read_csv_rows(path: PathLike) -> list[list[str]]:
    """
    Read every row of a CSV file.

    Raises:
        FileNotFoundError: If the file does not exist
    """
    path = Path(path)
    with path.open("r", encoding="utf-8-sig", newline="") as fp:
        return [list(row) for row in csv.reader(fp)]


def strip_blank_rows(rows: list[list[str]]) -> list[list[str]]:
    return [row for row in rows if any((cell or "").strip() for cell in row)]


def strip_timestamp_columns(rows: list[list[str]]) -> list[list[str]]:
    """Remove every column whose header is "Timestamp" from all rows."""
    if not rows:
        return rows
    drop = {i for i, cell in enumerate(rows[0]) if (cell or "").strip().lower() == TIMESTAMP_COLUMN}
    if not drop:
        return rows
    logger.debug(f"Stripping timestamp column(s) at {sorted(drop)}")
    return [[cell for i, cell in enumerate(row) if i not in drop] for row in rows]


def split_ballot_rows(rows: list[list[str]]) -> tuple[list[str], list[list[str]]]:
    """
    Clean raw ballot rows and separate the header.

    Returns:
        (column_titles, ballots); column 0 is the token column
    """
    rows = strip_timestamp_columns(strip_blank_rows(rows))
    if not rows:
        return [], []
    return rows[0], rows[1:]


def load_ballots(path: PathLike) -> tuple[list[str], list[list[str]]]:
    column_titles, ballots = split_ballot_rows(read_csv_rows(path))
    logger.info(f"Loaded {len(ballots)} ballot(s) from {path}")
    return column_titles, ballots


def token_mapping_from_rows(rows: list[list[str]]) -> dict[str, str]:
    """
    Build token -> organization from roster rows (header first).

    A token listed more than once keeps its last organization.
    """
    mapping: dict[str, str] = {}
    for row in strip_blank_rows(rows)[1:]:
        if len(row) < 2:
            continue
        organization, token = row[0], row[1]
        if token in mapping:
            logger.warning(f"Token {token} is listed more than once; using {organization}")
        mapping[token] = organization
    return mapping


def read_token_mapping(path: PathLike) -> dict[str, str]:
    mapping = token_mapping_from_rows(read_csv_rows(path))
    logger.info(f"Loaded {len(mapping)} token(s) from {path}")
    return mapping


def read_organization_roster(path: PathLike) -> list[list[str]]:
    return strip_blank_rows(read_csv_rows(path))


def write_tokens_to_csv(all_tokens: dict[str, list[str]], path: PathLike) -> int:
    """
    Write the token roster, one row per token.

    Returns:
        Number of token rows written
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    written = 0
    with path.open("w", encoding="utf-8", newline="") as fp:
        writer = csv.writer(fp)
        writer.writerow(TOKEN_ROSTER_HEADER)
        for organization, tokens in all_tokens.items():
            for token in tokens or []:
                writer.writerow([organization, token])
                written += 1
    logger.info(f"Wrote {written} token(s) to {path}")
    return written


def append_election_report(path: PathLike, report: str, timestamp: Optional[datetime] = None) -> None:
    """Append a report under a timestamp banner; earlier reports are kept."""
    path = Path(path)
    with path.open("a", encoding="utf-8") as fp:
        fp.write(election_report_banner(timestamp) + "\n" + report + "\n\n\n")
    logger.info(f"Appended election report to {path}")
