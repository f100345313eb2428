#!/usr/bin/env python3
"""
Secret voting token generation.

Contains: generate_token, allocate_tokens_for_organization,
determine_header_columns, parse_organizations, token_count_report.

Tokens are drawn from an alphabet without visually ambiguous characters
and are rejected if they collide with a token already issued in the run or
contain a blocklisted letter sequence.
"""

import re
import secrets
from random import Random
from typing import Iterable, Optional

from logging_config import get_logger, log_function_call

logger = get_logger(__name__)

# No l, I, O, Q, 0 or 1
TOKEN_ALPHABET = "qwertyuiopasdfghjkzxcvbnmWERTYUPASDFGHJKLZXCVBNM23456789"

TOKEN_LENGTH = 7

# Apologies for the obscenities, but these must never show up in a token
BLOCKLIST_PATTERN = re.compile(
    r"""
    (fuc?k)|(fag)|(cunt)|(n[i1]g)|(a[s5][s5])|
    ([s5]h[i1]t)|(b[i1]a?t?ch)|(c[l1][i1]t)|
    (j[i1]zz)|([s5]ex)|([s5]meg)|(d[i1]c?k?)|
    (pen[i1][s5])|(pube)|(p[i1][s5][s5])|
    (g[o0]d)|(crap)|(b[o0]ne)|(basta)|(ar[s5])|
    (ana[l1])|(anu[s5])|(ba[l1][l1])|
    (b[l1][o0]w)|(b[o0][o0]b)|([l1]mf?a[o0])
    """,
    re.IGNORECASE | re.VERBOSE,
)

ORGANIZATION_HEADER_PATTERN = re.compile(r"(schools?)|(organizations?)|(chapters?)|(names?)", re.IGNORECASE)
COUNT_HEADER_PATTERN = re.compile(r"(delegates?)|(voter?s?)", re.IGNORECASE)

_system_random = secrets.SystemRandom()


class RosterFormatError(ValueError):
    """The organization roster is missing a required column."""


def is_blocklisted(candidate: str) -> bool:
    return BLOCKLIST_PATTERN.search(candidate) is not None


def random_string(length: int, rng: Optional[Random] = None, alphabet: str = TOKEN_ALPHABET) -> str:
    """Concatenate `length` uniformly sampled characters from `alphabet`."""
    rng = rng or _system_random
    return "".join(rng.choice(alphabet) for _ in range(length))


def generate_token(
    existing_tokens: Iterable[str],
    length: int = TOKEN_LENGTH,
    rng: Optional[Random] = None,
    alphabet: str = TOKEN_ALPHABET,
) -> str:
    """
    Generate one token unique within the run and free of blocklisted words.

    Retries without bound; the alphabet is far larger than any realistic
    token count. The caller must add the result to `existing_tokens` before
    asking for another.

    Args:
        existing_tokens: Every token already issued in this run (any organization)
        length: Token length, must be positive
        rng: Random source, defaults to the system CSPRNG
        alphabet: Characters to sample from

    Returns:
        The new token
    """
    if length < 1:
        raise ValueError(f"Token length must be positive, got {length}")

    attempts = 0
    while True:
        attempts += 1
        candidate = random_string(length, rng, alphabet)
        if candidate in existing_tokens:
            logger.debug("Rejected duplicate token candidate (attempt %d)", attempts)
            continue
        if is_blocklisted(candidate):
            logger.debug("Rejected blocklisted token candidate (attempt %d)", attempts)
            continue
        return candidate


def allocate_tokens_for_organization(
    org_name: str,
    count: int,
    existing_tokens: set[str],
    length: int = TOKEN_LENGTH,
    rng: Optional[Random] = None,
) -> list[str]:
    """
    Issue `count` new tokens for one organization.

    Each token is added to `existing_tokens` as soon as it is generated so
    that later tokens in the same batch cannot repeat it.
    """
    if count < 0:
        raise ValueError(f"Token count must not be negative, got {count}")

    tokens = []
    for _ in range(count):
        token = generate_token(existing_tokens, length, rng)
        existing_tokens.add(token)
        tokens.append(token)
    logger.debug("Allocated %d token(s) for %s", count, org_name)
    return tokens


def determine_header_columns(header: list[str]) -> tuple[Optional[int], Optional[int]]:
    """
    Find the organization and count columns of a roster header.

    Returns:
        (org_index, count_index); either is None when no header matches
    """
    org_index = None
    count_index = None
    for index, cell in enumerate(header):
        text = cell or ""
        if org_index is None and ORGANIZATION_HEADER_PATTERN.search(text):
            org_index = index
        elif count_index is None and COUNT_HEADER_PATTERN.search(text):
            count_index = index
    return org_index, count_index


def _parse_count(value: Optional[str], org_name: str) -> int:
    text = (value or "").strip()
    if not text:
        return 0
    try:
        return int(text)
    except ValueError:
        logger.warning(f"Ignoring non-numeric count {text!r} for {org_name}")
        return 0


def _is_blank(row: list) -> bool:
    return all(not (cell or "").strip() for cell in row)


@log_function_call
def parse_organizations(
    rows: list[list[str]],
    existing_tokens: Optional[set[str]] = None,
    length: int = TOKEN_LENGTH,
    rng: Optional[Random] = None,
) -> dict[str, list[str]]:
    """
    Issue tokens for every organization in a roster.

    Args:
        rows: Roster rows; the first non-blank row is the header
        existing_tokens: Tokens already issued this run, updated in place
        length: Token length
        rng: Random source

    Returns:
        Organization name -> issued tokens, in roster order

    Raises:
        RosterFormatError: If the organization or count column is missing
    """
    if existing_tokens is None:
        existing_tokens = set()

    rows = [row for row in rows if not _is_blank(row)]
    if not rows:
        raise RosterFormatError("Roster is empty; expected a header row")

    org_index, count_index = determine_header_columns(rows[0])
    if org_index is None or count_index is None:
        raise RosterFormatError(
            'Headers should contain "School", "Organization", "Chapter" or "Name" '
            'and "Delegates" or "Voters"'
        )

    all_tokens: dict[str, list[str]] = {}
    for row in rows[1:]:
        org_name = row[org_index] if org_index < len(row) else ""
        count_cell = row[count_index] if count_index < len(row) else ""
        count = _parse_count(count_cell, org_name)
        if count <= 0:
            continue
        tokens = allocate_tokens_for_organization(org_name, count, existing_tokens, length, rng)
        all_tokens.setdefault(org_name, []).extend(tokens)

    logger.info(token_count_report(all_tokens))
    return all_tokens


def token_count_report(all_tokens: dict[str, Optional[list[str]]]) -> str:
    """Summarize how many organizations and tokens were generated."""
    token_sets = sum(1 for tokens in all_tokens.values() if tokens)
    total = sum(len(tokens) for tokens in all_tokens.values() if tokens)
    return f"{token_sets} token sets generated ({total} total tokens)"
