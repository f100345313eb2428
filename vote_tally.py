#!/usr/bin/env python3
"""
Ballot tallying with duplicate and invalid token resolution.

Contains: tally, validate_ballot, count_ballot, add_position.

A ballot is a row of cells: cell 0 is the voter's token, cells 1..N are the
selections for each position (empty means abstention). Each tally run owns
its own used-token set and counts; nothing is shared between runs.
"""

from typing import Optional

from logging_config import get_logger
from tally_types import ResolutionPolicy, TallyWarning, VoteReport

logger = get_logger(__name__)


def add_position(vote_counts: dict[int, dict[str, int]], position: int) -> dict[str, int]:
    """Return the candidate counts for `position`, creating them on first use."""
    if position not in vote_counts:
        vote_counts[position] = {}
    return vote_counts[position]


def count_ballot(vote_counts: dict[int, dict[str, int]], ballot: list[str]) -> None:
    """
    Add one accepted ballot's selections to the running counts.

    Candidate names are taken literally (case and whitespace as submitted).
    """
    for position in range(1, len(ballot)):
        selection = ballot[position]
        if not selection:
            continue
        position_counts = add_position(vote_counts, position)
        position_counts[selection] = position_counts.get(selection, 0) + 1


def validate_ballot(
    vote_counts: dict[int, dict[str, int]],
    used_tokens: dict[str, bool],
    ballot: list[str],
    token_map: dict[str, str],
    resolution_policy: ResolutionPolicy = ResolutionPolicy.LAST_WINS,
) -> Optional[TallyWarning]:
    """
    Check a ballot's token and count it if it is the first use.

    Args:
        vote_counts: Position -> candidate -> votes, updated in place
        used_tokens: Tokens already counted, updated in place
        ballot: Token followed by one selection per position
        token_map: Valid token -> organization name
        resolution_policy: Only used for the wording of duplicate warnings

    Returns:
        A TallyWarning if the ballot was rejected, otherwise None
    """
    token = ballot[0] if ballot else ""
    token = token or ""

    if token not in token_map:
        logger.debug(f"Rejected ballot with unknown token {token!r}")
        return TallyWarning.invalid_token(token)

    if used_tokens.get(token):
        logger.debug(f"Skipped repeat ballot for token {token!r}")
        return TallyWarning.duplicate_token(token, token_map[token], resolution_policy)

    used_tokens[token] = True
    count_ballot(vote_counts, ballot)
    return None


def tally(
    ballots: list[list[str]],
    token_map: dict[str, str],
    resolution_policy: ResolutionPolicy = ResolutionPolicy.LAST_WINS,
) -> VoteReport:
    """
    Tally a closed batch of ballots.

    Ballots are walked in the order chosen by `resolution_policy` and any
    ballot whose token was already counted is skipped, so LAST_WINS keeps
    the latest submission per token and FIRST_WINS keeps the earliest.
    Warnings are returned in the order they were produced during that walk.

    Args:
        ballots: Ballot rows without the header
        token_map: Valid token -> organization name
        resolution_policy: Which submission counts when a token repeats

    Returns:
        VoteReport with the valid voter count, per-position counts and warnings
    """
    vote_counts: dict[int, dict[str, int]] = {}
    used_tokens: dict[str, bool] = {}
    warnings: list[TallyWarning] = []

    for ballot in resolution_policy.processing_order(ballots):
        warning = validate_ballot(vote_counts, used_tokens, ballot, token_map, resolution_policy)
        if warning is not None:
            warnings.append(warning)

    report = VoteReport(
        total_valid_voters=len(used_tokens),
        per_position_counts=vote_counts,
        warnings=warnings,
        resolution_policy=resolution_policy,
    )
    logger.info(
        f"Tallied {len(ballots)} ballot(s): {report.total_valid_voters} valid voter(s), "
        f"{len(warnings)} warning(s)"
    )
    return report
