#!/usr/bin/env python3
"""
Data types for ballot tallying and reporting.

Contains: ResolutionPolicy, OutputFormat and WarningCause enums,
TallyWarning, VoteReport, CandidateResult and PositionResult dataclasses.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class ResolutionPolicy(Enum):
    """Which submission counts when a token is used more than once."""
    FIRST_WINS = "first"
    LAST_WINS = "last"

    @property
    def word(self) -> str:
        """Word used in duplicate-token warnings."""
        return "first" if self is ResolutionPolicy.FIRST_WINS else "latest"

    def processing_order(self, ballots: list) -> list:
        """
        Order ballots for a single "skip if already used" pass.

        Under LAST_WINS the ballots are walked in reverse so the latest
        submission is the first one seen for its token.
        """
        if self is ResolutionPolicy.LAST_WINS:
            return list(reversed(ballots))
        return list(ballots)

    @classmethod
    def from_name(cls, name: str) -> "ResolutionPolicy":
        """Parse "first"/"last" (also accepts "latest", case-insensitive)."""
        normalized = name.strip().lower()
        if normalized == "latest":
            normalized = "last"
        for policy in cls:
            if policy.value == normalized:
                return policy
        raise ValueError(f"Unknown resolution policy: {name!r}")


class OutputFormat(Enum):
    """Report output formats."""
    TEXT = "text"
    JSON = "json"

    @classmethod
    def from_name(cls, name: str) -> "OutputFormat":
        normalized = name.strip().lower()
        for fmt in cls:
            if fmt.value == normalized:
                return fmt
        raise ValueError(f"Unknown output format: {name!r}")


class WarningCause(Enum):
    INVALID_TOKEN = "invalid_token"
    DUPLICATE_TOKEN = "duplicate_token"


@dataclass(frozen=True)
class TallyWarning:
    """A per-ballot problem found while tallying."""
    cause: WarningCause
    token: str
    message: str

    def __str__(self) -> str:
        return self.message

    @classmethod
    def invalid_token(cls, token: str) -> "TallyWarning":
        return cls(
            cause=WarningCause.INVALID_TOKEN,
            token=token,
            message=f"{token} is an invalid token. Vote not counted.",
        )

    @classmethod
    def duplicate_token(cls, token: str, organization: str, policy: ResolutionPolicy) -> "TallyWarning":
        return cls(
            cause=WarningCause.DUPLICATE_TOKEN,
            token=token,
            message=f"{token} ({organization}) voted multiple times. Using {policy.word}.",
        )


@dataclass
class VoteReport:
    """Result of one tally run."""
    total_valid_voters: int = 0
    per_position_counts: dict[int, dict[str, int]] = field(default_factory=dict)  # position -> candidate -> votes
    warnings: list[TallyWarning] = field(default_factory=list)  # in processing order
    resolution_policy: ResolutionPolicy = ResolutionPolicy.LAST_WINS

    @property
    def warning_messages(self) -> list[str]:
        return [w.message for w in self.warnings]


@dataclass
class CandidateResult:
    """One candidate's line in a position report."""
    name: str
    votes: int
    percent: Optional[float] = None  # None when there are no valid voters
    is_majority: bool = False


@dataclass
class PositionResult:
    """Analyzed results for a single position."""
    title: str
    total_valid_voters: int
    candidates: list[CandidateResult] = field(default_factory=list)  # sorted by (-votes, name)
    position_total: int = 0
    abstentions: int = 0  # only positive values are reported

    @property
    def majority_reached(self) -> bool:
        return any(c.is_majority for c in self.candidates)

    @property
    def heading(self) -> str:
        """Position title, flagged when no candidate has a majority."""
        if self.total_valid_voters > 0 and not self.majority_reached:
            return f"{self.title} (No Majority)"
        return self.title
