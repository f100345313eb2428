#!/usr/bin/env python3
"""
Election report generation (text tables and JSON).

Contains: sum_position_votes, sort_candidates, majority_reached,
analyze_position, analyze_positions, TabularReportRenderer,
StructuredReportRenderer, get_renderer, render_report,
election_report_banner.
"""

import json
from datetime import datetime
from typing import Optional, Protocol, Sequence

from logging_config import get_logger
from table_layout import render_table
from tally_types import CandidateResult, OutputFormat, PositionResult

logger = get_logger(__name__)

ABSTAINED_LABEL = "[Abstained]"
TOTAL_LABEL = "Total"
MAJORITY_MARK = "*"
BANNER_RULE = "-" * 20


def vote_label(votes: int) -> str:
    return f"{votes} vote" if votes == 1 else f"{votes} votes"


def sum_position_votes(counts: dict[str, int]) -> int:
    return sum(counts.values())


def sort_candidates(counts: dict[str, int]) -> list[tuple[str, int]]:
    """Candidates by descending votes, ties broken by name."""
    return sorted(counts.items(), key=lambda item: (-item[1], item[0]))


def vote_percent(votes: int, total_valid_voters: int) -> Optional[float]:
    if total_valid_voters <= 0:
        return None
    return 100.0 * votes / total_valid_voters


def majority_reached(total_valid_voters: int, counts: dict[str, int]) -> bool:
    """True if some candidate has strictly more than half of all valid voters."""
    for votes in counts.values():
        percent = vote_percent(votes, total_valid_voters)
        if percent is not None and percent > 50.0:
            return True
    return False


def analyze_position(total_valid_voters: int, title: str, counts: dict[str, int]) -> PositionResult:
    """
    Compute totals, abstentions, percentages and majority for one position.

    Args:
        total_valid_voters: Number of accepted ballots in the whole tally
        title: Position title
        counts: Candidate -> votes

    Returns:
        PositionResult with candidates in report order
    """
    position_total = sum_position_votes(counts)
    candidates = []
    for name, votes in sort_candidates(counts):
        percent = vote_percent(votes, total_valid_voters)
        candidates.append(CandidateResult(
            name=name,
            votes=votes,
            percent=percent,
            is_majority=percent is not None and percent > 50.0,
        ))

    return PositionResult(
        title=title,
        total_valid_voters=total_valid_voters,
        candidates=candidates,
        position_total=position_total,
        abstentions=max(total_valid_voters - position_total, 0),
    )


def position_title(column_titles: Sequence[str], position: int) -> str:
    if 0 <= position < len(column_titles) and column_titles[position]:
        return column_titles[position]
    return f"Position {position}"


def analyze_positions(
    total_valid_voters: int,
    column_titles: Sequence[str],
    per_position_counts: dict[int, dict[str, int]],
) -> list[PositionResult]:
    """Analyze every position in ascending column order."""
    return [
        analyze_position(total_valid_voters, position_title(column_titles, position), per_position_counts[position])
        for position in sorted(per_position_counts)
    ]


class ReportRenderer(Protocol):
    """Anything that can turn tally results into a report string."""

    def render_report(
        self,
        total_valid_voters: int,
        column_titles: Sequence[str],
        per_position_counts: dict[int, dict[str, int]],
        warnings: Sequence[str] = (),
    ) -> str:
        ...


class TabularReportRenderer:
    """Renders each position as a title line followed by a bordered table."""

    output_format = OutputFormat.TEXT

    def position_rows(self, result: PositionResult) -> tuple[list[list[str]], list[str]]:
        """Body rows and footer row for one position's table."""
        body = []
        for candidate in result.candidates:
            name = MAJORITY_MARK + candidate.name if candidate.is_majority else candidate.name
            percent = f"{candidate.percent:.2f}%" if candidate.percent is not None else ""
            body.append([name, vote_label(candidate.votes), percent])

        if result.abstentions > 0:
            body.append([ABSTAINED_LABEL, vote_label(result.abstentions), ""])

        footer = [TOTAL_LABEL, vote_label(result.total_valid_voters)]
        return body, footer

    def render_position(self, result: PositionResult) -> str:
        body, footer = self.position_rows(result)
        return result.heading + "\n" + render_table(body, footer=footer)

    def render_report(
        self,
        total_valid_voters: int,
        column_titles: Sequence[str],
        per_position_counts: dict[int, dict[str, int]],
        warnings: Sequence[str] = (),
    ) -> str:
        sections = []
        if warnings:
            sections.append("\n".join(str(w) for w in warnings))
        for result in analyze_positions(total_valid_voters, column_titles, per_position_counts):
            sections.append(self.render_position(result))
        return "\n\n".join(sections)


class StructuredReportRenderer:
    """Renders the raw counts as JSON; consumers derive percentages themselves."""

    output_format = OutputFormat.JSON

    def build_report_object(
        self,
        total_valid_voters: int,
        column_titles: Sequence[str],
        per_position_counts: dict[int, dict[str, int]],
        warnings: Sequence[str] = (),
    ) -> dict:
        positions = {}
        for position in sorted(per_position_counts):
            title = position_title(column_titles, position)
            if title in positions:
                logger.warning(f"Duplicate position title {title!r}; later column replaces earlier")
            positions[title] = dict(sort_candidates(per_position_counts[position]))

        report = {"count": total_valid_voters, "positions": positions}
        if warnings:
            report["warnings"] = [str(w) for w in warnings]
        return report

    def render_report(
        self,
        total_valid_voters: int,
        column_titles: Sequence[str],
        per_position_counts: dict[int, dict[str, int]],
        warnings: Sequence[str] = (),
    ) -> str:
        report = self.build_report_object(total_valid_voters, column_titles, per_position_counts, warnings)
        return json.dumps(report, indent=2, ensure_ascii=False)


RENDERERS: dict[OutputFormat, ReportRenderer] = {
    OutputFormat.TEXT: TabularReportRenderer(),
    OutputFormat.JSON: StructuredReportRenderer(),
}


def get_renderer(output_format: OutputFormat) -> ReportRenderer:
    return RENDERERS[output_format]


def render_report(
    total_valid_voters: int,
    column_titles: Sequence[str],
    per_position_counts: dict[int, dict[str, int]],
    warnings: Sequence[str] = (),
    output_format: OutputFormat = OutputFormat.TEXT,
) -> str:
    """
    Render tally results in the requested format.

    Args:
        total_valid_voters: Number of accepted ballots
        column_titles: Ballot header; index 0 is the token column
        per_position_counts: Position index -> candidate -> votes
        warnings: Tally warnings in processing order
        output_format: TEXT for bordered tables, JSON for the raw structure

    Returns:
        Report string
    """
    renderer = get_renderer(output_format)
    return renderer.render_report(total_valid_voters, column_titles, per_position_counts, warnings)


def election_report_banner(timestamp: Optional[datetime] = None) -> str:
    """Rule, timestamp, rule; written above each appended report."""
    timestamp = timestamp or datetime.now()
    return f"{BANNER_RULE}\n{timestamp.strftime('%Y-%m-%d %H:%M:%S')}\n{BANNER_RULE}"
