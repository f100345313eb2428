#!/usr/bin/env python3
"""
Plain-text bordered tables with dynamic column widths.

Contains: render_table, column_widths, border_line, format_row.

Example:
    +--------+---------+
    | Name   | Votes   |
    +========+=========+
    | *Alice | 4 votes |
    +========+=========+
    |  Total | 6 votes |
    +--------+---------+
"""

from typing import Optional, Sequence

Row = Sequence[Optional[str]]


def _cells(row: Row) -> list[str]:
    return ["" if cell is None else str(cell) for cell in row]


def _is_blank(row: list[str]) -> bool:
    return all(not cell.strip() for cell in row)


def column_widths(rows: list[list[str]], column_count: int) -> list[int]:
    """Widest cell per column; missing cells count as zero width."""
    widths = [0] * column_count
    for row in rows:
        for index, cell in enumerate(row):
            widths[index] = max(widths[index], len(cell))
    return widths


def border_line(widths: list[int], fill: str = "-") -> str:
    return "+" + fill + (fill + "+" + fill).join(fill * width for width in widths) + fill + "+"


def format_row(row: list[str], widths: list[int], left_align: bool) -> str:
    padded = []
    for index, width in enumerate(widths):
        cell = row[index] if index < len(row) else ""
        padded.append(cell.ljust(width) if left_align else cell.rjust(width))
    return "| " + " | ".join(padded) + " |"


def render_table(
    body: Sequence[Row],
    header: Row = (),
    footer: Row = (),
    left_align_header: bool = True,
    left_align_body: bool = False,
    left_align_footer: bool = False,
) -> str:
    """
    Render rows as a bordered text table.

    Blank rows (every cell empty) are dropped, including a blank header or
    footer. Header and footer are fenced off with "=" borders; the outer
    borders use "-". Output has no trailing newline and depends only on the
    arguments.

    Args:
        body: Table rows
        header: Optional header row
        footer: Optional footer row
        left_align_header: Pad header cells on the right instead of the left
        left_align_body: Pad body cells on the right instead of the left
        left_align_footer: Pad footer cells on the right instead of the left

    Returns:
        The rendered table, or "" if nothing is left to draw
    """
    body_rows = [row for row in (_cells(r) for r in body) if not _is_blank(row)]
    header_row = _cells(header)
    footer_row = _cells(footer)

    sections = []
    if not _is_blank(header_row):
        sections.append(([header_row], left_align_header))
    if body_rows:
        sections.append((body_rows, left_align_body))
    if not _is_blank(footer_row):
        sections.append(([footer_row], left_align_footer))
    if not sections:
        return ""

    all_rows = [row for rows, _ in sections for row in rows]
    column_count = max(len(row) for row in all_rows)
    if column_count == 0:
        return ""
    widths = column_widths(all_rows, column_count)

    lines = [border_line(widths)]
    for index, (rows, left_align) in enumerate(sections):
        if index > 0:
            lines.append(border_line(widths, "="))
        lines.extend(format_row(row, widths, left_align) for row in rows)
    lines.append(border_line(widths))
    return "\n".join(lines)
