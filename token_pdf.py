#!/usr/bin/env python3
"""
PDF token sheets, one per organization.

Contains: pdf_file_name, generate_organization_pdf, generate_token_pdfs.
"""

import re
from pathlib import Path
from typing import Optional, Union

from logging_config import get_logger

try:
    from reportlab.lib import colors
    from reportlab.lib.enums import TA_CENTER
    from reportlab.lib.pagesizes import letter
    from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
    from reportlab.lib.units import inch
    from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle
    HAS_REPORTLAB = True
except ImportError:
    HAS_REPORTLAB = False

logger = get_logger(__name__)

FILE_NAME_STRIP = re.compile(r"[\s().#!]")


def pdf_file_name(organization: str) -> str:
    """Organization name with whitespace, parentheses, '.', '#' and '!' removed."""
    return FILE_NAME_STRIP.sub("", organization) + ".pdf"


def generate_organization_pdf(organization: str, tokens: list[str], output_dir: Union[str, Path]) -> Optional[Path]:
    """
    Generate the token sheet handed to one organization's delegates.

    Args:
        organization: Organization name, shown as the title
        tokens: Tokens issued to the organization
        output_dir: Directory for the PDF (created if missing)

    Returns:
        Path of the written PDF, or None if reportlab is unavailable
    """
    if not HAS_REPORTLAB:
        logger.error("reportlab not installed. Install with: pip install reportlab")
        return None

    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    output_path = output_dir / pdf_file_name(organization)

    doc = SimpleDocTemplate(str(output_path), pagesize=letter)
    styles = getSampleStyleSheet()
    story = []

    title_style = ParagraphStyle(
        'TokenSheetTitle',
        parent=styles['Heading1'],
        fontSize=18,
        textColor=colors.HexColor('#1f4788'),
        spaceAfter=12,
        alignment=TA_CENTER,
    )
    story.append(Paragraph(organization, title_style))
    story.append(Paragraph(
        "Each token below may be used for one ballot. Keep them secret.",
        styles['Normal'],
    ))
    story.append(Spacer(1, 0.3*inch))

    token_data = [['#', 'Token']]
    for index, token in enumerate(tokens, start=1):
        token_data.append([str(index), token])

    token_table = Table(token_data, colWidths=[0.8*inch, 2.5*inch])
    token_table.setStyle(TableStyle([
        ('BACKGROUND', (0, 0), (-1, 0), colors.HexColor('#1f4788')),
        ('TEXTCOLOR', (0, 0), (-1, 0), colors.whitesmoke),
        ('ALIGN', (0, 0), (-1, -1), 'CENTER'),
        ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
        ('FONTNAME', (1, 1), (1, -1), 'Courier'),
        ('FONTSIZE', (0, 0), (-1, -1), 12),
        ('BOTTOMPADDING', (0, 0), (-1, 0), 10),
        ('GRID', (0, 0), (-1, -1), 1, colors.grey),
        ('ROWBACKGROUNDS', (0, 1), (-1, -1), [colors.white, colors.HexColor('#F5F5F5')]),
    ]))
    story.append(token_table)

    doc.build(story)
    logger.info(f"PDF generated for {organization}")
    return output_path


def generate_token_pdfs(all_tokens: dict[str, list[str]], output_dir: Union[str, Path]) -> str:
    """
    Generate a token sheet for every organization that received tokens.

    Returns:
        Summary line, e.g. "3 PDFs generated"
    """
    generated = 0
    for organization, tokens in all_tokens.items():
        if not tokens:
            continue
        if generate_organization_pdf(organization, tokens, output_dir) is not None:
            generated += 1
    return f"{generated} PDFs generated"
