"""
PDF Notice Renderer

Lays out the same notice blocks as the HTML renderer using reportlab
platypus flowables. Returns the PDF as bytes so routers can stream it.
"""
import io
import logging
from datetime import date
from html import escape
from typing import Any, List, Optional

from reportlab.lib import colors
from reportlab.lib.pagesizes import LETTER
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import (
    KeepTogether,
    ListFlowable,
    ListItem,
    Paragraph,
    SimpleDocTemplate,
    Spacer,
    Table,
    TableStyle,
)

from ...models.notice import StateNoticeTemplate
from .document import NoticeBlock, build_notice_blocks

logger = logging.getLogger(__name__)


def _build_styles():
    styles = getSampleStyleSheet()
    styles.add(ParagraphStyle(name='NoticeTitle', parent=styles['Title'], fontName='Times-Bold', fontSize=18, leading=22, spaceAfter=4))
    styles.add(ParagraphStyle(name='NoticeSubtitle', parent=styles['Normal'], fontName='Times-Italic', fontSize=10, leading=13, alignment=1, textColor=colors.HexColor('#333333')))
    styles.add(ParagraphStyle(name='SectionTitle', parent=styles['Heading3'], fontName='Times-Bold', fontSize=11, leading=14, spaceBefore=10, spaceAfter=4))
    styles.add(ParagraphStyle(name='NoticeBody', parent=styles['Normal'], fontName='Times-Roman', fontSize=10.5, leading=14))
    styles.add(ParagraphStyle(name='NoticeSmall', parent=styles['Normal'], fontName='Times-Roman', fontSize=8.5, leading=11, alignment=1, textColor=colors.HexColor('#666666')))
    styles.add(ParagraphStyle(name='FieldLabel', parent=styles['Normal'], fontName='Times-Bold', fontSize=10.5, leading=14))
    return styles


STYLES = _build_styles()


def p(text: str, style: str = 'NoticeBody') -> Paragraph:
    return Paragraph(escape(text or "", quote=False), STYLES[style])


def _boxed(flowables, background: str, border: str) -> Table:
    tbl = Table([[flowables]], colWidths=[6.9 * inch])
    tbl.setStyle(TableStyle([
        ('BACKGROUND', (0, 0), (-1, -1), colors.HexColor(background)),
        ('BOX', (0, 0), (-1, -1), 1, colors.HexColor(border)),
        ('LEFTPADDING', (0, 0), (-1, -1), 8),
        ('RIGHTPADDING', (0, 0), (-1, -1), 8),
        ('TOPPADDING', (0, 0), (-1, -1), 6),
        ('BOTTOMPADDING', (0, 0), (-1, -1), 6),
    ]))
    return tbl


def _field_table(fields) -> Table:
    rows = [[p(label, 'FieldLabel'), p(value)] for label, value in fields]
    tbl = Table(rows, colWidths=[2.2 * inch, 4.7 * inch])
    tbl.setStyle(TableStyle([
        ('LINEBELOW', (1, 0), (1, -1), 0.35, colors.HexColor('#CCCCCC')),
        ('VALIGN', (0, 0), (-1, -1), 'TOP'),
        ('TOPPADDING', (0, 0), (-1, -1), 3),
        ('BOTTOMPADDING', (0, 0), (-1, -1), 3),
    ]))
    return tbl


def _signature_lines(labels: List[str]) -> Table:
    rows = []
    for i in range(0, len(labels), 2):
        pair = labels[i:i + 2]
        rows.append([p(label) for label in pair] + [""] * (2 - len(pair)))
    tbl = Table(rows, colWidths=[3.2 * inch, 3.2 * inch], rowHeights=[0.6 * inch] * len(rows))
    tbl.setStyle(TableStyle([
        ('LINEABOVE', (0, 0), (-1, -1), 0.8, colors.black),
        ('VALIGN', (0, 0), (-1, -1), 'TOP'),
        ('RIGHTPADDING', (0, 0), (-1, -1), 18),
    ]))
    return tbl


def _block_flowables(block: NoticeBlock) -> list:
    if block.kind == "header":
        return [p(block.title, 'NoticeTitle'), p(block.text, 'NoticeSubtitle'), Spacer(1, 0.15 * inch)]
    if block.kind in ("warning", "legal"):
        background, border = ('#FFF3CD', '#856404') if block.kind == "warning" else ('#F8F9FA', '#1E40AF')
        return [Spacer(1, 0.08 * inch), _boxed([p(f"{block.title} {block.text}")], background, border)]
    if block.kind == "fields":
        return [p(block.title.upper(), 'SectionTitle'), _field_table(block.fields)]
    if block.kind == "paragraph":
        return [p(block.title.upper(), 'SectionTitle'), p(block.text)]
    if block.kind == "clauses":
        items = [ListItem(p(item)) for item in block.items]
        return [p(block.title.upper(), 'SectionTitle'), ListFlowable(items, bulletType='bullet', start='•')]
    if block.kind == "delivery":
        return [Spacer(1, 0.08 * inch), _boxed([p(block.title, 'FieldLabel'), p(block.text)], '#E8F4FD', '#1E40AF')]
    if block.kind == "signature":
        return [KeepTogether([
            p(block.title.upper(), 'SectionTitle'),
            p(block.text),
            Spacer(1, 0.45 * inch),
            _signature_lines(block.items),
            _field_table(block.fields),
        ])]
    if block.kind == "notary":
        venue = [p(f"{label} {value}") for label, value in block.fields]
        return [Spacer(1, 0.2 * inch), _boxed(
            [p(block.title.upper(), 'FieldLabel')] + venue + [
                Spacer(1, 0.1 * inch),
                p(block.text),
                Spacer(1, 0.1 * inch),
                p("WITNESS my hand and official seal."),
                Spacer(1, 0.4 * inch),
                p("Notary Public Signature                [SEAL]"),
                p("My Commission Expires: ___________________"),
            ],
            '#FFFFFF', '#000000',
        )]
    if block.kind == "footer":
        return [Spacer(1, 0.3 * inch)] + [p(line, 'NoticeSmall') for line in block.items] + [p(block.text, 'NoticeSmall')]
    raise ValueError(f"Unknown notice block: {block.kind}")


def render_notice_pdf(
    project: Any,
    template: StateNoticeTemplate,
    company_profile: Any = None,
    today: Optional[date] = None,
) -> bytes:
    """Letter-size PDF of a project's preliminary notice."""
    buffer = io.BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=LETTER,
        topMargin=0.75 * inch,
        bottomMargin=0.75 * inch,
        leftMargin=0.75 * inch,
        rightMargin=0.75 * inch,
        title=template.title,
        author=getattr(company_profile, "company_name", None) or "Prelimpro",
    )

    story = []
    for block in build_notice_blocks(project, template, company_profile, today=today):
        story.extend(_block_flowables(block))

    doc.build(story)
    logger.info(f"Rendered notice PDF for project {getattr(project, 'id', None)} ({project.state})")
    return buffer.getvalue()
