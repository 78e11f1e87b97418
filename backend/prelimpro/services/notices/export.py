"""
Project Export

CSV and PDF summaries of a user's projects for record keeping.
"""
import csv
import io
import logging
from datetime import datetime
from typing import Any, Dict, Iterable, List

from reportlab.lib import colors
from reportlab.lib.pagesizes import LETTER, landscape
from reportlab.lib.units import inch
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from .formatting import format_currency, format_date
from .pdf_renderer import STYLES, p

logger = logging.getLogger(__name__)


CSV_HEADERS = [
    "Project Name",
    "State",
    "Status",
    "Deadline",
    "Job Start Date",
    "Contract Amount",
    "Property Address",
    "Property Owner Name",
    "Property Owner Address",
    "General Contractor Name",
    "General Contractor Address",
    "Lender Name",
    "Lender Address",
    "Description",
    "Notice Required",
    "Delivery Method",
    "Tracking Number",
    "Created Date",
]

NOT_AVAILABLE = "N/A"


def _enum_value(value: Any) -> str:
    return getattr(value, "value", value) or ""


def format_project_row(project: Any) -> Dict[str, str]:
    """Display values for one project, keyed by CSV header."""
    status = _enum_value(project.status)
    return {
        "Project Name": project.project_name or "",
        "State": project.state or "",
        "Status": status[:1].upper() + status[1:],
        "Deadline": format_date(project.deadline) if project.deadline else NOT_AVAILABLE,
        "Job Start Date": format_date(project.job_start_date),
        "Contract Amount": format_currency(project.contract_amount),
        "Property Address": project.property_address or "",
        "Property Owner Name": project.property_owner_name or "",
        "Property Owner Address": project.property_owner_address or "",
        "General Contractor Name": project.general_contractor_name or NOT_AVAILABLE,
        "General Contractor Address": project.general_contractor_address or NOT_AVAILABLE,
        "Lender Name": project.lender_name or NOT_AVAILABLE,
        "Lender Address": project.lender_address or NOT_AVAILABLE,
        "Description": (project.description or "").replace("\r\n", " ").replace("\n", " "),
        "Notice Required": "Yes" if project.notice_required else "No",
        "Delivery Method": _enum_value(project.delivery_method) or NOT_AVAILABLE,
        "Tracking Number": project.tracking_number or NOT_AVAILABLE,
        "Created Date": format_date(project.created_at),
    }


def generate_csv(projects: Iterable[Any]) -> str:
    """Header line plus one fully quoted row per project."""
    buffer = io.StringIO()
    csv.writer(buffer, lineterminator="\n").writerow(CSV_HEADERS)

    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    for project in projects:
        row = format_project_row(project)
        writer.writerow([row[h] for h in CSV_HEADERS])

    return buffer.getvalue().rstrip("\n")


# =============================================================================
# PDF REPORT
# =============================================================================

REPORT_COLUMNS = ["Project Name", "State", "Status", "Deadline", "Contract Amount", "Notice Required", "Delivery Method"]


def render_projects_report_pdf(projects: List[Any], owner_name: str = "") -> bytes:
    """Landscape table of projects with a count summary."""
    buffer = io.BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=landscape(LETTER),
        topMargin=0.6 * inch,
        bottomMargin=0.6 * inch,
        leftMargin=0.5 * inch,
        rightMargin=0.5 * inch,
        title="Projects Report",
    )

    rows = [format_project_row(project) for project in projects]
    status_counts: Dict[str, int] = {}
    for row in rows:
        status_counts[row["Status"]] = status_counts.get(row["Status"], 0) + 1

    story = [
        p("Projects Report", 'NoticeTitle'),
        p(f"Generated {format_date(datetime.now())}" + (f" for {owner_name}" if owner_name else ""), 'NoticeSubtitle'),
        Spacer(1, 0.2 * inch),
        p(f"Total projects: {len(rows)}", 'FieldLabel'),
    ]
    for status, count in sorted(status_counts.items()):
        story.append(p(f"{status}: {count}"))
    story.append(Spacer(1, 0.15 * inch))

    table_data = [[Paragraph(h, STYLES['FieldLabel']) for h in REPORT_COLUMNS]]
    table_data.extend([[p(row[h]) for h in REPORT_COLUMNS] for row in rows])

    tbl = Table(table_data, repeatRows=1, colWidths=[2.4 * inch, 1.2 * inch, 0.9 * inch, 1.4 * inch, 1.3 * inch, 1.0 * inch, 1.0 * inch])
    tbl.setStyle(TableStyle([
        ('GRID', (0, 0), (-1, -1), 0.35, colors.HexColor('#D1D5DB')),
        ('BACKGROUND', (0, 0), (-1, 0), colors.HexColor('#F3F4F6')),
        ('VALIGN', (0, 0), (-1, -1), 'TOP'),
        ('LEFTPADDING', (0, 0), (-1, -1), 5),
        ('RIGHTPADDING', (0, 0), (-1, -1), 5),
    ]))
    story.append(tbl)

    doc.build(story)
    logger.info(f"Rendered projects report PDF with {len(rows)} projects")
    return buffer.getvalue()
