"""
HTML Notice Renderer

Produces a standalone, print-ready HTML document for a preliminary notice.
Used for in-app previews and as the emailed copy. All project and profile
values are escaped before interpolation.
"""
import logging
from datetime import date
from html import escape
from typing import Any, List, Optional

from ...models.notice import StateNoticeTemplate
from .document import NoticeBlock, build_notice_blocks

logger = logging.getLogger(__name__)


NOTICE_CSS = """
    @page { margin: 0.75in; size: letter; }
    * { box-sizing: border-box; margin: 0; padding: 0; }
    body { font-family: 'Times New Roman', Times, serif; font-size: 11pt; line-height: 1.4; color: #000; background: #fff; }
    .document { max-width: 8.5in; margin: 0 auto; padding: 0.5in; }
    .header { text-align: center; border-bottom: 3px double #000; padding-bottom: 15px; margin-bottom: 20px; }
    .company-logo img { max-height: 60px; max-width: 150px; object-fit: contain; margin-bottom: 10px; }
    .title { font-size: 18pt; font-weight: bold; letter-spacing: 3px; margin-bottom: 5px; text-transform: uppercase; }
    .subtitle { font-size: 10pt; color: #333; font-style: italic; }
    .warning-box { background-color: #fff3cd; border: 2px solid #856404; padding: 12px 15px; margin: 20px 0; font-size: 10pt; }
    .warning-box strong { color: #856404; }
    .section { margin: 15px 0; }
    .section-title { font-size: 11pt; font-weight: bold; text-transform: uppercase; margin-bottom: 8px; border-bottom: 1px solid #000; padding-bottom: 3px; }
    .field-row { display: flex; margin: 5px 0; padding: 3px 0; }
    .field-label { font-weight: bold; min-width: 180px; flex-shrink: 0; }
    .field-value { flex: 1; border-bottom: 1px solid #ccc; padding-left: 5px; }
    .paragraph { text-align: justify; margin: 10px 0; text-indent: 0.5in; }
    .legal-notice { background-color: #f8f9fa; border-left: 4px solid #1E40AF; padding: 12px 15px; margin: 20px 0; font-size: 10pt; }
    .clauses { margin: 15px 0; padding-left: 20px; }
    .clause-item { margin: 8px 0; padding-left: 10px; }
    .delivery-info { background-color: #e8f4fd; border: 1px solid #1E40AF; padding: 12px 15px; margin: 20px 0; font-size: 10pt; }
    .delivery-title { font-weight: bold; color: #1E40AF; margin-bottom: 5px; }
    .signature-section { margin-top: 40px; page-break-inside: avoid; }
    .signature-row { display: flex; justify-content: space-between; margin-top: 50px; }
    .signature-block { width: 45%; }
    .signature-line { border-top: 1px solid #000; margin-top: 40px; padding-top: 5px; font-size: 10pt; }
    .notary-section { margin-top: 30px; padding: 15px; border: 1px solid #000; page-break-inside: avoid; }
    .notary-title { font-weight: bold; text-align: center; margin-bottom: 15px; text-transform: uppercase; }
    .notary-text { font-size: 10pt; line-height: 1.6; }
    .footer { margin-top: 30px; padding-top: 15px; border-top: 1px solid #ccc; font-size: 9pt; color: #666; text-align: center; }
"""


# =============================================================================
# BLOCK RENDERERS
# =============================================================================

def _field_rows(fields) -> List[str]:
    return [
        f'<div class="field-row"><span class="field-label">{escape(label)}</span>'
        f'<span class="field-value">{escape(value)}</span></div>'
        for label, value in fields
    ]


def _signature_rows(labels: List[str]) -> List[str]:
    rows = []
    for i in range(0, len(labels), 2):
        cells = "".join(
            f'<div class="signature-block"><div class="signature-line">{escape(label)}</div></div>'
            for label in labels[i:i + 2]
        )
        rows.append(f'<div class="signature-row">{cells}</div>')
    return rows


def _render_block(block: NoticeBlock) -> str:
    if block.kind == "header":
        logo = ""
        if block.image_url:
            logo = f'<div class="company-logo"><img src="{escape(block.image_url)}" alt="Company Logo" /></div>'
        return (
            f'<div class="header">{logo}'
            f'<div class="title">{escape(block.title)}</div>'
            f'<div class="subtitle">{escape(block.text)}</div></div>'
        )

    if block.kind == "warning":
        return f'<div class="warning-box"><strong>{escape(block.title)}</strong> {escape(block.text)}</div>'

    if block.kind == "fields":
        rows = "".join(_field_rows(block.fields))
        return f'<div class="section"><div class="section-title">{escape(block.title)}</div>{rows}</div>'

    if block.kind == "paragraph":
        return (
            f'<div class="section"><div class="section-title">{escape(block.title)}</div>'
            f'<p class="paragraph">{escape(block.text)}</p></div>'
        )

    if block.kind == "legal":
        return f'<div class="legal-notice"><strong>{escape(block.title)}</strong> {escape(block.text)}</div>'

    if block.kind == "clauses":
        items = "".join(f'<div class="clause-item">&bull; {escape(item)}</div>' for item in block.items)
        return (
            f'<div class="section"><div class="section-title">{escape(block.title)}</div>'
            f'<div class="clauses">{items}</div></div>'
        )

    if block.kind == "delivery":
        return (
            f'<div class="delivery-info"><div class="delivery-title">{escape(block.title)}</div>'
            f'<p>{escape(block.text)}</p></div>'
        )

    if block.kind == "signature":
        parts = [
            f'<div class="signature-section"><div class="section-title">{escape(block.title)}</div>',
            f'<p style="margin: 10px 0; font-size: 10pt;">{escape(block.text)}</p>',
        ]
        parts.extend(_signature_rows(block.items))
        parts.extend(_field_rows(block.fields))
        parts.append("</div>")
        return "".join(parts)

    if block.kind == "notary":
        venue = "".join(f"<p>{escape(label)} {escape(value)}</p>" for label, value in block.fields)
        return (
            f'<div class="notary-section"><div class="notary-title">{escape(block.title)}</div>'
            f'<div class="notary-text">{venue}<br><p>{escape(block.text)}</p><br>'
            f'<p>WITNESS my hand and official seal.</p>'
            f'{"".join(_signature_rows(["Notary Public Signature", "[SEAL]"]))}'
            f'<p style="margin-top: 10px;">My Commission Expires: ___________________</p></div></div>'
        )

    if block.kind == "footer":
        lines = "".join(f"<p>{escape(line)}</p>" for line in block.items)
        return (
            f'<div class="footer">{lines}'
            f'<p style="margin-top: 5px; font-size: 8pt;">{escape(block.text)}</p></div>'
        )

    raise ValueError(f"Unknown notice block: {block.kind}")


# =============================================================================
# PUBLIC API
# =============================================================================

def generate_notice_html(
    project: Any,
    template: StateNoticeTemplate,
    company_profile: Any = None,
    today: Optional[date] = None,
) -> str:
    """Full HTML document for a project's preliminary notice."""
    blocks = build_notice_blocks(project, template, company_profile, today=today)
    body = "\n    ".join(_render_block(block) for block in blocks)

    logger.info(f"Rendered notice HTML for project {getattr(project, 'id', None)} ({project.state})")

    return f"""<!DOCTYPE html>
<html>
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{escape(template.title)}</title>
  <style>{NOTICE_CSS}</style>
</head>
<body>
  <div class="document">
    {body}
  </div>
</body>
</html>
"""
