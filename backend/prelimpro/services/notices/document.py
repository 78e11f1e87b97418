"""
Notice Document Builder

Assembles the content of a preliminary notice from a project, its state
template and the sender's company profile. The result is an ordered list
of blocks that the HTML and PDF renderers lay out; neither renderer adds
or drops content on its own.
"""
from dataclasses import dataclass, field
from datetime import date
from typing import Any, List, Optional, Tuple

from ...models.notice import StateNoticeTemplate
from .formatting import format_currency, format_date


CERTIFIED_DELIVERY_TEXT = (
    "This notice must be sent via certified mail with return receipt requested, "
    "or by personal delivery with proof of service."
)
REGULAR_DELIVERY_TEXT = "This notice may be delivered by regular mail, certified mail, or personal delivery."
NOTARY_DELIVERY_TEXT = " This notice requires notarization before delivery."

PERJURY_DECLARATION = (
    "I declare under penalty of perjury that the foregoing is true and correct "
    "to the best of my knowledge."
)

NOTARY_ACKNOWLEDGMENT = (
    "On this _____ day of _______________, 20___, before me, the undersigned notary public, "
    "personally appeared _________________________________, proved to me on the basis of "
    "satisfactory evidence to be the person(s) whose name(s) is/are subscribed to the within "
    "instrument and acknowledged to me that he/she/they executed the same in his/her/their "
    "authorized capacity(ies), and that by his/her/their signature(s) on the instrument the "
    "person(s), or the entity upon behalf of which the person(s) acted, executed the instrument."
)

DISCLAIMER = "This document is for informational purposes. Consult with a licensed attorney for legal advice."


@dataclass
class NoticeBlock:
    kind: str  # header, warning, fields, paragraph, legal, clauses, delivery, signature, notary, footer
    title: str = ""
    text: str = ""
    fields: List[Tuple[str, str]] = field(default_factory=list)
    items: List[str] = field(default_factory=list)
    image_url: Optional[str] = None


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def delivery_requirements(template: StateNoticeTemplate) -> str:
    text = CERTIFIED_DELIVERY_TEXT if template.certified_mail_required else REGULAR_DELIVERY_TEXT
    if template.notary_required:
        text += NOTARY_DELIVERY_TEXT
    return text


def build_notice_blocks(
    project: Any,
    template: StateNoticeTemplate,
    company_profile: Any = None,
    today: Optional[date] = None,
) -> List[NoticeBlock]:
    """Ordered content blocks for one notice."""
    current_date = format_date(today or date.today())
    state = _text(project.state)

    company_name = _text(getattr(company_profile, "company_name", None))
    company_address = _text(getattr(company_profile, "company_address", None))
    company_phone = _text(getattr(company_profile, "phone", None))
    license_number = _text(getattr(company_profile, "license_number", None))
    logo_url = getattr(company_profile, "logo_url", None) or None

    blocks = [
        NoticeBlock("header", title=template.title, text=template.subtitle, image_url=logo_url),
        NoticeBlock("warning", title="WARNING:", text=template.warning_text),
        NoticeBlock("fields", title="To: Property Owner", fields=[
            ("Owner Name:", _text(project.property_owner_name)),
            ("Owner Address:", _text(project.property_owner_address)),
        ]),
    ]

    # Optional parties
    if project.general_contractor_name:
        gc_fields = [("Contractor Name:", project.general_contractor_name)]
        if project.general_contractor_address:
            gc_fields.append(("Contractor Address:", project.general_contractor_address))
        blocks.append(NoticeBlock("fields", title="General Contractor", fields=gc_fields))

    if project.lender_name:
        lender_fields = [("Lender Name:", project.lender_name)]
        if project.lender_address:
            lender_fields.append(("Lender Address:", project.lender_address))
        blocks.append(NoticeBlock("fields", title="Construction Lender", fields=lender_fields))

    blocks.extend([
        NoticeBlock("fields", title="Property Information", fields=[
            ("Property Address:", _text(project.property_address)),
        ]),
        NoticeBlock("paragraph", title="Notice Is Hereby Given That:", text=(
            "The undersigned has furnished or will furnish labor, services, equipment, or materials "
            "for the improvement of the above-described property. This notice is given in accordance "
            "with applicable state law to preserve the undersigned's rights under the mechanic's lien "
            f"statutes of the State of {state}."
        )),
        NoticeBlock(
            "paragraph",
            title="Description of Labor, Services, Equipment, or Materials",
            text=_text(project.description),
        ),
        NoticeBlock("fields", title="Contract Information", fields=[
            ("Estimated Contract Amount:", format_currency(project.contract_amount)),
            ("Date Work Commenced:", format_date(project.job_start_date)),
            ("Date of This Notice:", current_date),
        ]),
        NoticeBlock("legal", title="LEGAL NOTICE:", text=template.legal_notice),
        NoticeBlock("clauses", title="Additional Information", items=list(template.additional_clauses)),
        NoticeBlock("delivery", title=f"Delivery Requirements for {state}", text=delivery_requirements(template)),
        NoticeBlock(
            "signature",
            title="Certification and Signature",
            text=PERJURY_DECLARATION,
            items=[template.signature_requirements, "Date", "Printed Name", "Title/Position"],
            fields=[
                ("Company Name:", company_name),
                ("Company Address:", company_address),
                ("Phone Number:", company_phone),
                ("License Number:", license_number),
            ],
        ),
    ])

    if template.notary_required:
        blocks.append(NoticeBlock("notary", title="Notary Acknowledgment", text=NOTARY_ACKNOWLEDGMENT, fields=[
            ("State of", state),
            ("County of", "___________________"),
        ]))

    blocks.append(NoticeBlock("footer", items=[
        f"This preliminary notice was generated on {current_date}",
        f"Project: {_text(project.project_name)} | State: {state}",
    ], text=DISCLAIMER))

    return blocks
