"""
Template Descriptors

Flattens each StateNoticeTemplate into ordered, editable sections that the
document editor and previews work with. Section content carries
{{placeholders}} that are filled per project.
"""
import re
from typing import Any, Dict, List, Mapping, Optional

from ...models.notice import NoticeSection, SectionType, StateNoticeTemplate, StateTemplateDescriptor
from .placeholders import fill_placeholders
from .state_rules import US_STATES, normalize_state
from .templates import STATE_NOTICE_TEMPLATES, DEFAULT_NOTICE_TEMPLATE


GENERIC_TEMPLATE_NAME = "Generic"

HEADER_BLOCK = "{{business_name}}\n{{company_name}}\n{{address}}\n{{phone}} | {{email}}"

PROJECT_BLOCK = (
    "Project: {{project_address}}\n"
    "Owner: {{owner_name}}\n"
    "Amount owed: {{amount_owed}}\n"
    "Services: {{service_dates}}\n"
    "Deadline: {{deadline_date}}\n"
    "Description: {{project_description}}"
)


def slugify(name: str) -> str:
    slug = re.sub(r"[^a-z0-9]+", "-", name.lower())
    return slug.strip("-")


def _delivery_line(template: StateNoticeTemplate) -> str:
    line = f"Deadline: {template.deadline_days} days • "
    line += "Certified mail recommended" if template.certified_mail_required else "Mail or personal delivery allowed"
    if template.notary_required:
        line += " • Notary required"
    return line


def build_sections(state: str, template: StateNoticeTemplate) -> List[NoticeSection]:
    """
    Ordered sections: header, title, warning, legal body, one body per
    clause, project block, signature.
    """
    sections = [
        NoticeSection("header", SectionType.HEADER, HEADER_BLOCK),
        NoticeSection("title", SectionType.TITLE, f"{template.title}\n{template.subtitle}"),
        NoticeSection("warning", SectionType.WARNING, template.warning_text),
        NoticeSection("legal", SectionType.BODY, f"{template.legal_notice}\n\n{_delivery_line(template)}"),
    ]
    for idx, clause in enumerate(template.additional_clauses, start=1):
        sections.append(NoticeSection(f"clause-{idx}", SectionType.BODY, clause))
    sections.append(NoticeSection("project", SectionType.BLANK, PROJECT_BLOCK))
    sections.append(NoticeSection(
        "signature",
        SectionType.SIGNATURE,
        f"Signature: ____________________   Date: ________\n{template.signature_requirements}\nState: {state}",
    ))
    return sections


def build_descriptor(state: str, template: StateNoticeTemplate) -> StateTemplateDescriptor:
    delivery = "Certified mail" if template.certified_mail_required else "Mail/personal delivery"
    return StateTemplateDescriptor(
        full_name=state,
        slug=slugify(state),
        description=f"{template.deadline_days}-day window • {delivery}",
        deadline_days=template.deadline_days,
        certified_mail_required=template.certified_mail_required,
        notary_required=template.notary_required,
        sections=build_sections(state, template),
    )


DEFAULT_DESCRIPTOR = build_descriptor(GENERIC_TEMPLATE_NAME, DEFAULT_NOTICE_TEMPLATE)

STATE_TEMPLATE_LIST: List[StateTemplateDescriptor] = sorted(
    (build_descriptor(state, tpl) for state, tpl in STATE_NOTICE_TEMPLATES.items()),
    key=lambda d: d.full_name,
) + [DEFAULT_DESCRIPTOR]

_BY_SLUG = {d.slug: d for d in STATE_TEMPLATE_LIST}


def get_state_template_by_slug(slug: Optional[str]) -> Optional[StateTemplateDescriptor]:
    """
    Descriptor for a slug such as "new-jersey".

    Unknown slugs get the generic template under a name derived from the
    slug ("south-dakota" -> "South Dakota"). Empty slugs return None.
    """
    normalized = (slug or "").lower()
    found = _BY_SLUG.get(normalized)
    if found:
        return found
    if not normalized:
        return None
    full_name = re.sub(r"\b\w", lambda m: m.group(0).upper(), slug.replace("-", " "))
    return StateTemplateDescriptor(
        full_name=full_name,
        slug=normalized,
        description=DEFAULT_DESCRIPTOR.description,
        deadline_days=DEFAULT_DESCRIPTOR.deadline_days,
        certified_mail_required=DEFAULT_DESCRIPTOR.certified_mail_required,
        notary_required=DEFAULT_DESCRIPTOR.notary_required,
        sections=list(DEFAULT_DESCRIPTOR.sections),
    )


def fill_sections(descriptor: StateTemplateDescriptor, values: Mapping[str, Any]) -> List[Dict[str, Any]]:
    """Sections of a descriptor with placeholders filled from values."""
    return [
        {"id": s.id, "type": s.type.value, "content": fill_placeholders(s.content, values)}
        for s in descriptor.sections
    ]


def get_descriptor_for_state(state: Optional[str]) -> StateTemplateDescriptor:
    """Descriptor for a state name or code; unknown states get the generic one."""
    name = normalize_state(state)
    if name not in US_STATES:
        return DEFAULT_DESCRIPTOR
    return get_state_template_by_slug(slugify(name))
