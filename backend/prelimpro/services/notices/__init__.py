"""
Notice Generation

State rules, template descriptors, placeholder filling and document
rendering for preliminary notices.
"""
from .state_rules import (
    STATE_DEADLINES,
    NO_NOTICE_STATES,
    US_STATES,
    STATE_ABBREVIATIONS,
    normalize_state,
    get_state_code,
    get_state_template,
    get_deadline_days,
    is_notice_required,
    calculate_deadline,
)
from .templates import STATE_NOTICE_TEMPLATES, DEFAULT_NOTICE_TEMPLATE
from .descriptors import STATE_TEMPLATE_LIST, fill_sections, get_descriptor_for_state, get_state_template_by_slug
from .placeholders import (
    BLANK_LINE,
    DEFAULT_CUSTOMER_PLACEHOLDERS,
    fill_placeholders,
    build_placeholder_values,
)
from .html_renderer import generate_notice_html
from .pdf_renderer import render_notice_pdf

__all__ = [
    "STATE_DEADLINES",
    "NO_NOTICE_STATES",
    "US_STATES",
    "STATE_ABBREVIATIONS",
    "normalize_state",
    "get_state_code",
    "get_state_template",
    "get_deadline_days",
    "is_notice_required",
    "calculate_deadline",
    "STATE_NOTICE_TEMPLATES",
    "DEFAULT_NOTICE_TEMPLATE",
    "STATE_TEMPLATE_LIST",
    "get_state_template_by_slug",
    "get_descriptor_for_state",
    "fill_sections",
    "BLANK_LINE",
    "DEFAULT_CUSTOMER_PLACEHOLDERS",
    "fill_placeholders",
    "build_placeholder_values",
    "generate_notice_html",
    "render_notice_pdf",
]
