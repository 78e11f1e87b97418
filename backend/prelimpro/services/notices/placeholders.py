"""
Placeholder Filling

Notice sections contain {{key}} tokens. Known keys come from the user's
company profile and the project. Any token without a usable value is
replaced with a blank fill-in line so the printed notice can be completed
by hand.
"""
import re
from datetime import date
from typing import Any, Dict, Mapping, Optional

from .formatting import format_currency, format_date, format_short_date


BLANK_LINE = "____________________"

PLACEHOLDER_PATTERN = re.compile(r"\{\{(\w+)\}\}")

PLACEHOLDER_KEYS = (
    "business_name",
    "company_name",
    "address",
    "phone",
    "email",
    "tax_id",
    "website",
    "project_address",
    "owner_name",
    "amount_owed",
    "service_dates",
    "deadline_date",
    "project_description",
    "state_name",
    "generated_date",
)

# Sample values for template previews
DEFAULT_CUSTOMER_PLACEHOLDERS: Dict[str, str] = {
    "business_name": "Your Business Name",
    "company_name": "Your Company",
    "address": "123 Project Address, City, ST 00000",
    "phone": "(555) 123-4567",
    "email": "team@example.com",
    "tax_id": "XX-XXXXXXX",
    "website": "www.example.com",
    "project_address": "123 Project Address, City, ST 00000",
    "owner_name": "Owner Name",
    "amount_owed": "$0.00",
    "service_dates": "MM/DD/YYYY - MM/DD/YYYY",
    "deadline_date": "MM/DD/YYYY",
    "project_description": "Brief work description",
}


def fill_placeholders(text: Optional[str], values: Mapping[str, Any]) -> str:
    """Substitute every {{key}} in text; missing or blank values become BLANK_LINE."""
    if not text:
        return ""

    def _replace(match: "re.Match") -> str:
        replacement = values.get(match.group(1))
        if replacement is not None and str(replacement).strip():
            return str(replacement)
        return BLANK_LINE

    return PLACEHOLDER_PATTERN.sub(_replace, text)


def find_placeholders(text: Optional[str]) -> list:
    """Keys referenced by text, in order of first appearance."""
    seen = []
    for key in PLACEHOLDER_PATTERN.findall(text or ""):
        if key not in seen:
            seen.append(key)
    return seen


def build_placeholder_values(project: Any = None, profile: Any = None, today: Optional[date] = None) -> Dict[str, str]:
    """Placeholder values for a project and the owner's company profile."""
    values: Dict[str, str] = {"generated_date": format_date(today or date.today())}

    if profile is not None:
        values.update({
            "business_name": profile.business_name or "",
            "company_name": profile.company_name or "",
            "address": profile.company_address or "",
            "phone": profile.phone or "",
            "email": profile.company_email or profile.email or "",
            "tax_id": profile.tax_id or "",
            "website": profile.website or "",
        })

    if project is not None:
        start = format_short_date(project.job_start_date)
        values.update({
            "project_address": project.property_address or "",
            "owner_name": project.property_owner_name or "",
            "amount_owed": format_currency(project.contract_amount),
            "service_dates": f"{start} - present" if start else "",
            "deadline_date": format_short_date(project.deadline),
            "project_description": project.description or "",
            "state_name": project.state or "",
        })

    return values
