"""
Prelimpro - Notice Template Models

Immutable value objects describing statutory notice content.
These are loaded at import time and never persisted.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Tuple


class SectionType(str, Enum):
    HEADER = "header"
    TITLE = "title"
    WARNING = "warning"
    BODY = "body"
    BLANK = "blank"
    SIGNATURE = "signature"


@dataclass(frozen=True)
class StateNoticeTemplate:
    """Statutory notice language and delivery rules for one state."""
    title: str
    subtitle: str
    warning_text: str
    legal_notice: str
    signature_requirements: str
    additional_clauses: Tuple[str, ...] = ()
    deadline_days: int = 30
    certified_mail_required: bool = True
    notary_required: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "subtitle": self.subtitle,
            "warning_text": self.warning_text,
            "legal_notice": self.legal_notice,
            "signature_requirements": self.signature_requirements,
            "additional_clauses": list(self.additional_clauses),
            "deadline_days": self.deadline_days,
            "certified_mail_required": self.certified_mail_required,
            "notary_required": self.notary_required,
        }


@dataclass(frozen=True)
class NoticeSection:
    """One editable block of a notice document. Content may hold {{placeholders}}."""
    id: str
    type: SectionType
    content: str

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "type": self.type.value, "content": self.content}


@dataclass
class StateTemplateDescriptor:
    """A state template flattened into ordered sections for editing and preview."""
    full_name: str
    slug: str
    description: str
    deadline_days: int
    certified_mail_required: bool
    notary_required: bool
    sections: List[NoticeSection] = field(default_factory=list)

    def to_dict(self, include_sections: bool = True) -> Dict[str, Any]:
        data = {
            "full_name": self.full_name,
            "slug": self.slug,
            "description": self.description,
            "deadline_days": self.deadline_days,
            "certified_mail_required": self.certified_mail_required,
            "notary_required": self.notary_required,
        }
        if include_sections:
            data["sections"] = [s.to_dict() for s in self.sections]
        return data
