"""Prelimpro - Data Models"""
from .notice import StateNoticeTemplate, NoticeSection, StateTemplateDescriptor

__all__ = [
    "StateNoticeTemplate", "NoticeSection", "StateTemplateDescriptor",
]
