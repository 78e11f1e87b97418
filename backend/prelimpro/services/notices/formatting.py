"""Date and money formatting for notice documents."""
from datetime import date, datetime
from typing import Optional, Union

from dateutil import parser as date_parser


def format_date(value: Optional[Union[date, datetime, str]]) -> str:
    """Long US date, e.g. "January 5, 2026". Empty input gives ""."""
    if not value:
        return ""
    if isinstance(value, str):
        value = date_parser.parse(value)
    return f"{value.strftime('%B')} {value.day}, {value.year}"


def format_short_date(value: Optional[Union[date, datetime]]) -> str:
    """MM/DD/YYYY"""
    if not value:
        return ""
    return value.strftime("%m/%d/%Y")


def format_currency(amount: Optional[float]) -> str:
    """USD with cents, e.g. "$1,234.50". Negative amounts keep a leading minus."""
    if amount is None:
        return ""
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,.2f}"
