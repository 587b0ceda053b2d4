"""Calendar month utilities"""

from datetime import date

# Fixed English abbreviations; strftime("%b") follows the process locale
MONTH_ABBREVIATIONS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def month_start(day: date) -> date:
    """First day of the calendar month containing day"""
    return day.replace(day=1)


def add_months(month: date, months: int) -> date:
    """Shift a month-start date by a number of months (negative goes back)"""
    index = month.year * 12 + (month.month - 1) + months
    return date(index // 12, index % 12 + 1, 1)


def month_label(month: date) -> str:
    """Short display label, e.g. 'Jan 2026'"""
    return f"{MONTH_ABBREVIATIONS[month.month - 1]} {month.year}"
