"""Locale formatting helpers for Irish CV conventions."""

import re
from datetime import datetime
from typing import Optional


IRISH_PHONE_REGEX = re.compile(r"^(\+353|00353|0)([1-9][0-9]{8})$")

# Locales that write the month before the day
MONTH_FIRST_LOCALES = {"en-US", "en-PH"}

DATE_FORMATS = (
    ("%Y-%m-%d", "day"),
    ("%Y-%m", "month"),
    ("%Y/%m", "month"),
    ("%Y", "year"),
)

PRESENT_LABEL = "Present"


def format_irish_phone(phone: Optional[str]) -> str:
    """
    Normalise a phone number to the Irish +353 XX XXX XXXX pattern.

    Numbers that do not look like a nine-digit Irish national number are
    returned unchanged.

    Example: "087 123 4567" -> "+353 87 123 4567"

    Args:
        phone: Phone number as typed by the user

    Returns:
        str: Normalised number, the original text, or "" for empty input
    """
    if not phone:
        return ""

    digits = re.sub(r"\D", "", phone)
    if digits.startswith("00"):
        digits = digits[2:]

    if digits.startswith("353"):
        national = digits[3:]
    elif digits.startswith("0"):
        national = digits[1:]
    elif len(digits) == 9 and not phone.strip().startswith("+"):
        national = digits
    else:
        return phone

    if len(national) != 9 or national.startswith("0"):
        return phone

    return f"+353 {national[:2]} {national[2:5]} {national[5:]}"


def is_valid_irish_phone(phone: str) -> bool:
    """Check a phone number against the Irish national/international pattern."""
    cleaned = re.sub(r"\s+", "", phone or "")
    return bool(IRISH_PHONE_REGEX.match(cleaned))


def _parse_date(value: str):
    text = value.strip()
    for fmt, precision in DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt), precision
        except ValueError:
            continue
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")), "day"
    except ValueError:
        return None, None


def format_locale_date(value: Optional[str], locale: str = "en-IE") -> str:
    """
    Format a stored date for display in the document's locale.

    Irish and other day-first locales use DD/MM/YYYY; month-first locales
    use MM/DD/YYYY. Month-precision dates render as MM/YYYY and year-only
    dates as YYYY. Anything unparseable is passed through unchanged.

    Args:
        value: Date as stored ("2020-03", "2020-03-15", ISO timestamp)
        locale: BCP 47 locale tag of the document

    Returns:
        str: Formatted date
    """
    if not value:
        return ""

    parsed, precision = _parse_date(value)
    if parsed is None:
        return value

    if precision == "year":
        return f"{parsed.year:04d}"
    if precision == "month":
        return f"{parsed.month:02d}/{parsed.year:04d}"
    if locale in MONTH_FIRST_LOCALES:
        return f"{parsed.month:02d}/{parsed.day:02d}/{parsed.year:04d}"
    return f"{parsed.day:02d}/{parsed.month:02d}/{parsed.year:04d}"


def format_date_range(
    start: Optional[str],
    end: Optional[str] = None,
    current: bool = False,
    locale: str = "en-IE",
) -> str:
    """
    Format a start/end pair, showing "Present" for ongoing entries.

    Args:
        start: Start date
        end: End date, ignored when current is set
        current: Whether the entry is ongoing
        locale: BCP 47 locale tag of the document

    Returns:
        str: e.g. "03/2020 - Present", or "" when nothing is known
    """
    start_text = format_locale_date(start, locale)
    end_text = PRESENT_LABEL if current else format_locale_date(end, locale)

    if start_text and end_text:
        return f"{start_text} - {end_text}"
    return start_text or end_text


def work_authorization_text(stamp: Optional[str], nationality: Optional[str] = None) -> str:
    """
    Describe Irish work authorisation for the CV header.

    Args:
        stamp: Immigration stamp or status, e.g. "Stamp 4" or "EU Citizen"
        nationality: Optional nationality, used when it signals EU citizenship

    Returns:
        str: Sentence for the header, or "" when nothing is declared
    """
    if stamp and "eu citizen" in stamp.lower():
        return "Authorized to work in Ireland (EU Citizen)"
    if stamp:
        return f"Authorized to work in Ireland ({stamp})"
    if nationality and nationality.strip().lower() in ("irish", "eu citizen"):
        return "Authorized to work in Ireland (EU Citizen)"
    return ""
